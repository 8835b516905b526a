# Status transition tables for campaigns and applications

from typing import Dict, FrozenSet

from database.models import CampaignStatusDB, ApplicationStatusDB


CAMPAIGN_TRANSITIONS: Dict[CampaignStatusDB, FrozenSet[CampaignStatusDB]] = {
    CampaignStatusDB.RECRUITING: frozenset({CampaignStatusDB.CLOSED}),
    CampaignStatusDB.CLOSED: frozenset({CampaignStatusDB.SELECTED}),
    CampaignStatusDB.SELECTED: frozenset({CampaignStatusDB.COMPLETED}),
    CampaignStatusDB.COMPLETED: frozenset(),
}

APPLICATION_TRANSITIONS: Dict[ApplicationStatusDB, FrozenSet[ApplicationStatusDB]] = {
    ApplicationStatusDB.PENDING: frozenset({ApplicationStatusDB.SELECTED, ApplicationStatusDB.REJECTED}),
    ApplicationStatusDB.SELECTED: frozenset(),
    ApplicationStatusDB.REJECTED: frozenset(),
}

# Campaign states in which the advertiser may pick or turn down applicants
SELECTION_OPEN_STATES = frozenset({CampaignStatusDB.CLOSED, CampaignStatusDB.SELECTED})


def can_transition_campaign(current: CampaignStatusDB, target: CampaignStatusDB) -> bool:
    """Check if a campaign may move from `current` to `target`."""
    return target in CAMPAIGN_TRANSITIONS.get(CampaignStatusDB(current), frozenset())


def can_transition_application(current: ApplicationStatusDB, target: ApplicationStatusDB) -> bool:
    """Check if an application may move from `current` to `target`. Staying put is allowed."""
    current = ApplicationStatusDB(current)
    target = ApplicationStatusDB(target)
    if current == target:
        return True
    return target in APPLICATION_TRANSITIONS.get(current, frozenset())


def statuses_that_can_become(target: ApplicationStatusDB) -> FrozenSet[ApplicationStatusDB]:
    """All application states from which `target` is reachable in one step (or already there)."""
    target = ApplicationStatusDB(target)
    return frozenset(
        s for s in ApplicationStatusDB if can_transition_application(s, target)
    )
