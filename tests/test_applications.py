"""
Tests for applying to campaigns and the advertiser's selection step
"""

import uuid
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from database.models import Application, ApplicationStatusDB, Campaign, CampaignStatusDB
from schemas.platform import ApplicationCreate
from services.application_service import ApplicationService
from services.errors import PlatformError, ServiceError


def select(client, owner, campaign_id, ids):
    return client.post(
        f"/api/campaigns/{campaign_id}/select",
        json={"application_ids": ids},
        headers=owner["headers"],
    )


def reject(client, owner, campaign_id, ids):
    return client.post(
        f"/api/campaigns/{campaign_id}/reject",
        json={"application_ids": ids},
        headers=owner["headers"],
    )


def statuses(client, owner, campaign_id):
    response = client.get(f"/api/campaigns/{campaign_id}/applications", headers=owner["headers"])
    assert response.status_code == 200
    return {a["id"]: a["status"] for a in response.json()}


class TestCreateApplication:

    def test_visit_today_with_ten_character_message(self, client, factory, advertiser, influencer, create_campaign):
        campaign = create_campaign(advertiser)

        response = client.post(
            "/api/applications",
            json=factory.application(campaign["id"], message="0123456789", visit_date=date.today().isoformat()),
            headers=influencer["headers"],
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["campaign_id"] == campaign["id"]
        assert body["influencer_id"] == influencer["id"]
        assert body["visit_date"] == date.today().isoformat()

    def test_nine_character_message(self, client, factory, advertiser, influencer, create_campaign):
        campaign = create_campaign(advertiser)

        response = client.post(
            "/api/applications",
            json=factory.application(campaign["id"], message="012345678"),
            headers=influencer["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_campaign_id_must_be_uuid(self, client, factory, influencer):
        response = client.post(
            "/api/applications",
            json=factory.application("not-a-uuid"),
            headers=influencer["headers"],
        )
        assert response.status_code == 400

    def test_unknown_campaign(self, client, factory, influencer):
        response = client.post(
            "/api/applications",
            json=factory.application(str(uuid.uuid4())),
            headers=influencer["headers"],
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CAMPAIGN_NOT_FOUND"

    def test_duplicate_application(self, client, factory, advertiser, influencer, create_campaign, apply):
        campaign = create_campaign(advertiser)
        apply(influencer, campaign["id"])

        response = client.post(
            "/api/applications",
            json=factory.application(campaign["id"]),
            headers=influencer["headers"],
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_APPLICATION"

    def test_closed_campaign(self, client, factory, advertiser, influencer, create_campaign, set_status):
        campaign = create_campaign(advertiser)
        set_status(advertiser, campaign["id"], "closed")

        response = client.post(
            "/api/applications",
            json=factory.application(campaign["id"]),
            headers=influencer["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "CAMPAIGN_NOT_RECRUITING"

    def test_advertiser_cannot_apply(self, client, factory, advertiser, create_campaign):
        campaign = create_campaign(advertiser)

        response = client.post(
            "/api/applications",
            json=factory.application(campaign["id"]),
            headers=advertiser["headers"],
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_unique_constraint_backs_the_check(self, db, client, advertiser, influencer, create_campaign, apply):
        """A row slipped in behind the pre-check still surfaces as a duplicate"""
        campaign = create_campaign(advertiser)
        apply(influencer, campaign["id"])

        service = ApplicationService(db)
        real_lookup = service._find_existing
        calls = []

        def miss_first_lookup(campaign_id, influencer_id):
            calls.append(campaign_id)
            if len(calls) == 1:
                return None
            return real_lookup(campaign_id, influencer_id)

        service._find_existing = miss_first_lookup
        data = ApplicationCreate(campaign_id=campaign["id"], message="Second attempt at this", visit_date=date.today())

        with pytest.raises(ServiceError) as exc_info:
            service.create_application(influencer["id"], data)

        assert exc_info.value.code == PlatformError.DUPLICATE_APPLICATION
        assert len(calls) == 2
        db.expire_all()
        assert db.query(Application).filter(Application.campaign_id == campaign["id"]).count() == 1


class TestMyApplications:

    def test_lists_with_campaign(self, client, advertiser, influencer, create_campaign, apply):
        first = create_campaign(advertiser, title="First campaign")
        second = create_campaign(advertiser, title="Second campaign")
        apply(influencer, first["id"])
        apply(influencer, second["id"])

        response = client.get("/api/applications/my", headers=influencer["headers"])

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert body["total_pages"] == 1
        titles = {a["campaign"]["title"] for a in body["applications"]}
        assert titles == {"First campaign", "Second campaign"}

    def test_only_own(self, client, advertiser, influencer, other_influencer, create_campaign, apply):
        campaign = create_campaign(advertiser)
        apply(influencer, campaign["id"])
        apply(other_influencer, campaign["id"])

        body = client.get("/api/applications/my", headers=other_influencer["headers"]).json()

        assert body["total"] == 1
        assert body["applications"][0]["influencer_id"] == other_influencer["id"]

    def test_status_filter_and_pages(
        self, client, advertiser, influencer, create_campaign, apply, set_status
    ):
        ids = []
        for i in range(3):
            campaign = create_campaign(advertiser, title=f"Campaign number {i}")
            ids.append((campaign["id"], apply(influencer, campaign["id"])["id"]))

        campaign_id, application_id = ids[0]
        set_status(advertiser, campaign_id, "closed")
        select(client, advertiser, campaign_id, [application_id])

        pending = client.get(
            "/api/applications/my", params={"status": "pending", "limit": 1}, headers=influencer["headers"]
        ).json()
        selected = client.get(
            "/api/applications/my", params={"status": "selected"}, headers=influencer["headers"]
        ).json()

        assert pending["total"] == 2
        assert pending["total_pages"] == 2
        assert len(pending["applications"]) == 1
        assert [a["id"] for a in selected["applications"]] == [application_id]

    def test_advertiser_forbidden(self, client, advertiser):
        response = client.get("/api/applications/my", headers=advertiser["headers"])
        assert response.status_code == 403


class TestCampaignApplications:

    def test_owner_sees_applicants(self, client, advertiser, influencer, create_campaign, apply):
        campaign = create_campaign(advertiser)
        application = apply(influencer, campaign["id"])

        response = client.get(f"/api/campaigns/{campaign['id']}/applications", headers=advertiser["headers"])

        assert response.status_code == 200
        items = response.json()
        assert len(items) == 1
        assert items[0]["id"] == application["id"]
        applicant = items[0]["influencer"]
        assert applicant["name"] == "Lee Influencer"
        assert applicant["email"] == "creator@example.com"
        assert applicant["phone"] == "01098765432"
        assert applicant["influencer_profile"]["instagram_name"] == "lee.eats"

    def test_influencer_forbidden(self, client, advertiser, influencer, create_campaign):
        campaign = create_campaign(advertiser)
        response = client.get(f"/api/campaigns/{campaign['id']}/applications", headers=influencer["headers"])
        assert response.status_code == 403


class TestSelectApplicants:

    @pytest.fixture
    def closed_campaign(self, client, advertiser, influencer, other_influencer, create_campaign, apply, set_status):
        campaign = create_campaign(advertiser)
        first = apply(influencer, campaign["id"])
        second = apply(other_influencer, campaign["id"])
        set_status(advertiser, campaign["id"], "closed")
        return {"id": campaign["id"], "applications": [first["id"], second["id"]]}

    def test_select_moves_campaign_and_applications(self, client, advertiser, closed_campaign):
        chosen = closed_campaign["applications"][0]

        response = select(client, advertiser, closed_campaign["id"], [chosen])

        assert response.status_code == 200
        assert response.json() == {"selected_count": 1}
        assert client.get(f"/api/campaigns/{closed_campaign['id']}").json()["status"] == "selected"
        assert statuses(client, advertiser, closed_campaign["id"]) == {
            chosen: "selected",
            closed_campaign["applications"][1]: "pending",
        }

    def test_repeat_is_a_noop(self, client, advertiser, closed_campaign):
        ids = closed_campaign["applications"]
        first = select(client, advertiser, closed_campaign["id"], ids)
        second = select(client, advertiser, closed_campaign["id"], ids)

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json() == first.json() == {"selected_count": 2}
        assert set(statuses(client, advertiser, closed_campaign["id"]).values()) == {"selected"}

    def test_select_more_after_first_round(self, client, advertiser, closed_campaign):
        first, second = closed_campaign["applications"]
        select(client, advertiser, closed_campaign["id"], [first])

        response = select(client, advertiser, closed_campaign["id"], [first, second])

        assert response.json() == {"selected_count": 2}

    def test_duplicate_ids_counted_once(self, client, advertiser, closed_campaign):
        chosen = closed_campaign["applications"][0]
        response = select(client, advertiser, closed_campaign["id"], [chosen, chosen])
        assert response.json() == {"selected_count": 1}

    def test_ignores_foreign_and_unknown_ids(
        self, client, advertiser, influencer, closed_campaign, create_campaign, apply
    ):
        other_campaign = create_campaign(advertiser)
        foreign = apply(influencer, other_campaign["id"])

        response = select(
            client, advertiser, closed_campaign["id"],
            [closed_campaign["applications"][0], foreign["id"], str(uuid.uuid4())],
        )

        assert response.json() == {"selected_count": 1}
        assert statuses(client, advertiser, other_campaign["id"]) == {foreign["id"]: "pending"}

    def test_rejected_stays_rejected(self, client, advertiser, closed_campaign):
        first, second = closed_campaign["applications"]
        reject(client, advertiser, closed_campaign["id"], [second])

        response = select(client, advertiser, closed_campaign["id"], [first, second])

        assert response.json() == {"selected_count": 1}
        assert statuses(client, advertiser, closed_campaign["id"])[second] == "rejected"

    def test_requires_closed_recruitment(self, client, advertiser, influencer, create_campaign, apply):
        campaign = create_campaign(advertiser)
        application = apply(influencer, campaign["id"])

        response = select(client, advertiser, campaign["id"], [application["id"]])

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"
        assert statuses(client, advertiser, campaign["id"]) == {application["id"]: "pending"}

    def test_empty_id_list(self, client, advertiser, closed_campaign):
        response = select(client, advertiser, closed_campaign["id"], [])
        assert response.status_code == 400

    def test_other_advertiser_changes_nothing(self, client, advertiser, other_advertiser, closed_campaign):
        response = select(client, other_advertiser, closed_campaign["id"], closed_campaign["applications"])

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "UNAUTHORIZED"
        assert client.get(f"/api/campaigns/{closed_campaign['id']}").json()["status"] == "closed"
        assert set(statuses(client, advertiser, closed_campaign["id"]).values()) == {"pending"}

    def test_failed_commit_keeps_nothing(self, db, advertiser, closed_campaign, monkeypatch):
        """Application and campaign updates land together or not at all"""
        service = ApplicationService(db)

        def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db, "commit", failing_commit)

        with pytest.raises(ServiceError) as exc_info:
            service.select_applicants(closed_campaign["id"], advertiser["id"], closed_campaign["applications"])

        assert exc_info.value.code == PlatformError.UPDATE_FAILED
        monkeypatch.undo()
        db.expire_all()
        campaign = db.query(Campaign).filter(Campaign.id == closed_campaign["id"]).one()
        assert campaign.status == CampaignStatusDB.CLOSED
        rows = db.query(Application).filter(Application.campaign_id == closed_campaign["id"]).all()
        assert {r.status for r in rows} == {ApplicationStatusDB.PENDING}


class TestRejectApplicants:

    def test_reject_pending(self, client, advertiser, influencer, create_campaign, apply, set_status):
        campaign = create_campaign(advertiser)
        application = apply(influencer, campaign["id"])
        set_status(advertiser, campaign["id"], "closed")

        response = reject(client, advertiser, campaign["id"], [application["id"]])

        assert response.status_code == 200
        assert response.json() == {"rejected_count": 1}
        assert statuses(client, advertiser, campaign["id"]) == {application["id"]: "rejected"}
        # Rejecting does not pick winners
        assert client.get(f"/api/campaigns/{campaign['id']}").json()["status"] == "closed"

    def test_selected_cannot_be_rejected(self, client, advertiser, influencer, create_campaign, apply, set_status):
        campaign = create_campaign(advertiser)
        application = apply(influencer, campaign["id"])
        set_status(advertiser, campaign["id"], "closed")
        select(client, advertiser, campaign["id"], [application["id"]])

        response = reject(client, advertiser, campaign["id"], [application["id"]])

        assert response.json() == {"rejected_count": 0}
        assert statuses(client, advertiser, campaign["id"]) == {application["id"]: "selected"}

    def test_requires_closed_recruitment(self, client, advertiser, influencer, create_campaign, apply):
        campaign = create_campaign(advertiser)
        application = apply(influencer, campaign["id"])

        response = reject(client, advertiser, campaign["id"], [application["id"]])

        assert response.status_code == 409
