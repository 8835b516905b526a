# Application Workflow Service
# Applying to campaigns, listing applications, selecting and rejecting applicants

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from core.lifecycle import SELECTION_OPEN_STATES, statuses_that_can_become
from database.models import (
    Application, ApplicationStatusDB, Campaign, CampaignStatusDB, UserProfile, utcnow,
)
from schemas.platform import (
    ApplicantSummary,
    ApplicationCreate,
    ApplicationPage,
    ApplicationResponse,
    CampaignApplicationItem,
    InfluencerProfileResponse,
    ListApplicationsQuery,
    MyApplicationItem,
    RejectionResult,
    SelectionResult,
)
from services.campaign_service import CampaignService
from services.errors import ServiceError
from services.pagination import paginate, total_pages

module_logger = logging.getLogger(__name__)


class ApplicationService:
    """
    Influencer applications and the advertiser's selection step.

    Selection and the campaign's move to `selected` commit together; if either
    write fails neither is kept.
    """

    def __init__(self, db: Session, logger: Optional[logging.Logger] = None):
        self.db = db
        self.logger = logger or module_logger
        self.campaigns = CampaignService(db, self.logger)

    # ------------------------------------------------------------------
    # Influencer side
    # ------------------------------------------------------------------

    def _find_existing(self, campaign_id: str, influencer_id: str) -> Optional[Application]:
        return self.db.query(Application).filter(
            Application.campaign_id == campaign_id,
            Application.influencer_id == influencer_id
        ).first()

    def create_application(self, influencer_id: str, data: ApplicationCreate) -> ApplicationResponse:
        campaign_id = str(data.campaign_id)

        try:
            campaign = self.db.query(Campaign).filter(Campaign.id == campaign_id).first()
            existing = self._find_existing(campaign_id, influencer_id) if campaign else None
        except SQLAlchemyError as e:
            self.logger.error(
                "Failed to load campaign for application",
                extra={"operation": "create_application", "campaign_id": campaign_id, "error": str(e)},
            )
            raise ServiceError.application_failed()

        if not campaign:
            raise ServiceError.campaign_not_found()
        if campaign.status != CampaignStatusDB.RECRUITING:
            raise ServiceError.campaign_not_recruiting()
        if existing:
            raise ServiceError.duplicate_application()

        application = Application(
            campaign_id=campaign_id,
            influencer_id=influencer_id,
            message=data.message,
            visit_date=data.visit_date,
            status=ApplicationStatusDB.PENDING,
        )
        try:
            self.db.add(application)
            self.db.commit()
            self.db.refresh(application)
        except IntegrityError as e:
            self.db.rollback()
            # Lost a race against a parallel submit of the same pair
            if self._find_existing(campaign_id, influencer_id):
                raise ServiceError.duplicate_application()
            self.logger.error(
                "Failed to create application",
                extra={"operation": "create_application", "campaign_id": campaign_id, "error": str(e)},
            )
            raise ServiceError.application_failed()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(
                "Failed to create application",
                extra={"operation": "create_application", "campaign_id": campaign_id, "error": str(e)},
            )
            raise ServiceError.application_failed()

        self.logger.info(
            "Application submitted",
            extra={"operation": "create_application", "campaign_id": campaign_id, "application_id": application.id},
        )
        return ApplicationResponse.model_validate(application)

    def list_my_applications(self, influencer_id: str, query: ListApplicationsQuery) -> ApplicationPage:
        q = self.db.query(Application).options(
            joinedload(Application.campaign)
        ).filter(Application.influencer_id == influencer_id)

        if query.status:
            q = q.filter(Application.status == ApplicationStatusDB(query.status.value))

        try:
            applications, total = paginate(q.order_by(Application.created_at.desc()), query.page, query.limit)
        except SQLAlchemyError as e:
            self.logger.error(
                "Failed to fetch applications",
                extra={"operation": "list_my_applications", "error": str(e)},
            )
            raise ServiceError.fetch_failed("Failed to fetch applications")

        return ApplicationPage(
            applications=[MyApplicationItem.model_validate(a) for a in applications],
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=total_pages(total, query.limit),
        )

    # ------------------------------------------------------------------
    # Advertiser side
    # ------------------------------------------------------------------

    def list_campaign_applications(self, campaign_id: str, advertiser_id: str) -> List[CampaignApplicationItem]:
        self.campaigns.get_owned_campaign(campaign_id, advertiser_id, "list_campaign_applications")

        try:
            applications = self.db.query(Application).options(
                joinedload(Application.influencer).joinedload(UserProfile.influencer_profile)
            ).filter(
                Application.campaign_id == campaign_id
            ).order_by(Application.created_at.desc()).all()
        except SQLAlchemyError as e:
            self.logger.error(
                "Failed to fetch campaign applications",
                extra={"operation": "list_campaign_applications", "campaign_id": campaign_id, "error": str(e)},
            )
            raise ServiceError.fetch_failed("Failed to fetch applicants")

        items = []
        for a in applications:
            applicant = None
            if a.influencer:
                profile = a.influencer.influencer_profile
                applicant = ApplicantSummary(
                    name=a.influencer.name,
                    email=a.influencer.email,
                    phone=a.influencer.phone,
                    influencer_profile=InfluencerProfileResponse.model_validate(profile) if profile else None,
                )
            items.append(CampaignApplicationItem(
                **ApplicationResponse.model_validate(a).model_dump(),
                influencer=applicant,
            ))
        return items

    def _load_for_decision(self, campaign_id: str, advertiser_id: str, operation: str) -> Campaign:
        campaign = self.campaigns.get_owned_campaign(campaign_id, advertiser_id, operation)
        if campaign.status not in SELECTION_OPEN_STATES:
            raise ServiceError.invalid_status_transition(
                CampaignStatusDB(campaign.status).value, CampaignStatusDB.SELECTED.value
            )
        return campaign

    def _count_in_status(self, campaign_id: str, ids: List[str], status: ApplicationStatusDB) -> int:
        return self.db.query(Application).filter(
            Application.id.in_(ids),
            Application.campaign_id == campaign_id,
            Application.status == status
        ).count()

    def select_applicants(self, campaign_id: str, advertiser_id: str, application_ids: List[UUID]) -> SelectionResult:
        """
        Mark the given applications of this campaign as selected and move the
        campaign to `selected`, in one transaction. Ids from other campaigns
        and already-rejected applications are left alone. Safe to repeat.
        """
        campaign = self._load_for_decision(campaign_id, advertiser_id, "select_applicants")
        ids = sorted({str(i) for i in application_ids})

        try:
            self.db.query(Application).filter(
                Application.id.in_(ids),
                Application.campaign_id == campaign_id,
                Application.status.in_(list(statuses_that_can_become(ApplicationStatusDB.SELECTED)))
            ).update(
                {Application.status: ApplicationStatusDB.SELECTED, Application.updated_at: utcnow()},
                synchronize_session=False
            )
            if campaign.status != CampaignStatusDB.SELECTED:
                campaign.status = CampaignStatusDB.SELECTED
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(
                "Failed to select applicants",
                extra={"operation": "select_applicants", "campaign_id": campaign_id, "error": str(e)},
            )
            raise ServiceError.update_failed("Failed to select applicants")

        selected = self._count_in_status(campaign_id, ids, ApplicationStatusDB.SELECTED)
        self.logger.info(
            "Applicants selected",
            extra={"operation": "select_applicants", "campaign_id": campaign_id,
                   "requested": len(ids), "selected": selected},
        )
        return SelectionResult(selected_count=selected)

    def reject_applicants(self, campaign_id: str, advertiser_id: str, application_ids: List[UUID]) -> RejectionResult:
        """Turn down pending applications once recruitment has closed."""
        self._load_for_decision(campaign_id, advertiser_id, "reject_applicants")
        ids = sorted({str(i) for i in application_ids})

        try:
            self.db.query(Application).filter(
                Application.id.in_(ids),
                Application.campaign_id == campaign_id,
                Application.status.in_(list(statuses_that_can_become(ApplicationStatusDB.REJECTED)))
            ).update(
                {Application.status: ApplicationStatusDB.REJECTED, Application.updated_at: utcnow()},
                synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(
                "Failed to reject applicants",
                extra={"operation": "reject_applicants", "campaign_id": campaign_id, "error": str(e)},
            )
            raise ServiceError.update_failed("Failed to reject applicants")

        rejected = self._count_in_status(campaign_id, ids, ApplicationStatusDB.REJECTED)
        return RejectionResult(rejected_count=rejected)
