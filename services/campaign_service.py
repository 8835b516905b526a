# Campaign Lifecycle Service
# Creation, listing, detail and status transitions for campaigns

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from core.lifecycle import can_transition_campaign
from database.models import (
    Campaign, CampaignStatusDB, Application, UserProfile,
)
from schemas.platform import (
    AdvertiserSummary,
    ApplicationResponse,
    CampaignCreate,
    CampaignDetail,
    CampaignListItem,
    CampaignPage,
    CampaignResponse,
    CampaignStatus,
    ListCampaignsQuery,
)
from services.errors import ServiceError
from services.pagination import paginate, total_pages

module_logger = logging.getLogger(__name__)


def advertiser_summary(user: Optional[UserProfile]) -> Optional[AdvertiserSummary]:
    if user is None:
        return None
    business = user.advertiser_profile
    return AdvertiserSummary(
        name=user.name,
        business_name=business.business_name if business else None,
        location=business.location if business else None,
        category=business.category if business else None,
    )


class CampaignService:
    """Campaign reads and writes. Ownership is always checked against `advertiser_id`."""

    def __init__(self, db: Session, logger: Optional[logging.Logger] = None):
        self.db = db
        self.logger = logger or module_logger

    def _with_advertiser(self):
        return self.db.query(Campaign).options(
            joinedload(Campaign.advertiser).joinedload(UserProfile.advertiser_profile)
        )

    def create_campaign(self, advertiser_id: str, data: CampaignCreate) -> CampaignResponse:
        campaign = Campaign(
            advertiser_id=advertiser_id,
            status=CampaignStatusDB.RECRUITING,
            **data.model_dump(),
        )
        try:
            self.db.add(campaign)
            self.db.commit()
            self.db.refresh(campaign)
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(
                "Failed to create campaign",
                extra={"operation": "create_campaign", "advertiser_id": advertiser_id, "error": str(e)},
            )
            raise ServiceError.create_failed()

        self.logger.info("Campaign created", extra={"operation": "create_campaign", "campaign_id": campaign.id})
        return CampaignResponse.model_validate(campaign)

    def list_campaigns(self, query: ListCampaignsQuery, advertiser_id: Optional[str] = None) -> CampaignPage:
        """Newest first. Pass `advertiser_id` to restrict to one advertiser's campaigns."""
        q = self._with_advertiser()
        if query.status:
            q = q.filter(Campaign.status == CampaignStatusDB(query.status.value))
        if advertiser_id:
            q = q.filter(Campaign.advertiser_id == advertiser_id)

        try:
            campaigns, total = paginate(q.order_by(Campaign.created_at.desc()), query.page, query.limit)
        except SQLAlchemyError as e:
            self.logger.error("Failed to fetch campaigns", extra={"operation": "list_campaigns", "error": str(e)})
            raise ServiceError.fetch_failed("Failed to fetch campaigns")

        items = []
        for c in campaigns:
            items.append(CampaignListItem(
                **CampaignResponse.model_validate(c).model_dump(),
                advertiser=advertiser_summary(c.advertiser),
            ))

        return CampaignPage(
            campaigns=items,
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=total_pages(total, query.limit),
        )

    def list_advertiser_campaigns(self, advertiser_id: str, query: ListCampaignsQuery) -> CampaignPage:
        return self.list_campaigns(query, advertiser_id=advertiser_id)

    def get_campaign_by_id(self, campaign_id: str, caller_id: Optional[str] = None) -> CampaignDetail:
        try:
            campaign = self._with_advertiser().filter(Campaign.id == campaign_id).first()
            if not campaign:
                raise ServiceError.campaign_not_found()

            application_count = self.db.query(func.count(Application.id)).filter(
                Application.campaign_id == campaign_id
            ).scalar() or 0

            user_application = None
            if caller_id:
                user_application = self.db.query(Application).filter(
                    Application.campaign_id == campaign_id,
                    Application.influencer_id == caller_id
                ).first()
        except SQLAlchemyError as e:
            self.logger.error(
                "Error fetching campaign",
                extra={"operation": "get_campaign_by_id", "campaign_id": campaign_id, "error": str(e)},
            )
            raise ServiceError.fetch_failed("Failed to fetch campaign")

        return CampaignDetail(
            **CampaignResponse.model_validate(campaign).model_dump(),
            advertiser=advertiser_summary(campaign.advertiser),
            application_count=application_count,
            user_application=(
                ApplicationResponse.model_validate(user_application) if user_application else None
            ),
        )

    def get_owned_campaign(self, campaign_id: str, advertiser_id: str, operation: str) -> Campaign:
        """
        Load a campaign through the ownership predicate.
        A missing campaign and someone else's campaign look the same: Unauthorized.
        """
        try:
            campaign = self.db.query(Campaign).filter(
                Campaign.id == campaign_id,
                Campaign.advertiser_id == advertiser_id
            ).first()
        except SQLAlchemyError as e:
            self.logger.error(
                "Failed to load campaign for owner",
                extra={"operation": operation, "campaign_id": campaign_id, "error": str(e)},
            )
            raise ServiceError.fetch_failed("Failed to fetch campaign")

        if not campaign:
            self.logger.warning(
                "Ownership check failed",
                extra={"operation": operation, "campaign_id": campaign_id, "advertiser_id": advertiser_id},
            )
            raise ServiceError.unauthorized()
        return campaign

    def update_campaign_status(
        self, campaign_id: str, advertiser_id: str, new_status: CampaignStatus
    ) -> CampaignResponse:
        campaign = self.get_owned_campaign(campaign_id, advertiser_id, "update_campaign_status")

        current = CampaignStatusDB(campaign.status)
        target = CampaignStatusDB(new_status.value if hasattr(new_status, "value") else new_status)
        if not can_transition_campaign(current, target):
            raise ServiceError.invalid_status_transition(current.value, target.value)

        try:
            campaign.status = target
            self.db.commit()
            self.db.refresh(campaign)
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(
                "Failed to update campaign status",
                extra={"operation": "update_campaign_status", "campaign_id": campaign_id, "error": str(e)},
            )
            raise ServiceError.update_failed("Failed to update campaign status")

        self.logger.info(
            "Campaign status changed",
            extra={"operation": "update_campaign_status", "campaign_id": campaign_id,
                   "from_status": current.value, "to_status": target.value},
        )
        return CampaignResponse.model_validate(campaign)
