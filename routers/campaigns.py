"""
Campaigns Router
Public campaign browsing plus advertiser-side campaign management:
posting, closing recruitment, reviewing applicants and picking winners.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from auth.decorators import require_permission
from auth.dependencies import get_optional_current_user
from auth.roles import Permission
from config.app_config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from database.config import get_db
from database.models import UserProfile
from schemas.platform import (
    CampaignApplicationItem,
    CampaignCreate,
    CampaignDetail,
    CampaignPage,
    CampaignResponse,
    CampaignStatus,
    CampaignStatusUpdate,
    ListCampaignsQuery,
    RejectApplicants,
    RejectionResult,
    SelectApplicants,
    SelectionResult,
)
from services.application_service import ApplicationService
from services.campaign_service import CampaignService

router = APIRouter(prefix="/campaigns", tags=["Campaigns"])


def get_campaign_service(db: Session = Depends(get_db)) -> CampaignService:
    return CampaignService(db)


def get_application_service(db: Session = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db)


# ============================================================================
# PUBLIC ENDPOINTS - Browse
# ============================================================================

@router.get("", response_model=CampaignPage)
def list_campaigns(
    status: Optional[CampaignStatus] = Query(None, description="Filter by status"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    service: CampaignService = Depends(get_campaign_service)
):
    """List campaigns, newest first."""
    return service.list_campaigns(ListCampaignsQuery(status=status, page=page, limit=limit))


@router.get("/mine", response_model=CampaignPage)
def list_my_campaigns(
    status: Optional[CampaignStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    current_user: UserProfile = Depends(require_permission(Permission.MANAGE_OWN_CAMPAIGNS)),
    service: CampaignService = Depends(get_campaign_service)
):
    """The calling advertiser's own campaigns."""
    return service.list_advertiser_campaigns(
        current_user.id,
        ListCampaignsQuery(status=status, page=page, limit=limit),
    )


@router.get("/{campaign_id}", response_model=CampaignDetail)
def get_campaign(
    campaign_id: str,
    current_user: Optional[UserProfile] = Depends(get_optional_current_user),
    service: CampaignService = Depends(get_campaign_service)
):
    """Campaign detail with application count and the caller's own application, if any."""
    return service.get_campaign_by_id(campaign_id, current_user.id if current_user else None)


# ============================================================================
# ADVERTISER ENDPOINTS - Create & Manage
# ============================================================================

@router.post("", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED)
def create_campaign(
    request: CampaignCreate,
    current_user: UserProfile = Depends(require_permission(Permission.CREATE_CAMPAIGNS)),
    service: CampaignService = Depends(get_campaign_service)
):
    return service.create_campaign(current_user.id, request)


@router.patch("/{campaign_id}/status", response_model=CampaignResponse)
def update_campaign_status(
    campaign_id: str,
    request: CampaignStatusUpdate,
    current_user: UserProfile = Depends(require_permission(Permission.MANAGE_OWN_CAMPAIGNS)),
    service: CampaignService = Depends(get_campaign_service)
):
    """Move a campaign along its lifecycle (e.g. close recruitment)."""
    return service.update_campaign_status(campaign_id, current_user.id, request.status)


@router.get("/{campaign_id}/applications", response_model=List[CampaignApplicationItem])
def list_campaign_applications(
    campaign_id: str,
    current_user: UserProfile = Depends(require_permission(Permission.REVIEW_APPLICANTS)),
    service: ApplicationService = Depends(get_application_service)
):
    """All applicants of one of the caller's campaigns."""
    return service.list_campaign_applications(campaign_id, current_user.id)


@router.post("/{campaign_id}/select", response_model=SelectionResult)
def select_applicants(
    campaign_id: str,
    request: SelectApplicants,
    current_user: UserProfile = Depends(require_permission(Permission.SELECT_APPLICANTS)),
    service: ApplicationService = Depends(get_application_service)
):
    return service.select_applicants(campaign_id, current_user.id, request.application_ids)


@router.post("/{campaign_id}/reject", response_model=RejectionResult)
def reject_applicants(
    campaign_id: str,
    request: RejectApplicants,
    current_user: UserProfile = Depends(require_permission(Permission.SELECT_APPLICANTS)),
    service: ApplicationService = Depends(get_application_service)
):
    return service.reject_applicants(campaign_id, current_user.id, request.application_ids)
