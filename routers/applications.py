# Applications Router for the Campaign Marketplace
# Influencers apply to campaigns and track their own applications

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from auth.decorators import require_permission
from auth.roles import Permission
from config.app_config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from database.config import get_db
from database.models import UserProfile
from schemas.platform import (
    ApplicationCreate,
    ApplicationPage,
    ApplicationResponse,
    ApplicationStatus,
    ListApplicationsQuery,
)
from services.application_service import ApplicationService

router = APIRouter(prefix="/applications", tags=["Applications"])


def get_application_service(db: Session = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db)


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
def create_application(
    request: ApplicationCreate,
    current_user: UserProfile = Depends(require_permission(Permission.APPLY_TO_CAMPAIGNS)),
    service: ApplicationService = Depends(get_application_service)
):
    """Apply to a campaign that is still recruiting."""
    return service.create_application(current_user.id, request)


@router.get("/my", response_model=ApplicationPage)
def list_my_applications(
    status: Optional[ApplicationStatus] = Query(None, description="Filter by status"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    current_user: UserProfile = Depends(require_permission(Permission.VIEW_OWN_APPLICATIONS)),
    service: ApplicationService = Depends(get_application_service)
):
    """Get the influencer's own applications, newest first."""
    return service.list_my_applications(
        current_user.id,
        ListApplicationsQuery(status=status, page=page, limit=limit),
    )
