# Auth Router for the Campaign Marketplace
# Role-specific signup, login and current profile

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth.dependencies import get_current_user, get_identity_provider
from auth.identity import IdentityProvider
from database.config import get_db
from database.models import UserProfile
from schemas.platform import (
    CompleteAdvertiserSignup,
    CompleteInfluencerSignup,
    LoginRequest,
    SignupResponse,
    TokenResponse,
    UserProfileResponse,
)
from services.account_service import AccountService

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_account_service(
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> AccountService:
    return AccountService(db, identity)


@router.post("/signup/advertiser", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup_advertiser(
    request: CompleteAdvertiserSignup,
    service: AccountService = Depends(get_account_service)
):
    """Create an advertiser account with its business profile."""
    return service.signup_advertiser(request)


@router.post("/signup/influencer", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup_influencer(
    request: CompleteInfluencerSignup,
    service: AccountService = Depends(get_account_service)
):
    """Create an influencer account with its channel profile."""
    return service.signup_influencer(request)


@router.post("/login", response_model=TokenResponse)
def login(
    request: LoginRequest,
    service: AccountService = Depends(get_account_service)
):
    return service.login(request.email, request.password)


@router.get("/profile", response_model=UserProfileResponse)
def get_profile(
    current_user: UserProfile = Depends(get_current_user),
    service: AccountService = Depends(get_account_service)
):
    """Current user's profile plus the role-specific profile."""
    return service.get_user_profile(current_user.id)
