# Pydantic Schemas for the Experience-Group Campaign Marketplace
# Request payloads, list queries and response shapes

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, validator
from typing import Optional, List, Literal
from datetime import date, datetime
from enum import Enum
from urllib.parse import urlparse
from uuid import UUID

from config.app_config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


PHONE_PATTERN = r"^01[0-9]-?[0-9]{3,4}-?[0-9]{4}$"
BUSINESS_REGISTRATION_PATTERN = r"^\d{3}-\d{2}-\d{5}$"


def _checked_email(v: str) -> str:
    # Validate only; the address is stored exactly as the caller typed it
    try:
        validate_email(v, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e))
    return v


def _plain_value(v):
    # ORM rows carry the database enums; compare by value
    return v.value if isinstance(v, Enum) else v


# ============================================================================
# ENUMS
# ============================================================================

class UserRole(str, Enum):
    ADVERTISER = "advertiser"
    INFLUENCER = "influencer"


class CampaignStatus(str, Enum):
    RECRUITING = "recruiting"
    CLOSED = "closed"
    SELECTED = "selected"
    COMPLETED = "completed"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    SELECTED = "selected"
    REJECTED = "rejected"


# ============================================================================
# SIGNUP & ONBOARDING SCHEMAS
# ============================================================================

class SignupBase(BaseModel):
    """Fields shared by both signup paths."""
    email: str
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=2, max_length=100)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    terms_agreed: bool

    @validator("terms_agreed")
    def must_agree_to_terms(cls, v):
        if v is not True:
            raise ValueError("Terms must be agreed to")
        return v

    @validator("email")
    def validate_email_address(cls, v):
        return _checked_email(v)


class AdvertiserOnboarding(BaseModel):
    business_name: str = Field(..., min_length=2, max_length=255)
    location: str = Field(..., min_length=2, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    business_registration_number: str = Field(..., pattern=BUSINESS_REGISTRATION_PATTERN)


class InfluencerOnboarding(BaseModel):
    """
    Influencer details. Every channel is optional; an empty URL string
    from the form is treated as "not provided".
    """
    birth_date: date
    naver_blog_name: Optional[str] = None
    naver_blog_url: Optional[str] = None
    youtube_name: Optional[str] = None
    youtube_url: Optional[str] = None
    instagram_name: Optional[str] = None
    instagram_url: Optional[str] = None
    threads_name: Optional[str] = None
    threads_url: Optional[str] = None

    @validator("naver_blog_url", "youtube_url", "instagram_url", "threads_url")
    def validate_channel_url(cls, v):
        if v is None or v.strip() == "":
            return None
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Invalid URL")
        return v.strip()


class CompleteAdvertiserSignup(SignupBase):
    role: Literal["advertiser"] = "advertiser"
    advertiser_profile: AdvertiserOnboarding


class CompleteInfluencerSignup(SignupBase):
    role: Literal["influencer"] = "influencer"
    influencer_profile: InfluencerOnboarding


class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @validator("email")
    def validate_email_address(cls, v):
        return _checked_email(v)


class SignupResponse(BaseModel):
    user_id: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user_id: str


# ============================================================================
# CAMPAIGN SCHEMAS
# ============================================================================

class CampaignCreate(BaseModel):
    """Schema for posting a new campaign."""
    title: str = Field(..., min_length=5, max_length=255)
    recruitment_start_date: date
    recruitment_end_date: date
    recruitment_count: int = Field(..., ge=1)
    benefits: str = Field(..., min_length=10)
    store_info: str = Field(..., min_length=10)
    mission: str = Field(..., min_length=10)

    @validator("recruitment_end_date")
    def end_not_before_start(cls, v, values):
        start = values.get("recruitment_start_date")
        if start and v < start:
            raise ValueError("Recruitment end date must not be before the start date")
        return v


class CampaignStatusUpdate(BaseModel):
    status: CampaignStatus


class ListCampaignsQuery(BaseModel):
    status: Optional[CampaignStatus] = None
    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


# ============================================================================
# APPLICATION SCHEMAS
# ============================================================================

class ApplicationCreate(BaseModel):
    campaign_id: UUID
    message: str = Field(..., min_length=10, description="Why you want to join")
    visit_date: date


class SelectApplicants(BaseModel):
    application_ids: List[UUID] = Field(..., min_length=1)


class RejectApplicants(BaseModel):
    application_ids: List[UUID] = Field(..., min_length=1)


class ListApplicationsQuery(BaseModel):
    status: Optional[ApplicationStatus] = None
    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


class SelectionResult(BaseModel):
    selected_count: int


class RejectionResult(BaseModel):
    rejected_count: int


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class AdvertiserProfileResponse(BaseModel):
    id: str
    user_id: str
    business_name: str
    location: str
    category: str
    business_registration_number: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InfluencerProfileResponse(BaseModel):
    id: str
    user_id: str
    birth_date: date
    naver_blog_name: Optional[str] = None
    naver_blog_url: Optional[str] = None
    youtube_name: Optional[str] = None
    youtube_url: Optional[str] = None
    instagram_name: Optional[str] = None
    instagram_url: Optional[str] = None
    threads_name: Optional[str] = None
    threads_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserProfileResponse(BaseModel):
    id: str
    name: str
    phone: str
    email: str
    role: UserRole
    terms_agreed: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    advertiser_profile: Optional[AdvertiserProfileResponse] = None
    influencer_profile: Optional[InfluencerProfileResponse] = None

    @validator("role", pre=True)
    def role_value(cls, v):
        return _plain_value(v)

    class Config:
        from_attributes = True


class AdvertiserSummary(BaseModel):
    """Public display info attached to campaign listings."""
    name: str
    business_name: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None


class CampaignResponse(BaseModel):
    id: str
    advertiser_id: str
    title: str
    recruitment_start_date: date
    recruitment_end_date: date
    recruitment_count: int
    benefits: str
    store_info: str
    mission: str
    status: CampaignStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    @validator("status", pre=True)
    def status_value(cls, v):
        return _plain_value(v)

    class Config:
        from_attributes = True


class CampaignListItem(CampaignResponse):
    advertiser: Optional[AdvertiserSummary] = None


class ApplicationResponse(BaseModel):
    id: str
    campaign_id: str
    influencer_id: str
    message: str
    visit_date: date
    status: ApplicationStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    @validator("status", pre=True)
    def status_value(cls, v):
        return _plain_value(v)

    class Config:
        from_attributes = True


class CampaignDetail(CampaignListItem):
    application_count: int = 0
    user_application: Optional[ApplicationResponse] = None


class CampaignPage(BaseModel):
    campaigns: List[CampaignListItem]
    total: int
    page: int
    limit: int
    total_pages: int


class MyApplicationItem(ApplicationResponse):
    campaign: Optional[CampaignResponse] = None


class ApplicationPage(BaseModel):
    applications: List[MyApplicationItem]
    total: int
    page: int
    limit: int
    total_pages: int


class ApplicantSummary(BaseModel):
    name: str
    email: str
    phone: str
    influencer_profile: Optional[InfluencerProfileResponse] = None


class CampaignApplicationItem(ApplicationResponse):
    influencer: Optional[ApplicantSummary] = None
