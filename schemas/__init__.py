# Schemas module for the Campaign Marketplace
# Organizes all Pydantic schemas in one place

from schemas.platform import (
    # Enums
    UserRole,
    CampaignStatus,
    ApplicationStatus,

    # Signup & auth
    AdvertiserOnboarding,
    InfluencerOnboarding,
    CompleteAdvertiserSignup,
    CompleteInfluencerSignup,
    LoginRequest,
    SignupResponse,
    TokenResponse,

    # Campaign schemas
    CampaignCreate,
    CampaignStatusUpdate,
    ListCampaignsQuery,
    CampaignResponse,
    CampaignListItem,
    CampaignDetail,
    CampaignPage,
    AdvertiserSummary,

    # Application schemas
    ApplicationCreate,
    SelectApplicants,
    RejectApplicants,
    ListApplicationsQuery,
    SelectionResult,
    RejectionResult,
    ApplicationResponse,
    MyApplicationItem,
    ApplicationPage,
    ApplicantSummary,
    CampaignApplicationItem,

    # Profiles
    AdvertiserProfileResponse,
    InfluencerProfileResponse,
    UserProfileResponse,
)

__all__ = [
    'UserRole', 'CampaignStatus', 'ApplicationStatus',
    'AdvertiserOnboarding', 'InfluencerOnboarding',
    'CompleteAdvertiserSignup', 'CompleteInfluencerSignup',
    'LoginRequest', 'SignupResponse', 'TokenResponse',
    'CampaignCreate', 'CampaignStatusUpdate', 'ListCampaignsQuery',
    'CampaignResponse', 'CampaignListItem', 'CampaignDetail', 'CampaignPage', 'AdvertiserSummary',
    'ApplicationCreate', 'SelectApplicants', 'RejectApplicants', 'ListApplicationsQuery',
    'SelectionResult', 'RejectionResult', 'ApplicationResponse', 'MyApplicationItem',
    'ApplicationPage', 'ApplicantSummary', 'CampaignApplicationItem',
    'AdvertiserProfileResponse', 'InfluencerProfileResponse', 'UserProfileResponse',
]
