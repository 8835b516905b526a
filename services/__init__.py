# Services Module for the Campaign Marketplace
# Contains business logic services

from services.errors import PlatformError, ServiceError
from services.account_service import AccountService
from services.campaign_service import CampaignService
from services.application_service import ApplicationService

__all__ = [
    'PlatformError',
    'ServiceError',
    'AccountService',
    'CampaignService',
    'ApplicationService',
]
