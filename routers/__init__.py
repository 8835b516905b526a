# Marketplace Routers Module
# Exports all API routers for the campaign marketplace

from routers.auth import router as auth_router
from routers.campaigns import router as campaigns_router
from routers.applications import router as applications_router

__all__ = [
    'auth_router',
    'campaigns_router',
    'applications_router',
]
