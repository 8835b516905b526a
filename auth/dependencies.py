# Authentication Dependencies for the Campaign Marketplace
# Resolve the current user from the bearer token via the identity provider

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from auth.identity import IdentityProvider
from database.config import get_db
from database.models import UserProfile
from services.errors import ServiceError


security = HTTPBearer(auto_error=False)


def get_identity_provider(db: Session = Depends(get_db)) -> IdentityProvider:
    return IdentityProvider(db)


def _resolve_user(
    credentials: Optional[HTTPAuthorizationCredentials],
    identity: IdentityProvider,
    db: Session,
) -> Optional[UserProfile]:
    if not credentials:
        return None

    user_id = identity.get_user(credentials.credentials)
    if user_id is None:
        return None

    return db.query(UserProfile).filter(UserProfile.id == user_id).first()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity: IdentityProvider = Depends(get_identity_provider),
    db: Session = Depends(get_db)
) -> UserProfile:
    """
    Validate the bearer token and return the caller's profile.
    This is the core authentication dependency.
    """
    user = _resolve_user(credentials, identity, db)
    if user is None:
        raise ServiceError.authentication_required()
    return user


def get_optional_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity: IdentityProvider = Depends(get_identity_provider),
    db: Session = Depends(get_db)
) -> Optional[UserProfile]:
    """Return user if authenticated, else None."""
    return _resolve_user(credentials, identity, db)
