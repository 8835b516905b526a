# Identity Provider Adapter
# Sign-up, sign-in and token lookup. Profiles live elsewhere; this module only
# knows about credentials, so it can be swapped for a hosted auth service.

from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

import bcrypt
from jose import jwt, JWTError
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from config.app_config import JWT_SECRET_KEY, JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from database.models import AuthIdentity, utcnow

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class IdentityProviderError(Exception):
    """Raised when the provider rejects a sign-up or sign-in."""


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user_id: str


def get_password_hash(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    password_bytes = password.encode("utf-8")[:72]
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8")[:72], hashed.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user_id: str, email: str, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> Token:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {"sub": user_id, "email": email, "exp": expire}
    encoded = jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)
    return Token(access_token=encoded, expires_in=expires_minutes * 60, user_id=user_id)


def decode_access_token(token: str) -> Optional[str]:
    """Return the user id carried by a valid token, else None."""
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub")


class IdentityProvider:
    """
    Credential store backed by the `auth_identities` table.
    Writes commit on their own, independent of the caller's profile writes.
    """

    def __init__(self, db: Session):
        self.db = db

    def sign_up(self, email: str, password: str, metadata: Optional[dict] = None) -> str:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise IdentityProviderError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")

        email = email.strip()
        try:
            existing = self.db.query(AuthIdentity).filter(AuthIdentity.email == email).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise IdentityProviderError(f"Identity store error: {e}")
        if existing:
            raise IdentityProviderError("User already registered")

        identity = AuthIdentity(
            email=email,
            password_hash=get_password_hash(password),
            user_metadata=metadata or {},
        )
        try:
            self.db.add(identity)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise IdentityProviderError("User already registered")
        except SQLAlchemyError as e:
            self.db.rollback()
            raise IdentityProviderError(f"Identity store error: {e}")

        self.db.refresh(identity)
        return identity.id

    def sign_in(self, email: str, password: str) -> Token:
        try:
            identity = self.db.query(AuthIdentity).filter(AuthIdentity.email == email.strip()).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise IdentityProviderError(f"Identity store error: {e}")

        if not identity or not verify_password(password, identity.password_hash):
            raise IdentityProviderError("Invalid login credentials")

        try:
            identity.last_sign_in_at = utcnow()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise IdentityProviderError(f"Identity store error: {e}")
        return create_access_token(identity.id, identity.email)

    def get_user(self, token: str) -> Optional[str]:
        user_id = decode_access_token(token)
        if not user_id:
            return None
        identity = self.db.query(AuthIdentity).filter(AuthIdentity.id == user_id).first()
        return identity.id if identity else None

    def delete_user(self, identity_id: str) -> bool:
        """Remove an identity. Used to undo a sign-up whose profile could not be written."""
        try:
            deleted = self.db.query(AuthIdentity).filter(AuthIdentity.id == identity_id).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "Failed to delete identity",
                extra={"operation": "delete_user", "identity_id": identity_id, "error": str(e)},
            )
            return False
        return bool(deleted)
