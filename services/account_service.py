# Account Service for the Campaign Marketplace
# Signup (identity + profiles), login and profile lookup

import logging
from typing import Callable, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from auth.identity import IdentityProvider, IdentityProviderError
from config.app_config import APP_URL, RELAY_IDENTITY_ERRORS
from database.models import (
    UserProfile, AdvertiserProfile, InfluencerProfile, UserRoleDB,
)
from schemas.platform import (
    CompleteAdvertiserSignup,
    CompleteInfluencerSignup,
    SignupResponse,
    TokenResponse,
    UserProfileResponse,
)
from services.errors import ServiceError

module_logger = logging.getLogger(__name__)


class AccountService:
    """
    Creates accounts and reads profiles.

    A signup is two writes against two systems: the identity provider record,
    then the user profile plus its role profile in one transaction. If the
    profile transaction fails the identity record is deleted again.
    """

    def __init__(self, db: Session, identity: IdentityProvider, logger: Optional[logging.Logger] = None):
        self.db = db
        self.identity = identity
        self.logger = logger or module_logger

    def signup_advertiser(self, data: CompleteAdvertiserSignup) -> SignupResponse:
        def build_profile(user_id: str) -> AdvertiserProfile:
            profile = data.advertiser_profile
            return AdvertiserProfile(
                user_id=user_id,
                business_name=profile.business_name,
                location=profile.location,
                category=profile.category,
                business_registration_number=profile.business_registration_number,
            )

        return self._signup(data, UserRoleDB.ADVERTISER, build_profile, "signup_advertiser")

    def signup_influencer(self, data: CompleteInfluencerSignup) -> SignupResponse:
        def build_profile(user_id: str) -> InfluencerProfile:
            profile = data.influencer_profile
            return InfluencerProfile(
                user_id=user_id,
                birth_date=profile.birth_date,
                naver_blog_name=profile.naver_blog_name,
                naver_blog_url=profile.naver_blog_url,
                youtube_name=profile.youtube_name,
                youtube_url=profile.youtube_url,
                instagram_name=profile.instagram_name,
                instagram_url=profile.instagram_url,
                threads_name=profile.threads_name,
                threads_url=profile.threads_url,
            )

        return self._signup(data, UserRoleDB.INFLUENCER, build_profile, "signup_influencer")

    def _signup(
        self,
        data: Union[CompleteAdvertiserSignup, CompleteInfluencerSignup],
        role: UserRoleDB,
        build_role_profile: Callable[[str], Union[AdvertiserProfile, InfluencerProfile]],
        operation: str,
    ) -> SignupResponse:
        metadata = {
            "name": data.name,
            "phone": data.phone,
            "role": role.value,
            "email_redirect_to": f"{APP_URL}/login",
        }

        try:
            user_id = self.identity.sign_up(data.email, data.password, metadata)
        except IdentityProviderError as e:
            self.logger.error(f"{role.value.capitalize()} signup failed", extra={"operation": operation, "error": str(e)})
            raise ServiceError.signup_failed(str(e) if RELAY_IDENTITY_ERRORS else "Sign up failed")

        try:
            self.db.add(UserProfile(
                id=user_id,
                name=data.name,
                phone=data.phone,
                email=data.email,
                role=role,
                terms_agreed=data.terms_agreed,
            ))
            self.db.add(build_role_profile(user_id))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(
                "Failed to create user profile",
                extra={"operation": operation, "user_id": user_id, "error": str(e)},
            )
            if not self.identity.delete_user(user_id):
                self.logger.error("Orphaned identity left behind", extra={"operation": operation, "user_id": user_id})
            raise ServiceError.profile_create_failed(f"Failed to create {role.value} profile")

        self.logger.info("User signed up", extra={"operation": operation, "user_id": user_id, "role": role.value})
        return SignupResponse(user_id=user_id)

    def login(self, email: str, password: str) -> TokenResponse:
        try:
            token = self.identity.sign_in(email, password)
        except IdentityProviderError as e:
            self.logger.warning("Login failed", extra={"operation": "login", "error": str(e)})
            raise ServiceError.invalid_credentials()
        return TokenResponse(**token.model_dump())

    def get_user_profile(self, user_id: str) -> UserProfileResponse:
        try:
            profile = self.db.query(UserProfile).options(
                joinedload(UserProfile.advertiser_profile),
                joinedload(UserProfile.influencer_profile),
            ).filter(UserProfile.id == user_id).first()
        except SQLAlchemyError as e:
            self.logger.error("Error fetching user profile", extra={"operation": "get_user_profile", "error": str(e)})
            raise ServiceError.fetch_failed("Failed to fetch profile")

        if not profile:
            raise ServiceError.user_not_found()

        return UserProfileResponse.model_validate(profile)
