# Typed service failures for the campaign marketplace
# Services raise ServiceError; server.py renders it as the failure envelope.

from enum import Enum
from typing import Any, Optional

from fastapi import status


class PlatformError(str, Enum):
    """Machine-readable error codes returned in the failure envelope."""
    SIGNUP_FAILED = "SIGNUP_FAILED"
    PROFILE_CREATE_FAILED = "PROFILE_CREATE_FAILED"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    CAMPAIGN_NOT_FOUND = "CAMPAIGN_NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    CREATE_FAILED = "CREATE_FAILED"
    UPDATE_FAILED = "UPDATE_FAILED"
    APPLICATION_FAILED = "APPLICATION_FAILED"
    FETCH_FAILED = "FETCH_FAILED"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    DUPLICATE_APPLICATION = "DUPLICATE_APPLICATION"
    CAMPAIGN_NOT_RECRUITING = "CAMPAIGN_NOT_RECRUITING"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ServiceError(Exception):
    """A failure that has already been logged and is safe to show to the client."""

    def __init__(
        self,
        status_code: int,
        code: PlatformError,
        message: str,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details

    def to_payload(self) -> dict:
        error = {"code": self.code.value, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}

    def __repr__(self) -> str:
        return f"ServiceError({self.status_code}, {self.code.value}, {self.message!r})"

    # ------------------------------------------------------------------
    # Named constructors
    # ------------------------------------------------------------------

    @classmethod
    def signup_failed(cls, message: str = "Sign up failed"):
        return cls(status.HTTP_400_BAD_REQUEST, PlatformError.SIGNUP_FAILED, message)

    @classmethod
    def profile_create_failed(cls, message: str = "Failed to create profile"):
        return cls(status.HTTP_500_INTERNAL_SERVER_ERROR, PlatformError.PROFILE_CREATE_FAILED, message)

    @classmethod
    def user_not_found(cls):
        return cls(status.HTTP_404_NOT_FOUND, PlatformError.USER_NOT_FOUND, "User not found")

    @classmethod
    def campaign_not_found(cls):
        return cls(status.HTTP_404_NOT_FOUND, PlatformError.CAMPAIGN_NOT_FOUND, "Campaign not found")

    @classmethod
    def unauthorized(cls, message: str = "You don't have permission to perform this action"):
        return cls(status.HTTP_403_FORBIDDEN, PlatformError.UNAUTHORIZED, message)

    @classmethod
    def authentication_required(cls):
        return cls(status.HTTP_401_UNAUTHORIZED, PlatformError.AUTHENTICATION_REQUIRED, "Authentication required")

    @classmethod
    def invalid_credentials(cls):
        return cls(status.HTTP_401_UNAUTHORIZED, PlatformError.INVALID_CREDENTIALS, "Invalid email or password")

    @classmethod
    def create_failed(cls, message: str = "Failed to create campaign"):
        return cls(status.HTTP_400_BAD_REQUEST, PlatformError.CREATE_FAILED, message)

    @classmethod
    def update_failed(cls, message: str = "Failed to update"):
        return cls(status.HTTP_400_BAD_REQUEST, PlatformError.UPDATE_FAILED, message)

    @classmethod
    def application_failed(cls, message: str = "Failed to submit application"):
        return cls(status.HTTP_400_BAD_REQUEST, PlatformError.APPLICATION_FAILED, message)

    @classmethod
    def fetch_failed(cls, message: str = "Failed to fetch data"):
        return cls(status.HTTP_500_INTERNAL_SERVER_ERROR, PlatformError.FETCH_FAILED, message)

    @classmethod
    def invalid_status_transition(cls, current: str, requested: str):
        return cls(
            status.HTTP_409_CONFLICT,
            PlatformError.INVALID_STATUS_TRANSITION,
            f"Cannot change status from '{current}' to '{requested}'",
        )

    @classmethod
    def duplicate_application(cls):
        return cls(
            status.HTTP_409_CONFLICT,
            PlatformError.DUPLICATE_APPLICATION,
            "You have already applied to this campaign",
        )

    @classmethod
    def campaign_not_recruiting(cls):
        return cls(
            status.HTTP_400_BAD_REQUEST,
            PlatformError.CAMPAIGN_NOT_RECRUITING,
            "Campaign is not accepting applications",
        )

    @classmethod
    def validation_error(cls, details: Any):
        return cls(
            status.HTTP_400_BAD_REQUEST,
            PlatformError.VALIDATION_ERROR,
            "Request validation failed",
            details=details,
        )

    @classmethod
    def internal_error(cls):
        return cls(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            PlatformError.INTERNAL_ERROR,
            "An unexpected error occurred",
        )
