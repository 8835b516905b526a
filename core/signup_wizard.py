"""
Signup Wizard

The three-step signup flow (pick a role, fill in basic info, fill in the
role-specific details) as a state machine with no UI attached. A front end
drives it step by step and renders `step` and `error`.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ValidationError

from core.api_client import ApiError, PlatformClient
from schemas.platform import (
    AdvertiserOnboarding,
    CompleteAdvertiserSignup,
    CompleteInfluencerSignup,
    InfluencerOnboarding,
    SignupBase,
    UserRole,
)

logger = logging.getLogger(__name__)

SIGNUP_FAILED_MESSAGE = "Sign up failed. Please try again."
MISSING_FIELDS_MESSAGE = "Please fill in all required fields."
PASSWORD_MISMATCH_MESSAGE = "Passwords do not match."
TERMS_REQUIRED_MESSAGE = "Please agree to the terms."


class SignupStep(str, Enum):
    ROLE = "role"
    BASIC = "basic"
    DETAILS = "details"
    COMPLETED = "completed"


class WizardStateError(Exception):
    """An action was attempted from a step that does not allow it."""


def _first_error(error: ValidationError) -> str:
    errors = error.errors()
    return (errors[0].get("msg") if errors else None) or SIGNUP_FAILED_MESSAGE


class SignupWizard:
    def __init__(self):
        self.step = SignupStep.ROLE
        self.role: Optional[UserRole] = None
        self.basic: Dict[str, Any] = {}
        self.error: Optional[str] = None
        self.user_id: Optional[str] = None

    def _require_step(self, expected: SignupStep, action: str):
        if self.step != expected:
            raise WizardStateError(f"Cannot {action} while on step '{self.step.value}'")

    @property
    def details_schema(self):
        """The details model the current role has to fill in."""
        if self.role == UserRole.ADVERTISER:
            return AdvertiserOnboarding
        if self.role == UserRole.INFLUENCER:
            return InfluencerOnboarding
        return None

    def select_role(self, role: Union[UserRole, str]):
        self._require_step(SignupStep.ROLE, "select a role")
        self.role = UserRole(role)
        self.error = None
        self.step = SignupStep.BASIC

    def submit_basic(
        self,
        name: str,
        phone: str,
        email: str,
        password: str,
        confirm_password: str,
        terms_agreed: bool
    ) -> bool:
        """Check the basic info and move on to details. Returns False and keeps the step on failure."""
        self._require_step(SignupStep.BASIC, "submit basic info")

        if not all(v and str(v).strip() for v in (name, phone, email, password)):
            self.error = MISSING_FIELDS_MESSAGE
            return False
        if password != confirm_password:
            self.error = PASSWORD_MISMATCH_MESSAGE
            return False
        if not terms_agreed:
            self.error = TERMS_REQUIRED_MESSAGE
            return False

        basic = {
            "name": name.strip(),
            "phone": phone.strip(),
            "email": email.strip(),
            "password": password,
            "terms_agreed": True,
        }
        try:
            SignupBase(**basic)
        except ValidationError as e:
            self.error = _first_error(e)
            return False

        self.basic = basic
        self.error = None
        self.step = SignupStep.DETAILS
        return True

    def previous(self):
        if self.step == SignupStep.DETAILS:
            self.step = SignupStep.BASIC
        elif self.step == SignupStep.BASIC:
            self.step = SignupStep.ROLE
        else:
            raise WizardStateError(f"No previous step from '{self.step.value}'")
        self.error = None

    def build_payload(self, details: Union[BaseModel, Dict[str, Any]]) -> BaseModel:
        """Assemble the complete signup body for the selected role."""
        if isinstance(details, BaseModel):
            details = details.model_dump()

        if self.role == UserRole.ADVERTISER:
            return CompleteAdvertiserSignup(**self.basic, role="advertiser", advertiser_profile=details)
        return CompleteInfluencerSignup(**self.basic, role="influencer", influencer_profile=details)

    def submit(self, details: Union[BaseModel, Dict[str, Any]], client: PlatformClient) -> bool:
        """
        Send the signup request. On failure the wizard stays on details with
        the error message set, so the user can fix things and submit again.
        """
        self._require_step(SignupStep.DETAILS, "submit")

        try:
            payload = self.build_payload(details)
        except ValidationError as e:
            self.error = _first_error(e)
            return False

        try:
            if self.role == UserRole.ADVERTISER:
                result = client.signup_advertiser(payload)
            else:
                result = client.signup_influencer(payload)
        except ApiError as e:
            logger.warning(f"{self.role.value} signup failed: {e.message}")
            self.error = e.message or SIGNUP_FAILED_MESSAGE
            return False

        self.user_id = result["user_id"]
        self.error = None
        self.step = SignupStep.COMPLETED
        return True
