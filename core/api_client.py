# HTTP client for the campaign marketplace API
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Request failed"


class ApiError(Exception):
    """Non-2xx answer (or transport failure) from the marketplace API"""

    def __init__(self, status_code: int, code: Optional[str], message: str):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message


def extract_api_error_message(body: Any, fallback: str = DEFAULT_ERROR_MESSAGE) -> str:
    """
    Pull a human readable message out of an error body.

    Looks at error.message first, then a top-level message, then the fallback.
    """
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
            return error["message"]
        if isinstance(body.get("message"), str) and body["message"]:
            return body["message"]
    return fallback


def _extract_error_code(body: Any) -> Optional[str]:
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("code")
    return None


def _as_json(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_none=True)
    return payload


class PlatformClient:
    """Thin wrapper over every API route. Remembers the bearer token after login."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        url = f"{self.base_url}/api{endpoint}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = self.session.request(
                method,
                url,
                headers=self._headers(),
                json=_as_json(data),
                params=params or None,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"API request failed: {method} {endpoint}: {e}")
            raise ApiError(0, None, str(e) or DEFAULT_ERROR_MESSAGE)

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            raise ApiError(
                response.status_code,
                _extract_error_code(body),
                extract_api_error_message(body),
            )
        return body

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def signup_advertiser(self, payload: Any) -> Dict[str, Any]:
        return self._make_request("POST", "/auth/signup/advertiser", payload)

    def signup_influencer(self, payload: Any) -> Dict[str, Any]:
        return self._make_request("POST", "/auth/signup/influencer", payload)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Log in and keep the access token for later calls."""
        result = self._make_request("POST", "/auth/login", {"email": email, "password": password})
        self.token = result["access_token"]
        return result

    def get_profile(self) -> Dict[str, Any]:
        return self._make_request("GET", "/auth/profile")

    # ------------------------------------------------------------------
    # Campaigns
    # ------------------------------------------------------------------

    def list_campaigns(self, status: Optional[str] = None, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        return self._make_request("GET", "/campaigns", params={"status": status, "page": page, "limit": limit})

    def list_my_campaigns(self, status: Optional[str] = None, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        return self._make_request("GET", "/campaigns/mine", params={"status": status, "page": page, "limit": limit})

    def get_campaign(self, campaign_id: str) -> Dict[str, Any]:
        return self._make_request("GET", f"/campaigns/{campaign_id}")

    def create_campaign(self, payload: Any) -> Dict[str, Any]:
        return self._make_request("POST", "/campaigns", payload)

    def update_campaign_status(self, campaign_id: str, status: str) -> Dict[str, Any]:
        return self._make_request("PATCH", f"/campaigns/{campaign_id}/status", {"status": status})

    def list_campaign_applications(self, campaign_id: str) -> List[Dict[str, Any]]:
        return self._make_request("GET", f"/campaigns/{campaign_id}/applications")

    def select_applicants(self, campaign_id: str, application_ids: List[str]) -> Dict[str, Any]:
        return self._make_request(
            "POST", f"/campaigns/{campaign_id}/select", {"application_ids": [str(i) for i in application_ids]}
        )

    def reject_applicants(self, campaign_id: str, application_ids: List[str]) -> Dict[str, Any]:
        return self._make_request(
            "POST", f"/campaigns/{campaign_id}/reject", {"application_ids": [str(i) for i in application_ids]}
        )

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    def create_application(self, payload: Any) -> Dict[str, Any]:
        return self._make_request("POST", "/applications", payload)

    def list_my_applications(self, status: Optional[str] = None, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        return self._make_request("GET", "/applications/my", params={"status": status, "page": page, "limit": limit})
