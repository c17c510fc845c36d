"""
HTTP client for the FitTrack REST API.

Every call returns an ApiResult instead of raising, so form handlers can
treat a refused registration, a bad status code and an unreachable server
the same way: show the message and let the user resubmit. There is no
retry and no client-side timeout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests

from .config import DEFAULT_CONFIG
from .errors import ErrorCode, RequestError
from .records import RecordValidationError, validate_record

logger = logging.getLogger(__name__)

# POST endpoints whose payload is a stored record
RECORD_ENDPOINTS: dict[str, str] = {
    "/register": "user",
    "/log-workout": "workout",
    "/metrics": "metric",
    "/plans": "plan",
}


@dataclass
class ApiResult:
    """Outcome of one API request."""

    success: bool
    data: Any = None
    error: str | None = None
    status_code: int | None = None

    def to_error(self) -> RequestError:
        """Describe a failed result as a RequestError for logging."""
        if self.status_code is None:
            code = ErrorCode.NETWORK_ERROR
        elif self.status_code == 0:
            code = ErrorCode.INVALID_PAYLOAD
        else:
            code = ErrorCode.HTTP_ERROR
        return RequestError(
            code=code,
            user_message=self.error or "Request failed",
            status_code=self.status_code or None,
        )


class ApiClient:
    """Thin JSON client for the auth, workout, metric and plan endpoints."""

    def __init__(self, base_url: str = DEFAULT_CONFIG["api_base_url"], session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def request(self, endpoint: str, method: str = "GET", payload: dict[str, Any] | None = None) -> ApiResult:
        """
        Send a request and normalize the outcome.

        Args:
            endpoint: Path below the base URL, starting with "/"
            method: HTTP method
            payload: JSON body for POST/PUT requests

        Returns:
            ApiResult with the decoded body on success, or an error message
        """
        url = f"{self.base_url}{endpoint}"

        if method == "POST" and payload is not None and endpoint in RECORD_ENDPOINTS:
            try:
                validate_record(RECORD_ENDPOINTS[endpoint], payload, structure_only=True)
            except RecordValidationError as e:
                logger.warning(f"{method} {url} not sent: {e}")
                # status 0 marks a payload refused before sending
                return ApiResult(success=False, error=e.message, status_code=0)

        try:
            response = self.session.request(method, url, json=payload)
        except requests.RequestException as e:
            logger.error(f"{method} {url} network error: {e}")
            return ApiResult(success=False, error=str(e) or "Network error occurred")

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = self._extract_error_message(data, response.status_code)
            logger.error(f"{method} {url} failed with status {response.status_code}: {message}")
            return ApiResult(success=False, data=data, error=message, status_code=response.status_code)

        if data is None:
            logger.error(f"{method} {url} returned a body that is not JSON")
            return ApiResult(success=False, error="Invalid response from server", status_code=response.status_code)

        logger.debug(f"{method} {url} -> {response.status_code}")
        return ApiResult(success=True, data=data, status_code=response.status_code)

    def _extract_error_message(self, data: Any, status_code: int) -> str:
        if isinstance(data, dict):
            for key in ("msg", "message", "error"):
                if data.get(key):
                    return str(data[key])
        return f"HTTP error! status: {status_code}"

    def post(self, endpoint: str, payload: dict[str, Any]) -> ApiResult:
        return self.request(endpoint, "POST", payload)

    def get(self, endpoint: str) -> ApiResult:
        return self.request(endpoint, "GET")

    def put(self, endpoint: str, payload: dict[str, Any]) -> ApiResult:
        return self.request(endpoint, "PUT", payload)

    def delete(self, endpoint: str) -> ApiResult:
        return self.request(endpoint, "DELETE")

    # Authentication

    def register(self, user_data: dict[str, Any]) -> ApiResult:
        return self.post("/register", user_data)

    def login(self, credentials: dict[str, Any]) -> ApiResult:
        return self.post("/login", credentials)

    def logout(self) -> ApiResult:
        return self.request("/logout", "POST")

    # Workouts

    def create_workout(self, workout: dict[str, Any]) -> ApiResult:
        return self.post("/log-workout", workout)

    def get_workouts(self, email: str) -> ApiResult:
        return self.get(f"/workouts/{quote(email)}")

    # Metrics

    def create_metric(self, metric: dict[str, Any]) -> ApiResult:
        return self.post("/metrics", metric)

    def get_metrics(self, email: str) -> ApiResult:
        return self.get(f"/metrics/{quote(email)}")

    # Plans

    def create_plan(self, plan: dict[str, Any]) -> ApiResult:
        return self.post("/plans", plan)

    def get_plans(self, trainer_email: str) -> ApiResult:
        return self.get(f"/plans/{quote(trainer_email)}")

    def update_plan(self, plan_id: str, plan: dict[str, Any]) -> ApiResult:
        return self.put(f"/plans/{quote(plan_id)}", plan)

    def delete_plan(self, plan_id: str) -> ApiResult:
        return self.delete(f"/plans/{quote(plan_id)}")

    def close(self) -> None:
        self.session.close()
