"""
Task board API client.

Thin wrapper over ``requests`` that attaches the bearer token, unwraps the
JSON envelopes returned by the backend and classifies failures so the
dashboard can show a fixed message per failure kind.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional

import requests

from frontend.constants import API_BASE_URL, API_TIMEOUT_SECONDS, MESSAGES

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """How a failed API call is presented to the user."""

    CONNECTION = "connection"
    AUTH = "auth"
    VALIDATION = "validation"
    SERVER = "server"
    GENERIC = "generic"


def classify_status(status_code: int) -> ErrorKind:
    """Map an HTTP error status to an ErrorKind."""
    if status_code == 401:
        return ErrorKind.AUTH
    if status_code == 400:
        return ErrorKind.VALIDATION
    if status_code >= 500:
        return ErrorKind.SERVER
    return ErrorKind.GENERIC


class ApiError(Exception):
    """
    A failed call to the task board API.

    Attributes:
        kind: Failure classification
        status_code: HTTP status, or None when no response was received
        message: Server-provided message, if any
        details: Server-provided details, if any
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str = "",
        status_code: Optional[int] = None,
        details: Any = None,
    ):
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message or kind.value)

    @classmethod
    def from_response(cls, response: requests.Response) -> "ApiError":
        """Build an ApiError from an error envelope response."""
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            kind=classify_status(response.status_code),
            message=str(body.get("message") or ""),
            status_code=response.status_code,
            details=body.get("details"),
        )


def describe_error(error: ApiError, fallback: str = MESSAGES["create_failed"]) -> str:
    """
    Human-readable message for a failed call.

    Connection, authentication and server failures always produce the same
    fixed text. Validation and other failures prefer the server message.
    """
    if error.kind is ErrorKind.CONNECTION:
        return MESSAGES["connection"]
    if error.kind is ErrorKind.AUTH:
        return MESSAGES["auth"]
    if error.kind is ErrorKind.SERVER:
        return MESSAGES["server"]
    if error.kind is ErrorKind.VALIDATION:
        return error.message or MESSAGES["validation"]
    return error.message or fallback


class ApiClient:
    """
    Client for the task board REST API.

    Usage:
        api = ApiClient(token=access_token)
        tasks = api.list_tasks()
        task = api.create_task({"title": "Write report"})
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        token: Optional[str] = None,
        timeout: float = API_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API base URL including the /api prefix
            token: Bearer access token
            timeout: Per-request timeout in seconds
            session: Optional requests.Session (tests pass a mock)
            on_unauthorized: Called after the token has been dropped on a 401
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._timeout = timeout
        self._session = session or requests.Session()
        self._on_unauthorized = on_unauthorized

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _handle_unauthorized(self) -> None:
        self.token = None
        if self._on_unauthorized is not None:
            self._on_unauthorized()

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """
        Send a request and return the decoded JSON envelope.

        Raises:
            ApiError: On transport failure or any non-2xx response.
        """
        url = f"{self.base_url}{path}"
        try:
            response = self._session.request(
                method,
                url,
                headers=self._headers(),
                timeout=self._timeout,
                **kwargs,
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"Network error: no response from server. Is the backend running? url={url}")
            raise ApiError(ErrorKind.CONNECTION, str(e)) from e
        except requests.exceptions.RequestException as e:
            logger.exception(f"API request failed: {e}")
            raise ApiError(ErrorKind.GENERIC, str(e)) from e

        if response.status_code >= 400:
            error = ApiError.from_response(response)
            logger.error(
                f"API error: status={response.status_code} url={url} "
                f"message={error.message!r}"
            )
            if error.kind is ErrorKind.AUTH:
                self._handle_unauthorized()
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                ErrorKind.GENERIC,
                "Unexpected response from server",
                status_code=response.status_code,
            ) from e

    # Tasks

    def list_tasks(self, status: Optional[str] = None) -> list[dict[str, Any]]:
        params = {"status": status} if status else None
        body = self._request("GET", "/tasks", params=params)
        return body.get("tasks") or []

    def create_task(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/tasks", json=payload)["task"]

    def update_task(self, task_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/tasks/{task_id}", json=changes)["task"]

    def delete_task(self, task_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/tasks/{task_id}")["task"]

    # Profile

    def get_profile(self) -> dict[str, Any]:
        return self._request("GET", "/profile")["profile"]

    def update_profile(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", "/profile", json=payload)["profile"]

    def delete_account(self) -> dict[str, Any]:
        """Returns the deletion outcome: message, accountDeleted and optional note."""
        return self._request("DELETE", "/profile")
