"""
Service-level error taxonomy.

Every error the API reports is one of these classes. Each carries the stable
``error`` kind string and HTTP status used to render the JSON envelope
``{"error": ..., "message": ..., "details": ...}``.
"""

from typing import Any

from fastapi import status


class TaskBoardError(Exception):
    """Base class for errors rendered as API error envelopes."""

    kind: str = "Internal Server Error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Render the error envelope."""
        body: dict[str, Any] = {"error": self.kind, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(TaskBoardError):
    """Bad input shape or value."""

    kind = "Validation Error"
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(TaskBoardError):
    """Missing, malformed, invalid or expired bearer credential."""

    kind = "Unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(TaskBoardError):
    """No row owned by the caller matches the request."""

    kind = "Not Found"
    status_code = status.HTTP_404_NOT_FOUND


class ServiceUnavailableError(TaskBoardError):
    """Upstream identity/data provider is unreachable or not configured."""

    kind = "Service Unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class InternalError(TaskBoardError):
    """Unexpected failure."""

    kind = "Internal Server Error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamError(InternalError):
    """The task store or identity provider rejected an operation."""

    kind = "Database Error"
