"""
API schemas package.

Exports the response envelopes used by the API.
"""

from backend.api.schemas.responses import (
    AccountDeletionResponse,
    ErrorResponse,
    HealthResponse,
    ProfileResponse,
    RootResponse,
    TaskListResponse,
    TaskResponse,
)

__all__ = [
    "AccountDeletionResponse",
    "ErrorResponse",
    "HealthResponse",
    "ProfileResponse",
    "RootResponse",
    "TaskListResponse",
    "TaskResponse",
]
