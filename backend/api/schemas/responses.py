"""
Response envelopes for the task board API.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from backend.models.profile import Profile
from backend.models.task import Task


class RootResponse(BaseModel):
    """Response for GET /."""

    message: str = Field(..., description="Service status message")
    timestamp: str = Field(..., description="Server time (ISO 8601)")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    app_name: str
    app_version: str
    timestamp: str
    debug: bool
    storage_provider: str
    supabase_configured: bool
    admin_enabled: bool


class ErrorResponse(BaseModel):
    """Error envelope shared by every failing endpoint."""

    error: str = Field(..., description="Error kind")
    message: str = Field(..., description="Human-readable message")
    details: Optional[Any] = Field(default=None, description="Upstream or validation details")


class TaskResponse(BaseModel):
    """Single-task envelope."""

    message: str
    task: Task


class TaskListResponse(BaseModel):
    """Task list envelope."""

    message: str
    count: int
    tasks: list[Task]


class ProfileResponse(BaseModel):
    """Profile envelope."""

    message: str
    profile: Profile


class AccountDeletionResponse(BaseModel):
    """Account deletion outcome."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    account_deleted: bool = Field(..., alias="accountDeleted")
    tasks_deleted: bool = Field(default=True, alias="tasksDeleted")
    note: Optional[str] = None
