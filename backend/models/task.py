"""
Task models.

Defines the Task record returned by the API and the declarative request
schemas used to validate create/update payloads before any store call.
"""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskStatus(str, Enum):
    """Kanban column a task belongs to."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        """Return the canonical status strings in board order."""
        return [s.value for s in cls]

    @classmethod
    def parse(cls, value: Any) -> "TaskStatus":
        """
        Convert a raw value into a TaskStatus.

        Raises:
            ValueError: If the value is not one of the canonical statuses.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value in cls.values():
            return cls(value)
        raise ValueError(STATUS_ERROR_MESSAGE)


STATUS_ERROR_MESSAGE = f"Status must be one of: {', '.join(TaskStatus.values())}"


def _clean_description(value: Any) -> Optional[str]:
    """Trim a description; blank becomes None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("Description must be a string")
    return value.strip() or None


def _clean_due_date(value: Any) -> Any:
    """Treat empty strings as "no due date"; a bare date means midnight UTC."""
    if value == "":
        return None
    if isinstance(value, str) and len(value) == 10:
        try:
            return datetime.combine(date.fromisoformat(value), time.min, tzinfo=timezone.utc)
        except ValueError:
            return value
    return value


class Task(BaseModel):
    """A task row owned by exactly one user."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Server-assigned task identifier")
    user_id: str = Field(..., description="Owning user identifier")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")
    due_date: Optional[datetime] = Field(default=None, description="Optional due date")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last modification timestamp")

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> Any:
        """Accept UUID objects from drivers that do not stringify them."""
        return v if isinstance(v, str) else str(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Any) -> Any:
        """Accept date-typed columns as well as timestamps."""
        return _clean_due_date(v)


class TaskCreate(BaseModel):
    """Request body for POST /api/tasks."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(
        default=None,
        validate_default=True,
        description="Task title (required, trimmed)",
    )
    description: Optional[str] = Field(default=None, description="Optional description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Initial status")
    due_date: Optional[datetime] = Field(default=None, description="Optional due date")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        """Title is required and must not be blank after trimming."""
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Title is required")
        return v.strip()

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any) -> Optional[str]:
        return _clean_description(v)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v: Any) -> TaskStatus:
        if v is None or v == "":
            return TaskStatus.PENDING
        return TaskStatus.parse(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, v: Any) -> Any:
        return _clean_due_date(v)

    def to_record(self, user_id: str) -> dict[str, Any]:
        """Build the row inserted into the task store."""
        return {
            "user_id": user_id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "due_date": self.due_date.isoformat() if self.due_date else None,
        }


class TaskUpdate(BaseModel):
    """
    Request body for PUT /api/tasks/{id}.

    Partial update: only fields present in the payload are changed. Presence
    is tracked through ``model_fields_set`` so an explicit ``null`` clears a
    nullable field while an absent field is left alone.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None, description="New title")
    description: Optional[str] = Field(default=None, description="New description")
    status: Optional[TaskStatus] = Field(default=None, description="New status")
    due_date: Optional[datetime] = Field(default=None, description="New due date")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any) -> Optional[str]:
        return _clean_description(v)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v: Any) -> TaskStatus:
        return TaskStatus.parse(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, v: Any) -> Any:
        return _clean_due_date(v)

    @property
    def is_empty(self) -> bool:
        """True when the payload carries no updatable field."""
        return not self.model_fields_set

    def changes(self) -> dict[str, Any]:
        """Return only the supplied fields, serialized for the task store."""
        return self.model_dump(mode="json", include=self.model_fields_set)
