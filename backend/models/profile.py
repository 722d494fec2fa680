"""
Identity and profile models.

The profile is a view over identity metadata held by the identity provider;
it is not stored separately.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class Identity(BaseModel):
    """Provider-neutral view of an authenticated user."""

    id: str = Field(..., description="User identifier")
    email: Optional[str] = Field(default=None, description="User email")
    email_confirmed_at: Optional[datetime] = Field(default=None)
    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    def __repr__(self) -> str:
        return f"<Identity(id={self.id}, email={self.email})>"


@dataclass(frozen=True)
class AuthContext:
    """Identity resolved by the access gate plus the credential it came from."""

    identity: Identity
    token: str

    @property
    def user_id(self) -> str:
        return self.identity.id


class Profile(BaseModel):
    """Profile view returned by /api/profile."""

    id: str
    email: Optional[str] = None
    email_confirmed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_identity(cls, identity: Identity) -> "Profile":
        return cls(
            id=identity.id,
            email=identity.email,
            email_confirmed_at=identity.email_confirmed_at,
            created_at=identity.created_at,
            updated_at=identity.updated_at,
            metadata=dict(identity.user_metadata or {}),
        )


class ProfileUpdate(BaseModel):
    """Request body for PUT /api/profile."""

    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = Field(default=None, description="New email address")
    metadata: Optional[dict[str, Any]] = Field(
        default=None,
        description="Metadata patch; null or empty-string values delete the key",
    )

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if not isinstance(v, str) or not EMAIL_PATTERN.match(v.strip()):
            raise ValueError("Invalid email format")
        return v.strip()


@dataclass(frozen=True)
class IdentityPatch:
    """Changes sent to the identity provider for one user."""

    email: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


def is_removal(value: Any) -> bool:
    """Whether a metadata patch value means 'delete this key'."""
    return value is None or value == ""


def merge_metadata(current: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    """
    Merge a metadata patch into existing metadata.

    New keys are added, existing keys overwritten, and keys whose patch value
    is None or an empty string are removed.
    """
    merged = dict(current or {})
    for key, value in patch.items():
        if is_removal(value):
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged
