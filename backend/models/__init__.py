"""
Domain models for tasks and profiles.
"""

from backend.models.profile import (
    AuthContext,
    Identity,
    IdentityPatch,
    Profile,
    ProfileUpdate,
)
from backend.models.task import Task, TaskCreate, TaskStatus, TaskUpdate

__all__ = [
    "AuthContext",
    "Identity",
    "IdentityPatch",
    "Profile",
    "ProfileUpdate",
    "Task",
    "TaskCreate",
    "TaskStatus",
    "TaskUpdate",
]
