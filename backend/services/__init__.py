"""
Application services module.

Contains business logic services for the task board application.
"""

from backend.services.auth_service import AuthService
from backend.services.profile_service import AccountDeletion, ProfileService
from backend.services.task_service import TaskService

__all__ = [
    "AccountDeletion",
    "AuthService",
    "ProfileService",
    "TaskService",
]
