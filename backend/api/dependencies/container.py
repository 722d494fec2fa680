"""
Container-backed FastAPI dependencies.

The application's Container lives on ``app.state.container``; these
dependencies read it from the request so tests can build an app around a
container holding fakes.
"""

from fastapi import Depends, Request

from backend.core.config import Settings
from backend.core.container import Container
from backend.services.auth_service import AuthService
from backend.services.profile_service import ProfileService
from backend.services.task_service import TaskService


def get_container_dep(request: Request) -> Container:
    """Return the container attached to the running application."""
    return request.app.state.container


def get_settings_dep(container: Container = Depends(get_container_dep)) -> Settings:
    """FastAPI dependency for getting settings."""
    return container.settings


def get_auth_service_dep(container: Container = Depends(get_container_dep)) -> AuthService:
    """FastAPI dependency for getting the access gate."""
    return container.get_auth_service()


def get_task_service_dep(container: Container = Depends(get_container_dep)) -> TaskService:
    """
    FastAPI dependency for getting the task service.

    Usage:
        @router.get("/tasks")
        async def list_tasks(
            service: TaskService = Depends(get_task_service_dep),
        ):
            ...
    """
    return container.get_task_service()


def get_profile_service_dep(
    container: Container = Depends(get_container_dep),
) -> ProfileService:
    """FastAPI dependency for getting the profile service."""
    return container.get_profile_service()
