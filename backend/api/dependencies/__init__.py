"""
FastAPI dependencies.

Exports the auth gate and the container-backed service providers.
"""

from backend.api.dependencies.auth import get_auth_context, security
from backend.api.dependencies.container import (
    get_auth_service_dep,
    get_container_dep,
    get_profile_service_dep,
    get_settings_dep,
    get_task_service_dep,
)

__all__ = [
    "get_auth_context",
    "get_auth_service_dep",
    "get_container_dep",
    "get_profile_service_dep",
    "get_settings_dep",
    "get_task_service_dep",
    "security",
]
