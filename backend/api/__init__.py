"""
API package.

Exports the main API router that aggregates all endpoints under /api.
"""

from fastapi import APIRouter

from backend.api.endpoints import profile, tasks

api_router = APIRouter()

api_router.include_router(tasks.router)
api_router.include_router(profile.router)

__all__ = ["api_router"]
