"""
Profile API endpoints.
"""

from fastapi import APIRouter, Depends

from backend.api.dependencies.auth import get_auth_context
from backend.api.dependencies.container import get_profile_service_dep
from backend.api.schemas import AccountDeletionResponse, ErrorResponse, ProfileResponse
from backend.models.profile import AuthContext, ProfileUpdate
from backend.services.profile_service import ProfileService

router = APIRouter(
    prefix="/profile",
    tags=["Profile"],
    responses={
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)


@router.get("", response_model=ProfileResponse)
async def get_profile(
    ctx: AuthContext = Depends(get_auth_context),
    service: ProfileService = Depends(get_profile_service_dep),
) -> ProfileResponse:
    """Get the caller's profile."""
    profile = await service.get(ctx)
    return ProfileResponse(message="Profile fetched successfully", profile=profile)


@router.put(
    "",
    response_model=ProfileResponse,
    responses={400: {"model": ErrorResponse}},
)
async def update_profile(
    payload: ProfileUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    service: ProfileService = Depends(get_profile_service_dep),
) -> ProfileResponse:
    """Update email and/or merge metadata."""
    profile = await service.update(ctx, payload)
    return ProfileResponse(message="Profile updated successfully", profile=profile)


@router.delete(
    "",
    response_model=AccountDeletionResponse,
    response_model_exclude_none=True,
)
async def delete_account(
    ctx: AuthContext = Depends(get_auth_context),
    service: ProfileService = Depends(get_profile_service_dep),
) -> AccountDeletionResponse:
    """
    Delete the caller's tasks and, when the service role key is configured,
    the account itself.
    """
    outcome = await service.delete_account(ctx)
    return AccountDeletionResponse(
        message=outcome.message,
        account_deleted=outcome.account_deleted,
        tasks_deleted=outcome.tasks_deleted,
        note=outcome.note,
    )
