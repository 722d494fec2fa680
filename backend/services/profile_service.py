"""
Profile service.

Reads and updates the caller's identity metadata and orchestrates account
deletion across the task store and the identity provider.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from backend.core.exceptions import ServiceUnavailableError, UpstreamError, ValidationError
from backend.models.profile import (
    AuthContext,
    IdentityPatch,
    Profile,
    ProfileUpdate,
    is_removal,
    merge_metadata,
)
from backend.providers.identity import (
    IdentityProvider,
    IdentityProviderError,
    IdentityProviderUnavailableError,
)
from backend.providers.store import TaskStore, TaskStoreError

logger = logging.getLogger(__name__)

NO_CHANGES_MESSAGE = "No changes detected"


@dataclass(frozen=True)
class AccountDeletion:
    """Outcome of an account deletion; data and identity steps reported separately."""

    message: str
    account_deleted: bool
    tasks_deleted: bool = True
    note: Optional[str] = None


class ProfileService:
    """Profile view and account lifecycle for the authenticated caller."""

    def __init__(self, identity_provider: IdentityProvider, store: TaskStore) -> None:
        self._identity = identity_provider
        self._store = store

    async def get(self, ctx: AuthContext) -> Profile:
        """Return the caller's profile."""
        return Profile.from_identity(ctx.identity)

    async def update(self, ctx: AuthContext, payload: ProfileUpdate) -> Profile:
        """
        Update email and/or merge metadata.

        Raises:
            ValidationError: If nothing would change.
            ServiceUnavailableError: If the identity provider is unreachable.
            UpstreamError: If the identity provider rejects the update.
        """
        current = ctx.identity
        email_changed = payload.email is not None and payload.email != current.email

        metadata_patch: Optional[dict] = None
        if payload.metadata is not None:
            merged = merge_metadata(current.user_metadata, payload.metadata)
            if merged != current.user_metadata:
                # Removals travel as explicit nulls so the provider drops the keys
                metadata_patch = {
                    key: None if is_removal(value) else value
                    for key, value in payload.metadata.items()
                }

        if not email_changed and metadata_patch is None:
            raise ValidationError(NO_CHANGES_MESSAGE)

        patch = IdentityPatch(
            email=payload.email if email_changed else None,
            metadata=metadata_patch,
        )

        try:
            capability = self._identity.capability(ctx.token)
            updated = await capability.update(ctx.user_id, patch)
        except IdentityProviderUnavailableError as e:
            logger.error(f"Identity provider unavailable while updating profile {ctx.user_id}: {e}")
            raise ServiceUnavailableError("Authentication service is unavailable", details=str(e)) from e
        except IdentityProviderError as e:
            logger.error(f"Error updating profile {ctx.user_id}: {e}")
            raise UpstreamError("Failed to update profile", details=str(e)) from e

        logger.info(
            f"Updated profile {ctx.user_id} "
            f"(elevated={capability.elevated}, email_changed={email_changed})"
        )
        return Profile.from_identity(updated)

    async def delete_account(self, ctx: AuthContext) -> AccountDeletion:
        """
        Delete the caller's tasks, then their identity when permitted.

        Task deletion is best-effort: the store cascades on identity deletion,
        so a failure here is logged and the identity step still runs.
        """
        tasks_deleted = True
        try:
            count = await self._store.delete_all(ctx.token, ctx.user_id)
            logger.info(f"Deleted {count} tasks for {ctx.user_id}")
        except TaskStoreError as e:
            tasks_deleted = False
            logger.error(f"Error deleting tasks for {ctx.user_id}: {e}")

        try:
            capability = self._identity.capability(ctx.token)
        except IdentityProviderUnavailableError as e:
            raise ServiceUnavailableError("Authentication service is unavailable", details=str(e)) from e

        if not capability.elevated:
            return AccountDeletion(
                message=(
                    "User data deleted successfully. "
                    "Please delete your account from the Supabase dashboard."
                ),
                account_deleted=False,
                tasks_deleted=tasks_deleted,
                note=(
                    "To enable automatic account deletion, "
                    "add SUPABASE_SERVICE_ROLE_KEY to your .env file"
                ),
            )

        try:
            await capability.delete(ctx.user_id)
        except IdentityProviderError as e:
            logger.error(f"Error deleting user account {ctx.user_id}: {e}")
            return AccountDeletion(
                message=(
                    "User data deleted successfully. Account deletion failed - "
                    "please delete it from the Supabase dashboard."
                ),
                account_deleted=False,
                tasks_deleted=tasks_deleted,
            )

        logger.info(f"Deleted user account {ctx.user_id}")
        return AccountDeletion(
            message="Account and all associated data deleted successfully",
            account_deleted=True,
            tasks_deleted=tasks_deleted,
        )
