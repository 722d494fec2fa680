"""
In-memory Identity Provider implementation.

Keeps identities and their access tokens in process memory. Used for offline
development (storage.provider: memory) and as a deterministic test double.
"""

import logging
import uuid
from datetime import datetime, timezone

from backend.models.profile import Identity, IdentityPatch, merge_metadata
from backend.providers.identity.base import (
    IdentityCapability,
    IdentityProvider,
    IdentityProviderError,
    IdentityProviderUnavailableError,
    InvalidCredentialsError,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryIdentityCapability(IdentityCapability):
    """Write access to the in-memory identity table."""

    def __init__(self, provider: "InMemoryIdentityProvider", token: str, elevated: bool):
        self._provider = provider
        self._token = token
        self._elevated = elevated

    @property
    def elevated(self) -> bool:
        return self._elevated

    async def update(self, identity_id: str, patch: IdentityPatch) -> Identity:
        self._provider.check_available()
        if not self._elevated:
            owner = self._provider.tokens.get(self._token)
            if owner != identity_id:
                raise IdentityProviderError("Token does not belong to the target identity", "memory")

        identity = self._provider.identities.get(identity_id)
        if identity is None:
            raise IdentityProviderError(f"User '{identity_id}' not found", "memory")

        changes: dict = {"updated_at": _now()}
        if patch.email is not None:
            changes["email"] = patch.email
        if patch.metadata is not None:
            changes["user_metadata"] = merge_metadata(identity.user_metadata, patch.metadata)

        updated = identity.model_copy(update=changes)
        self._provider.identities[identity_id] = updated
        return updated

    async def delete(self, identity_id: str) -> None:
        self._provider.check_available()
        if not self._elevated:
            raise IdentityProviderError("Deleting an identity requires the admin credential", "memory")
        if self._provider.identities.pop(identity_id, None) is None:
            raise IdentityProviderError(f"User '{identity_id}' not found", "memory")
        for token in [t for t, uid in self._provider.tokens.items() if uid == identity_id]:
            del self._provider.tokens[token]


class InMemoryIdentityProvider(IdentityProvider):
    """
    Token-to-identity map held in memory.

    Example:
        provider = InMemoryIdentityProvider(admin_enabled=True)
        identity = provider.register("ada@example.com", token="token-ada")
        assert await provider.resolve("token-ada") == identity
    """

    def __init__(self, admin_enabled: bool = False) -> None:
        self.identities: dict[str, Identity] = {}
        self.tokens: dict[str, str] = {}
        self._admin_enabled = admin_enabled
        self.available = True

    @property
    def provider_name(self) -> str:
        return "memory"

    @property
    def admin_enabled(self) -> bool:
        return self._admin_enabled

    def check_available(self) -> None:
        if not self.available:
            raise IdentityProviderUnavailableError("Identity provider is unavailable", "memory")

    def register(
        self,
        email: str,
        token: str | None = None,
        metadata: dict | None = None,
        user_id: str | None = None,
    ) -> Identity:
        """
        Create an identity and issue an access token for it.

        Args:
            email: Email address
            token: Access token to issue (random if omitted)
            metadata: Initial user metadata
            user_id: Fixed identifier (random UUID if omitted)

        Returns:
            The created Identity.
        """
        now = _now()
        identity = Identity(
            id=user_id or str(uuid.uuid4()),
            email=email,
            email_confirmed_at=now,
            created_at=now,
            updated_at=now,
            user_metadata=dict(metadata or {}),
        )
        self.identities[identity.id] = identity
        self.tokens[token or uuid.uuid4().hex] = identity.id
        logger.debug(f"Registered in-memory identity {identity.id}")
        return identity

    def token_for(self, identity_id: str) -> str | None:
        for token, uid in self.tokens.items():
            if uid == identity_id:
                return token
        return None

    async def resolve(self, token: str) -> Identity:
        self.check_available()
        identity_id = self.tokens.get(token)
        identity = self.identities.get(identity_id) if identity_id else None
        if identity is None:
            raise InvalidCredentialsError("Invalid or expired token", self.provider_name)
        return identity

    def capability(self, token: str) -> IdentityCapability:
        return InMemoryIdentityCapability(self, token, elevated=self._admin_enabled)
