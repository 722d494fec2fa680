"""
Identity Provider base abstractions.

Defines the provider-agnostic interface used by the access gate and the
profile service. Concrete adapters (Supabase, in-memory) implement
IdentityProvider and hand out IdentityCapability handles for writes.
"""

from abc import ABC, abstractmethod

from backend.models.profile import Identity, IdentityPatch


class IdentityProviderError(Exception):
    """Base exception for identity provider errors."""

    def __init__(self, message: str, provider: str | None = None):
        self.provider = provider
        super().__init__(message)


class InvalidCredentialsError(IdentityProviderError):
    """Raised when a bearer token does not resolve to a user."""

    pass


class IdentityProviderUnavailableError(IdentityProviderError):
    """
    Raised when the provider cannot be reached or is not configured.

    Distinct from InvalidCredentialsError so operators can tell
    "provider down" from "bad token".
    """

    pass


class IdentityCapability(ABC):
    """
    Write access to identities, resolved once per operation.

    An elevated capability uses the administrative credential; a user
    capability acts with the caller's own token and cannot delete identities.
    """

    @property
    @abstractmethod
    def elevated(self) -> bool:
        """Whether this capability uses the administrative credential."""
        ...

    @abstractmethod
    async def update(self, identity_id: str, patch: IdentityPatch) -> Identity:
        """
        Apply email/metadata changes to an identity.

        Raises:
            IdentityProviderError: If the provider rejects the update
            IdentityProviderUnavailableError: If the provider is unreachable
        """
        ...

    @abstractmethod
    async def delete(self, identity_id: str) -> None:
        """
        Delete an identity.

        Raises:
            IdentityProviderError: If deletion fails or is not permitted
        """
        ...


class IdentityProvider(ABC):
    """Abstract base class for identity providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @property
    @abstractmethod
    def admin_enabled(self) -> bool:
        """Whether an administrative credential is configured."""
        ...

    @abstractmethod
    async def resolve(self, token: str) -> Identity:
        """
        Resolve a bearer token to an identity.

        Raises:
            InvalidCredentialsError: If the token is invalid or expired
            IdentityProviderUnavailableError: If the provider is unreachable
                or misconfigured
        """
        ...

    @abstractmethod
    def capability(self, token: str) -> IdentityCapability:
        """
        Return the write capability for this request.

        Prefers the administrative credential when configured and falls back
        to the caller's own token otherwise.
        """
        ...

    async def close(self) -> None:
        """Clean up resources."""
        return None
