"""
Authentication service backed by the configured identity provider.
"""

import logging

from backend.core.exceptions import ServiceUnavailableError, UnauthenticatedError
from backend.models.profile import AuthContext
from backend.providers.identity import (
    IdentityProvider,
    IdentityProviderUnavailableError,
    InvalidCredentialsError,
)

logger = logging.getLogger(__name__)

MISSING_HEADER_MESSAGE = (
    "Missing or invalid Authorization header. Expected format: Bearer <token>"
)
INVALID_TOKEN_MESSAGE = "Invalid or expired token"


class AuthService:
    """Access gate: turns a bearer credential into an AuthContext."""

    def __init__(self, identity_provider: IdentityProvider) -> None:
        self._identity = identity_provider

    @staticmethod
    def extract_token(authorization: str | None) -> str:
        """
        Extract the bearer token from an Authorization header value.

        Raises:
            UnauthenticatedError: If the header is absent, not a Bearer
                credential, or carries an empty token.
        """
        if not authorization:
            raise UnauthenticatedError(MISSING_HEADER_MESSAGE)
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer":
            raise UnauthenticatedError(MISSING_HEADER_MESSAGE)
        token = token.strip()
        if not token:
            raise UnauthenticatedError("Token is missing")
        return token

    async def authenticate(self, token: str) -> AuthContext:
        """
        Resolve a bearer token against the identity provider.

        Raises:
            UnauthenticatedError: If the token does not resolve to a user.
            ServiceUnavailableError: If the provider is down or misconfigured.
        """
        try:
            identity = await self._identity.resolve(token)
        except InvalidCredentialsError as e:
            raise UnauthenticatedError(INVALID_TOKEN_MESSAGE) from e
        except IdentityProviderUnavailableError as e:
            logger.error(f"Identity provider unavailable during authentication: {e}")
            raise ServiceUnavailableError(
                "Authentication service is unavailable",
                details=str(e),
            ) from e

        return AuthContext(identity=identity, token=token)
