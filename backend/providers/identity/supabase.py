"""
Supabase Identity Provider.

Resolves bearer tokens and manages identities through Supabase Auth (GoTrue).
Administrative calls use the service role key when it is configured; user
self-updates go straight to the GoTrue /user endpoint with the caller's token.
"""

import logging
from datetime import datetime
from typing import Any

import httpx
from supabase import AsyncClient, AsyncSupabaseException, create_async_client
from supabase.lib.client_options import AsyncClientOptions
from supabase_auth.errors import AuthApiError, AuthError, AuthRetryableError

from backend.core.config import is_placeholder
from backend.models.profile import Identity, IdentityPatch
from backend.providers.identity.base import (
    IdentityCapability,
    IdentityProvider,
    IdentityProviderError,
    IdentityProviderUnavailableError,
    InvalidCredentialsError,
)

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = (
    "Supabase is not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY "
    "in environment variables."
)


def map_supabase_user(user: Any) -> Identity:
    """Map a Supabase user object (or its JSON form) to an Identity."""
    if isinstance(user, dict):
        get = user.get
    else:
        def get(name: str, default: Any = None) -> Any:
            return getattr(user, name, default)

    return Identity(
        id=str(get("id")),
        email=get("email") or None,
        email_confirmed_at=_as_datetime(get("email_confirmed_at")),
        created_at=_as_datetime(get("created_at")),
        updated_at=_as_datetime(get("updated_at")),
        user_metadata=dict(get("user_metadata") or {}),
    )


def _as_datetime(value: Any) -> datetime | str | None:
    # Empty strings come back from GoTrue for never-set timestamps
    if value in ("", None):
        return None
    return value


class SupabaseAdminCapability(IdentityCapability):
    """Identity writes through the service role key."""

    def __init__(self, provider: "SupabaseIdentityProvider") -> None:
        self._provider = provider

    @property
    def elevated(self) -> bool:
        return True

    async def update(self, identity_id: str, patch: IdentityPatch) -> Identity:
        attributes: dict[str, Any] = {}
        if patch.email is not None:
            attributes["email"] = patch.email
        if patch.metadata is not None:
            attributes["user_metadata"] = patch.metadata

        client = await self._provider.get_admin_client()
        try:
            response = await client.auth.admin.update_user_by_id(identity_id, attributes)
        except AuthRetryableError as e:
            raise IdentityProviderUnavailableError(str(e), "supabase") from e
        except AuthError as e:
            raise IdentityProviderError(str(e) or "Identity update failed", "supabase") from e

        if response is None or response.user is None:
            raise IdentityProviderError("Identity update returned no user", "supabase")
        return map_supabase_user(response.user)

    async def delete(self, identity_id: str) -> None:
        client = await self._provider.get_admin_client()
        try:
            await client.auth.admin.delete_user(identity_id)
        except AuthRetryableError as e:
            raise IdentityProviderUnavailableError(str(e), "supabase") from e
        except AuthError as e:
            raise IdentityProviderError(str(e) or "Identity deletion failed", "supabase") from e


class SupabaseUserCapability(IdentityCapability):
    """Identity writes acting with the caller's own access token."""

    def __init__(self, provider: "SupabaseIdentityProvider", token: str) -> None:
        self._provider = provider
        self._token = token

    @property
    def elevated(self) -> bool:
        return False

    async def update(self, identity_id: str, patch: IdentityPatch) -> Identity:
        body: dict[str, Any] = {}
        if patch.email is not None:
            body["email"] = patch.email
        if patch.metadata is not None:
            # GoTrue calls user_metadata "data" on the self-service endpoint
            body["data"] = patch.metadata

        try:
            response = await self._provider.http_client.put(
                f"{self._provider.auth_url}/user",
                json=body,
                headers={
                    "apikey": self._provider.anon_key,
                    "Authorization": f"Bearer {self._token}",
                },
                timeout=self._provider.timeout,
            )
        except httpx.TransportError as e:
            raise IdentityProviderUnavailableError(str(e), "supabase") from e

        if response.status_code >= 500:
            raise IdentityProviderUnavailableError(
                f"Supabase Auth returned {response.status_code}", "supabase"
            )
        if response.status_code >= 400:
            raise IdentityProviderError(_error_text(response), "supabase")

        payload = response.json()
        user = payload.get("user", payload) if isinstance(payload, dict) else payload
        updated = map_supabase_user(user)
        if updated.id != identity_id:
            raise IdentityProviderError("Token does not belong to the target identity", "supabase")
        return updated

    async def delete(self, identity_id: str) -> None:
        raise IdentityProviderError(
            "Deleting an identity requires SUPABASE_SERVICE_ROLE_KEY", "supabase"
        )


def _error_text(response: httpx.Response) -> str:
    """Extract GoTrue's error message from a failed response."""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict):
        for key in ("msg", "message", "error_description", "error"):
            if data.get(key):
                return str(data[key])
    return f"HTTP {response.status_code}"


class SupabaseIdentityProvider(IdentityProvider):
    """
    Supabase Auth-based identity provider.

    Clients are created lazily on first use and reused for the lifetime of
    the provider; one instance is owned by the application container.
    """

    def __init__(
        self,
        supabase_url: str,
        anon_key: str,
        service_role_key: str = "",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        """
        Initialize the Supabase identity provider.

        Args:
            supabase_url: Supabase project URL
            anon_key: Supabase anonymous key
            service_role_key: Optional service role key for admin calls
            http_client: Shared HTTP client for GoTrue REST calls
            timeout: Request timeout in seconds
        """
        self._url = (supabase_url or "").rstrip("/")
        self._anon_key = anon_key
        self._service_role_key = service_role_key
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self.timeout = timeout
        self._client: AsyncClient | None = None
        self._admin_client: AsyncClient | None = None

    @property
    def provider_name(self) -> str:
        return "supabase"

    @property
    def configured(self) -> bool:
        return not is_placeholder(self._url) and not is_placeholder(self._anon_key)

    @property
    def admin_enabled(self) -> bool:
        return self.configured and not is_placeholder(self._service_role_key)

    @property
    def auth_url(self) -> str:
        return f"{self._url}/auth/v1"

    @property
    def anon_key(self) -> str:
        return self._anon_key

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        return self._http_client

    def _ensure_configured(self) -> None:
        if not self.configured:
            raise IdentityProviderUnavailableError(NOT_CONFIGURED_MESSAGE, self.provider_name)

    async def get_client(self) -> AsyncClient:
        """Get or create the anon-key Supabase client."""
        self._ensure_configured()
        if self._client is None:
            try:
                self._client = await create_async_client(self._url, self._anon_key)
            except AsyncSupabaseException as e:
                logger.error(f"Supabase client could not be created: {e}")
                raise IdentityProviderUnavailableError(str(e), self.provider_name) from e
        return self._client

    async def get_admin_client(self) -> AsyncClient:
        """Get or create the service-role Supabase client."""
        if not self.admin_enabled:
            raise IdentityProviderError(
                "SUPABASE_SERVICE_ROLE_KEY is not configured", self.provider_name
            )
        if self._admin_client is None:
            try:
                self._admin_client = await create_async_client(
                    self._url,
                    self._service_role_key,
                    options=AsyncClientOptions(
                        auto_refresh_token=False,
                        persist_session=False,
                    ),
                )
            except AsyncSupabaseException as e:
                logger.error(f"Supabase admin client could not be created: {e}")
                raise IdentityProviderUnavailableError(str(e), self.provider_name) from e
        return self._admin_client

    async def resolve(self, token: str) -> Identity:
        client = await self.get_client()
        try:
            user_response = await client.auth.get_user(token)
        except AuthRetryableError as e:
            logger.error(f"Supabase Auth unreachable: {e}")
            raise IdentityProviderUnavailableError(str(e), self.provider_name) from e
        except AuthApiError as e:
            if (getattr(e, "status", None) or 0) >= 500:
                logger.error(f"Supabase Auth error {e.status}: {e}")
                raise IdentityProviderUnavailableError(str(e), self.provider_name) from e
            raise InvalidCredentialsError("Invalid or expired token", self.provider_name) from e
        except AuthError as e:
            raise InvalidCredentialsError("Invalid or expired token", self.provider_name) from e
        except httpx.TransportError as e:
            logger.error(f"Supabase Auth unreachable: {e}")
            raise IdentityProviderUnavailableError(str(e), self.provider_name) from e

        if user_response is None or user_response.user is None:
            raise InvalidCredentialsError("Invalid or expired token", self.provider_name)
        return map_supabase_user(user_response.user)

    def capability(self, token: str) -> IdentityCapability:
        self._ensure_configured()
        if self.admin_enabled:
            return SupabaseAdminCapability(self)
        return SupabaseUserCapability(self, token)

    async def close(self) -> None:
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
        self._http_client = None
        self._client = None
        self._admin_client = None
        logger.info("SupabaseIdentityProvider closed")
