"""
Dependency Injection Container for the task board service.

Provides lazy initialization of shared resources using lru_cache.
Ensures the identity provider, task store and services are created once per
process and shared across FastAPI dependencies.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

import httpx

from backend.core.config import Settings, get_settings

if TYPE_CHECKING:
    from backend.providers.factory import ProviderBundle
    from backend.providers.identity import IdentityProvider
    from backend.providers.store import TaskStore
    from backend.services.auth_service import AuthService
    from backend.services.profile_service import ProfileService
    from backend.services.task_service import TaskService


class Container:
    """
    Dependency Injection Container.

    Manages lifecycle of shared resources:
    - Settings (configuration)
    - HTTP Client (httpx.AsyncClient)
    - Identity provider and task store
    - Auth, task and profile services

    Usage:
        container = get_container()
        settings = container.settings
        task_service = container.get_task_service()
    """

    def __init__(
        self,
        settings: Settings | None = None,
        providers: "ProviderBundle | None" = None,
    ):
        """
        Initialize the container.

        Args:
            settings: Optional settings override. If None, loads from config.
            providers: Optional pre-built providers (tests inject fakes here).
        """
        self._settings = settings
        self._http_client: httpx.AsyncClient | None = None
        self._providers: "ProviderBundle | None" = providers
        self._auth_service: "AuthService | None" = None
        self._task_service: "TaskService | None" = None
        self._profile_service: "ProfileService | None" = None

    @property
    def settings(self) -> Settings:
        """
        Get the application settings.

        Returns:
            Cached Settings instance.
        """
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def get_http_client(self) -> httpx.AsyncClient:
        """
        Get or create the shared HTTP client.

        The client is lazily initialized on first access.
        Call close_http_client() during shutdown to properly close connections.
        """
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.storage.request_timeout_seconds),
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._http_client

    async def close_http_client(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def get_providers(self) -> "ProviderBundle":
        """
        Get or create the identity provider and task store.

        Uses settings.storage.provider to select Supabase or in-memory adapters.
        """
        if self._providers is None:
            from backend.providers.factory import create_providers

            self._providers = create_providers(self.settings, self.get_http_client())
        return self._providers

    def get_identity_provider(self) -> "IdentityProvider":
        return self.get_providers().identity

    def get_task_store(self) -> "TaskStore":
        return self.get_providers().store

    async def close_providers(self) -> None:
        """Close the identity provider and task store."""
        if self._providers is not None:
            await self._providers.identity.close()
            await self._providers.store.close()
            self._providers = None

    def get_auth_service(self) -> "AuthService":
        if self._auth_service is None:
            from backend.services.auth_service import AuthService

            self._auth_service = AuthService(self.get_identity_provider())
        return self._auth_service

    def get_task_service(self) -> "TaskService":
        if self._task_service is None:
            from backend.services.task_service import TaskService

            self._task_service = TaskService(self.get_task_store())
        return self._task_service

    def get_profile_service(self) -> "ProfileService":
        if self._profile_service is None:
            from backend.services.profile_service import ProfileService

            self._profile_service = ProfileService(
                self.get_identity_provider(),
                self.get_task_store(),
            )
        return self._profile_service

    async def startup(self) -> None:
        """
        Initialize resources on application startup.

        Called by FastAPI lifespan context manager.
        Pre-initializes critical resources and validates configuration.
        """
        _ = self.settings
        _ = self.get_http_client()
        _ = self.get_providers()

    async def shutdown(self) -> None:
        """
        Clean up resources on application shutdown.

        Called by FastAPI lifespan context manager.
        """
        self._auth_service = None
        self._task_service = None
        self._profile_service = None
        await self.close_providers()
        await self.close_http_client()


# Global container instance using lru_cache for singleton behavior
@lru_cache
def get_container() -> Container:
    """
    Get the cached container instance.

    Uses lru_cache to ensure container is a singleton.
    Call get_container.cache_clear() to reset (useful for testing).
    """
    return Container()


def clear_container_cache() -> None:
    """
    Clear the container cache.

    Useful for testing to reset the container state.
    Also clears the settings cache.
    """
    get_container.cache_clear()
    get_settings.cache_clear()

