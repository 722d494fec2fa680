"""
Tests for the dependency injection container.
"""

import pytest

from backend.core.config import Settings
from backend.core.container import Container, clear_container_cache, get_container
from backend.providers.identity import InMemoryIdentityProvider
from backend.providers.store import InMemoryTaskStore
from backend.services import AuthService, ProfileService, TaskService


class TestContainer:
    """Tests for Container class."""

    def test_container_settings(self, test_settings: Settings) -> None:
        """Test container provides settings."""
        container = Container(settings=test_settings)
        assert container.settings is test_settings

    def test_container_settings_lazy_load(self) -> None:
        """Test container lazily loads settings if not provided."""
        container = Container()
        assert container.settings is not None

    def test_http_client_singleton(self, test_container: Container) -> None:
        """Test HTTP client is singleton within container."""
        assert test_container.get_http_client() is test_container.get_http_client()

    @pytest.mark.asyncio
    async def test_close_http_client(self, test_container: Container) -> None:
        """Test HTTP client can be closed."""
        test_container.get_http_client()
        await test_container.close_http_client()
        assert test_container._http_client is None

    def test_providers_built_from_settings(self, test_settings: Settings) -> None:
        """Test memory storage settings produce in-memory providers."""
        container = Container(settings=test_settings)
        assert isinstance(container.get_identity_provider(), InMemoryIdentityProvider)
        assert isinstance(container.get_task_store(), InMemoryTaskStore)

    def test_injected_providers_used(
        self,
        test_container: Container,
        identity_provider: InMemoryIdentityProvider,
        task_store: InMemoryTaskStore,
    ) -> None:
        """Test that providers passed to the constructor are used as-is."""
        assert test_container.get_identity_provider() is identity_provider
        assert test_container.get_task_store() is task_store

    def test_services_are_singletons(self, test_container: Container) -> None:
        """Test services are created once per container."""
        assert isinstance(test_container.get_auth_service(), AuthService)
        assert isinstance(test_container.get_task_service(), TaskService)
        assert isinstance(test_container.get_profile_service(), ProfileService)
        assert test_container.get_task_service() is test_container.get_task_service()

    @pytest.mark.asyncio
    async def test_startup_initializes_resources(self, test_container: Container) -> None:
        """Test startup initializes resources."""
        await test_container.startup()

        assert test_container._settings is not None
        assert test_container._http_client is not None
        assert test_container._providers is not None

    @pytest.mark.asyncio
    async def test_shutdown_cleans_up(self, test_container: Container) -> None:
        """Test shutdown releases resources."""
        await test_container.startup()
        test_container.get_task_service()
        await test_container.shutdown()

        assert test_container._http_client is None
        assert test_container._providers is None
        assert test_container._task_service is None


class TestContainerCache:
    """Tests for the process-wide container."""

    def test_get_container_cached(self) -> None:
        """Test that get_container returns the same instance."""
        assert get_container() is get_container()

    def test_clear_container_cache(self) -> None:
        """Test clearing the cache yields a fresh container."""
        first = get_container()
        clear_container_cache()
        assert get_container() is not first
