"""
Provider Factory.

Creates the identity provider and task store configured in settings.
"""

import logging
from dataclasses import dataclass
from typing import Callable

import httpx

from backend.core.config import Settings, StorageProvider
from backend.providers.identity import (
    IdentityProvider,
    InMemoryIdentityProvider,
    SupabaseIdentityProvider,
)
from backend.providers.store import InMemoryTaskStore, SupabaseTaskStore, TaskStore

logger = logging.getLogger(__name__)


@dataclass
class ProviderBundle:
    """Identity provider and task store that share one backend."""

    identity: IdentityProvider
    store: TaskStore


ProviderFactory = Callable[[Settings, httpx.AsyncClient | None], ProviderBundle]


def _create_supabase_providers(
    settings: Settings,
    http_client: httpx.AsyncClient | None,
) -> ProviderBundle:
    """Create Supabase-backed identity provider and task store."""
    if not settings.supabase_configured:
        logger.warning(
            "Missing or invalid Supabase environment variables. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY; authenticated API calls "
            "will return 503 until they are configured."
        )
    timeout = settings.storage.request_timeout_seconds
    return ProviderBundle(
        identity=SupabaseIdentityProvider(
            supabase_url=settings.supabase_url,
            anon_key=settings.supabase_anon_key,
            service_role_key=settings.supabase_service_role_key,
            http_client=http_client,
            timeout=timeout,
        ),
        store=SupabaseTaskStore(
            supabase_url=settings.supabase_url,
            anon_key=settings.supabase_anon_key,
            table=settings.storage.tasks_table,
            timeout=timeout,
        ),
    )


def _create_memory_providers(
    settings: Settings,
    http_client: httpx.AsyncClient | None,
) -> ProviderBundle:
    """Create in-memory identity provider and task store."""
    logger.info("Using in-memory identity provider and task store")
    return ProviderBundle(
        identity=InMemoryIdentityProvider(admin_enabled=True),
        store=InMemoryTaskStore(),
    )


_PROVIDER_REGISTRY: dict[StorageProvider, ProviderFactory] = {
    StorageProvider.SUPABASE: _create_supabase_providers,
    StorageProvider.MEMORY: _create_memory_providers,
}


def create_providers(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> ProviderBundle:
    """
    Create the providers selected by ``settings.storage.provider``.

    Args:
        settings: Application settings
        http_client: Shared HTTP client passed to adapters that make REST calls

    Returns:
        ProviderBundle with identity provider and task store

    Raises:
        ValueError: If the provider type is not supported
    """
    provider_type = settings.storage.provider
    factory_func = _PROVIDER_REGISTRY.get(provider_type)
    if factory_func is None:
        supported = [p.value for p in _PROVIDER_REGISTRY]
        raise ValueError(
            f"Unsupported storage provider: '{provider_type}'. "
            f"Supported providers: {supported}"
        )
    return factory_func(settings, http_client)
