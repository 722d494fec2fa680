"""
Providers package.

Adapters for the external identity provider and task store.
"""

from backend.providers.factory import ProviderBundle, create_providers

__all__ = ["ProviderBundle", "create_providers"]
