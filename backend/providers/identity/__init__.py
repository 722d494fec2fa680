"""
Identity Provider package.

Provides abstractions and implementations for resolving bearer tokens and
managing user identities.
"""

from backend.providers.identity.base import (
    IdentityCapability,
    IdentityProvider,
    IdentityProviderError,
    IdentityProviderUnavailableError,
    InvalidCredentialsError,
)
from backend.providers.identity.memory import InMemoryIdentityProvider
from backend.providers.identity.supabase import SupabaseIdentityProvider

__all__ = [
    "IdentityCapability",
    "IdentityProvider",
    "IdentityProviderError",
    "IdentityProviderUnavailableError",
    "InvalidCredentialsError",
    "InMemoryIdentityProvider",
    "SupabaseIdentityProvider",
]
