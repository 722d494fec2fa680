"""
Task Store package.

Provides abstractions and implementations for persisting task rows.
"""

from backend.providers.store.base import (
    TaskRow,
    TaskStore,
    TaskStoreError,
    TaskStoreUnavailableError,
)
from backend.providers.store.memory import InMemoryTaskStore
from backend.providers.store.supabase import SupabaseTaskStore

__all__ = [
    "TaskRow",
    "TaskStore",
    "TaskStoreError",
    "TaskStoreUnavailableError",
    "InMemoryTaskStore",
    "SupabaseTaskStore",
]
