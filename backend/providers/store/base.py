"""
Task Store base abstractions.

All concrete task store adapters (Supabase/PostgREST, in-memory) implement
TaskStore. Every call carries the caller's bearer token and user id: the
application filters by owner itself and the store may enforce row-level
ownership independently with the token.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

TaskRow = dict[str, Any]


class TaskStoreError(Exception):
    """Base exception for task store errors."""

    def __init__(self, message: str, provider: str | None = None):
        self.provider = provider
        super().__init__(message)


class TaskStoreUnavailableError(TaskStoreError):
    """Raised when the task store cannot be reached or is not configured."""

    pass


class TaskStore(ABC):
    """Abstract base class for task stores."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    async def insert(self, token: str, record: TaskRow) -> TaskRow:
        """
        Insert one task row.

        Args:
            token: Caller's bearer token
            record: Column values (user_id, title, description, status, due_date)

        Returns:
            The stored row including server-assigned id and timestamps

        Raises:
            TaskStoreError: If the insert is rejected
            TaskStoreUnavailableError: If the store is unreachable
        """
        ...

    @abstractmethod
    async def list(
        self,
        token: str,
        user_id: str,
        status: Optional[str] = None,
    ) -> list[TaskRow]:
        """
        List the caller's tasks, newest created first.

        Args:
            token: Caller's bearer token
            user_id: Owner to filter by
            status: Optional status filter
        """
        ...

    @abstractmethod
    async def update(
        self,
        token: str,
        user_id: str,
        task_id: str,
        changes: TaskRow,
    ) -> Optional[TaskRow]:
        """
        Update one owned task.

        Returns:
            The updated row, or None when no owned row matches task_id
        """
        ...

    @abstractmethod
    async def delete(self, token: str, user_id: str, task_id: str) -> Optional[TaskRow]:
        """
        Delete one owned task.

        Returns:
            The row as it was before deletion, or None when no owned row matches
        """
        ...

    @abstractmethod
    async def delete_all(self, token: str, user_id: str) -> int:
        """
        Delete every task owned by user_id.

        Returns:
            Number of rows deleted
        """
        ...

    async def close(self) -> None:
        """Clean up resources."""
        return None
