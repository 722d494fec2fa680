"""
In-memory Task Store implementation.

Holds task rows in process memory with the same contract as the Supabase
store: server-assigned ids and timestamps, owner filtering, newest-first
listing. Used for offline development and tests.
"""

import itertools
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from backend.providers.store.base import (
    TaskRow,
    TaskStore,
    TaskStoreUnavailableError,
)

logger = logging.getLogger(__name__)


class InMemoryTaskStore(TaskStore):
    """
    Dict-backed task store.

    Timestamps are strictly increasing per row so that ``updated_at`` always
    moves forward even when two mutations land within the clock resolution.
    """

    def __init__(self) -> None:
        self._rows: dict[str, TaskRow] = {}
        self._order: dict[str, int] = {}
        self._sequence = itertools.count()
        self._last_timestamp: datetime | None = None
        self.available = True

    @property
    def provider_name(self) -> str:
        return "memory"

    def _check_available(self) -> None:
        if not self.available:
            raise TaskStoreUnavailableError("Task store is unavailable", self.provider_name)

    def _timestamp(self) -> datetime:
        now = datetime.now(timezone.utc)
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    def _owned(self, user_id: str, task_id: str) -> Optional[TaskRow]:
        row = self._rows.get(task_id)
        if row is None or row["user_id"] != user_id:
            return None
        return row

    async def insert(self, token: str, record: TaskRow) -> TaskRow:
        self._check_available()
        now = self._timestamp().isoformat()
        row = {
            "id": str(uuid.uuid4()),
            "description": None,
            "status": "pending",
            "due_date": None,
            **record,
            "created_at": now,
            "updated_at": now,
        }
        self._rows[row["id"]] = row
        self._order[row["id"]] = next(self._sequence)
        return dict(row)

    async def list(
        self,
        token: str,
        user_id: str,
        status: Optional[str] = None,
    ) -> list[TaskRow]:
        self._check_available()
        rows = [
            row
            for row in self._rows.values()
            if row["user_id"] == user_id and (status is None or row["status"] == status)
        ]
        rows.sort(key=lambda r: (r["created_at"], self._order[r["id"]]), reverse=True)
        return [dict(row) for row in rows]

    async def update(
        self,
        token: str,
        user_id: str,
        task_id: str,
        changes: TaskRow,
    ) -> Optional[TaskRow]:
        self._check_available()
        row = self._owned(user_id, task_id)
        if row is None:
            return None
        protected = {"id", "user_id", "created_at", "updated_at"}
        row.update({k: v for k, v in changes.items() if k not in protected})
        row["updated_at"] = self._timestamp().isoformat()
        return dict(row)

    async def delete(self, token: str, user_id: str, task_id: str) -> Optional[TaskRow]:
        self._check_available()
        row = self._owned(user_id, task_id)
        if row is None:
            return None
        del self._rows[task_id]
        self._order.pop(task_id, None)
        return dict(row)

    async def delete_all(self, token: str, user_id: str) -> int:
        self._check_available()
        owned = [task_id for task_id, row in self._rows.items() if row["user_id"] == user_id]
        for task_id in owned:
            del self._rows[task_id]
            self._order.pop(task_id, None)
        logger.debug(f"Deleted {len(owned)} in-memory tasks for {user_id}")
        return len(owned)
