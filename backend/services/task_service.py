"""
Task service.

Applies task CRUD scoped to the authenticated caller. Payloads arrive already
validated as TaskCreate/TaskUpdate; the checks that depend on the request as
a whole (empty patch, status filter) run here before any store call.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from backend.core.exceptions import (
    NotFoundError,
    ServiceUnavailableError,
    UpstreamError,
    ValidationError,
)
from backend.models.profile import AuthContext
from backend.models.task import STATUS_ERROR_MESSAGE, Task, TaskCreate, TaskStatus, TaskUpdate
from backend.providers.store import TaskStore, TaskStoreError, TaskStoreUnavailableError

logger = logging.getLogger(__name__)

NOTHING_TO_UPDATE_MESSAGE = (
    "At least one field (title, description, status, due_date) must be provided for update"
)


class TaskService:
    """CRUD operations on the caller's tasks."""

    def __init__(self, store: TaskStore) -> None:
        self._store = store

    @contextmanager
    def _store_errors(self, operation: str, ctx: AuthContext) -> Iterator[None]:
        """Translate task store failures into API errors."""
        try:
            yield
        except TaskStoreUnavailableError as e:
            logger.error(f"Task store unavailable while trying to {operation} task for {ctx.user_id}: {e}")
            raise ServiceUnavailableError("Task store is unavailable", details=str(e)) from e
        except TaskStoreError as e:
            logger.error(f"Error trying to {operation} task for {ctx.user_id}: {e}")
            raise UpstreamError(f"Failed to {operation} task", details=str(e)) from e

    @staticmethod
    def parse_status_filter(status: Optional[str]) -> Optional[TaskStatus]:
        """Validate an optional ?status= filter; empty means no filter."""
        if not status:
            return None
        try:
            return TaskStatus.parse(status)
        except ValueError as e:
            raise ValidationError(STATUS_ERROR_MESSAGE) from e

    async def create(self, ctx: AuthContext, payload: TaskCreate) -> Task:
        """Insert a task owned by the caller."""
        with self._store_errors("create", ctx):
            row = await self._store.insert(ctx.token, payload.to_record(ctx.user_id))
        task = Task.model_validate(row)
        logger.info(f"Created task {task.id} for {ctx.user_id}")
        return task

    async def list(self, ctx: AuthContext, status: Optional[str] = None) -> list[Task]:
        """Return the caller's tasks, newest first, optionally filtered by status."""
        status_filter = self.parse_status_filter(status)
        with self._store_errors("fetch", ctx):
            rows = await self._store.list(
                ctx.token,
                ctx.user_id,
                status_filter.value if status_filter else None,
            )
        return [Task.model_validate(row) for row in rows]

    async def update(self, ctx: AuthContext, task_id: str, payload: TaskUpdate) -> Task:
        """Apply a partial update to one of the caller's tasks."""
        if payload.is_empty:
            raise ValidationError(NOTHING_TO_UPDATE_MESSAGE)

        with self._store_errors("update", ctx):
            row = await self._store.update(ctx.token, ctx.user_id, task_id, payload.changes())
        if row is None:
            raise NotFoundError("Task not found or you do not have permission to update it")
        return Task.model_validate(row)

    async def delete(self, ctx: AuthContext, task_id: str) -> Task:
        """Delete one of the caller's tasks and return its prior state."""
        with self._store_errors("delete", ctx):
            row = await self._store.delete(ctx.token, ctx.user_id, task_id)
        if row is None:
            raise NotFoundError("Task not found or you do not have permission to delete it")
        logger.info(f"Deleted task {task_id} for {ctx.user_id}")
        return Task.model_validate(row)
