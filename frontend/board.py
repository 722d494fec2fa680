"""
Kanban board state.

BoardController owns the partitioned view of the caller's tasks and applies
user actions optimistically: the local view changes first, the API call
follows, and a failure either reverts to the snapshot carried by the action
(moves) or re-fetches the whole list (deletes).

The controller holds no UI objects, so it serialises to a plain dict that a
Dash ``dcc.Store`` can keep between callbacks.
"""

import copy
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from frontend.constants import COLUMN_IDS, ERROR_CLEAR_DELAY, MESSAGES
from frontend.services.api import ApiClient, ApiError, describe_error

logger = logging.getLogger(__name__)

Columns = dict[str, list[dict[str, Any]]]


class ActionState(str, Enum):
    """Lifecycle of an optimistic action."""

    APPLIED = "applied"
    CONFIRMED = "confirmed"
    REVERTED = "reverted"
    RESYNCED = "resynced"


@dataclass(frozen=True)
class DragLocation:
    """A position on the board: column id and index within the column."""

    column: str
    index: int


@dataclass
class BoardAction:
    """
    One optimistic change to the board.

    ``snapshot`` is the full partitioned view taken immediately before the
    change was applied; reverting restores it exactly.
    """

    kind: str
    task_id: str
    snapshot: Columns
    source: Optional[DragLocation] = None
    destination: Optional[DragLocation] = None
    state: ActionState = ActionState.APPLIED
    error: Optional[str] = None

    @property
    def crosses_columns(self) -> bool:
        return (
            self.source is not None
            and self.destination is not None
            and self.source.column != self.destination.column
        )

    def confirm(self) -> None:
        self.state = ActionState.CONFIRMED

    def revert(self, error: str) -> Columns:
        """Mark the action reverted and return a copy of its snapshot."""
        self.state = ActionState.REVERTED
        self.error = error
        return copy.deepcopy(self.snapshot)

    def resync(self, error: str) -> None:
        self.state = ActionState.RESYNCED
        self.error = error


def empty_columns() -> Columns:
    return {column_id: [] for column_id in COLUMN_IDS}


def partition(tasks: list[dict[str, Any]]) -> Columns:
    """Split a flat task list into status columns, preserving order."""
    columns = empty_columns()
    for task in tasks:
        status = task.get("status")
        if status in columns:
            columns[status].append(task)
        else:
            logger.warning(f"Ignoring task {task.get('id')} with unknown status {status!r}")
    return columns


class BoardController:
    """
    Board state machine.

    Example:
        board = BoardController(ApiClient(token=token))
        board.fetch()
        board.move(DragLocation("pending", 0), DragLocation("completed", 0))
    """

    def __init__(
        self,
        api: ApiClient,
        clock: Callable[[], float] = time.time,
        error_clear_delay: float = ERROR_CLEAR_DELAY,
        columns: Optional[Columns] = None,
        error: Optional[str] = None,
        error_expires_at: Optional[float] = None,
    ):
        self._api = api
        self._clock = clock
        self._error_clear_delay = error_clear_delay
        self.columns: Columns = columns if columns is not None else empty_columns()
        self._error = error
        self._error_expires_at = error_expires_at
        self.loading = False

    # State

    def snapshot(self) -> Columns:
        return copy.deepcopy(self.columns)

    def find(self, task_id: str) -> Optional[DragLocation]:
        """Locate a task on the board."""
        for column_id, tasks in self.columns.items():
            for index, task in enumerate(tasks):
                if task.get("id") == task_id:
                    return DragLocation(column_id, index)
        return None

    @property
    def count(self) -> int:
        return sum(len(tasks) for tasks in self.columns.values())

    # Errors

    def set_error(self, message: str, transient: bool = True) -> None:
        """Show an error; transient errors expire after the clear delay."""
        self._error = message
        self._error_expires_at = (
            self._clock() + self._error_clear_delay if transient else None
        )

    def clear_error(self) -> None:
        self._error = None
        self._error_expires_at = None

    def current_error(self) -> Optional[str]:
        """The visible error, clearing it first if its delay has elapsed."""
        if (
            self._error is not None
            and self._error_expires_at is not None
            and self._clock() >= self._error_expires_at
        ):
            self.clear_error()
        return self._error

    @staticmethod
    def stored_error(
        data: Optional[dict[str, Any]],
        clock: Callable[[], float] = time.time,
    ) -> Optional[str]:
        """The error held in a serialised board, or None once it has expired."""
        data = data or {}
        error = data.get("error")
        expires_at = data.get("error_expires_at")
        if error is not None and expires_at is not None and clock() >= expires_at:
            return None
        return error

    # Operations

    def fetch(self) -> bool:
        """
        Replace the whole view with the server's task list.

        Returns:
            True on success. On failure the view is left as it was and a
            classified error is shown.
        """
        self.loading = True
        try:
            tasks = self._api.list_tasks()
        except ApiError as e:
            logger.error(f"Error fetching tasks: {e}")
            self.set_error(describe_error(e, MESSAGES["fetch_failed"]), transient=False)
            return False
        finally:
            self.loading = False

        self.columns = partition(tasks)
        self.clear_error()
        return True

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Create a task and append the server's copy to its status column.

        Not optimistic: the board changes only after the server answers.

        Raises:
            ApiError: If the API call fails. The board is unchanged.
        """
        task = self._api.create_task(payload)
        self.columns.setdefault(task.get("status", "pending"), []).append(task)
        return task

    def apply_move(
        self,
        source: DragLocation,
        destination: Optional[DragLocation],
    ) -> Optional[BoardAction]:
        """
        Apply a drag result to the local view.

        Returns:
            The applied BoardAction, or None when the drop is a no-op
            (no destination, or dropped back where it started).
        """
        if destination is None or destination == source:
            return None
        if source.column not in self.columns or destination.column not in self.columns:
            return None

        source_tasks = self.columns[source.column]
        if not 0 <= source.index < len(source_tasks):
            return None

        snapshot = self.snapshot()
        task = source_tasks.pop(source.index)
        if source.column != destination.column:
            task = {**task, "status": destination.column}

        destination_tasks = self.columns[destination.column]
        index = max(0, min(destination.index, len(destination_tasks)))
        destination_tasks.insert(index, task)

        return BoardAction(
            kind="move",
            task_id=task["id"],
            snapshot=snapshot,
            source=source,
            destination=DragLocation(destination.column, index),
        )

    def commit(self, action: BoardAction) -> BoardAction:
        """
        Persist an applied move.

        Same-column reorders are never sent to the server. A failed status
        update restores the action's snapshot and shows a transient error.
        """
        if not action.crosses_columns:
            action.confirm()
            return action

        try:
            self._api.update_task(action.task_id, {"status": action.destination.column})
        except ApiError as e:
            logger.error(f"Error updating task {action.task_id} status: {e}")
            self.columns = action.revert(MESSAGES["move_failed"])
            self.set_error(MESSAGES["move_failed"])
            return action

        action.confirm()
        return action

    def move(
        self,
        source: DragLocation,
        destination: Optional[DragLocation],
    ) -> Optional[BoardAction]:
        """Apply a drag result locally, then persist it."""
        action = self.apply_move(source, destination)
        if action is None:
            return None
        return self.commit(action)

    def move_to(self, task_id: str, column: str) -> Optional[BoardAction]:
        """Move a task to the end of another column."""
        source = self.find(task_id)
        if source is None or column not in self.columns:
            return None
        if column == source.column:
            return None
        return self.move(source, DragLocation(column, len(self.columns[column])))

    def reorder(self, task_id: str, offset: int) -> Optional[BoardAction]:
        """Shift a task up or down within its column."""
        source = self.find(task_id)
        if source is None:
            return None
        index = source.index + offset
        if not 0 <= index < len(self.columns[source.column]):
            return None
        return self.move(source, DragLocation(source.column, index))

    def delete(self, task_id: str) -> Optional[BoardAction]:
        """
        Remove a task locally, then delete it on the server.

        A failed delete re-fetches the list instead of restoring the snapshot,
        and shows a transient error. If the re-fetch fails too, the snapshot
        is restored and the fetch error stays until the next successful fetch.
        """
        location = self.find(task_id)
        if location is None:
            return None

        snapshot = self.snapshot()
        self.columns[location.column].pop(location.index)
        action = BoardAction(kind="delete", task_id=task_id, snapshot=snapshot, source=location)

        try:
            self._api.delete_task(task_id)
        except ApiError as e:
            logger.error(f"Error deleting task {task_id}: {e}")
            action.resync(MESSAGES["delete_failed"])
            if self.fetch():
                self.set_error(MESSAGES["delete_failed"])
            else:
                self.columns = copy.deepcopy(action.snapshot)
            return action

        action.confirm()
        return action

    # Serialisation

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": self.columns,
            "error": self._error,
            "error_expires_at": self._error_expires_at,
        }

    @classmethod
    def from_dict(
        cls,
        data: Optional[dict[str, Any]],
        api: ApiClient,
        clock: Callable[[], float] = time.time,
    ) -> "BoardController":
        data = data or {}
        columns = empty_columns()
        for column_id, tasks in (data.get("columns") or {}).items():
            if column_id in columns:
                columns[column_id] = list(tasks)
        return cls(
            api,
            clock=clock,
            columns=columns,
            error=data.get("error"),
            error_expires_at=data.get("error_expires_at"),
        )
