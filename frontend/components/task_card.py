"""
Task Card Component.

Renders a single task with its due date, overdue marker and the controls
that replace drag-and-drop: move to another column, reorder within the
column and delete.
"""

from datetime import datetime, timezone
from typing import Any, Optional

import dash_bootstrap_components as dbc
from dash import html

from frontend.constants import COLUMNS, NO_DUE_DATE


def parse_due_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 date/datetime string; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(value: Optional[str]) -> str:
    """Format a due date like 'Dec 20, 2024'."""
    parsed = parse_due_date(value)
    if parsed is None:
        return NO_DUE_DATE
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def is_overdue(task: dict[str, Any], now: Optional[datetime] = None) -> bool:
    """A task is overdue when its due date has passed and it is not completed."""
    due = parse_due_date(task.get("due_date"))
    if due is None or task.get("status") == "completed":
        return False
    return due < (now or datetime.now(timezone.utc))


def _move_buttons(task: dict[str, Any]) -> list[dbc.Button]:
    """One button per column the task is not already in."""
    return [
        dbc.Button(
            column["title"],
            id={"type": "btn-move", "task": task["id"], "column": column["id"]},
            color=column["color"],
            outline=True,
            size="sm",
            className="me-1",
            title=f"Move to {column['title']}",
        )
        for column in COLUMNS
        if column["id"] != task.get("status")
    ]


def create_task_card(task: dict[str, Any]) -> dbc.Card:
    """
    Create a card for one task.

    Args:
        task: Task dict as returned by the API.

    Returns:
        Bootstrap Card component.
    """
    overdue = is_overdue(task)
    task_id = task["id"]

    footer = [
        html.Span(
            [html.I(className="fas fa-calendar me-1"), format_date(task.get("due_date"))],
            className="small " + ("text-danger fw-semibold" if overdue else "text-muted"),
        ),
    ]
    if overdue:
        footer.append(dbc.Badge("Overdue", color="danger", className="ms-2"))

    return dbc.Card(
        dbc.CardBody(
            [
                html.Div(
                    [
                        html.H6(task.get("title", ""), className="card-title mb-1"),
                        dbc.ButtonGroup(
                            [
                                dbc.Button(
                                    html.I(className="fas fa-arrow-up"),
                                    id={"type": "btn-reorder", "task": task_id, "offset": -1},
                                    color="link",
                                    size="sm",
                                    className="p-0 me-2",
                                ),
                                dbc.Button(
                                    html.I(className="fas fa-arrow-down"),
                                    id={"type": "btn-reorder", "task": task_id, "offset": 1},
                                    color="link",
                                    size="sm",
                                    className="p-0 me-2",
                                ),
                                dbc.Button(
                                    html.I(className="fas fa-trash"),
                                    id={"type": "btn-delete", "task": task_id},
                                    color="link",
                                    size="sm",
                                    className="p-0 text-danger",
                                ),
                            ],
                        ),
                    ],
                    className="d-flex justify-content-between align-items-start",
                ),
                html.P(task["description"], className="small text-muted mb-2")
                if task.get("description")
                else None,
                html.Div(footer, className="d-flex align-items-center mb-2"),
                html.Div(_move_buttons(task)),
            ]
        ),
        className="mb-2 shadow-sm" + (" border-danger" if overdue else ""),
    )
