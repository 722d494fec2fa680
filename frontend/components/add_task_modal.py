"""
Add Task Modal Component.

Form for creating a task. The title is checked locally before any request
is made; everything else is validated by the API.
"""

from typing import Any, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from frontend.constants import DEFAULT_STATUS, LAYOUT, MESSAGES, STATUS_OPTIONS


def build_task_payload(
    title: Optional[str],
    description: Optional[str],
    status: Optional[str],
    due_date: Optional[str],
) -> tuple[Optional[dict[str, Any]], Optional[str]]:
    """
    Build the create-task request body from form values.

    Returns:
        (payload, None) when the form is valid, (None, error message) otherwise.
    """
    title = (title or "").strip()
    if not title:
        return None, MESSAGES["title_required"]

    payload: dict[str, Any] = {
        "title": title,
        "description": (description or "").strip() or None,
        "status": status or DEFAULT_STATUS,
        "due_date": due_date or None,
    }
    return payload, None


def create_add_task_modal() -> dbc.Modal:
    """Create the add-task modal dialog."""
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("Add New Task")),
            dbc.ModalBody(
                [
                    html.Div(id="div-add-task-error"),
                    dbc.Label("Title *", html_for="input-task-title"),
                    dbc.Input(
                        id="input-task-title",
                        type="text",
                        placeholder="Enter task title",
                        className="mb-3",
                    ),
                    dbc.Label("Description", html_for="textarea-task-description"),
                    dbc.Textarea(
                        id="textarea-task-description",
                        placeholder="Enter task description (optional)",
                        rows=LAYOUT["DESCRIPTION_TEXTAREA_ROWS"],
                        className="mb-3",
                    ),
                    dbc.Row(
                        [
                            dbc.Col(
                                [
                                    dbc.Label("Status", html_for="select-task-status"),
                                    dbc.Select(
                                        id="select-task-status",
                                        options=STATUS_OPTIONS,
                                        value=DEFAULT_STATUS,
                                    ),
                                ],
                                md=6,
                            ),
                            dbc.Col(
                                [
                                    dbc.Label("Due Date", html_for="datepicker-task-due"),
                                    dcc.DatePickerSingle(
                                        id="datepicker-task-due",
                                        clearable=True,
                                        display_format="YYYY-MM-DD",
                                        className="d-block",
                                    ),
                                ],
                                md=6,
                            ),
                        ],
                        className="g-3",
                    ),
                ]
            ),
            dbc.ModalFooter(
                [
                    dbc.Button("Cancel", id="btn-cancel-task", color="secondary", outline=True),
                    dbc.Button(
                        [html.I(className="fas fa-plus me-2"), "Create Task"],
                        id="btn-create-task",
                        color="primary",
                    ),
                ]
            ),
        ],
        id="modal-add-task",
        is_open=False,
    )
