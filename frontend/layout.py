"""
Dashboard Layout Definition.

Defines the main layout structure for the Dash application.

Layout Structure:
- Header: title, access-token sign-in, profile and add-task buttons
- Board: one column per task status
- Overlays: add-task modal and profile side panel
"""

from typing import Any

import dash_bootstrap_components as dbc
from dash import dcc, html

from frontend.components.add_task_modal import create_add_task_modal
from frontend.components.profile_panel import create_profile_panel
from frontend.components.task_card import create_task_card
from frontend.constants import COLUMNS, LAYOUT, TICK_INTERVAL_MS


def create_layout() -> dbc.Container:
    """
    Create the main dashboard layout.

    Returns:
        Dashboard layout as a Bootstrap Container.
    """
    return dbc.Container(
        [
            # Data stores for state management
            dcc.Store(id="store-token", storage_type="session"),
            dcc.Store(id="store-board", storage_type="memory"),
            dcc.Store(id="store-profile", storage_type="memory"),
            dcc.Store(id="store-profile-message", storage_type="memory"),
            # Expires transient messages
            dcc.Interval(id="interval-tick", interval=TICK_INTERVAL_MS, n_intervals=0),
            # Header
            _create_header(),
            html.Hr(className="my-2"),
            _create_sign_in_bar(),
            html.Div(id="div-board-error", className="mt-3"),
            dcc.Loading(
                id="loading-board",
                type="default",
                children=html.Div(id="div-board", className="mt-3"),
            ),
            create_add_task_modal(),
            create_profile_panel(),
        ],
        fluid=True,
        className="py-3",
    )


def _create_header() -> dbc.Row:
    """Create the header section."""
    return dbc.Row(
        [
            dbc.Col(
                [
                    html.H2(
                        [html.I(className="fas fa-columns me-2"), "Task Board"],
                        className="mb-1",
                    ),
                    html.P(id="text-welcome", className="text-muted mb-0"),
                ],
                width="auto",
            ),
            dbc.Col(
                [
                    dbc.Button(
                        [html.I(className="fas fa-plus me-2"), "Add Task"],
                        id="btn-open-add-task",
                        color="primary",
                        className="me-2",
                        disabled=True,
                    ),
                    dbc.Button(
                        [html.I(className="fas fa-user me-2"), "Profile"],
                        id="btn-open-profile",
                        color="secondary",
                        outline=True,
                        disabled=True,
                    ),
                ],
                width="auto",
                className="ms-auto d-flex align-items-center",
            ),
        ],
        className="align-items-center",
    )


def _create_sign_in_bar() -> dbc.Row:
    """Access-token input used in place of an interactive login page."""
    return dbc.Row(
        [
            dbc.Col(
                dbc.InputGroup(
                    [
                        dbc.InputGroupText(html.I(className="fas fa-key")),
                        dbc.Input(
                            id="input-access-token",
                            type="password",
                            placeholder="Paste your Supabase access token",
                        ),
                        dbc.Button("Sign In", id="btn-sign-in", color="primary"),
                        dbc.Button("Sign Out", id="btn-sign-out", color="danger", outline=True),
                    ]
                ),
                md=8,
            ),
        ]
    )


def render_board(columns: dict[str, list[dict[str, Any]]]) -> dbc.Row:
    """
    Render the kanban columns.

    Args:
        columns: Partitioned view, column id -> ordered task list.

    Returns:
        Row with one card per column.
    """
    return dbc.Row(
        [
            dbc.Col(
                dbc.Card(
                    [
                        dbc.CardHeader(
                            html.Div(
                                [
                                    html.Span(column["title"], className="fw-bold"),
                                    dbc.Badge(
                                        str(len(columns.get(column["id"], []))),
                                        color=column["color"],
                                        pill=True,
                                    ),
                                ],
                                className="d-flex justify-content-between align-items-center",
                            )
                        ),
                        dbc.CardBody(
                            [create_task_card(task) for task in columns.get(column["id"], [])]
                            or html.P("No tasks", className="text-muted small text-center"),
                            id=f"column-{column['id']}",
                            style={"minHeight": LAYOUT["COLUMN_MIN_HEIGHT"]},
                        ),
                    ],
                    className="shadow-sm h-100",
                ),
                xs=12,
                md=LAYOUT["COLUMN_WIDTH_MD"],
                className="mb-3",
            )
            for column in COLUMNS
        ],
        className=f"g-{LAYOUT['ROW_GAP']}",
    )
