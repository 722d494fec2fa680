"""
Task board dashboard.

Builds the Dash kanban app. The app talks to the task board REST API over
HTTP like any other client, so it can run mounted inside the FastAPI process
(see backend.main.mount_dashboard) or on its own against a remote API.
"""

from functools import partial
from typing import Optional

import dash
import dash_bootstrap_components as dbc

from frontend.constants import API_BASE_URL, API_TIMEOUT_SECONDS
from frontend.services.api import ApiClient

APP_TITLE = "Task Board"
APP_DESCRIPTION = "Personal kanban board backed by Supabase"

# Stylesheets served from the CDN even when Dash serves its own assets locally
STYLESHEETS = [dbc.themes.BOOTSTRAP, dbc.icons.FONT_AWESOME]


def create_dash_app(
    requests_pathname_prefix: str = "/dashboard/",
    api_base_url: Optional[str] = None,
    api_timeout: float = API_TIMEOUT_SECONDS,
    serve_locally: bool = True,
) -> dash.Dash:
    """
    Build the kanban dashboard.

    Args:
        requests_pathname_prefix: URL prefix the app is served under.
        api_base_url: Task board API root, including ``/api``. Defaults to
            TASKBOARD_API_URL.
        api_timeout: Per-request timeout for API calls, in seconds.
        serve_locally: Whether Dash serves its JS bundles itself.

    Returns:
        Dash app with layout and callbacks registered.
    """
    app = dash.Dash(
        __name__,
        title=APP_TITLE,
        update_title=None,
        external_stylesheets=STYLESHEETS,
        requests_pathname_prefix=requests_pathname_prefix,
        serve_locally=serve_locally,
        # Task cards and their buttons only exist once the board is rendered
        suppress_callback_exceptions=True,
        meta_tags=[
            {"name": "viewport", "content": "width=device-width, initial-scale=1"},
            {"name": "description", "content": APP_DESCRIPTION},
        ],
    )
    app.server.config["TASKBOARD_API_URL"] = api_base_url or API_BASE_URL

    from frontend.callbacks import register_callbacks
    from frontend.layout import create_layout

    app.layout = create_layout()
    register_callbacks(
        app,
        partial(ApiClient, app.server.config["TASKBOARD_API_URL"], timeout=api_timeout),
    )
    return app
