"""
Dash Callbacks for Dashboard Interactivity.

Implements callbacks for:
- Access-token sign in / sign out
- Board loading and optimistic move/reorder/delete
- Task creation through the add-task modal
- Profile view, update and account deletion
- Expiry of transient messages
"""

import logging
import time
from typing import Any, Callable, Optional

import dash
import dash_bootstrap_components as dbc
from dash import ALL, Input, Output, State, callback_context, no_update
from dash.exceptions import PreventUpdate

from frontend.board import BoardController
from frontend.components.add_task_modal import build_task_payload
from frontend.components.profile_panel import (
    METADATA_AVATAR,
    METADATA_NAME,
    build_profile_update,
    render_profile_summary,
)
from frontend.constants import DEFAULT_STATUS, MESSAGES, SUCCESS_CLEAR_DELAY
from frontend.layout import render_board
from frontend.services.api import ApiClient, ApiError, describe_error

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., ApiClient]


def register_callbacks(app: dash.Dash, make_client: ClientFactory = ApiClient) -> None:
    """
    Register all callbacks for the Dash application.

    Args:
        app: Dash application instance.
        make_client: Builds an ApiClient for a token; callbacks never share one.
    """
    _register_board_callback(app, make_client)
    _register_board_render_callbacks(app)
    _register_header_callbacks(app, make_client)
    _register_add_task_callbacks(app, make_client)
    _register_profile_callbacks(app, make_client)
    _register_account_deletion_callbacks(app, make_client)


def _token_output(api: ApiClient, token: Optional[str]) -> Any:
    """None when the client dropped its token on a 401, else no_update."""
    if token and api.token is None:
        return None
    return no_update


def _message(text: str, color: str, expires_in: Optional[float] = None) -> dict[str, Any]:
    return {
        "text": text,
        "color": color,
        "expires_at": time.time() + expires_in if expires_in else None,
    }


def _register_board_callback(app: dash.Dash, make_client: ClientFactory) -> None:
    """Register the callback that owns the board state."""

    @app.callback(
        [
            Output("store-board", "data"),
            Output("store-token", "data"),
        ],
        [
            Input("btn-sign-in", "n_clicks"),
            Input("btn-sign-out", "n_clicks"),
            Input("store-token", "data"),
            Input({"type": "btn-move", "task": ALL, "column": ALL}, "n_clicks"),
            Input({"type": "btn-reorder", "task": ALL, "offset": ALL}, "n_clicks"),
            Input({"type": "btn-delete", "task": ALL}, "n_clicks"),
        ],
        [
            State("input-access-token", "value"),
            State("store-board", "data"),
        ],
        prevent_initial_call=True,
    )
    def sync_board(
        sign_in_clicks: Optional[int],
        sign_out_clicks: Optional[int],
        token: Optional[str],
        move_clicks: list,
        reorder_clicks: list,
        delete_clicks: list,
        token_input: Optional[str],
        board_data: Optional[dict],
    ) -> tuple:
        """Load the board on sign in and apply card actions."""
        trigger = callback_context.triggered_id

        if trigger == "btn-sign-out":
            return None, None

        token_out: Any = no_update
        if trigger == "btn-sign-in":
            token = (token_input or "").strip() or None
            token_out = token

        if not token:
            return None, token_out

        api = make_client(token=token)
        board = BoardController.from_dict(board_data, api)

        if trigger in ("btn-sign-in", "store-token"):
            board.fetch()
        elif isinstance(trigger, dict):
            # Re-rendered cards report n_clicks=None; only real clicks count
            if not callback_context.triggered or not callback_context.triggered[0]["value"]:
                raise PreventUpdate
            kind = trigger.get("type")
            if kind == "btn-move":
                board.move_to(trigger["task"], trigger["column"])
            elif kind == "btn-reorder":
                board.reorder(trigger["task"], int(trigger["offset"]))
            elif kind == "btn-delete":
                board.delete(trigger["task"])
        else:
            raise PreventUpdate

        dropped = _token_output(api, token)
        return board.to_dict(), (dropped if dropped is None else token_out)


def _register_board_render_callbacks(app: dash.Dash) -> None:
    """Register callbacks that render board state."""

    @app.callback(
        Output("div-board", "children"),
        Input("store-board", "data"),
    )
    def update_board(board_data: Optional[dict]) -> Any:
        if not board_data:
            return dbc.Alert(
                "Sign in with your access token to view your tasks.",
                color="info",
                className="text-center",
            )
        return render_board(board_data.get("columns") or {})

    @app.callback(
        Output("div-board-error", "children"),
        [
            Input("store-board", "data"),
            Input("interval-tick", "n_intervals"),
        ],
    )
    def update_board_error(board_data: Optional[dict], n_intervals: int) -> Any:
        """Show the board error until its clear delay has elapsed."""
        if not board_data:
            return None
        error = BoardController.stored_error(board_data)
        if not error:
            return None
        return dbc.Alert(error, color="danger", className="mb-0")


def _register_header_callbacks(app: dash.Dash, make_client: ClientFactory) -> None:
    """Register header button and welcome text callbacks."""

    @app.callback(
        [
            Output("btn-open-add-task", "disabled"),
            Output("btn-open-profile", "disabled"),
        ],
        Input("store-token", "data"),
    )
    def toggle_header_buttons(token: Optional[str]) -> tuple[bool, bool]:
        signed_out = not token
        return signed_out, signed_out

    @app.callback(
        Output("store-profile", "data"),
        Input("store-token", "data"),
    )
    def load_profile(token: Optional[str]) -> Optional[dict]:
        """Fetch the profile whenever the token changes."""
        if not token:
            return None
        try:
            return make_client(token=token).get_profile()
        except ApiError as e:
            logger.error(f"Error fetching profile: {e}")
            return None

    @app.callback(
        [
            Output("text-welcome", "children"),
            Output("div-profile-summary", "children"),
            Output("input-profile-email", "value"),
            Output("input-profile-name", "value"),
            Output("input-profile-avatar", "value"),
        ],
        Input("store-profile", "data"),
    )
    def update_profile_view(profile: Optional[dict]) -> tuple:
        if not profile:
            return "", render_profile_summary(None), "", "", ""
        metadata = profile.get("metadata") or {}
        return (
            f"Welcome, {profile.get('email') or profile.get('id')}",
            render_profile_summary(profile),
            profile.get("email") or "",
            metadata.get(METADATA_NAME) or "",
            metadata.get(METADATA_AVATAR) or "",
        )


def _register_add_task_callbacks(app: dash.Dash, make_client: ClientFactory) -> None:
    """Register add-task modal callbacks."""

    @app.callback(
        Output("modal-add-task", "is_open"),
        [
            Input("btn-open-add-task", "n_clicks"),
            Input("btn-cancel-task", "n_clicks"),
        ],
        prevent_initial_call=True,
    )
    def toggle_modal(open_clicks: Optional[int], cancel_clicks: Optional[int]) -> bool:
        return callback_context.triggered_id == "btn-open-add-task"

    @app.callback(
        [
            Output("store-board", "data", allow_duplicate=True),
            Output("store-token", "data", allow_duplicate=True),
            Output("modal-add-task", "is_open", allow_duplicate=True),
            Output("div-add-task-error", "children"),
            Output("input-task-title", "value"),
            Output("textarea-task-description", "value"),
            Output("select-task-status", "value"),
            Output("datepicker-task-due", "date"),
        ],
        Input("btn-create-task", "n_clicks"),
        [
            State("input-task-title", "value"),
            State("textarea-task-description", "value"),
            State("select-task-status", "value"),
            State("datepicker-task-due", "date"),
            State("store-token", "data"),
            State("store-board", "data"),
        ],
        prevent_initial_call=True,
    )
    def create_task(
        n_clicks: Optional[int],
        title: Optional[str],
        description: Optional[str],
        status: Optional[str],
        due_date: Optional[str],
        token: Optional[str],
        board_data: Optional[dict],
    ) -> tuple:
        """Validate the form, create the task and add it to the board."""
        if not n_clicks:
            raise PreventUpdate

        keep_form = (no_update, no_update, no_update, no_update)

        payload, error = build_task_payload(title, description, status, due_date)
        if error:
            return (no_update, no_update, True, dbc.Alert(error, color="danger"), *keep_form)

        api = make_client(token=token)
        board = BoardController.from_dict(board_data, api)
        try:
            board.create(payload)
        except ApiError as e:
            logger.error(f"Error creating task: {e}")
            return (
                no_update,
                _token_output(api, token),
                True,
                dbc.Alert(describe_error(e, MESSAGES["create_failed"]), color="danger"),
                *keep_form,
            )

        return board.to_dict(), no_update, False, None, "", "", DEFAULT_STATUS, None


def _register_profile_callbacks(app: dash.Dash, make_client: ClientFactory) -> None:
    """Register profile panel callbacks."""

    @app.callback(
        Output("offcanvas-profile", "is_open"),
        Input("btn-open-profile", "n_clicks"),
        State("offcanvas-profile", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_profile(n_clicks: Optional[int], is_open: bool) -> bool:
        return not is_open

    @app.callback(
        [
            Output("store-profile", "data", allow_duplicate=True),
            Output("store-profile-message", "data"),
            Output("store-token", "data", allow_duplicate=True),
        ],
        Input("btn-update-profile", "n_clicks"),
        [
            State("store-token", "data"),
            State("store-profile", "data"),
            State("input-profile-email", "value"),
            State("input-profile-name", "value"),
            State("input-profile-avatar", "value"),
        ],
        prevent_initial_call=True,
    )
    def update_profile(
        n_clicks: Optional[int],
        token: Optional[str],
        profile: Optional[dict],
        email: Optional[str],
        full_name: Optional[str],
        avatar_url: Optional[str],
    ) -> tuple:
        """Send only the changed fields; success message clears itself."""
        if not n_clicks or not token:
            raise PreventUpdate

        payload = build_profile_update(profile, email, full_name, avatar_url)
        if not payload:
            return no_update, _message("No changes detected", "warning"), no_update

        api = make_client(token=token)
        try:
            updated = api.update_profile(payload)
        except ApiError as e:
            logger.error(f"Error updating profile: {e}")
            return (
                no_update,
                _message(describe_error(e, MESSAGES["profile_update_failed"]), "danger"),
                _token_output(api, token),
            )

        return (
            updated,
            _message("Profile updated successfully", "success", SUCCESS_CLEAR_DELAY),
            no_update,
        )

    @app.callback(
        Output("div-profile-message", "children"),
        [
            Input("store-profile-message", "data"),
            Input("interval-tick", "n_intervals"),
        ],
    )
    def show_profile_message(message: Optional[dict], n_intervals: int) -> Any:
        if not message:
            return None
        expires_at = message.get("expires_at")
        if expires_at is not None and time.time() >= expires_at:
            return None
        return dbc.Alert(message.get("text"), color=message.get("color", "info"))


def _register_account_deletion_callbacks(app: dash.Dash, make_client: ClientFactory) -> None:
    """Register account deletion callbacks."""

    @app.callback(
        Output("confirm-delete-account", "displayed"),
        Input("btn-delete-account", "n_clicks"),
        prevent_initial_call=True,
    )
    def confirm_delete(n_clicks: Optional[int]) -> bool:
        return bool(n_clicks)

    @app.callback(
        [
            Output("store-profile-message", "data", allow_duplicate=True),
            Output("store-token", "data", allow_duplicate=True),
        ],
        Input("confirm-delete-account", "submit_n_clicks"),
        State("store-token", "data"),
        prevent_initial_call=True,
    )
    def delete_account(submit_clicks: Optional[int], token: Optional[str]) -> tuple:
        """Delete tasks (and the account when the server can), then sign out."""
        if not submit_clicks or not token:
            raise PreventUpdate

        api = make_client(token=token)
        try:
            outcome = api.delete_account()
        except ApiError as e:
            logger.error(f"Error deleting account: {e}")
            return (
                _message(describe_error(e, MESSAGES["account_delete_failed"]), "danger"),
                _token_output(api, token),
            )

        text = outcome.get("message", "")
        if outcome.get("note"):
            text = f"{text} {outcome['note']}"
        color = "success" if outcome.get("accountDeleted") else "warning"
        return _message(text, color), None
