"""
Profile Panel Component.

Shows the caller's profile and lets them change their email, display name
and avatar, or delete their account.
"""

from typing import Any, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from frontend.components.task_card import format_date

METADATA_NAME = "full_name"
METADATA_AVATAR = "avatar_url"


def build_profile_update(
    profile: Optional[dict[str, Any]],
    email: Optional[str],
    full_name: Optional[str],
    avatar_url: Optional[str],
) -> dict[str, Any]:
    """
    Build the profile update body from form values.

    Only changed fields are included. Clearing a metadata field sends an
    empty string, which removes the key from the stored metadata.
    """
    profile = profile or {}
    payload: dict[str, Any] = {}

    email = (email or "").strip()
    if email and email != profile.get("email"):
        payload["email"] = email

    current = profile.get("metadata") or {}
    metadata: dict[str, str] = {}
    for key, value in ((METADATA_NAME, full_name), (METADATA_AVATAR, avatar_url)):
        value = (value or "").strip()
        if value != (current.get(key) or ""):
            metadata[key] = value
    if metadata:
        payload["metadata"] = metadata

    return payload


def render_profile_summary(profile: Optional[dict[str, Any]]) -> html.Div:
    """Read-only account details."""
    if not profile:
        return html.Div("Sign in to view your profile.", className="text-muted")

    confirmed = profile.get("email_confirmed_at")
    avatar = (profile.get("metadata") or {}).get(METADATA_AVATAR)
    return html.Div(
        [
            html.Img(
                src=avatar,
                alt="Avatar",
                className="rounded-circle mb-2",
                style={"width": "64px", "height": "64px", "objectFit": "cover"},
            )
            if avatar
            else None,
            html.P([html.Strong("User ID: "), html.Code(profile.get("id", ""))], className="mb-1"),
            html.P([html.Strong("Email: "), profile.get("email") or "-"], className="mb-1"),
            html.P(
                [
                    html.Strong("Email confirmed: "),
                    format_date(confirmed) if confirmed else "Not confirmed",
                ],
                className="mb-1",
            ),
            html.P(
                [html.Strong("Member since: "), format_date(profile.get("created_at"))],
                className="mb-0",
            ),
        ],
        className="small",
    )


def create_profile_panel() -> dbc.Offcanvas:
    """Create the profile side panel."""
    return dbc.Offcanvas(
        [
            html.Div(id="div-profile-summary", className="mb-3"),
            html.Hr(),
            html.Div(id="div-profile-message"),
            dbc.Label("Email", html_for="input-profile-email"),
            dbc.Input(id="input-profile-email", type="email", className="mb-3"),
            dbc.Label("Full name", html_for="input-profile-name"),
            dbc.Input(id="input-profile-name", type="text", className="mb-3"),
            dbc.Label("Avatar URL", html_for="input-profile-avatar"),
            dbc.Input(
                id="input-profile-avatar",
                type="url",
                placeholder="https://example.com/avatar.jpg",
                className="mb-3",
            ),
            dbc.Button(
                [html.I(className="fas fa-save me-2"), "Update Profile"],
                id="btn-update-profile",
                color="primary",
                className="w-100 mb-4",
            ),
            html.Hr(),
            html.H6("Danger Zone", className="text-danger"),
            html.P(
                "Deleting your account removes all of your tasks.",
                className="small text-muted",
            ),
            dbc.Button(
                [html.I(className="fas fa-user-times me-2"), "Delete Account"],
                id="btn-delete-account",
                color="danger",
                outline=True,
                className="w-100",
            ),
            dcc.ConfirmDialog(
                id="confirm-delete-account",
                message=(
                    "Are you sure you want to delete your account? "
                    "This will permanently delete all your tasks."
                ),
            ),
        ],
        id="offcanvas-profile",
        title="Profile",
        placement="end",
        is_open=False,
    )
