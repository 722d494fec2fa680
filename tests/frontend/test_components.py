"""
Unit tests for dashboard components.
"""

from datetime import datetime, timezone

import dash_bootstrap_components as dbc

from frontend.components.add_task_modal import build_task_payload, create_add_task_modal
from frontend.components.profile_panel import (
    build_profile_update,
    create_profile_panel,
    render_profile_summary,
)
from frontend.components.task_card import create_task_card, format_date, is_overdue
from frontend.constants import MESSAGES, NO_DUE_DATE

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestFormatDate:
    """Tests for due date formatting."""

    def test_format(self) -> None:
        assert format_date("2024-12-20T00:00:00+00:00") == "Dec 20, 2024"

    def test_bare_date(self) -> None:
        assert format_date("2024-01-05") == "Jan 5, 2024"

    def test_missing_or_invalid(self) -> None:
        assert format_date(None) == NO_DUE_DATE
        assert format_date("") == NO_DUE_DATE
        assert format_date("soon") == NO_DUE_DATE


class TestIsOverdue:
    """Tests for the overdue marker."""

    def test_past_due(self) -> None:
        task = {"status": "pending", "due_date": "2025-05-01T00:00:00Z"}
        assert is_overdue(task, NOW) is True

    def test_completed_never_overdue(self) -> None:
        task = {"status": "completed", "due_date": "2025-05-01T00:00:00Z"}
        assert is_overdue(task, NOW) is False

    def test_future_or_missing(self) -> None:
        assert is_overdue({"status": "pending", "due_date": "2030-01-01"}, NOW) is False
        assert is_overdue({"status": "pending", "due_date": None}, NOW) is False


class TestBuildTaskPayload:
    """Tests for the add-task form payload."""

    def test_valid(self) -> None:
        payload, error = build_task_payload("  Write  ", "  ", None, "2030-01-01")

        assert error is None
        assert payload == {
            "title": "Write",
            "description": None,
            "status": "pending",
            "due_date": "2030-01-01",
        }

    def test_title_required(self) -> None:
        payload, error = build_task_payload("   ", "desc", "pending", None)

        assert payload is None
        assert error == MESSAGES["title_required"]


class TestBuildProfileUpdate:
    """Tests for the profile form payload."""

    AVATAR = "https://example.com/ada.png"
    PROFILE = {"email": "a@example.com", "metadata": {"full_name": "Ada", "avatar_url": AVATAR}}

    def test_no_changes(self) -> None:
        assert build_profile_update(self.PROFILE, "a@example.com", "Ada", self.AVATAR) == {}

    def test_changed_fields_only(self) -> None:
        assert build_profile_update(self.PROFILE, "b@example.com", "Ada", self.AVATAR) == {
            "email": "b@example.com"
        }
        assert build_profile_update(self.PROFILE, "a@example.com", "Ada L", self.AVATAR) == {
            "metadata": {"full_name": "Ada L"}
        }

    def test_avatar_change(self) -> None:
        new_avatar = "https://example.com/new.png"
        assert build_profile_update(self.PROFILE, "a@example.com", "Ada", new_avatar) == {
            "metadata": {"avatar_url": new_avatar}
        }

    def test_clearing_fields_removes_keys(self) -> None:
        assert build_profile_update(self.PROFILE, "a@example.com", "", "  ") == {
            "metadata": {"full_name": "", "avatar_url": ""}
        }

    def test_avatar_added_without_existing_metadata(self) -> None:
        payload = build_profile_update({"email": "a@example.com"}, "a@example.com", None, self.AVATAR)
        assert payload == {"metadata": {"avatar_url": self.AVATAR}}


class TestComponents:
    """Tests for component construction."""

    def test_task_card_controls(self) -> None:
        card = create_task_card({"id": "t1", "title": "a", "status": "pending"})
        assert isinstance(card, dbc.Card)
        assert "btn-delete" in str(card)
        assert "'column': 'completed'" in str(card)
        assert "'column': 'pending'" not in str(card)

    def test_add_task_modal(self) -> None:
        modal = create_add_task_modal()
        assert modal.id == "modal-add-task"

    def test_profile_panel(self) -> None:
        panel = create_profile_panel()
        assert panel.id == "offcanvas-profile"
        assert "input-profile-avatar" in str(panel)

    def test_profile_summary_shows_avatar(self) -> None:
        summary = render_profile_summary(
            {"id": "u1", "email": "a@example.com", "metadata": {"avatar_url": "https://example.com/a.png"}}
        )
        assert "https://example.com/a.png" in str(summary)
        assert "Img" not in str(render_profile_summary({"id": "u1", "metadata": {}}))
