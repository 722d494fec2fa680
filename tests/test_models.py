"""
Tests for task and profile models.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from backend.models.profile import Identity, Profile, ProfileUpdate, merge_metadata
from backend.models.task import STATUS_ERROR_MESSAGE, Task, TaskCreate, TaskStatus, TaskUpdate


class TestTaskStatus:
    """Tests for TaskStatus."""

    def test_board_order(self) -> None:
        assert TaskStatus.values() == ["pending", "in-progress", "completed"]

    def test_parse_rejects_unknown(self) -> None:
        with pytest.raises(ValueError) as exc_info:
            TaskStatus.parse("done")
        assert str(exc_info.value) == STATUS_ERROR_MESSAGE


class TestTaskCreate:
    """Tests for TaskCreate validation."""

    def test_title_trimmed_and_defaults(self) -> None:
        task = TaskCreate(title="  Write docs  ")

        assert task.title == "Write docs"
        assert task.status == TaskStatus.PENDING
        assert task.description is None
        assert task.due_date is None

    @pytest.mark.parametrize("title", [None, "", "   ", 42])
    def test_title_required(self, title) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TaskCreate(title=title)
        assert "Title is required" in str(exc_info.value)

    def test_missing_title(self) -> None:
        with pytest.raises(ValidationError):
            TaskCreate()

    def test_blank_description_becomes_none(self) -> None:
        assert TaskCreate(title="a", description="   ").description is None

    def test_invalid_status(self) -> None:
        with pytest.raises(ValidationError):
            TaskCreate(title="a", status="archived")

    def test_bare_date_is_midnight_utc(self) -> None:
        task = TaskCreate(title="a", due_date="2030-01-01")
        assert task.due_date == datetime(2030, 1, 1, tzinfo=timezone.utc)

    def test_empty_due_date(self) -> None:
        assert TaskCreate(title="a", due_date="").due_date is None

    def test_to_record(self) -> None:
        record = TaskCreate(title="a", status="completed", due_date="2030-01-01").to_record("u1")

        assert record["user_id"] == "u1"
        assert record["status"] == "completed"
        assert record["due_date"].startswith("2030-01-01T00:00:00")


class TestTaskUpdate:
    """Tests for TaskUpdate partial semantics."""

    def test_empty_payload(self) -> None:
        assert TaskUpdate().is_empty is True

    def test_changes_only_supplied_fields(self) -> None:
        update = TaskUpdate(status="in-progress")

        assert update.is_empty is False
        assert update.changes() == {"status": "in-progress"}

    def test_explicit_null_clears_description(self) -> None:
        assert TaskUpdate(description=None).changes() == {"description": None}

    def test_null_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TaskUpdate(status=None)

    def test_blank_title_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TaskUpdate(title="  ")
        assert "Title cannot be empty" in str(exc_info.value)


class TestTask:
    """Tests for the Task record."""

    def test_accepts_date_column(self) -> None:
        task = Task(
            id="t1",
            user_id="u1",
            title="a",
            due_date="2030-06-01",
            created_at="2025-01-01T00:00:00Z",
            updated_at="2025-01-01T00:00:00Z",
        )
        assert task.due_date == datetime(2030, 6, 1, tzinfo=timezone.utc)

    def test_ignores_unknown_columns(self) -> None:
        task = Task(
            id="t1",
            user_id="u1",
            title="a",
            position=3,
            created_at="2025-01-01T00:00:00Z",
            updated_at="2025-01-01T00:00:00Z",
        )
        assert not hasattr(task, "position")


class TestProfileModels:
    """Tests for profile models and metadata merging."""

    def test_merge_metadata(self) -> None:
        merged = merge_metadata({"a": 1, "b": 2, "c": 3}, {"a": 10, "b": None, "c": "", "d": 4})
        assert merged == {"a": 10, "d": 4}

    def test_merge_does_not_mutate(self) -> None:
        current = {"a": 1}
        merge_metadata(current, {"a": None})
        assert current == {"a": 1}

    def test_profile_from_identity(self) -> None:
        identity = Identity(id="u1", email="a@example.com", user_metadata={"full_name": "A"})
        profile = Profile.from_identity(identity)

        assert profile.metadata == {"full_name": "A"}
        assert profile.email == "a@example.com"

    @pytest.mark.parametrize("email", ["nope", "a@b", "a b@c.d", 5])
    def test_invalid_email(self, email) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ProfileUpdate(email=email)
        assert "Invalid email format" in str(exc_info.value)

    def test_email_null_is_absent(self) -> None:
        assert ProfileUpdate(email=None).email is None
