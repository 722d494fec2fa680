"""
Tests for the /api/tasks endpoints.
"""

from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from backend.providers.store import InMemoryTaskStore, TaskStoreError


def _create(client: TestClient, headers: dict, **body) -> dict:
    response = client.post("/api/tasks", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["task"]


class TestCreateTask:
    """Tests for POST /api/tasks."""

    def test_create_defaults(self, client: TestClient, auth_headers: dict, user) -> None:
        """Test a title-only task gets pending status, an id and equal timestamps."""
        response = client.post("/api/tasks", json={"title": "Write report"}, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Task created successfully"

        task = data["task"]
        assert task["id"]
        assert task["user_id"] == user.id
        assert task["title"] == "Write report"
        assert task["status"] == "pending"
        assert task["description"] is None
        assert task["due_date"] is None
        assert task["created_at"] == task["updated_at"]

    def test_title_trimmed(self, client: TestClient, auth_headers: dict) -> None:
        """Test surrounding whitespace is removed from the title."""
        task = _create(client, auth_headers, title="  Buy milk  ")
        assert task["title"] == "Buy milk"

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_blank_title_rejected(self, client: TestClient, auth_headers: dict, title: str) -> None:
        """Test empty and whitespace-only titles fail validation."""
        response = client.post("/api/tasks", json={"title": title}, headers=auth_headers)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Validation Error"
        assert data["message"] == "Title is required"

    def test_missing_title_rejected(self, client: TestClient, auth_headers: dict) -> None:
        """Test a body without a title fails validation."""
        response = client.post("/api/tasks", json={"description": "no title"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Title is required"

    @pytest.mark.parametrize("status", ["pending", "in-progress", "completed"])
    def test_canonical_statuses_accepted(
        self, client: TestClient, auth_headers: dict, status: str
    ) -> None:
        """Test each canonical status can be used at creation."""
        task = _create(client, auth_headers, title="Task", status=status)
        assert task["status"] == status

    def test_unknown_status_rejected(self, client: TestClient, auth_headers: dict) -> None:
        """Test a non-canonical status fails validation."""
        response = client.post(
            "/api/tasks",
            json={"title": "Task", "status": "archived"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Status must be one of: pending, in-progress, completed"
        )

    def test_optional_fields(self, client: TestClient, auth_headers: dict) -> None:
        """Test description and due date are stored."""
        task = _create(
            client,
            auth_headers,
            title="Report",
            description="  quarterly numbers ",
            due_date="2030-01-15T00:00:00Z",
        )
        assert task["description"] == "quarterly numbers"
        assert task["due_date"].startswith("2030-01-15")

    def test_invalid_due_date_rejected(self, client: TestClient, auth_headers: dict) -> None:
        """Test a malformed due date fails validation."""
        response = client.post(
            "/api/tasks",
            json={"title": "Report", "due_date": "next tuesday"},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Validation Error"

    def test_validation_runs_before_store(
        self, client: TestClient, auth_headers: dict, task_store: InMemoryTaskStore
    ) -> None:
        """Test invalid payloads never reach the task store."""
        with patch.object(task_store, "insert", AsyncMock()) as insert:
            client.post("/api/tasks", json={"title": " "}, headers=auth_headers)
        insert.assert_not_called()

    def test_store_failure_reported(
        self, client: TestClient, auth_headers: dict, task_store: InMemoryTaskStore
    ) -> None:
        """Test store errors become 500 envelopes with details."""
        failure = AsyncMock(side_effect=TaskStoreError("relation does not exist", "memory"))
        with patch.object(task_store, "insert", failure):
            response = client.post("/api/tasks", json={"title": "Task"}, headers=auth_headers)

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Database Error"
        assert data["message"] == "Failed to create task"
        assert "relation does not exist" in data["details"]

    def test_store_unavailable(
        self, client: TestClient, auth_headers: dict, task_store: InMemoryTaskStore
    ) -> None:
        """Test an unreachable store yields 503."""
        task_store.available = False
        response = client.post("/api/tasks", json={"title": "Task"}, headers=auth_headers)

        assert response.status_code == 503
        assert response.json()["error"] == "Service Unavailable"


class TestListTasks:
    """Tests for GET /api/tasks."""

    def test_empty_list(self, client: TestClient, auth_headers: dict) -> None:
        """Test a new user has no tasks."""
        response = client.get("/api/tasks", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Tasks fetched successfully"
        assert data["count"] == 0
        assert data["tasks"] == []

    def test_newest_first(self, client: TestClient, auth_headers: dict) -> None:
        """Test tasks are ordered by created_at descending."""
        for title in ("first", "second", "third"):
            _create(client, auth_headers, title=title)

        data = client.get("/api/tasks", headers=auth_headers).json()
        assert data["count"] == 3
        assert [t["title"] for t in data["tasks"]] == ["third", "second", "first"]

    def test_status_filter(self, client: TestClient, auth_headers: dict) -> None:
        """Test ?status= returns only matching tasks in the same order."""
        _create(client, auth_headers, title="a", status="pending")
        _create(client, auth_headers, title="b", status="completed")
        _create(client, auth_headers, title="c", status="pending")

        data = client.get("/api/tasks", params={"status": "pending"}, headers=auth_headers).json()
        assert [t["title"] for t in data["tasks"]] == ["c", "a"]
        assert all(t["status"] == "pending" for t in data["tasks"])
        assert data["count"] == 2

    def test_invalid_status_filter(self, client: TestClient, auth_headers: dict) -> None:
        """Test an unknown status filter fails validation."""
        response = client.get("/api/tasks", params={"status": "archived"}, headers=auth_headers)
        assert response.status_code == 400

    def test_only_own_tasks(
        self, client: TestClient, auth_headers: dict, other_headers: dict
    ) -> None:
        """Test users never see each other's tasks."""
        _create(client, auth_headers, title="mine")
        _create(client, other_headers, title="theirs")

        data = client.get("/api/tasks", headers=auth_headers).json()
        assert [t["title"] for t in data["tasks"]] == ["mine"]


class TestUpdateTask:
    """Tests for PUT /api/tasks/{id}."""

    def test_update_status(self, client: TestClient, auth_headers: dict) -> None:
        """Test a status change bumps updated_at and leaves the title alone."""
        created = _create(client, auth_headers, title="Write report")

        response = client.put(
            f"/api/tasks/{created['id']}",
            json={"status": "completed"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Task updated successfully"
        task = data["task"]
        assert task["status"] == "completed"
        assert task["title"] == "Write report"
        assert datetime.fromisoformat(task["updated_at"]) > datetime.fromisoformat(
            created["updated_at"]
        )
        assert task["created_at"] == created["created_at"]

    def test_partial_update_keeps_other_fields(
        self, client: TestClient, auth_headers: dict
    ) -> None:
        """Test fields absent from the patch are unchanged."""
        created = _create(client, auth_headers, title="Task", description="keep me")

        task = client.put(
            f"/api/tasks/{created['id']}",
            json={"title": "Renamed"},
            headers=auth_headers,
        ).json()["task"]
        assert task["title"] == "Renamed"
        assert task["description"] == "keep me"

    def test_null_clears_nullable_field(self, client: TestClient, auth_headers: dict) -> None:
        """Test an explicit null clears the due date."""
        created = _create(client, auth_headers, title="Task", due_date="2030-01-01")

        task = client.put(
            f"/api/tasks/{created['id']}",
            json={"due_date": None},
            headers=auth_headers,
        ).json()["task"]
        assert task["due_date"] is None

    def test_empty_patch_rejected(self, client: TestClient, auth_headers: dict) -> None:
        """Test {} fails validation."""
        created = _create(client, auth_headers, title="Task")

        response = client.put(f"/api/tasks/{created['id']}", json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == (
            "At least one field (title, description, status, due_date) must be provided for update"
        )

    def test_blank_title_rejected(self, client: TestClient, auth_headers: dict) -> None:
        """Test updating the title to blank fails validation."""
        created = _create(client, auth_headers, title="Task")

        response = client.put(
            f"/api/tasks/{created['id']}", json={"title": "  "}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Title cannot be empty"

    def test_invalid_status_rejected(self, client: TestClient, auth_headers: dict) -> None:
        """Test updating to an unknown status fails validation."""
        created = _create(client, auth_headers, title="Task")

        response = client.put(
            f"/api/tasks/{created['id']}", json={"status": "done"}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_foreign_task_not_found(
        self, client: TestClient, auth_headers: dict, other_headers: dict
    ) -> None:
        """Test another user's task cannot be updated and is left untouched."""
        created = _create(client, auth_headers, title="mine")

        response = client.put(
            f"/api/tasks/{created['id']}", json={"title": "hijacked"}, headers=other_headers
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"
        tasks = client.get("/api/tasks", headers=auth_headers).json()["tasks"]
        assert tasks[0]["title"] == "mine"

    def test_unknown_id_not_found(self, client: TestClient, auth_headers: dict) -> None:
        """Test a malformed or unknown id yields 404."""
        response = client.put("/api/tasks/not-a-uuid", json={"title": "x"}, headers=auth_headers)
        assert response.status_code == 404


class TestDeleteTask:
    """Tests for DELETE /api/tasks/{id}."""

    def test_delete_returns_prior_state(self, client: TestClient, auth_headers: dict) -> None:
        """Test delete returns the removed task and it disappears from the list."""
        created = _create(client, auth_headers, title="Task")

        response = client.delete(f"/api/tasks/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Task deleted successfully"
        assert data["task"]["id"] == created["id"]
        assert client.get("/api/tasks", headers=auth_headers).json()["count"] == 0

    def test_foreign_task_not_found(
        self, client: TestClient, auth_headers: dict, other_headers: dict
    ) -> None:
        """Test another user's task cannot be deleted."""
        created = _create(client, auth_headers, title="mine")

        response = client.delete(f"/api/tasks/{created['id']}", headers=other_headers)

        assert response.status_code == 404
        assert client.get("/api/tasks", headers=auth_headers).json()["count"] == 1

    def test_delete_twice(self, client: TestClient, auth_headers: dict) -> None:
        """Test a second delete of the same task yields 404."""
        created = _create(client, auth_headers, title="Task")
        client.delete(f"/api/tasks/{created['id']}", headers=auth_headers)

        response = client.delete(f"/api/tasks/{created['id']}", headers=auth_headers)
        assert response.status_code == 404
