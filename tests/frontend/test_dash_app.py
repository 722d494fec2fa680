"""
Unit tests for Dash application initialization and layout.

Tests that the Dash app is properly configured and can be mounted
onto FastAPI.
"""

from fastapi.testclient import TestClient


class TestDashAppCreation:
    """Tests for Dash application factory."""

    def test_create_dash_app_returns_dash_instance(self):
        """Test that create_dash_app returns a Dash application."""
        from frontend.app import create_dash_app
        import dash

        app = create_dash_app()
        assert isinstance(app, dash.Dash)

    def test_dash_app_has_correct_title(self):
        """Test that the app has the correct title."""
        from frontend.app import create_dash_app, APP_TITLE

        app = create_dash_app()
        assert app.title == APP_TITLE

    def test_dash_app_requests_pathname_prefix(self):
        """Test that the requests pathname prefix is set correctly."""
        from frontend.app import create_dash_app

        app = create_dash_app(requests_pathname_prefix="/board/")
        assert app.config.requests_pathname_prefix == "/board/"

    def test_api_base_url(self):
        """Test that the API root is configurable and defaults to the environment value."""
        from frontend.app import create_dash_app
        from frontend.constants import API_BASE_URL

        assert create_dash_app().server.config["TASKBOARD_API_URL"] == API_BASE_URL
        app = create_dash_app(api_base_url="http://api.example.com/api")
        assert app.server.config["TASKBOARD_API_URL"] == "http://api.example.com/api"

    def test_callbacks_registered(self):
        """Test that the board, modal and profile callbacks are registered."""
        from frontend.app import create_dash_app

        app = create_dash_app()
        outputs = " ".join(app.callback_map.keys())
        assert "store-board.data" in outputs
        assert "modal-add-task.is_open" in outputs
        assert "div-profile-message.children" in outputs


class TestLayout:
    """Tests for the dashboard layout."""

    def test_layout_contains_required_ids(self):
        """Test that the layout has stores, board and overlays."""
        from frontend.layout import create_layout

        layout = str(create_layout())
        for component_id in (
            "store-token",
            "store-board",
            "interval-tick",
            "btn-open-add-task",
            "btn-open-profile",
            "input-access-token",
            "div-board",
            "div-board-error",
            "modal-add-task",
            "offcanvas-profile",
        ):
            assert component_id in layout

    def test_render_board_has_one_column_per_status(self):
        """Test that each status gets a column with its tasks."""
        from frontend.layout import render_board

        board = str(
            render_board(
                {
                    "pending": [{"id": "t1", "title": "First", "status": "pending"}],
                    "in-progress": [],
                    "completed": [],
                }
            )
        )
        for column_id in ("column-pending", "column-in-progress", "column-completed"):
            assert column_id in board
        assert "First" in board
        assert "No tasks" in board


class TestDashboardMount:
    """Tests for mounting the dashboard onto FastAPI."""

    def test_dashboard_mounted(self, test_container):
        """Test the dashboard is mounted at /dashboard when enabled."""
        from backend.main import create_app

        test_container.settings.mount_dashboard = True
        app = create_app(test_container)

        routes = [getattr(route, "path", "") for route in app.routes]
        assert "/dashboard" in routes

    def test_dashboard_redirect(self, test_container):
        """Test /dashboard redirects to the trailing-slash URL."""
        from backend.main import create_app

        test_container.settings.mount_dashboard = True
        with TestClient(create_app(test_container)) as client:
            response = client.get("/dashboard", follow_redirects=False)
            assert response.status_code == 301
            assert response.headers["location"] == "/dashboard/"

    def test_dashboard_not_mounted_when_disabled(self, client):
        """Test /dashboard/ is absent when mount_dashboard is false."""
        response = client.get("/dashboard/")
        assert response.status_code == 404
