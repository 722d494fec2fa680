"""
FastAPI Application Entry Point.

Task board API: authenticated task CRUD and profile management on top of
Supabase auth and Postgres, plus the kanban dashboard.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from starlette.middleware.wsgi import WSGIMiddleware

from backend.api.dependencies.container import get_container_dep, get_settings_dep
from backend.api.errors import register_exception_handlers
from backend.api.schemas import HealthResponse, RootResponse
from backend.core.config import Settings
from backend.core.container import Container, get_container
from backend.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: build the HTTP client, identity provider and task store
    - Shutdown: close provider clients and the HTTP client
    """
    container: Container = app.state.container
    await container.startup()
    settings = container.settings
    logger.info(
        f"{settings.app_name} {settings.app_version} started "
        f"(storage={settings.storage.provider.value}, "
        f"admin={'on' if settings.admin_configured else 'off'})"
    )

    yield

    await container.shutdown()


def create_app(container: Container | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        container: Optional container override. Tests pass a container
            built around in-memory providers.

    Returns:
        Configured FastAPI application instance.
    """
    container = container or get_container()
    settings = container.settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=(
            "Personal task board. Tasks and profile are stored in Supabase and "
            "every request is scoped to the bearer token's owner."
        ),
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app, settings)

    return app


def mount_dashboard(app: FastAPI) -> None:
    """
    Mount the Dash kanban board onto FastAPI at /dashboard/.

    Args:
        app: FastAPI application instance.
    """
    try:
        from frontend.app import create_dash_app

        @app.middleware("http")
        async def redirect_dashboard_middleware(request, call_next):
            if request.url.path == "/dashboard":
                return RedirectResponse(url="/dashboard/", status_code=301)
            return await call_next(request)

        dash_app = create_dash_app(requests_pathname_prefix="/dashboard/")
        app.mount("/dashboard", WSGIMiddleware(dash_app.server))

        logger.info("Dashboard mounted at /dashboard/")

    except ImportError as e:
        logger.warning(
            f"Dashboard dependencies not installed: {e}. "
            "Install dash and dash-bootstrap-components to enable the dashboard."
        )


def register_routes(app: FastAPI, settings: Settings) -> None:
    """
    Register all application routes.

    Args:
        app: FastAPI application instance.
        settings: Settings the application was built with.
    """
    from backend.api import api_router

    app.include_router(api_router, prefix="/api")

    if settings.mount_dashboard:
        mount_dashboard(app)

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health Check",
        description="Check if the service is running and return configuration metadata.",
    )
    async def health_check(
        settings: Settings = Depends(get_settings_dep),
        container: Container = Depends(get_container_dep),
    ) -> HealthResponse:
        """
        Health check endpoint for readiness probes.

        Returns service status and configuration metadata.
        """
        return HealthResponse(
            status="healthy",
            app_name=settings.app_name,
            app_version=settings.app_version,
            timestamp=datetime.now(timezone.utc).isoformat(),
            debug=settings.debug,
            storage_provider=settings.storage.provider.value,
            supabase_configured=settings.supabase_configured,
            admin_enabled=container.get_identity_provider().admin_enabled,
        )

    @app.get(
        "/",
        response_model=RootResponse,
        tags=["Root"],
        summary="Root",
        description="Liveness message.",
    )
    async def root() -> RootResponse:
        return RootResponse(
            message="API is running",
            timestamp=datetime.now(timezone.utc).isoformat(),
        )


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_container().settings
    uvicorn.run(
        "backend.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug,
    )
