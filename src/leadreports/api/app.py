"""FastAPI application factory.

Builds the app with its settings on app.state, CORS, the health check and
the report routes. The backend and settings are request dependencies so
tests can swap them through dependency_overrides.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from leadreports.backend.base import BackendBase
from leadreports.backend.sql import SqlBackend
from leadreports.config import Settings
from leadreports.db.session import get_engine


def get_settings(request: Request) -> Settings:
    """Dependency returning the settings the app was created with."""
    return request.app.state.settings


def get_backend(request: Request) -> BackendBase:
    """Dependency returning the backend for a request.

    Returns:
        SqlBackend over the configured database.
    """
    settings: Settings = request.app.state.settings
    return SqlBackend(get_engine(settings.db_path), max_rows=settings.backend_max_rows)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Optional settings. Defaults to Settings.from_env().

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings.from_env()

    app = FastAPI(
        title="Lead Reports API",
        description="Agent performance, tag effectiveness and lead source reports",
        version="0.1.0",
    )
    app.state.settings = settings

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    from leadreports.api.routes import reports

    app.include_router(reports.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
