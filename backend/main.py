"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings)
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from application.session import SessionRegistry
from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    registry = SessionRegistry(
        tick_interval=settings.session_tick_interval_seconds,
        max_active_sessions=settings.max_active_sessions,
        idle_ttl_seconds=settings.session_idle_ttl_seconds,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # Shutdown
        await registry.shutdown()
        logger.info("Session registry shut down")

    app = FastAPI(
        title="Workout Session API",
        description="Runs workout sequences: timing, auto-advance and mid-session edits",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.session_registry = registry

    # Configure CORS middleware
    _configure_cors(app)

    # Include API routers
    _include_routers(app)

    logger.info(
        f"Session engine ready (tick={settings.session_tick_interval_seconds}s, "
        f"beep_start={settings.default_beep_start_seconds}s, "
        f"max_sessions={settings.max_active_sessions}, "
        f"idle_ttl={settings.session_idle_ttl_seconds}s)"
    )

    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
        )
        logger.info("Sentry initialized for session API")


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    # Add production domains from environment if configured
    production_origins = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",")
    trusted_origins.extend([origin.strip() for origin in production_origins if origin.strip()])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        health_router,
        sequences_router,
        sessions_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Domain routers (with prefixes defined in each router)
    app.include_router(sequences_router)
    app.include_router(sessions_router)


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
