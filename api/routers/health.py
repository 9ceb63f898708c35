"""
Health check router.

Liveness endpoint for monitoring and load balancers, plus a readiness view of
the session registry.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import get_session_registry, get_settings
from application.session import SessionRegistry
from backend.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """
    Simple liveness endpoint.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/sessions")
def session_health(
    registry: SessionRegistry = Depends(get_session_registry),
    settings: Settings = Depends(get_settings),
):
    """Number of live sessions held by this process."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "active_sessions": len(registry),
        "max_active_sessions": registry.max_active_sessions,
    }
