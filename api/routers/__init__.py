"""
Router package for the workout session API.

This package contains all API routers organized by domain:
- health: Liveness and session registry status
- sequences: Sequence views, duration estimate and catalogs
- sessions: Live session control
"""

from api.routers.health import router as health_router
from api.routers.sequences import router as sequences_router
from api.routers.sessions import router as sessions_router

__all__ = [
    "health_router",
    "sequences_router",
    "sessions_router",
]
