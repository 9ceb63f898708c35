"""
API package for the workout session service.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
- schemas/: Request and response models
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_sequence_repo,
    get_execution_repo,
    get_exercise_catalog,
    get_modifier_catalog,
    get_rating_service,
    get_session_notifier,
    get_session_registry,
    get_runtime_factory,
    get_current_user,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_sequence_repo",
    "get_execution_repo",
    "get_exercise_catalog",
    "get_modifier_catalog",
    "get_rating_service",
    "get_session_notifier",
    # Sessions
    "get_session_registry",
    "get_runtime_factory",
    # Authentication
    "get_current_user",
]
