"""
FastAPI Dependency Providers for the workout session API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository providers create new instances per-request
- The session registry lives on app.state (one per application)
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_sequence_repo, get_current_user
    from application.ports import SequenceRepository

    @router.get("/sequences/{sequence_id}")
    def get_sequence(
        sequence_id: str,
        user_id: str = Depends(get_current_user),
        sequence_repo: SequenceRepository = Depends(get_sequence_repo),
    ):
        return sequence_repo.get_sequence(sequence_id, user_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_sequence_repo] = lambda: FakeSequenceRepository()
"""

from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, Request
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    ExecutionRepository,
    ExerciseCatalog,
    ModifierCatalog,
    RatingService,
    SequenceRepository,
    SessionNotifier,
)
from application.session import SessionRegistry, SessionRuntime

# Concrete implementations
from infrastructure import (
    LoggingSessionNotifier,
    SupabaseExecutionRepository,
    SupabaseExerciseCatalog,
    SupabaseModifierCatalog,
    SupabaseRatingService,
    SupabaseSequenceRepository,
)

from backend.settings import Settings, get_settings as _get_settings
from backend.auth import get_current_user as _get_current_user

RuntimeFactory = Callable[[str], SessionRuntime]


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_sequence_repo(
    client: Client = Depends(get_supabase_client_required),
) -> SequenceRepository:
    """Get SequenceRepository implementation."""
    return SupabaseSequenceRepository(client)


def get_execution_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExecutionRepository:
    """Get ExecutionRepository implementation."""
    return SupabaseExecutionRepository(client)


def get_exercise_catalog(
    client: Client = Depends(get_supabase_client_required),
) -> ExerciseCatalog:
    """Get ExerciseCatalog implementation."""
    return SupabaseExerciseCatalog(client)


def get_modifier_catalog(
    client: Client = Depends(get_supabase_client_required),
) -> ModifierCatalog:
    """Get ModifierCatalog implementation."""
    return SupabaseModifierCatalog(client)


def get_rating_service(
    client: Client = Depends(get_supabase_client_required),
) -> RatingService:
    """
    Get RatingService implementation.

    Personal-record detection runs inside the Supabase rating service.
    """
    return SupabaseRatingService(client)


def get_session_notifier() -> SessionNotifier:
    """Get SessionNotifier implementation (log only on the server)."""
    return LoggingSessionNotifier()


# =============================================================================
# Session Providers
# =============================================================================


def get_session_registry(request: Request) -> SessionRegistry:
    """
    Get the application's session registry.

    Created by create_app() and stored on app.state so every request of one
    application sees the same live sessions.
    """
    return request.app.state.session_registry


def get_runtime_factory(
    sequence_repo: SequenceRepository = Depends(get_sequence_repo),
    execution_repo: ExecutionRepository = Depends(get_execution_repo),
    modifier_catalog: ModifierCatalog = Depends(get_modifier_catalog),
    rating_service: RatingService = Depends(get_rating_service),
    notifier: SessionNotifier = Depends(get_session_notifier),
    settings: Settings = Depends(get_settings),
) -> RuntimeFactory:
    """
    Get a factory that builds a SessionRuntime for a user.

    Args:
        sequence_repo: Sequence store (injected)
        execution_repo: Execution store (injected)
        modifier_catalog: Modifier catalog (injected)
        rating_service: Rating / PR collaborator (injected)
        notifier: Session event notifier (injected)
        settings: Application settings (injected)

    Returns:
        Callable taking a user ID and returning an unstarted SessionRuntime
    """

    def build(user_id: str) -> SessionRuntime:
        return SessionRuntime(
            user_id=user_id,
            sequence_repo=sequence_repo,
            execution_repo=execution_repo,
            modifier_catalog=modifier_catalog,
            rating_service=rating_service,
            notifier=notifier,
            beep_start_seconds=settings.default_beep_start_seconds,
        )

    return build


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.
    Supports Clerk JWT (RS256 via JWKS) and API key authentication.

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(authorization=authorization, x_api_key=x_api_key)


# =============================================================================
# Exports
# =============================================================================

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
