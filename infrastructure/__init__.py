"""
Infrastructure Layer for the workout session engine.

This package contains concrete implementations of the application ports:
- db/: Supabase database implementations
- notifications/: Session event notifiers
"""

# Re-export adapters for convenient access
from infrastructure.db import (
    SupabaseSequenceRepository,
    SupabaseExecutionRepository,
    SupabaseExerciseCatalog,
    SupabaseModifierCatalog,
    SupabaseRatingService,
)
from infrastructure.notifications import LoggingSessionNotifier

__all__ = [
    "SupabaseSequenceRepository",
    "SupabaseExecutionRepository",
    "SupabaseExerciseCatalog",
    "SupabaseModifierCatalog",
    "SupabaseRatingService",
    "LoggingSessionNotifier",
]
