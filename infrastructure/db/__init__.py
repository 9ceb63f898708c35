"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the store and
collaborator interfaces defined in application.ports. These implementations
can be injected into the session runtime and routers for clean separation of
concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseSequenceRepository,
        SupabaseExecutionRepository,
    )

    client = create_client(url, key)
    sequence_repo = SupabaseSequenceRepository(client)
    sequence = sequence_repo.get_sequence(sequence_id, user_id)
"""

from infrastructure.db.sequence_repository import SupabaseSequenceRepository
from infrastructure.db.execution_repository import SupabaseExecutionRepository
from infrastructure.db.catalog_repository import (
    SupabaseExerciseCatalog,
    SupabaseModifierCatalog,
)
from infrastructure.db.rating_service import SupabaseRatingService

__all__ = [
    "SupabaseSequenceRepository",
    "SupabaseExecutionRepository",
    "SupabaseExerciseCatalog",
    "SupabaseModifierCatalog",
    "SupabaseRatingService",
]
