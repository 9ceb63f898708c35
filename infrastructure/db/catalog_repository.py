"""
Supabase implementations of the read-only exercise and modifier catalogs.

Catalog reads are not critical to running a session: on failure the error is
logged and an empty list returned, so a session still starts without display
values for its modifiers.
"""
import logging
from typing import List

from supabase import Client

from domain.models import CatalogExercise, Modifier

logger = logging.getLogger(__name__)


class SupabaseExerciseCatalog:
    """Exercises visible to a user: their own plus pre-built ones."""

    def __init__(self, client: Client):
        self._client = client

    def list_exercises(self, user_id: str) -> List[CatalogExercise]:
        try:
            result = (
                self._client.table("exercises")
                .select("id, name, description, user_id, is_pre_built")
                .is_("deleted_at", "null")
                .order("name")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list exercises for {user_id}: {e}")
            return []

        return [
            CatalogExercise(
                id=str(row["id"]),
                name=row["name"],
                description=row.get("description"),
            )
            for row in result.data or []
            if row.get("user_id") == user_id or row.get("is_pre_built")
        ]


class SupabaseModifierCatalog:
    """Equipment modifiers owned by a user."""

    def __init__(self, client: Client):
        self._client = client

    def list_modifiers(self, user_id: str) -> List[Modifier]:
        try:
            result = (
                self._client.table("modifiers")
                .select("id, name, value, unit")
                .eq("user_id", user_id)
                .is_("deleted_at", "null")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list modifiers for {user_id}: {e}")
            return []

        return [
            Modifier(
                id=row["id"],
                name=row["name"],
                value=row.get("value"),
                unit=row.get("unit"),
            )
            for row in result.data or []
        ]
