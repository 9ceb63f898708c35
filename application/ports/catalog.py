"""
Catalog Interfaces (Ports).

Read-only lookups used for display and for formatting modifier values. The
engine treats exercise identity as opaque.
"""
from typing import List, Protocol

from domain.models import CatalogExercise, Modifier


class ExerciseCatalog(Protocol):
    """Exercises visible to a user (pickers, history labels)."""

    def list_exercises(self, user_id: str) -> List[CatalogExercise]:
        """
        List exercises available to the user.

        Returns:
            Exercises with id, name and optional description
        """
        ...


class ModifierCatalog(Protocol):
    """Equipment modifiers defined by a user."""

    def list_modifiers(self, user_id: str) -> List[Modifier]:
        """
        List the user's modifiers.

        Returns:
            Modifiers with id, name and optional value/unit
        """
        ...
