"""
Domain models for the workout session engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core concepts:
- Sequence: The authored aggregate root holding bouts and groups
- Bout: One exercise attempt or rest break, with its target config
- BoutGroup: Bouts that move and get batch-edited together
- CompletedBout: The immutable record of a performed or skipped bout
- SessionSnapshot: Frozen read model of a running session

Usage:
    >>> from domain.models import Sequence, Bout, BoutConfig, MeasureType

    >>> sequence = Sequence(
    ...     id="7",
    ...     name="Core Finisher",
    ...     bouts=[
    ...         Bout(exercise_id="4", config=BoutConfig(measure=MeasureType.TIME, target_value=45)),
    ...         Bout.rest(15),
    ...     ],
    ...     goal="strict",
    ... )
"""

from domain.models.bout import (
    Bout,
    BoutConfig,
    BoutKind,
    MeasureType,
    ModifierAssignment,
    ModifierEffect,
)
from domain.models.catalog import CatalogExercise, Modifier
from domain.models.execution import (
    ActiveModifier,
    BoutStatus,
    CompletedBout,
    GroupContext,
    PersonalRecord,
    SessionSnapshot,
    SessionStatus,
)
from domain.models.group import BoutGroup, find_group, prune_groups
from domain.models.sequence import GoalMode, Sequence, SequenceDuration

__all__ = [
    # Main entities
    "Sequence",
    "SequenceDuration",
    "Bout",
    "BoutConfig",
    "BoutGroup",
    "ModifierAssignment",
    "CatalogExercise",
    "Modifier",
    # Execution records
    "ActiveModifier",
    "CompletedBout",
    "PersonalRecord",
    "GroupContext",
    "SessionSnapshot",
    # Enums
    "BoutKind",
    "MeasureType",
    "ModifierEffect",
    "GoalMode",
    "SessionStatus",
    "BoutStatus",
    # Helpers
    "find_group",
    "prune_groups",
]
