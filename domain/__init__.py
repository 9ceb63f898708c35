"""
Domain layer for the workout session engine.

This package contains pure domain models and the deterministic pieces of the
execution engine (clock, auto-advance policy, modifier tracking, scope
resolution). Nothing here reads wall-clock time or talks to a store.
"""

from domain.models import (
    Bout,
    BoutConfig,
    BoutGroup,
    CompletedBout,
    GoalMode,
    MeasureType,
    Sequence,
    SessionStatus,
)

__all__ = [
    "Bout",
    "BoutConfig",
    "BoutGroup",
    "CompletedBout",
    "GoalMode",
    "MeasureType",
    "Sequence",
    "SessionStatus",
]
