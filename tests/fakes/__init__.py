"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of the application ports
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Failure switches for exercising recovery paths
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeSequenceRepository, make_sequence

    repo = FakeSequenceRepository()
    repo.seed([make_sequence()], user_id="user-1")
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from domain.models import (
    Bout,
    BoutConfig,
    BoutGroup,
    MeasureType,
    ModifierAssignment,
    Sequence,
)

from tests.fakes.sequence_repository import FakeSequenceRepository
from tests.fakes.execution_repository import FakeExecutionRepository
from tests.fakes.catalog import FakeExerciseCatalog, FakeModifierCatalog
from tests.fakes.rating_service import FakeRatingService
from tests.fakes.notifier import RecordingNotifier

T0 = datetime(2025, 3, 1, 8, 0, 0, tzinfo=timezone.utc)


class ManualClock:
    """Time source that only moves when told to."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


# =============================================================================
# Factory Functions
# =============================================================================


def at(seconds: float) -> datetime:
    """Instant ``seconds`` after T0."""
    return T0 + timedelta(seconds=seconds)


def timed(exercise_id: str, seconds: int, bout_id: Optional[str] = None, modifiers=None) -> Bout:
    """Build a time-measured exercise bout."""
    return Bout(
        id=bout_id,
        exercise_id=exercise_id,
        config=BoutConfig(measure=MeasureType.TIME, target_value=seconds),
        modifiers=[ModifierAssignment(modifier_id=m) for m in modifiers or []],
    )


def reps(exercise_id: str, count: int, bout_id: Optional[str] = None, modifiers=None) -> Bout:
    """Build a repetition-measured exercise bout."""
    return Bout(
        id=bout_id,
        exercise_id=exercise_id,
        config=BoutConfig(measure=MeasureType.REPETITIONS, target_value=count),
        modifiers=[ModifierAssignment(modifier_id=m) for m in modifiers or []],
    )


def make_sequence(
    *,
    sequence_id: str = "seq-1",
    bouts: Optional[List[Bout]] = None,
    groups: Optional[List[BoutGroup]] = None,
    available_modifiers: Optional[List[int]] = None,
    goal: str = "elastic",
) -> Sequence:
    """
    Create a sequence, by default five bouts:
    squat 30s, break 10s, push-up x10, break 10s, squat 30s.
    """
    if bouts is None:
        bouts = [
            timed("1", 30, "b1", modifiers=[7]),
            Bout.rest(10, bout_id="b2"),
            reps("2", 10, "b3"),
            Bout.rest(10, bout_id="b4"),
            timed("1", 30, "b5"),
        ]
    return Sequence(
        id=sequence_id,
        name="Test Sequence",
        bouts=bouts,
        groups=groups or [],
        available_modifiers=available_modifiers if available_modifiers is not None else [7, 8],
        goal=goal,
    )


__all__ = [
    "FakeSequenceRepository",
    "FakeExecutionRepository",
    "FakeExerciseCatalog",
    "FakeModifierCatalog",
    "FakeRatingService",
    "RecordingNotifier",
    "ManualClock",
    "T0",
    "at",
    "timed",
    "reps",
    "make_sequence",
]
