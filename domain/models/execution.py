"""
Execution records: what actually happened during a workout session.

CompletedBout entries are the authoritative record handed to the execution
store and used for personal-record detection. They are immutable once
appended to a session's log.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field

from domain.models.bout import Bout, BoutKind, MeasureType, ModifierEffect
from domain.models.group import BoutGroup
from domain.models.sequence import GoalMode


class SessionStatus(str, Enum):
    """Lifecycle states of a workout session."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    QUIT = "quit"

    @property
    def is_active(self) -> bool:
        return self in (SessionStatus.RUNNING, SessionStatus.PAUSED)


class BoutStatus(str, Enum):
    """Progress status of one bout, for segmented progress displays."""

    COMPLETED = "completed"
    SKIPPED = "skipped"
    CURRENT = "current"
    PENDING = "pending"


class ActiveModifier(BaseModel):
    """A modifier that was toggled on for the bout actually performed."""

    modifier_id: int
    value: Optional[str] = Field(default=None, description="Display value, e.g. '10kg'")
    effect: Optional[ModifierEffect] = None

    model_config = {"frozen": True}


class CompletedBout(BaseModel):
    """
    One entry of the completed-bout log.

    ``value`` is seconds for timed bouts and reps for repetition bouts. Skipped
    bouts carry neither a value nor active modifiers.
    """

    bout_id: Optional[str] = None
    kind: BoutKind = BoutKind.EXERCISE
    exercise_id: Optional[str] = None
    measure: MeasureType = MeasureType.REPETITIONS
    started_at: datetime
    completed_at: datetime
    value: Optional[int] = Field(default=None, ge=0)
    skipped: bool = False
    active_modifiers: Optional[Tuple[ActiveModifier, ...]] = None

    @classmethod
    def from_bout(
        cls,
        bout: Bout,
        *,
        started_at: datetime,
        completed_at: datetime,
        value: Optional[int] = None,
        skipped: bool = False,
        active_modifiers: Optional[Tuple[ActiveModifier, ...]] = None,
    ) -> "CompletedBout":
        return cls(
            bout_id=bout.id,
            kind=bout.kind,
            exercise_id=bout.exercise_id,
            measure=bout.config.measure,
            started_at=started_at,
            completed_at=completed_at,
            value=None if skipped else value,
            skipped=skipped,
            active_modifiers=None if skipped else (active_modifiers or None),
        )

    model_config = {"frozen": True}


class PersonalRecord(BaseModel):
    """A new best value for an exercise, detected after a session is rated."""

    exercise_id: str
    measure: MeasureType = MeasureType.REPETITIONS
    previous_best: Optional[int] = None
    new_best: int

    model_config = {"frozen": True}


class GroupContext(BaseModel):
    """Where a bout sits inside its group."""

    group: BoutGroup
    position: int
    total: int


class SessionSnapshot(BaseModel):
    """
    Read model of a session at one instant.

    Snapshots are frozen and share the runtime's immutable tuples, so a
    presenter holding one never observes a half-applied transition.
    """

    execution_id: Optional[str] = None
    sequence_id: Optional[str] = None
    status: SessionStatus
    goal: GoalMode = GoalMode.ELASTIC
    version: int = 0
    cursor: int = 0
    bouts: Tuple[Bout, ...] = ()
    groups: Tuple[BoutGroup, ...] = ()
    completed_log: Tuple[CompletedBout, ...] = ()
    active_modifiers: Tuple[int, ...] = ()
    toggleable_modifiers: Tuple[int, ...] = ()
    elapsed_seconds: int = 0
    bout_started_at: Optional[datetime] = None
    total_pause_seconds: float = 0.0
    pending_flush: bool = False
    rating_submitted: bool = False

    @property
    def current_bout(self) -> Optional[Bout]:
        if self.status.is_active and 0 <= self.cursor < len(self.bouts):
            return self.bouts[self.cursor]
        return None

    @property
    def completed_count(self) -> int:
        return len([c for c in self.completed_log if not c.skipped])

    @property
    def skipped_count(self) -> int:
        return len([c for c in self.completed_log if c.skipped])

    model_config = {"frozen": True}
