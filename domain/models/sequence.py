"""
Sequence aggregate: the authored, persisted list of bouts.

The engine never mutates a Sequence in place. A running session works on its
own copy of ``bouts`` and ``groups`` and may write that copy back through the
sequence store when the user explicitly asks to persist a change.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator

from domain.models.bout import Bout
from domain.models.group import BoutGroup, ensure_single_membership, prune_groups


class GoalMode(str, Enum):
    """
    Transition policy of a sequence.

    - STRICT: timed bouts auto-advance when their target is reached
    - ELASTIC: every transition is manual
    """

    STRICT = "strict"
    ELASTIC = "elastic"

    @classmethod
    def resolve(cls, value: Any) -> "GoalMode":
        """
        Resolve a stored goal value to a GoalMode.

        Stored goals are loose strings (or missing). Anything that is not a
        recognised strict/elastic value resolves to ELASTIC.
        """
        if isinstance(value, GoalMode):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.ELASTIC
        return cls.ELASTIC


class SequenceDuration(BaseModel):
    """Estimated duration of a sequence from its timed bouts."""

    total_seconds: int
    total_minutes: int
    formatted: str


class Sequence(BaseModel):
    """
    Aggregate root representing an authored workout sequence.

    Examples:
        >>> sequence = Sequence(
        ...     id="7",
        ...     name="Morning Mobility",
        ...     bouts=[
        ...         Bout(id="b1", exercise_id="1", config={"measure": "time", "target_value": 30}),
        ...         Bout.rest(10, bout_id="b2"),
        ...     ],
        ...     goal="strict",
        ... )
        >>> sequence.estimated_duration().formatted
        '0m 40s'
    """

    id: str = Field(..., min_length=1)
    name: str = Field(default="")
    bouts: List[Bout] = Field(default_factory=list)
    groups: List[BoutGroup] = Field(default_factory=list)
    available_modifiers: List[int] = Field(
        default_factory=list,
        description="Modifier IDs the user has on hand for this sequence",
    )
    goal: GoalMode = Field(default=GoalMode.ELASTIC)

    @model_validator(mode="before")
    @classmethod
    def resolve_goal(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = {**data, "goal": GoalMode.resolve(data.get("goal"))}
        return data

    @model_validator(mode="after")
    def normalize_groups(self) -> "Sequence":
        """Enforce single group membership and drop stale group members."""
        ensure_single_membership(self.groups)
        ids = [b.id for b in self.bouts if b.id is not None]
        pruned = list(prune_groups(self.groups, ids))
        if pruned != self.groups:
            self.groups = pruned
        return self

    def estimated_duration(self) -> SequenceDuration:
        """Sum the targets of timed bouts."""
        total = sum(
            b.config.target_value or 0 for b in self.bouts if b.config.is_timed
        )
        minutes, seconds = divmod(total, 60)
        return SequenceDuration(
            total_seconds=total,
            total_minutes=minutes,
            formatted=f"{minutes}m {seconds}s",
        )

    def find_bout(self, bout_id: str) -> Optional[Bout]:
        for bout in self.bouts:
            if bout.id == bout_id:
                return bout
        return None
