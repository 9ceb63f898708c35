"""
Bout value objects for workout sequences.

A bout is one scheduled unit of a sequence: either an exercise attempt or a
rest break. Bouts carry a session-local ``id`` that is distinct from the
exercise identity, because the same exercise may appear several times in one
sequence.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class MeasureType(str, Enum):
    """How a bout is measured."""

    TIME = "time"
    REPETITIONS = "repetitions"


class BoutKind(str, Enum):
    """Exercise attempt or rest break."""

    EXERCISE = "exercise"
    BREAK = "break"


class ModifierEffect(str, Enum):
    """Authored intent of an equipment modifier on an exercise."""

    EASIER = "easier"
    HARDER = "harder"
    NEUTRAL = "neutral"


class BoutConfig(BaseModel):
    """
    Target prescription for a bout.

    Examples:
        >>> BoutConfig(measure=MeasureType.TIME, target_value=30)
        >>> BoutConfig(measure=MeasureType.REPETITIONS, target_value=12)
    """

    measure: MeasureType = Field(..., description="Time (seconds) or repetitions")
    target_value: Optional[int] = Field(
        default=None,
        ge=0,
        description="Target seconds or reps. None means open-ended.",
    )

    @property
    def is_timed(self) -> bool:
        """True for time-measured bouts."""
        return self.measure == MeasureType.TIME

    @property
    def has_target(self) -> bool:
        """True when a positive target is set."""
        return bool(self.target_value)

    def __str__(self) -> str:
        value = self.target_value or 0
        unit = "s" if self.is_timed else "x"
        return f"{value}{unit}"

    model_config = {"frozen": True}


class ModifierAssignment(BaseModel):
    """A modifier the author attached to an exercise bout."""

    modifier_id: int = Field(..., description="Modifier catalog ID")
    effect: ModifierEffect = Field(
        default=ModifierEffect.NEUTRAL,
        description="Whether the modifier makes the exercise easier or harder",
    )

    model_config = {"frozen": True}


class Bout(BaseModel):
    """
    Value object representing one bout in a sequence.

    Examples:
        >>> squat = Bout(
        ...     id="b1",
        ...     exercise_id="12",
        ...     config=BoutConfig(measure=MeasureType.REPETITIONS, target_value=10),
        ... )
        >>> rest = Bout.rest(30)
        >>> rest.is_break
        True
    """

    id: Optional[str] = Field(
        default=None,
        description="Stable session-local ID. Assigned at session start when missing.",
    )
    kind: BoutKind = Field(default=BoutKind.EXERCISE)
    exercise_id: Optional[str] = Field(
        default=None,
        description="Opaque exercise identity. Required for exercises, None for breaks.",
    )
    config: BoutConfig
    modifiers: List[ModifierAssignment] = Field(
        default_factory=list,
        description="Authored modifier assignments",
    )

    @model_validator(mode="after")
    def validate_identity(self) -> "Bout":
        """Exercises need an exercise ID; breaks must not carry one."""
        if self.kind == BoutKind.EXERCISE and not self.exercise_id:
            raise ValueError("Exercise bouts require an exercise_id")
        if self.kind == BoutKind.BREAK and (self.exercise_id or self.modifiers):
            raise ValueError("Break bouts cannot reference an exercise or modifiers")
        return self

    @classmethod
    def rest(cls, seconds: Optional[int] = None, bout_id: Optional[str] = None) -> "Bout":
        """Build a timed rest break."""
        return cls(
            id=bout_id,
            kind=BoutKind.BREAK,
            config=BoutConfig(measure=MeasureType.TIME, target_value=seconds),
        )

    @property
    def is_break(self) -> bool:
        return self.kind == BoutKind.BREAK

    @property
    def identity(self) -> Tuple[str, Optional[str]]:
        """
        Exercise identity used for matching repeated bouts.

        Breaks only ever match other breaks.
        """
        if self.is_break:
            return (BoutKind.BREAK.value, None)
        return (BoutKind.EXERCISE.value, self.exercise_id)

    @property
    def modifier_ids(self) -> List[int]:
        return [m.modifier_id for m in self.modifiers]

    def with_id(self, bout_id: str) -> "Bout":
        return self.model_copy(update={"id": bout_id})

    def with_config(
        self,
        measure: Optional[MeasureType] = None,
        target_value: Optional[int] = None,
    ) -> "Bout":
        """Return a copy with the given config fields merged in."""
        updates = {}
        if measure is not None:
            updates["measure"] = measure
        if target_value is not None:
            updates["target_value"] = target_value
        if not updates:
            return self
        config = BoutConfig(**{**self.config.model_dump(), **updates})
        return self.model_copy(update={"config": config})

    def __str__(self) -> str:
        name = "Break" if self.is_break else f"Exercise #{self.exercise_id}"
        return f"{name} {self.config}"

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "b1",
                    "kind": "exercise",
                    "exercise_id": "12",
                    "config": {"measure": "time", "target_value": 30},
                    "modifiers": [{"modifier_id": 3, "effect": "harder"}],
                },
                {
                    "id": "b2",
                    "kind": "break",
                    "config": {"measure": "time", "target_value": 10},
                },
            ]
        },
    }
