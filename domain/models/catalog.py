"""
Read-only catalog entries: exercises and equipment modifiers.

Exercise identity is opaque to the engine; the catalog only supplies display
names for pickers and history. Modifiers supply the value/unit strings recorded
with completed bouts.
"""

from typing import Optional

from pydantic import BaseModel, Field

# Units that are shown without a suffix
UNITLESS_MODIFIER_UNITS = frozenset(["none", "level"])


class CatalogExercise(BaseModel):
    """An exercise as listed by the exercise catalog."""

    id: str
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

    model_config = {"frozen": True}


class Modifier(BaseModel):
    """
    An equipment modifier (weighted vest, resistance band, ...).

    Examples:
        >>> Modifier(id=3, name="Weighted Vest", value=10, unit="kg").display_value
        '10kg'
        >>> Modifier(id=4, name="Band", value=2, unit="level").display_value
        '2'
    """

    id: int
    name: str = Field(..., min_length=1)
    value: Optional[float] = None
    unit: Optional[str] = None

    @property
    def display_value(self) -> Optional[str]:
        """Value with unit suffix, or None when the modifier has no value."""
        if self.value is None:
            return None
        number = int(self.value) if float(self.value).is_integer() else self.value
        if self.unit and self.unit not in UNITLESS_MODIFIER_UNITS:
            return f"{number}{self.unit}"
        return f"{number}"

    model_config = {"frozen": True}
