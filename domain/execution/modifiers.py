"""
Modifier activation tracking.

Per-bout set of equipment modifiers the user has marked "in use". Assigned
equipment defaults to active when the bout starts; the set is rebuilt on every
cursor change and never carries over between bouts.
"""

from typing import FrozenSet, Iterable, Mapping, Optional, Tuple

from domain.models.bout import Bout
from domain.models.catalog import Modifier
from domain.models.execution import ActiveModifier


def toggleable(bout: Optional[Bout], available_modifiers: Iterable[int]) -> FrozenSet[int]:
    """Modifiers the user may toggle: assigned to the bout and available in the sequence."""
    if bout is None or bout.is_break:
        return frozenset()
    available = set(available_modifiers)
    return frozenset(m for m in bout.modifier_ids if m in available)


def initialize(bout: Optional[Bout], available_modifiers: Iterable[int]) -> FrozenSet[int]:
    """Active set at bout start: every toggleable modifier is on."""
    return toggleable(bout, available_modifiers)


def toggle(active: FrozenSet[int], modifier_id: int) -> FrozenSet[int]:
    """Flip membership of ``modifier_id``."""
    if modifier_id in active:
        return active - {modifier_id}
    return active | {modifier_id}


def to_active_modifiers(
    active: FrozenSet[int],
    bout: Bout,
    catalog: Mapping[int, Modifier],
) -> Tuple[ActiveModifier, ...]:
    """
    Build the records stored with a completed bout.

    Order follows the bout's authored assignments; anything active but not
    assigned comes after, by ID.
    """
    effects = {m.modifier_id: m.effect for m in bout.modifiers}
    ordered = [m for m in bout.modifier_ids if m in active]
    ordered += sorted(m for m in active if m not in effects)

    records = []
    for modifier_id in ordered:
        modifier = catalog.get(modifier_id)
        records.append(
            ActiveModifier(
                modifier_id=modifier_id,
                value=modifier.display_value if modifier else None,
                effect=effects.get(modifier_id),
            )
        )
    return tuple(records)
