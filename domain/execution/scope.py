"""
Scope resolution for configuration edits.

When the user changes a bout's target mid-session they pick how far the change
propagates. ``resolve_scope`` maps the edited bout and the chosen scope to the
sequence indices the change applies to. Indices below ``completed_count`` are
never returned: history is not edited retroactively.

Results are always ascending by sequence index, so previews and application
agree regardless of group order.
"""

from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from domain.models.bout import Bout, MeasureType
from domain.models.group import BoutGroup, find_group


class UpdateScope(str, Enum):
    """How far a configuration change propagates."""

    THIS_ONLY = "this_only"
    SAME_GROUP = "same_group"
    ALL_IN_SEQUENCE = "all_in_sequence"
    SAME_CONFIG = "same_config"


def resolve_scope(
    bouts: Sequence[Bout],
    groups: Iterable[BoutGroup],
    target_index: int,
    scope: UpdateScope,
    completed_count: int = 0,
) -> List[int]:
    """
    Indices a configuration change should apply to.

    Args:
        bouts: Current bout list (session-local copy)
        groups: Current groups
        target_index: Index of the bout being edited
        scope: Requested propagation scope
        completed_count: Number of bouts already completed or skipped

    Returns:
        Sorted, unique indices, all >= completed_count
    """
    if not 0 <= target_index < len(bouts):
        return []

    start = max(completed_count, 0)
    target = bouts[target_index]

    if scope == UpdateScope.SAME_GROUP:
        group = find_group(groups, target.id)
        if group is None:
            matches = [target_index]
        else:
            matches = [i for i, b in enumerate(bouts) if group.contains(b.id)]
    elif scope == UpdateScope.ALL_IN_SEQUENCE:
        matches = [i for i, b in enumerate(bouts) if b.identity == target.identity]
    elif scope == UpdateScope.SAME_CONFIG:
        matches = [
            i
            for i, b in enumerate(bouts)
            if b.identity == target.identity
            and b.config.measure == target.config.measure
            and b.config.target_value == target.config.target_value
        ]
    else:
        matches = [target_index]

    return sorted({i for i in matches if i >= start})


def apply_config(
    bouts: Sequence[Bout],
    indices: Iterable[int],
    measure: Optional[MeasureType] = None,
    target_value: Optional[int] = None,
) -> Tuple[Bout, ...]:
    """Return a new bout tuple with the config change merged into ``indices``."""
    selected = set(indices)
    return tuple(
        bout.with_config(measure=measure, target_value=target_value) if i in selected else bout
        for i, bout in enumerate(bouts)
    )
