"""
Bout groups.

A group is a named, ordered subset of bout IDs that move, render and get
batch-edited together (supersets, circuits). A bout belongs to at most one
group, and a group left without members is deleted.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, field_validator


class BoutGroup(BaseModel):
    """
    Value object representing a group of bouts.

    Examples:
        >>> group = BoutGroup(id="g1", name="Superset A", bout_ids=["b1", "b3"])
        >>> group.position_of("b3")
        2
    """

    id: str = Field(..., min_length=1)
    name: str = Field(default="", description="Display name")
    bout_ids: List[str] = Field(default_factory=list, description="Member bout IDs in order")

    @field_validator("bout_ids")
    @classmethod
    def validate_unique_members(cls, v: List[str]) -> List[str]:
        if len(set(v)) != len(v):
            raise ValueError("A group cannot list the same bout twice")
        return v

    def contains(self, bout_id: Optional[str]) -> bool:
        return bout_id is not None and bout_id in self.bout_ids

    def position_of(self, bout_id: str) -> Optional[int]:
        """1-based position of a bout inside the group, or None."""
        if bout_id not in self.bout_ids:
            return None
        return self.bout_ids.index(bout_id) + 1

    @property
    def size(self) -> int:
        return len(self.bout_ids)

    model_config = {"frozen": True}


def find_group(groups: Iterable[BoutGroup], bout_id: Optional[str]) -> Optional[BoutGroup]:
    """Return the group containing ``bout_id``, if any."""
    if bout_id is None:
        return None
    for group in groups:
        if group.contains(bout_id):
            return group
    return None


def ensure_single_membership(groups: Sequence[BoutGroup]) -> None:
    """
    Raise ValueError when a bout ID appears in more than one group.
    """
    seen = {}
    for group in groups:
        for bout_id in group.bout_ids:
            if bout_id in seen:
                raise ValueError(
                    f"Bout '{bout_id}' is in groups '{seen[bout_id]}' and '{group.id}'"
                )
            seen[bout_id] = group.id


def prune_groups(groups: Iterable[BoutGroup], bout_ids: Iterable[str]) -> Tuple[BoutGroup, ...]:
    """
    Drop group members that are not in ``bout_ids`` and delete emptied groups.

    Args:
        groups: Groups to prune
        bout_ids: IDs of bouts that still exist

    Returns:
        Tuple of surviving groups, in their original order
    """
    existing = set(bout_ids)
    pruned = []
    for group in groups:
        members = [b for b in group.bout_ids if b in existing]
        if not members:
            continue
        if len(members) == len(group.bout_ids):
            pruned.append(group)
        else:
            pruned.append(group.model_copy(update={"bout_ids": members}))
    return tuple(pruned)
