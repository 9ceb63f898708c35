"""
Supabase implementation of SequenceRepository.

Sequences live in the ``sequences`` table. Bouts are stored in the
``exercises`` jsonb column using the client's camelCase layout:

    {
        "id": "b1",
        "exerciseId": 12 | "break",
        "config": {"goal": "strict", "measure": "time", "targetValue": 30},
        "modifiers": [{"modifierId": 3, "effect": "harder"}]
    }

The goal is stored per bout; the sequence goal is read from the ``goal``
column when present, otherwise from the first bout.
"""
import logging
from typing import Any, Dict, Optional, Sequence as SequenceType

from supabase import Client

from application.errors import PersistenceError, SequenceAccessDenied
from domain.models import (
    Bout,
    BoutConfig,
    BoutGroup,
    BoutKind,
    ModifierAssignment,
    Sequence,
)

logger = logging.getLogger(__name__)

BREAK_EXERCISE_ID = "break"


# ============================================================================
# Row mapping (stateless utilities)
# ============================================================================

def bout_from_row(data: Dict[str, Any]) -> Bout:
    """Convert a stored bout dict to a Bout."""
    exercise_id = data.get("exerciseId")
    config = data.get("config") or {}
    is_break = exercise_id == BREAK_EXERCISE_ID or data.get("kind") == BoutKind.BREAK.value

    return Bout(
        id=str(data["id"]) if data.get("id") is not None else None,
        kind=BoutKind.BREAK if is_break else BoutKind.EXERCISE,
        exercise_id=None if is_break else str(exercise_id),
        config=BoutConfig(
            measure=config.get("measure") or "repetitions",
            target_value=config.get("targetValue"),
        ),
        modifiers=[] if is_break else [
            ModifierAssignment(
                modifier_id=m["modifierId"],
                effect=m.get("effect") or "neutral",
            )
            for m in data.get("modifiers") or []
        ],
    )


def exercise_id_to_row(exercise_id: Optional[str]) -> Any:
    """Stored form of an exercise ID: numeric where possible, "break" for rests."""
    if exercise_id is None:
        return BREAK_EXERCISE_ID
    return int(exercise_id) if exercise_id.isdigit() else exercise_id


def bout_to_row(bout: Bout, goal: str) -> Dict[str, Any]:
    """Convert a Bout to its stored dict."""
    row: Dict[str, Any] = {
        "id": bout.id,
        "exerciseId": exercise_id_to_row(None if bout.is_break else bout.exercise_id),
        "config": {"goal": goal, "measure": bout.config.measure.value},
    }
    if bout.config.target_value is not None:
        row["config"]["targetValue"] = bout.config.target_value
    if bout.modifiers:
        row["modifiers"] = [
            {"modifierId": m.modifier_id, "effect": m.effect.value} for m in bout.modifiers
        ]
    return row


def group_from_row(data: Dict[str, Any]) -> BoutGroup:
    return BoutGroup(
        id=str(data["id"]),
        name=data.get("name") or "",
        bout_ids=[str(b) for b in data.get("boutIds") or []],
    )


def group_to_row(group: BoutGroup) -> Dict[str, Any]:
    return {"id": group.id, "name": group.name, "boutIds": list(group.bout_ids)}


def sequence_from_row(row: Dict[str, Any]) -> Sequence:
    """Convert a ``sequences`` row to a Sequence."""
    raw_bouts = row.get("exercises") or []
    goal = row.get("goal")
    if goal is None and raw_bouts:
        goal = (raw_bouts[0].get("config") or {}).get("goal")

    return Sequence(
        id=str(row["id"]),
        name=row.get("name") or "",
        bouts=[bout_from_row(b) for b in raw_bouts],
        groups=[group_from_row(g) for g in row.get("groups") or []],
        available_modifiers=row.get("available_modifiers") or [],
        goal=goal,
    )


class SupabaseSequenceRepository:
    """
    Supabase implementation of SequenceRepository protocol.

    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def _fetch_row(self, sequence_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        result = (
            self._client.table("sequences")
            .select("*")
            .eq("id", sequence_id)
            .is_("deleted_at", "null")
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        row = result.data[0]
        if row.get("user_id") != user_id:
            logger.warning(f"Sequence {sequence_id} requested by non-owner {user_id}")
            raise SequenceAccessDenied(sequence_id)
        return row

    def get_sequence(self, sequence_id: str, user_id: str) -> Optional[Sequence]:
        """
        Load a live sequence owned by ``user_id``.

        Raises:
            SequenceAccessDenied: the sequence belongs to someone else
            PersistenceError: the store could not be read
        """
        try:
            row = self._fetch_row(sequence_id, user_id)
        except SequenceAccessDenied:
            raise
        except Exception as e:
            logger.exception(f"Failed to load sequence {sequence_id}: {e}")
            raise PersistenceError(str(e), operation="get_sequence") from e
        if row is None:
            return None
        return sequence_from_row(row)

    def update_sequence(
        self,
        sequence_id: str,
        user_id: str,
        *,
        bouts: Optional[SequenceType[Bout]] = None,
        groups: Optional[SequenceType[BoutGroup]] = None,
        available_modifiers: Optional[SequenceType[int]] = None,
    ) -> Sequence:
        """
        Overwrite the bout list, groups and/or available modifiers of a sequence.

        Raises:
            SequenceAccessDenied: the sequence belongs to someone else
            PersistenceError: the sequence is missing or the write failed
        """
        try:
            current = self._fetch_row(sequence_id, user_id)
        except SequenceAccessDenied:
            raise
        except Exception as e:
            logger.exception(f"Failed to load sequence {sequence_id} for update: {e}")
            raise PersistenceError(str(e), operation="update_sequence") from e

        if current is None:
            raise PersistenceError(
                f"Sequence '{sequence_id}' not found", operation="update_sequence"
            )

        goal = sequence_from_row(current).goal.value
        data: Dict[str, Any] = {}
        if bouts is not None:
            data["exercises"] = [bout_to_row(b, goal) for b in bouts]
        if groups is not None:
            data["groups"] = [group_to_row(g) for g in groups]
        if available_modifiers is not None:
            data["available_modifiers"] = list(available_modifiers)

        if not data:
            return sequence_from_row(current)

        try:
            result = (
                self._client.table("sequences")
                .update(data)
                .eq("id", sequence_id)
                .eq("user_id", user_id)
                .execute()
            )
        except Exception as e:
            logger.exception(f"Failed to update sequence {sequence_id}: {e}")
            raise PersistenceError(str(e), operation="update_sequence") from e

        if not result.data:
            raise PersistenceError(
                f"Sequence '{sequence_id}' was not updated", operation="update_sequence"
            )

        logger.info(f"Sequence {sequence_id} updated ({', '.join(sorted(data))})")
        return sequence_from_row(result.data[0])
