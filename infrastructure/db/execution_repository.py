"""
Supabase implementation of ExecutionRepository.

Executions live in the ``sequence_executions`` table. The completed-bout log
is written to the ``exercises`` jsonb column in full on every flush, so a
failed flush can be retried without risk of duplicate entries. Entries use the
same camelCase layout as the sequence bouts:

    {
        "boutId": "b1",
        "exerciseId": 12 | "break",
        "type": "time",
        "startedAt": "2024-01-01T10:00:00+00:00",
        "completedAt": "2024-01-01T10:00:31+00:00",
        "value": 31,
        "skipped": true,
        "activeModifiers": [{"modifierId": 3, "value": "10kg", "effect": "harder"}]
    }
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from supabase import Client

from application.errors import PersistenceError
from domain.models import ActiveModifier, BoutKind, CompletedBout
from infrastructure.db.sequence_repository import exercise_id_to_row

logger = logging.getLogger(__name__)


def active_modifier_to_row(modifier: ActiveModifier) -> Dict[str, Any]:
    row: Dict[str, Any] = {"modifierId": modifier.modifier_id}
    if modifier.value is not None:
        row["value"] = modifier.value
    if modifier.effect is not None:
        row["effect"] = modifier.effect.value
    return row


def completed_bout_to_row(entry: CompletedBout) -> Dict[str, Any]:
    """Convert one log entry to its stored dict."""
    row: Dict[str, Any] = {
        "boutId": entry.bout_id,
        "exerciseId": exercise_id_to_row(
            None if entry.kind == BoutKind.BREAK else entry.exercise_id
        ),
        "type": entry.measure.value,
        "startedAt": entry.started_at.isoformat(),
        "completedAt": entry.completed_at.isoformat(),
    }
    if entry.value is not None:
        row["value"] = entry.value
    if entry.skipped:
        row["skipped"] = True
    if entry.active_modifiers:
        row["activeModifiers"] = [active_modifier_to_row(m) for m in entry.active_modifiers]
    return row


def log_to_rows(completed_log: Sequence[CompletedBout]) -> list:
    """Serialize the completed log for the ``exercises`` column."""
    return [completed_bout_to_row(entry) for entry in completed_log]


class SupabaseExecutionRepository:
    """
    Supabase implementation of ExecutionRepository protocol.

    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def start_execution(
        self,
        sequence_id: str,
        user_id: str,
        started_at: datetime,
    ) -> str:
        data = {
            "user_id": user_id,
            "sequence_id": sequence_id,
            "started_at": started_at.isoformat(),
            "exercises": [],
            "total_pause_duration": 0,
        }
        try:
            result = self._client.table("sequence_executions").insert(data).execute()
        except Exception as e:
            logger.exception(f"Failed to create execution for sequence {sequence_id}: {e}")
            raise PersistenceError(str(e), operation="start_execution") from e

        if not result.data:
            raise PersistenceError(
                "Execution insert returned no data", operation="start_execution"
            )

        execution_id = str(result.data[0]["id"])
        logger.info(f"Execution {execution_id} created for sequence {sequence_id}")
        return execution_id

    def update_execution(
        self,
        execution_id: str,
        *,
        completed_log: Sequence[CompletedBout],
        total_pause_seconds: float,
        completed_at: Optional[datetime] = None,
    ) -> None:
        data: Dict[str, Any] = {
            "exercises": log_to_rows(completed_log),
            "total_pause_duration": int(round(total_pause_seconds)),
        }
        if completed_at is not None:
            data["completed_at"] = completed_at.isoformat()

        try:
            result = (
                self._client.table("sequence_executions")
                .update(data)
                .eq("id", execution_id)
                .execute()
            )
        except Exception as e:
            logger.exception(f"Failed to update execution {execution_id}: {e}")
            raise PersistenceError(str(e), operation="update_execution") from e

        if not result.data:
            raise PersistenceError(
                f"Execution '{execution_id}' not found", operation="update_execution"
            )

        logger.info(f"Execution {execution_id} updated with {len(completed_log)} bouts")
