"""
Supabase implementation of RatingService.

Stores the rating and feedback of an execution and detects personal records
against the user's other completed executions.

PR rule: for every exercise performed (not skipped, not a break, with a
value), the best value of this execution is a record when no other completed
execution of the user holds a value at least as high for that exercise.

Logs are read in the stored layout written by the execution repository
(``exerciseId``, ``type``, ``value``, ``skipped``) and records are written to
``personal_records`` as ``{exerciseId, type, previousBest?, newBest}``.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from supabase import Client

from application.errors import PersistenceError
from domain.models import MeasureType, PersonalRecord
from infrastructure.db.sequence_repository import BREAK_EXERCISE_ID, exercise_id_to_row

logger = logging.getLogger(__name__)


def best_values(entries: Iterable[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Best non-skipped value per exercise in a stored log."""
    best: Dict[str, Dict[str, Any]] = {}
    for entry in entries or []:
        exercise_id = entry.get("exerciseId")
        value = entry.get("value")
        if exercise_id in (None, BREAK_EXERCISE_ID) or not value or entry.get("skipped"):
            continue
        key = str(exercise_id)
        if key not in best or value > best[key]["value"]:
            best[key] = {"value": value, "measure": entry.get("type")}
    return best


def record_to_row(record: PersonalRecord) -> Dict[str, Any]:
    """Convert a PersonalRecord to its stored dict."""
    row: Dict[str, Any] = {
        "exerciseId": exercise_id_to_row(record.exercise_id),
        "type": record.measure.value,
        "newBest": record.new_best,
    }
    if record.previous_best is not None:
        row["previousBest"] = record.previous_best
    return row


def detect_personal_records(
    current_log: Iterable[Dict[str, Any]],
    previous_logs: Iterable[Iterable[Dict[str, Any]]],
) -> List[PersonalRecord]:
    """
    Compare one execution log against earlier ones.

    Args:
        current_log: Stored entries of the execution being rated
        previous_logs: Stored entries of the user's other completed executions

    Returns:
        One PersonalRecord per exercise that beat its previous best
    """
    previous_best: Dict[str, int] = {}
    for log in previous_logs:
        for exercise_id, best in best_values(log).items():
            if best["value"] > previous_best.get(exercise_id, 0):
                previous_best[exercise_id] = best["value"]

    records = []
    for exercise_id, best in best_values(current_log).items():
        previous = previous_best.get(exercise_id)
        if previous is None or best["value"] > previous:
            records.append(
                PersonalRecord(
                    exercise_id=exercise_id,
                    measure=best["measure"] or MeasureType.REPETITIONS,
                    previous_best=previous,
                    new_best=best["value"],
                )
            )
    return records


class SupabaseRatingService:
    """
    Supabase implementation of RatingService protocol.

    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        self._client = client

    def submit_rating(
        self,
        execution_id: str,
        user_id: str,
        rating: int,
        feedback: Optional[str] = None,
    ) -> List[PersonalRecord]:
        try:
            current = (
                self._client.table("sequence_executions")
                .select("id, exercises")
                .eq("id", execution_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
            if not current.data:
                raise PersistenceError(
                    f"Execution '{execution_id}' not found", operation="submit_rating"
                )

            others = (
                self._client.table("sequence_executions")
                .select("id, exercises")
                .eq("user_id", user_id)
                .not_.is_("completed_at", "null")
                .execute()
            )
            previous_logs = [
                row.get("exercises") or []
                for row in others.data or []
                if str(row.get("id")) != str(execution_id)
            ]
            records = detect_personal_records(current.data[0].get("exercises") or [], previous_logs)

            self._client.table("sequence_executions").update({
                "rating": rating,
                "feedback": feedback,
                "personal_records": [record_to_row(r) for r in records] or None,
            }).eq("id", execution_id).eq("user_id", user_id).execute()
        except PersistenceError:
            raise
        except Exception as e:
            logger.exception(f"Failed to submit rating for execution {execution_id}: {e}")
            raise PersistenceError(str(e), operation="submit_rating") from e

        logger.info(
            f"Execution {execution_id} rated {rating}, "
            f"{len(records)} personal records"
        )
        return records
