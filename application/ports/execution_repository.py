"""
Execution Repository Interface (Port).

This module defines the abstract interface for execution persistence. An
execution is the stored record of one workout session: when it started, the
completed-bout log, total pause time and when it ended.
"""
from datetime import datetime
from typing import Optional, Protocol, Sequence

from domain.models import CompletedBout


class ExecutionRepository(Protocol):
    """Abstract interface for execution persistence."""

    def start_execution(
        self,
        sequence_id: str,
        user_id: str,
        started_at: datetime,
    ) -> str:
        """
        Create an execution record for a session that is starting.

        Args:
            sequence_id: Sequence being executed
            user_id: User running the session
            started_at: Session start time

        Returns:
            The new execution ID

        Raises:
            PersistenceError: the record could not be created
        """
        ...

    def update_execution(
        self,
        execution_id: str,
        *,
        completed_log: Sequence[CompletedBout],
        total_pause_seconds: float,
        completed_at: Optional[datetime] = None,
    ) -> None:
        """
        Write session progress to an execution record.

        The full log is written each time (idempotent overwrite), so a failed
        flush can simply be retried.

        Raises:
            PersistenceError: the write failed
        """
        ...
