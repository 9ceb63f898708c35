"""
Rating Service Interface (Port).

Submitting a rating closes out an execution. Personal-record detection happens
behind this port; the engine only hands over the execution ID and relays the
records it gets back.
"""
from typing import List, Optional, Protocol

from domain.models import PersonalRecord


class RatingService(Protocol):
    """Rating and personal-record collaborator."""

    def submit_rating(
        self,
        execution_id: str,
        user_id: str,
        rating: int,
        feedback: Optional[str] = None,
    ) -> List[PersonalRecord]:
        """
        Store a rating (1-5) and detect personal records for an execution.

        Returns:
            Personal records set by this execution (possibly empty)

        Raises:
            PersistenceError: the rating could not be stored
        """
        ...
