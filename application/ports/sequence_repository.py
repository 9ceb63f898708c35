"""
Sequence Repository Interface (Port).

This module defines the abstract interface for the sequence store: the
persisted, authored definition of a workout sequence.
"""
from typing import Optional, Protocol, Sequence as SequenceType

from domain.models import Bout, BoutGroup, Sequence


class SequenceRepository(Protocol):
    """
    Abstract interface for sequence persistence.

    Implementations must never return sequences owned by another user.
    """

    def get_sequence(self, sequence_id: str, user_id: str) -> Optional[Sequence]:
        """
        Get a sequence by ID.

        Args:
            sequence_id: Sequence ID
            user_id: User requesting the sequence

        Returns:
            Sequence with bouts, groups, available modifiers and goal,
            or None if the sequence does not exist or is deleted

        Raises:
            SequenceAccessDenied: the sequence exists but belongs to someone else
            PersistenceError: the store could not be read
        """
        ...

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
        Overwrite parts of an authored sequence.

        Only the arguments that are not None are written.

        Args:
            sequence_id: Sequence ID
            user_id: Owner of the sequence
            bouts: Replacement bout list
            groups: Replacement groups
            available_modifiers: Replacement available modifier IDs

        Returns:
            The updated Sequence

        Raises:
            PersistenceError: the write failed
        """
        ...
