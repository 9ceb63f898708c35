"""
Error taxonomy of the session engine.

- SequenceNotFound / SequenceAccessDenied / EmptySequence: fatal to starting
  a session, surfaced to the caller and never retried automatically.
- PersistenceError: a store rejected or failed a write. Always recoverable:
  in-memory session state stays valid and the caller may retry.

Invalid transitions (pausing a paused session, completing after the end, a
stale double-tap) are not errors at all. The runtime absorbs them as no-ops.
"""

from typing import Optional


class SessionError(Exception):
    """Base class for session engine errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SequenceNotFound(SessionError):
    """Raised when a sequence does not exist (or is deleted)."""

    def __init__(self, sequence_id: str):
        super().__init__(f"Sequence '{sequence_id}' not found")
        self.sequence_id = sequence_id


class SequenceAccessDenied(SessionError):
    """Raised when a sequence exists but belongs to another user."""

    def __init__(self, sequence_id: str):
        super().__init__(f"Not authorized to access sequence '{sequence_id}'")
        self.sequence_id = sequence_id


class PersistenceError(SessionError):
    """Raised by adapters when a backing store cannot be read or written."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation


class EmptySequence(SessionError):
    """Raised when a session is started on a sequence without bouts."""

    def __init__(self, sequence_id: str):
        super().__init__(f"Sequence '{sequence_id}' has no bouts")
        self.sequence_id = sequence_id


class SessionNotFound(SessionError):
    """Raised when no live session matches an execution ID for the user."""

    def __init__(self, execution_id: str):
        super().__init__(f"Session '{execution_id}' not found")
        self.execution_id = execution_id


class SessionLimitReached(SessionError):
    """Raised when the host already runs the maximum number of sessions."""

    def __init__(self, limit: int):
        super().__init__(f"Too many active sessions (limit {limit})")
        self.limit = limit
