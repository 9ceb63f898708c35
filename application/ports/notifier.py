"""
Session Notifier Interface (Port).

The engine reports facts (a countdown second was reached, a bout finished);
implementations of this port decide what to do with them: play a beep,
vibrate, push an update to a client. Keeping device effects here keeps the
clock and policy free of side effects.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Protocol


class SessionEventType(str, Enum):
    """Facts emitted by a running session."""

    CUE = "cue"
    FINAL_CUE = "final_cue"
    BOUT_COMPLETED = "bout_completed"
    BOUT_SKIPPED = "bout_skipped"
    BOUT_INSERTED = "bout_inserted"
    SESSION_COMPLETED = "session_completed"


@dataclass(frozen=True)
class SessionEvent:
    """A single notification from a session."""

    type: SessionEventType
    execution_id: Optional[str] = None
    cursor: int = 0
    seconds_remaining: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)


class SessionNotifier(Protocol):
    """Receives session events. Must not raise."""

    def notify(self, event: SessionEvent) -> None:
        """Handle one session event."""
        ...
