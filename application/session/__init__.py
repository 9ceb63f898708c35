"""
Session orchestration: the runtime state machine, its ticker and the
process-wide registry of live sessions.
"""

from application.session.registry import SessionRegistry
from application.session.runtime import SessionRuntime, TickResult, TransitionResult
from application.session.ticker import SessionTicker

__all__ = [
    "SessionRegistry",
    "SessionRuntime",
    "SessionTicker",
    "TickResult",
    "TransitionResult",
]
