"""
Execution clock: active elapsed time for the current bout.

This is the only place wall-clock time enters the engine, and even here the
caller always supplies ``now``. The clock is an immutable value; pause and
resume return a new clock.

    elapsed = now - started_at - total_pause

While paused, elapsed is frozen at the moment the pause began.
"""

import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


def elapsed(started_at: datetime, now: datetime, total_pause_seconds: float) -> float:
    """
    Active seconds between ``started_at`` and ``now``.

    Args:
        started_at: When the bout started
        now: Current instant
        total_pause_seconds: Sum of all closed pause intervals

    Returns:
        Elapsed active seconds, never negative
    """
    value = (now - started_at).total_seconds() - total_pause_seconds
    return max(value, 0.0)


@dataclass(frozen=True)
class ExecutionClock:
    """
    Pause-aware stopwatch for one bout.

    Usage:
        clock = ExecutionClock.start(t0)
        clock = clock.pause(t0 + 10s)
        clock = clock.resume(t0 + 25s)
        clock.elapsed(t0 + 30s)  # 15.0
    """

    started_at: datetime
    total_pause_seconds: float = 0.0
    paused_at: Optional[datetime] = None

    @classmethod
    def start(cls, now: datetime) -> "ExecutionClock":
        return cls(started_at=now)

    @property
    def is_paused(self) -> bool:
        return self.paused_at is not None

    def pause(self, now: datetime) -> "ExecutionClock":
        """Record the pause start. Pausing a paused clock changes nothing."""
        if self.is_paused:
            return self
        return replace(self, paused_at=now)

    def resume(self, now: datetime) -> "ExecutionClock":
        """Close the open pause interval. Resuming a running clock changes nothing."""
        if not self.is_paused:
            return self
        paused_for = max((now - self.paused_at).total_seconds(), 0.0)
        return replace(
            self,
            paused_at=None,
            total_pause_seconds=self.total_pause_seconds + paused_for,
        )

    def restart(self, now: datetime) -> "ExecutionClock":
        """Fresh clock for the next bout, running regardless of prior state."""
        return ExecutionClock.start(now)

    def open_pause_seconds(self, now: datetime) -> float:
        """Length of the pause in progress, 0 when running."""
        if not self.is_paused:
            return 0.0
        return max((now - self.paused_at).total_seconds(), 0.0)

    def elapsed(self, now: datetime) -> float:
        reference = self.paused_at if self.is_paused else now
        return elapsed(self.started_at, reference, self.total_pause_seconds)

    def elapsed_seconds(self, now: datetime) -> int:
        """Whole elapsed seconds, as shown on the timer and used by the policy."""
        return int(math.floor(self.elapsed(now)))
