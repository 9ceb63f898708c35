"""
Live session registry for the host process.

Holds one SessionRuntime (and its ticker) per execution. A runtime is
discarded once the session is closed: quit with nothing left to flush,
completed and rated, or completed and dismissed. Sessions nobody has touched
for ``idle_ttl_seconds`` are swept: active ones are quit first so the bouts
done so far are saved.

The registry is only used from the event loop thread. Runtime calls that may
reach a store are handed to worker threads.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from application.errors import SessionLimitReached, SessionNotFound
from application.session.runtime import SessionRuntime, utc_now
from application.session.ticker import SessionTicker

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    In-process store of running sessions.

    Args:
        tick_interval: Seconds between ticks; 0 disables the background ticker
        max_active_sessions: Upper bound on concurrently held sessions
        idle_ttl_seconds: Sessions untouched for this long are swept; 0 disables
        time_source: Clock used for idle tracking
    """

    def __init__(
        self,
        tick_interval: float = 0.25,
        max_active_sessions: int = 100,
        idle_ttl_seconds: float = 0,
        time_source: Callable[[], datetime] = utc_now,
    ):
        self.tick_interval = tick_interval
        self.max_active_sessions = max_active_sessions
        self.idle_ttl_seconds = idle_ttl_seconds
        self._time_source = time_source
        self._sessions: Dict[str, SessionRuntime] = {}
        self._tickers: Dict[str, SessionTicker] = {}
        self._last_seen: Dict[str, datetime] = {}
        self._starting = 0

    def __len__(self) -> int:
        return len(self._sessions)

    async def start(
        self,
        runtime: SessionRuntime,
        sequence_id: str,
        now: Optional[datetime] = None,
    ) -> SessionRuntime:
        """
        Start ``runtime`` on a sequence and register it.

        Idle sessions are swept first. A slot is reserved while the runtime
        loads the sequence, so concurrent starts cannot overshoot the limit.

        Raises:
            SessionLimitReached: the registry is full
            SequenceNotFound, SequenceAccessDenied, EmptySequence,
            PersistenceError: from SessionRuntime.start
        """
        await self.sweep()
        if len(self._sessions) + self._starting >= self.max_active_sessions:
            raise SessionLimitReached(self.max_active_sessions)

        self._starting += 1
        try:
            await asyncio.to_thread(runtime.start, sequence_id, now)
        finally:
            self._starting -= 1

        execution_id = runtime.execution_id
        self._sessions[execution_id] = runtime
        self._last_seen[execution_id] = self._time_source()

        if self.tick_interval > 0:
            ticker = SessionTicker(runtime, interval=self.tick_interval)
            ticker.start()
            self._tickers[execution_id] = ticker

        logger.info(f"Registered session {execution_id} ({len(self._sessions)} active)")
        return runtime

    def get(self, execution_id: str, user_id: str) -> SessionRuntime:
        """
        Look up a live session owned by ``user_id`` and mark it as used.

        Raises:
            SessionNotFound: unknown ID or owned by another user
        """
        runtime = self._sessions.get(execution_id)
        if runtime is None or runtime.user_id != user_id:
            raise SessionNotFound(execution_id)
        self._last_seen[execution_id] = self._time_source()
        return runtime

    async def release_if_closed(self, runtime: SessionRuntime) -> bool:
        """Discard ``runtime`` if nothing further can happen to it."""
        if not runtime.is_closed:
            return False
        await self.discard(runtime.execution_id)
        return True

    async def sweep(self) -> List[str]:
        """
        Discard sessions idle for longer than ``idle_ttl_seconds``.

        Active sessions are quit and unsaved logs get one more flush attempt
        before the runtime is dropped.

        Returns:
            Execution IDs that were discarded
        """
        if self.idle_ttl_seconds <= 0:
            return []

        now = self._time_source()
        expired = [
            execution_id
            for execution_id, seen in self._last_seen.items()
            if (now - seen).total_seconds() >= self.idle_ttl_seconds
        ]
        for execution_id in expired:
            runtime = self._sessions.get(execution_id)
            if runtime is not None:
                await asyncio.to_thread(self._expire, runtime, now)
            await self.discard(execution_id)

        if expired:
            logger.info(f"Swept {len(expired)} idle sessions ({len(self._sessions)} active)")
        return expired

    def _expire(self, runtime: SessionRuntime, now: datetime) -> None:
        if runtime.status.is_active:
            runtime.quit(now=now)
        elif runtime.pending_flush:
            runtime.retry_flush(now=now)
        if runtime.pending_flush:
            logger.warning(
                f"Dropping idle session {runtime.execution_id} with "
                f"{len(runtime.completed_log)} unsaved bouts"
            )

    async def discard(self, execution_id: str) -> None:
        """Stop the ticker and forget the session."""
        ticker = self._tickers.pop(execution_id, None)
        if ticker is not None:
            await ticker.stop()
        self._last_seen.pop(execution_id, None)
        if self._sessions.pop(execution_id, None) is not None:
            logger.info(f"Discarded session {execution_id}")

    async def shutdown(self) -> None:
        """Stop every ticker and drop all sessions."""
        for execution_id in list(self._sessions):
            await self.discard(execution_id)
