"""
Background ticker for a running session.

Calls ``SessionRuntime.tick(now)`` at a fixed interval so countdown cues and
strict-mode auto-advance happen without user input. The loop skips work while
the session is paused and exits once the session has ended. Ticks run in a
worker thread because completing the last bout writes to the execution store.
"""

import asyncio
import logging
from typing import Optional

from application.session.runtime import SessionRuntime
from domain.models import SessionStatus

logger = logging.getLogger(__name__)


class SessionTicker:
    """
    Fixed-interval asyncio driver for one SessionRuntime.

    Usage:
        ticker = SessionTicker(runtime, interval=0.25)
        ticker.start()
        ...
        await ticker.stop()
    """

    def __init__(self, runtime: SessionRuntime, interval: float = 0.25):
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self.runtime = runtime
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking on the current event loop. Starting twice is a no-op."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.debug(f"Ticker started for session {self.runtime.execution_id}")

    async def stop(self) -> None:
        """Cancel the tick loop and wait for it to finish."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug(f"Ticker stopped for session {self.runtime.execution_id}")

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            status = self.runtime.status
            if not status.is_active:
                break
            if status != SessionStatus.RUNNING:
                continue
            try:
                await asyncio.to_thread(self.runtime.tick)
            except Exception as e:
                logger.error(f"Tick failed for session {self.runtime.execution_id}: {e}")
