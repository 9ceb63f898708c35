"""
Unit tests for the background session ticker.
"""

import asyncio

import pytest

from application.session import SessionTicker
from domain.models import SessionStatus
from tests.fakes import T0, make_sequence


async def wait_for(predicate, timeout: float = 1.0) -> bool:
    deadline = asyncio.get_running_loop().time() + timeout
    while asyncio.get_running_loop().time() < deadline:
        if predicate():
            return True
        await asyncio.sleep(0.005)
    return predicate()


@pytest.mark.unit
class TestSessionTicker:

    def test_rejects_non_positive_interval(self, runtime):
        with pytest.raises(ValueError):
            SessionTicker(runtime, interval=0)

    @pytest.mark.asyncio
    async def test_ticker_auto_advances_strict_bout(self, runtime, sequence_repo, clock):
        sequence_repo.seed([make_sequence(sequence_id="strict", goal="strict")])
        runtime.start("strict", now=T0)
        ticker = SessionTicker(runtime, interval=0.01)
        ticker.start()
        try:
            clock.advance(31)
            assert await wait_for(lambda: runtime.cursor == 1)
            assert runtime.completed_log[0].value == 30
        finally:
            await ticker.stop()

    @pytest.mark.asyncio
    async def test_ticker_skips_while_paused(self, runtime, sequence_repo, clock):
        sequence_repo.seed([make_sequence(sequence_id="strict", goal="strict")])
        runtime.start("strict", now=T0)
        runtime.pause(now=clock.advance(5))
        ticker = SessionTicker(runtime, interval=0.01)
        ticker.start()
        try:
            clock.advance(60)
            await asyncio.sleep(0.05)
            assert runtime.cursor == 0
            assert runtime.status == SessionStatus.PAUSED
        finally:
            await ticker.stop()

    @pytest.mark.asyncio
    async def test_ticker_exits_when_session_ends(self, runtime, clock):
        runtime.start("seq-1", now=T0)
        ticker = SessionTicker(runtime, interval=0.01)
        ticker.start()
        runtime.quit(now=clock.advance(3))

        assert await wait_for(lambda: not ticker.running)
        await ticker.stop()

    @pytest.mark.asyncio
    async def test_tick_errors_do_not_stop_loop(self, runtime, monkeypatch):
        runtime.start("seq-1", now=T0)
        calls = []

        def failing_tick(now=None):
            calls.append(now)
            raise RuntimeError("boom")

        monkeypatch.setattr(runtime, "tick", failing_tick)
        ticker = SessionTicker(runtime, interval=0.01)
        ticker.start()
        try:
            assert await wait_for(lambda: len(calls) >= 3)
            assert ticker.running
        finally:
            await ticker.stop()

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self, runtime):
        runtime.start("seq-1", now=T0)
        ticker = SessionTicker(runtime, interval=0.01)
        ticker.start()
        await ticker.stop()
        await ticker.stop()
        assert not ticker.running
