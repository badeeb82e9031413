"""Tests for TaskSlot and the asyncio-backed scheduler."""

from __future__ import annotations

import asyncio

import pytest

from password_toolkit.config import ToolkitConfig
from password_toolkit.scheduling import AsyncioScheduler, TaskSlot
from password_toolkit.session import ToolkitSession


class _LeakyHandle:
    def cancel(self):
        pass

    def cancelled(self):
        return False


class LeakyScheduler:
    """Cancel does nothing: every callback is still delivered."""

    def __init__(self):
        self.callbacks = []

    def time(self):
        return 0.0

    def call_later(self, delay, callback):
        self.callbacks.append(callback)
        return _LeakyHandle()

    def call_every(self, interval, callback):
        raise NotImplementedError


class TestTaskSlot:
    def test_rearm_replaces_pending(self, scheduler):
        slot = TaskSlot(scheduler, "test")
        fired = []
        slot.arm(10, lambda: fired.append("first"))
        slot.arm(10, lambda: fired.append("second"))
        scheduler.advance(20)
        assert fired == ["second"]
        assert not slot.armed

    def test_stale_completion_dropped(self):
        sched = LeakyScheduler()
        slot = TaskSlot(sched, "test")
        fired = []
        slot.arm(1, lambda: fired.append("first"))
        slot.arm(1, lambda: fired.append("second"))
        for cb in sched.callbacks:
            cb()
        assert fired == ["second"]

    def test_cancel_then_late_delivery(self):
        sched = LeakyScheduler()
        slot = TaskSlot(sched, "test")
        fired = []
        slot.arm(1, lambda: fired.append("x"))
        assert slot.cancel()
        assert not slot.cancel()
        sched.callbacks[0]()
        assert fired == []

    def test_tokens_increase(self, scheduler):
        slot = TaskSlot(scheduler, "test")
        t1 = slot.arm(1, lambda: None)
        t2 = slot.arm(1, lambda: None)
        assert t2 > t1
        assert slot.is_current(t2)
        assert not slot.is_current(t1)


class TestAsyncioScheduler:
    def test_call_later_and_every(self):
        async def main():
            sched = AsyncioScheduler()
            once = []
            ticks = []
            sched.call_later(0.01, lambda: once.append(1))
            handle = sched.call_every(0.01, lambda: ticks.append(1))
            await asyncio.sleep(0.1)
            handle.cancel()
            seen = len(ticks)
            await asyncio.sleep(0.05)
            return once, ticks, seen, handle

        once, ticks, seen, handle = asyncio.run(main())
        assert once == [1]
        assert seen >= 1
        assert len(ticks) == seen
        assert handle.cancelled()

    def test_interval_must_be_positive(self):
        async def main():
            AsyncioScheduler().call_every(0, lambda: None)

        with pytest.raises(ValueError):
            asyncio.run(main())

    def test_session_end_to_end(self, clipboard, notifier):
        config = ToolkitConfig(
            clipboard_ttl=0.05,
            clipboard_scrub_pause=0.01,
            reveal_interval=0.001,
            reveal_frames=3,
        )

        async def main():
            with ToolkitSession(AsyncioScheduler(), clipboard, notifier, config=config) as session:
                pwd = session.generate()
                assert session.copy()
                await asyncio.sleep(0.3)
                return session, pwd

        session, pwd = asyncio.run(main())
        assert session.displayed == pwd.value
        assert clipboard.writes[0] == pwd.value
        assert clipboard.value == ""
        assert "Clipboard cleared for security." in notifier.successes
