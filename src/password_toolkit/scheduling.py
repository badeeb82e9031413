"""
scheduling.py

Cancellable timers for the single-threaded session.

All ephemeral state (history sweep, clipboard expiry, reveal animation) is
driven by callbacks scheduled on one event loop. Two pieces:

- `Scheduler`: the minimal loop surface the rest of the package needs
  (wall clock, one-shot timer, fixed-interval timer). `AsyncioScheduler`
  implements it on top of an asyncio loop; tests use a virtual clock.
- `TaskSlot`: a named slot holding at most one pending task. Re-arming
  cancels the previous task first and bumps a token; a callback whose
  token is no longer current is dropped, so a late completion can never
  overwrite newer state.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol
import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class Handle(Protocol):
    def cancel(self) -> None: ...

    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    def time(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[[], Any]) -> Handle: ...

    def call_every(self, interval: float, callback: Callable[[], Any]) -> Handle: ...


class _PeriodicHandle:
    """Re-arms itself on the loop after every tick until cancelled."""

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], Any]) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._handle = loop.call_later(interval, self._tick)

    def _tick(self) -> None:
        if self._cancelled:
            return
        self._handle = self._loop.call_later(self._interval, self._tick)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()

    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler:
    """
    Scheduler backed by an asyncio event loop.

    Parameters

    loop : asyncio loop, optional
        Defaults to the running loop, so construct this from inside a
        coroutine (or pass a loop explicitly).
    clock : callable
        Wall clock used for expiry instants. Delays themselves are relative
        and go through the loop's monotonic timer.
    """

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.loop = loop or asyncio.get_running_loop()
        self._clock = clock

    def time(self) -> float:
        return self._clock()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)

    def call_every(self, interval: float, callback: Callable[[], Any]) -> _PeriodicHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        return _PeriodicHandle(self.loop, interval, callback)


class TaskSlot:
    """
    At most one pending task, identified by a monotonically increasing token.

    >>> slot = TaskSlot(scheduler, "clipboard")
    >>> slot.arm(300, clear)      # token 1
    >>> slot.arm(300, clear)      # cancels token 1, arms token 2
    """

    def __init__(self, scheduler: Scheduler, name: str) -> None:
        self.scheduler = scheduler
        self.name = name
        self.token = 0
        self._handle: Optional[Handle] = None

    @property
    def armed(self) -> bool:
        return self._handle is not None

    def arm(self, delay: float, callback: Callable[[], Any]) -> int:
        """Cancel whatever is pending and schedule `callback` after `delay`."""
        self.cancel()
        self.token += 1
        token = self.token

        def fire() -> None:
            if token != self.token:
                logger.debug("%s: dropping stale task %d", self.name, token)
                return
            self._handle = None
            callback()

        self._handle = self.scheduler.call_later(delay, fire)
        logger.debug("%s: armed task %d for %.3fs", self.name, token, delay)
        return token

    def cancel(self) -> bool:
        """Cancel the pending task, if any. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        # Invalidate the token too, in case the loop already queued the callback.
        self.token += 1
        logger.debug("%s: cancelled pending task", self.name)
        return True

    def is_current(self, token: int) -> bool:
        return token == self.token


__all__ = [
    "Handle",
    "Scheduler",
    "AsyncioScheduler",
    "TaskSlot",
]
