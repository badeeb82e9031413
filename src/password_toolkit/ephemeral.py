"""
ephemeral.py

Time-boxed, memory-only state: password history and clipboard expiry.

History
- Newest first, capped at `capacity` entries regardless of remaining life.
- Each entry expires `ttl` seconds after creation. Expiry is noticed by a
  periodic sweep, so an expired entry can stay visible for up to one tick.
- A new password is recorded only if it differs from the previous one
  (just the previous one, not the whole history).

Clipboard
- Copying arms a one-shot timer; arming again cancels the pending one.
- When it fires: write a random throwaway value, pause briefly, then write
  "". Overwriting first means a reader racing the clear sees noise, not
  the password.

Quick start
>>> history = PasswordHistory(scheduler)
>>> history.start()                 # begins the sweep
>>> history.record(pwd)
True
>>> guard = ClipboardGuard(scheduler, SystemClipboard())
>>> guard.copy("s3cret!")           # clears itself 5 minutes later
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Tuple
import logging
import string

from .config import (
    CLIPBOARD_SCRUB_LENGTH,
    CLIPBOARD_SCRUB_PAUSE,
    CLIPBOARD_TTL,
    HISTORY_CAPACITY,
    HISTORY_TTL,
    SWEEP_INTERVAL,
)
from .errors import ClipboardUnavailable
from .passwords import GeneratedPassword
from .sampler import SecureSampler, default_sampler
from .scheduling import Handle, Scheduler, TaskSlot
from .sinks import ClipboardSink, Notifier

logger = logging.getLogger(__name__)

SCRUB_ALPHABET = string.ascii_letters + string.digits


#Formatting helpers
def format_countdown(expires_at: float, now: float) -> Optional[str]:
    """Remaining time as MM:SS, or None once expired."""
    left = expires_at - now
    if left <= 0:
        return None
    minutes, seconds = divmod(int(left), 60)
    return f"{minutes:02d}:{seconds:02d}"


def format_timestamp(ts: float) -> str:
    """Local wall-clock rendering used next to history entries."""
    dt = datetime.fromtimestamp(ts)
    return f"{dt:%H:%M:%S} - {dt:%Y-%m-%d}"


#History
@dataclass(frozen=True)
class HistoryEntry:
    password: GeneratedPassword
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class PasswordHistory:
    """
    Bounded, self-expiring list of recently generated passwords.

    Parameters

    scheduler : Scheduler
        Supplies the clock and runs the sweep.
    ttl : float, default=600
        Lifetime of each entry in seconds.
    capacity : int, default=10
        Maximum number of entries kept; the oldest is evicted first.
    sweep_interval : float, default=1.0
        Seconds between expiry sweeps once `start()` has been called.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        ttl: float = HISTORY_TTL,
        capacity: int = HISTORY_CAPACITY,
        sweep_interval: float = SWEEP_INTERVAL,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.scheduler = scheduler
        self.ttl = ttl
        self.capacity = capacity
        self.sweep_interval = sweep_interval
        self.on_change = on_change
        self.generation_count = 0
        self._entries: List[HistoryEntry] = []
        self._last_value: Optional[str] = None
        self._sweeper: Optional[Handle] = None

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        """Visible entries, newest first."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    #lifecycle
    def start(self) -> None:
        if self._sweeper is None:
            self._sweeper = self.scheduler.call_every(self.sweep_interval, self.sweep)
            logger.debug("history sweep started every %.3fs", self.sweep_interval)

    def stop(self) -> None:
        if self._sweeper is not None:
            self._sweeper.cancel()
            self._sweeper = None
            logger.debug("history sweep stopped")

    @property
    def running(self) -> bool:
        return self._sweeper is not None

    #mutations
    def record(self, password: GeneratedPassword) -> bool:
        """
        Push `password` unless it equals the previously recorded value.

        The generation count moves on every accepted password except the
        very first one of the session. Returns True if an entry was added.
        """
        if password.value == self._last_value:
            logger.debug("skipping history entry identical to previous password")
            return False

        now = self.scheduler.time()
        entry = HistoryEntry(password=password, created_at=now, expires_at=now + self.ttl)
        self._entries.insert(0, entry)
        evicted = self._entries[self.capacity:]
        del self._entries[self.capacity:]
        if evicted:
            logger.debug("evicted %d history entries past capacity", len(evicted))

        if self._last_value is not None:
            self.generation_count += 1
        self._last_value = password.value
        self._changed()
        return True

    def sweep(self) -> List[HistoryEntry]:
        """Drop expired entries. Returns what was removed."""
        now = self.scheduler.time()
        expired = [e for e in self._entries if e.is_expired(now)]
        if expired:
            self._entries = [e for e in self._entries if not e.is_expired(now)]
            logger.debug("swept %d expired history entries", len(expired))
            self._changed()
        return expired

    def clear(self) -> None:
        self._entries.clear()
        logger.debug("history cleared")
        self._changed()


#Clipboard
class ClipboardState(Enum):
    UNARMED = "unarmed"
    ARMED = "armed"
    FIRED = "fired"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ClipboardTimer:
    armed_at: float
    expires_at: float


class ClipboardGuard:
    """
    Copies text to a clipboard and wipes it again after `ttl` seconds.

    Parameters

    scheduler : Scheduler
    clipboard : ClipboardSink
    sampler : SecureSampler, optional
        Used for the throwaway overwrite value.
    notifier : Notifier, optional
        Told when an automatic clear succeeded.
    ttl, pause, scrub_length
        Delay before clearing, gap between overwrite and blank write, and
        length of the overwrite value.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        clipboard: ClipboardSink,
        sampler: Optional[SecureSampler] = None,
        notifier: Optional[Notifier] = None,
        ttl: float = CLIPBOARD_TTL,
        pause: float = CLIPBOARD_SCRUB_PAUSE,
        scrub_length: int = CLIPBOARD_SCRUB_LENGTH,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.scheduler = scheduler
        self.clipboard = clipboard
        self.sampler = sampler or default_sampler()
        self.notifier = notifier
        self.ttl = ttl
        self.pause = pause
        self.scrub_length = scrub_length
        self.on_change = on_change
        self.state = ClipboardState.UNARMED
        self.timer: Optional[ClipboardTimer] = None
        self.fired_count = 0
        self._expiry = TaskSlot(scheduler, "clipboard-expiry")
        self._blank = TaskSlot(scheduler, "clipboard-blank")

    @property
    def expires_at(self) -> Optional[float]:
        return self.timer.expires_at if self.timer else None

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def copy(self, text: str) -> ClipboardTimer:
        """
        Write `text` and (re)arm the expiry timer.

        Raises ClipboardUnavailable if the write fails; in that case any
        previously armed timer is left exactly as it was.
        """
        self.clipboard.write(text)

        # A scrub still in flight would blank the value just copied.
        self._blank.cancel()
        if self._expiry.cancel():
            logger.debug("replacing pending clipboard timer")

        now = self.scheduler.time()
        self.timer = ClipboardTimer(armed_at=now, expires_at=now + self.ttl)
        self._expiry.arm(self.ttl, self._fire)
        self.state = ClipboardState.ARMED
        self._changed()
        return self.timer

    def _fire(self) -> None:
        self.state = ClipboardState.FIRED
        self.fired_count += 1
        self.timer = None
        logger.debug("clipboard timer fired")
        self._scrub()
        self._changed()

    def _scrub(self) -> None:
        noise = "".join(self.sampler.choice(SCRUB_ALPHABET) for _ in range(self.scrub_length))
        try:
            self.clipboard.write(noise)
        except ClipboardUnavailable:
            logger.warning("failed to overwrite clipboard", exc_info=True)
            return
        self._blank.arm(self.pause, self._write_blank)

    def _write_blank(self) -> None:
        try:
            self.clipboard.write("")
        except ClipboardUnavailable:
            logger.warning("failed to clear clipboard", exc_info=True)
            return
        if self.notifier is not None:
            self.notifier.success("Clipboard cleared for security.")

    def clear_now(self) -> None:
        """Cancel the pending timer and scrub the clipboard immediately."""
        self.cancel()
        self._scrub()

    def cancel(self) -> bool:
        """Disarm without touching the clipboard. True if a timer was pending."""
        pending = self._expiry.cancel()
        self.timer = None
        if pending:
            self.state = ClipboardState.CANCELLED
            self._changed()
        return pending

    def close(self) -> None:
        self.cancel()
        self._blank.cancel()


__all__ = [
    "HistoryEntry",
    "PasswordHistory",
    "ClipboardState",
    "ClipboardTimer",
    "ClipboardGuard",
    "format_countdown",
    "format_timestamp",
]
