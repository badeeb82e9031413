"""
session.py

One owned context per user session.

`ToolkitSession` holds everything the presentation layer reads (options,
current password and its report, history, clipboard expiry) and exposes
the only ways to change it: generate, set_options, evaluate, copy,
clear_history, clear_clipboard. All mutation happens from these methods or
from timer callbacks on the same scheduler, never concurrently.

Recoverable failures (no class selected, clipboard unavailable) are sent
to the notifier and leave state untouched. RandomnessUnavailable is not
caught here.

>>> async def main():
...     session = ToolkitSession(AsyncioScheduler(), SystemClipboard(), LoggingNotifier())
...     session.start()
...     session.generate()
...     session.copy()
...     ...
...     session.close()
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, List, Optional, Tuple
import logging

from .charsets import FULL_ALPHABET
from .config import ToolkitConfig
from .ephemeral import ClipboardGuard, HistoryEntry, PasswordHistory
from .errors import ClipboardUnavailable, ConfigurationError
from .passwords import GeneratedPassword, GenerationOptions, PasswordGenerator, normalize_length
from .sampler import SecureSampler, default_sampler
from .scheduling import Scheduler, TaskSlot
from .sinks import ClipboardSink, Notifier
from .strength import StrengthReport, StrengthTier, evaluate, simple_strength

logger = logging.getLogger(__name__)

Listener = Callable[["ToolkitSession"], Any]


def _minutes_phrase(seconds: float) -> str:
    minutes = seconds / 60
    if minutes == int(minutes):
        n = int(minutes)
        return f"{n} minute" if n == 1 else f"{n} minutes"
    return f"{seconds:g} seconds"


class ToolkitSession:
    def __init__(
        self,
        scheduler: Scheduler,
        clipboard: ClipboardSink,
        notifier: Notifier,
        config: Optional[ToolkitConfig] = None,
        sampler: Optional[SecureSampler] = None,
        options: Optional[GenerationOptions] = None,
    ) -> None:
        self.scheduler = scheduler
        self.notifier = notifier
        self.config = config or ToolkitConfig()
        self.sampler = sampler or default_sampler()
        self.options = options or GenerationOptions()

        self.generator = PasswordGenerator(sampler=self.sampler, clock=scheduler.time)
        self.history = PasswordHistory(
            scheduler,
            ttl=self.config.history_ttl,
            capacity=self.config.history_capacity,
            sweep_interval=self.config.sweep_interval,
            on_change=self._changed,
        )
        self.clipboard = ClipboardGuard(
            scheduler,
            clipboard,
            sampler=self.sampler,
            notifier=notifier,
            ttl=self.config.clipboard_ttl,
            pause=self.config.clipboard_scrub_pause,
            scrub_length=self.config.clipboard_scrub_length,
            on_change=self._changed,
        )

        self.current: Optional[GeneratedPassword] = None
        self.report: Optional[StrengthReport] = None
        self.meter: Optional[StrengthTier] = None
        self.displayed = ""
        self.evaluated: Optional[StrengthReport] = None

        self._reveal = TaskSlot(scheduler, "reveal")
        self._listeners: List[Listener] = []
        self._started = False

    #observers
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(session)` after every state change. Returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    #read surface
    @property
    def history_entries(self) -> Tuple[HistoryEntry, ...]:
        return self.history.entries

    @property
    def generation_count(self) -> int:
        return self.history.generation_count

    @property
    def clipboard_expires_at(self) -> Optional[float]:
        return self.clipboard.expires_at

    @property
    def revealing(self) -> bool:
        return self._reveal.armed

    #lifecycle
    def start(self) -> None:
        if not self._started:
            self.history.start()
            self._started = True

    def close(self) -> None:
        """Cancel every timer this session owns."""
        self.history.stop()
        self.clipboard.close()
        self._reveal.cancel()
        self._started = False
        logger.debug("session closed")

    def __enter__(self) -> "ToolkitSession":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    #actions
    def set_options(self, options: Optional[GenerationOptions] = None, **changes: Any) -> bool:
        """
        Replace the options wholesale or tweak individual fields.
        Invalid values are reported and the old options kept.
        """
        try:
            new = options if options is not None else replace(self.options, **changes)
        except ConfigurationError as exc:
            self.notifier.error(str(exc))
            return False
        self.options = new
        self._changed()
        return True

    def set_length_text(self, text: str) -> int:
        """Apply free-form length input; returns the length actually used."""
        length = normalize_length(text)
        self.set_options(length=length)
        return length

    def generate(self) -> Optional[GeneratedPassword]:
        """
        Generate under the current options, record it in history, score it,
        and start the reveal sequence. Returns None when no class is selected.
        """
        try:
            password = self.generator.generate(self.options)
        except ConfigurationError as exc:
            self.notifier.error(str(exc))
            return None

        self.history.record(password)
        self.current = password
        self.report = evaluate(password.value)
        self.meter = simple_strength(password.value)
        self._start_reveal(password)
        self._changed()
        return password

    def evaluate(self, password: str) -> Optional[StrengthReport]:
        """Report on an arbitrary password. Nothing is stored in history."""
        self.evaluated = evaluate(password)
        self._changed()
        return self.evaluated

    def copy(self, text: Optional[str] = None) -> bool:
        """
        Copy `text` (default: the current password) and arm the clipboard
        clear. Returns False if there was nothing to copy or the write failed.
        """
        if text is None:
            text = self.current.value if self.current else ""
        if not text:
            return False
        try:
            self.clipboard.copy(text)
        except ClipboardUnavailable:
            logger.warning("copy to clipboard failed", exc_info=True)
            self.notifier.error("Could not copy to the clipboard.")
            return False
        self.notifier.success(
            f"Password copied! Clipboard will clear in {_minutes_phrase(self.config.clipboard_ttl)}."
        )
        return True

    def clear_history(self) -> None:
        self.history.clear()
        self.notifier.success("Generation history cleared.")

    def clear_clipboard(self) -> None:
        self.clipboard.clear_now()

    #reveal animation
    def _start_reveal(self, password: GeneratedPassword) -> None:
        frames = self.config.reveal_frames
        if frames <= 0:
            self._reveal.cancel()
            self.displayed = password.value
            return

        remaining = [frames]

        def frame() -> None:
            if remaining[0] > 0:
                remaining[0] -= 1
                self.displayed = "".join(
                    self.sampler.choice(FULL_ALPHABET) for _ in range(len(password))
                )
                self._reveal.arm(self.config.reveal_interval, frame)
            else:
                self.displayed = password.value
            self._changed()

        self._reveal.arm(self.config.reveal_interval, frame)


__all__ = ["ToolkitSession"]
