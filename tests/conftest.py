import heapq
import itertools

import matplotlib

matplotlib.use("Agg")

import pytest

from password_toolkit.errors import ClipboardUnavailable
from password_toolkit.sampler import SecureSampler


class _ManualHandle:
    def __init__(self):
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def cancelled(self):
        return self._cancelled


class _PeriodicManualHandle(_ManualHandle):
    pass


class ManualScheduler:
    """Virtual clock; nothing runs until advance() is called."""

    def __init__(self, start=1_700_000_000.0):
        self.now = start
        self._queue = []
        self._seq = itertools.count()

    def time(self):
        return self.now

    def call_later(self, delay, callback):
        handle = _ManualHandle()
        heapq.heappush(self._queue, (self.now + delay, next(self._seq), handle, callback))
        return handle

    def call_every(self, interval, callback):
        handle = _PeriodicManualHandle()

        def tick():
            if handle.cancelled():
                return
            heapq.heappush(self._queue, (self.now + interval, next(self._seq), handle, tick))
            callback()

        heapq.heappush(self._queue, (self.now + interval, next(self._seq), handle, tick))
        return handle

    def advance(self, seconds):
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            when, _, handle, callback = heapq.heappop(self._queue)
            self.now = when
            if not handle.cancelled():
                callback()
        self.now = target

    @property
    def pending(self):
        return sum(1 for _, _, h, _ in self._queue if not h.cancelled())


class FakeClipboard:
    def __init__(self):
        self.writes = []
        self.fail = False

    @property
    def value(self):
        return self.writes[-1] if self.writes else None

    def write(self, text):
        if self.fail:
            raise ClipboardUnavailable("clipboard is broken")
        self.writes.append(text)


class RecordingNotifier:
    def __init__(self):
        self.successes = []
        self.errors = []

    def success(self, message):
        self.successes.append(message)

    def error(self, message):
        self.errors.append(message)


def scripted_sampler(words):
    """Sampler whose source replays `words` in order."""
    it = iter(words)
    return SecureSampler(source=lambda: next(it))


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_sampler():
    return scripted_sampler
