"""
config.py

Defaults and timing constants.

Everything time-related is in seconds. `ToolkitConfig` bundles the values a
session needs so tests (or an impatient user) can shorten lifetimes:

>>> from password_toolkit.config import ToolkitConfig
>>> ToolkitConfig(history_ttl=5.0).history_ttl
5.0

Environment overrides (read by `ToolkitConfig.from_env`):
PASSWORD_TOOLKIT_HISTORY_TTL, PASSWORD_TOOLKIT_HISTORY_CAPACITY,
PASSWORD_TOOLKIT_CLIPBOARD_TTL, PASSWORD_TOOLKIT_SWEEP_INTERVAL
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Mapping, Optional
import os

from .errors import ConfigurationError


#Password length bounds
MIN_LENGTH = 1
MAX_LENGTH = 64
DEFAULT_LENGTH = 16

#History
HISTORY_TTL = 10 * 60          # each entry lives 10 minutes
HISTORY_CAPACITY = 10          # ring buffer size, independent of expiry
SWEEP_INTERVAL = 1.0           # expiry sweep tick

#Clipboard
CLIPBOARD_TTL = 5 * 60         # auto-clear delay after a copy
CLIPBOARD_SCRUB_PAUSE = 0.05   # pause between overwrite and blank write
CLIPBOARD_SCRUB_LENGTH = 32    # length of the random overwrite value

#Reveal animation
REVEAL_FRAMES = 10
REVEAL_INTERVAL = 0.02

#Attacker models (guesses per second)
CONSUMER_GUESS_RATE = 1e6
GPU_CLUSTER_GUESS_RATE = 1e9
SPECIALIZED_GUESS_RATE = 1e12

ENV_PREFIX = "PASSWORD_TOOLKIT_"


@dataclass(frozen=True)
class ToolkitConfig:
    """Timing and capacity knobs for one session."""

    history_ttl: float = HISTORY_TTL
    history_capacity: int = HISTORY_CAPACITY
    sweep_interval: float = SWEEP_INTERVAL
    clipboard_ttl: float = CLIPBOARD_TTL
    clipboard_scrub_pause: float = CLIPBOARD_SCRUB_PAUSE
    clipboard_scrub_length: int = CLIPBOARD_SCRUB_LENGTH
    reveal_frames: int = REVEAL_FRAMES
    reveal_interval: float = REVEAL_INTERVAL

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise ConfigurationError(f"{f.name} must be non-negative, got {value!r}")
        if self.history_capacity < 1:
            raise ConfigurationError("history_capacity must be at least 1")
        if self.sweep_interval <= 0:
            raise ConfigurationError("sweep_interval must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ToolkitConfig":
        """
        Build a config from PASSWORD_TOOLKIT_* variables, falling back to
        defaults for anything unset.
        """
        if environ is None:
            environ = os.environ
        overrides = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == "":
                continue
            cast = int if f.type in ("int", int) else float
            try:
                overrides[f.name] = cast(raw)
            except ValueError as exc:
                raise ConfigurationError(
                    f"{ENV_PREFIX}{f.name.upper()}={raw!r} is not a valid {cast.__name__}"
                ) from exc
        return cls(**overrides)


__all__ = [
    "MIN_LENGTH",
    "MAX_LENGTH",
    "DEFAULT_LENGTH",
    "HISTORY_TTL",
    "HISTORY_CAPACITY",
    "SWEEP_INTERVAL",
    "CLIPBOARD_TTL",
    "CLIPBOARD_SCRUB_PAUSE",
    "CLIPBOARD_SCRUB_LENGTH",
    "REVEAL_FRAMES",
    "REVEAL_INTERVAL",
    "CONSUMER_GUESS_RATE",
    "GPU_CLUSTER_GUESS_RATE",
    "SPECIALIZED_GUESS_RATE",
    "ToolkitConfig",
]
