"""
password_toolkit

Secure password generation and strength estimation, with short-lived
in-memory history and self-clearing clipboard copies.

>>> from password_toolkit import GenerationOptions, make_password, evaluate
>>> pwd = make_password(GenerationOptions(length=20))
>>> evaluate(pwd.value).tier.level >= 5
True
"""

from .charsets import CharacterClass, char_class_of
from .config import ToolkitConfig
from .entropy import PenaltyKind, PenaltyReport, score
from .errors import (
    ClipboardUnavailable,
    ConfigurationError,
    NoClassSelected,
    RandomnessUnavailable,
    ToolkitError,
)
from .ephemeral import ClipboardGuard, ClipboardState, HistoryEntry, PasswordHistory
from .passwords import (
    GeneratedPassword,
    GenerationOptions,
    PasswordGenerator,
    make_password,
    normalize_length,
)
from .sampler import SecureSampler, uniform_int
from .scheduling import AsyncioScheduler, TaskSlot
from .session import ToolkitSession
from .strength import CrackTimeEstimate, StrengthReport, StrengthTier, classify, evaluate, simple_strength

__version__ = "0.1.0"

__all__ = [
    "CharacterClass",
    "char_class_of",
    "ToolkitConfig",
    "PenaltyKind",
    "PenaltyReport",
    "score",
    "ToolkitError",
    "ConfigurationError",
    "NoClassSelected",
    "RandomnessUnavailable",
    "ClipboardUnavailable",
    "ClipboardGuard",
    "ClipboardState",
    "HistoryEntry",
    "PasswordHistory",
    "GeneratedPassword",
    "GenerationOptions",
    "PasswordGenerator",
    "make_password",
    "normalize_length",
    "SecureSampler",
    "uniform_int",
    "AsyncioScheduler",
    "TaskSlot",
    "ToolkitSession",
    "CrackTimeEstimate",
    "StrengthReport",
    "StrengthTier",
    "classify",
    "evaluate",
    "simple_strength",
]
