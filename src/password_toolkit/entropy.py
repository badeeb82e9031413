"""
entropy.py

Heuristic entropy estimate with structural penalties.

What this module does

- Detects which character classes occur and sums their alphabet sizes into
  a pool size; base entropy = length * log2(pool).
- Subtracts independent, additive penalties for weak structure:
    common-substring   +20 bits once, if a well-known password is contained
    repetition         sum((count - 1) * 3), only when it exceeds the length
    sequence           +3 bits per alphabetic/numeric run of 3 (either way)
    keyboard-pattern   +4 bits per 3-run on a keyboard row, per row
- Final entropy is clamped at zero.

All pattern checks are case-insensitive. Characters outside the four
classes still count toward length but add nothing to the pool.

Quick start

>>> from password_toolkit.entropy import score
>>> r = score("password")
>>> r.reasons
frozenset({<PenaltyKind.COMMON_SUBSTRING: 'common-substring'>})
>>> round(r.final_entropy_bits, 1)
17.6
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, Mapping, Optional
from collections import Counter
import logging
import math

from .charsets import DIGITS, LOWERCASE, classes_present

logger = logging.getLogger(__name__)


class PenaltyKind(Enum):
    COMMON_SUBSTRING = "common-substring"
    REPETITION = "repetition"
    SEQUENCE = "sequence"
    KEYBOARD_PATTERN = "keyboard-pattern"


#Pattern tables
COMMON_PASSWORDS = frozenset({
    "password", "123456", "12345678", "qwerty", "12345", "123456789",
    "111111", "password123", "admin", "user", "iloveyou",
})
KEYBOARD_ROWS = ("qwertyuiop", "asdfghjkl", "zxcvbnm")
SEQUENCE_RUNS = (LOWERCASE, DIGITS)

#Penalty weights (bits)
COMMON_PENALTY = 20.0
REPEAT_WEIGHT = 3.0
SEQUENCE_WEIGHT = 3.0
KEYBOARD_WEIGHT = 4.0
RUN_LENGTH = 3


@dataclass(frozen=True)
class PenaltyReport:
    """
    Outcome of scoring one password.

    `penalties` holds the bits charged per kind; only kinds that actually
    fired are present, so `reasons` is simply its key set.
    """

    base_entropy_bits: float = 0.0
    penalties: Mapping[PenaltyKind, float] = field(default_factory=dict)
    length: int = 0
    pool_size: int = 0

    @property
    def total_penalty_bits(self) -> float:
        return float(sum(self.penalties.values()))

    @property
    def reasons(self) -> FrozenSet[PenaltyKind]:
        return frozenset(self.penalties)

    @property
    def final_entropy_bits(self) -> float:
        return max(0.0, self.base_entropy_bits - self.total_penalty_bits)


#Helpers
def _triples(text: str) -> Iterator[str]:
    for i in range(len(text) - RUN_LENGTH + 1):
        yield text[i:i + RUN_LENGTH]


def _in_run(sub: str, run: str) -> bool:
    return sub in run or sub in run[::-1]


def pool_size(password: str) -> int:
    """Sum of alphabet sizes of the classes present in `password`."""
    return sum(cls.size for cls in classes_present(password))


def base_entropy_bits(password: str) -> float:
    size = pool_size(password)
    if size == 0:
        return 0.0
    return len(password) * math.log2(size)


#Penalty detectors (each takes the case-folded password)
def common_substring_penalty(lowered: str) -> float:
    if any(common in lowered for common in COMMON_PASSWORDS):
        return COMMON_PENALTY
    return 0.0


def repetition_penalty(lowered: str, raw_length: Optional[int] = None) -> float:
    """
    (count - 1) * 3 summed over repeated characters. Returns 0 unless the
    total exceeds the length of the password as typed, so light repetition
    is free. Lowercasing can lengthen a string (e.g. "\u0130"), hence
    `raw_length`; it defaults to len(lowered).
    """
    if raw_length is None:
        raw_length = len(lowered)
    counts = Counter(lowered)
    penalty = sum((c - 1) * REPEAT_WEIGHT for c in counts.values() if c > 1)
    return penalty if penalty > raw_length else 0.0


def sequence_penalty(lowered: str) -> float:
    hits = sum(
        1 for sub in _triples(lowered)
        if any(_in_run(sub, run) for run in SEQUENCE_RUNS)
    )
    return hits * SEQUENCE_WEIGHT


def keyboard_penalty(lowered: str) -> float:
    # Rows are scanned independently; a triple can only ever sit in one row.
    hits = sum(
        1 for row in KEYBOARD_ROWS for sub in _triples(lowered) if _in_run(sub, row)
    )
    return hits * KEYBOARD_WEIGHT


#Scorer
def score(password: str) -> PenaltyReport:
    """
    Score `password`. Empty input (or input with no recognised class)
    yields an all-zero report.
    """
    if not password:
        return PenaltyReport()

    size = pool_size(password)
    if size == 0:
        return PenaltyReport(length=len(password))

    base = len(password) * math.log2(size)
    lowered = password.lower()

    charged = (
        (PenaltyKind.COMMON_SUBSTRING, common_substring_penalty(lowered)),
        (PenaltyKind.REPETITION, repetition_penalty(lowered, len(password))),
        (PenaltyKind.SEQUENCE, sequence_penalty(lowered)),
        (PenaltyKind.KEYBOARD_PATTERN, keyboard_penalty(lowered)),
    )
    penalties: Dict[PenaltyKind, float] = {kind: bits for kind, bits in charged if bits > 0}

    report = PenaltyReport(
        base_entropy_bits=base,
        penalties=penalties,
        length=len(password),
        pool_size=size,
    )
    logger.debug(
        "scored length=%d pool=%d base=%.2f penalty=%.2f reasons=%s",
        report.length,
        size,
        base,
        report.total_penalty_bits,
        sorted(k.value for k in penalties),
    )
    return report


__all__ = [
    "PenaltyKind",
    "PenaltyReport",
    "COMMON_PASSWORDS",
    "KEYBOARD_ROWS",
    "pool_size",
    "base_entropy_bits",
    "common_substring_penalty",
    "repetition_penalty",
    "sequence_penalty",
    "keyboard_penalty",
    "score",
]
