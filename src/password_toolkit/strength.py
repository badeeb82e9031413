"""
strength.py

Turn a PenaltyReport into something a person can act on.

- Seven tiers (0..6) with fixed upper bounds in bits; a report lands in the
  lowest tier whose bound is strictly greater than its final entropy.
- A narrative comment per tier, replaced by a reason-specific warning when
  penalties ate more than 40% of the base entropy.
- Crack-time projections: 2^bits guesses divided by three attacker rates,
  rendered as human-scaled durations.

Quick start

>>> from password_toolkit.entropy import score
>>> from password_toolkit.strength import classify
>>> rep = classify(score("Tr0ub4dor&3"))
>>> rep.tier.name, rep.crack_times.gpu_cluster_label
('Moderate', '...')
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Optional, Tuple
import math

from .config import (
    CONSUMER_GUESS_RATE,
    GPU_CLUSTER_GUESS_RATE,
    SPECIALIZED_GUESS_RATE,
)
from .entropy import PenaltyKind, PenaltyReport, score


#Tier table
@dataclass(frozen=True)
class StrengthTier:
    level: int
    upper_bits: float  # exclusive; math.inf for the top tier
    name: str
    color: str
    comment: str


TIERS: Tuple[StrengthTier, ...] = (
    StrengthTier(0, 25, "Very Weak", "#ef4444",
                 "Way too weak. A password like this could be cracked in seconds. "
                 "Avoid using it anywhere, even for temporary stuff."),
    StrengthTier(1, 40, "Weak", "#f97316",
                 "Still pretty weak. Maybe okay for throwaway accounts or temporary logins, "
                 "but don't use this where it matters."),
    StrengthTier(2, 60, "Fair", "#eab308",
                 "Not terrible, but not great either. Could work for low-risk accounts, "
                 "but consider making it longer or adding more variety."),
    StrengthTier(3, 80, "Moderate", "#a3e635",
                 "Decent. Probably fine for casual sites or apps, but don't use it for "
                 "banking, email, or anything sensitive."),
    StrengthTier(4, 100, "Strong", "#4ade80",
                 "Nice! This would work well for most accounts. Still, using a password "
                 "manager to create and store it is your best bet."),
    StrengthTier(5, 120, "Very Strong", "#22c55e",
                 "Solid stuff. You can confidently use this for sensitive accounts like "
                 "your email or cloud storage."),
    StrengthTier(6, math.inf, "Excellent", "#06b6d4",
                 "Top-tier. This one's ready for high-security needs like financial "
                 "accounts, admin panels, or encrypted drives."),
)

_BOUNDS = [t.upper_bits for t in TIERS[:-1]]

# Checked in this order; the first reason present wins.
PENALTY_WARNINGS = (
    (PenaltyKind.COMMON_SUBSTRING,
     "Uh-oh, this password contains something super common. Hackers try these "
     "first, so it's not safe for anything."),
    (PenaltyKind.REPETITION,
     "It looks long, but there's too much repetition. That makes it easier to "
     "crack than you'd think."),
    (PenaltyKind.SEQUENCE,
     "Avoid patterns like 'abc' or '123'. They're predictable and easy to brute-force."),
    (PenaltyKind.KEYBOARD_PATTERN,
     "Patterns like 'qwerty' or 'asdf' are a hacker's favorite guess. Try mixing "
     "things up more."),
)
PENALTY_DOMINANCE = 0.4


def tier_for_bits(bits: float) -> StrengthTier:
    """Lowest tier whose upper bound exceeds `bits`."""
    if math.isnan(bits):
        raise ValueError("bits must be a number")
    return TIERS[bisect_right(_BOUNDS, bits)]


def penalty_comment(report: PenaltyReport) -> Optional[str]:
    """
    Warning text when penalties dominate the base entropy, else None.
    """
    if not report.reasons:
        return None
    if report.total_penalty_bits <= report.base_entropy_bits * PENALTY_DOMINANCE:
        return None
    for kind, text in PENALTY_WARNINGS:
        if kind in report.reasons:
            return text
    return None


#Crack times
_MINUTE = 60
_HOUR = 3600
_DAY = 86400
_YEAR = 31536000


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def format_duration(seconds: float) -> str:
    """
    Human-scaled rendering of a (possibly huge) number of seconds.

    >>> format_duration(0.2), format_duration(90), format_duration(3e16)
    ('< 1 sec', '2 min', '951.3m years')
    """
    if seconds < 1:
        return "< 1 sec"
    if seconds < _MINUTE:
        return f"{_round_half_up(seconds)} sec"
    if seconds < _HOUR:
        return f"{_round_half_up(seconds / _MINUTE)} min"
    if seconds < _DAY:
        return f"{_round_half_up(seconds / _HOUR)} hours"
    if seconds < _YEAR:
        return f"{_round_half_up(seconds / _DAY)} days"

    years = seconds / _YEAR
    if years < 1e3:
        return f"{_round_half_up(years)} years"
    if years < 1e6:
        return f"{years / 1e3:.1f}k years"
    if years < 1e9:
        return f"{years / 1e6:.1f}m years"
    if years < 1e12:
        return f"{years / 1e9:.1f}b years"
    return "Eternity"


def search_space(bits: float) -> float:
    """2**bits as a float; inf once it no longer fits."""
    try:
        return math.pow(2.0, bits)
    except OverflowError:
        return math.inf


@dataclass(frozen=True)
class CrackTimeEstimate:
    """Seconds to exhaust the search space under each attacker model."""

    consumer: float
    gpu_cluster: float
    specialized: float

    @classmethod
    def from_bits(cls, bits: float) -> "CrackTimeEstimate":
        space = search_space(bits)
        return cls(
            consumer=space / CONSUMER_GUESS_RATE,
            gpu_cluster=space / GPU_CLUSTER_GUESS_RATE,
            specialized=space / SPECIALIZED_GUESS_RATE,
        )

    @property
    def consumer_label(self) -> str:
        return format_duration(self.consumer)

    @property
    def gpu_cluster_label(self) -> str:
        return format_duration(self.gpu_cluster)

    @property
    def specialized_label(self) -> str:
        return format_duration(self.specialized)


#Reports
@dataclass(frozen=True)
class StrengthReport:
    tier: StrengthTier
    comment: str
    crack_times: CrackTimeEstimate
    penalty: PenaltyReport

    @property
    def length(self) -> int:
        return self.penalty.length

    @property
    def entropy(self) -> int:
        """Final entropy rounded to whole bits, for display."""
        return _round_half_up(self.penalty.final_entropy_bits)


def classify(report: PenaltyReport) -> StrengthReport:
    """Tier, comment and crack times for a scored password."""
    bits = report.final_entropy_bits
    tier = tier_for_bits(bits)
    comment = penalty_comment(report) or tier.comment
    return StrengthReport(
        tier=tier,
        comment=comment,
        crack_times=CrackTimeEstimate.from_bits(bits),
        penalty=report,
    )


def evaluate(password: str) -> Optional[StrengthReport]:
    """Score and classify in one go. Empty input gives None."""
    if not password:
        return None
    return classify(score(password))


def simple_strength(password: str) -> Optional[StrengthTier]:
    """Tier only, for compact meters. Empty input gives None."""
    if not password:
        return None
    return tier_for_bits(score(password).final_entropy_bits)


__all__ = [
    "StrengthTier",
    "TIERS",
    "PENALTY_WARNINGS",
    "tier_for_bits",
    "penalty_comment",
    "format_duration",
    "search_space",
    "CrackTimeEstimate",
    "StrengthReport",
    "classify",
    "evaluate",
    "simple_strength",
]
