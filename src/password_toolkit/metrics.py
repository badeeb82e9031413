"""
metrics.py

Statistical checks for the sampler and the generator.

What this module does

- Builds histograms over sampled integers.
- Runs a Chi-square test against the uniform distribution.
- Computes KL divergence (with safe smoothing).
- Counts how often each character class shows up in generated passwords.
- `audit_sampler` bundles the above into one call.

Design choices

- "Uniform" means: over all outcomes 0..support_size-1 you specify.
- KL divergence uses additive epsilon smoothing to avoid log(0).

Quick start

>>> from password_toolkit.metrics import audit_sampler
>>> audit = audit_sampler(n=10, size=20000)
>>> audit.chi_square.pvalue > 0.001
True

Dependencies

- numpy
- scipy (for chi-square p-values)
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
import numpy as np
from scipy.stats import chisquare

from .charsets import CharacterClass, char_class_of
from .sampler import SecureSampler, default_sampler


#Helpers: counts / probabilities

def counts_to_vector(
    counts: Mapping[int, int],
    support_size: int,
) -> np.ndarray:
    """Dense float vector indexed 0..support_size-1; absent or out-of-range keys drop out."""
    keys = np.fromiter((k for k in counts if 0 <= k < support_size), dtype=int)
    vals = np.fromiter((counts[k] for k in keys), dtype=float, count=len(keys))
    v = np.zeros(support_size, dtype=float)
    v[keys] = vals
    return v


def normalize_counts(counts: Mapping) -> Dict:
    """Share of the total per key, e.g. {3: 25} -> {3: 0.25} out of 100 draws."""
    total = float(sum(counts.values()))
    if total <= 0.0:
        raise ValueError("Cannot normalize empty or zero-total counts.")
    return {k: c / total for k, c in counts.items()}


def outcome_histogram(
    outcomes: Iterable[int],
    support_size: int,
) -> Dict[int, int]:
    """Tally of draws in [0, support_size); anything else is dropped."""
    return dict(Counter(x for x in outcomes if 0 <= x < support_size))


#Chi-square uniformity test

@dataclass
class ChiSquareResult:
    stat: float
    df: int
    pvalue: float
    expected: List[float]


def chi_square_uniform(
    counts: Mapping[int, int],
    support_size: Optional[int] = None,
) -> ChiSquareResult:
    """
    Chi-square goodness-of-fit against a uniform distribution.

    Parameters

    counts : Mapping
        Outcome -> frequency.
    support_size : int, optional
        Total number of categories to test against. If omitted we use
        max(counts)+1, which undercounts when the top outcomes never showed.

    Returns

    ChiSquareResult(stat, df, pvalue, expected)
    """
    if not counts:
        raise ValueError("Empty counts supplied.")
    if support_size is None:
        support_size = max(int(k) for k in counts) + 1
    if support_size < 2:
        raise ValueError("support_size must be >= 2")

    observed = counts_to_vector(counts, support_size)
    total = observed.sum()
    if total <= 0:
        raise ValueError("Empty counts supplied.")

    expected = np.full(support_size, total / support_size, dtype=float)
    res = chisquare(f_obs=observed, f_exp=expected)
    return ChiSquareResult(
        stat=float(res.statistic),
        df=support_size - 1,
        pvalue=float(res.pvalue),
        expected=expected.tolist(),
    )


#KL divergence

def kl_divergence(
    p: Sequence[float],
    q: Sequence[float],
    eps: float = 1e-12,
) -> float:
    """
    D_KL(p || q) in bits. Both inputs are scaled to sum to one and padded
    with `eps` so empty bins never hit log(0).
    """
    p_arr = np.asarray(p, dtype=float)
    q_arr = np.asarray(q, dtype=float)
    if p_arr.shape != q_arr.shape:
        raise ValueError("p and q must have the same shape.")
    if p_arr.sum() <= 0 or q_arr.sum() <= 0:
        raise ValueError("Distribution has zero or negative sum.")

    smoothed = [x / x.sum() + eps for x in (p_arr, q_arr)]
    p_s, q_s = (x / x.sum() for x in smoothed)
    return float(np.sum(p_s * np.log2(p_s / q_s)))


#Sampler / generator audits

@dataclass
class SamplerAudit:
    n: int
    size: int
    histogram: Dict[int, int]
    frequencies: Dict[int, float]
    chi_square: ChiSquareResult
    kl_bits: float
    rejections: int


def audit_sampler(
    n: int,
    size: int,
    sampler: Optional[SecureSampler] = None,
) -> SamplerAudit:
    """
    Draw `size` values of `uniform_int(n)` and test them for uniformity.
    `frequencies` should hover around 1/n for every outcome.
    """
    if n < 2:
        raise ValueError("n must be >= 2")
    if size <= 0:
        raise ValueError("size must be positive")
    sampler = sampler or default_sampler()
    before = sampler.rejections
    hist = outcome_histogram(sampler.uniform_ints(n, size), n)
    return SamplerAudit(
        n=n,
        size=size,
        histogram=hist,
        frequencies=normalize_counts(hist),
        chi_square=chi_square_uniform(hist, support_size=n),
        kl_bits=kl_divergence(counts_to_vector(hist, n), np.ones(n)),
        rejections=sampler.rejections - before,
    )


def class_frequency(passwords: Iterable[str]) -> Dict[CharacterClass, float]:
    """
    Fraction of characters belonging to each class across `passwords`.
    Characters outside every class are ignored.
    """
    counts = {cls: 0 for cls in CharacterClass}
    for pw in passwords:
        for ch in pw:
            cls = char_class_of(ch)
            if cls is not None:
                counts[cls] += 1
    if not any(counts.values()):
        raise ValueError("No classified characters found.")
    return normalize_counts(counts)


__all__ = [
    "ChiSquareResult",
    "SamplerAudit",
    "chi_square_uniform",
    "kl_divergence",
    "counts_to_vector",
    "normalize_counts",
    "outcome_histogram",
    "audit_sampler",
    "class_frequency",
]
