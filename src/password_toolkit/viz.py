"""
viz.py: Matplotlib helpers for auditing the sampler and the scorer

Aim:
- Small, dependency-light (matplotlib only).
- Return (fig, ax) so callers can further customize or save.
- Accept plain dicts/arrays from `metrics.py` and reports from `entropy.py`.

These are diagnostics for developers; the toolkit itself never renders.

Quick start

>>> from password_toolkit.metrics import audit_sampler
>>> from password_toolkit.viz import plot_counts_histogram, plot_uniformity_residuals
>>> audit = audit_sampler(10, 10000)
>>> fig, ax = plot_counts_histogram(audit.histogram, title="uniform_int(10)")

>>> obs = [100, 98, 102, 100]
>>> exp = [100, 100, 100, 100]
>>> fig, ax = plot_uniformity_residuals(obs, exp, title="Residuals")

>>> from password_toolkit.entropy import score
>>> fig, ax = plot_penalty_breakdown(score("qwerty123"))
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence, Tuple, Union
import math
import numpy as np
import matplotlib.pyplot as plt

from .charsets import CharacterClass
from .entropy import PenaltyKind, PenaltyReport
from .strength import TIERS


#Basic helpers

def _autox_labels(ax, labels: Sequence[str], rotation: int = 0) -> None:
    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels, rotation=rotation)


def _tier_lines(ax) -> None:
    for tier in TIERS[:-1]:
        ax.axhline(tier.upper_bits, linestyle=":", linewidth=0.8, color=tier.color)


#Plots

def plot_counts_histogram(
    counts: Mapping[Union[int, str], int],
    *,
    title: Optional[str] = None,
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Bar chart of outcome counts, in key order.
    """
    keys = sorted(counts.keys(), key=lambda k: (isinstance(k, str), k))
    labels = [str(k) for k in keys]
    vals = [int(counts[k]) for k in keys]

    fig, ax = plt.subplots()
    ax.bar(range(len(vals)), vals)
    _autox_labels(ax, labels)
    ax.set_ylabel("Counts")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig, ax


def plot_uniformity_residuals(
    observed: Sequence[float],
    expected: Sequence[float],
    *,
    title: Optional[str] = "Deviation from uniform",
) -> Tuple[plt.Figure, plt.Axes]:
    """Per-outcome (observed - expected) / expected; bars above zero are over-drawn."""
    obs = np.ravel(np.asarray(observed, dtype=float))
    exp = np.ravel(np.asarray(expected, dtype=float))
    if obs.shape != exp.shape:
        raise ValueError("observed and expected must have same length.")
    if np.any(exp <= 0):
        raise ValueError("expected values must be positive.")

    rel = (obs - exp) / exp
    xs = np.arange(rel.size)
    fig, ax = plt.subplots()
    ax.bar(xs, rel, color=np.where(rel >= 0, "tab:red", "tab:blue"))
    _autox_labels(ax, [str(i) for i in xs])
    ax.axhline(0.0, color="black", linewidth=0.8)
    ax.set_ylabel("Relative deviation")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig, ax


def plot_password_entropy_curve(
    lengths: Sequence[int],
    alphabet_size: int,
    *,
    title: Optional[str] = None,
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Plot H = length * log2(alphabet_size) over a set of lengths, with the
    strength tier boundaries drawn as horizontal guides.
    """
    lengths = list(lengths)
    if any(L <= 0 for L in lengths):
        raise ValueError("All lengths must be positive.")
    if alphabet_size < 2:
        raise ValueError("alphabet_size must be >= 2")

    H = [L * math.log2(alphabet_size) for L in lengths]

    fig, ax = plt.subplots()
    ax.plot(lengths, H, marker="o")
    _tier_lines(ax)
    ax.set_xlabel("Password length")
    ax.set_ylabel("Entropy (bits)")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig, ax


def plot_penalty_breakdown(
    report: PenaltyReport,
    *,
    title: Optional[str] = "Entropy breakdown",
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Base entropy, each penalty kind (zero when it did not fire) and the
    final entropy side by side.
    """
    labels = ["base"] + [k.value for k in PenaltyKind] + ["final"]
    vals = (
        [report.base_entropy_bits]
        + [-report.penalties.get(k, 0.0) for k in PenaltyKind]
        + [report.final_entropy_bits]
    )

    fig, ax = plt.subplots()
    ax.bar(range(len(vals)), vals)
    _autox_labels(ax, labels, rotation=30)
    ax.axhline(0.0)
    ax.set_ylabel("Bits")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig, ax


def plot_class_frequency(
    freq: Mapping[CharacterClass, float],
    *,
    title: Optional[str] = "Character class frequency",
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Output of `metrics.class_frequency` as a bar per class.
    """
    labels = [cls.value for cls in CharacterClass]
    vals = [float(freq.get(cls, 0.0)) for cls in CharacterClass]

    fig, ax = plt.subplots()
    ax.bar(range(len(vals)), vals)
    _autox_labels(ax, labels)
    ax.set_ylim(0.0, 1.0)
    ax.set_ylabel("Fraction")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig, ax


__all__ = [
    "plot_counts_histogram",
    "plot_uniformity_residuals",
    "plot_password_entropy_curve",
    "plot_penalty_breakdown",
    "plot_class_frequency",
]
