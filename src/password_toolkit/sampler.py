"""
sampler.py

Purpose/Aim:
1) Wraps the operating system's cryptographically secure random source.
2) Provides unbiased integers in [0, n) using rejection sampling.
3) Provides an unbiased in-place Fisher-Yates shuffle driven by (2).

Why rejection sampling?

- The source hands out 32-bit words, i.e. values in [0, 2^32 - 1].
- `word % n` is biased whenever n does not evenly divide that range: the
  low residues get one extra preimage each.
- Throwing away any word at or above the largest multiple of n that fits
  removes the extra preimages; every residue is then equally likely.

Quick start

>>> from password_toolkit.sampler import uniform_int
>>> uniform_int(10)          # unbiased integer 0..9

Deterministic sources for tests:
>>> words = iter([4294967295, 7])
>>> SecureSampler(source=lambda: next(words)).uniform_int(10)
7
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, MutableSequence, Optional, Sequence, TypeVar
import logging
import secrets

from .errors import RandomnessUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

#Source range
WORD_BITS = 32
RANGE_CEILING = (1 << WORD_BITS) - 1   # largest value the source can return


def system_source() -> int:
    """One 32-bit unsigned word from the OS CSPRNG (via `secrets`)."""
    return secrets.randbits(WORD_BITS)


@dataclass
class SecureSampler:
    """
    Unbiased integers, choices and shuffles over a 32-bit secure source.

    Parameters

    source : callable, optional
        Zero-argument callable returning an int in [0, 2^32 - 1].
        Defaults to `system_source`. Tests pass scripted sources here;
        production code should never replace it with a non-cryptographic
        generator.

    Examples

    >>> s = SecureSampler()
    >>> s.uniform_int(94)
    57
    >>> s.choice("abc")
    'b'
    """

    source: Optional[Callable[[], int]] = None

    def __post_init__(self) -> None:
        if self.source is None:
            self.source = system_source
        self.rejections = 0  # running count, useful when auditing

    #internal
    def _draw(self) -> int:
        """
        Pull one word from the source. Any failure of the primitive is fatal
        and surfaces as RandomnessUnavailable.
        """
        try:
            word = self.source()
        except (NotImplementedError, OSError) as exc:
            raise RandomnessUnavailable("secure random source is unavailable") from exc
        if not 0 <= word <= RANGE_CEILING:
            raise RandomnessUnavailable(f"source returned out-of-range word {word!r}")
        return word

    #public API
    def uniform_int(self, n: int) -> int:
        """
        Unbiased integer in [0, n) via rejection sampling.

        How it works (short version)
        - limit = floor(RANGE_CEILING / n) * n, the largest multiple of n
          not exceeding the source's ceiling.
        - Draw words until one falls below `limit`.
        - Return word % n.
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError("n must be an int")
        if n <= 0:
            raise ValueError("n must be positive")
        if n > RANGE_CEILING:
            raise ValueError(f"n must be at most {RANGE_CEILING}")

        limit = (RANGE_CEILING // n) * n
        while True:
            x = self._draw()
            if x < limit:
                return x % n
            self.rejections += 1
            logger.debug("rejected word above %d for modulus %d", limit, n)

    def uniform_ints(self, n: int, size: int) -> List[int]:
        """`size` many unbiased integers in [0, n)."""
        if size < 0:
            raise ValueError("size must be non-negative")
        return [self.uniform_int(n) for _ in range(size)]

    def choice(self, seq: Sequence[T]) -> T:
        """One element of a non-empty sequence, chosen uniformly."""
        if not seq:
            raise ValueError("cannot choose from an empty sequence")
        return seq[self.uniform_int(len(seq))]

    def shuffle(self, items: MutableSequence) -> None:
        """
        In-place Fisher-Yates shuffle.

        Walks i from the end down to 1 and swaps items[i] with items[j],
        j uniform in [0, i]. Every permutation is equally likely provided
        `uniform_int` is unbiased.
        """
        for i in range(len(items) - 1, 0, -1):
            j = self.uniform_int(i + 1)
            items[i], items[j] = items[j], items[i]


#Module-level convenience singletons
_default_sampler: Optional[SecureSampler] = None


def default_sampler() -> SecureSampler:
    """Lazily create (and reuse) a sampler over the system source."""
    global _default_sampler
    if _default_sampler is None:
        _default_sampler = SecureSampler()
    return _default_sampler


def uniform_int(n: int) -> int:
    """Unbiased integer in [0, n) from the default sampler."""
    return default_sampler().uniform_int(n)


def uniform_ints(n: int, size: int) -> List[int]:
    """Unbiased integers in [0, n) from the default sampler."""
    return default_sampler().uniform_ints(n, size)


__all__ = [
    "WORD_BITS",
    "RANGE_CEILING",
    "SecureSampler",
    "system_source",
    "default_sampler",
    "uniform_int",
    "uniform_ints",
]


#Tiny smoke test when run directly
if __name__ == "__main__":
    import numpy as np

    xs = uniform_ints(10, size=5000)
    hist = np.bincount(xs, minlength=10)
    print("mod-10 histogram:", hist.tolist())
