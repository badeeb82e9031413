"""
passwords.py

Aim:
1) Describes what to generate: `GenerationOptions` (class flags + length).
2) Provides a PasswordGenerator that guarantees one character per enabled
   class, fills the rest from the union alphabet, and shuffles the result.
3) Exposes helpers to normalise length input and estimate entropy.

Note:
- Every index comes from `sampler.SecureSampler.uniform_int`, which uses
  rejection sampling under the hood.
- The guaranteed characters are drawn first, so a Fisher-Yates shuffle is
  mandatory; otherwise the first k positions would be predictable by class.

Quick start
>>> from password_toolkit.passwords import make_password, GenerationOptions
>>> make_password(GenerationOptions(symbols=False, length=12)).value
# 12 chars: at least one lower, one upper, one digit

Lowercase and digits only:
>>> from password_toolkit.passwords import PasswordGenerator
>>> gen = PasswordGenerator()
>>> gen.generate(GenerationOptions(uppercase=False, symbols=False, length=8))
GeneratedPassword(length=8, created_at=...)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple
import logging
import math
import time

from . import sampler as sampler_mod
from .charsets import CharacterClass, union_alphabet
from .config import DEFAULT_LENGTH, MAX_LENGTH, MIN_LENGTH
from .errors import ConfigurationError, NoClassSelected

logger = logging.getLogger(__name__)


#Options
@dataclass(frozen=True)
class GenerationOptions:
    """
    Which classes to draw from and how long the password is.

    An options object with every class disabled is valid to *hold* (a user
    may untick everything); it only fails once you try to generate from it.
    The length is validated here, at the boundary.
    """

    lowercase: bool = True
    uppercase: bool = True
    digits: bool = True
    symbols: bool = True
    length: int = DEFAULT_LENGTH

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise ConfigurationError("length must be an integer")
        if not MIN_LENGTH <= self.length <= MAX_LENGTH:
            raise ConfigurationError(
                f"length must be between {MIN_LENGTH} and {MAX_LENGTH}, got {self.length}"
            )

    @classmethod
    def from_classes(
        cls,
        classes: Iterable[CharacterClass],
        length: int = DEFAULT_LENGTH,
    ) -> "GenerationOptions":
        wanted = set(classes)
        return cls(
            lowercase=CharacterClass.LOWERCASE in wanted,
            uppercase=CharacterClass.UPPERCASE in wanted,
            digits=CharacterClass.DIGIT in wanted,
            symbols=CharacterClass.SYMBOL in wanted,
            length=length,
        )

    @property
    def classes(self) -> Tuple[CharacterClass, ...]:
        """Enabled classes, in canonical order."""
        flags = {
            CharacterClass.LOWERCASE: self.lowercase,
            CharacterClass.UPPERCASE: self.uppercase,
            CharacterClass.DIGIT: self.digits,
            CharacterClass.SYMBOL: self.symbols,
        }
        return tuple(c for c in CharacterClass if flags[c])

    @property
    def alphabet(self) -> str:
        return union_alphabet(self.classes)


def normalize_length(text: str, default: int = DEFAULT_LENGTH) -> int:
    """
    Turn free-form length input into a usable length.

    Blank or non-numeric input falls back to `default`; anything else is
    clamped into [MIN_LENGTH, MAX_LENGTH].

    >>> normalize_length("")
    16
    >>> normalize_length("200")
    64
    """
    text = (text or "").strip()
    try:
        num = int(text)
    except ValueError:
        num = default
    return max(MIN_LENGTH, min(MAX_LENGTH, num))


#Result
@dataclass(frozen=True)
class GeneratedPassword:
    """Immutable generated value plus its creation instant (epoch seconds)."""

    value: str
    created_at: float = field(default_factory=time.time)

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        # Keep the secret out of tracebacks and log lines.
        return f"GeneratedPassword(length={len(self.value)}, created_at={self.created_at!r})"


#Password generator
@dataclass
class PasswordGenerator:
    """
    Generate passwords that contain every enabled class at least once.

    Parameters

    sampler : SecureSampler, optional
        Source of unbiased indices. Defaults to the module's default sampler.
    clock : callable, optional
        Returns the current time in epoch seconds; stamped on each result.

    Examples

    >>> gen = PasswordGenerator()
    >>> str(gen.generate(GenerationOptions(length=16)))
    'q%8Tz...'
    """

    sampler: Optional[sampler_mod.SecureSampler] = None
    clock: Callable[[], float] = time.time

    def __post_init__(self) -> None:
        if self.sampler is None:
            self.sampler = sampler_mod.default_sampler()

    #Generation
    def characters(self, options: GenerationOptions) -> List[str]:
        """
        Build the shuffled character list for one password.

        How it works

        1) Union alphabet of the enabled classes; empty -> NoClassSelected.
        2) One guaranteed character per enabled class.
        3) length - k filler characters from the union alphabet (k = classes).
        4) Truncate to `length` (only bites when length < k).
        5) Fisher-Yates shuffle.
        """
        classes = options.classes
        pool = union_alphabet(classes)
        if not pool:
            raise NoClassSelected()

        guaranteed = [self.sampler.choice(cls.alphabet) for cls in classes]
        remaining = max(0, options.length - len(guaranteed))
        filler = [self.sampler.choice(pool) for _ in range(remaining)]

        chars = (guaranteed + filler)[: options.length]
        self.sampler.shuffle(chars)
        return chars

    def generate(self, options: GenerationOptions) -> GeneratedPassword:
        """Create one password under `options`."""
        chars = self.characters(options)
        logger.debug(
            "generated password of length %d from classes %s",
            len(chars),
            ",".join(c.value for c in options.classes),
        )
        return GeneratedPassword("".join(chars), created_at=self.clock())

    def generate_many(self, options: GenerationOptions, count: int) -> List[GeneratedPassword]:
        """Create `count` independent passwords."""
        if count < 0:
            raise ValueError("count must be non-negative")
        return [self.generate(options) for _ in range(count)]

    #Estimates
    @staticmethod
    def entropy_bits(options: GenerationOptions) -> float:
        """
        Upper-bound entropy of a password drawn under `options`:
        length * log2(|union alphabet|). The guaranteed-class constraint
        removes a sliver of the space, which this ignores.
        """
        size = len(options.alphabet)
        if size == 0:
            raise NoClassSelected()
        return options.length * math.log2(size)


#Convenience helpers
def make_password(
    options: Optional[GenerationOptions] = None,
    sampler: Optional[sampler_mod.SecureSampler] = None,
) -> GeneratedPassword:
    """
    One-shot helper to generate a password without creating a generator.
    """
    gen = PasswordGenerator(sampler=sampler)
    return gen.generate(options or GenerationOptions())


def estimate_entropy_bits(length: int, alphabet_size: int) -> float:
    """
    Estimate password entropy (in bits): H = length * log2(alphabet_size).
    """
    if length <= 0:
        raise ValueError("length must be positive")
    if alphabet_size < 1:
        raise ValueError("alphabet_size must be >= 1")
    return length * math.log2(alphabet_size)


__all__ = [
    "GenerationOptions",
    "GeneratedPassword",
    "PasswordGenerator",
    "normalize_length",
    "make_password",
    "estimate_entropy_bits",
]


# Tiny demo when run directly
if __name__ == "__main__":
    opts = GenerationOptions()
    pwd = make_password(opts)
    print("Password:", pwd)
    print("Entropy (bits) ~", round(PasswordGenerator.entropy_bits(opts), 2))
