"""
charsets.py

The four fixed ASCII character classes and their alphabets.

Order matters twice:
- within an alphabet, index i always maps to the same character, so a
  sampled index is a sampled character;
- across classes, `CharacterClass` iteration order (lowercase, uppercase,
  digit, symbol) is the order guaranteed characters are drawn in and the
  order the union alphabet is concatenated in.

>>> from password_toolkit.charsets import CharacterClass, char_class_of
>>> len(CharacterClass.DIGIT.alphabet)
10
>>> char_class_of("?")
<CharacterClass.SYMBOL: 'symbol'>
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional
import string


#Alphabets
LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:'\",.<>/?~`"


class CharacterClass(Enum):
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    DIGIT = "digit"
    SYMBOL = "symbol"

    @property
    def alphabet(self) -> str:
        return _ALPHABETS[self]

    @property
    def size(self) -> int:
        return len(_ALPHABETS[self])

    def contains(self, char: str) -> bool:
        return len(char) == 1 and char in _ALPHABETS[self]


_ALPHABETS = {
    CharacterClass.LOWERCASE: LOWERCASE,
    CharacterClass.UPPERCASE: UPPERCASE,
    CharacterClass.DIGIT: DIGITS,
    CharacterClass.SYMBOL: SYMBOLS,
}

# Every character in every class, in class order.
FULL_ALPHABET = "".join(_ALPHABETS[c] for c in CharacterClass)


def union_alphabet(classes: Iterable[CharacterClass]) -> str:
    """
    Concatenate the alphabets of `classes` in canonical class order.
    Duplicates in `classes` are ignored. Empty input gives "".
    """
    wanted = set(classes)
    return "".join(_ALPHABETS[c] for c in CharacterClass if c in wanted)


def char_class_of(char: str) -> Optional[CharacterClass]:
    """Class a single character belongs to, or None if it is in none of them."""
    for cls in CharacterClass:
        if cls.contains(char):
            return cls
    return None


def classes_present(text: str) -> frozenset:
    """Set of classes with at least one character in `text`."""
    return frozenset(c for c in (char_class_of(ch) for ch in text) if c is not None)


__all__ = [
    "LOWERCASE",
    "UPPERCASE",
    "DIGITS",
    "SYMBOLS",
    "FULL_ALPHABET",
    "CharacterClass",
    "union_alphabet",
    "char_class_of",
    "classes_present",
]
