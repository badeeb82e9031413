"""Tests for PasswordGenerator and GenerationOptions."""

from __future__ import annotations

import itertools
import math
import re

import pytest

from password_toolkit.charsets import CharacterClass, FULL_ALPHABET, SYMBOLS, char_class_of
from password_toolkit.errors import ConfigurationError, NoClassSelected
from password_toolkit.passwords import (
    GeneratedPassword,
    GenerationOptions,
    PasswordGenerator,
    estimate_entropy_bits,
    make_password,
    normalize_length,
)

ALL_FLAG_COMBOS = [
    combo for combo in itertools.product([True, False], repeat=4) if any(combo)
]


def _options(flags, length):
    lower, upper, digits, symbols = flags
    return GenerationOptions(lowercase=lower, uppercase=upper, digits=digits, symbols=symbols, length=length)


class TestGenerate:
    @pytest.mark.parametrize("flags", ALL_FLAG_COMBOS)
    @pytest.mark.parametrize("length", [4, 5, 16, 64])
    def test_length_and_class_coverage(self, flags, length):
        opts = _options(flags, length)
        gen = PasswordGenerator()
        for _ in range(20):
            pwd = gen.generate(opts).value
            assert len(pwd) == length
            present = {char_class_of(c) for c in pwd}
            assert set(opts.classes) <= present
            assert all(c in opts.alphabet for c in pwd)

    def test_lowercase_and_digits_only(self):
        opts = GenerationOptions(uppercase=False, symbols=False, length=8)
        gen = PasswordGenerator()
        for pwd in gen.generate_many(opts, 200):
            assert re.fullmatch(r"[a-z0-9]{8}", pwd.value)

    def test_no_class_selected(self):
        opts = GenerationOptions(lowercase=False, uppercase=False, digits=False, symbols=False)
        with pytest.raises(NoClassSelected) as info:
            PasswordGenerator().generate(opts)
        assert isinstance(info.value, ConfigurationError)
        assert "at least one character type" in str(info.value)

    def test_length_shorter_than_class_count(self):
        opts = GenerationOptions(length=2)
        for _ in range(50):
            pwd = PasswordGenerator().generate(opts).value
            assert len(pwd) == 2
            assert all(c in FULL_ALPHABET for c in pwd)

    def test_guaranteed_characters_are_shuffled(self):
        opts = GenerationOptions(uppercase=False, symbols=False, length=2)
        gen = PasswordGenerator()
        firsts = {char_class_of(gen.generate(opts).value[0]) for _ in range(300)}
        assert firsts == {CharacterClass.LOWERCASE, CharacterClass.DIGIT}

    def test_symbol_only(self):
        pwd = PasswordGenerator().generate(GenerationOptions(False, False, False, True, 12)).value
        assert all(c in SYMBOLS for c in pwd)

    def test_created_at_comes_from_clock(self):
        gen = PasswordGenerator(clock=lambda: 42.0)
        assert gen.generate(GenerationOptions()).created_at == 42.0

    def test_generate_many(self):
        pwds = PasswordGenerator().generate_many(GenerationOptions(length=24), 10)
        assert len({p.value for p in pwds}) == 10
        with pytest.raises(ValueError):
            PasswordGenerator().generate_many(GenerationOptions(), -1)

    def test_make_password_defaults(self):
        pwd = make_password()
        assert isinstance(pwd, GeneratedPassword)
        assert len(pwd) == 16


class TestGeneratedPassword:
    def test_repr_hides_value(self):
        pwd = GeneratedPassword("hunter2", created_at=1.0)
        assert "hunter2" not in repr(pwd)
        assert str(pwd) == "hunter2"

    def test_immutable(self):
        pwd = GeneratedPassword("abc", created_at=1.0)
        with pytest.raises(AttributeError):
            pwd.value = "xyz"


class TestOptions:
    @pytest.mark.parametrize("length", [0, 65, -1])
    def test_length_bounds(self, length):
        with pytest.raises(ConfigurationError):
            GenerationOptions(length=length)

    def test_length_must_be_int(self):
        with pytest.raises(ConfigurationError):
            GenerationOptions(length=True)
        with pytest.raises(ConfigurationError):
            GenerationOptions(length=8.0)

    def test_classes_in_canonical_order(self):
        opts = GenerationOptions.from_classes(
            [CharacterClass.SYMBOL, CharacterClass.LOWERCASE], length=10
        )
        assert opts.classes == (CharacterClass.LOWERCASE, CharacterClass.SYMBOL)
        assert opts.length == 10
        assert not opts.uppercase and not opts.digits

    def test_empty_options_can_be_held(self):
        opts = GenerationOptions.from_classes([])
        assert opts.classes == ()
        assert opts.alphabet == ""

    def test_entropy_bits(self):
        assert PasswordGenerator.entropy_bits(GenerationOptions(length=16)) == pytest.approx(
            16 * math.log2(93)
        )
        with pytest.raises(NoClassSelected):
            PasswordGenerator.entropy_bits(GenerationOptions.from_classes([]))


@pytest.mark.parametrize(
    "text, expected",
    [("", 16), ("abc", 16), ("0", 1), ("-5", 1), ("200", 64), (" 12 ", 12), ("64", 64)],
)
def test_normalize_length(text, expected):
    assert normalize_length(text) == expected


def test_estimate_entropy_bits():
    assert estimate_entropy_bits(10, 10) == pytest.approx(10 * math.log2(10))
    with pytest.raises(ValueError):
        estimate_entropy_bits(0, 10)
