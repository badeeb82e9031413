"""Tests for the entropy scorer."""

from __future__ import annotations

import math

import pytest

from password_toolkit.entropy import (
    PenaltyKind,
    PenaltyReport,
    keyboard_penalty,
    pool_size,
    repetition_penalty,
    score,
    sequence_penalty,
)


def test_empty_password_scores_zero():
    r = score("")
    assert r.base_entropy_bits == 0
    assert r.total_penalty_bits == 0
    assert r.final_entropy_bits == 0
    assert r.reasons == frozenset()


def test_unclassified_characters_score_zero():
    r = score("   ")
    assert r.final_entropy_bits == 0
    assert r.length == 3
    assert r.pool_size == 0


@pytest.mark.parametrize(
    "password, size",
    [("abc", 26), ("ABC", 26), ("123", 10), ("!!", 31), ("aA", 52), ("aA1!", 93)],
)
def test_pool_size(password, size):
    assert pool_size(password) == size


def test_base_entropy():
    r = score("aZ")
    assert r.base_entropy_bits == pytest.approx(2 * math.log2(52))


class TestCommonSubstring:
    def test_password(self):
        r = score("password")
        assert PenaltyKind.COMMON_SUBSTRING in r.reasons
        assert r.penalties[PenaltyKind.COMMON_SUBSTRING] == 20
        assert r.final_entropy_bits == pytest.approx(8 * math.log2(26) - 20)

    def test_case_insensitive_and_embedded(self):
        r = score("xxPassWORDyy")
        assert PenaltyKind.COMMON_SUBSTRING in r.reasons

    def test_charged_once_even_with_several_hits(self):
        r = score("admin-user-iloveyou")
        assert r.penalties[PenaltyKind.COMMON_SUBSTRING] == 20


class TestRepetition:
    def test_below_threshold_is_free(self):
        # a twice -> 3 bits, not more than the length 3
        assert repetition_penalty("aab") == 0

    def test_above_threshold(self):
        # a three times -> 6 bits > length 4
        assert repetition_penalty("aaab") == 6

    def test_case_folded(self):
        r = score("AaAaAaAa")
        assert PenaltyKind.REPETITION in r.reasons
        assert r.penalties[PenaltyKind.REPETITION] == 21

    def test_threshold_uses_typed_length(self):
        # "\u0130" lowercases to two characters, so "\u0130\u0130xy" is 6 long once folded
        password = "\u0130\u0130xy"
        assert len(password) == 4
        assert len(password.lower()) == 6
        r = score(password)
        assert PenaltyKind.REPETITION in r.reasons
        assert r.penalties[PenaltyKind.REPETITION] == 6

    def test_explicit_raw_length(self):
        assert repetition_penalty("aaab", raw_length=6) == 0
        assert repetition_penalty("aaab", raw_length=5) == 6


class TestSequence:
    @pytest.mark.parametrize("password", ["abc", "cba", "234", "432", "XYZ"])
    def test_runs_either_direction(self, password):
        assert sequence_penalty(password.lower()) == 3

    def test_each_triple_counts(self):
        # abc, bcd, cde
        assert sequence_penalty("abcde") == 9

    def test_no_wraparound(self):
        assert sequence_penalty("yza") == 0
        assert sequence_penalty("901") == 0


class TestKeyboard:
    def test_qwerty_row(self):
        assert keyboard_penalty("qwerty") == 16

    def test_reversed_row(self):
        assert keyboard_penalty("ytrewq") == 16

    @pytest.mark.parametrize("password", ["asd", "lkj", "zxc", "mnb"])
    def test_each_row(self, password):
        assert keyboard_penalty(password) == 4

    def test_reason_tagged(self):
        r = score("zxcvbn")
        assert r.reasons == frozenset({PenaltyKind.KEYBOARD_PATTERN})


def test_repeated_sequence_triggers_both():
    r = score("abcabcabcabc")
    assert r.reasons == frozenset({PenaltyKind.REPETITION, PenaltyKind.SEQUENCE})
    assert r.penalties[PenaltyKind.REPETITION] == 27
    assert r.penalties[PenaltyKind.SEQUENCE] == 12
    assert r.total_penalty_bits == 39


def test_final_entropy_clamped_at_zero():
    r = score("111111")
    assert r.total_penalty_bits > r.base_entropy_bits
    assert r.final_entropy_bits == 0


def test_clean_password_has_no_penalties():
    r = score("Kx9!mP2@")
    assert r.reasons == frozenset()
    assert r.final_entropy_bits == r.base_entropy_bits


def test_base_entropy_monotonic_in_length():
    unit = "aB3$"
    bases = [score(unit * n).base_entropy_bits for n in range(1, 10)]
    assert bases == sorted(bases)


def test_report_is_derived():
    r = PenaltyReport(base_entropy_bits=30.0, penalties={PenaltyKind.SEQUENCE: 6.0})
    assert r.total_penalty_bits == 6.0
    assert r.final_entropy_bits == 24.0
    assert r.reasons == frozenset({PenaltyKind.SEQUENCE})
