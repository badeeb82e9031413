"""Tests for SecureSampler."""

from __future__ import annotations

import itertools
from collections import Counter

import pytest

from password_toolkit.errors import RandomnessUnavailable
from password_toolkit.sampler import RANGE_CEILING, SecureSampler, default_sampler, uniform_int


class TestUniformInt:
    def test_accepts_word_below_limit(self, make_sampler):
        assert make_sampler([13]).uniform_int(10) == 3

    def test_rejects_words_at_or_above_limit(self, make_sampler):
        limit = (RANGE_CEILING // 10) * 10
        s = make_sampler([limit, RANGE_CEILING, 13])
        assert s.uniform_int(10) == 3
        assert s.rejections == 2

    def test_last_word_below_limit_is_accepted(self, make_sampler):
        limit = (RANGE_CEILING // 10) * 10
        assert make_sampler([limit - 1]).uniform_int(10) == (limit - 1) % 10

    def test_modulus_one(self, make_sampler):
        s = make_sampler([RANGE_CEILING, 5])
        assert s.uniform_int(1) == 0
        assert s.rejections == 1

    def test_never_reaches_max(self):
        s = SecureSampler()
        for n in (1, 2, 3, 7, 26, 31, 93, 1000):
            assert all(0 <= x < n for x in s.uniform_ints(n, 500))

    def test_every_residue_shows_up(self):
        counts = Counter(SecureSampler().uniform_ints(7, 3000))
        assert set(counts) == set(range(7))

    @pytest.mark.parametrize("n", [0, -3])
    def test_non_positive_modulus(self, n):
        with pytest.raises(ValueError, match="positive"):
            SecureSampler().uniform_int(n)

    def test_modulus_above_source_range(self):
        with pytest.raises(ValueError):
            SecureSampler().uniform_int(RANGE_CEILING + 1)

    def test_bool_is_not_a_modulus(self):
        with pytest.raises(TypeError):
            SecureSampler().uniform_int(True)

    def test_negative_size(self):
        with pytest.raises(ValueError):
            SecureSampler().uniform_ints(10, -1)


class TestSourceFailures:
    @pytest.mark.parametrize("exc", [NotImplementedError, OSError])
    def test_missing_primitive_is_fatal(self, exc):
        def broken():
            raise exc("no entropy")

        with pytest.raises(RandomnessUnavailable):
            SecureSampler(source=broken).uniform_int(10)

    def test_out_of_range_word(self, make_sampler):
        with pytest.raises(RandomnessUnavailable):
            make_sampler([RANGE_CEILING + 1]).uniform_int(10)


class TestShuffleAndChoice:
    def test_fisher_yates_swaps(self, make_sampler):
        items = ["a", "b", "c"]
        make_sampler([0, 0]).shuffle(items)
        # i=2 swaps with 0 -> c b a; i=1 swaps with 0 -> b c a
        assert items == ["b", "c", "a"]

    def test_shuffle_keeps_elements(self):
        items = list("abcdefghij")
        SecureSampler().shuffle(items)
        assert sorted(items) == list("abcdefghij")

    def test_shuffle_reaches_every_permutation(self):
        s = SecureSampler()
        seen = set()
        for _ in range(2000):
            items = [1, 2, 3]
            s.shuffle(items)
            seen.add(tuple(items))
        assert seen == set(itertools.permutations([1, 2, 3]))

    def test_shuffle_short_sequences(self, make_sampler):
        empty = []
        single = ["x"]
        make_sampler([]).shuffle(empty)
        make_sampler([]).shuffle(single)
        assert empty == [] and single == ["x"]

    def test_choice(self, make_sampler):
        assert make_sampler([4]).choice("abc") == "b"

    def test_choice_empty(self):
        with pytest.raises(ValueError, match="empty"):
            SecureSampler().choice("")


def test_module_helpers_share_default_sampler():
    assert default_sampler() is default_sampler()
    assert 0 <= uniform_int(5) < 5
