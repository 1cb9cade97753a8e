"""Tests for bitgenetics.mutation."""

import logging

import pytest

from bitgenetics.genome import Genome, allocate, release
from bitgenetics.mutation import (
    DEFAULT_INTENSITY,
    expected_mask_density,
    mutate,
    mutation_masks,
)
from bitgenetics.xorshift import CHROMOSOME_BITS, XorShift64Star


def popcount(value: int) -> int:
    return bin(value).count("1")


class TestMutationMasks:
    """Tests for mutation_masks()."""

    def test_single_round_uses_raw_draws(self, scripted):
        assert mutation_masks(1, scripted(0xDEAD, 0xBEEF)) == (0xDEAD, 0xBEEF)

    def test_rounds_alternate_left_right(self, scripted):
        stream = scripted(0xFF, 0xF0, 0x0F, 0xFF, 0x3C, 0x30)
        c_left, c_right = mutation_masks(3, stream)
        assert c_left == 0xFF & 0x0F & 0x3C
        assert c_right == 0xF0 & 0xFF & 0x30
        assert stream.draws == 6

    def test_non_positive_intensity(self, scripted):
        with pytest.raises(ValueError):
            mutation_masks(0, scripted())

    def test_and_only_clears_bits(self):
        seed = 0x1234
        one = mutation_masks(1, XorShift64Star(seed=seed))
        # Same stream: the first two draws of intensity 4 are the intensity 1 masks
        four = mutation_masks(4, XorShift64Star(seed=seed))
        assert four[0] & ~one[0] == 0
        assert four[1] & ~one[1] == 0

    def test_density_falls_with_intensity(self, rng):
        """Mean set bits roughly halve with each extra round."""
        trials = 2000
        means = []
        for k in range(1, 7):
            total = 0
            for _ in range(trials):
                c_left, c_right = mutation_masks(k, rng)
                total += popcount(c_left) + popcount(c_right)
            means.append(total / (2 * trials))
        for k, mean in enumerate(means, start=1):
            assert mean == pytest.approx(CHROMOSOME_BITS * expected_mask_density(k), rel=0.15)
        assert all(a > b for a, b in zip(means, means[1:]))


class TestMutate:
    """Tests for mutate()."""

    def test_same_mask_on_every_chromosome(self, scripted):
        g = Genome([0, 1, 0xFF], [0, 2, 0xF0])
        masks = mutate(g, 1, scripted(0xF0, 0x0F))
        assert masks == (0xF0, 0x0F)
        assert list(g.left) == [0xF0, 0xF1, 0x0F]
        assert list(g.right) == [0x0F, 0x0D, 0xFF]

    def test_debug_log_only_when_enabled(self, scripted, caplog):
        with caplog.at_level(logging.INFO, logger="bitgenetics.mutation"):
            mutate(Genome([0], [0]), 1, scripted(0xF0, 0x0F))
        assert not caplog.records
        with caplog.at_level(logging.DEBUG, logger="bitgenetics.mutation"):
            mutate(Genome([0], [0]), 1, scripted(0xF0, 0x0F))
        assert "flipped 4+4 bits" in caplog.text

    def test_draw_count_independent_of_length(self, scripted):
        stream = scripted(1, cycle=True)
        mutate(allocate(10), 4, stream)
        assert stream.draws == 2 + 2 * 3

    def test_mutating_twice_with_same_masks_restores(self, scripted):
        g = Genome([5, 6], [7, 8])
        original = g.copy()
        mutate(g, 1, scripted(0xABC, 0xDEF))
        mutate(g, 1, scripted(0xABC, 0xDEF))
        assert g == original

    @pytest.mark.parametrize("intensity", [0, -3])
    def test_non_positive_intensity_is_noop(self, scripted, intensity):
        g = Genome([1], [2])
        stream = scripted()
        assert mutate(g, intensity, stream) is None
        assert g == Genome([1], [2])
        assert stream.draws == 0

    def test_absent_or_empty_is_noop(self, scripted):
        stream = scripted()
        assert mutate(None, 3, stream) is None
        assert mutate(Genome([], []), 3, stream) is None
        released = allocate(2)
        release(released)
        assert mutate(released, 3, stream) is None
        assert stream.draws == 0

    def test_default_intensity(self):
        assert DEFAULT_INTENSITY == 6
        assert expected_mask_density(DEFAULT_INTENSITY) == pytest.approx(1 / 64)
        assert expected_mask_density(0) == 0.0
