"""Tests for bitgenetics.gamete."""

import pytest

from bitgenetics.gamete import (
    GameteVariant,
    build_gamete,
    cross,
    crossover_mask,
    haploid_female,
    haploid_male,
)
from bitgenetics.genome import Genome, allocate, randomize, release
from bitgenetics.xorshift import MASK64

SINGLE_RUN_MASKS = {(MASK64 << s) & MASK64 for s in range(64)}
SINGLE_RUN_MASKS |= {~m & MASK64 for m in SINGLE_RUN_MASKS}


class TestCrossoverMask:
    """Tests for crossover_mask()."""

    def test_shift_zero_is_all_ones(self, scripted):
        assert crossover_mask(scripted(0, 1)) == MASK64

    def test_even_parity_inverts(self, scripted):
        assert crossover_mask(scripted(0, 2)) == 0
        assert crossover_mask(scripted(63, 0)) == MASK64 >> 1

    def test_shift_taken_modulo_64(self, scripted):
        assert crossover_mask(scripted(4, 3)) == 0xFFFFFFFFFFFFFFF0
        assert crossover_mask(scripted(64 + 4, 3)) == 0xFFFFFFFFFFFFFFF0

    def test_always_single_run(self, rng):
        for _ in range(500):
            assert crossover_mask(rng) in SINGLE_RUN_MASKS


class TestCross:
    def test_cross(self):
        assert cross(0xFF00, 0x00FF, 0xF0F0) == 0xF00F
        assert cross(MASK64, 0, MASK64) == MASK64
        assert cross(MASK64, 0, 0) == 0


class TestUnrestrictedGamete:
    """Tests for the female (unrestricted) gamete."""

    def test_scripted_crossover(self, scripted):
        g = Genome([MASK64, MASK64], [0, 0])
        stream = scripted(8, 1, 16, 2)
        gamete = build_gamete(g, GameteVariant.UNRESTRICTED, stream)
        assert list(gamete) == [0xFFFFFFFFFFFFFF00, 0xFFFF]
        assert stream.draws == 4

    def test_each_chromosome_is_a_single_splice(self, rng):
        g = Genome([MASK64] * 16, [0] * 16)
        for _ in range(20):
            for c in haploid_female(g, rng):
                assert int(c) in SINGLE_RUN_MASKS

    def test_bits_come_from_a_homolog(self, rng):
        g = allocate(12)
        randomize(g, rng)
        gamete = haploid_female(g, rng)
        for c, l, r in zip(gamete, g.left, g.right):
            c, l, r = int(c), int(l), int(r)
            assert c & ~(l | r) == 0
            assert (l & r) & ~c == 0

    def test_source_unchanged(self, rng):
        g = allocate(4)
        randomize(g, rng)
        before = g.copy()
        haploid_female(g, rng)
        assert g == before


class TestRestrictedGamete:
    """Tests for the male (restricted) gamete."""

    def test_allosome_from_right_on_odd_draw(self, scripted):
        g = Genome([0xAAAA, MASK64], [0x5555, 0])
        stream = scripted(1, 8, 1)
        gamete = build_gamete(g, GameteVariant.RESTRICTED, stream)
        assert list(gamete) == [0x5555, 0xFFFFFFFFFFFFFF00]
        assert stream.draws == 3

    def test_allosome_from_left_on_even_draw(self, scripted):
        g = Genome([0xAAAA], [0x5555])
        stream = scripted(2)
        assert list(haploid_male(g, stream)) == [0xAAAA]
        assert stream.draws == 1

    def test_allosome_never_mixed(self, rng):
        g = allocate(3)
        randomize(g, rng)
        seen = set()
        for _ in range(200):
            allosome = int(haploid_male(g, rng)[0])
            assert allosome in (int(g.left[0]), int(g.right[0]))
            seen.add(allosome)
        assert len(seen) == 2


class TestGameteFailures:
    """Absent and empty sources yield no gamete."""

    @pytest.mark.parametrize("variant", list(GameteVariant))
    def test_none(self, variant, scripted):
        assert build_gamete(None, variant, scripted()) is None

    @pytest.mark.parametrize("variant", list(GameteVariant))
    def test_empty(self, variant, scripted):
        assert build_gamete(Genome([], []), variant, scripted()) is None

    @pytest.mark.parametrize("variant", list(GameteVariant))
    def test_released(self, variant, scripted):
        g = allocate(2)
        release(g)
        assert build_gamete(g, variant, scripted()) is None
