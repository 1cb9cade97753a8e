"""
Gamete Builder - haploid chromosome sets via single-point crossover

Each chromosome of the gamete is spliced from the parent's two homologs
at one random bit boundary: a run of high bits comes from one homolog and
the complementary low run from the other.

VARIANTS:
- UNRESTRICTED: every chromosome crosses over (female line)
- RESTRICTED: chromosome 0 is the allosome and is inherited whole from
  one homolog; the rest cross over as usual (male line)
"""

import logging
from enum import Enum
from typing import Optional

import numpy as np

from .genome import CHROMOSOME_DTYPE, Genome
from .xorshift import CHROMOSOME_BITS, MASK64, BitStream, resolve

log = logging.getLogger("bitgenetics.gamete")

ALLOSOME_INDEX = 0


class GameteVariant(Enum):
    """Crossover rule applied when building a gamete."""
    UNRESTRICTED = "unrestricted"   # female
    RESTRICTED = "restricted"       # male: no crossover on the allosome


def crossover_mask(rng: BitStream) -> int:
    """
    Random single-boundary mask.

    Bits at or above a random position s are set, bits below are clear
    (s == 0 gives all ones). An even parity draw then inverts the mask.
    """
    shift = rng.next() % CHROMOSOME_BITS
    mask = (MASK64 << shift) & MASK64
    if rng.next() % 2 == 0:
        mask = ~mask & MASK64
    return mask


def cross(left: int, right: int, mask: int) -> int:
    """Take `left` where mask is set and `right` elsewhere."""
    return (left & mask) | (right & ~mask & MASK64)


def build_gamete(genome: Optional[Genome],
                 variant: GameteVariant = GameteVariant.UNRESTRICTED,
                 rng: Optional[BitStream] = None) -> Optional[np.ndarray]:
    """
    Derive one haploid chromosome sequence from a diploid genome.

    Args:
        genome: Source genome (left and right homologs)
        variant: Crossover rule, see GameteVariant
        rng: Bit stream, defaults to the shared generator

    Returns:
        uint64 array of length genome.n, or None for an absent or
        empty genome
    """
    if genome is None or not genome.is_valid or genome.n <= 0:
        log.debug("build_gamete: unusable source genome %r", genome)
        return None
    rng = resolve(rng)

    n = genome.n
    left = [int(c) for c in genome.left]
    right = [int(c) for c in genome.right]
    gamete = [0] * n

    start = 0
    if variant is GameteVariant.RESTRICTED:
        gamete[ALLOSOME_INDEX] = (left[ALLOSOME_INDEX] if rng.next() % 2 == 0
                                  else right[ALLOSOME_INDEX])
        start = 1

    for i in range(start, n):
        gamete[i] = cross(left[i], right[i], crossover_mask(rng))

    return np.array(gamete, dtype=CHROMOSOME_DTYPE)


def haploid_female(genome: Optional[Genome],
                   rng: Optional[BitStream] = None) -> Optional[np.ndarray]:
    return build_gamete(genome, GameteVariant.UNRESTRICTED, rng)


def haploid_male(genome: Optional[Genome],
                 rng: Optional[BitStream] = None) -> Optional[np.ndarray]:
    return build_gamete(genome, GameteVariant.RESTRICTED, rng)
