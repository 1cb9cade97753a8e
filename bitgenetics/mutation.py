"""
Mutation Operator - intensity-controlled XOR masks

A mutation event draws one mask per track and XORs it into every
chromosome of that track. The mask starts as a single random word and is
ANDed with `intensity - 1` further draws, so each extra round halves the
expected number of set bits:

    intensity 1  ~32 bits flipped per chromosome
    intensity 3  several bits
    intensity 5  ~1-2 bits
    intensity 6  usually none
"""

import logging
from typing import Optional, Tuple

import numpy as np

from .genome import Genome
from .xorshift import BitStream, resolve

log = logging.getLogger("bitgenetics.mutation")

DEFAULT_INTENSITY = 6


def mutation_masks(intensity: int, rng: Optional[BitStream] = None) -> Tuple[int, int]:
    """
    Draw the (left, right) masks for one mutation event.

    Args:
        intensity: Number of draws ANDed into each mask (>= 1)
        rng: Bit stream, defaults to the shared generator

    Returns:
        Tuple of (left_mask, right_mask)
    """
    if intensity <= 0:
        raise ValueError(f"mutation intensity must be positive, got {intensity}")
    rng = resolve(rng)
    c_left = rng.next()
    c_right = rng.next()
    for _ in range(intensity - 1):
        c_left &= rng.next()
        c_right &= rng.next()
    return c_left, c_right


def mutate(genome: Optional[Genome], intensity: int,
           rng: Optional[BitStream] = None) -> Optional[Tuple[int, int]]:
    """
    Mutate a genome in place.

    The same left mask hits every left chromosome and the same right mask
    every right chromosome. Absent or empty genomes and non-positive
    intensities are ignored without drawing.

    Returns:
        The (left_mask, right_mask) applied, or None if nothing was done
    """
    if genome is None or not genome.is_valid or genome.n == 0 or intensity <= 0:
        return None
    c_left, c_right = mutation_masks(intensity, rng)
    genome.left ^= np.uint64(c_left)
    genome.right ^= np.uint64(c_right)
    if log.isEnabledFor(logging.DEBUG):
        log.debug("mutate: intensity=%d flipped %d+%d bits per chromosome",
                  intensity, bin(c_left).count("1"), bin(c_right).count("1"))
    return c_left, c_right


def expected_mask_density(intensity: int) -> float:
    """Probability that a given mask bit is set after `intensity` draws."""
    if intensity <= 0:
        return 0.0
    return 2.0 ** -intensity
