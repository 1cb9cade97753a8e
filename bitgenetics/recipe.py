"""
Recipe Synthesizer - genomes from a template plus a randomization mask

A recipe pairs each template chromosome ("code") with a mask. Where a
mask bit is 0 both tracks copy the code bit; where it is 1 each track
gets its own random bit.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .genome import (
    CHROMOSOME_DTYPE,
    ChromosomeSequence,
    Genome,
    allocate,
    as_chromosomes,
    chromosome_hex,
)
from .xorshift import BitStream, resolve

log = logging.getLogger("bitgenetics.recipe")


@dataclass(eq=False)
class Recipe:
    """
    Template for genome synthesis.

    Attributes:
        code: Template chromosomes (uint64 array)
        mask: Per-bit randomization mask, same length as code
    """
    code: Optional[np.ndarray]
    mask: Optional[np.ndarray]

    def __post_init__(self):
        if self.code is not None:
            self.code = as_chromosomes(self.code)
        if self.mask is not None:
            self.mask = as_chromosomes(self.mask)
        if self.code is not None and self.mask is not None and len(self.code) != len(self.mask):
            raise ValueError(
                f"recipe code and mask lengths differ: {len(self.code)} != {len(self.mask)}"
            )

    @property
    def n(self) -> int:
        if self.code is None or self.mask is None:
            return 0
        return len(self.code)

    @classmethod
    def single(cls, code: int, mask: int) -> 'Recipe':
        """One-chromosome recipe."""
        return cls([code], [mask])

    @classmethod
    def fixed(cls, code: ChromosomeSequence) -> 'Recipe':
        """Recipe with an all-zero mask: synthesis copies `code` exactly."""
        code = as_chromosomes(code)
        return cls(code, np.zeros(len(code), dtype=CHROMOSOME_DTYPE))

    def to_dict(self) -> dict:
        return {
            'code': [chromosome_hex(c) for c in self.code],
            'mask': [chromosome_hex(c) for c in self.mask],
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'Recipe':
        return cls([int(c, 16) for c in d['code']],
                   [int(c, 16) for c in d['mask']])


# Recipe used by the demo driver: low half fixed, high half random.
DEMO_CODE = 0xAAAAAAAAAAAAAAAA
DEMO_MASK = 0xFFFFFFFF00000000


def demo_recipe() -> Recipe:
    return Recipe.single(DEMO_CODE, DEMO_MASK)


def synthesize(recipe: Optional[Recipe], rng: Optional[BitStream] = None) -> Optional[Genome]:
    """
    Build a genome from a recipe.

    For each index the left draw is taken before the right draw:
        left  = code ^ (draw & mask)
        right = code ^ (draw & mask)

    Returns:
        New genome, or None for an absent or empty recipe
    """
    if recipe is None or recipe.code is None or recipe.mask is None or recipe.n <= 0:
        log.debug("synthesize: unusable recipe %r", recipe)
        return None
    genome = allocate(recipe.n)
    if genome is None:
        return None
    rng = resolve(rng)

    for i in range(recipe.n):
        code = int(recipe.code[i])
        mask = int(recipe.mask[i])
        genome.left[i] = code ^ (rng.next() & mask)
        genome.right[i] = code ^ (rng.next() & mask)
    return genome
