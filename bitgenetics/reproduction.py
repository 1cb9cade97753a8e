"""
Reproduction - one mating event between two genomes

The child's left track is a female (unrestricted) gamete of parent x and
its right track a male (restricted) gamete of parent y. The roles are
fixed: swapping the parents changes which genome's allosome is inherited
whole. The finished child is then mutated.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import GeneticsConfig
from .gamete import GameteVariant, build_gamete
from .genome import Genome
from .mutation import DEFAULT_INTENSITY, mutate
from .xorshift import BitStream, resolve

log = logging.getLogger("bitgenetics.reproduction")


def reproduce(parent_x: Optional[Genome], parent_y: Optional[Genome],
              rng: Optional[BitStream] = None,
              intensity: int = DEFAULT_INTENSITY) -> Optional[Genome]:
    """
    Produce a child from two parents of equal length.

    Args:
        parent_x: Female parent, supplies the child's left track
        parent_y: Male parent, supplies the child's right track
        rng: Bit stream, defaults to the shared generator
        intensity: Mutation intensity applied to the child

    Returns:
        Child genome, or None if a parent is absent or lengths differ
    """
    if parent_x is None or parent_y is None:
        log.debug("reproduce: missing parent")
        return None
    if not (parent_x.is_valid and parent_y.is_valid):
        log.debug("reproduce: parent has no chromosome tracks")
        return None
    if parent_x.n != parent_y.n:
        log.debug("reproduce: parent lengths differ (%d != %d)", parent_x.n, parent_y.n)
        return None
    rng = resolve(rng)

    left = build_gamete(parent_x, GameteVariant.UNRESTRICTED, rng)
    right = build_gamete(parent_y, GameteVariant.RESTRICTED, rng)
    if left is None or right is None:
        log.debug("reproduce: gamete construction failed")
        return None

    child = Genome(left, right)
    mutate(child, intensity, rng)
    return child


@dataclass
class Mating:
    """Record of one mating event."""
    female_id: str
    male_id: str
    intensity: int
    child: Optional[Genome] = None

    @property
    def succeeded(self) -> bool:
        return self.child is not None

    @property
    def child_id(self) -> Optional[str]:
        return self.child.id if self.child is not None else None


def mate(female: Optional[Genome], male: Optional[Genome],
         rng: Optional[BitStream] = None,
         config: Optional[GeneticsConfig] = None) -> Mating:
    """reproduce() with the intensity from `config`, wrapped in a Mating record."""
    intensity = config.mutation_intensity if config is not None else DEFAULT_INTENSITY
    child = reproduce(female, male, rng=rng, intensity=intensity)
    return Mating(
        female_id=female.id if female is not None else "",
        male_id=male.id if male is not None else "",
        intensity=intensity,
        child=child,
    )
