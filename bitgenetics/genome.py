"""
Genome Store - Paired chromosome sequences for diploid organisms

A genome holds two homologous tracks, left and right, each a sequence of
n chromosomes. A chromosome is an opaque unsigned 64-bit word; nothing in
the package assigns meaning to individual bits.

Tracks are numpy uint64 arrays. A genome is built atomically: both tracks
exist (possibly empty) or the constructor raises. release() drops the
tracks, after which every operation treats the genome as absent.

USAGE:
    from bitgenetics.genome import allocate, randomize, render, release

    g = allocate(8)
    randomize(g)
    print(render(g), end="")
    release(g)
"""

import sys
import json
import hashlib
import logging
from typing import Dict, List, Optional, Sequence, TextIO, Union

import numpy as np

from .xorshift import MASK64, BitStream, resolve

log = logging.getLogger("bitgenetics.genome")

CHROMOSOME_DTYPE = np.uint64

ChromosomeSequence = Union[np.ndarray, Sequence[int]]


def as_chromosomes(values: ChromosomeSequence) -> np.ndarray:
    """
    Copy `values` into a fresh 1-D uint64 array.

    Raises ValueError for values outside [0, 2**64).
    """
    if isinstance(values, np.ndarray):
        if values.dtype.kind == "i" and values.size and values.min() < 0:
            raise ValueError("chromosome values must be non-negative")
        arr = values.astype(CHROMOSOME_DTYPE, copy=True)
    else:
        ints = [int(v) for v in values]
        for v in ints:
            if v < 0 or v > MASK64:
                raise ValueError(f"chromosome value {v:#x} does not fit in 64 bits")
        arr = np.array(ints, dtype=CHROMOSOME_DTYPE)
    if arr.ndim != 1:
        raise ValueError(f"chromosome sequence must be 1-D, got shape {arr.shape}")
    return arr


def chromosome_hex(value: int) -> str:
    """Fixed-width 16 digit hex, used for serialization."""
    return f"{int(value):016x}"


# =============================================================================
# GENOME
# =============================================================================

class Genome:
    """
    Diploid genome: two equal-length tracks of 64-bit chromosomes.

    Attributes:
        left: uint64 array, or None once released
        right: uint64 array, or None once released
    """

    def __init__(self, left: ChromosomeSequence, right: ChromosomeSequence):
        """
        Build a genome from two chromosome sequences.

        Both sequences are copied. Raises ValueError if either is missing
        or their lengths differ.
        """
        if left is None or right is None:
            raise ValueError("genome needs both a left and a right track")
        left_arr = as_chromosomes(left)
        right_arr = as_chromosomes(right)
        if len(left_arr) != len(right_arr):
            raise ValueError(
                f"track lengths differ: left={len(left_arr)} right={len(right_arr)}"
            )
        self.left: Optional[np.ndarray] = left_arr
        self.right: Optional[np.ndarray] = right_arr

    @classmethod
    def zeros(cls, size: int) -> 'Genome':
        """Genome of `size` all-zero chromosomes (size may be 0)."""
        if size < 0:
            raise ValueError(f"genome size must be >= 0, got {size}")
        return cls(np.zeros(size, dtype=CHROMOSOME_DTYPE),
                   np.zeros(size, dtype=CHROMOSOME_DTYPE))

    @classmethod
    def allocate(cls, size: int) -> Optional['Genome']:
        return allocate(size)

    @property
    def is_valid(self) -> bool:
        """True while both tracks are present."""
        return self.left is not None and self.right is not None

    @property
    def released(self) -> bool:
        return self.left is None and self.right is None

    @property
    def n(self) -> int:
        """Number of chromosomes per track (0 if not valid)."""
        if not self.is_valid:
            return 0
        return len(self.left)

    def __len__(self) -> int:
        return self.n

    @property
    def id(self) -> str:
        """Short digest of both tracks."""
        h = hashlib.md5()
        if self.left is not None:
            h.update(self.left.tobytes())
        h.update(b"|")
        if self.right is not None:
            h.update(self.right.tobytes())
        return h.hexdigest()[:16]

    def chromosome(self, index: int) -> tuple:
        """(left, right) chromosome pair at `index` as Python ints."""
        return int(self.left[index]), int(self.right[index])

    def copy(self) -> 'Genome':
        if not self.is_valid:
            raise ValueError("cannot copy a released genome")
        return Genome(self.left, self.right)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Genome):
            return NotImplemented
        if not (self.is_valid and other.is_valid):
            return self.is_valid == other.is_valid
        return (np.array_equal(self.left, other.left)
                and np.array_equal(self.right, other.right))

    __hash__ = None

    def to_dict(self) -> dict:
        """Serialize genome to dictionary (chromosomes as hex strings)."""
        if not self.is_valid:
            raise ValueError("cannot serialize a released genome")
        return {
            'id': self.id,
            'n': self.n,
            'left': [chromosome_hex(c) for c in self.left],
            'right': [chromosome_hex(c) for c in self.right],
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'Genome':
        """Deserialize genome from dictionary."""
        return cls([int(c, 16) for c in d['left']],
                   [int(c, 16) for c in d['right']])

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, s: str) -> 'Genome':
        return cls.from_dict(json.loads(s))

    def __repr__(self) -> str:
        if not self.is_valid:
            return "Genome(released)"
        return f"Genome(id={self.id}, n={self.n})"


# =============================================================================
# STORE OPERATIONS
# =============================================================================

def allocate(size: int) -> Optional[Genome]:
    """
    Allocate a zero-filled genome.

    Args:
        size: Chromosomes per track; must be positive

    Returns:
        New genome, or None if size <= 0 or memory is unavailable
    """
    if size is None or size <= 0:
        log.debug("allocate: refusing size %r", size)
        return None
    try:
        return Genome.zeros(size)
    except (MemoryError, ValueError, OverflowError) as e:
        # numpy reports oversized shapes as ValueError
        log.debug("allocate: cannot allocate %d chromosomes: %s", size, e)
        return None


def release(genome: Optional[Genome]):
    """Drop both tracks. Safe on None and on already-released genomes."""
    if genome is None:
        return
    genome.left = None
    genome.right = None


def randomize(genome: Optional[Genome], rng: Optional[BitStream] = None) -> bool:
    """
    Overwrite every chromosome with fresh draws, left then right per index.

    Returns:
        False if the genome or either track is absent, else True
    """
    if genome is None or not genome.is_valid:
        return False
    rng = resolve(rng)
    for i in range(genome.n):
        genome.left[i] = rng.next()
        genome.right[i] = rng.next()
    return True


def render_lines(genome: Optional[Genome]) -> List[str]:
    if genome is None or not genome.is_valid:
        return []
    return [
        f"{i}: l = {int(l):x}  r = {int(r):x}"
        for i, (l, r) in enumerate(zip(genome.left, genome.right))
    ]


def render(genome: Optional[Genome]) -> str:
    """
    Format a genome as text, one line per chromosome pair:

        0: l = <left hex>  r = <right hex>

    An absent genome renders as the empty string.
    """
    lines = render_lines(genome)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def print_genome(genome: Optional[Genome], file: Optional[TextIO] = None) -> int:
    """
    Write render(genome) to `file` (stdout by default).

    Returns:
        Number of characters written, 0 for an absent genome,
        -1 if the stream failed
    """
    out = sys.stdout if file is None else file
    total = 0
    for line in render_lines(genome):
        try:
            total += out.write(line + "\n")
        except OSError as e:
            log.warning("print_genome: write failed: %s", e)
            return -1
    return total


def genome_summary(genome: Optional[Genome]) -> Dict[str, float]:
    """Bit statistics for a genome (set-bit density and track divergence)."""
    if genome is None or not genome.is_valid or genome.n == 0:
        return {'n': 0, 'density': 0.0, 'heterozygosity': 0.0}
    bits = np.unpackbits(np.concatenate([genome.left, genome.right]).view(np.uint8))
    diff = np.unpackbits((genome.left ^ genome.right).view(np.uint8))
    return {
        'n': genome.n,
        'density': float(bits.mean()),
        'heterozygosity': float(diff.mean()),
    }


__all__ = [
    'CHROMOSOME_DTYPE',
    'Genome',
    'as_chromosomes',
    'chromosome_hex',
    'allocate',
    'release',
    'randomize',
    'render',
    'render_lines',
    'print_genome',
    'genome_summary',
]
