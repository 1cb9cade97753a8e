"""
Genome Visualization Tools

Matplotlib plots for inspecting genomes and mutation strength:
- Bit matrix of both tracks (one row per chromosome, MSB on the left)
- Mean flipped bits per chromosome across mutation intensities

Usage:
    from bitgenetics.visualization import plot_genome, plot_mutation_density

    plot_genome(genome)
    plot_mutation_density(range(1, 8), trials=500)
"""

import warnings
from typing import Dict, Iterable, Optional

import numpy as np

from .genome import Genome
from .mutation import expected_mask_density, mutation_masks
from .xorshift import CHROMOSOME_BITS, BitStream, resolve

# Conditional import for matplotlib (optional dependency)
try:
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False
    plt = None


def _require_matplotlib() -> bool:
    if not HAS_MATPLOTLIB:
        warnings.warn(
            "matplotlib not installed. Install with: pip install bitgenetics[viz]"
        )
    return HAS_MATPLOTLIB


def genome_bit_matrix(genome: Genome) -> np.ndarray:
    """
    Unpack a genome into a (2n, 64) uint8 matrix.

    Rows alternate left/right per chromosome index; column 0 is bit 63.
    """
    if not genome.is_valid:
        raise ValueError("cannot plot a released genome")
    interleaved = np.empty(2 * genome.n, dtype=np.uint64)
    interleaved[0::2] = genome.left
    interleaved[1::2] = genome.right
    big_endian = interleaved.astype('>u8')
    bits = np.unpackbits(big_endian.view(np.uint8))
    return bits.reshape(2 * genome.n, CHROMOSOME_BITS)


def mutation_bit_counts(intensities: Iterable[int], trials: int = 200,
                        rng: Optional[BitStream] = None) -> Dict[int, float]:
    """Mean set bits per mask (left and right pooled) for each intensity."""
    rng = resolve(rng)
    result = {}
    for k in intensities:
        total = 0
        for _ in range(trials):
            c_left, c_right = mutation_masks(k, rng)
            total += bin(c_left).count("1") + bin(c_right).count("1")
        result[k] = total / (2 * trials)
    return result


def plot_genome(genome: Genome, ax=None, title: Optional[str] = None):
    """Draw the bit matrix of a genome. Returns the axes, or None without matplotlib."""
    if not _require_matplotlib():
        return None
    matrix = genome_bit_matrix(genome)
    if ax is None:
        _, ax = plt.subplots(figsize=(10, max(2, genome.n * 0.4)))
    ax.imshow(matrix, cmap='Greys', aspect='auto', interpolation='nearest')
    ax.set_yticks(range(0, 2 * genome.n))
    ax.set_yticklabels([f"{i // 2}{'l' if i % 2 == 0 else 'r'}" for i in range(2 * genome.n)])
    ax.set_xlabel("bit (63 → 0)")
    ax.set_title(title or f"Genome {genome.id}")
    return ax


def plot_mutation_density(intensities: Iterable[int], trials: int = 200,
                          rng: Optional[BitStream] = None, ax=None):
    """Measured vs expected flipped bits per chromosome for each intensity."""
    if not _require_matplotlib():
        return None
    counts = mutation_bit_counts(list(intensities), trials, rng)
    ks = sorted(counts)
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4))
    ax.plot(ks, [counts[k] for k in ks], 'o-', label='measured')
    ax.plot(ks, [CHROMOSOME_BITS * expected_mask_density(k) for k in ks], '--', label='expected')
    ax.set_yscale('log')
    ax.set_xlabel("intensity")
    ax.set_ylabel("bits flipped per chromosome")
    ax.legend()
    return ax
