"""
Bit-Stream Generator - 64-bit pseudo-random words for the genetics engine

Every random decision in the package (crossover points, allosome choice,
mutation masks, recipe bits) is drawn from a BitStream: any object with a
next() method returning an unsigned 64-bit integer.

GENERATORS:
1. XorShift64Star - xorshift64* with an owned, lock-protected state
2. ScriptedStream - replays a fixed list of values (deterministic tests)

USAGE:
    from bitgenetics.xorshift import XorShift64Star, ScriptedStream

    rng = XorShift64Star(seed=42)
    word = rng.next()

    # Inject known values
    rng = ScriptedStream([0xFFFF, 0x1])
"""

import os
import time
import threading
from typing import Iterable, List, Optional, Protocol

import numpy as np


# =============================================================================
# CONSTANTS
# =============================================================================

CHROMOSOME_BITS = 64
MASK64 = (1 << CHROMOSOME_BITS) - 1
MULTIPLIER = 0x2545F4914F6CDD1D  # xorshift64* output scrambler

SHIFT_A = 12
SHIFT_B = 25
SHIFT_C = 27


class BitStream(Protocol):
    """Source of unsigned 64-bit words."""

    def next(self) -> int:
        ...


class StreamExhausted(RuntimeError):
    """Raised when a ScriptedStream has no values left."""


# =============================================================================
# SEEDING
# =============================================================================

def entropy_seed() -> int:
    """
    Build a non-zero 64-bit seed from the platform RNG and the clock.

    Two 32-bit draws form the high and low halves; the nanosecond clock
    is folded in with XOR. Zero is a fixed point of xorshift, so a zero
    result is redrawn.
    """
    rng = np.random.default_rng()
    while True:
        hi, lo = (int(v) for v in rng.integers(0, 1 << 32, size=2, dtype=np.uint64))
        seed = ((hi << 32) | lo) ^ (time.time_ns() & MASK64) ^ os.getpid()
        seed &= MASK64
        if seed != 0:
            return seed


def _check_seed(seed: int) -> int:
    seed = int(seed) & MASK64
    if seed == 0:
        raise ValueError("xorshift seed must be non-zero (zero is a fixed point)")
    return seed


# =============================================================================
# XORSHIFT64*
# =============================================================================

class XorShift64Star:
    """
    xorshift64* generator owning a single 64-bit state word.

    Without an explicit seed the state is filled from entropy_seed() on
    the first draw. State updates hold a lock so one instance can be
    shared between threads.
    """

    def __init__(self, seed: Optional[int] = None):
        self._lock = threading.Lock()
        self._state: Optional[int] = None if seed is None else _check_seed(seed)

    @property
    def state(self) -> Optional[int]:
        """Current state word, None until seeded."""
        return self._state

    @property
    def seeded(self) -> bool:
        return self._state is not None

    def reseed(self, seed: Optional[int] = None):
        """Reset the state; None draws a fresh entropy seed."""
        with self._lock:
            self._state = entropy_seed() if seed is None else _check_seed(seed)

    def next(self) -> int:
        """Advance the state and return the scrambled 64-bit output."""
        with self._lock:
            x = self._state
            if x is None:
                x = entropy_seed()
            x ^= x >> SHIFT_A
            x ^= (x << SHIFT_B) & MASK64
            x ^= x >> SHIFT_C
            self._state = x
        return (x * MULTIPLIER) & MASK64

    def take(self, count: int) -> List[int]:
        """Return the next `count` outputs as a list."""
        return [self.next() for _ in range(count)]

    def __repr__(self) -> str:
        if self._state is None:
            return "XorShift64Star(unseeded)"
        return f"XorShift64Star(state={self._state:#018x})"


# =============================================================================
# SCRIPTED STREAM
# =============================================================================

class ScriptedStream:
    """
    Replays a fixed sequence of 64-bit values.

    Used to drive the operators with known draws. Once the values run
    out, next() raises StreamExhausted unless cycle=True.
    """

    def __init__(self, values: Iterable[int], cycle: bool = False):
        self.values = [int(v) & MASK64 for v in values]
        if cycle and not self.values:
            raise ValueError("a cycling stream needs at least one value")
        self.cycle = cycle
        self.draws = 0

    @property
    def remaining(self) -> int:
        if self.cycle:
            return len(self.values)
        return max(0, len(self.values) - self.draws)

    def next(self) -> int:
        if self.cycle:
            value = self.values[self.draws % len(self.values)]
        elif self.draws < len(self.values):
            value = self.values[self.draws]
        else:
            raise StreamExhausted(
                f"scripted stream exhausted after {len(self.values)} draws"
            )
        self.draws += 1
        return value

    def __repr__(self) -> str:
        return f"ScriptedStream(values={len(self.values)}, draws={self.draws})"


# =============================================================================
# SHARED DEFAULT
# =============================================================================

_default: Optional[BitStream] = None
_default_lock = threading.Lock()


def default_generator() -> BitStream:
    """Process-wide generator, created on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = XorShift64Star()
        return _default


def set_default_generator(generator) -> Optional[BitStream]:
    """Replace the process-wide generator and return the previous one."""
    global _default
    with _default_lock:
        previous, _default = _default, generator
    return previous


def resolve(rng: Optional[BitStream] = None) -> BitStream:
    """Return `rng`, or the process-wide generator when it is None."""
    return default_generator() if rng is None else rng


__all__ = [
    'CHROMOSOME_BITS',
    'MASK64',
    'MULTIPLIER',
    'BitStream',
    'StreamExhausted',
    'XorShift64Star',
    'ScriptedStream',
    'entropy_seed',
    'default_generator',
    'set_default_generator',
    'resolve',
]
