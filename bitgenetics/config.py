"""
Configuration for the genetics engine and its demo driver.

Settings can come from defaults, a JSON file, or BITGENETICS_* environment
variables:

    BITGENETICS_SEED          generator seed (decimal or 0x-hex)
    BITGENETICS_INTENSITY     mutation intensity for offspring
    BITGENETICS_GENOME_SIZE   chromosomes per track in the demo
    BITGENETICS_LOG_LEVEL     logging level name
"""

import os
import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Mapping, Optional

from .xorshift import XorShift64Star

log = logging.getLogger("bitgenetics.config")

ENV_PREFIX = "BITGENETICS_"


def _parse_int(value) -> int:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"expected an integer, got {value!r}")
    try:
        if isinstance(value, str):
            return int(value.strip(), 0)
        return int(value)
    except TypeError:
        raise ValueError(f"expected an integer, got {value!r}") from None


@dataclass
class GeneticsConfig:
    """
    Tunable parameters.

    Use GeneticsConfig.from_dict(...) or load_config(path) to build one
    from external data; unknown keys are ignored.
    """
    # ==========================================================================
    # REPRODUCTION
    # ==========================================================================
    mutation_intensity: int = 6      # rounds ANDed into the offspring mask

    # ==========================================================================
    # DEMO DRIVER
    # ==========================================================================
    genome_size: int = 8             # used when no size is given
    fallback_genome_size: int = 4    # used when the given size is unusable

    # ==========================================================================
    # RANDOMNESS & LOGGING
    # ==========================================================================
    seed: Optional[int] = None       # None = entropy seeded
    log_level: str = "INFO"

    def validate(self) -> 'GeneticsConfig':
        """Raise ValueError for settings the engine cannot use."""
        if self.mutation_intensity <= 0:
            raise ValueError(f"mutation_intensity must be positive, got {self.mutation_intensity}")
        if self.genome_size <= 0:
            raise ValueError(f"genome_size must be positive, got {self.genome_size}")
        if self.fallback_genome_size <= 0:
            raise ValueError(
                f"fallback_genome_size must be positive, got {self.fallback_genome_size}"
            )
        if self.seed is not None and self.seed & ((1 << 64) - 1) == 0:
            raise ValueError("seed must be non-zero modulo 2**64")
        if not isinstance(self.log_level, str):
            raise ValueError(f"log_level must be a level name, got {self.log_level!r}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"unknown log level {self.log_level!r}")
        return self

    def make_generator(self) -> XorShift64Star:
        """Generator seeded from this config (entropy seeded if seed is None)."""
        return XorShift64Star(self.seed)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Mapping) -> 'GeneticsConfig':
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in d.items():
            if key not in known:
                log.debug("config: ignoring unknown key %r", key)
                continue
            if key in ('mutation_intensity', 'genome_size', 'fallback_genome_size'):
                value = _parse_int(value)
            elif key == 'seed' and value is not None:
                value = _parse_int(value)
            kwargs[key] = value
        return cls(**kwargs).validate()

    @classmethod
    def from_json(cls, s: str) -> 'GeneticsConfig':
        return cls.from_dict(json.loads(s))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 prefix: str = ENV_PREFIX) -> 'GeneticsConfig':
        """Defaults overridden by any BITGENETICS_* variables present."""
        environ = os.environ if environ is None else environ
        mapping = {
            'SEED': 'seed',
            'INTENSITY': 'mutation_intensity',
            'GENOME_SIZE': 'genome_size',
            'LOG_LEVEL': 'log_level',
        }
        d = {}
        for suffix, key in mapping.items():
            value = environ.get(prefix + suffix, "").strip()
            if value:
                d[key] = value
        return cls.from_dict(d)

    def merged(self, **overrides) -> 'GeneticsConfig':
        """Copy with the non-None overrides applied."""
        d = self.to_dict()
        d.update({k: v for k, v in overrides.items() if v is not None})
        return GeneticsConfig.from_dict(d)


def load_config(path) -> GeneticsConfig:
    """Load a GeneticsConfig from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        return GeneticsConfig.from_dict(json.load(f))
