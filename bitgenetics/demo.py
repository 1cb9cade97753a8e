"""
Demo driver - one random genome, one recipe genome, and their child

Usage:
    python run_demo.py [size] [--seed N] [--intensity K] [--json]

Prints the three genomes in the text format produced by genome.render().
"""

import re
import sys
import json
import logging
import argparse
from typing import List, Optional

from .config import GeneticsConfig, load_config
from .genome import allocate, print_genome, randomize, release
from .recipe import demo_recipe, synthesize
from .reproduction import reproduce

log = logging.getLogger("bitgenetics.demo")


def parse_size(text: Optional[str], default: int, fallback: int) -> int:
    """
    Chromosome count from the command line.

    Missing -> `default`. Otherwise the leading integer is used, and a
    value of 0 (including unparseable text) becomes `fallback`.
    """
    if text is None:
        return default
    match = re.match(r"\s*([+-]?\d+)", text)
    size = int(match.group(1)) if match else 0
    return fallback if size == 0 else size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bitgenetics-demo",
        description="Breed a random genome with a recipe genome and print all three.",
    )
    parser.add_argument("size", nargs="?", help="chromosomes per track (default 8)")
    parser.add_argument("--seed", type=lambda s: int(s, 0), help="generator seed")
    parser.add_argument("--intensity", type=int, help="offspring mutation intensity")
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("--json", action="store_true", help="print genomes as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def setup_logging(level: str, verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s  %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else GeneticsConfig.from_env()
        config = config.merged(seed=args.seed, mutation_intensity=args.intensity)
    except (OSError, ValueError) as e:
        print(f"bitgenetics-demo: {e}", file=sys.stderr)
        return 2

    setup_logging(config.log_level, args.verbose)
    rng = config.make_generator()
    size = parse_size(args.size, config.genome_size, config.fallback_genome_size)
    log.debug("demo: size=%d intensity=%d seed=%s", size, config.mutation_intensity, config.seed)

    x = allocate(size)
    randomize(x, rng)
    y = synthesize(demo_recipe(), rng)
    z = reproduce(x, y, rng=rng, intensity=config.mutation_intensity)
    if z is None:
        log.info("no offspring: parents have %d and %d chromosomes",
                 x.n if x is not None else 0, y.n if y is not None else 0)

    if args.json:
        out = {
            name: (g.to_dict() if g is not None else None)
            for name, g in (('x', x), ('y', y), ('z', z))
        }
        print(json.dumps(out, indent=2))
    else:
        for g in (x, y, z):
            print_genome(g)

    for g in (x, y, z):
        release(g)
    return 0


if __name__ == '__main__':
    sys.exit(main())
