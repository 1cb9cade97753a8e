# Bit Genetics - Sexual reproduction on 64-bit chromosomes
#
# A genome is a pair of homologous tracks of 64-bit words. Offspring are
# built from one crossover gamete per parent and a light mutation pass.
#
# MODULES:
# ├── xorshift.py       - xorshift64* bit stream + scripted streams
# ├── genome.py         - Genome aggregate, allocate/release/randomize/render
# ├── mutation.py       - intensity-controlled XOR masks
# ├── gamete.py         - female/male haploid gametes
# ├── reproduction.py   - mating of two genomes
# ├── recipe.py         - genomes from template + mask
# ├── config.py         - GeneticsConfig
# └── visualization.py  - matplotlib plots (optional dependency)

# =============================================================================
# RANDOMNESS
# =============================================================================

from .xorshift import (
    CHROMOSOME_BITS,
    MASK64,
    BitStream,
    StreamExhausted,
    XorShift64Star,
    ScriptedStream,
    default_generator,
    set_default_generator,
)

# =============================================================================
# GENOMES AND OPERATORS
# =============================================================================

from .genome import (
    Genome,
    allocate,
    release,
    randomize,
    render,
    print_genome,
    genome_summary,
)

from .mutation import (
    DEFAULT_INTENSITY,
    mutate,
    mutation_masks,
    expected_mask_density,
)

from .gamete import (
    GameteVariant,
    build_gamete,
    crossover_mask,
    haploid_female,
    haploid_male,
)

from .reproduction import (
    Mating,
    mate,
    reproduce,
)

from .recipe import (
    Recipe,
    demo_recipe,
    synthesize,
)

from .config import (
    GeneticsConfig,
    load_config,
)

__version__ = "0.1.0"

# =============================================================================
# PUBLIC API
# =============================================================================

__all__ = [
    # Randomness
    'CHROMOSOME_BITS',
    'MASK64',
    'BitStream',
    'StreamExhausted',
    'XorShift64Star',
    'ScriptedStream',
    'default_generator',
    'set_default_generator',

    # Genome store
    'Genome',
    'allocate',
    'release',
    'randomize',
    'render',
    'print_genome',
    'genome_summary',

    # Mutation
    'DEFAULT_INTENSITY',
    'mutate',
    'mutation_masks',
    'expected_mask_density',

    # Gametes
    'GameteVariant',
    'build_gamete',
    'crossover_mask',
    'haploid_female',
    'haploid_male',

    # Reproduction
    'Mating',
    'mate',
    'reproduce',

    # Recipes
    'Recipe',
    'demo_recipe',
    'synthesize',

    # Configuration
    'GeneticsConfig',
    'load_config',
]
