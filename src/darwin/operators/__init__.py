"""
Darwin Operator Catalog.

Interchangeable selection, crossover, mutation, replacement, termination and
migration operators, plus the PBIL distribution and its update rule.
"""

from darwin.operators.base import (
    Selector,
    Crossover,
    Mutator,
    Replacer,
    Terminator,
    Migrator,
    Distribution,
    DistributionUpdate
)

from darwin.operators.selection import (
    RandomSelection,
    TruncationSelection,
    RouletteWheelSelection,
    StochasticUniversalSampling,
    TournamentSelection,
    RankSelection,
    SigmaScalingSelection,
    linear_rank,
    sigma_scale
)

from darwin.operators.crossover import (
    NPointCrossover,
    UniformCrossover,
    PartiallyMatchedCrossover,
    BlendCrossover,
    SimulatedBinaryCrossover
)

from darwin.operators.mutation import (
    FlipMutation,
    SwapMutation,
    InvertMutation,
    MoveMutation,
    BoundaryMutation,
    NormalMutation,
    UniformMutation,
    VectorMutation
)

from darwin.operators.replacement import ReplaceAll, ElitistReplacement

from darwin.operators.termination import (
    GenerationTermination,
    FitnessTermination,
    TimeTermination,
    StagnationTermination,
    FlagTermination,
    OrTermination,
    AndTermination
)

from darwin.operators.migration import RandomMigration, RingMigration
from darwin.operators.pbil import BitProbabilityDistribution, PbilUpdate

__all__ = [
    # Interfaces
    "Selector",
    "Crossover",
    "Mutator",
    "Replacer",
    "Terminator",
    "Migrator",
    "Distribution",
    "DistributionUpdate",

    # Selection
    "RandomSelection",
    "TruncationSelection",
    "RouletteWheelSelection",
    "StochasticUniversalSampling",
    "TournamentSelection",
    "RankSelection",
    "SigmaScalingSelection",
    "linear_rank",
    "sigma_scale",

    # Crossover
    "NPointCrossover",
    "UniformCrossover",
    "PartiallyMatchedCrossover",
    "BlendCrossover",
    "SimulatedBinaryCrossover",

    # Mutation
    "FlipMutation",
    "SwapMutation",
    "InvertMutation",
    "MoveMutation",
    "BoundaryMutation",
    "NormalMutation",
    "UniformMutation",
    "VectorMutation",

    # Replacement
    "ReplaceAll",
    "ElitistReplacement",

    # Termination
    "GenerationTermination",
    "FitnessTermination",
    "TimeTermination",
    "StagnationTermination",
    "FlagTermination",
    "OrTermination",
    "AndTermination",

    # Migration
    "RandomMigration",
    "RingMigration",

    # Distribution learning
    "BitProbabilityDistribution",
    "PbilUpdate"
]
