"""
Darwin Metaheuristics Toolkit.

A composable toolkit for population-based optimization: a generational
genetic algorithm, an estimation-of-distribution engine with PBIL learning,
and an island model with periodic migration, built on a catalog of
interchangeable operators. Callers supply the representation, the fitness
function and a ``numpy.random.Generator``.
"""

from darwin.core import (
    DarwinConfig,
    EvolutionParameters,
    DistributionParameters,
    IslandParameters,
    LoggingConfig,
    ObservabilitySettings,
    create_default_config,
    create_test_config,
    configure_observability,
    Evaluation,
    Individual,
    Population,
    SelectionSize,
    GeneticAlgorithmEngine,
    EstimationOfDistributionEngine,
    Island,
    IslandModel
)
from darwin import operators

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "DarwinConfig",
    "EvolutionParameters",
    "DistributionParameters",
    "IslandParameters",
    "LoggingConfig",
    "ObservabilitySettings",
    "create_default_config",
    "create_test_config",
    "configure_observability",
    # Population
    "Evaluation",
    "Individual",
    "Population",
    "SelectionSize",
    # Engines
    "GeneticAlgorithmEngine",
    "EstimationOfDistributionEngine",
    "Island",
    "IslandModel",
    # Operator catalog
    "operators"
]
