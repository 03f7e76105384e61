"""
Darwin Core Module - Population Model and Engines.

This module contains the core components of the Darwin metaheuristics toolkit,
including configuration, the population model, the generational genetic
algorithm, the estimation-of-distribution engine and the island model.
"""

from darwin.core.population import (
    Evaluation,
    Individual,
    Population,
    SelectionSize
)

from darwin.core.config import (
    DarwinConfig,
    EvolutionParameters,
    DistributionParameters,
    IslandParameters,
    LoggingConfig,
    create_default_config,
    create_test_config
)

from darwin.core.settings import ObservabilitySettings
from darwin.core.observability import configure_observability, get_logger

from darwin.core.engine import GeneticAlgorithmEngine
from darwin.core.eda import EstimationOfDistributionEngine
from darwin.core.island import Island, IslandModel

__all__ = [
    # Population model
    "Evaluation",
    "Individual",
    "Population",
    "SelectionSize",

    # Configuration
    "DarwinConfig",
    "EvolutionParameters",
    "DistributionParameters",
    "IslandParameters",
    "LoggingConfig",
    "create_default_config",
    "create_test_config",

    # Observability
    "ObservabilitySettings",
    "configure_observability",
    "get_logger",

    # Engines
    "GeneticAlgorithmEngine",
    "EstimationOfDistributionEngine",
    "Island",
    "IslandModel"
]
