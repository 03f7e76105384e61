"""
Darwin Configuration Module.

This module defines configuration classes for the Darwin metaheuristics
toolkit: evolution rates for the genetic algorithm, learning parameters for
the distribution-based engine, island-model settings and logging options.
"""

from typing import Optional, Dict, Any, Literal
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
import json
import os

import numpy as np

from darwin.core.population import SelectionSize


class EvolutionParameters(BaseModel):
    """Parameters controlling the genetic algorithm evolution step."""

    model_config = ConfigDict(validate_assignment=True)

    mutation_rate: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Probability of mutating each offspring"
    )
    crossover_rate: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Probability of crossover between paired offspring"
    )


class DistributionParameters(BaseModel):
    """Parameters of the bit-probability (PBIL) distribution engine."""

    model_config = ConfigDict(validate_assignment=True)

    population_size: int = Field(
        default=100,
        ge=1,
        description="Number of individuals sampled per step"
    )
    learning_rate: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Rate at which the probability vector moves toward the best samples"
    )
    best_count: int = Field(
        default=1,
        ge=1,
        description="Number of best individuals used to update the distribution"
    )
    mutation_prob: float = Field(
        default=0.02,
        ge=0.0,
        le=1.0,
        description="Probability of perturbing each position of the probability vector"
    )
    mutation_shift: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Size of a probability vector perturbation"
    )
    lower_bound: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Lowest probability allowed in the vector"
    )
    upper_bound: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Highest probability allowed in the vector"
    )

    @field_validator('best_count')
    def validate_best_count(cls, v, info):
        """Ensure best count does not exceed the sampled population."""
        if 'population_size' in info.data and v > info.data['population_size']:
            raise ValueError('Best count must not exceed population size')
        return v

    @model_validator(mode="after")
    def validate_bounds(self) -> "DistributionParameters":
        """Ensure the probability bounds are ordered."""
        if self.lower_bound > self.upper_bound:
            raise ValueError('Lower bound must not exceed upper bound')
        return self


class IslandParameters(BaseModel):
    """Parameters of the island model."""

    model_config = ConfigDict(validate_assignment=True)

    num_islands: int = Field(
        default=4,
        ge=2,
        description="Number of islands"
    )
    migration_rate: int = Field(
        default=50,
        ge=1,
        description="Generations between migrations"
    )
    migration_size: SelectionSize = Field(
        default_factory=lambda: SelectionSize(percentage=0.1),
        description="Individuals leaving each island per migration"
    )

    @field_validator('migration_size', mode='before')
    def coerce_migration_size(cls, v):
        """Accept plain counts and percentages."""
        if isinstance(v, (int, float)):
            return SelectionSize.coerce(v)
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging and monitoring."""

    enable_logging: bool = Field(
        default=True,
        description="Enable evolution progress logging"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )
    log_interval: int = Field(
        default=10,
        ge=1,
        description="Generations between progress logs"
    )
    metrics_export: bool = Field(
        default=True,
        description="Export progress metrics to logfire"
    )


class DarwinConfig(BaseModel):
    """Main configuration class for the Darwin toolkit."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid'
    )

    evolution: EvolutionParameters = Field(
        default_factory=EvolutionParameters,
        description="Genetic algorithm parameters"
    )
    distribution: DistributionParameters = Field(
        default_factory=DistributionParameters,
        description="Distribution-based engine parameters"
    )
    islands: IslandParameters = Field(
        default_factory=IslandParameters,
        description="Island model parameters"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging and monitoring configuration"
    )

    random_seed: Optional[int] = Field(
        default=None,
        description="Random seed for reproducibility"
    )

    @classmethod
    def from_env(cls) -> "DarwinConfig":
        """Create configuration from environment variables."""
        config_dict: Dict[str, Any] = {}

        if mutation_rate := os.getenv("DARWIN_MUTATION_RATE"):
            config_dict.setdefault("evolution", {})["mutation_rate"] = float(mutation_rate)
        if crossover_rate := os.getenv("DARWIN_CROSSOVER_RATE"):
            config_dict.setdefault("evolution", {})["crossover_rate"] = float(crossover_rate)

        if pop_size := os.getenv("DARWIN_EDA_POPULATION_SIZE"):
            config_dict.setdefault("distribution", {})["population_size"] = int(pop_size)
        if learning_rate := os.getenv("DARWIN_EDA_LEARNING_RATE"):
            config_dict.setdefault("distribution", {})["learning_rate"] = float(learning_rate)

        if num_islands := os.getenv("DARWIN_NUM_ISLANDS"):
            config_dict.setdefault("islands", {})["num_islands"] = int(num_islands)
        if migration_rate := os.getenv("DARWIN_MIGRATION_RATE"):
            config_dict.setdefault("islands", {})["migration_rate"] = int(migration_rate)

        if log_level := os.getenv("DARWIN_LOG_LEVEL"):
            config_dict.setdefault("logging", {})["log_level"] = log_level.upper()

        if random_seed := os.getenv("DARWIN_RANDOM_SEED"):
            config_dict["random_seed"] = int(random_seed)

        return cls(**config_dict)

    def make_rng(self) -> np.random.Generator:
        """Create a random number generator seeded from the configuration."""
        return np.random.default_rng(self.random_seed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    def save(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

    @classmethod
    def load(cls, filepath: str) -> "DarwinConfig":
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls(**data)

    def validate_consistency(self) -> None:
        """Validate configuration consistency across components."""
        if self.distribution.best_count > self.distribution.population_size:
            raise ValueError(
                f"Best count ({self.distribution.best_count}) must not exceed "
                f"population size ({self.distribution.population_size})"
            )

        if self.distribution.lower_bound > self.distribution.upper_bound:
            raise ValueError(
                f"Lower bound ({self.distribution.lower_bound}) cannot exceed "
                f"upper bound ({self.distribution.upper_bound})"
            )


# Convenience functions
def create_default_config() -> DarwinConfig:
    """Create a default configuration suitable for most use cases."""
    return DarwinConfig()


def create_test_config() -> DarwinConfig:
    """Create a configuration suitable for testing (smaller, seeded)."""
    return DarwinConfig(
        evolution=EvolutionParameters(
            mutation_rate=0.2,
            crossover_rate=0.8
        ),
        distribution=DistributionParameters(
            population_size=20,
            best_count=2
        ),
        islands=IslandParameters(
            num_islands=2,
            migration_rate=5
        ),
        logging=LoggingConfig(
            log_interval=1,
            metrics_export=False
        ),
        random_seed=42
    )
