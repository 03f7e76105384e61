"""
Estimation-of-distribution engine for Darwin Metaheuristics.

Instead of recombining individuals, each step samples a fresh population
from a probabilistic model, evaluates it and learns the model from the
result.
"""

from typing import Optional
import logging

import logfire
import numpy as np

from darwin.core.config import DarwinConfig, LoggingConfig
from darwin.core.observability import get_logger
from darwin.core.population import Evaluation, Individual, Population
from darwin.operators.base import Distribution, DistributionUpdate, Terminator
from darwin.operators.pbil import PbilUpdate


class EstimationOfDistributionEngine:
    """
    Estimation-of-distribution algorithm (probabilistic model-building GA).

    The distribution is the only state carried between steps; the sampled
    population of the latest step stays available as ``population``.
    """

    def __init__(
        self,
        population_size: int,
        evaluation: Evaluation,
        update: DistributionUpdate,
        termination: Terminator,
        logging_config: Optional[LoggingConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the distribution engine.

        Args:
            population_size: Number of individuals sampled per step
            evaluation: Fitness callback ``(value, rng) -> float``
            update: Rule learning the distribution from the evaluated sample
            termination: Termination predicate
            logging_config: Logging options
            logger: Optional logger instance
        """
        if population_size < 1:
            raise ValueError(f"Population size must be positive, got {population_size}")

        self.population_size = population_size
        self.evaluation = evaluation
        self.update = update
        self.termination = termination
        self.logging_config = logging_config or LoggingConfig()
        self.logger = logger or get_logger("darwin.eda", self.logging_config)

        self.generation = 0
        self.population = Population()

    @classmethod
    def from_config(
        cls,
        config: DarwinConfig,
        evaluation: Evaluation,
        termination: Terminator
    ) -> "EstimationOfDistributionEngine":
        """Create a PBIL engine from the distribution section of a configuration."""
        return cls(
            config.distribution.population_size,
            evaluation,
            PbilUpdate.from_config(config.distribution),
            termination,
            logging_config=config.logging.model_copy()
        )

    def step(self, distribution: Distribution, rng: np.random.Generator) -> bool:
        """
        Sample, evaluate, learn and test termination once.

        Args:
            distribution: Model to sample from and update in place
            rng: Random number generator

        Returns:
            Whether the run should stop
        """
        self.population.individuals = [
            Individual(value=distribution.sample(rng)) for _ in range(self.population_size)
        ]
        self.population.evaluate(self.evaluation, rng)
        self.update.update(distribution, self.population, rng)
        self.generation += 1

        stop = self.termination.should_stop(self.population, rng)
        if self.logging_config.enable_logging and self.generation % self.logging_config.log_interval == 0:
            best = self.population.best()
            self.logger.debug(f"Generation {self.generation}: best sample fitness: {best.fitness}")
            if self.logging_config.metrics_export:
                logfire.info(
                    "Distribution Progress",
                    evolution_generation=self.generation,
                    best_fitness=best.fitness
                )
        return stop

    def run(self, distribution: Distribution, rng: np.random.Generator) -> Distribution:
        """Step until the termination predicate holds and return the learned distribution."""
        with logfire.span("EDA Evolution", population_size=self.population_size):
            self.logger.info(f"Starting distribution learning with {self.population_size} samples per step")

            while not self.step(distribution, rng):
                pass

            self.logger.info(f"Distribution learning terminated after {self.generation} generations")
            return distribution
