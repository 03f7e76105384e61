"""
Genetic Algorithm Engine for Darwin Metaheuristics.

This module implements the generational genetic algorithm that composes the
operator catalog: each step evaluates the population, selects parents,
varies them pairwise with crossover and mutation, replaces the population
and tests the termination predicate.
"""

from typing import Optional
from copy import deepcopy
import logging

import logfire
import numpy as np

from darwin.core.config import DarwinConfig, EvolutionParameters, LoggingConfig
from darwin.core.observability import get_logger
from darwin.core.population import Evaluation, Population
from darwin.operators.base import Crossover, Mutator, Replacer, Selector, Terminator


class GeneticAlgorithmEngine:
    """
    Generational genetic algorithm.

    The engine owns its selection buffer and its termination state; use
    ``clone()`` to obtain an independent engine, e.g. one per island.
    """

    def __init__(
        self,
        evaluation: Evaluation,
        selection: Selector,
        crossover: Crossover,
        mutation: Mutator,
        replacement: Replacer,
        termination: Terminator,
        parameters: Optional[EvolutionParameters] = None,
        logging_config: Optional[LoggingConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the genetic algorithm engine.

        Args:
            evaluation: Fitness callback ``(value, rng) -> float``
            selection: Parent selection operator
            crossover: Recombination operator
            mutation: Mutation operator
            replacement: Replacement operator
            termination: Termination predicate
            parameters: Mutation and crossover rates
            logging_config: Logging options
            logger: Optional logger instance
        """
        self.evaluation = evaluation
        self.selection = selection
        self.crossover = crossover
        self.mutation = mutation
        self.replacement = replacement
        self.termination = termination
        self.parameters = parameters or EvolutionParameters()
        self.logging_config = logging_config or LoggingConfig()
        self.logger = logger or get_logger("darwin.engine", self.logging_config)

        # State tracking
        self.generation = 0
        self.total_evaluations = 0
        self._offspring = Population()

    @classmethod
    def from_config(
        cls,
        config: DarwinConfig,
        evaluation: Evaluation,
        selection: Selector,
        crossover: Crossover,
        mutation: Mutator,
        replacement: Replacer,
        termination: Terminator
    ) -> "GeneticAlgorithmEngine":
        """Create an engine using the evolution and logging sections of a configuration."""
        return cls(
            evaluation,
            selection,
            crossover,
            mutation,
            replacement,
            termination,
            parameters=config.evolution.model_copy(),
            logging_config=config.logging.model_copy()
        )

    @property
    def mutation_rate(self) -> float:
        return self.parameters.mutation_rate

    @property
    def crossover_rate(self) -> float:
        return self.parameters.crossover_rate

    def clone(self) -> "GeneticAlgorithmEngine":
        """Create an independent copy with its own operator and termination state."""
        engine = deepcopy(self)
        engine.generation = 0
        engine.total_evaluations = 0
        return engine

    def step(self, population: Population, rng: np.random.Generator) -> bool:
        """
        Perform one evolution step on the population in place.

        Args:
            population: Population to evolve
            rng: Random number generator

        Returns:
            Whether the run should stop
        """
        if not population:
            return True

        self.total_evaluations += population.evaluate(self.evaluation, rng)

        offspring = self._offspring
        offspring.clear()
        self.selection.select(population, offspring, rng)
        if not offspring:
            self.logger.debug(f"Generation {self.generation}: selection produced no offspring")
            return False

        self._vary(offspring, rng)

        self.replacement.replace(offspring, population, rng)
        offspring.clear()
        self.generation += 1

        stop = self.termination.should_stop(population, rng)
        if self.logging_config.enable_logging and self.generation % self.logging_config.log_interval == 0:
            self._log_progress(population)
        return stop

    def _vary(self, offspring: Population, rng: np.random.Generator) -> None:
        """Apply pairwise crossover and mutation to the shuffled offspring."""
        individuals = offspring.individuals
        rng.shuffle(individuals)

        # A trailing unpaired individual is left untouched
        for i in range(len(individuals) // 2):
            child_a = individuals[2 * i]
            child_b = individuals[2 * i + 1]

            if rng.random() < self.crossover_rate:
                child_a.value, child_b.value = self.crossover.cross(child_a.value, child_b.value, rng)
                child_a.mark_stale()
                child_b.mark_stale()

            if rng.random() < self.mutation_rate:
                child_a.value = self.mutation.mutate(child_a.value, rng)
                child_a.mark_stale()

            if rng.random() < self.mutation_rate:
                child_b.value = self.mutation.mutate(child_b.value, rng)
                child_b.mark_stale()

    def run(self, population: Population, rng: np.random.Generator) -> Population:
        """
        Step the population until the termination predicate holds.

        Args:
            population: Population to evolve in place
            rng: Random number generator

        Returns:
            The evolved population
        """
        with logfire.span("GA Evolution", population_size=len(population)):
            self.logger.info(f"Starting evolution with population size {len(population)}")

            while not self.step(population, rng):
                pass

            # Final evaluation of offspring changed in the last step
            self.total_evaluations += population.evaluate(self.evaluation, rng)

            best = population.best()
            self.logger.info(
                f"Evolution terminated after {self.generation} generations "
                f"({self.total_evaluations} evaluations), "
                f"best fitness: {best.fitness if best else 'n/a'}"
            )
            return population

    def _log_progress(self, population: Population) -> None:
        """Log evolution progress."""
        best = population.best()
        best_fitness = best.fitness if best is not None else None

        self.logger.debug(
            f"Generation {self.generation}: "
            f"size: {len(population)}, "
            f"best: {best_fitness}"
        )

        if self.logging_config.metrics_export:
            logfire.info(
                "Evolution Progress",
                evolution_generation=self.generation,
                population_size=len(population),
                best_fitness=best_fitness
            )
