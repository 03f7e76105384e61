"""
Selection operators for the Darwin genetic algorithm.

This module implements:
- Random, truncation and tournament selection
- Fitness-proportional selection (roulette-wheel and stochastic universal sampling)
- Rank-based and sigma-scaling decorators that rescale fitness before
  delegating to another selector
"""

from typing import Callable, List, Union
import logging

import numpy as np

from darwin.core.population import Individual, Population, SelectionSize
from darwin.operators.base import Selector

logger = logging.getLogger(__name__)


def _proportional_fitness(population: Population, operator: str) -> np.ndarray:
    """Fitness array of a population, validated for proportional selection."""
    fitness = population.fitness_values()
    if np.isnan(fitness).any():
        raise ValueError(f"{operator} requires an evaluated population")
    if (fitness < 0).any():
        raise ValueError(f"{operator} requires non-negative fitness values")
    return fitness


class RandomSelection(Selector):
    """Uniform sampling with replacement."""

    def __init__(self, size: Union[SelectionSize, int, float]):
        self.size = SelectionSize.coerce(size)

    def select(self, source: Population, destination: Population, rng: np.random.Generator) -> None:
        if not source:
            return

        samples = self.size(len(source))
        for index in rng.integers(len(source), size=samples):
            destination.append(source[int(index)].copy())


class TruncationSelection(Selector):
    """Sort by fitness and keep the best individuals."""

    def __init__(self, size: Union[SelectionSize, int, float]):
        self.size = SelectionSize.coerce(size)

    def select(self, source: Population, destination: Population, rng: np.random.Generator) -> None:
        source.sort_by_fitness(descending=True)
        samples = self.size(len(source))
        destination.extend([ind.copy() for ind in source.individuals[:samples]])


class RouletteWheelSelection(Selector):
    """
    Roulette-wheel selection (stochastic sampling with replacement).

    Each individual owns a segment of a line proportional to its fitness. A
    uniform point is drawn on the line for every sample and the owner of the
    segment is selected. Zero bias, but no guarantee on spread.
    """

    def __init__(self, size: Union[SelectionSize, int, float]):
        self.size = SelectionSize.coerce(size)

    def select(self, source: Population, destination: Population, rng: np.random.Generator) -> None:
        if not source:
            return

        fitness = _proportional_fitness(source, "Roulette-wheel selection")
        cumulative = np.cumsum(fitness)
        total = cumulative[-1]
        if total <= 0:
            logger.warning("Roulette-wheel selection skipped: total fitness is zero")
            return

        samples = self.size(len(source))
        points = rng.random(samples) * total
        for index in np.searchsorted(cumulative, points, side="left"):
            destination.append(source[int(index)].copy())


class StochasticUniversalSampling(Selector):
    """
    Stochastic universal sampling.

    Like roulette-wheel selection, individuals own fitness-proportional
    segments, but ``k`` equally spaced pointers with a single random offset are
    laid over the line. One linear pass yields exactly ``k`` individuals with
    zero bias and minimum spread.
    """

    def __init__(self, size: Union[SelectionSize, int, float]):
        self.size = SelectionSize.coerce(size)

    def select(self, source: Population, destination: Population, rng: np.random.Generator) -> None:
        if not source:
            return

        fitness = _proportional_fitness(source, "Stochastic universal sampling")
        total = fitness.sum()
        if total <= 0:
            logger.warning("Stochastic universal sampling skipped: total fitness is zero")
            return

        samples = self.size(len(source))
        if samples == 0:
            return

        offset = rng.random()
        expected = np.cumsum(fitness) * samples / total
        pointers = offset + np.arange(samples)

        # First individual whose accumulated expectation exceeds each pointer
        indices = np.searchsorted(expected, pointers, side="right")
        last = int(np.flatnonzero(fitness > 0)[-1])
        for index in np.minimum(indices, last):
            destination.append(source[int(index)].copy())


class TournamentSelection(Selector):
    """
    Tournament selection.

    For every sample, ``tournament_size`` individuals are drawn uniformly
    (duplicates allowed) and the fittest of them is selected.
    """

    def __init__(self, size: Union[SelectionSize, int, float], tournament_size: int):
        if tournament_size < 1:
            raise ValueError(f"Tournament size must be at least 1, got {tournament_size}")
        self.size = SelectionSize.coerce(size)
        self.tournament_size = tournament_size

    def select(self, source: Population, destination: Population, rng: np.random.Generator) -> None:
        if not source:
            return

        fitness = np.array([ind.sort_key for ind in source], dtype=float)
        samples = self.size(len(source))
        for _ in range(samples):
            contenders = rng.integers(len(source), size=self.tournament_size)
            winner = contenders[int(np.argmax(fitness[contenders]))]
            destination.append(source[int(winner)].copy())


def linear_rank(rank: int, size: int) -> float:
    """Linear rank-based fitness; rank 0 is the best individual."""
    return float(size - rank)


def sigma_scale(fitness: float, mean: float, std_dev: float) -> float:
    """Default sigma scaling, floored at 0.1 for below-average individuals."""
    if std_dev == 0.0:
        return 1.0

    scaled = 1.0 + (fitness - mean) / (2.0 * std_dev)
    return scaled if scaled > 0.0 else 0.1


class _ScaledSelection(Selector):
    """
    Shared machinery of the fitness-rescaling decorators.

    The wrapped selector runs on a scratch population whose representations
    are indices into the source and whose fitness is the scaled score. The
    chosen source individuals are then copied with their raw fitness, not the
    scaled score, so offspring left untouched by variation (e.g. an unpaired
    trailing individual) keep a fitness comparable with the rest of the
    population.
    """

    def __init__(self, selection: Selector):
        self.selection = selection
        self._scores = Population()
        self._chosen = Population()

    def _delegate(
        self,
        candidates: List[Individual],
        scores: List[float],
        destination: Population,
        rng: np.random.Generator
    ) -> None:
        self._scores.individuals = [
            Individual(value=index, fitness=score) for index, score in enumerate(scores)
        ]
        self._chosen.clear()
        try:
            self.selection.select(self._scores, self._chosen, rng)
            destination.extend([candidates[chosen.value].copy() for chosen in self._chosen])
        finally:
            self._scores.clear()
            self._chosen.clear()


class RankSelection(_ScaledSelection):
    """
    Rank-based selection.

    Individuals are sorted by fitness and scored by rank before delegating to
    the wrapped selector, which decouples selection pressure from the raw
    fitness magnitude.
    """

    def __init__(self, selection: Selector, fitness: Callable[[int, int], float] = linear_rank):
        super().__init__(selection)
        self.fitness = fitness

    def select(self, source: Population, destination: Population, rng: np.random.Generator) -> None:
        ranked = sorted(source.individuals, key=lambda ind: ind.sort_key, reverse=True)
        scores = [float(self.fitness(rank, len(ranked))) for rank in range(len(ranked))]
        self._delegate(ranked, scores, destination, rng)


class SigmaScalingSelection(_ScaledSelection):
    """
    Sigma-scaling selection.

    Fitness is rescaled with the population mean and standard deviation
    before delegating to the wrapped selector. Helps avoid premature
    convergence and amplifies minor fitness differences.
    """

    def __init__(
        self,
        selection: Selector,
        fitness: Callable[[float, float, float], float] = sigma_scale
    ):
        super().__init__(selection)
        self.fitness = fitness

    def select(self, source: Population, destination: Population, rng: np.random.Generator) -> None:
        if not source:
            return

        values = source.fitness_values()
        if np.isnan(values).any():
            raise ValueError("Sigma-scaling selection requires an evaluated population")

        mean = float(values.mean())
        std_dev = float(values.std())
        scores = [float(self.fitness(value, mean, std_dev)) for value in values]
        self._delegate(list(source.individuals), scores, destination, rng)
