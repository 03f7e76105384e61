"""
Termination predicates for Darwin engines.

Predicates are evaluated once per generation. Generation, stagnation and
wall-clock predicates carry state across calls, so every engine needs its
own instance.
"""

from datetime import timedelta
from typing import Optional, Union
import time

import numpy as np

from darwin.core.population import Population
from darwin.operators.base import Terminator


class GenerationTermination(Terminator):
    """Stop after a fixed number of generations."""

    def __init__(self, max_generations: int):
        self.max_generations = max_generations
        self.generation = 0

    def should_stop(self, population: Population, rng: np.random.Generator) -> bool:
        self.generation += 1
        return self.generation >= self.max_generations


class FitnessTermination(Terminator):
    """Stop once the best individual reaches a target fitness."""

    def __init__(self, target_fitness: float):
        self.target_fitness = target_fitness

    def should_stop(self, population: Population, rng: np.random.Generator) -> bool:
        if not population:
            return True

        best = population.best()
        return best is not None and best.fitness >= self.target_fitness


class TimeTermination(Terminator):
    """Stop when a wall-clock duration has elapsed since construction."""

    def __init__(self, max_time: Union[timedelta, float]):
        if isinstance(max_time, timedelta):
            max_time = max_time.total_seconds()
        self.max_time = float(max_time)
        self.start_time = time.monotonic()

    @property
    def elapsed(self) -> float:
        """Seconds since the predicate was created."""
        return time.monotonic() - self.start_time

    def should_stop(self, population: Population, rng: np.random.Generator) -> bool:
        return self.elapsed >= self.max_time


class StagnationTermination(Terminator):
    """
    Stop after a number of generations without fitness improvement.

    The counter resets whenever a strictly better best fitness is observed.
    """

    def __init__(self, max_generations: int):
        self.max_generations = max_generations
        self.stagnant_generations = 0
        self.best_fitness: Optional[float] = None

    def should_stop(self, population: Population, rng: np.random.Generator) -> bool:
        if not population:
            return True

        best = population.best()
        if best is not None and (self.best_fitness is None or best.fitness > self.best_fitness):
            self.best_fitness = best.fitness
            self.stagnant_generations = 0
            return False

        self.stagnant_generations += 1
        return self.stagnant_generations >= self.max_generations


class FlagTermination(Terminator):
    """Stop when an externally settable flag is raised, e.g. on user cancellation."""

    def __init__(self, flag: bool = False):
        self.flag = flag

    def set(self) -> None:
        self.flag = True

    def clear(self) -> None:
        self.flag = False

    def should_stop(self, population: Population, rng: np.random.Generator) -> bool:
        return self.flag


class OrTermination(Terminator):
    """Stop as soon as any predicate stops; later predicates are not evaluated."""

    def __init__(self, *terminators: Terminator):
        self.terminators = tuple(terminators)

    def should_stop(self, population: Population, rng: np.random.Generator) -> bool:
        return any(t.should_stop(population, rng) for t in self.terminators)


class AndTermination(Terminator):
    """Stop only when all predicates stop; evaluation ends at the first one that does not."""

    def __init__(self, *terminators: Terminator):
        self.terminators = tuple(terminators)

    def should_stop(self, population: Population, rng: np.random.Generator) -> bool:
        return all(t.should_stop(population, rng) for t in self.terminators)
