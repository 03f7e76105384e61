"""
Population Management for Darwin Metaheuristics.

This module defines the individual and population containers shared by every
operator and engine, together with the selection-size helper that turns a
"count or percentage" policy into an absolute number of individuals.
"""

from typing import Any, Callable, Iterator, List, Optional, Union
from dataclasses import dataclass
from copy import deepcopy
import math

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator


Evaluation = Callable[[Any, np.random.Generator], float]


class SelectionSize(BaseModel):
    """
    Number of individuals an operator should pick from a population.

    Exactly one of ``count`` and ``percentage`` is set. A count is clamped to
    the population size, a percentage is rounded up.
    """

    model_config = ConfigDict(frozen=True)

    count: Optional[int] = Field(
        default=None,
        ge=0,
        description="Absolute number of individuals"
    )
    percentage: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Fraction of the population in [0, 1]"
    )

    @model_validator(mode="after")
    def validate_exclusive(self) -> "SelectionSize":
        """Ensure exactly one of count and percentage is given."""
        if (self.count is None) == (self.percentage is None):
            raise ValueError("Exactly one of count or percentage must be set")
        return self

    @classmethod
    def coerce(cls, value: Union["SelectionSize", int, float]) -> "SelectionSize":
        """Build a selection size from an int (count) or a float (percentage)."""
        if isinstance(value, SelectionSize):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid selection size: {value!r}")
        if isinstance(value, (int, np.integer)):
            return cls(count=int(value))
        if isinstance(value, (float, np.floating)):
            return cls(percentage=float(value))
        raise ValueError(f"Invalid selection size: {value!r}")

    def __call__(self, size: int) -> int:
        """Resolve the policy against a population of ``size`` individuals."""
        if self.count is not None:
            return min(self.count, size)
        return min(int(math.ceil(self.percentage * size)), size)


@dataclass
class Individual:
    """
    Represents an individual in the population.

    The representation ``value`` is chosen by the caller. ``fitness`` is None
    while the individual is unevaluated and holds the cached score otherwise.
    """

    value: Any
    fitness: Optional[float] = None

    @property
    def is_stale(self) -> bool:
        """Whether the fitness has to be (re)computed."""
        return self.fitness is None

    @property
    def sort_key(self) -> float:
        """Fitness used for ordering; unevaluated individuals rank lowest."""
        return self.fitness if self.fitness is not None else float("-inf")

    def mark_stale(self) -> None:
        """Drop the cached fitness after the representation changed."""
        self.fitness = None

    def copy(self) -> "Individual":
        """Copy the individual, including its representation."""
        return Individual(value=deepcopy(self.value), fitness=self.fitness)

    def __lt__(self, other: "Individual") -> bool:
        """Compare individuals by fitness (for sorting)."""
        return self.sort_key < other.sort_key


class Population:
    """
    Ordered, resizable collection of individuals evolved together.

    Order carries no meaning unless an operator sorts the population
    explicitly. Operators move individuals between populations by rebinding
    and clearing ``individuals``.
    """

    def __init__(self, individuals: Optional[List[Individual]] = None):
        """Initialize population with optional individuals."""
        self.individuals: List[Individual] = list(individuals) if individuals else []

    @classmethod
    def random(
        cls,
        size: int,
        factory: Callable[[np.random.Generator], Any],
        rng: np.random.Generator
    ) -> "Population":
        """
        Create a population of unevaluated individuals.

        Args:
            size: Number of individuals
            factory: Callable producing a fresh representation from the generator
            rng: Random number generator

        Returns:
            New population
        """
        return cls([Individual(value=factory(rng)) for _ in range(size)])

    def evaluate(self, evaluation: Evaluation, rng: np.random.Generator) -> int:
        """
        Compute the fitness of every stale individual.

        Args:
            evaluation: Fitness callback ``(value, rng) -> float``
            rng: Random number generator passed through to the callback

        Returns:
            Number of individuals evaluated
        """
        evaluated = 0
        for individual in self.individuals:
            if individual.is_stale:
                individual.fitness = float(evaluation(individual.value, rng))
                evaluated += 1
        return evaluated

    def sort_by_fitness(self, descending: bool = True) -> None:
        """Sort individuals in place by fitness."""
        self.individuals.sort(key=lambda ind: ind.sort_key, reverse=descending)

    def best(self) -> Optional[Individual]:
        """Get the best evaluated individual, or None if there is none."""
        evaluated = [ind for ind in self.individuals if not ind.is_stale]
        if not evaluated:
            return None
        return max(evaluated, key=lambda ind: ind.fitness)

    def fitness_values(self) -> np.ndarray:
        """Fitness of all individuals as an array; unevaluated become NaN."""
        return np.array(
            [ind.fitness if ind.fitness is not None else np.nan for ind in self.individuals],
            dtype=float
        )

    def append(self, individual: Individual) -> None:
        self.individuals.append(individual)

    def extend(self, individuals: List[Individual]) -> None:
        self.individuals.extend(individuals)

    def clear(self) -> None:
        self.individuals.clear()

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    def __getitem__(self, index: int) -> Individual:
        return self.individuals[index]

    def __bool__(self) -> bool:
        return bool(self.individuals)

    def __repr__(self) -> str:
        best = self.best()
        best_fitness = f"{best.fitness:.4f}" if best is not None else "n/a"
        return f"Population(size={len(self.individuals)}, best={best_fitness})"
