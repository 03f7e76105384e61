"""
Population-based incremental learning (PBIL) for the distribution engine.

The distribution is a vector of independent per-position probabilities of a
bit being set. The update rule moves it toward the best sampled individuals
and occasionally perturbs it to keep exploring.
"""

from typing import Optional, Sequence

import numpy as np

from darwin.core.config import DistributionParameters
from darwin.core.population import Population
from darwin.operators.base import Distribution, DistributionUpdate


class BitProbabilityDistribution(Distribution):
    """Fixed-size bit-probability vector, initialized to 0.5 everywhere."""

    def __init__(self, size: int, probabilities: Optional[Sequence[float]] = None):
        if size < 1:
            raise ValueError(f"Distribution size must be positive, got {size}")

        if probabilities is None:
            self.probabilities = np.full(size, 0.5)
        else:
            self.probabilities = np.asarray(probabilities, dtype=float).copy()
            if self.probabilities.shape != (size,):
                raise ValueError(f"Expected {size} probabilities, got {self.probabilities.shape}")
            if ((self.probabilities < 0) | (self.probabilities > 1)).any():
                raise ValueError("Probabilities must lie in [0, 1]")

    @property
    def size(self) -> int:
        return len(self.probabilities)

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        """Draw a boolean vector, each bit set with its own probability."""
        return rng.random(self.size) < self.probabilities

    def __repr__(self) -> str:
        return f"BitProbabilityDistribution({np.array2string(self.probabilities, precision=2)})"


class PbilUpdate(DistributionUpdate):
    """
    PBIL probability-vector update.

    For each position the probability shrinks by ``(1 - rate)`` and gains
    ``rate / best_count`` for each of the ``best_count`` fittest individuals
    with that bit set. With probability ``mutation_prob`` the result is
    shrunk by ``mutation_shift`` and pushed toward 0 or 1 by a coin flip.
    The result is clamped to ``[lower_bound, upper_bound]``.
    """

    def __init__(
        self,
        rate: float,
        best_count: int,
        mutation_prob: float,
        mutation_shift: float,
        lower_bound: float = 0.0,
        upper_bound: float = 1.0
    ):
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"Learning rate must be in [0, 1], got {rate}")
        if best_count < 1:
            raise ValueError(f"Best count must be at least 1, got {best_count}")
        if not 0.0 <= mutation_prob <= 1.0:
            raise ValueError(f"Mutation probability must be in [0, 1], got {mutation_prob}")
        if lower_bound > upper_bound:
            raise ValueError("Lower bound must not exceed upper bound")

        self.rate = rate
        self.best_count = best_count
        self.mutation_prob = mutation_prob
        self.mutation_shift = mutation_shift
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound

    @classmethod
    def from_config(cls, params: DistributionParameters) -> "PbilUpdate":
        """Create the update rule from validated distribution parameters."""
        return cls(
            rate=params.learning_rate,
            best_count=params.best_count,
            mutation_prob=params.mutation_prob,
            mutation_shift=params.mutation_shift,
            lower_bound=params.lower_bound,
            upper_bound=params.upper_bound
        )

    def update(
        self,
        distribution: BitProbabilityDistribution,
        population: Population,
        rng: np.random.Generator
    ) -> None:
        if not 0 < self.best_count <= len(population):
            raise ValueError(
                f"Best count ({self.best_count}) must be in [1, {len(population)}]"
            )

        population.sort_by_fitness(descending=True)
        best = np.array(
            [np.asarray(ind.value, dtype=bool) for ind in population.individuals[:self.best_count]]
        )
        if best.shape[1] != distribution.size:
            raise ValueError(
                f"Representation length {best.shape[1]} does not match distribution size {distribution.size}"
            )
        hits = best.sum(axis=0)
        increment = self.rate / self.best_count

        probabilities = distribution.probabilities
        for i in range(distribution.size):
            p = probabilities[i] * (1.0 - self.rate) + increment * hits[i]

            if rng.random() < self.mutation_prob:
                p *= 1.0 - self.mutation_shift
                if rng.random() < 0.5:
                    p += self.mutation_shift

            probabilities[i] = min(max(p, self.lower_bound), self.upper_bound)
