"""
Crossover operators for the Darwin genetic algorithm.

Sequence operators (n-point, uniform, partially-matched) exchange elements
of two indexable representations in place. Real-valued operators (blend,
simulated binary) work on scalars or numpy arrays and return new values.
"""

from typing import Any, Tuple

import numpy as np

from darwin.operators.base import Crossover


class NPointCrossover(Crossover):
    """
    N-point crossover.

    For each point a random cut index is drawn and the prefixes of both
    parents up to that index are exchanged. Every point swaps from index 0,
    so several points compose prefix swaps rather than disjoint segments.
    """

    def __init__(self, point_count: int = 1):
        if point_count < 0:
            raise ValueError(f"Point count must be non-negative, got {point_count}")
        self.point_count = point_count

    def cross(self, value_a: Any, value_b: Any, rng: np.random.Generator) -> Tuple[Any, Any]:
        size = max(len(value_a), len(value_b))
        if size == 0:
            return value_a, value_b

        shared = min(len(value_a), len(value_b))
        for _ in range(self.point_count):
            index = min(int(rng.integers(size)), shared)
            for i in range(index):
                value_a[i], value_b[i] = value_b[i], value_a[i]

        return value_a, value_b


class UniformCrossover(Crossover):
    """Exchange each shared position with probability 0.5."""

    def cross(self, value_a: Any, value_b: Any, rng: np.random.Generator) -> Tuple[Any, Any]:
        size = min(len(value_a), len(value_b))
        swaps = rng.random(size) < 0.5
        for i in np.flatnonzero(swaps):
            value_a[i], value_b[i] = value_b[i], value_a[i]

        return value_a, value_b


class PartiallyMatchedCrossover(Crossover):
    """
    Partially-matched crossover (PMX) for permutations of ``[0, n)``.

    Two cut points are drawn; inside the cut range values are exchanged
    position-wise and the displaced duplicates are repaired through
    inverse-position tables, so both children stay permutations.
    """

    def cross(self, value_a: Any, value_b: Any, rng: np.random.Generator) -> Tuple[Any, Any]:
        size = min(len(value_a), len(value_b))
        start = int(rng.integers(size + 1))
        end = int(rng.integers(size + 1))
        if start > end:
            start, end = end, start

        if start == end:
            return value_a, value_b

        position_a = [0] * size
        position_b = [0] * size
        for i in range(size):
            if not (0 <= value_a[i] < size and 0 <= value_b[i] < size):
                raise ValueError(f"PMX requires permutations of [0, {size})")
            position_a[int(value_a[i])] = i
            position_b[int(value_b[i])] = i

        for i in range(start, end):
            gene_a = value_a[i]
            gene_b = value_b[i]

            value_a[i] = gene_b
            value_b[i] = gene_a
            value_a[position_a[int(gene_b)]] = gene_a
            value_b[position_b[int(gene_a)]] = gene_b

            position_a[int(gene_a)], position_a[int(gene_b)] = (
                position_a[int(gene_b)], position_a[int(gene_a)]
            )
            position_b[int(gene_a)], position_b[int(gene_b)] = (
                position_b[int(gene_b)], position_b[int(gene_a)]
            )

        return value_a, value_b


class BlendCrossover(Crossover):
    """
    Intermediate (blend) recombination of real values.

    Each child is an affine combination of both parents with its own factor
    drawn from ``[-delta, 1 + delta]``; ``delta > 0`` allows mild
    extrapolation beyond the parents.
    """

    def __init__(self, delta: float = 0.0):
        if delta < 0:
            raise ValueError(f"Delta must be non-negative, got {delta}")
        self.delta = delta

    def cross(self, value_a: Any, value_b: Any, rng: np.random.Generator) -> Tuple[Any, Any]:
        alpha_a = rng.uniform(-self.delta, 1.0 + self.delta)
        alpha_b = rng.uniform(-self.delta, 1.0 + self.delta)
        child_a = value_a * alpha_a + value_b * (1.0 - alpha_a)
        child_b = value_b * alpha_b + value_a * (1.0 - alpha_b)
        return child_a, child_b


class SimulatedBinaryCrossover(Crossover):
    """
    Simulated binary crossover (SBX).

    A large distribution index ``eta`` keeps children near their parents; a
    small one allows distant children.
    """

    def __init__(self, eta: float):
        if eta < 0:
            raise ValueError(f"Distribution index eta must be non-negative, got {eta}")
        self.eta = eta

    def spread_factor(self, u: float) -> float:
        """Spread factor beta for a uniform draw ``u`` in [0, 1)."""
        exponent = 1.0 / (self.eta + 1.0)
        if u < 0.5:
            return (2.0 * u) ** exponent
        if u > 0.5:
            return (0.5 / (1.0 - u)) ** exponent
        return 1.0

    def cross(self, value_a: Any, value_b: Any, rng: np.random.Generator) -> Tuple[Any, Any]:
        beta = self.spread_factor(rng.random())
        average = (value_a + value_b) / 2.0
        spread = abs(value_a - value_b) / 2.0
        return average - beta * spread, average + beta * spread
