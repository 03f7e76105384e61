"""
Mutation operators for the Darwin genetic algorithm.

Implements sequence mutations (flip, swap, invert, move), scalar mutations
(boundary, normal, uniform) and a vector wrapper applying a scalar mutation
element-wise.
"""

from typing import Any, Tuple

import numpy as np

from darwin.operators.base import Mutator


def _distinct_indices(size: int, rng: np.random.Generator) -> Tuple[int, int]:
    """Draw two different indices in ``[0, size)``."""
    if size < 2:
        raise ValueError(f"Mutation requires at least two elements, got {size}")

    first = int(rng.integers(size))
    second = int(rng.integers(size))
    while second == first:
        second = int(rng.integers(size))
    return first, second


def _clamp(value: Any, lower_bound: Any, upper_bound: Any) -> Any:
    return min(max(value, lower_bound), upper_bound)


class FlipMutation(Mutator):
    """Toggle every element of a binary sequence with probability ``prob``."""

    def __init__(self, prob: float):
        if not 0.0 <= prob <= 1.0:
            raise ValueError(f"Mutation probability must be in [0, 1], got {prob}")
        self.prob = prob

    def mutate(self, value: Any, rng: np.random.Generator) -> Any:
        flips = rng.random(len(value)) < self.prob
        for i in np.flatnonzero(flips):
            value[i] = type(value[i])(not value[i])
        return value


class SwapMutation(Mutator):
    """Interchange ``count`` random pairs of distinct positions."""

    def __init__(self, count: int = 1):
        if count < 0:
            raise ValueError(f"Swap count must be non-negative, got {count}")
        self.count = count

    def mutate(self, value: Any, rng: np.random.Generator) -> Any:
        for _ in range(self.count):
            first, second = _distinct_indices(len(value), rng)
            value[first], value[second] = value[second], value[first]
        return value


class InvertMutation(Mutator):
    """Reverse the segment between two distinct random positions."""

    def mutate(self, value: Any, rng: np.random.Generator) -> Any:
        first, second = _distinct_indices(len(value), rng)
        start, end = min(first, second), max(first, second)
        value[start:end] = value[start:end][::-1]
        return value


class MoveMutation(Mutator):
    """Move the element at one random position to another, shifting the rest."""

    def mutate(self, value: Any, rng: np.random.Generator) -> Any:
        first, second = _distinct_indices(len(value), rng)
        start, end = min(first, second), max(first, second)

        moved = value[end]
        for i in range(end, start, -1):
            value[i] = value[i - 1]
        value[start] = moved
        return value


class BoundaryMutation(Mutator):
    """Replace a scalar by its lower or upper bound with equal probability."""

    def __init__(self, lower_bound: float, upper_bound: float):
        if lower_bound > upper_bound:
            raise ValueError("Lower bound must not exceed upper bound")
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound

    def mutate(self, value: Any, rng: np.random.Generator) -> Any:
        return self.lower_bound if rng.random() < 0.5 else self.upper_bound


class NormalMutation(Mutator):
    """Add Gaussian noise to a scalar and clamp it to the bounds."""

    def __init__(self, std_dev: float, lower_bound: float, upper_bound: float):
        if std_dev < 0:
            raise ValueError(f"Standard deviation must be non-negative, got {std_dev}")
        if lower_bound > upper_bound:
            raise ValueError("Lower bound must not exceed upper bound")
        self.std_dev = std_dev
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound

    def mutate(self, value: Any, rng: np.random.Generator) -> Any:
        value = value + rng.normal(0.0, self.std_dev)
        return _clamp(value, self.lower_bound, self.upper_bound)


class UniformMutation(Mutator):
    """Add uniform noise from ``[-noise_range, noise_range]`` and clamp to the bounds."""

    def __init__(self, noise_range: float, lower_bound: float, upper_bound: float):
        if noise_range < 0:
            raise ValueError(f"Mutation range must be non-negative, got {noise_range}")
        if lower_bound > upper_bound:
            raise ValueError("Lower bound must not exceed upper bound")
        self.noise_range = noise_range
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound

    def mutate(self, value: Any, rng: np.random.Generator) -> Any:
        value = value + rng.uniform(-self.noise_range, self.noise_range)
        return _clamp(value, self.lower_bound, self.upper_bound)


class VectorMutation(Mutator):
    """Apply a wrapped mutation to each element independently with probability ``prob``."""

    def __init__(self, prob: float, mutation: Mutator):
        if not 0.0 <= prob <= 1.0:
            raise ValueError(f"Mutation probability must be in [0, 1], got {prob}")
        self.prob = prob
        self.mutation = mutation

    def mutate(self, value: Any, rng: np.random.Generator) -> Any:
        for i in range(len(value)):
            if rng.random() < self.prob:
                value[i] = self.mutation.mutate(value[i], rng)
        return value
