"""
PyTest configuration and fixtures for the Darwin metaheuristics toolkit.

This module configures logfire for offline testing and provides shared
random generators, populations and fitness functions.
"""

import math

import numpy as np
import pytest

from darwin.core import (
    Individual,
    LoggingConfig,
    ObservabilitySettings,
    Population,
    configure_observability,
    create_test_config
)


# Keep spans local during tests
configure_observability(ObservabilitySettings(send_to_logfire=False, logfire_console=False))


@pytest.fixture
def rng():
    """Seeded random number generator."""
    return np.random.default_rng(42)


@pytest.fixture
def test_config():
    """Small, seeded Darwin configuration."""
    return create_test_config()


@pytest.fixture
def quiet_logging():
    """Logging configuration without progress output."""
    return LoggingConfig(enable_logging=False, metrics_export=False)


@pytest.fixture
def evaluated_population():
    """Population of five individuals with fitness 1 to 5."""
    return Population([Individual(value=i, fitness=float(i + 1)) for i in range(5)])


@pytest.fixture
def sine_fitness():
    """Unimodal test function ``sin(4x)^6`` on [0, 1], maximal at x = pi / 8."""
    def fitness(x, rng):
        return math.sin(4.0 * x) ** 6
    return fitness


@pytest.fixture
def make_population():
    """Factory building a population whose values are indices with the given fitness."""
    def factory(fitness_values):
        return Population(
            [Individual(value=i, fitness=float(f)) for i, f in enumerate(fitness_values)]
        )
    return factory


class ScriptedGenerator:
    """Stand-in generator replaying fixed draws for deterministic operator tests."""

    def __init__(self, integers=(), randoms=()):
        self._integers = list(integers)
        self._randoms = list(randoms)

    def integers(self, *args, **kwargs):
        return self._integers.pop(0)

    def random(self, *args, **kwargs):
        return self._randoms.pop(0)


@pytest.fixture
def scripted_rng():
    """Factory for generators replaying fixed integer and float draws."""
    return ScriptedGenerator
