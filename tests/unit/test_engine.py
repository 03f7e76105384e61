"""
Unit tests for the Darwin genetic algorithm engine (GeneticAlgorithmEngine).

Tests cover:
- Degenerate steps (empty population, empty selection)
- Pairwise variation and fitness staleness
- Engine construction from configuration and cloning
- End-to-end optimization of a real-valued and a permutation problem
"""

from itertools import combinations

import numpy as np

from darwin.core import (
    EvolutionParameters,
    GeneticAlgorithmEngine,
    Individual,
    LoggingConfig,
    Population
)
from darwin.operators import (
    ElitistReplacement,
    FitnessTermination,
    GenerationTermination,
    NormalMutation,
    OrTermination,
    PartiallyMatchedCrossover,
    ReplaceAll,
    RouletteWheelSelection,
    SimulatedBinaryCrossover,
    StochasticUniversalSampling,
    SwapMutation,
    TournamentSelection,
    TruncationSelection
)
from darwin.operators.base import Crossover, Mutator


class SwapValues(Crossover):
    """Crossover exchanging whole values and recording each pair."""

    def __init__(self):
        self.pairs = []

    def cross(self, value_a, value_b, rng):
        self.pairs.append((value_a, value_b))
        return value_b, value_a


class Increment(Mutator):
    """Mutation adding 100 to a number."""

    def mutate(self, value, rng):
        return value + 100


def identity_fitness(value, rng):
    return float(value)


def queens_fitness(queens, rng):
    """Number of non-attacking queen pairs; 28 is a solution for eight queens."""
    return float(sum(
        1 for i, j in combinations(range(len(queens)), 2)
        if abs(int(queens[i]) - int(queens[j])) != j - i
    ))


def build_engine(quiet_logging, **overrides):
    options = dict(
        evaluation=identity_fitness,
        selection=TruncationSelection(1.0),
        crossover=SwapValues(),
        mutation=Increment(),
        replacement=ReplaceAll(),
        termination=GenerationTermination(100),
        parameters=EvolutionParameters(mutation_rate=0.0, crossover_rate=0.0),
        logging_config=quiet_logging
    )
    options.update(overrides)
    return GeneticAlgorithmEngine(**options)


class TestEngineStep:
    """Test suite for a single evolution step."""

    def test_empty_population_stops(self, quiet_logging, rng):
        """Test that an empty population terminates immediately."""
        engine = build_engine(quiet_logging)

        assert engine.step(Population(), rng) is True
        assert engine.generation == 0

    def test_empty_selection_continues(self, quiet_logging, make_population, rng):
        """Test that a step without selected parents leaves the population as is."""
        engine = build_engine(quiet_logging, selection=RouletteWheelSelection(2))
        population = make_population([0.0, 0.0, 0.0])

        assert engine.step(population, rng) is False
        assert len(population) == 3
        assert engine.generation == 0

    def test_step_evaluates_and_replaces(self, quiet_logging, rng):
        """Test evaluation, replacement and generation counting."""
        engine = build_engine(quiet_logging)
        population = Population([Individual(value=v) for v in range(4)])

        assert engine.step(population, rng) is False
        assert engine.generation == 1
        assert engine.total_evaluations == 4
        assert sorted(ind.value for ind in population) == [0, 1, 2, 3]
        assert all(not ind.is_stale for ind in population)

    def test_crossover_marks_children_stale(self, quiet_logging, rng):
        """Test that every crossed pair loses its cached fitness."""
        crossover = SwapValues()
        engine = build_engine(
            quiet_logging,
            crossover=crossover,
            parameters=EvolutionParameters(mutation_rate=0.0, crossover_rate=1.0)
        )
        population = Population([Individual(value=v) for v in range(5)])

        engine.step(population, rng)

        assert len(crossover.pairs) == 2
        assert sum(ind.is_stale for ind in population) == 4
        assert sorted(ind.value for ind in population) == [0, 1, 2, 3, 4]

    def test_mutation_applies_to_every_child(self, quiet_logging, rng):
        """Test mutation with rate one on paired offspring."""
        engine = build_engine(
            quiet_logging,
            parameters=EvolutionParameters(mutation_rate=1.0, crossover_rate=0.0)
        )
        population = Population([Individual(value=v) for v in range(4)])

        engine.step(population, rng)

        assert sorted(ind.value for ind in population) == [100, 101, 102, 103]
        assert all(ind.is_stale for ind in population)

    def test_termination_is_reported(self, quiet_logging, rng):
        """Test that the step returns the termination decision."""
        engine = build_engine(quiet_logging, termination=GenerationTermination(2))
        population = Population([Individual(value=v) for v in range(4)])

        assert engine.step(population, rng) is False
        assert engine.step(population, rng) is True

    def test_progress_logging(self, make_population, rng, caplog):
        """Test that progress is logged every log interval."""
        engine = build_engine(LoggingConfig(log_level="DEBUG", log_interval=1, metrics_export=True))
        population = make_population([1.0, 2.0])

        with caplog.at_level("DEBUG", logger="darwin.engine"):
            engine.step(population, rng)

        assert "Generation 1" in caplog.text


class TestEngineConstruction:
    """Test suite for configuration and cloning."""

    def test_from_config(self, test_config):
        """Test building an engine from a Darwin configuration."""
        engine = GeneticAlgorithmEngine.from_config(
            test_config,
            identity_fitness,
            TruncationSelection(0.5),
            SwapValues(),
            Increment(),
            ReplaceAll(),
            GenerationTermination(10)
        )

        assert engine.mutation_rate == test_config.evolution.mutation_rate
        assert engine.crossover_rate == test_config.evolution.crossover_rate
        assert engine.parameters is not test_config.evolution
        assert engine.logging_config.log_interval == 1

    def test_clone_is_independent(self, quiet_logging, rng):
        """Test that clones own separate termination state."""
        engine = build_engine(quiet_logging, termination=GenerationTermination(3))
        clone = engine.clone()

        population = Population([Individual(value=v) for v in range(4)])
        clone.step(population, rng)
        clone.step(population, rng)

        assert clone.generation == 2
        assert clone.termination.generation == 2
        assert engine.generation == 0
        assert engine.termination.generation == 0
        assert clone.termination is not engine.termination
        assert clone.evaluation is engine.evaluation


class TestEngineOptimization:
    """End-to-end optimization runs."""

    def test_sine_maximum(self, sine_fitness, quiet_logging):
        """Test that the GA finds the maximum of sin(4x)^6 on [0, 1]."""
        rng = np.random.default_rng(7)
        engine = GeneticAlgorithmEngine(
            evaluation=sine_fitness,
            selection=StochasticUniversalSampling(0.4),
            crossover=SimulatedBinaryCrossover(eta=3.0),
            mutation=NormalMutation(std_dev=0.5, lower_bound=0.0, upper_bound=1.0),
            replacement=ElitistReplacement(0.6),
            termination=GenerationTermination(1000),
            parameters=EvolutionParameters(mutation_rate=0.2, crossover_rate=0.8),
            logging_config=quiet_logging
        )
        population = Population.random(20, lambda r: float(r.random()), rng)

        engine.run(population, rng)

        best = population.best()
        assert len(population) == 20
        assert engine.generation == 1000
        assert all(not ind.is_stale for ind in population)
        assert best.fitness >= 0.99

    def test_eight_queens(self, quiet_logging):
        """Test PMX with swap mutation on the eight-queens problem."""
        rng = np.random.default_rng(3)
        engine = GeneticAlgorithmEngine(
            evaluation=queens_fitness,
            selection=TournamentSelection(0.5, tournament_size=3),
            crossover=PartiallyMatchedCrossover(),
            mutation=SwapMutation(),
            replacement=ElitistReplacement(0.5),
            termination=OrTermination(FitnessTermination(28.0), GenerationTermination(500)),
            parameters=EvolutionParameters(mutation_rate=0.3, crossover_rate=0.8),
            logging_config=quiet_logging
        )
        population = Population.random(50, lambda r: list(r.permutation(8)), rng)
        initial_best = max(queens_fitness(ind.value, rng) for ind in population)

        engine.run(population, rng)

        assert len(population) == 50
        assert all(sorted(int(q) for q in ind.value) == list(range(8)) for ind in population)
        assert population.best().fitness >= max(initial_best, 26.0)
