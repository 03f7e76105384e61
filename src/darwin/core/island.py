"""
Island model for Darwin Metaheuristics.

The population is divided into sub-populations (islands) that evolve
independently with their own genetic algorithm engines. Every
``migration_rate`` generations a migration operator redistributes
individuals between the islands.
"""

from typing import Callable, List, Optional, Sequence
import logging

import logfire
import numpy as np

from darwin.core.config import IslandParameters, LoggingConfig
from darwin.core.engine import GeneticAlgorithmEngine
from darwin.core.observability import get_logger
from darwin.core.population import Individual, Population, SelectionSize
from darwin.operators.base import Migrator


class Island:
    """
    A sub-population together with the engine that evolves it.

    The engine, including its termination state, belongs to this island only.
    """

    def __init__(self, engine: GeneticAlgorithmEngine, population: Optional[Population] = None):
        self.engine = engine
        self.population = population if population is not None else Population()

    def step(self, rng: np.random.Generator) -> bool:
        """Perform one generation on this island."""
        return self.engine.step(self.population, rng)

    def __len__(self) -> int:
        return len(self.population)

    def __repr__(self) -> str:
        return f"Island(size={len(self.population)}, generation={self.engine.generation})"


class IslandModel:
    """
    Island model driver.

    One step runs ``migration_rate`` generations on every island, stopping
    as soon as any island's engine signals termination, then migrates.
    """

    def __init__(
        self,
        migration: Migrator,
        migration_rate: int = 50,
        num_islands: Optional[int] = None,
        logging_config: Optional[LoggingConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the island model.

        Args:
            migration: Migration operator
            migration_rate: Generations between migrations
            num_islands: Expected number of islands; any count is accepted when None
            logging_config: Logging options
            logger: Optional logger instance
        """
        if migration_rate < 1:
            raise ValueError(f"Migration rate must be at least 1, got {migration_rate}")
        if num_islands is not None and num_islands < 2:
            raise ValueError(f"Island model requires at least two islands, got {num_islands}")

        self.migration = migration
        self.migration_rate = migration_rate
        self.num_islands = num_islands
        self.logging_config = logging_config or LoggingConfig()
        self.logger = logger or get_logger("darwin.island", self.logging_config)
        self.migrations = 0

    @classmethod
    def from_config(
        cls,
        params: IslandParameters,
        migration_type: Callable[[SelectionSize], Migrator],
        logging_config: Optional[LoggingConfig] = None
    ) -> "IslandModel":
        """
        Create an island model from validated island parameters.

        Args:
            params: Island parameters
            migration_type: Migration operator class, built with ``params.migration_size``
            logging_config: Logging options

        Returns:
            Island model expecting ``params.num_islands`` islands
        """
        return cls(
            migration_type(params.migration_size),
            migration_rate=params.migration_rate,
            num_islands=params.num_islands,
            logging_config=logging_config
        )

    @staticmethod
    def create_islands(engine: GeneticAlgorithmEngine, populations: Sequence[Population]) -> List[Island]:
        """Create one island per population, each with its own clone of ``engine``."""
        return [Island(engine.clone(), population) for population in populations]

    @staticmethod
    def best(islands: Sequence[Island]) -> Optional[Individual]:
        """Get the best evaluated individual across all islands."""
        candidates = [island.population.best() for island in islands]
        candidates = [ind for ind in candidates if ind is not None]
        if not candidates:
            return None
        return max(candidates, key=lambda ind: ind.fitness)

    def step(self, islands: List[Island], rng: np.random.Generator) -> bool:
        """
        Evolve all islands for ``migration_rate`` generations, then migrate.

        Args:
            islands: Islands to evolve in place
            rng: Random number generator

        Returns:
            Whether any island terminated
        """
        if self.num_islands is not None and len(islands) != self.num_islands:
            raise ValueError(f"Expected {self.num_islands} islands, got {len(islands)}")

        for _ in range(self.migration_rate):
            for index, island in enumerate(islands):
                if island.step(rng):
                    self.logger.info(
                        f"Island {index} terminated at generation {island.engine.generation}"
                    )
                    return True

        total = sum(len(island) for island in islands)
        self.migration.migrate(islands, rng)
        self.migrations += 1
        self.logger.debug(f"Migration {self.migrations}: {total} individuals across {len(islands)} islands")
        return False

    def run(self, islands: List[Island], rng: np.random.Generator) -> List[Island]:
        """Step the islands until one of them terminates."""
        with logfire.span("Island Evolution", num_islands=len(islands), migration_rate=self.migration_rate):
            self.logger.info(f"Starting island evolution with {len(islands)} islands")

            while not self.step(islands, rng):
                pass

            for island in islands:
                island.population.evaluate(island.engine.evaluation, rng)

            best = self.best(islands)
            self.logger.info(
                f"Island evolution terminated after {self.migrations} migrations, "
                f"best fitness: {best.fitness if best else 'n/a'}"
            )
            return islands
