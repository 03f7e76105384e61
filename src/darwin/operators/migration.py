"""
Migration operators for the Darwin island model.

Both operators shuffle each island, detach a tail slice of ``size``
individuals and hand it to other islands. The total number of individuals
across all islands is conserved.
"""

from typing import List, Union, TYPE_CHECKING
import logging

import numpy as np

from darwin.core.population import Individual, SelectionSize
from darwin.operators.base import Migrator

if TYPE_CHECKING:
    from darwin.core.island import Island

logger = logging.getLogger(__name__)


def _detach_migrants(island: "Island", size: SelectionSize, rng: np.random.Generator) -> List[Individual]:
    """Shuffle an island and remove its tail slice of migrants."""
    individuals = island.population.individuals
    rng.shuffle(individuals)

    count = size(len(individuals))
    migrants = individuals[len(individuals) - count:]
    del individuals[len(individuals) - count:]
    return migrants


def _require_islands(islands: List["Island"]) -> None:
    if len(islands) < 2:
        raise ValueError(f"Migration requires at least two islands, got {len(islands)}")


class RandomMigration(Migrator):
    """
    Send each migrant to a random other island.

    Destinations are drawn from islands ``1..n-1``; a draw equal to the source
    island is redirected to island 0.
    """

    def __init__(self, size: Union[SelectionSize, int, float]):
        self.size = SelectionSize.coerce(size)

    def migrate(self, islands: List["Island"], rng: np.random.Generator) -> None:
        _require_islands(islands)

        for index, island in enumerate(islands):
            migrants = _detach_migrants(island, self.size, rng)
            for migrant in migrants:
                destination = int(rng.integers(1, len(islands)))
                if destination == index:
                    destination = 0
                islands[destination].population.append(migrant)

            logger.debug(f"Island {index} sent {len(migrants)} migrants to random islands")


class RingMigration(Migrator):
    """Send each island's migrants to the next island, wrapping around."""

    def __init__(self, size: Union[SelectionSize, int, float]):
        self.size = SelectionSize.coerce(size)

    def migrate(self, islands: List["Island"], rng: np.random.Generator) -> None:
        _require_islands(islands)

        for index, island in enumerate(islands):
            migrants = _detach_migrants(island, self.size, rng)
            destination = (index + 1) % len(islands)
            islands[destination].population.extend(migrants)

            logger.debug(f"Island {index} sent {len(migrants)} migrants to island {destination}")
