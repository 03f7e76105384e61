"""
Replacement operators for the Darwin genetic algorithm.
"""

from typing import Union

import numpy as np

from darwin.core.population import Population, SelectionSize
from darwin.operators.base import Replacer


class ReplaceAll(Replacer):
    """Full generational replacement: the offspring become the population."""

    def replace(self, offspring: Population, incumbent: Population, rng: np.random.Generator) -> None:
        incumbent.individuals = offspring.individuals
        offspring.individuals = []


class ElitistReplacement(Replacer):
    """
    Keep the best incumbents and append all offspring.

    The population size stays constant only if the caller chooses selection
    and elitism sizes that add up.
    """

    def __init__(self, size: Union[SelectionSize, int, float]):
        self.size = SelectionSize.coerce(size)

    def replace(self, offspring: Population, incumbent: Population, rng: np.random.Generator) -> None:
        count = self.size(len(incumbent))
        incumbent.sort_by_fitness(descending=True)
        del incumbent.individuals[count:]

        incumbent.extend(offspring.individuals)
        offspring.individuals = []
