"""
Base classes for the Darwin operator catalog.

Every operator family is an abstract interface; the concrete operators in the
sibling modules are interchangeable implementations. All methods take the
caller-owned random number generator as their last argument.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Tuple, TYPE_CHECKING

import numpy as np

from darwin.core.population import Population

if TYPE_CHECKING:
    from darwin.core.island import Island


class Selector(ABC):
    """
    Abstract base class for selection operators.

    A selector appends copies of chosen individuals from ``source`` to
    ``destination``. The source may be reordered but keeps its size.
    """

    @abstractmethod
    def select(
        self,
        source: Population,
        destination: Population,
        rng: np.random.Generator
    ) -> None:
        """
        Select individuals from a population.

        Args:
            source: Evaluated population to select from
            destination: Population receiving the selected copies
            rng: Random number generator
        """
        pass


class Crossover(ABC):
    """Abstract base class for recombination operators."""

    @abstractmethod
    def cross(self, value_a: Any, value_b: Any, rng: np.random.Generator) -> Tuple[Any, Any]:
        """
        Recombine two representations.

        Sequence representations are modified in place and returned; scalar
        representations are returned as new values.

        Args:
            value_a: First parent representation
            value_b: Second parent representation
            rng: Random number generator

        Returns:
            The two children
        """
        pass


class Mutator(ABC):
    """Abstract base class for mutation operators."""

    @abstractmethod
    def mutate(self, value: Any, rng: np.random.Generator) -> Any:
        """
        Mutate a representation.

        Args:
            value: Representation to mutate (sequences are changed in place)
            rng: Random number generator

        Returns:
            The mutated representation
        """
        pass


class Replacer(ABC):
    """Abstract base class for replacement operators."""

    @abstractmethod
    def replace(
        self,
        offspring: Population,
        incumbent: Population,
        rng: np.random.Generator
    ) -> None:
        """
        Form the next generation from offspring and incumbents.

        The offspring population is emptied; the incumbent population becomes
        the next generation.
        """
        pass


class Terminator(ABC):
    """
    Abstract base class for termination predicates.

    Predicates are evaluated once per generation. Stateful predicates must not
    be shared between engines.
    """

    @abstractmethod
    def should_stop(self, population: Population, rng: np.random.Generator) -> bool:
        """Return whether the run should stop."""
        pass


class Migrator(ABC):
    """Abstract base class for migration operators of the island model."""

    @abstractmethod
    def migrate(self, islands: List["Island"], rng: np.random.Generator) -> None:
        """Move individuals between the island populations."""
        pass


class Distribution(ABC):
    """Abstract base class for probabilistic models sampled by the EDA engine."""

    @abstractmethod
    def sample(self, rng: np.random.Generator) -> Any:
        """Draw one representation from the model."""
        pass


class DistributionUpdate(ABC):
    """Abstract base class for rules learning a distribution from a population."""

    @abstractmethod
    def update(
        self,
        distribution: Distribution,
        population: Population,
        rng: np.random.Generator
    ) -> None:
        """
        Update the distribution from an evaluated population.

        The population may be reordered.
        """
        pass
