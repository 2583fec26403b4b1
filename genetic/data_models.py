"""
Data models for the genetic algorithm.

Core data structures shared by the engine and its strategies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, TypeVar


T = TypeVar("T")


class EngineState(Enum):
    """Lifecycle states of a GeneticAlgorithm run"""
    INITIALIZING = "initializing"
    EVOLVING = "evolving"
    TERMINATED = "terminated"


@dataclass
class ScoredIndividual(Generic[T]):
    """
    Pairs a genome with its cost.

    Lower cost is better. Populations of scored individuals are kept sorted
    by cost ascending, so index 0 is always the fittest.

    Attributes:
        score: Scalar cost of the individual
        individual: The genome itself
    """
    score: float
    individual: T

    def __lt__(self, other: "ScoredIndividual") -> bool:
        return self.score < other.score

    def clone(self, clone_individual: Callable[[T], T]) -> "ScoredIndividual[T]":
        """
        Create a copy with an unaliased genome.

        Args:
            clone_individual: Deep copy function for the genome type

        Returns:
            New ScoredIndividual with the same score and a cloned genome
        """
        return ScoredIndividual(self.score, clone_individual(self.individual))
