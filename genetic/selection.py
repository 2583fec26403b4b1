"""
Selection strategies for the genetic algorithm.
"""

from typing import Sequence, TypeVar
import numpy as np

from .data_models import ScoredIndividual


T = TypeVar("T")


def from_fittest_part_selection(
    scored_population: Sequence[ScoredIndividual[T]],
    rng: np.random.Generator,
    fraction: float = 0.5
) -> T:
    """
    Select an individual uniformly from the fittest part of a population.

    The population must be sorted by cost ascending. A smaller fraction
    biases selection more strongly toward the fittest prefix; a fraction of
    1.0 is uniform selection over the whole population.

    Args:
        scored_population: Cost-sorted population (read only)
        rng: Random number generator
        fraction: Share of the population (from the front) to draw from

    Returns:
        Genome of the selected individual
    """
    size = len(scored_population)
    index = int(rng.random() * size * fraction)
    index = min(max(index, 0), size - 1)
    return scored_population[index].individual
