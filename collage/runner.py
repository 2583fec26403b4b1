"""
Collage runner.

Wires the layout model into the generic genetic algorithm: builds the
random initial population, runs the search and returns the best layout.
"""

from functools import partial
from typing import Optional, Sequence
import time
import numpy as np

from genetic.data_models import ScoredIndividual
from genetic.engine import GeneticAlgorithm
from genetic.selection import from_fittest_part_selection

from .config_loader import CollageConfig
from .crossover import cross_breed_individuals
from .generator import generate_layout_solution
from .geometry import SourceImage
from .layout_solution import LayoutSolution
from .mutation import mutate


def validate_inputs(config: CollageConfig, images: Sequence[SourceImage]) -> None:
    """
    Reject runs that cannot produce a layout.

    Raises:
        ValueError: On fewer than 2 images or a non-positive weight sum
    """
    if len(images) < 2:
        raise ValueError("Must have at least 2 images to create a collage")
    if config.desired_relative_weight_sum <= 0:
        raise ValueError(
            f"Desired relative weight sum must be positive, got {config.desired_relative_weight_sum}"
        )
    if config.population_size < 1:
        raise ValueError(f"Population size must be positive, got {config.population_size}")


def create_genetic_algorithm(
    config: CollageConfig,
    images: Sequence[SourceImage],
    rng: np.random.Generator,
    verbose: bool = False
) -> GeneticAlgorithm[LayoutSolution]:
    """Build the initial population and a GeneticAlgorithm configured for layouts"""
    population = [generate_layout_solution(images, config, rng) for _ in range(config.population_size)]

    return GeneticAlgorithm(
        population,
        select=partial(from_fittest_part_selection, fraction=config.selection_fraction),
        cross=cross_breed_individuals,
        mutate=mutate,
        score=LayoutSolution.evaluate,
        clone=LayoutSolution.clone,
        rng=rng,
        verbose=verbose
    )


def run_collage(
    config: CollageConfig,
    images: Sequence[SourceImage],
    rng: Optional[np.random.Generator] = None,
    verbose: bool = True
) -> ScoredIndividual[LayoutSolution]:
    """
    Search for the best layout of the given images.

    Args:
        config: Collage configuration (desired_relative_weight_sum filled in)
        images: Source images to arrange (at least 2)
        rng: Random number generator (seeded from config.random_seed if None)
        verbose: Print progress

    Returns:
        Best scored layout found
    """
    validate_inputs(config, images)

    if rng is None:
        rng = np.random.default_rng(config.random_seed)

    if verbose:
        print(f"Start running using config {config}")

    start_time = time.time()
    algorithm = create_genetic_algorithm(config, images, rng, verbose=verbose)
    result = algorithm.run(
        num_generations=config.num_generations,
        mutation_probability=config.mutation_probability,
        cost_threshold=config.cost_threshold,
        use_parallelism=config.use_parallelism,
        max_workers=config.max_workers
    )
    elapsed_time = time.time() - start_time

    if verbose:
        print(
            f"\nBest image collage for {len(images)} images after {algorithm.generation} generations "
            f"and {elapsed_time:.3f} seconds was: score {result.score:.4f}"
        )

    return result
