#!/usr/bin/env python3
"""
String search with the generic genetic algorithm.

Evolves random strings towards a target sentence. The genome is a list of
characters; the cost is the summed character code distance to the target.
Shows that the engine knows nothing about collages.
"""

import string
import sys
import time
from functools import partial
from pathlib import Path
from typing import List, Tuple

import numpy as np

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from genetic import GeneticAlgorithm, ScoredIndividual, from_fittest_part_selection


GENE_POOL = list(string.ascii_lowercase + string.ascii_uppercase + " ")
TARGET = list("Charles Darwin had a brilliant idea")


def random_gene(rng: np.random.Generator) -> str:
    return GENE_POOL[int(rng.integers(len(GENE_POOL)))]


def score(genome: List[str]) -> ScoredIndividual[List[str]]:
    cost = sum(abs(ord(actual) - ord(wanted)) for actual, wanted in zip(genome, TARGET))
    return ScoredIndividual(float(cost), genome)


def cross(parents: Tuple[List[str], List[str]], rng: np.random.Generator) -> List[str]:
    """Take each gene from either parent with equal probability"""
    mother, father = parents
    return [m if rng.random() < 0.5 else f for m, f in zip(mother, father)]


def mutate(genome: List[str], rng: np.random.Generator, gene_probability: float = 0.1) -> List[str]:
    return [random_gene(rng) if rng.random() < gene_probability else gene for gene in genome]


def main(population_size: int = 250, num_generations: int = 50, seed: int = 42) -> str:
    rng = np.random.default_rng(seed)
    population = [[random_gene(rng) for _ in TARGET] for _ in range(population_size)]
    start_winner = "".join(min(population, key=lambda genome: score(genome).score))

    algorithm = GeneticAlgorithm(
        population,
        select=partial(from_fittest_part_selection, fraction=0.5),
        cross=cross,
        mutate=mutate,
        score=score,
        clone=list,
        rng=rng
    )

    start_time = time.time()
    result = algorithm.run(
        num_generations=num_generations,
        mutation_probability=0.5,
        cost_threshold=0.0,
        use_parallelism=False
    )

    print(f"Total execution time: {time.time() - start_time:.3f} seconds")
    print(f"First population best individual: {start_winner}")
    print(f"Final population best individual: {''.join(result.individual)} (cost {result.score:.0f})")
    return "".join(result.individual)


if __name__ == "__main__":
    main()
