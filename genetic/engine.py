"""
Genetic algorithm engine.

Implements the generation loop: score and sort the initial population, then
repeatedly build a new population through selection, crossover and optional
mutation, keeping track of the best individual ever seen.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar
import numpy as np

from .data_models import ScoredIndividual, EngineState


T = TypeVar("T")

SelectFn = Callable[[Sequence[ScoredIndividual[T]], np.random.Generator], T]
CrossFn = Callable[[Tuple[T, T], np.random.Generator], T]
MutateFn = Callable[[T, np.random.Generator], T]
ScoreFn = Callable[[T], ScoredIndividual[T]]
CloneFn = Callable[[T], T]


class GeneticAlgorithm(Generic[T]):
    """
    Basic genome-agnostic genetic algorithm.

    All genome specific behaviour is injected:
        select: Picks a parent genome from the cost-sorted population
        cross: Produces a child genome from a pair of parents
        mutate: Mutates a child genome (may be in place) and returns it
        score: Scores a genome, returning a ScoredIndividual (lower is better)
        clone: Deep copies a genome

    Strategies must only write to genomes they exclusively own (a fresh
    child or a clone), never to members of the population being sampled.
    """

    def __init__(
        self,
        initial_population: Sequence[T],
        select: SelectFn,
        cross: CrossFn,
        mutate: MutateFn,
        score: ScoreFn,
        clone: CloneFn,
        rng: Optional[np.random.Generator] = None,
        verbose: bool = False
    ):
        if not initial_population:
            raise ValueError("Initial population must contain at least one individual")

        self.initial_population = list(initial_population)
        self.select = select
        self.cross = cross
        self.mutate = mutate
        self.score = score
        self.clone = clone
        self.rng = rng if rng is not None else np.random.default_rng()
        self.verbose = verbose

        self.state = EngineState.INITIALIZING
        self.generation = 0
        self.improvement_count = 0
        self.best_score_history: List[float] = []

    def run(
        self,
        num_generations: int = 1000,
        mutation_probability: float = 0.1,
        cost_threshold: float = 0.0,
        use_parallelism: bool = True,
        max_workers: Optional[int] = None
    ) -> ScoredIndividual[T]:
        """
        Evolve the population and return the best individual found.

        Args:
            num_generations: Maximum number of generations to evolve
            mutation_probability: Probability that a child is mutated
            cost_threshold: Stop as soon as the best cost is at or below this
            use_parallelism: Build each generation on a thread pool
            max_workers: Thread pool size (None lets the executor decide)

        Returns:
            Best individual ever seen, as an unaliased ScoredIndividual
        """
        self.state = EngineState.INITIALIZING
        self.generation = 0
        self.improvement_count = 1
        self.best_score_history = []

        population = self._sorted([self.score(individual) for individual in self.initial_population])
        best = population[0].clone(self.clone)

        self.state = EngineState.EVOLVING

        executor = ThreadPoolExecutor(max_workers=max_workers) if use_parallelism else None
        try:
            for generation in range(1, num_generations + 1):
                self.generation = generation
                if self.verbose:
                    print(
                        f"\rGeneration {generation}, best score {best.score:.4f} "
                        f"(improved {self.improvement_count} times)",
                        end="",
                        flush=True
                    )

                population = self._next_generation(population, mutation_probability, executor)

                if population[0].score < best.score:
                    best = population[0].clone(self.clone)
                    self.improvement_count += 1

                self.best_score_history.append(best.score)

                if best.score <= cost_threshold:
                    if self.verbose:
                        print(f"\nCost threshold {cost_threshold} reached in generation {generation}")
                    break
        finally:
            if executor is not None:
                executor.shutdown(wait=True)
            self.state = EngineState.TERMINATED

        return best

    def _next_generation(
        self,
        population: List[ScoredIndividual[T]],
        mutation_probability: float,
        executor: Optional[ThreadPoolExecutor]
    ) -> List[ScoredIndividual[T]]:
        """
        Build and sort the next generation from the current one.

        Every slot gets its own generator spawned up front, so the outcome is
        the same whether slots run sequentially or on the thread pool.
        """
        slot_rngs = self.rng.spawn(len(population))

        def breed(slot_rng: np.random.Generator) -> ScoredIndividual[T]:
            parents = (self.select(population, slot_rng), self.select(population, slot_rng))
            child = self.cross(parents, slot_rng)
            if slot_rng.random() < mutation_probability:
                child = self.mutate(child, slot_rng)
            return self.score(child)

        if executor is not None:
            children = list(executor.map(breed, slot_rngs))
        else:
            children = [breed(slot_rng) for slot_rng in slot_rngs]

        return self._sorted(children)

    @staticmethod
    def _sorted(population: List[ScoredIndividual[T]]) -> List[ScoredIndividual[T]]:
        return sorted(population, key=lambda scored: scored.score)
