"""
Generic genetic algorithm package.

This package provides a genome-agnostic evolutionary loop. All genome
specific behaviour (selection, crossover, mutation, scoring, cloning) is
injected as strategy callables, so the same engine drives collage layouts
as well as toy problems such as string matching.

Key Features:
- Strategy injection (no knowledge of the genome type)
- Explicit numpy random generators threaded through every strategy
- Optional per-generation fan-out over a bounded thread pool
- Best-ever tracking with early termination on a cost threshold

Modules:
- data_models: ScoredIndividual and engine state
- engine: GeneticAlgorithm generation loop
- selection: Parent selection strategies
"""

__version__ = "0.1.0"
__author__ = "Collage Layout Team"

from .data_models import ScoredIndividual, EngineState
from .engine import GeneticAlgorithm
from .selection import from_fittest_part_selection

__all__ = [
    "ScoredIndividual",
    "EngineState",
    "GeneticAlgorithm",
    "from_fittest_part_selection",
]
