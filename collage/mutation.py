"""
Mutation operators for layout solutions.

Mutations only swap field values between existing nodes, so the shape of
the tree (and the solution's cached node lists) never changes.
"""

import numpy as np

from .layout_solution import LayoutSolution


def swap_slicing_directions(solution: LayoutSolution, rng: np.random.Generator) -> LayoutSolution:
    """
    Swap the slicing direction of two random layout nodes.

    Nodes are picked with replacement, so picking the same node twice is a
    valid no-op.
    """
    layout_nodes = solution.layout_nodes()
    node1 = layout_nodes[int(rng.integers(len(layout_nodes)))]
    node2 = layout_nodes[int(rng.integers(len(layout_nodes)))]
    node1.slicing_direction, node2.slicing_direction = node2.slicing_direction, node1.slicing_direction
    return solution


def swap_source_images(solution: LayoutSolution, rng: np.random.Generator) -> LayoutSolution:
    """
    Swap the source images of two random image nodes.

    Nodes are picked with replacement, so picking the same node twice is a
    valid no-op.
    """
    image_nodes = solution.image_nodes()
    node1 = image_nodes[int(rng.integers(len(image_nodes)))]
    node2 = image_nodes[int(rng.integers(len(image_nodes)))]
    node1.source_image, node2.source_image = node2.source_image, node1.source_image
    return solution


def mutate(solution: LayoutSolution, rng: np.random.Generator) -> LayoutSolution:
    """
    Mutate a solution in place.

    With equal probability either swaps two slicing directions or swaps two
    source images.

    Args:
        solution: Solution exclusively owned by the caller
        rng: Random number generator

    Returns:
        The same (mutated) solution
    """
    if rng.random() < 0.5:
        return swap_slicing_directions(solution, rng)
    return swap_source_images(solution, rng)
