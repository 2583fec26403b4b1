"""
Crossover operator for layout solutions.

Exchanges slicing directions between equally sized subtrees of two parents.
Image placement is never blended between parents: the child is always a
clone of the fitter parent, so its images are exactly that parent's images.
"""

from typing import Tuple
import numpy as np

from .nodes import collect_nodes
from .layout_solution import LayoutSolution


# Subtrees with this many images or fewer are too small to be worth exchanging
MIN_CROSSOVER_IMAGE_NODE_COUNT = 3


def cross_breed_individuals(
    parents: Tuple[LayoutSolution, LayoutSolution],
    rng: np.random.Generator
) -> LayoutSolution:
    """
    Combine two scored parents into a new child.

    Algorithm:
        1. Pick a random layout node of parent A whose subtree holds more than
           MIN_CROSSOVER_IMAGE_NODE_COUNT images (skip the exchange if none)
        2. Pick a random layout node of parent B with the same image count
        3. Clone the parent with the lower score (ties go to parent B)
        4. Swap slicing directions pairwise (pre-order) between the two
           subtrees, applied to the clone only

    Parents are only read, never written, so they can be shared between
    concurrent crossovers.

    Args:
        parents: Pair of (parent_a, parent_b), both already scored
        rng: Random number generator

    Returns:
        New LayoutSolution owned by the caller
    """
    mother, father = parents
    mother_fitter = mother.score < father.score
    child = mother.clone() if mother_fitter else father.clone()

    mother_nodes = mother.layout_nodes()
    candidates = [
        index for index, node in enumerate(mother_nodes)
        if node.image_node_count > MIN_CROSSOVER_IMAGE_NODE_COUNT
    ]
    if not candidates:
        return child
    mother_index = candidates[int(rng.integers(len(candidates)))]
    mother_node = mother_nodes[mother_index]

    father_nodes = father.layout_nodes()
    matches = [
        index for index, node in enumerate(father_nodes)
        if node.image_node_count == mother_node.image_node_count
    ]
    if not matches:
        return child
    father_index = matches[int(rng.integers(len(matches)))]
    father_node = father_nodes[father_index]

    # The clone's pre-order node list lines up index for index with its source
    if mother_fitter:
        child_subtree, donor_subtree = child.layout_nodes()[mother_index], father_node
    else:
        child_subtree, donor_subtree = child.layout_nodes()[father_index], mother_node

    child_nodes = collect_nodes(child_subtree)[0]
    donor_nodes = collect_nodes(donor_subtree)[0]
    for child_node, donor_node in zip(child_nodes, donor_nodes):
        child_node.slicing_direction = donor_node.slicing_direction

    return child
