"""
Random layout generation.

Builds syntactically valid (but in no way optimal) slicing trees used as the
initial population of the search.
"""

from typing import List, Sequence
import numpy as np

from .config_loader import CollageConfig
from .geometry import SlicingDirection, SourceImage
from .layout_solution import LayoutSolution
from .nodes import ImageNode, PartialLayoutNode, to_layout_node


def random_slicing_direction(rng: np.random.Generator) -> SlicingDirection:
    """Uniformly random V or H"""
    return SlicingDirection.H if rng.random() < 0.5 else SlicingDirection.V


def generate_layout_solution(
    images: Sequence[SourceImage],
    config: CollageConfig,
    rng: np.random.Generator
) -> LayoutSolution:
    """
    Generate a random layout solution for the given images.

    The resulting tree has len(images) - 1 layout nodes and one image node
    per source image. It only satisfies the structural constraints of a
    collage: no cropping, no overlap, aspect ratios preserved.

    Args:
        images: Source images to place (at least 2)
        config: Collage configuration
        rng: Random number generator

    Returns:
        Unscored LayoutSolution (score 0.0)

    Raises:
        ValueError: If fewer than 2 images are given
    """
    if len(images) < 2:
        raise ValueError(f"Must have at least 2 images to create a layout, got {len(images)}")

    root = PartialLayoutNode(random_slicing_direction(rng))
    open_nodes = _create_internal_layout_nodes(root, len(images) - 1, rng)
    _distribute_images_to_nodes(images, open_nodes, rng)

    return LayoutSolution(to_layout_node(root), config)


def _create_internal_layout_nodes(
    root: PartialLayoutNode,
    count: int,
    rng: np.random.Generator
) -> List[PartialLayoutNode]:
    """
    Grow a random tree of `count` builder nodes starting from root.

    Returns:
        Builder nodes that still have at least one free child slot
    """
    open_nodes = [root]
    for _ in range(count - 1):
        new_node = PartialLayoutNode(random_slicing_direction(rng))
        parent_index = int(rng.integers(len(open_nodes)))
        if open_nodes[parent_index].attach(new_node):
            open_nodes.pop(parent_index)
        open_nodes.append(new_node)
    return open_nodes


def _distribute_images_to_nodes(
    images: Sequence[SourceImage],
    open_nodes: List[PartialLayoutNode],
    rng: np.random.Generator
) -> None:
    """Attach one image node per source image to random free slots"""
    for image in images:
        node_index = int(rng.integers(len(open_nodes)))
        if open_nodes[node_index].attach(ImageNode(source_image=image)):
            open_nodes.pop(node_index)
