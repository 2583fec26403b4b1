"""
Slicing tree nodes.

A layout is a binary tree: internal LayoutNodes split their rectangle either
side by side (V) or stacked (H), and ImageNode leaves each hold exactly one
source image. Aspect ratios are computed bottom-up, dimensions top-down.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .config_loader import CollageConfig
from .geometry import Dimension, SlicingDirection, SourceImage


class InvalidLayoutError(RuntimeError):
    """Raised when a layout tree violates its construction invariants"""
    pass


class Node(ABC):
    """Common capabilities of layout and image nodes"""

    aspect_ratio: float
    dimension: Dimension

    @abstractmethod
    def compute_aspect_ratio(self) -> float:
        """Compute (and store) the aspect ratio of the subtree rooted here"""

    @abstractmethod
    def compute_dimensions(
        self,
        parent_dimension: Dimension,
        config: CollageConfig,
        x_offset: float,
        y_offset: float
    ) -> int:
        """
        Fit this subtree inside its parent's dimension.

        Args:
            parent_dimension: Space available from the parent node
            config: Collage configuration (canvas size, max scale factor)
            x_offset: Absolute x position of this node on the canvas
            y_offset: Absolute y position of this node on the canvas

        Returns:
            Number of image nodes in the subtree rooted at this node
        """

    @abstractmethod
    def clone(self) -> "Node":
        """Deep copy of the subtree rooted at this node"""

    def _fit(self, parent_dimension: Dimension) -> Tuple[float, float]:
        # Full parent height unless that makes the node wider than the parent
        width = min(self.aspect_ratio * parent_dimension.height, parent_dimension.width)
        return width, width / self.aspect_ratio


@dataclass(repr=False)
class ImageNode(Node):
    """
    Leaf node holding a single source image.

    dimension, aspect_ratio and off_center_distance are only meaningful after
    the tree has been scored.
    """
    source_image: SourceImage
    off_center_distance: float = 0.0
    dimension: Dimension = field(default_factory=lambda: Dimension(0.0, 0.0))
    aspect_ratio: float = 0.0

    def compute_aspect_ratio(self) -> float:
        self.aspect_ratio = self.source_image.aspect_ratio
        return self.aspect_ratio

    def compute_dimensions(
        self,
        parent_dimension: Dimension,
        config: CollageConfig,
        x_offset: float,
        y_offset: float
    ) -> int:
        width, height = self._fit(parent_dimension)

        original = self.source_image.dimension
        if width / original.width > config.max_scale_factor:
            self.dimension = original.scaled(config.max_scale_factor)
        else:
            self.dimension = Dimension(width, height)

        if self.source_image.is_feature:
            a = config.target_width / 2.0 - (x_offset + self.dimension.width / 2.0)
            b = config.target_height / 2.0 - (y_offset + self.dimension.height / 2.0)
            self.off_center_distance = math.hypot(a, b) / (2.0 * max(config.target_width, config.target_height))
        else:
            self.off_center_distance = 0.0

        return 1

    def clone(self) -> "ImageNode":
        return ImageNode(
            source_image=self.source_image,
            off_center_distance=self.off_center_distance,
            dimension=self.dimension,
            aspect_ratio=self.aspect_ratio
        )

    def __repr__(self) -> str:
        original = self.source_image.dimension
        scale = round(100.0 * self.dimension.width / original.width)
        return (
            f"{self.dimension} ~ {scale}% of {original} "
            f"(weight: {self.source_image.desired_relative_weight}) @{self.source_image.aspect_ratio:.3f}"
        )


@dataclass(repr=False)
class LayoutNode(Node):
    """
    Internal node splitting its rectangle between exactly two children.

    The left child is placed first (left of, or above) the right child.
    image_node_count is refreshed by compute_dimensions.
    """
    slicing_direction: SlicingDirection
    left: Node
    right: Node
    aspect_ratio: float = 0.0
    dimension: Dimension = field(default_factory=lambda: Dimension(0.0, 0.0))
    image_node_count: int = 0

    def compute_aspect_ratio(self) -> float:
        left_ar = self.left.compute_aspect_ratio()
        right_ar = self.right.compute_aspect_ratio()

        if self.slicing_direction == SlicingDirection.V:
            # Shared height: widths add up
            self.aspect_ratio = left_ar + right_ar
        else:
            # Shared width: heights add up, i.e. reciprocal aspect ratios add up
            self.aspect_ratio = left_ar * right_ar / (left_ar + right_ar)
        return self.aspect_ratio

    def compute_dimensions(
        self,
        parent_dimension: Dimension,
        config: CollageConfig,
        x_offset: float,
        y_offset: float
    ) -> int:
        width, height = self._fit(parent_dimension)
        self.dimension = Dimension(width, height)

        self.image_node_count = self.left.compute_dimensions(self.dimension, config, x_offset, y_offset)

        if self.slicing_direction == SlicingDirection.V:
            right_x, right_y = x_offset + self.left.dimension.width, y_offset
        else:
            right_x, right_y = x_offset, y_offset + self.left.dimension.height

        self.image_node_count += self.right.compute_dimensions(self.dimension, config, right_x, right_y)
        return self.image_node_count

    def clone(self) -> "LayoutNode":
        return LayoutNode(
            slicing_direction=self.slicing_direction,
            left=self.left.clone(),
            right=self.right.clone(),
            aspect_ratio=self.aspect_ratio,
            dimension=self.dimension,
            image_node_count=self.image_node_count
        )

    def __repr__(self) -> str:
        return f"LayoutNode({self.slicing_direction.value} {self.dimension} @{self.aspect_ratio:.3f})"


@dataclass(eq=False)
class PartialLayoutNode:
    """
    Builder for a LayoutNode whose children are not yet all attached.

    Converted with to_layout_node() once the tree is fully populated.
    """
    slicing_direction: SlicingDirection
    left: Optional[Union["PartialLayoutNode", ImageNode]] = None
    right: Optional[Union["PartialLayoutNode", ImageNode]] = None

    def attach(self, child: Union["PartialLayoutNode", ImageNode]) -> bool:
        """
        Attach a child to the first free slot.

        Returns:
            True if this node is now fully populated
        """
        if self.left is None:
            self.left = child
            return False
        if self.right is None:
            self.right = child
            return True
        raise InvalidLayoutError("Cannot attach a third child to a layout node")


def to_layout_node(node: PartialLayoutNode) -> LayoutNode:
    """
    Convert a fully populated builder tree into a LayoutNode tree.

    Raises:
        InvalidLayoutError: If any builder node lacks a child
    """
    if not isinstance(node, PartialLayoutNode):
        raise InvalidLayoutError(f"Invalid node type {node!r}")
    if node.left is None or node.right is None:
        raise InvalidLayoutError(f"Layout node {node.slicing_direction.value} is missing a child")

    return LayoutNode(
        slicing_direction=node.slicing_direction,
        left=_finalize_child(node.left),
        right=_finalize_child(node.right)
    )


def _finalize_child(child: Union[PartialLayoutNode, ImageNode]) -> Node:
    if isinstance(child, ImageNode):
        return child
    return to_layout_node(child)


def collect_nodes(
    node: Node,
    collected: Optional[Tuple[List[LayoutNode], List[ImageNode]]] = None
) -> Tuple[List[LayoutNode], List[ImageNode]]:
    """
    Collect all layout nodes and image nodes of a subtree in pre-order.

    Returns:
        Tuple of (layout_nodes, image_nodes)
    """
    if collected is None:
        collected = ([], [])

    layout_nodes, image_nodes = collected
    if isinstance(node, ImageNode):
        image_nodes.append(node)
    elif isinstance(node, LayoutNode):
        layout_nodes.append(node)
        collect_nodes(node.left, collected)
        collect_nodes(node.right, collected)
    else:
        raise InvalidLayoutError(f"Invalid node type {node!r}")

    return collected
