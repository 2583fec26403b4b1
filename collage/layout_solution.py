"""
Layout solution (genome) and its fitness function.

A LayoutSolution owns one slicing tree and scores it against the collage
configuration. Lower scores are better; 0.0 would be a perfect layout.
"""

import math
from typing import List, Optional, Tuple

from genetic.data_models import ScoredIndividual

from .config_loader import CollageConfig
from .geometry import Dimension
from .nodes import ImageNode, LayoutNode, collect_nodes


# Relative size mismatch penalty curves as (factor, exponent).
# Undersized images are penalized harder than oversized ones, and feature
# images harder than ordinary ones.
FEATURE_UNDERSIZED_PENALTY = (2.5, 2.2)
FEATURE_OVERSIZED_PENALTY = (0.8, 1.6)
UNDERSIZED_PENALTY = (0.4, 1.8)
OVERSIZED_PENALTY = (0.2, 1.5)


def relative_size_mismatch_cost(fulfillment: float, is_feature: bool) -> float:
    """
    Penalty for an image whose realized share of the canvas differs from its desired share.

    Args:
        fulfillment: Actual canvas share divided by desired canvas share
        is_feature: Whether the image is a feature image

    Returns:
        Cost, strictly decreasing below 1.0 and strictly increasing above it
    """
    if fulfillment <= 0.0:
        return math.inf

    if fulfillment < 1.0:
        factor, exponent = FEATURE_UNDERSIZED_PENALTY if is_feature else UNDERSIZED_PENALTY
        return factor * (1.0 / fulfillment) ** exponent

    factor, exponent = FEATURE_OVERSIZED_PENALTY if is_feature else OVERSIZED_PENALTY
    return factor * fulfillment ** exponent


class LayoutSolution:
    """
    A candidate collage layout: a slicing tree plus its score.

    The flat node lists are computed once and cached. This is only valid
    because mutation and crossover swap field values between existing nodes
    and never add, remove or relink nodes.

    Attributes:
        root_node: Root of the slicing tree
        config: Configuration the layout is built for
        score: Cost from the last evaluate() call (0.0 until scored)
    """

    def __init__(self, root_node: LayoutNode, config: CollageConfig, score: float = 0.0):
        self.root_node = root_node
        self.config = config
        self.score = score
        self._nodes: Optional[Tuple[List[LayoutNode], List[ImageNode]]] = None

    def clone(self) -> "LayoutSolution":
        """Deep copy; the clone shares no nodes with this solution"""
        return LayoutSolution(self.root_node.clone(), self.config, self.score)

    def layout_nodes(self) -> List[LayoutNode]:
        """All internal nodes in pre-order"""
        return self._collected_nodes()[0]

    def image_nodes(self) -> List[ImageNode]:
        """All leaf nodes in pre-order"""
        return self._collected_nodes()[1]

    def _collected_nodes(self) -> Tuple[List[LayoutNode], List[ImageNode]]:
        if self._nodes is None:
            self._nodes = collect_nodes(self.root_node)
        return self._nodes

    def evaluate(self) -> ScoredIndividual["LayoutSolution"]:
        """
        Compute the layout geometry and score it.

        The score is a weighted sum of:
        1. the share of the canvas left uncovered,
        2. the relative size mismatch of every image,
        3. the off-center distance of feature images.

        Returns:
            ScoredIndividual pairing the new score with this solution

        Raises:
            ValueError: If the configured desired relative weight sum is not positive
        """
        if self.config.desired_relative_weight_sum <= 0:
            raise ValueError(
                f"Desired relative weight sum must be positive, got {self.config.desired_relative_weight_sum}"
            )

        self.root_node.compute_aspect_ratio()
        self.root_node.compute_dimensions(
            Dimension(float(self.config.target_width), float(self.config.target_height)),
            self.config,
            0.0,
            0.0
        )

        total_area = self.config.canvas_area
        covered_area = 0.0
        mismatch_cost = 0.0
        off_center_cost = 0.0

        for image_node in self.image_nodes():
            covered_area += image_node.dimension.area
            mismatch_cost += self._relative_size_mismatch(image_node, total_area)
            off_center_cost += image_node.off_center_distance

        uncovered_fraction = 1.0 - covered_area / total_area

        factors = self.config.scoring_factors
        self.score = (
            factors.canvas_coverage * uncovered_fraction
            + factors.relative_image_size * mismatch_cost
            + factors.centered_feature * off_center_cost
        )
        return ScoredIndividual(self.score, self)

    def _relative_size_mismatch(self, image_node: ImageNode, total_area: float) -> float:
        source_image = image_node.source_image
        desired_share = source_image.desired_relative_weight / float(self.config.desired_relative_weight_sum)
        actual_share = image_node.dimension.area / total_area
        return relative_size_mismatch_cost(actual_share / desired_share, source_image.is_feature)

    def __repr__(self) -> str:
        return f"LayoutSolution(score={self.score:.4f}, root={self.root_node!r})"
