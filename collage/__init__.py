"""
Collage Layout System

Arranges images of arbitrary aspect ratio on a fixed-size canvas using a
genetic search over binary slicing trees.
"""

__version__ = "1.0.0"
__author__ = "Collage Layout Team"

# Export main classes for easy importing
from .geometry import (
    Dimension,
    SlicingDirection,
    Rotation,
    SourceImage,
    DEFAULT_IMAGE_RELATIVE_WEIGHT
)
from .config_loader import (
    CollageConfig,
    ScoringFactors,
    FeatureImage,
    ConfigurationError,
    load_collage_config,
    parse_feature_image,
    parse_color
)
from .nodes import Node, ImageNode, LayoutNode, InvalidLayoutError
from .layout_solution import LayoutSolution
from .generator import generate_layout_solution
from .crossover import cross_breed_individuals
from .mutation import mutate
from .runner import run_collage

__all__ = [
    'Dimension',
    'SlicingDirection',
    'Rotation',
    'SourceImage',
    'DEFAULT_IMAGE_RELATIVE_WEIGHT',
    'CollageConfig',
    'ScoringFactors',
    'FeatureImage',
    'ConfigurationError',
    'load_collage_config',
    'parse_feature_image',
    'parse_color',
    'Node',
    'ImageNode',
    'LayoutNode',
    'InvalidLayoutError',
    'LayoutSolution',
    'generate_layout_solution',
    'cross_breed_individuals',
    'mutate',
    'run_collage'
]
