"""
Configuration Loading System

Defines the collage configuration and loads it from YAML files, converting
the nested sections into a CollageConfig.
"""

import re
import yaml
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional, Tuple


DEFAULT_CONFIG_PATH = "config.yaml"

FEATURE_IMAGE_PATTERN = re.compile(r"(.+):(\d+)")
COLOR_PATTERN = re.compile(r"#?([0-9a-fA-F]{6})")


class ConfigurationError(Exception):
    """Raised when configuration is invalid"""
    pass


@dataclass(frozen=True)
class FeatureImage:
    """A named image with a requested relative size weight"""
    name: str
    relative_weight: int

    def __post_init__(self):
        if not self.name:
            raise ValueError("Image name must not be empty")
        if self.relative_weight <= 0:
            raise ValueError("Relative weight must be greater than 0")


@dataclass(frozen=True)
class ScoringFactors:
    """Weights of the three fitness terms"""
    canvas_coverage: float = 1.0
    relative_image_size: float = 1.0
    centered_feature: float = 1.0


@dataclass(frozen=True)
class CollageConfig:
    """
    Everything the layout search needs to know about the target collage.

    desired_relative_weight_sum must be precomputed by the caller as the sum
    of all source images' desired relative weights.
    """
    target_width: int = 1920
    target_height: int = 1080
    border_width: int = 2
    border_color: Tuple[int, int, int] = (255, 255, 255)
    feature_images: List[FeatureImage] = field(default_factory=list)
    max_scale_factor: float = 1.0
    desired_relative_weight_sum: int = 0
    mutation_probability: float = 0.25
    num_generations: int = 500
    population_size: int = 1000
    scoring_factors: ScoringFactors = field(default_factory=ScoringFactors)
    selection_fraction: float = 0.25
    cost_threshold: float = 0.00000001
    use_parallelism: bool = True
    max_workers: Optional[int] = None
    random_seed: Optional[int] = None

    @property
    def canvas_area(self) -> float:
        return float(self.target_width) * float(self.target_height)

    def feature_weight(self, file_name: str) -> Optional[int]:
        """Relative weight configured for a file name, if it is a feature image"""
        for feature_image in self.feature_images:
            if feature_image.name == file_name:
                return feature_image.relative_weight
        return None

    def copy(self, **changes) -> "CollageConfig":
        """Return a copy of this config with the given fields replaced"""
        return replace(self, **changes)


def parse_feature_image(value: str) -> FeatureImage:
    """
    Parse a feature image argument of the form 'file_name:weight'.

    Raises:
        ValueError: If the value does not match the pattern
    """
    match = FEATURE_IMAGE_PATTERN.fullmatch(value)
    if match is None:
        raise ValueError(f"Bad feature image input '{value}'")
    name, weight = match.groups()
    return FeatureImage(name, int(weight))


def parse_color(value: str) -> Tuple[int, int, int]:
    """
    Parse a hexadecimal rgb string such as 'ffffff' or '#ff0000'.

    Raises:
        ValueError: If the value is not a 6 digit hex color
    """
    match = COLOR_PATTERN.fullmatch(value)
    if match is None:
        raise ValueError(f"Invalid color value {value}")
    digits = match.group(1)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from YAML file"""
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")
    return config


def parse_feature_images(feature_config: List[Any]) -> List[FeatureImage]:
    """
    Parse the feature_images section.

    Entries may be 'name:weight' strings or {name, weight} mappings.
    """
    feature_images = []
    for entry in feature_config or []:
        try:
            if isinstance(entry, str):
                feature_images.append(parse_feature_image(entry))
            elif isinstance(entry, dict):
                feature_images.append(FeatureImage(str(entry.get("name", "")), int(entry.get("weight", 0))))
            else:
                raise ValueError(f"Bad feature image input '{entry}'")
        except ValueError as e:
            raise ConfigurationError(str(e))
    return feature_images


def create_collage_config(config: Dict[str, Any], **overrides) -> CollageConfig:
    """
    Create a CollageConfig from a configuration dictionary.

    Args:
        config: Configuration dictionary (as returned by load_config)
        **overrides: CollageConfig fields that take precedence over the file;
            None values are ignored

    Returns:
        CollageConfig instance

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    issues = validate_config(config)
    if issues:
        raise ConfigurationError("; ".join(issues))

    defaults = CollageConfig()

    canvas_config = config.get("canvas", {})
    border_config = config.get("border", {})
    scaling_config = config.get("scaling", {})
    genetic_config = config.get("genetic", {})
    scoring_config = config.get("scoring", {})

    border_color = border_config.get("color")
    try:
        parsed_border_color = parse_color(str(border_color)) if border_color is not None else defaults.border_color
    except ValueError as e:
        raise ConfigurationError(str(e))

    values = {
        "target_width": canvas_config.get("width", defaults.target_width),
        "target_height": canvas_config.get("height", defaults.target_height),
        "border_width": border_config.get("width", defaults.border_width),
        "border_color": parsed_border_color,
        "feature_images": parse_feature_images(config.get("feature_images", [])),
        "max_scale_factor": scaling_config.get("max_scale_factor", defaults.max_scale_factor),
        "mutation_probability": genetic_config.get("mutation_probability", defaults.mutation_probability),
        "num_generations": genetic_config.get("num_generations", defaults.num_generations),
        "population_size": genetic_config.get("population_size", defaults.population_size),
        "selection_fraction": genetic_config.get("selection_fraction", defaults.selection_fraction),
        "cost_threshold": genetic_config.get("cost_threshold", defaults.cost_threshold),
        "use_parallelism": genetic_config.get("use_parallelism", defaults.use_parallelism),
        "max_workers": genetic_config.get("max_workers", defaults.max_workers),
        "random_seed": genetic_config.get("random_seed", defaults.random_seed),
        "scoring_factors": ScoringFactors(
            canvas_coverage=scoring_config.get("canvas_coverage", defaults.scoring_factors.canvas_coverage),
            relative_image_size=scoring_config.get(
                "relative_image_size", defaults.scoring_factors.relative_image_size
            ),
            centered_feature=scoring_config.get("centered_feature", defaults.scoring_factors.centered_feature),
        ),
    }

    known_fields = {f.name for f in fields(CollageConfig)}
    for name, value in overrides.items():
        if name not in known_fields:
            raise ConfigurationError(f"Unknown configuration option: {name}")
        if value is not None:
            values[name] = value

    collage_config = CollageConfig(**values)
    issues = validate_collage_config(collage_config)
    if issues:
        raise ConfigurationError("; ".join(issues))
    return collage_config


def load_collage_config(config_path: str = DEFAULT_CONFIG_PATH, **overrides) -> CollageConfig:
    """Load a YAML file and convert it to a CollageConfig"""
    return create_collage_config(load_config(config_path), **overrides)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of issues

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    for section in ["canvas", "border", "scaling", "genetic", "scoring"]:
        if section in config and not isinstance(config[section], dict):
            issues.append(f"Section '{section}' must be a mapping")
    if issues:
        return issues

    canvas_config = config.get("canvas", {})
    for key in ["width", "height"]:
        if key in canvas_config and (not isinstance(canvas_config[key], int) or canvas_config[key] <= 0):
            issues.append(f"Canvas {key} must be a positive integer")

    border_config = config.get("border", {})
    if "width" in border_config and (not isinstance(border_config["width"], int) or border_config["width"] < 0):
        issues.append("Border width must be a non-negative integer")

    scaling_config = config.get("scaling", {})
    if "max_scale_factor" in scaling_config and (
        not _is_number(scaling_config["max_scale_factor"]) or scaling_config["max_scale_factor"] <= 0
    ):
        issues.append("Max scale factor must be positive")

    genetic_config = config.get("genetic", {})
    for key in ["population_size", "num_generations"]:
        if key in genetic_config and (not isinstance(genetic_config[key], int) or genetic_config[key] < 1):
            issues.append(f"Genetic {key} must be a positive integer")

    probability = genetic_config.get("mutation_probability", 0.0)
    if not _is_number(probability) or not 0.0 <= probability <= 1.0:
        issues.append("Mutation probability must be between 0 and 1")

    fraction = genetic_config.get("selection_fraction", 1.0)
    if not _is_number(fraction) or not 0.0 < fraction <= 1.0:
        issues.append("Selection fraction must be in (0, 1]")

    feature_config = config.get("feature_images", [])
    if feature_config is not None and not isinstance(feature_config, list):
        issues.append("Section 'feature_images' must be a list")

    return issues


def print_config_summary(config: CollageConfig):
    """Print a summary of the configuration"""
    print("=" * 50)
    print("CONFIGURATION SUMMARY")
    print("=" * 50)
    print(f"Canvas Size: {config.target_width} x {config.target_height}")
    print(f"Border: {config.border_width}px, color {config.border_color}")
    print(f"Max scale factor: {config.max_scale_factor}")
    print(f"Population: {config.population_size}, generations: {config.num_generations}")
    print(f"Mutation probability: {config.mutation_probability}")
    factors = config.scoring_factors
    print(
        f"Scoring factors: coverage={factors.canvas_coverage}, "
        f"relative size={factors.relative_image_size}, centered feature={factors.centered_feature}"
    )
    if config.feature_images:
        print(f"\nFeature images ({len(config.feature_images)}):")
        for feature_image in config.feature_images:
            print(f"  {feature_image.name}: weight {feature_image.relative_weight}")
    print("=" * 50)


def validate_collage_config(config: CollageConfig) -> List[str]:
    """
    Validate a merged CollageConfig (file values plus command line overrides).

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    if config.target_width < 1 or config.target_height < 1:
        issues.append(f"Canvas size must be at least 1x1, got {config.target_width}x{config.target_height}")
    if config.border_width < 0:
        issues.append(f"Border width must be non-negative, got {config.border_width}")
    if config.max_scale_factor <= 0:
        issues.append(f"Max scale factor must be positive, got {config.max_scale_factor}")
    if config.population_size < 1:
        issues.append(f"Population size must be positive, got {config.population_size}")
    if config.num_generations < 1:
        issues.append(f"Number of generations must be positive, got {config.num_generations}")
    if not 0.0 <= config.mutation_probability <= 1.0:
        issues.append(f"Mutation probability must be between 0 and 1, got {config.mutation_probability}")

    return issues
