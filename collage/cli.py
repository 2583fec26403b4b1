"""
CLI module for the collage generator.

Parses command line arguments, merges them over the YAML configuration,
scans the image directory, runs the layout search and renders the result.
"""

import argparse
from pathlib import Path
from typing import List, Optional
import time

from .config_loader import (
    CollageConfig,
    ConfigurationError,
    ScoringFactors,
    create_collage_config,
    load_config,
    parse_color,
    parse_feature_image,
    print_config_summary,
)
from .geometry import SourceImage


def _feature_image_argument(value: str):
    try:
        return parse_feature_image(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _color_argument(value: str):
    try:
        return parse_color(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _positive_int_argument(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"Value must be at least 1, got {value}")
    return number


def _non_negative_int_argument(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"Value must not be negative, got {value}")
    return number


def _positive_float_argument(value: str) -> float:
    number = float(value)
    if number <= 0.0:
        raise argparse.ArgumentTypeError(f"Value must be greater than 0, got {value}")
    return number


def _probability_argument(value: str) -> float:
    probability = float(value)
    if not 0.0 <= probability <= 1.0:
        raise argparse.ArgumentTypeError(f"Probability must be between 0 and 1, got {value}")
    return probability


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser"""
    parser = argparse.ArgumentParser(
        description="Collage generator - arrange images on a canvas with a genetic layout search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 main.py photos/                         # Collage of all images in photos/ (photos.png)
  python3 main.py photos/ sunny_day.jpg:5         # sunny_day.jpg five times as large as the others
  python3 main.py photos/ -o holiday -W 3840 -H 2160
  python3 main.py photos/ --config custom.yaml    # Custom config file
  python3 main.py photos/ --plot --print-tree     # Debug plot of the layout + tree dump
        """
    )

    parser.add_argument('path', help='Directory containing source images (png and jpeg supported)')
    parser.add_argument(
        'feature_images',
        nargs='*',
        type=_feature_image_argument,
        metavar='NAME:WEIGHT',
        help='Feature image file name and desired relative size, e.g. sunny_day.jpg:5 '
             '(other images have weight 1)'
    )

    parser.add_argument('--config', '-c', help='YAML configuration file')
    parser.add_argument(
        '--output', '-o',
        help='Output image name without extension (default: directory name of path)'
    )
    parser.add_argument('--target-width', '-W', type=_positive_int_argument, help='Width of output image')
    parser.add_argument('--target-height', '-H', type=_positive_int_argument, help='Height of output image')
    parser.add_argument('--border-width', '-bw', type=_non_negative_int_argument, help='Width of border framing each image')
    parser.add_argument(
        '--border-color', '-bc',
        type=_color_argument,
        help='Border color as hexadecimal rgb string (like ffffff for white)'
    )
    parser.add_argument(
        '--max-scale-factor', '-msf',
        type=_positive_float_argument,
        help='Max resize scale factor (1.0 means no larger than original size)'
    )
    parser.add_argument('--population-size', '-pop', type=_positive_int_argument, help='Population size')
    parser.add_argument('--generations', '-gen', type=_positive_int_argument, help='Number of generations to evolve')
    parser.add_argument('--mutation-probability', '-mp', type=_probability_argument, help='Mutation probability')
    parser.add_argument(
        '--canvas-coverage', '-cc',
        type=float,
        help='Weight of the canvas coverage score (how important it is that the canvas has no gaps)'
    )
    parser.add_argument(
        '--relative-area-coverage', '-rac',
        type=float,
        help='Weight of the relative image size score (how well each image keeps its relative size)'
    )
    parser.add_argument(
        '--centered-feature', '-cf',
        type=float,
        help='Weight of the feature centering score (how close feature images are to the center)'
    )
    parser.add_argument('--seed', type=int, help='Random seed for reproducible layouts')
    parser.add_argument('--sequential', action='store_true', help='Evaluate generations without a thread pool')
    parser.add_argument('--plot', action='store_true', help='Also save a debug plot of the layout geometry')
    parser.add_argument('--print-tree', action='store_true', help='Print the winning layout tree')
    return parser


def config_from_args(args: argparse.Namespace, images: Optional[List[SourceImage]] = None) -> CollageConfig:
    """
    Build the collage configuration from the YAML file and command line.

    Command line values take precedence over the file.
    """
    file_config = load_config(args.config) if args.config else {}
    config = create_collage_config(
        file_config,
        target_width=args.target_width,
        target_height=args.target_height,
        border_width=args.border_width,
        border_color=args.border_color,
        max_scale_factor=args.max_scale_factor,
        population_size=args.population_size,
        num_generations=args.generations,
        mutation_probability=args.mutation_probability,
        random_seed=args.seed,
        feature_images=args.feature_images or None,
    )

    factors = config.scoring_factors
    scoring_factors = ScoringFactors(
        canvas_coverage=args.canvas_coverage if args.canvas_coverage is not None else factors.canvas_coverage,
        relative_image_size=(
            args.relative_area_coverage if args.relative_area_coverage is not None else factors.relative_image_size
        ),
        centered_feature=args.centered_feature if args.centered_feature is not None else factors.centered_feature,
    )
    config = config.copy(scoring_factors=scoring_factors)

    if args.sequential:
        config = config.copy(use_parallelism=False)
    if images is not None:
        config = config.copy(desired_relative_weight_sum=sum(image.desired_relative_weight for image in images))
    return config


def run_from_args(args: argparse.Namespace) -> Path:
    """
    Execute a full collage run.

    Returns:
        Path of the rendered collage
    """
    from .image_scanner import read_source_images
    from .renderer import render_image
    from .runner import run_collage

    start_time = time.time()

    config = config_from_args(args)
    images = read_source_images(args.path, config.feature_images)
    config = config_from_args(args, images)
    print_config_summary(config)

    result = run_collage(config, images)

    output_name = args.output or Path(args.path).resolve().name
    output_path = render_image(output_name, result.individual)
    print(f"  ✓ Collage: {output_path}")

    if args.print_tree:
        from .tree_printer import print_tree
        print_tree(result.individual.root_node)

    if args.plot:
        import matplotlib
        matplotlib.use('Agg')
        from .visualization import LayoutVisualizer

        plot_path = LayoutVisualizer(result.individual).save_plot(f"{output_name}_layout.png")
        print(f"  ✓ Plot: {plot_path}")

    print(f"Total execution time: {time.time() - start_time:.3f} seconds")
    return output_path


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with command-line argument parsing"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        run_from_args(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 1
    except (ConfigurationError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1
    return 0
