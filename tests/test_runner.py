"""
Integration tests for the collage runner and command line interface
"""

import contextlib
import io
import math
import unittest
import tempfile
import shutil
import sys
from pathlib import Path

import numpy as np
from PIL import Image

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from collage.cli import build_parser, config_from_args, main
from collage.config_loader import CollageConfig, FeatureImage, ScoringFactors
from collage.geometry import Dimension, SourceImage
from collage.layout_solution import LayoutSolution
from collage.runner import run_collage, validate_inputs


class TestRunCollage(unittest.TestCase):
    """Test a complete layout search on small inputs"""

    def setUp(self):
        self.images = [
            SourceImage("landscape.png", Dimension(400.0, 300.0)),
            SourceImage("portrait.png", Dimension(300.0, 400.0)),
            SourceImage("square.png", Dimension(300.0, 300.0)),
            SourceImage("wide.png", Dimension(600.0, 200.0)),
            SourceImage("feature.png", Dimension(500.0, 500.0), 2),
        ]
        self.config = CollageConfig(
            target_width=800,
            target_height=600,
            desired_relative_weight_sum=6,
            population_size=20,
            num_generations=5,
            use_parallelism=False
        )

    def test_run_collage(self):
        result = run_collage(self.config, self.images, np.random.default_rng(1), verbose=False)

        self.assertIsInstance(result.individual, LayoutSolution)
        self.assertTrue(math.isfinite(result.score))
        self.assertEqual(len(result.individual.image_nodes()), len(self.images))
        self.assertAlmostEqual(result.individual.evaluate().score, result.score)

    def test_seeded_runs_are_reproducible(self):
        config = self.config.copy(random_seed=123)
        first = run_collage(config, self.images, verbose=False)
        second = run_collage(config.copy(use_parallelism=True, max_workers=2), self.images, verbose=False)
        self.assertEqual(first.score, second.score)

    def test_validate_inputs(self):
        with self.assertRaises(ValueError):
            validate_inputs(self.config, self.images[:1])
        with self.assertRaises(ValueError):
            validate_inputs(self.config.copy(desired_relative_weight_sum=0), self.images)
        with self.assertRaises(ValueError):
            validate_inputs(self.config.copy(population_size=0), self.images)
        validate_inputs(self.config, self.images)


class TestCommandLine(unittest.TestCase):
    """Test argument parsing and a full command line run"""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.image_dir = self.temp_dir / "photos"
        self.image_dir.mkdir()
        for name, size, color in [
            ("one.png", (60, 40), "red"),
            ("two.png", (40, 60), "blue"),
            ("three.png", (50, 50), "yellow"),
        ]:
            Image.new("RGB", size, color).save(self.image_dir / name)
        self.parser = build_parser()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_parse_feature_images(self):
        args = self.parser.parse_args([str(self.image_dir), "one.png:3", "two.png:2"])
        self.assertEqual(args.feature_images, [FeatureImage("one.png", 3), FeatureImage("two.png", 2)])

    def test_bad_feature_image_argument(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                self.parser.parse_args([str(self.image_dir), "one.png-3"])

    def test_config_from_args(self):
        config_path = self.temp_dir / "config.yaml"
        config_path.write_text("canvas:\n  width: 640\n  height: 480\nscoring:\n  canvas_coverage: 3.0\n")
        args = self.parser.parse_args([
            str(self.image_dir), "one.png:3",
            "--config", str(config_path),
            "-H", "400", "-bc", "ff0000", "-cf", "0.5", "--sequential",
        ])
        images = [SourceImage("one.png", Dimension(1.0, 1.0), 3), SourceImage("two.png", Dimension(1.0, 1.0))]

        config = config_from_args(args, images)
        self.assertEqual((config.target_width, config.target_height), (640, 400))
        self.assertEqual(config.border_color, (255, 0, 0))
        self.assertEqual(config.scoring_factors, ScoringFactors(3.0, 1.0, 0.5))
        self.assertEqual(config.feature_images, [FeatureImage("one.png", 3)])
        self.assertFalse(config.use_parallelism)
        self.assertEqual(config.desired_relative_weight_sum, 4)

    def test_out_of_range_arguments_rejected(self):
        for arguments in [
            ["-W", "0"],
            ["-H", "-10"],
            ["-msf", "0"],
            ["-bw", "-1"],
            ["-pop", "0"],
            ["-gen", "0"],
            ["-mp", "1.5"],
        ]:
            with self.subTest(arguments=arguments):
                with contextlib.redirect_stderr(io.StringIO()):
                    with self.assertRaises(SystemExit):
                        main([str(self.image_dir)] + arguments)

    def test_zero_border_width_accepted(self):
        args = self.parser.parse_args([str(self.image_dir), "-bw", "0", "-msf", "0.5"])
        config = config_from_args(args)
        self.assertEqual(config.border_width, 0)
        self.assertEqual(config.max_scale_factor, 0.5)

    def test_invalid_values_from_config_file_fail(self):
        config_path = self.temp_dir / "config.yaml"
        config_path.write_text("scaling:\n  max_scale_factor: abc\n")

        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            exit_code = main([str(self.image_dir), "--config", str(config_path)])

        self.assertEqual(exit_code, 1)
        self.assertIn("Max scale factor must be positive", output.getvalue())

    def test_full_run(self):
        output_name = self.temp_dir / "collage"
        with contextlib.redirect_stdout(io.StringIO()):
            exit_code = main([
                str(self.image_dir), "three.png:2",
                "-o", str(output_name),
                "-W", "200", "-H", "100",
                "-pop", "6", "-gen", "3",
                "--seed", "1", "--sequential", "--print-tree",
            ])

        self.assertEqual(exit_code, 0)
        with Image.open(self.temp_dir / "collage.png") as written:
            self.assertEqual(written.size, (200, 100))

    def test_missing_directory_fails(self):
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            exit_code = main([str(self.temp_dir / "missing")])

        self.assertEqual(exit_code, 1)
        self.assertIn("Error:", output.getvalue())

    def test_too_few_images_fails(self):
        single_dir = self.temp_dir / "single"
        single_dir.mkdir()
        Image.new("RGB", (10, 10)).save(single_dir / "only.png")

        with contextlib.redirect_stdout(io.StringIO()):
            exit_code = main([str(single_dir), "--sequential"])
        self.assertEqual(exit_code, 1)


if __name__ == '__main__':
    unittest.main()
