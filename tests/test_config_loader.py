"""
Tests for configuration loading and argument parsing helpers
"""

import unittest
import tempfile
import shutil
import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from collage.config_loader import (
    CollageConfig,
    ConfigurationError,
    FeatureImage,
    ScoringFactors,
    create_collage_config,
    load_collage_config,
    load_config,
    parse_color,
    parse_feature_image,
    validate_config,
    validate_collage_config,
)


class TestFeatureImageParsing(unittest.TestCase):
    """Test parsing of 'name:weight' feature image arguments"""

    def test_parse_simple_name(self):
        self.assertEqual(parse_feature_image("image-1.png:3"), FeatureImage("image-1.png", 3))

    def test_parse_numeric_name(self):
        self.assertEqual(parse_feature_image("1:341"), FeatureImage("1", 341))

    def test_parse_name_with_special_characters(self):
        feature = parse_feature_image("_-img.special.åäö-2(2).png1.png:12")
        self.assertEqual(feature.name, "_-img.special.åäö-2(2).png1.png")
        self.assertEqual(feature.relative_weight, 12)

    def test_reject_bad_input(self):
        with self.assertRaises(ValueError) as context:
            parse_feature_image("Image-1.png-3")
        self.assertEqual(str(context.exception), "Bad feature image input 'Image-1.png-3'")

    def test_reject_zero_weight(self):
        with self.assertRaises(ValueError):
            parse_feature_image("image.png:0")


class TestColorParsing(unittest.TestCase):
    """Test hexadecimal color parsing"""

    def test_parse_colors(self):
        self.assertEqual(parse_color("ffffff"), (255, 255, 255))
        self.assertEqual(parse_color("#ff0000"), (255, 0, 0))
        self.assertEqual(parse_color("00A0fF"), (0, 160, 255))

    def test_reject_invalid_colors(self):
        for value in ["fff", "gggggg", "ff00ff00", ""]:
            with self.assertRaises(ValueError):
                parse_color(value)


class TestCollageConfig(unittest.TestCase):
    """Test CollageConfig helpers"""

    def test_defaults(self):
        config = CollageConfig()
        self.assertEqual((config.target_width, config.target_height), (1920, 1080))
        self.assertEqual(config.border_color, (255, 255, 255))
        self.assertEqual(config.scoring_factors, ScoringFactors(1.0, 1.0, 1.0))
        self.assertEqual(config.canvas_area, 1920.0 * 1080.0)

    def test_copy_replaces_fields(self):
        config = CollageConfig()
        copied = config.copy(target_width=800, desired_relative_weight_sum=5)
        self.assertEqual(copied.target_width, 800)
        self.assertEqual(copied.desired_relative_weight_sum, 5)
        self.assertEqual(config.target_width, 1920)

    def test_feature_weight(self):
        config = CollageConfig(feature_images=[FeatureImage("a.png", 4)])
        self.assertEqual(config.feature_weight("a.png"), 4)
        self.assertIsNone(config.feature_weight("b.png"))


class TestConfigLoading(unittest.TestCase):
    """Test loading YAML configuration files"""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def write_config(self, text):
        path = self.temp_dir / "config.yaml"
        path.write_text(text)
        return str(path)

    def test_load_full_config(self):
        path = self.write_config(
            "canvas:\n"
            "  width: 800\n"
            "  height: 600\n"
            "border:\n"
            "  width: 4\n"
            "  color: '#000000'\n"
            "genetic:\n"
            "  population_size: 50\n"
            "  num_generations: 10\n"
            "  mutation_probability: 0.5\n"
            "  random_seed: 7\n"
            "scoring:\n"
            "  centered_feature: 0.0\n"
            "feature_images:\n"
            "  - 'a.png:3'\n"
            "  - name: b.png\n"
            "    weight: 2\n"
        )
        config = load_collage_config(path)

        self.assertEqual((config.target_width, config.target_height), (800, 600))
        self.assertEqual(config.border_width, 4)
        self.assertEqual(config.border_color, (0, 0, 0))
        self.assertEqual(config.population_size, 50)
        self.assertEqual(config.num_generations, 10)
        self.assertEqual(config.mutation_probability, 0.5)
        self.assertEqual(config.random_seed, 7)
        self.assertEqual(config.scoring_factors, ScoringFactors(1.0, 1.0, 0.0))
        self.assertEqual(config.feature_images, [FeatureImage("a.png", 3), FeatureImage("b.png", 2)])

    def test_empty_file_gives_defaults(self):
        path = self.write_config("")
        self.assertEqual(load_collage_config(path), CollageConfig())

    def test_overrides_take_precedence(self):
        path = self.write_config("canvas:\n  width: 800\n  height: 600\n")
        config = load_collage_config(path, target_width=1024, target_height=None)
        self.assertEqual(config.target_width, 1024)
        self.assertEqual(config.target_height, 600)

    def test_unknown_override_rejected(self):
        with self.assertRaises(ConfigurationError):
            create_collage_config({}, canvas_depth=3)

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError):
            load_config(str(self.temp_dir / "missing.yaml"))

    def test_invalid_yaml(self):
        path = self.write_config("canvas: [width: 800\n")
        with self.assertRaises(ConfigurationError):
            load_config(path)

    def test_invalid_values_rejected(self):
        path = self.write_config("canvas:\n  width: -5\ngenetic:\n  mutation_probability: 2.0\n")
        with self.assertRaises(ConfigurationError):
            load_collage_config(path)

    def test_out_of_range_overrides_rejected(self):
        for overrides in [
            {"target_width": 0},
            {"target_height": -1},
            {"max_scale_factor": 0.0},
            {"border_width": -2},
            {"population_size": 0},
            {"num_generations": 0},
            {"mutation_probability": 1.5},
        ]:
            with self.subTest(overrides=overrides):
                with self.assertRaises(ConfigurationError):
                    create_collage_config({}, **overrides)

    def test_bad_feature_image_rejected(self):
        with self.assertRaises(ConfigurationError):
            create_collage_config({"feature_images": ["a.png-3"]})


class TestValidateConfig(unittest.TestCase):
    """Test configuration validation"""

    def test_valid_config(self):
        self.assertEqual(validate_config({"canvas": {"width": 100, "height": 100}}), [])

    def test_reports_each_issue(self):
        issues = validate_config({
            "canvas": {"width": 0},
            "border": {"width": -1},
            "genetic": {"population_size": 0, "selection_fraction": 0.0},
        })
        self.assertEqual(len(issues), 4)

    def test_non_numeric_values_reported(self):
        issues = validate_config({
            "scaling": {"max_scale_factor": "abc"},
            "genetic": {"mutation_probability": "abc", "selection_fraction": "abc"},
        })
        self.assertEqual(issues, [
            "Max scale factor must be positive",
            "Mutation probability must be between 0 and 1",
            "Selection fraction must be in (0, 1]",
        ])

    def test_validate_collage_config(self):
        self.assertEqual(validate_collage_config(CollageConfig()), [])
        issues = validate_collage_config(CollageConfig(target_width=0, max_scale_factor=0.0))
        self.assertEqual(len(issues), 2)

    def test_section_must_be_mapping(self):
        issues = validate_config({"canvas": [800, 600]})
        self.assertEqual(issues, ["Section 'canvas' must be a mapping"])


if __name__ == '__main__':
    unittest.main()
