"""
Tests for the geometry value types
"""

import unittest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from collage.geometry import Dimension, Rotation, SlicingDirection, SourceImage


class TestDimension(unittest.TestCase):
    """Test Dimension functionality"""

    def test_rounded_sides(self):
        dimension = Dimension(200.0, 133.333)
        self.assertEqual(dimension.width_as_int, 200)
        self.assertEqual(dimension.height_as_int, 133)
        self.assertEqual(str(dimension), "200x133")

    def test_area_and_scaling(self):
        dimension = Dimension(300.0, 200.0)
        self.assertEqual(dimension.area, 60000.0)
        self.assertEqual(dimension.scaled(0.5), Dimension(150.0, 100.0))


class TestRotation(unittest.TestCase):
    """Test EXIF orientation mapping"""

    def test_from_exif_orientation(self):
        self.assertEqual(Rotation.from_exif_orientation(1), Rotation.ROT_0)
        self.assertEqual(Rotation.from_exif_orientation(3), Rotation.ROT_180)
        self.assertEqual(Rotation.from_exif_orientation(6), Rotation.ROT_CW_90)
        self.assertEqual(Rotation.from_exif_orientation(8), Rotation.ROT_CW_270)

    def test_missing_or_unknown_orientation(self):
        self.assertEqual(Rotation.from_exif_orientation(None), Rotation.ROT_0)
        self.assertEqual(Rotation.from_exif_orientation(42), Rotation.ROT_0)

    def test_swaps_dimensions(self):
        self.assertTrue(Rotation.ROT_CW_90.swaps_dimensions)
        self.assertTrue(Rotation.MIRROR_HORIZONTAL_ROT_270_CW.swaps_dimensions)
        self.assertFalse(Rotation.ROT_180.swaps_dimensions)
        self.assertFalse(Rotation.MIRROR_HORIZONTAL.swaps_dimensions)
        self.assertTrue(Rotation.MIRROR_VERTICAL.mirrored)


class TestSourceImage(unittest.TestCase):
    """Test SourceImage functionality"""

    def test_aspect_ratio(self):
        image = SourceImage("a.png", Dimension(300.0, 200.0))
        self.assertAlmostEqual(image.aspect_ratio, 1.5)

    def test_feature_image(self):
        self.assertFalse(SourceImage("a.png", Dimension(10.0, 10.0)).is_feature)
        self.assertTrue(SourceImage("b.png", Dimension(10.0, 10.0), 2).is_feature)

    def test_invalid_dimension(self):
        with self.assertRaises(ValueError):
            SourceImage("a.png", Dimension(0.0, 10.0))

    def test_invalid_weight(self):
        with self.assertRaises(ValueError):
            SourceImage("a.png", Dimension(10.0, 10.0), 0)

    def test_slicing_direction_values(self):
        self.assertEqual(SlicingDirection.V.value, "V")
        self.assertEqual(SlicingDirection.H.value, "H")


if __name__ == '__main__':
    unittest.main()
