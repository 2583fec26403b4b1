"""
Geometry value types for the collage layout model.

Dimensions, slicing directions, EXIF-style rotations and the immutable
description of a source image.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


DEFAULT_IMAGE_RELATIVE_WEIGHT = 1


@dataclass(frozen=True)
class Dimension:
    """Width and height in (fractional) pixels"""
    width: float
    height: float

    @property
    def width_as_int(self) -> int:
        return round(self.width)

    @property
    def height_as_int(self) -> int:
        return round(self.height)

    @property
    def area(self) -> float:
        return self.width * self.height

    def scaled(self, factor: float) -> "Dimension":
        """Return this dimension multiplied by a scale factor"""
        return Dimension(self.width * factor, self.height * factor)

    def __str__(self) -> str:
        return f"{self.width_as_int}x{self.height_as_int}"


class SlicingDirection(Enum):
    """
    How a layout node splits its rectangle between its two children.

    V: children side by side, sharing the full height
    H: children stacked, sharing the full width
    """
    V = "V"
    H = "H"


class Rotation(Enum):
    """EXIF orientations as (degrees clockwise, mirrored)"""
    ROT_0 = (0, False)
    ROT_CW_90 = (90, False)
    ROT_180 = (180, False)
    ROT_CW_270 = (270, False)
    MIRROR_HORIZONTAL = (0, True)
    MIRROR_VERTICAL = (180, True)
    MIRROR_HORIZONTAL_ROT_270_CW = (270, True)
    MIRROR_HORIZONTAL_ROT_90_CW = (90, True)

    @property
    def degrees(self) -> int:
        return self.value[0]

    @property
    def mirrored(self) -> bool:
        return self.value[1]

    @property
    def swaps_dimensions(self) -> bool:
        """True for orientations that turn the stored image on its side"""
        return self.degrees in (90, 270)

    @classmethod
    def from_exif_orientation(cls, orientation: Optional[int]) -> "Rotation":
        """Map an EXIF orientation tag value (1-8) to a Rotation"""
        return _EXIF_ORIENTATIONS.get(orientation, cls.ROT_0)


_EXIF_ORIENTATIONS = {
    1: Rotation.ROT_0,
    2: Rotation.MIRROR_HORIZONTAL,
    3: Rotation.ROT_180,
    4: Rotation.MIRROR_VERTICAL,
    5: Rotation.MIRROR_HORIZONTAL_ROT_270_CW,
    6: Rotation.ROT_CW_90,
    7: Rotation.MIRROR_HORIZONTAL_ROT_90_CW,
    8: Rotation.ROT_CW_270,
}


@dataclass(frozen=True)
class SourceImage:
    """
    An image to be placed in the collage.

    Attributes:
        file_name: Path of the image file
        dimension: Original pixel dimension (already swapped for EXIF rotation)
        desired_relative_weight: Relative size wish; > 1 marks a feature image
        rotation: EXIF orientation the renderer must apply
    """
    file_name: str
    dimension: Dimension
    desired_relative_weight: int = DEFAULT_IMAGE_RELATIVE_WEIGHT
    rotation: Rotation = Rotation.ROT_0

    def __post_init__(self):
        if self.dimension.width <= 0 or self.dimension.height <= 0:
            raise ValueError(f"Image {self.file_name} must have a positive dimension, got {self.dimension}")
        if self.desired_relative_weight <= 0:
            raise ValueError(
                f"Image {self.file_name} must have a positive relative weight, got {self.desired_relative_weight}"
            )

    @property
    def aspect_ratio(self) -> float:
        return self.dimension.width / self.dimension.height

    @property
    def is_feature(self) -> bool:
        return self.desired_relative_weight > DEFAULT_IMAGE_RELATIVE_WEIGHT
