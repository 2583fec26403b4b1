"""
Source image discovery.

Scans a directory for png and jpeg files and reads their pixel dimensions
and EXIF orientation without decoding the full image.
"""

from pathlib import Path
from typing import List, Sequence, Tuple, Union
import time

from PIL import Image, UnidentifiedImageError

from .config_loader import FeatureImage
from .geometry import DEFAULT_IMAGE_RELATIVE_WEIGHT, Dimension, Rotation, SourceImage


SOURCE_IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png"}
EXIF_ORIENTATION_TAG = 274


def list_image_files(directory: Union[str, Path]) -> List[Path]:
    """
    List png and jpeg files in a directory (not recursive), sorted by name.

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path is not a directory
    """
    directory = Path(directory)
    if not directory.exists():
        raise FileNotFoundError(f"Image directory not found: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Image path is not a directory: {directory}")

    return sorted(
        path for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() in SOURCE_IMAGE_SUFFIXES
    )


def get_image_metadata(image_path: Union[str, Path]) -> Tuple[Dimension, Rotation]:
    """
    Read the displayed dimension and EXIF rotation of an image file.

    The dimension is swapped for orientations rotated by 90 or 270 degrees,
    so it always describes the image as it should be shown.

    Raises:
        ValueError: If the file is not a readable image
    """
    try:
        with Image.open(image_path) as image:
            width, height = image.size
            orientation = image.getexif().get(EXIF_ORIENTATION_TAG)
    except UnidentifiedImageError as e:
        raise ValueError(f"Not a readable image: {image_path}") from e

    rotation = Rotation.from_exif_orientation(orientation)
    if rotation.swaps_dimensions:
        return Dimension(float(height), float(width)), rotation
    return Dimension(float(width), float(height)), rotation


def read_source_images(
    directory: Union[str, Path],
    feature_images: Sequence[FeatureImage] = (),
    verbose: bool = True
) -> List[SourceImage]:
    """
    Scan a directory and build SourceImages for every image found.

    Args:
        directory: Directory containing the source images
        feature_images: Images (by file name) that get a custom relative weight
        verbose: Print progress

    Returns:
        List of SourceImage objects
    """
    weights = {feature_image.name: feature_image.relative_weight for feature_image in feature_images}

    start_time = time.time()
    if verbose:
        print("\nScanning images", end="", flush=True)

    source_images = []
    for image_path in list_image_files(directory):
        if verbose:
            print(".", end="", flush=True)
        dimension, rotation = get_image_metadata(image_path)
        source_images.append(
            SourceImage(
                file_name=str(image_path),
                dimension=dimension,
                desired_relative_weight=weights.get(image_path.name, DEFAULT_IMAGE_RELATIVE_WEIGHT),
                rotation=rotation
            )
        )

    if verbose:
        print(f"\nScanning {len(source_images)} images took {time.time() - start_time:.3f} seconds")

    return source_images
