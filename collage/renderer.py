"""
Collage rendering.

Walks a scored layout tree, computes the absolute position of every image
node and composites the scaled source images onto a canvas.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Union
import time

from PIL import Image, ImageDraw

from .geometry import Rotation, SlicingDirection
from .layout_solution import LayoutSolution
from .nodes import ImageNode, LayoutNode, Node


# Transpose operation that undoes each EXIF orientation
_ORIENTATION_TRANSPOSES = {
    Rotation.MIRROR_HORIZONTAL: Image.Transpose.FLIP_LEFT_RIGHT,
    Rotation.ROT_180: Image.Transpose.ROTATE_180,
    Rotation.MIRROR_VERTICAL: Image.Transpose.FLIP_TOP_BOTTOM,
    Rotation.MIRROR_HORIZONTAL_ROT_270_CW: Image.Transpose.TRANSPOSE,
    Rotation.ROT_CW_90: Image.Transpose.ROTATE_270,
    Rotation.MIRROR_HORIZONTAL_ROT_90_CW: Image.Transpose.TRANSVERSE,
    Rotation.ROT_CW_270: Image.Transpose.ROTATE_90,
}


@dataclass
class RenderNode:
    """An image node with its absolute (rounded) canvas position"""
    x_offset: int
    y_offset: int
    image_node: ImageNode


def collect_render_nodes(node: Node, x_offset: float = 0.0, y_offset: float = 0.0) -> List[RenderNode]:
    """
    Compute absolute positions for all image nodes of a scored tree.

    The left child sits at the parent's offset; the right child is moved by
    the left child's width (V) or height (H).
    """
    if isinstance(node, ImageNode):
        return [RenderNode(round(x_offset), round(y_offset), node)]

    if not isinstance(node, LayoutNode):
        raise TypeError(f"Invalid node type {node!r}")

    render_nodes = collect_render_nodes(node.left, x_offset, y_offset)
    if node.slicing_direction == SlicingDirection.V:
        render_nodes += collect_render_nodes(node.right, x_offset + node.left.dimension.width, y_offset)
    else:
        render_nodes += collect_render_nodes(node.right, x_offset, y_offset + node.left.dimension.height)
    return render_nodes


def apply_rotation(image: Image.Image, rotation: Rotation) -> Image.Image:
    """Return the image as it should be displayed for its EXIF rotation"""
    transpose = _ORIENTATION_TRANSPOSES.get(rotation)
    if transpose is None:
        return image
    return image.transpose(transpose)


class CollageRenderer:
    """Composites the images of a scored layout solution onto a canvas"""

    def __init__(self, solution: LayoutSolution, background=(0, 0, 0)):
        self.solution = solution
        self.background = background

    def render(self, verbose: bool = False) -> Image.Image:
        """
        Render the collage.

        Returns:
            RGB image of the configured target size
        """
        config = self.solution.config
        start_time = time.time()
        if verbose:
            print("\nBuilding image composition", end="", flush=True)

        canvas = Image.new("RGB", (config.target_width, config.target_height), self.background)
        for render_node in collect_render_nodes(self.solution.root_node):
            if verbose:
                print(".", end="", flush=True)
            self.render_node(canvas, render_node)

        if verbose:
            print(f"\nTotal composition time {time.time() - start_time:.3f} seconds")
        return canvas

    def render_node(self, canvas: Image.Image, render_node: RenderNode) -> None:
        """Scale, rotate and paste one image, then draw its border"""
        image_node = render_node.image_node
        width = max(image_node.dimension.width_as_int, 1)
        height = max(image_node.dimension.height_as_int, 1)

        with Image.open(image_node.source_image.file_name) as source:
            image = apply_rotation(source.convert("RGB"), image_node.source_image.rotation)
            image = image.resize((width, height), Image.Resampling.LANCZOS)
        canvas.paste(image, (render_node.x_offset, render_node.y_offset))

        self.draw_border(canvas, render_node, width, height)

    def draw_border(self, canvas: Image.Image, render_node: RenderNode, width: int, height: int) -> None:
        config = self.solution.config
        if config.border_width <= 0:
            return
        ImageDraw.Draw(canvas).rectangle(
            [
                render_node.x_offset,
                render_node.y_offset,
                render_node.x_offset + width - 1,
                render_node.y_offset + height - 1,
            ],
            outline=tuple(config.border_color),
            width=config.border_width
        )


def render_image(output_name: Union[str, Path], solution: LayoutSolution, verbose: bool = True) -> Path:
    """
    Render a solution and save it as '<output_name>.png'.

    Returns:
        Path to the written file
    """
    output_path = Path(f"{output_name}.png")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    CollageRenderer(solution).render(verbose=verbose).save(output_path, "PNG")
    return output_path
