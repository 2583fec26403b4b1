"""
Debug Visualization for Collage Layouts

Draws the rectangles of a scored layout with matplotlib instead of the
actual images: feature images are highlighted and every rectangle is
labelled with its file name and its original -> realized size.
"""

import matplotlib.pyplot as plt
import matplotlib.patches as patches
from pathlib import Path
from typing import Optional, Tuple

from .layout_solution import LayoutSolution
from .renderer import collect_render_nodes


class LayoutVisualizer:
    """Visualization of a layout solution's geometry"""

    def __init__(self, solution: LayoutSolution):
        self.solution = solution
        self.colors = {
            "feature": "gold",
            "regular": "orange",
            "border": "white",
            "canvas": "black",
        }

    def plot_layout(self, ax: Optional[plt.Axes] = None, show_labels: bool = True) -> plt.Axes:
        """
        Draw every image node as a filled rectangle on the canvas.

        Args:
            ax: Axes to draw on (a new figure is created if None)
            show_labels: Whether to label each rectangle

        Returns:
            The axes drawn on
        """
        config = self.solution.config
        if ax is None:
            _, ax = plt.subplots(figsize=(10, 10 * config.target_height / config.target_width))

        ax.add_patch(patches.Rectangle(
            (0, 0), config.target_width, config.target_height,
            facecolor=self.colors["canvas"], edgecolor="none"
        ))

        for render_node in collect_render_nodes(self.solution.root_node):
            image_node = render_node.image_node
            source_image = image_node.source_image
            color = self.colors["feature"] if source_image.is_feature else self.colors["regular"]

            ax.add_patch(patches.Rectangle(
                (render_node.x_offset, render_node.y_offset),
                image_node.dimension.width,
                image_node.dimension.height,
                facecolor=color,
                edgecolor=self.colors["border"],
                linewidth=max(config.border_width, 1) * 0.5
            ))

            if show_labels:
                ax.text(
                    render_node.x_offset + image_node.dimension.width / 2,
                    render_node.y_offset + image_node.dimension.height / 2,
                    f"{Path(source_image.file_name).name}\n{source_image.dimension} -> {image_node.dimension}",
                    ha="center", va="center", fontsize=6
                )

        ax.set_xlim(0, config.target_width)
        ax.set_ylim(config.target_height, 0)
        ax.set_aspect("equal")
        ax.set_title(f"Layout score {self.solution.score:.4f}")
        ax.set_xticks([])
        ax.set_yticks([])
        return ax

    def save_plot(self, save_path: str, figsize: Tuple[int, int] = (12, 8), dpi: int = 150) -> str:
        """Plot the layout and save it to a file"""
        fig, ax = plt.subplots(figsize=figsize)
        self.plot_layout(ax)
        plt.tight_layout()
        fig.savefig(save_path, dpi=dpi, bbox_inches="tight")
        plt.close(fig)
        return save_path
