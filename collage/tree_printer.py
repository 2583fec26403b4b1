"""
Textual pre-order dump of a layout tree, for debugging.
"""

import sys
from typing import List, TextIO

from .nodes import ImageNode, LayoutNode, Node


def format_tree(root: Node) -> str:
    """
    Format a tree as indented lines with box drawing connectors.

    Layout nodes show their direction and dimension, image nodes their file
    name and size.
    """
    lines: List[str] = []
    _format_node(lines, "", "", root, False)
    return "\n".join(lines)


def _format_node(lines: List[str], padding: str, pointer: str, node: Node, has_right_sibling: bool) -> None:
    if isinstance(node, LayoutNode):
        lines.append(f"{padding}{pointer}{node.slicing_direction.value}: {node.dimension}")
        child_padding = padding + ("│  " if has_right_sibling else "   ")
        _format_node(lines, child_padding, "├──", node.left, True)
        _format_node(lines, child_padding, "└──", node.right, False)
    elif isinstance(node, ImageNode):
        lines.append(f"{padding}{pointer}{node.source_image.file_name} Size: {node!r}")
    else:
        raise TypeError(f"Invalid node type {node!r}")


def print_tree(root: Node, stream: TextIO = sys.stdout) -> None:
    """Print a tree to a stream"""
    print(f"Binary Tree:\n{format_tree(root)}", file=stream)
