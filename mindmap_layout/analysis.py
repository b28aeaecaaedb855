"""
Layout analysis - Extents and per-depth statistics of a laid-out tree.

Used by hosts to size the drawing surface and centre the map in it.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .coordinates import to_render_x, to_render_y

if TYPE_CHECKING:
    from .models import MindMapTree


DEFAULT_CANVAS_MARGIN = 40


@dataclass
class DepthStats:
    """Statistics for one depth level."""
    depth: int
    count: int = 0
    total_width: float = 0.0
    max_height: float = 0.0

    @property
    def average_width(self) -> float:
        return self.total_width / self.count if self.count else 0.0


@dataclass
class LayoutExtent:
    """Render-space bounding box of all nodes (zero offsets)."""
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass
class LayoutSummary:
    """Complete summary of a laid-out tree."""
    total_nodes: int
    max_depth: int
    leaf_count: int
    extent: LayoutExtent
    depths: list[DepthStats] = field(default_factory=list)
    canvas_width: float = 0.0
    canvas_height: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_nodes": self.total_nodes,
            "max_depth": self.max_depth,
            "leaf_count": self.leaf_count,
            "extent": {
                "left": self.extent.left,
                "top": self.extent.top,
                "right": self.extent.right,
                "bottom": self.extent.bottom,
                "width": self.extent.width,
                "height": self.extent.height,
            },
            "depths": [
                {
                    "depth": d.depth,
                    "count": d.count,
                    "average_width": d.average_width,
                    "max_height": d.max_height,
                }
                for d in self.depths
            ],
            "canvas": {"width": self.canvas_width, "height": self.canvas_height},
            "offset": {"x": self.offset_x, "y": self.offset_y},
        }


def layout_extent(tree: "MindMapTree") -> LayoutExtent:
    """
    Bounding box of every node in render space with zero offsets.

    Args:
        tree: A tree whose positions and dimensions are set

    Returns:
        LayoutExtent covering all node boxes
    """
    lefts, tops, rights, bottoms = [], [], [], []
    for node in tree.walk():
        x = to_render_x(node.left_edge)
        y = to_render_y(node.center, node.height)
        lefts.append(x)
        tops.append(y)
        rights.append(x + node.width)
        bottoms.append(y + node.height)

    return LayoutExtent(left=min(lefts), top=min(tops), right=max(rights), bottom=max(bottoms))


def depth_statistics(tree: "MindMapTree") -> list[DepthStats]:
    """Count, width and height statistics for each depth, shallowest first."""
    stats: dict[int, DepthStats] = {}
    for node in tree.walk():
        entry = stats.setdefault(node.depth, DepthStats(depth=node.depth))
        entry.count += 1
        entry.total_width += node.width
        entry.max_height = max(entry.max_height, node.height)
    return [stats[d] for d in sorted(stats)]


def summarize_layout(tree: "MindMapTree", margin: float = DEFAULT_CANVAS_MARGIN) -> LayoutSummary:
    """
    Summarize a laid-out tree and recommend a canvas.

    The canvas is the extent plus `margin` on every side; the offsets are
    what to pass as offset_x/offset_y to the coordinate functions so the
    map's top-left corner lands at (margin, margin).

    Args:
        tree: A tree whose positions and dimensions are set
        margin: Empty border around the map, in pixels

    Returns:
        LayoutSummary
    """
    extent = layout_extent(tree)
    nodes = list(tree.walk())

    return LayoutSummary(
        total_nodes=len(nodes),
        max_depth=max(n.depth for n in nodes),
        leaf_count=sum(1 for n in nodes if n.is_leaf),
        extent=extent,
        depths=depth_statistics(tree),
        canvas_width=extent.width + margin * 2,
        canvas_height=extent.height + margin * 2,
        offset_x=margin - extent.left,
        offset_y=margin - extent.top,
    )
