"""
Conversions between layout space and render space.

Layout space (what the layout engine writes):
- center: vertical position of the node's center
- left_edge: horizontal position of the node's left edge

Render space (what the drawing surface uses): top-left anchored boxes.
- render_x = left_edge + offset
- render_y = center + offset - height / 2

All functions are pure and keep no state.
"""

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class NodeBounds:
    """A node's render-space rectangle."""
    x: float
    y: float
    right: float
    bottom: float
    width: float
    height: float

    def to_dict(self) -> dict:
        return asdict(self)

    def contains(self, px: float, py: float) -> bool:
        """Hit test, edges inclusive."""
        return self.x <= px <= self.right and self.y <= py <= self.bottom


def to_render_x(layout_edge: float, offset: float = 0) -> float:
    """Horizontal axis maps directly."""
    return layout_edge + offset


def to_render_y(layout_center: float, node_height: float, offset: float = 0) -> float:
    """Center to top edge."""
    return layout_center + offset - node_height / 2


def from_render_y(render_y: float, node_height: float, offset: float = 0) -> float:
    """Top edge back to center; inverse of to_render_y."""
    return render_y - offset + node_height / 2


def right_edge(
    layout_edge: float,
    width: float,
    padding: float,
    line_gap: float,
    offset: float = 0
) -> float:
    """Connector anchor just inside a node's right border."""
    return layout_edge + width - padding + line_gap + offset


def left_edge(
    layout_edge: float,
    padding: float,
    line_gap: float,
    offset: float = 0
) -> float:
    """Connector anchor just inside a node's left border."""
    return layout_edge + padding - line_gap + offset


def bounds_of(render_x: float, render_y: float, width: float, height: float) -> NodeBounds:
    return NodeBounds(
        x=render_x,
        y=render_y,
        right=render_x + width,
        bottom=render_y + height,
        width=width,
        height=height,
    )


def vertical_distance(center1: float, center2: float) -> float:
    return abs(center1 - center2)


def gap_between(center1: float, height1: float, center2: float, height2: float) -> float:
    """
    Signed clear distance from the bottom of node 1 to the top of node 2.

    Positive is a clear gap, zero is touching, negative is overlap depth.
    """
    bottom1 = center1 + height1 / 2
    top2 = center2 - height2 / 2
    return top2 - bottom1


def overlaps(
    center1: float,
    height1: float,
    center2: float,
    height2: float,
    min_gap: float = 0
) -> bool:
    """
    Whether two vertical intervals come closer than `min_gap`.

    Symmetric. Exact touching with min_gap == 0 is not an overlap.
    """
    top1 = center1 - height1 / 2
    bottom1 = center1 + height1 / 2
    top2 = center2 - height2 / 2
    bottom2 = center2 + height2 / 2
    return not (bottom1 + min_gap <= top2 or bottom2 + min_gap <= top1)


def create_transform(
    layout_center: float,
    layout_edge: float,
    width: float,
    height: float,
    offset_x: float = 0,
    offset_y: float = 0
) -> str:
    """SVG transform placing a node group at its render position."""
    x = to_render_x(layout_edge, offset_x)
    y = to_render_y(layout_center, height, offset_y)
    return f"translate({format_number(x)}, {format_number(y)})"


def format_number(value: float) -> str:
    """Shortest text for a coordinate: integral values lose the '.0'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
