"""
Connector geometry for parent -> child links.

Links leave the parent just inside its right border and enter the child
just inside its left border, both on the node's center line. Root to
level-one links are cubic Bezier curves; deeper links are orthogonal
paths with one rounded corner.
"""

from dataclasses import dataclass

from .coordinates import format_number, left_edge, right_edge, to_render_y
from .dimensions import DimensionCalculator
from .models import MindMapTree, Node

CUBIC_CONTROL_RATIO = 0.3
TURN_RATIO = 0.45
CORNER_RADIUS = 8
CORNER_RADIUS_RATIO = 0.4


@dataclass(frozen=True)
class ConnectionPoints:
    source_x: float
    source_y: float
    target_x: float
    target_y: float


@dataclass(frozen=True)
class LinkPath:
    """SVG path data for one link."""
    source_id: int
    target_id: int
    kind: str    # "cubic" or "rounded"
    d: str

    def to_dict(self) -> dict:
        return {"source": self.source_id, "target": self.target_id, "kind": self.kind, "d": self.d}


def connection_points(
    source: Node,
    target: Node,
    source_padding: float,
    target_padding: float,
    line_offset: float,
    offset_x: float = 0,
    offset_y: float = 0
) -> ConnectionPoints:
    """Render-space anchors for a link between two positioned nodes."""
    return ConnectionPoints(
        source_x=right_edge(source.left_edge, source.width, source_padding, line_offset, offset_x),
        source_y=to_render_y(source.center, 0, offset_y),
        target_x=left_edge(target.left_edge, target_padding, line_offset, offset_x),
        target_y=to_render_y(target.center, 0, offset_y),
    )


def cubic_path(points: ConnectionPoints) -> str:
    """Horizontal-tangent S curve between the anchors."""
    sx, sy, tx, ty = points.source_x, points.source_y, points.target_x, points.target_y
    dx = tx - sx
    c1x = sx + dx * CUBIC_CONTROL_RATIO
    c2x = tx - dx * CUBIC_CONTROL_RATIO
    return (
        f"M {_n(sx)},{_n(sy)} "
        f"C {_n(c1x)},{_n(sy)} {_n(c2x)},{_n(ty)} {_n(tx)},{_n(ty)}"
    )


def rounded_path(points: ConnectionPoints, corner_radius: float = CORNER_RADIUS) -> str:
    """Horizontal, vertical, rounded corner, horizontal."""
    sx, sy, tx, ty = points.source_x, points.source_y, points.target_x, points.target_y
    turn_x = sx + (tx - sx) * TURN_RATIO

    radius = min(
        corner_radius,
        abs(tx - turn_x) * CORNER_RADIUS_RATIO,
        abs(ty - sy) * CORNER_RADIUS_RATIO,
    )
    vertical_end_y = ty + (-radius if sy < ty else radius)
    corner_end_x = turn_x + (radius if tx > turn_x else -radius)

    return (
        f"M {_n(sx)},{_n(sy)} "
        f"L {_n(turn_x)},{_n(sy)} "
        f"L {_n(turn_x)},{_n(vertical_end_y)} "
        f"Q {_n(turn_x)},{_n(ty)} {_n(corner_end_x)},{_n(ty)} "
        f"L {_n(tx)},{_n(ty)}"
    )


def link_paths(
    tree: MindMapTree,
    calculator: DimensionCalculator,
    line_offset: float = 6,
    offset_x: float = 0,
    offset_y: float = 0
) -> list[LinkPath]:
    """
    Path data for every parent -> child link of a laid-out tree, pre-order.

    Paddings come from the calculator's dimensions so anchors agree with
    the boxes the renderer draws.
    """
    paths: list[LinkPath] = []
    for parent in tree.walk():
        if parent.is_leaf:
            continue
        parent_padding = calculator.dimensions_of(parent.depth, parent.text).padding
        for child in tree.children_of(parent.id):
            child_padding = calculator.dimensions_of(child.depth, child.text).padding
            points = connection_points(
                parent, child, parent_padding, child_padding, line_offset, offset_x, offset_y
            )
            if parent.depth == 0 and child.depth == 1:
                paths.append(LinkPath(parent.id, child.id, "cubic", cubic_path(points)))
            else:
                paths.append(LinkPath(parent.id, child.id, "rounded", rounded_path(points)))
    return paths


def _n(value: float) -> str:
    return format_number(value)
