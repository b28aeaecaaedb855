"""
Tree layout for mind maps.

Assigns every node a layout-space position:
- left_edge: sum of per-depth horizontal steps, each step adapted to the
  average node widths of the two depths it separates
- center: tidy-tree placement; leaves follow a running cursor, parents sit
  at the mean of their children, and sibling subtrees are shifted apart
  when their reserved per-depth extents collide

`compute_layout` runs the full pipeline: dimensions, positions, overlap
resolution. Layout is deterministic for a given tree, config and
measurement surface.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .config import AdaptiveSpacing, LayoutConfig, MindMapConfig
from .dimensions import DimensionCalculator
from .models import MindMapTree, Node
from .overlap import OverlapAdjustment, resolve_overlaps

logger = logging.getLogger(__name__)

# depth -> (reserved top, reserved bottom)
Contour = dict[int, tuple[float, float]]


@dataclass(frozen=True)
class NodePosition:
    """Layout-space position of a node."""
    center: float
    left_edge: float

    def to_dict(self) -> dict:
        return {"center": self.center, "left_edge": self.left_edge}


@dataclass
class LayoutResult:
    """Positions after layout and overlap resolution."""
    positions: dict[int, NodePosition] = field(default_factory=dict)
    steps: dict[int, float] = field(default_factory=dict)   # depth d -> step to d+1
    adjustments: list[OverlapAdjustment] = field(default_factory=list)
    converged: bool = True

    def to_dict(self) -> dict:
        return {
            "positions": {str(k): v.to_dict() for k, v in self.positions.items()},
            "steps": {str(k): v for k, v in self.steps.items()},
            "adjustments": [a.to_dict() for a in self.adjustments],
            "converged": self.converged,
        }


# --- Horizontal axis ---

def adaptive_step(source_avg_width: float, target_avg_width: float, spacing: AdaptiveSpacing) -> float:
    """Distance between two depth columns, clamped to the configured bounds."""
    step = (
        spacing.base_spacing
        + spacing.source_node_ratio * source_avg_width
        + spacing.target_node_ratio * target_avg_width
        + spacing.safety_margin
    )
    return min(max(step, spacing.min_spacing), spacing.max_spacing)


def average_widths(tree: MindMapTree) -> dict[int, float]:
    """Average node width for each depth present in the tree."""
    return {
        depth: sum(n.width for n in nodes) / len(nodes)
        for depth, nodes in tree.by_depth().items()
    }


def depth_steps(tree: MindMapTree, config: LayoutConfig) -> dict[int, float]:
    """Step from depth d to depth d+1, for every d below the deepest level."""
    averages = average_widths(tree)
    steps: dict[int, float] = {}
    for depth in range(max(averages) if averages else 0):
        if config.use_adaptive_spacing:
            steps[depth] = adaptive_step(
                averages[depth], averages[depth + 1], config.adaptive_horizontal_spacing
            )
        else:
            steps[depth] = config.horizontal_spacing
    return steps


def assign_left_edges(tree: MindMapTree, config: LayoutConfig) -> dict[int, float]:
    """Write left_edge for every node; returns the per-depth steps used."""
    steps = depth_steps(tree, config)
    edges = [0.0]
    for depth in range(len(steps)):
        edges.append(edges[-1] + steps[depth])

    for node in tree.walk():
        node.left_edge = edges[node.depth]

    logger.debug(f"Horizontal steps by depth: {steps}")
    return steps


# --- Vertical axis ---

class _VerticalPlacer:
    """Depth-first center assignment with subtree contour separation."""

    def __init__(self, tree: MindMapTree, config: LayoutConfig):
        self.tree = tree
        self.config = config
        self.gap = config.overlap_gap
        self.last_leaf: Optional[Node] = None

    def place(self, node_id: int) -> Contour:
        node = self.tree.nodes[node_id]
        if node.is_leaf:
            self._place_leaf(node)
            return {node.depth: self._reserved(node)}

        contour: Contour = {}
        for child_id in node.children:
            child_contour = self.place(child_id)
            shift = self._separation(contour, child_contour)
            if shift > 0:
                self._shift_subtree(child_id, shift)
                child_contour = {d: (top + shift, bottom + shift) for d, (top, bottom) in child_contour.items()}
            _merge_contour(contour, child_contour)

        centers = [self.tree.nodes[c].center for c in node.children]
        node.center = sum(centers) / len(centers)
        contour[node.depth] = self._reserved(node)
        return contour

    def _place_leaf(self, node: Node) -> None:
        previous = self.last_leaf
        if previous is None:
            node.center = 0.0
        else:
            advance = max(
                self.config.min_vertical_gap,
                (previous.height + node.height) / 2 + self.config.vertical_spacing,
            )
            node.center = previous.center + advance
        self.last_leaf = node

    def _reserved(self, node: Node) -> tuple[float, float]:
        buffer = self.config.node_height_buffer / 2
        return (node.top - buffer, node.bottom + buffer)

    def _separation(self, placed: Contour, incoming: Contour) -> float:
        """How far `incoming` must move down to clear `placed` at every shared depth."""
        shift = 0.0
        for depth, (top, _) in incoming.items():
            if depth in placed:
                shift = max(shift, placed[depth][1] + self.gap - top)
        return shift

    def _shift_subtree(self, node_id: int, delta: float) -> None:
        for node in self.tree.walk(node_id):
            node.center += delta


def _merge_contour(target: Contour, other: Contour) -> None:
    for depth, (top, bottom) in other.items():
        if depth in target:
            t, b = target[depth]
            target[depth] = (min(t, top), max(b, bottom))
        else:
            target[depth] = (top, bottom)


def assign_centers(tree: MindMapTree, config: LayoutConfig) -> None:
    """Write center for every node. A childless root sits at 0."""
    _VerticalPlacer(tree, config).place(tree.root_id)


def layout_tree(tree: MindMapTree, config: Optional[LayoutConfig] = None) -> dict[int, float]:
    """
    Position every node of a tree whose dimensions are already set.

    Args:
        tree: Tree with width/height written on each node (mutated in place)
        config: Layout configuration (desktop defaults if None)

    Returns:
        The per-depth horizontal steps that were applied
    """
    config = config or LayoutConfig()
    steps = assign_left_edges(tree, config)
    assign_centers(tree, config)
    return steps


# --- Pipeline ---

def compute_layout(
    tree: MindMapTree,
    config: Optional[MindMapConfig] = None,
    calculator: Optional[DimensionCalculator] = None,
    resolve: bool = True
) -> LayoutResult:
    """
    Measure, position and de-overlap a tree.

    Args:
        tree: The tree to lay out (positions and dimensions written in place)
        config: Full configuration (desktop preset if None)
        calculator: Dimension calculator to reuse its cache; a new one
            using config.style is created if None
        resolve: Run overlap resolution after positioning

    Returns:
        LayoutResult with final positions and the overlap audit trail
    """
    config = config or MindMapConfig()
    calculator = calculator or DimensionCalculator(config.style)

    calculator.apply(tree)
    steps = layout_tree(tree, config.layout)

    result = LayoutResult(steps=steps)
    if resolve:
        resolution = resolve_overlaps(
            tree,
            config.layout.overlap_gap,
            config.layout.overlap_iteration_cap(len(tree)),
        )
        result.adjustments = resolution.adjustments
        result.converged = resolution.converged
        if not resolution.converged:
            logger.warning(
                f"Overlap resolution did not converge after {resolution.passes} passes "
                f"({len(resolution.adjustments)} adjustments applied)"
            )

    result.positions = {n.id: NodePosition(n.center, n.left_edge) for n in tree.walk()}
    logger.debug(f"Laid out {len(tree)} nodes, {len(result.adjustments)} overlap adjustments")
    return result


class LayoutEngine:
    """
    Configuration plus a long-lived dimension cache.

    Hosts keep one engine per view and call `layout` after every edit;
    `update_text` is the entry point for in-place text edits.
    """

    def __init__(self, config: Optional[MindMapConfig] = None, calculator: Optional[DimensionCalculator] = None):
        self.config = config or MindMapConfig()
        self.calculator = calculator or DimensionCalculator(self.config.style)

    def layout(self, tree: MindMapTree, resolve: bool = True) -> LayoutResult:
        return compute_layout(tree, self.config, self.calculator, resolve)

    def update_text(self, tree: MindMapTree, node_id: int, text: str) -> LayoutResult:
        """Replace a node's text, drop stale cache entries and re-lay out."""
        previous = tree.set_text(node_id, text)
        self.calculator.invalidate(previous)
        self.calculator.invalidate(text)
        return self.layout(tree)
