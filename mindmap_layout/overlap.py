"""
Overlap detection and resolution for positioned trees.

Runs after the layout engine. Any two nodes that are not in an
ancestor/descendant relationship must keep at least `min_gap` between
their vertical extents; violations are fixed by pushing the lower node
(and its whole subtree) down, top to bottom, until a full pass makes no
change or the pass cap is reached.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .config import LayoutConfig
from .coordinates import gap_between, overlaps
from .models import MindMapTree, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlapAdjustment:
    """One push applied to a node (its subtree moved by the same delta)."""
    node_id: int
    previous_center: float
    new_center: float

    @property
    def delta(self) -> float:
        return self.new_center - self.previous_center

    def to_dict(self) -> dict:
        return {
            "node_id": self.node_id,
            "previous_center": self.previous_center,
            "new_center": self.new_center,
        }


@dataclass
class OverlapResolution:
    """Audit trail of a resolve_overlaps call."""
    adjustments: list[OverlapAdjustment] = field(default_factory=list)
    converged: bool = True
    passes: int = 0

    def __len__(self) -> int:
        return len(self.adjustments)

    def __iter__(self):
        return iter(self.adjustments)

    def to_dict(self) -> dict:
        return {
            "adjustments": [a.to_dict() for a in self.adjustments],
            "converged": self.converged,
            "passes": self.passes,
        }


class _Relations:
    """Pre-order ranks and ancestor sets for one tree snapshot."""

    def __init__(self, tree: MindMapTree):
        self.order: dict[int, int] = {}
        self.ancestors: dict[int, frozenset[int]] = {}
        for index, node in enumerate(tree.walk()):
            self.order[node.id] = index
            if node.parent is None:
                self.ancestors[node.id] = frozenset()
            else:
                self.ancestors[node.id] = self.ancestors[node.parent] | {node.parent}

    def related(self, a: int, b: int) -> bool:
        return a == b or a in self.ancestors[b] or b in self.ancestors[a]

    def rank(self, node: Node) -> tuple[float, int]:
        """Vertical order; ties go to pre-order, later is lower."""
        return (node.center, self.order[node.id])


def find_overlaps(tree: MindMapTree, min_gap: float = 0) -> list[tuple[int, int]]:
    """
    List violating pairs as (upper_id, lower_id), top to bottom.

    Ancestor/descendant pairs are never reported.
    """
    relations = _Relations(tree)
    nodes = sorted(tree.nodes.values(), key=relations.rank)
    pairs = []
    for i, a in enumerate(nodes):
        for b in nodes[i + 1:]:
            if relations.related(a.id, b.id):
                continue
            if overlaps(a.center, a.height, b.center, b.height, min_gap):
                pairs.append((a.id, b.id))
    return pairs


def resolve_overlaps(
    tree: MindMapTree,
    min_gap: float = 0,
    max_passes: Optional[int] = None
) -> OverlapResolution:
    """
    Push overlapping unrelated nodes apart.

    Args:
        tree: Positioned tree (centers and heights set); mutated in place
        min_gap: Required clear distance between unrelated nodes
        max_passes: Pass cap; defaults to the LayoutConfig bound for the
            tree's size

    Returns:
        OverlapResolution with every adjustment in application order.
        `converged` is False if the cap was reached while passes were
        still moving nodes.
    """
    if max_passes is None:
        max_passes = LayoutConfig().overlap_iteration_cap(len(tree))

    relations = _Relations(tree)
    resolution = OverlapResolution()

    while resolution.passes < max_passes:
        resolution.passes += 1
        moved = _resolve_pass(tree, relations, min_gap, resolution.adjustments)
        logger.debug(f"Overlap pass {resolution.passes}: {moved} adjustments")
        if moved == 0:
            return resolution

    # Cap reached: converged only if the state is already clean
    resolution.converged = not find_overlaps(tree, min_gap)
    return resolution


def _resolve_pass(
    tree: MindMapTree,
    relations: _Relations,
    min_gap: float,
    adjustments: list[OverlapAdjustment]
) -> int:
    nodes = sorted(tree.nodes.values(), key=relations.rank)
    moved = 0

    for i, a in enumerate(nodes):
        for b in nodes[i + 1:]:
            if relations.related(a.id, b.id):
                continue
            if not overlaps(a.center, a.height, b.center, b.height, min_gap):
                continue

            # Centers may have shifted earlier in this pass; re-rank the pair
            upper, lower = (a, b) if relations.rank(a) <= relations.rank(b) else (b, a)
            gap = gap_between(upper.center, upper.height, lower.center, lower.height)
            delta = min_gap - gap

            previous = lower.center
            for node in tree.walk(lower.id):
                node.center += delta
            adjustments.append(OverlapAdjustment(lower.id, previous, lower.center))
            moved += 1

    return moved
