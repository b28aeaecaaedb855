"""
Mind Map Layout - Text measurement, tree layout and overlap resolution.

This package turns a tree of text nodes into a collision-free diagram:
dimensions from text, positions from the hierarchy, overlap fixes, and
the coordinate functions a renderer needs to draw the result.
"""

from .models import Node, MindMapTree
from .config import (
    AdaptiveSpacing,
    LayoutConfig,
    DepthStyle,
    StyleConfig,
    MindMapConfig,
    desktop_config,
    mobile_config,
    select_config,
)
from .dimensions import (
    Dimension,
    DimensionKey,
    DimensionCalculator,
    PillowSurface,
    TextSurface,
)
from .coordinates import (
    NodeBounds,
    to_render_x,
    to_render_y,
    from_render_y,
    right_edge,
    left_edge,
    bounds_of,
    vertical_distance,
    gap_between,
    overlaps,
    create_transform,
)
from .layout import (
    NodePosition,
    LayoutResult,
    LayoutEngine,
    adaptive_step,
    layout_tree,
    compute_layout,
)
from .overlap import OverlapAdjustment, OverlapResolution, find_overlaps, resolve_overlaps
from .connectors import LinkPath, link_paths
from .analysis import summarize_layout, LayoutSummary
from .validation import validate_tree, validation_summary, ValidationIssue, IssueSeverity

__all__ = [
    # Models
    "Node",
    "MindMapTree",
    # Configuration
    "AdaptiveSpacing",
    "LayoutConfig",
    "DepthStyle",
    "StyleConfig",
    "MindMapConfig",
    "desktop_config",
    "mobile_config",
    "select_config",
    # Dimensions
    "Dimension",
    "DimensionKey",
    "DimensionCalculator",
    "PillowSurface",
    "TextSurface",
    # Coordinates
    "NodeBounds",
    "to_render_x",
    "to_render_y",
    "from_render_y",
    "right_edge",
    "left_edge",
    "bounds_of",
    "vertical_distance",
    "gap_between",
    "overlaps",
    "create_transform",
    # Layout
    "NodePosition",
    "LayoutResult",
    "LayoutEngine",
    "adaptive_step",
    "layout_tree",
    "compute_layout",
    # Overlaps
    "OverlapAdjustment",
    "OverlapResolution",
    "find_overlaps",
    "resolve_overlaps",
    # Connectors
    "LinkPath",
    "link_paths",
    # Analysis
    "summarize_layout",
    "LayoutSummary",
    # Validation
    "validate_tree",
    "validation_summary",
    "ValidationIssue",
    "IssueSeverity",
]
