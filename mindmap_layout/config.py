"""
Layout and style configuration.

Configuration is an immutable value selected once (desktop or mobile) and
passed explicitly into the dimension calculator and the layout pipeline:
- LayoutConfig: spacing, adaptive horizontal step, overlap resolution bounds
- StyleConfig: per-depth text styles and text-metric ratios
- MindMapConfig: the two sections plus the device flag

Field names are snake_case in Python; the camelCase names used by the
renderer's configuration surface (minNodeGap, verticalSpacing, ...) are
accepted on input.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel, to_snake


class _FrozenModel(BaseModel):
    """Base for configuration records: immutable, camelCase aliases accepted."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class AdaptiveSpacing(_FrozenModel):
    """Bounds and ratios for the per-depth horizontal step."""
    min_spacing: float = 80
    max_spacing: float = 300
    source_node_ratio: float = 0.15   # Share of the average width at depth d
    target_node_ratio: float = 0.10   # Share of the average width at depth d+1
    base_spacing: float = 60
    safety_margin: float = 10


class LayoutConfig(_FrozenModel):
    """Spacing constants consumed by the layout engine and overlap resolver."""
    min_node_gap: float = 25
    horizontal_spacing: float = 220   # Fixed step when adaptive spacing is off
    vertical_spacing: float = 110
    min_vertical_gap: float = 25
    use_adaptive_spacing: bool = True
    adaptive_horizontal_spacing: AdaptiveSpacing = Field(default_factory=AdaptiveSpacing)
    node_height_buffer: float = 15
    # Connector inset from a node's padded border
    line_offset: float = 6
    # Overlap pass cap = max(min_overlap_iterations, factor * node_count)
    overlap_iteration_factor: int = Field(default=4, ge=1)
    min_overlap_iterations: int = Field(default=10, ge=1)

    @property
    def overlap_gap(self) -> float:
        """Minimum clear distance required between unrelated nodes."""
        return max(self.min_node_gap, self.min_vertical_gap)

    def overlap_iteration_cap(self, node_count: int) -> int:
        return max(self.min_overlap_iterations, self.overlap_iteration_factor * node_count)


class DepthStyle(_FrozenModel):
    """Text style for one depth band."""
    font_size: int
    font_weight: str = "normal"
    min_width: float
    padding: float
    max_width: Optional[float] = None
    font_size_class: str = "default"


class StyleConfig(_FrozenModel):
    """Per-depth styles and the ratios used to turn text into box sizes."""
    root: DepthStyle = DepthStyle(
        font_size=20, font_weight="bold", min_width=40, padding=18, font_size_class="root"
    )
    level_one: DepthStyle = DepthStyle(
        font_size=18, font_weight="bold", min_width=38, padding=16, font_size_class="level-1"
    )
    default: DepthStyle = DepthStyle(
        font_size=15, font_weight="normal", min_width=20, padding=10, font_size_class="default"
    )
    char_width_ratio: float = 0.62
    line_height_ratio: float = 1.3
    min_text_width: float = 35
    min_height_ratio: float = 2.0
    safety_buffer_min: float = 8
    safety_buffer_ratio: float = 0.05

    def for_depth(self, depth: int) -> DepthStyle:
        """Style band for a node depth: 0 and 1 are emphasised, 2+ compact."""
        if depth <= 0:
            return self.root
        if depth == 1:
            return self.level_one
        return self.default


class MindMapConfig(_FrozenModel):
    """Complete configuration for one device class."""
    is_mobile: bool = False
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)


def desktop_config() -> MindMapConfig:
    """Desktop preset (the defaults of every section)."""
    return MindMapConfig()


def mobile_config() -> MindMapConfig:
    """Mobile preset: spacing reduced 20-30%, non-root fonts one pixel larger."""
    desktop = desktop_config()
    layout = LayoutConfig(
        min_node_gap=20,
        horizontal_spacing=154,
        vertical_spacing=88,
        min_vertical_gap=20,
        adaptive_horizontal_spacing=AdaptiveSpacing(
            min_spacing=56,
            max_spacing=210,
            source_node_ratio=0.15,
            target_node_ratio=0.10,
            base_spacing=42,
            safety_margin=7,
        ),
        node_height_buffer=12,
    )
    style = desktop.style.model_copy(update={
        "level_one": desktop.style.level_one.model_copy(update={"font_size": 19}),
        "default": desktop.style.default.model_copy(update={"font_size": 16}),
    })
    return MindMapConfig(is_mobile=True, layout=layout, style=style)


def select_config(is_mobile: bool, overrides: Optional[dict] = None) -> MindMapConfig:
    """
    Pick the device preset once, optionally layering overrides on top.

    Args:
        is_mobile: Device class reported by the host
        overrides: Partial config dict (snake_case or camelCase keys) merged
            over the preset, e.g. {"layout": {"minNodeGap": 30}}

    Returns:
        A frozen MindMapConfig
    """
    base = mobile_config() if is_mobile else desktop_config()
    if not overrides:
        return base

    merged = base.model_dump()
    for section, values in overrides.items():
        key = to_snake(section)
        if isinstance(values, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], values)
        else:
            merged[key] = values
    return MindMapConfig.model_validate(merged)


def _merge(base: dict, values: dict) -> dict:
    result = dict(base)
    for key, value in values.items():
        key = to_snake(key)
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result
