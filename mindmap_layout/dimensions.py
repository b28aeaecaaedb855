"""
Node dimension calculation.

Turns a node's text and depth into a wrapped, padded bounding box:
- Text style is chosen by depth band (root, level one, compact default)
- Line widths come from a measurement surface when one is supplied
  (PillowSurface uses real glyph metrics) and from a deterministic
  character-width estimate otherwise
- Results are memoised by (depth, text, length) and invalidated per text

Final sizes are rounded up to whole pixels on both measurement paths so
layouts are reproducible regardless of which path ran.
"""

import logging
import math
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import NamedTuple, Optional, Protocol

from PIL import ImageFont

from .config import StyleConfig
from .models import MindMapTree

logger = logging.getLogger(__name__)


class TextSurface(Protocol):
    """Anything that can report the rendered width of a single line."""

    def text_width(self, text: str, font_size: int, font_weight: str) -> float:
        ...


class PillowSurface:
    """
    Measurement surface backed by Pillow font metrics.

    Fonts are resolved from the given paths, then common system locations,
    then Pillow's bundled default font at the requested size.
    """

    REGULAR_FONT_PATHS = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
        "/usr/share/fonts/TTF/DejaVuSans.ttf",
    ]
    BOLD_FONT_PATHS = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
        "/usr/share/fonts/truetype/freefont/FreeSansBold.ttf",
        "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    ]

    def __init__(self, regular_font: Optional[str] = None, bold_font: Optional[str] = None):
        self._regular_paths = ([regular_font] if regular_font else []) + self.REGULAR_FONT_PATHS
        self._bold_paths = ([bold_font] if bold_font else []) + self.BOLD_FONT_PATHS
        self._fonts: dict[tuple[int, bool], ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    def _font(self, font_size: int, bold: bool):
        key = (font_size, bold)
        if key not in self._fonts:
            self._fonts[key] = self._load_font(font_size, bold)
        return self._fonts[key]

    def _load_font(self, font_size: int, bold: bool):
        paths = self._bold_paths if bold else self._regular_paths
        for path in paths:
            if Path(path).exists():
                return ImageFont.truetype(path, font_size)
        if bold:
            # No bold face installed; measure with the regular face
            return self._load_font(font_size, False)
        return ImageFont.load_default(size=font_size)

    def text_width(self, text: str, font_size: int, font_weight: str) -> float:
        if not text:
            return 0.0
        font = self._font(font_size, font_weight == "bold")
        return float(font.getlength(text))


class DimensionKey(NamedTuple):
    """Cache key for a node's dimensions."""
    depth: int
    text: str
    length: int


@dataclass(frozen=True)
class Dimension:
    """Measured box for one node."""
    width: float
    height: float
    lines: tuple[str, ...]
    padding: float
    min_width: float
    max_width: Optional[float]
    font_size: int
    font_weight: str
    font_size_class: str
    text_x: float    # Text anchor, relative to the box's top-left corner
    text_y: float

    def to_dict(self) -> dict:
        result = asdict(self)
        result["lines"] = list(self.lines)
        return result


def clean_text(text: str) -> str:
    """Normalise line endings and tabs, strip trailing spaces per line."""
    if not text or not text.strip():
        return ""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    return "\n".join(line.expandtabs(4).rstrip() for line in lines)


class DimensionCalculator:
    """
    Computes and caches node dimensions.

    The cache is the only shared mutable state in the layout core and is
    intended for a single render thread.

    Args:
        style: Style configuration (per-depth fonts, paddings, ratios)
        surface: Optional measurement surface; None uses the estimator
    """

    def __init__(self, style: Optional[StyleConfig] = None, surface: Optional[TextSurface] = None):
        self.style = style or StyleConfig()
        self.surface = surface
        self._dimensions: dict[DimensionKey, Dimension] = {}
        self._line_widths: dict[tuple[str, int, str], float] = {}

    def __len__(self) -> int:
        return len(self._dimensions)

    # --- Public API ---

    def dimensions_of(self, depth: int, text: str) -> Dimension:
        """Get the (cached) dimensions for a node's text at a given depth."""
        text = text or ""
        key = DimensionKey(depth, text, len(text))
        cached = self._dimensions.get(key)
        if cached is not None:
            return cached

        dimension = self._compute(depth, text)
        self._dimensions[key] = dimension
        return dimension

    def invalidate(self, text: str) -> int:
        """
        Drop cached entries for exactly this text.

        Returns:
            Number of dimension entries removed
        """
        text = text or ""
        stale = [k for k in self._dimensions if k.text == text]
        for key in stale:
            del self._dimensions[key]

        lines = set(clean_text(text).split("\n"))
        for key in [k for k in self._line_widths if k[0] in lines]:
            del self._line_widths[key]

        if stale:
            logger.debug(f"Invalidated {len(stale)} dimension entries for {text!r}")
        return len(stale)

    def clear(self) -> None:
        self._dimensions.clear()
        self._line_widths.clear()

    def apply(self, tree: MindMapTree) -> None:
        """Write width and height onto every node of the tree."""
        for node in tree.walk():
            dimension = self.dimensions_of(node.depth, node.text)
            node.width = dimension.width
            node.height = dimension.height

    # --- Text handling ---

    def wrap_text(self, text: str, max_width: Optional[float], font_size: int) -> list[str]:
        """
        Split text into display lines.

        Without a maximum width, only explicit line breaks split the text.
        With one, each line is greedily packed word by word up to
        floor(max_width / char_width) characters; words are never split.
        """
        if not text:
            return [""]

        paragraphs = text.split("\n")
        if max_width is None:
            return paragraphs

        char_width = font_size * self.style.char_width_ratio
        max_chars = max(1, math.floor(max_width / char_width))

        lines: list[str] = []
        for paragraph in paragraphs:
            if len(paragraph) <= max_chars:
                lines.append(paragraph)
                continue

            current = ""
            for word in paragraph.split(" "):
                candidate = f"{current} {word}" if current else word
                if len(candidate) <= max_chars:
                    current = candidate
                else:
                    if current:
                        lines.append(current)
                    current = word
            if current:
                lines.append(current)
        return lines or [""]

    def measure_line(self, line: str, font_size: int, font_weight: str = "normal") -> float:
        """Width of one line, from the surface when available."""
        key = (line, font_size, font_weight)
        if key in self._line_widths:
            return self._line_widths[key]

        width = None
        if self.surface is not None:
            try:
                width = float(self.surface.text_width(line, font_size, font_weight))
            except Exception:
                logger.debug(f"Text measurement failed for {line!r}, using estimate", exc_info=True)

        if width is None:
            width = len(line) * font_size * self.style.char_width_ratio
        self._line_widths[key] = width
        return width

    def measure_lines(self, lines: list[str], font_size: int, font_weight: str = "normal") -> tuple[int, int]:
        """Bounding size of a block of lines, rounded up to whole pixels."""
        line_height = font_size * self.style.line_height_ratio
        if not lines:
            return math.ceil(self.style.min_text_width), math.ceil(line_height)

        widest = max(self.measure_line(line, font_size, font_weight) for line in lines)
        width = max(widest, self.style.min_text_width)
        height = len(lines) * line_height
        return math.ceil(width), math.ceil(height)

    # --- Internals ---

    def _compute(self, depth: int, text: str) -> Dimension:
        style = self.style.for_depth(depth)
        font_size = style.font_size
        padding = style.padding

        effective_max = style.max_width - padding * 2 if style.max_width is not None else None
        lines = self.wrap_text(clean_text(text), effective_max, font_size)
        text_width, text_height = self.measure_lines(lines, font_size, style.font_weight)

        safety_buffer = max(self.style.safety_buffer_min, text_width * self.style.safety_buffer_ratio)
        width = max(text_width + padding * 2 + safety_buffer, style.min_width)
        height = max(text_height + padding * 2, font_size * self.style.min_height_ratio)
        width = math.ceil(width)
        height = math.ceil(height)

        return Dimension(
            width=width,
            height=height,
            lines=tuple(lines),
            padding=padding,
            min_width=style.min_width,
            max_width=style.max_width,
            font_size=font_size,
            font_weight=style.font_weight,
            font_size_class=style.font_size_class,
            text_x=width / 2,
            text_y=text_height / 2 + padding / 2,
        )
