"""Caret → screen mapping for the suggestion popup.

The mapper does not measure rendered glyphs. It counts lines and columns in
the text before the caret and multiplies them by fixed glyph metrics, so the
anchor is an approximation for proportional fonts.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from suggestpad.errors import LayoutUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Screen rectangle, top-left origin."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains_rect(self, other: "Rect") -> bool:
        return (other.left >= self.left and other.top >= self.top
                and other.right <= self.right and other.bottom <= self.bottom)


@dataclass(frozen=True)
class PopupGeometry:
    """Fixed metrics used to place the popup."""
    char_width: float = 6.0
    line_height: float = 16.0
    margin: float = 10.0
    popup_width: float = 250.0
    popup_height: float = 150.0


DEFAULT_GEOMETRY = PopupGeometry()


def caret_line_column(text: str, caret: int) -> Tuple[int, int]:
    """Line and column of ``caret``; column resets to 0 after each line break."""
    line = 0
    column = 0
    for char in text[:max(0, caret)]:
        if char == '\n':
            line += 1
            column = 0
        else:
            column += 1
    return line, column


def popup_rect(anchor: Point, geometry: PopupGeometry = DEFAULT_GEOMETRY) -> Rect:
    return Rect(anchor.x, anchor.y, geometry.popup_width, geometry.popup_height)


def _compute_anchor(text: str, caret: int, bounds: Optional[Rect],
                    geometry: PopupGeometry) -> Point:
    if bounds is None:
        raise LayoutUnavailable("container bounds not resolved")
    if bounds.width < geometry.popup_width or bounds.height < geometry.popup_height:
        raise LayoutUnavailable(
            f"container {bounds.width}x{bounds.height} smaller than popup "
            f"{geometry.popup_width}x{geometry.popup_height}")

    line, column = caret_line_column(text, caret)
    line_top = bounds.top + geometry.margin + line * geometry.line_height

    x = bounds.left + geometry.margin + column * geometry.char_width
    y = line_top + geometry.line_height  # just below the caret line

    if x + geometry.popup_width > bounds.right:
        x = bounds.right - geometry.popup_width - geometry.margin
    if y + geometry.popup_height > bounds.bottom:
        # Flip above the caret line
        y = line_top - geometry.popup_height

    # Margins may not fit in a tight container; the popup itself must.
    x = min(max(x, bounds.left), bounds.right - geometry.popup_width)
    y = min(max(y, bounds.top), bounds.bottom - geometry.popup_height)
    return Point(x, y)


def map_caret(text: str, caret: int, bounds: Optional[Rect],
              geometry: PopupGeometry = DEFAULT_GEOMETRY) -> Optional[Point]:
    """Top-left screen point for the popup, or None meaning "do not show".

    The returned popup rectangle always lies inside ``bounds``.
    """
    try:
        return _compute_anchor(text, caret, bounds, geometry)
    except LayoutUnavailable as e:
        logger.debug("No popup anchor: %s", e)
    except Exception as e:
        logger.debug("Caret mapping failed: %s", e)
    return None
