"""Tests for caret → popup anchor mapping."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from suggestpad.placement import (
    DEFAULT_GEOMETRY, Point, PopupGeometry, Rect,
    caret_line_column, map_caret, popup_rect,
)

BOUNDS = Rect(0, 0, 800, 600)


def test_line_column_counting():
    assert caret_line_column("hello wor", 9) == (0, 9)
    assert caret_line_column("ab\ncd\nef", 7) == (2, 1)
    assert caret_line_column("ab\n", 3) == (1, 0)
    assert caret_line_column("", 0) == (0, 0)


def test_anchor_below_caret_line():
    # column 9 → x = 10 + 9*6; line 0 → y = 10 + 16
    assert map_caret("hello wor", 9, BOUNDS) == Point(64.0, 26.0)


def test_anchor_offset_by_container_origin():
    bounds = Rect(100, 200, 800, 600)
    assert map_caret("hello wor", 9, bounds) == Point(164.0, 226.0)


def test_right_overflow_aligns_to_right_margin():
    text = "x" * 200
    point = map_caret(text, 200, BOUNDS)
    assert point.x == BOUNDS.right - DEFAULT_GEOMETRY.popup_width - DEFAULT_GEOMETRY.margin


def test_bottom_overflow_flips_above_caret_line():
    text = "\n" * 30 + "abc"
    point = map_caret(text, len(text), BOUNDS)
    line_top = 10 + 30 * 16
    assert point.y == line_top - DEFAULT_GEOMETRY.popup_height
    assert point.y + DEFAULT_GEOMETRY.popup_height <= line_top


def test_no_bounds_means_no_anchor():
    assert map_caret("abc", 3, None) is None


def test_container_smaller_than_popup_means_no_anchor():
    assert map_caret("abc", 3, Rect(0, 0, 200, 600)) is None
    assert map_caret("abc", 3, Rect(0, 0, 800, 100)) is None


def test_internal_failure_means_no_anchor():
    assert map_caret(None, 3, BOUNDS) is None


def test_popup_always_inside_container():
    texts = ["", "a", "word " * 60, "\n" * 50 + "tail", ("line\n" * 20) + "x" * 150]
    containers = [
        Rect(0, 0, 800, 600),
        Rect(-300, 40, 260, 160),
        Rect(1000, 1000, 251, 151),
        Rect(5, 5, 400, 900),
    ]
    for text in texts:
        for bounds in containers:
            for caret in range(0, len(text) + 1, 7):
                point = map_caret(text, caret, bounds)
                assert point is not None
                assert bounds.contains_rect(popup_rect(point)), (text[:10], caret, bounds, point)


def test_custom_geometry():
    geometry = PopupGeometry(char_width=10.0, line_height=20.0, margin=0.0,
                             popup_width=100.0, popup_height=50.0)
    assert map_caret("ab\ncd", 5, BOUNDS, geometry) == Point(20.0, 40.0)


if __name__ == '__main__':
    test_line_column_counting()
    test_anchor_below_caret_line()
    test_anchor_offset_by_container_origin()
    test_right_overflow_aligns_to_right_margin()
    test_bottom_overflow_flips_above_caret_line()
    test_no_bounds_means_no_anchor()
    test_container_smaller_than_popup_means_no_anchor()
    test_internal_failure_means_no_anchor()
    test_popup_always_inside_container()
    test_custom_geometry()
    print("All placement tests passed.")
