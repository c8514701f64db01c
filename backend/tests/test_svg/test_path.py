"""Tests for the PathData builder and the SVG serializer."""

from __future__ import annotations

import pytest

from heraldry.svg.path import PathData, fmt
from heraldry.svg.serializer import serialize_element, serialize_svg


def test_fmt_trims_trailing_zeros():
    assert fmt(100.0) == "100"
    assert fmt(12.5) == "12.5"
    assert fmt(1 / 3) == "0.33"
    assert fmt(-0.001) == "0"


def test_polyline_d_string():
    path = PathData.polyline([(0, 0), (200, 0), (200, 100)])
    assert path.d() == "M 0 0 L 200 0 L 200 100 Z"


def test_curves_serialize_with_control_points():
    path = PathData.at((0, 0)).quad_to((10, 12), (20, 0)).cubic_to((25, 5), (35, 5), (40, 0))
    assert path.d() == "M 0 0 Q 10 12 20 0 C 25 5 35 5 40 0"


def test_extend_bridges_gap_with_line():
    a = PathData.at((0, 0)).line_to((10, 0))
    b = PathData.at((10, 5)).line_to((20, 5))
    a.extend(b)
    assert a.d() == "M 0 0 L 10 0 L 10 5 L 20 5"


def test_extend_joins_contiguous_paths_without_bridge():
    a = PathData.at((0, 0)).line_to((10, 0))
    b = PathData.at((10, 0)).line_to((20, 0))
    a.extend(b)
    assert len(a.segments) == 2


def test_reversed_runs_backwards():
    path = PathData.at((0, 0)).line_to((10, 0)).quad_to((15, 5), (20, 0))
    rev = path.reversed()
    assert rev.start == complex(20, 0)
    assert rev.end == complex(0, 0)
    assert rev.d() == "M 20 0 Q 15 5 10 0 L 0 0"


def test_degenerate_path_is_single_move():
    path = PathData.at((5, 7))
    assert path.is_degenerate
    assert path.d() == "M 5 7"
    assert path.bbox() == (5, 7, 5, 7)


def test_to_polygon_area_of_rectangle():
    path = PathData.polyline([(0, 0), (200, 0), (200, 100), (0, 100)])
    assert path.to_polygon().area == pytest.approx(20000)


def test_bbox_includes_curve_extrema():
    path = PathData.at((0, 0)).quad_to((50, 100), (100, 0))
    xmin, ymin, xmax, ymax = path.bbox()
    assert (xmin, ymin, xmax) == pytest.approx((0, 0, 100))
    assert ymax == pytest.approx(50)


# ---------------------------------------------------------------------------
# Serializer
# ---------------------------------------------------------------------------


def test_serialize_nested_elements():
    lines = serialize_element({"tag": "g", "id": "a", "children": [{"tag": "rect", "width": "4"}]})
    assert lines == ['  <g id="a">', '    <rect width="4" />', "  </g>"]


def test_serialize_raw_content_is_verbatim():
    lines = serialize_element({"tag": "g", "content": '<path d="M0 0"/>'})
    assert '<path d="M0 0"/>' in lines[1]


def test_serialize_svg_escapes_title_and_emits_defs():
    svg = serialize_svg(
        [{"tag": "path", "d": "M 0 0"}],
        title="Or & azure",
        defs=[{"tag": "clipPath", "id": "c", "children": [{"tag": "path", "d": "M 1 1"}]}],
    )
    assert "<title>Or &amp; azure</title>" in svg
    assert svg.index("<defs>") < svg.index('<path d="M 0 0" />')
    assert 'viewBox="0 0 200 200"' in svg
