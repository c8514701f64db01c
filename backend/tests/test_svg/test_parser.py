"""Tests for SVG asset parsing."""

from __future__ import annotations

from heraldry.svg.parser import inner_content, outline_path_data, parse_view_box
from tests.conftest import OFFSET_SVG, STAR_SVG


def test_parse_view_box_with_offset_origin():
    assert parse_view_box(OFFSET_SVG) == (10.0, 5.0, 120.0, 150.0)


def test_parse_view_box_falls_back_to_size():
    svg = '<svg xmlns="http://www.w3.org/2000/svg" width="64px" height="32px"></svg>'
    assert parse_view_box(svg) == (0.0, 0.0, 64.0, 32.0)


def test_parse_view_box_missing():
    assert parse_view_box("<svg></svg>") is None


def test_inner_content_strips_root_and_prolog():
    content = inner_content(STAR_SVG)
    assert content.startswith("<path")
    assert "</svg>" not in content


def test_inner_content_of_offset_asset_keeps_defs():
    content = inner_content(OFFSET_SVG)
    assert content.startswith("<defs>")
    assert "<?xml" not in content


def test_outline_path_skips_defs_and_unpainted_paths():
    svg = '''<svg viewBox="0 0 200 200">
      <defs><clipPath id="c"><path d="M0 0 L1 1 Z"/></clipPath></defs>
      <path d="M5 5 L6 6" fill="none"/>
      <path d="M20 0 L180 0 L100 200 Z" fill="#ccc"/>
    </svg>'''
    assert outline_path_data(svg) == "M20 0 L180 0 L100 200 Z"


def test_outline_path_falls_back_to_first_path():
    svg = '<svg><path d="M0 0 L10 10 Z"/></svg>'
    assert outline_path_data(svg) == "M0 0 L10 10 Z"


def test_outline_path_missing():
    assert outline_path_data("<svg><rect/></svg>") is None
