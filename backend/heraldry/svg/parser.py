"""Regex-based extraction of the parts of an SVG asset the engine needs.

Charge artwork: the viewBox and the inner markup of the root ``<svg>``.
Shield outlines: the first drawable ``<path d>`` outside ``<defs>``/``<clipPath>``.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# Regex for extracting viewBox
_VIEWBOX_RE = re.compile(r'viewBox\s*=\s*"([^"]+)"')
_WIDTH_RE = re.compile(r'<svg[^>]*\swidth\s*=\s*"([^"]*?)"', re.IGNORECASE)
_HEIGHT_RE = re.compile(r'<svg[^>]*\sheight\s*=\s*"([^"]*?)"', re.IGNORECASE)
_SVG_OPEN_RE = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
_SVG_CLOSE_RE = re.compile(r"</svg\s*>", re.IGNORECASE)
_XML_DECL_RE = re.compile(r"<\?xml[^>]*\?>|<!DOCTYPE[^>]*>|<!--.*?-->", re.DOTALL)
_DEFS_RE = re.compile(r"<(defs|clipPath)\b.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_PATH_TAG_RE = re.compile(r"<path\b[^>]*>", re.IGNORECASE)
_D_ATTR_RE = re.compile(r'\sd\s*=\s*"([^"]+)"')
_PAINT_ATTR_RE = re.compile(r'\s(fill|stroke)\s*=\s*"([^"]+)"', re.IGNORECASE)

ViewBox = tuple[float, float, float, float]


def _number(text: str) -> float | None:
    try:
        return float(text.replace("px", "").replace("pt", "").strip())
    except ValueError:
        return None


def parse_view_box(svg_text: str) -> ViewBox | None:
    """(min_x, min_y, width, height), falling back to width/height attributes."""
    vb_match = _VIEWBOX_RE.search(svg_text)
    if vb_match:
        parts = vb_match.group(1).replace(",", " ").split()
        if len(parts) >= 4:
            try:
                x, y, w, h = (float(p) for p in parts[:4])
                return (x, y, w, h)
            except ValueError:
                logger.debug("Unparseable viewBox %r", vb_match.group(1))

    w_match = _WIDTH_RE.search(svg_text)
    h_match = _HEIGHT_RE.search(svg_text)
    if w_match and h_match:
        w, h = _number(w_match.group(1)), _number(h_match.group(1))
        if w is not None and h is not None:
            return (0.0, 0.0, w, h)
    return None


def inner_content(svg_text: str) -> str:
    """Markup between the root ``<svg ...>`` and ``</svg>``."""
    text = _XML_DECL_RE.sub("", svg_text)
    open_match = _SVG_OPEN_RE.search(text)
    if not open_match:
        return text.strip()
    close_matches = list(_SVG_CLOSE_RE.finditer(text))
    end = close_matches[-1].start() if close_matches else len(text)
    return text[open_match.end():end].strip()


def outline_path_data(svg_text: str) -> str | None:
    """``d`` of the first painted path outside defs/clipPath, else of the first path."""
    body = _DEFS_RE.sub("", svg_text)
    first: str | None = None
    for tag_match in _PATH_TAG_RE.finditer(body):
        tag = tag_match.group(0)
        d_match = _D_ATTR_RE.search(tag)
        if not d_match:
            continue
        if first is None:
            first = d_match.group(1)
        paints = {k.lower(): v for k, v in _PAINT_ATTR_RE.findall(tag)}
        if any(v.lower() != "none" for v in paints.values()):
            return d_match.group(1)
    return first
