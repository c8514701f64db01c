"""Recolorable charge artwork.

Monochrome charge SVGs paint their body with a marker colour (white by
default). Recoloring swaps every marker fill, attribute or inline style, for
the charge tincture. Colour comparison is case-insensitive and understands
short hex and a few named colours.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from heraldry.svg.parser import ViewBox

_NAMED_COLORS = {
    "white": "#ffffff",
    "black": "#000000",
}

_SHORT_HEX_RE = re.compile(r"^#([0-9a-f])([0-9a-f])([0-9a-f])$")
_FILL_ATTR_RE = re.compile(r'(\sfill\s*=\s*)(["\'])([^"\']*)\2', re.IGNORECASE)
_STYLE_FILL_RE = re.compile(r"(fill\s*:\s*)([^;\"']+)", re.IGNORECASE)
_CLIP_PATH_ATTR_RE = re.compile(r'\sclip-path\s*=\s*(["\'])url\(#[^)]*\)\1', re.IGNORECASE)
_CLIP_PATH_ELEM_RE = re.compile(r"<clipPath\b.*?</clipPath\s*>", re.IGNORECASE | re.DOTALL)


def normalize_color(value: str) -> str:
    """Lowercase hex form of a colour; unknown values are lowercased as-is."""
    v = value.strip().lower()
    v = _NAMED_COLORS.get(v, v)
    m = _SHORT_HEX_RE.match(v)
    if m:
        v = "#" + "".join(c * 2 for c in m.groups())
    return v


def strip_clip_paths(content: str) -> str:
    """Drop ``clip-path="url(#...)"`` references and the clipPath elements themselves."""
    return _CLIP_PATH_ELEM_RE.sub("", _CLIP_PATH_ATTR_RE.sub("", content))


@dataclass(frozen=True)
class ChargeAsset:
    """Charge artwork as returned by a charge asset provider."""

    charge_id: str
    view_box: ViewBox
    content: str
    recolor_markers: frozenset[str] = frozenset({"#ffffff"})

    def recolored(self, fill: str) -> str:
        """Content with marker fills replaced by ``fill`` and clip-path refs removed."""
        markers = {normalize_color(m) for m in self.recolor_markers}

        def _attr(m: re.Match[str]) -> str:
            if normalize_color(m.group(3)) in markers:
                return f"{m.group(1)}{m.group(2)}{fill}{m.group(2)}"
            return m.group(0)

        def _style(m: re.Match[str]) -> str:
            if normalize_color(m.group(2)) in markers:
                return f"{m.group(1)}{fill}"
            return m.group(0)

        content = _FILL_ATTR_RE.sub(_attr, self.content)
        content = _STYLE_FILL_RE.sub(_style, content)
        return strip_clip_paths(content)
