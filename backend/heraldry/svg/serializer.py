"""Write SVG markup from element definitions.

An element is a dict: ``tag`` names the element, ``children`` holds nested
element dicts, ``content`` holds pre-rendered markup inserted verbatim (charge
artwork), every other key is an attribute.
"""

from __future__ import annotations

from html import escape
from typing import Any

_RESERVED = ("tag", "children", "content")


def serialize_element(elem: dict[str, Any], indent: int = 1) -> list[str]:
    pad = "  " * indent
    tag = elem.get("tag", "path")
    attrs = {k: v for k, v in elem.items() if k not in _RESERVED and v is not None}
    attr_str = "".join(f' {k}="{escape(str(v), quote=True)}"' for k, v in attrs.items())
    children = elem.get("children") or []
    content = elem.get("content")

    if not children and content is None:
        return [f"{pad}<{tag}{attr_str} />"]

    lines = [f"{pad}<{tag}{attr_str}>"]
    if content is not None:
        lines.append(f"{pad}  {content.strip()}")
    for child in children:
        lines.extend(serialize_element(child, indent + 1))
    lines.append(f"{pad}</{tag}>")
    return lines


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float = 200.0,
    canvas_h: float = 200.0,
    title: str = "",
    defs: list[dict[str, Any]] | None = None,
    width: float | None = None,
    height: float | None = None,
    min_x: float = 0.0,
    min_y: float = 0.0,
) -> str:
    """Generate a standalone SVG document."""
    size = ""
    if width is not None and height is not None:
        size = f' width="{width:g}" height="{height:g}"'
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="{min_x:g} {min_y:g} {canvas_w:g} {canvas_h:g}"{size} xmlns="http://www.w3.org/2000/svg"'
        f' role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")

    if defs:
        lines.append("  <defs>")
        for d in defs:
            lines.extend(serialize_element(d, indent=2))
        lines.append("  </defs>")

    for elem in elements:
        lines.extend(serialize_element(elem))

    lines.append("</svg>")
    return "\n".join(lines)
