"""Partition line styles and their blazon adjectives."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class LineStyleSpec:
    id: str
    name: str
    adjective: str  # empty for straight, which is never blazoned


_STYLES = [
    LineStyleSpec("straight", "Straight", ""),
    LineStyleSpec("wavy", "Wavy", "wavy"),
    LineStyleSpec("nebuly", "Nebuly", "nebuly"),
    LineStyleSpec("engrailed", "Engrailed", "engrailed"),
    LineStyleSpec("invected", "Invected", "invected"),
    LineStyleSpec("embattled", "Embattled", "embattled"),
    LineStyleSpec("indented", "Indented", "indented"),
    LineStyleSpec("dancetty", "Dancetty", "dancetty"),
    LineStyleSpec("raguly", "Raguly", "raguly"),
    LineStyleSpec("dovetailed", "Dovetailed", "dovetailed"),
]

LINE_STYLES: MappingProxyType[str, LineStyleSpec] = MappingProxyType({s.id: s for s in _STYLES})


def line_adjective(style_id: str) -> str:
    spec = LINE_STYLES.get(style_id)
    return spec.adjective if spec else ""
