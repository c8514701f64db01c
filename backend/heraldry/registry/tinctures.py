"""Tincture registry: metals, colours, stains and furs.

The table is built once at import time and exposed read-only. Furs carry an
SVG pattern and are painted with ``url(#...)`` fills instead of a flat hex.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Literal


class TinctureKind(str, enum.Enum):
    METAL = "metal"
    COLOUR = "colour"
    STAIN = "stain"
    FUR = "fur"


@dataclass(frozen=True)
class FurPattern:
    """A repeating fur motif on a 20×20 tile in canonical units."""

    kind: Literal["ermine", "vair"]
    background: str
    foreground: str
    tile: float = 20.0

    def to_element(self, pattern_id: str) -> dict[str, Any]:
        t = self.tile
        if self.kind == "ermine":
            # Spot: three dots over a tapering tail
            motif = [
                {"tag": "path", "d": "M 10 7 L 12.5 15 L 10 13 L 7.5 15 Z", "fill": self.foreground},
                {"tag": "circle", "cx": "10", "cy": "5", "r": "1.2", "fill": self.foreground},
                {"tag": "circle", "cx": "8", "cy": "7", "r": "1.2", "fill": self.foreground},
                {"tag": "circle", "cx": "12", "cy": "7", "r": "1.2", "fill": self.foreground},
            ]
        else:
            motif = [
                {
                    "tag": "path",
                    "d": "M 0 20 L 0 15 L 5 10 L 5 3 L 10 0 L 15 3 L 15 10 L 20 15 L 20 20 Z",
                    "fill": self.foreground,
                },
            ]
        return {
            "tag": "pattern",
            "id": pattern_id,
            "patternUnits": "userSpaceOnUse",
            "width": f"{t:g}",
            "height": f"{t:g}",
            "children": [
                {"tag": "rect", "x": "0", "y": "0", "width": f"{t:g}", "height": f"{t:g}",
                 "fill": self.background},
                *motif,
            ],
        }


@dataclass(frozen=True)
class Tincture:
    id: str
    name: str  # blazon term, lowercase
    hex: str  # flat colour; for furs the dominant colour
    kind: TinctureKind
    pattern: FurPattern | None = None

    @property
    def pattern_id(self) -> str:
        return f"fur-{self.id}"

    @property
    def fill(self) -> str:
        """SVG fill value: a hex colour, or a pattern reference for furs."""
        if self.pattern is not None:
            return f"url(#{self.pattern_id})"
        return self.hex


def _build() -> dict[str, Tincture]:
    metals = {
        "or": ("or", "#FFD700"),
        "argent": ("argent", "#D8DEE9"),
        "copper": ("copper", "#B87333"),
        "steel": ("steel", "#71797E"),
    }
    colours = {
        "gules": ("gules", "#DC143C"),
        "azure": ("azure", "#0047AB"),
        "sable": ("sable", "#000000"),
        "vert": ("vert", "#228B22"),
        "purpure": ("purpure", "#9B30FF"),
        "celeste": ("celeste", "#87CEEB"),
        "carnation": ("carnation", "#FFCBA4"),
        "brunatre": ("brunâtre", "#8B4513"),
        "crimson": ("crimson", "#990000"),
        "midnight": ("midnight", "#191970"),
        "jade": ("jade", "#00A86B"),
    }
    stains = {
        "tenne": ("tenné", "#CD853F"),
        "sanguine": ("sanguine", "#8B0000"),
        "murrey": ("murrey", "#8B008B"),
    }
    furs = {
        "ermine": ("ermine", "#FFFFFF", FurPattern("ermine", "#FFFFFF", "#000000")),
        "ermines": ("ermines", "#000000", FurPattern("ermine", "#000000", "#FFFFFF")),
        "erminois": ("erminois", "#FFD700", FurPattern("ermine", "#FFD700", "#000000")),
        "pean": ("pean", "#000000", FurPattern("ermine", "#000000", "#FFD700")),
        "vair": ("vair", "#0047AB", FurPattern("vair", "#FFFFFF", "#0047AB")),
    }

    table: dict[str, Tincture] = {}
    for kind, group in (
        (TinctureKind.METAL, metals),
        (TinctureKind.COLOUR, colours),
        (TinctureKind.STAIN, stains),
    ):
        for tid, (name, hex_) in group.items():
            table[tid] = Tincture(id=tid, name=name, hex=hex_, kind=kind)
    for tid, (name, hex_, pattern) in furs.items():
        table[tid] = Tincture(id=tid, name=name, hex=hex_, kind=TinctureKind.FUR, pattern=pattern)
    return table


TINCTURES: MappingProxyType[str, Tincture] = MappingProxyType(_build())


def get_tincture(tincture_id: str) -> Tincture | None:
    return TINCTURES.get(tincture_id)


def tincture_name(tincture_id: str) -> str:
    """Blazon name of a tincture; unknown ids are returned verbatim."""
    tincture = TINCTURES.get(tincture_id)
    return tincture.name if tincture else tincture_id


UNKNOWN_FILL = "#808080"


def fill_for(tincture_id: str) -> str:
    """SVG fill of a tincture id; unknown ids paint neutral grey."""
    tincture = TINCTURES.get(tincture_id)
    return tincture.fill if tincture else UNKNOWN_FILL


def violates_rule_of_tincture(first: str, second: str) -> bool:
    """Metal on metal or colour on colour. Stains count as colours, furs are exempt."""
    a, b = TINCTURES.get(first), TINCTURES.get(second)
    if a is None or b is None:
        return False
    if TinctureKind.FUR in (a.kind, b.kind):
        return False
    if a.kind == TinctureKind.METAL or b.kind == TinctureKind.METAL:
        return a.kind == b.kind
    return True
