"""Field compositor: the background division of the shield.

A division is a standalone builder registered via decorator:

    @division("perPale")
    def per_pale(f: ShieldField, env: _Env) -> list[Region]:
        ...

Builders return regions in paint order, starting with a full-canvas base.
Later regions cover earlier ones, so the visible field always covers the
whole canvas.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from shapely.geometry import Point, box
from shapely.geometry.base import BaseGeometry

from heraldry.engine.config import RenderConfig
from heraldry.engine.lines import LineStyleGenerator
from heraldry.models.composition import ShieldField
from heraldry.registry.catalog import DIVISIONS
from heraldry.registry.tinctures import fill_for
from heraldry.svg.path import PathData, PointLike

logger = logging.getLogger(__name__)


@dataclass
class Region:
    """One painted area of the canonical canvas."""

    path: PathData
    tincture: str

    def to_element(self) -> dict[str, Any]:
        return {"tag": "path", "d": self.path.d(), "fill": fill_for(self.tincture)}


@dataclass
class FieldLayout:
    division: str
    regions: list[Region] = field(default_factory=list)
    canvas_size: float = 200.0

    def elements(self) -> list[dict[str, Any]]:
        return [r.to_element() for r in self.regions]

    def tincture_at(self, x: float, y: float) -> str | None:
        """Visible tincture at a canonical point; None outside the canvas."""
        s = self.canvas_size
        if not (0 <= x <= s and 0 <= y <= s):
            return None
        pt = Point(x, y)
        for region in reversed(self.regions):
            if region.path.to_polygon().covers(pt):
                return region.tincture
        return None

    def partition(self) -> list[tuple[str, BaseGeometry]]:
        """Disjoint visible area of every region, clipped to the canvas."""
        canvas = box(0, 0, self.canvas_size, self.canvas_size)
        covered: BaseGeometry | None = None
        visible: list[tuple[str, BaseGeometry]] = []
        for region in reversed(self.regions):
            poly = region.path.to_polygon().intersection(canvas)
            part = poly if covered is None else poly.difference(covered)
            covered = poly if covered is None else covered.union(poly)
            if not part.is_empty:
                visible.append((region.tincture, part))
        visible.reverse()
        return visible


@dataclass
class _Env:
    lines: LineStyleGenerator
    config: RenderConfig
    style: str

    @property
    def s(self) -> float:
        return self.config.canvas_size

    def polygon(self, vertices: list[PointLike], styled: list[bool] | None = None) -> PathData:
        return self.lines.polygon(vertices, self.style, styled or [False] * len(vertices))

    def rect(self, x: float, y: float, w: float, h: float) -> PathData:
        return PathData.polyline([(x, y), (x + w, y), (x + w, y + h), (x, y + h)])

    def multiplicity(self, f: ShieldField) -> int:
        return f.multiplicity or self.config.default_multiplicity


DivisionFn = Callable[[ShieldField, _Env], list[Region]]

_DIVISION_FNS: dict[str, DivisionFn] = {}


def division(division_id: str):
    """Decorator to register a field division builder."""

    def decorator(fn: DivisionFn) -> DivisionFn:
        if division_id not in DIVISIONS:
            raise ValueError(f"Unknown division: {division_id}")
        _DIVISION_FNS[division_id] = fn
        return fn

    return decorator


def _base(env: _Env, tincture: str) -> Region:
    return Region(env.rect(0, 0, env.s, env.s), tincture)


@division("plain")
def plain(f: ShieldField, env: _Env) -> list[Region]:
    return [_base(env, f.tincture1)]


@division("perPale")
def per_pale(f: ShieldField, env: _Env) -> list[Region]:
    s, h = env.s, env.s / 2
    overlay = env.polygon([(h, 0), (h, s), (s, s), (s, 0)], [True, False, False, False])
    return [_base(env, f.tincture1), Region(overlay, f.tincture2)]


@division("perFess")
def per_fess(f: ShieldField, env: _Env) -> list[Region]:
    s, h = env.s, env.s / 2
    overlay = env.polygon([(0, h), (s, h), (s, s), (0, s)], [True, False, False, False])
    return [_base(env, f.tincture1), Region(overlay, f.tincture2)]


@division("perBend")
def per_bend(f: ShieldField, env: _Env) -> list[Region]:
    s = env.s
    overlay = env.polygon([(0, 0), (s, s), (0, s)], [True, False, False])
    return [_base(env, f.tincture1), Region(overlay, f.tincture2)]


@division("perBendSinister")
def per_bend_sinister(f: ShieldField, env: _Env) -> list[Region]:
    s = env.s
    overlay = env.polygon([(s, 0), (0, s), (s, s)], [True, False, False])
    return [_base(env, f.tincture1), Region(overlay, f.tincture2)]


@division("perChevron")
def per_chevron(f: ShieldField, env: _Env) -> list[Region]:
    s, h = env.s, env.s / 2
    peak = s * 0.3
    if f.inverted:
        # Apex points down; the upper wedge keeps the first tincture
        overlay = env.polygon([(0, 0), (h, s - peak), (s, 0)], [True, True, False])
        return [_base(env, f.tincture2), Region(overlay, f.tincture1)]
    overlay = env.polygon([(0, s), (h, peak), (s, s)], [True, True, False])
    return [_base(env, f.tincture1), Region(overlay, f.tincture2)]


@division("quarterly")
def quarterly(f: ShieldField, env: _Env) -> list[Region]:
    h = env.s / 2
    return [
        _base(env, f.tincture1),
        Region(env.rect(h, 0, h, h), f.tincture2),
        Region(env.rect(0, h, h, h), f.tincture2),
    ]


@division("perSaltire")
def per_saltire(f: ShieldField, env: _Env) -> list[Region]:
    s, h = env.s, env.s / 2
    return [
        _base(env, f.tincture1),
        Region(PathData.polyline([(0, 0), (h, h), (0, s)]), f.tincture2),
        Region(PathData.polyline([(s, 0), (s, s), (h, h)]), f.tincture2),
    ]


@division("gyronny")
def gyronny(f: ShieldField, env: _Env) -> list[Region]:
    s, h = env.s, env.s / 2
    c = (h, h)
    gyrons = [
        [c, (h, 0), (s, 0)],
        [c, (s, h), (s, s)],
        [c, (h, s), (0, s)],
        [c, (0, h), (0, 0)],
    ]
    return [_base(env, f.tincture1)] + [
        Region(PathData.polyline(g), f.tincture2) for g in gyrons
    ]


@division("paly")
def paly(f: ShieldField, env: _Env) -> list[Region]:
    n = env.multiplicity(f)
    w = env.s / n
    return [_base(env, f.tincture1)] + [
        Region(env.rect(i * w, 0, w, env.s), f.tincture2) for i in range(1, n, 2)
    ]


@division("barry")
def barry(f: ShieldField, env: _Env) -> list[Region]:
    n = env.multiplicity(f)
    w = env.s / n
    return [_base(env, f.tincture1)] + [
        Region(env.rect(0, i * w, env.s, w), f.tincture2) for i in range(1, n, 2)
    ]


@division("bendy")
def bendy(f: ShieldField, env: _Env) -> list[Region]:
    # Bands of y - x over [-s, s]
    s = env.s
    n = env.multiplicity(f)
    w = 2 * s / n
    regions = [_base(env, f.tincture1)]
    for i in range(1, n, 2):
        v0, v1 = -s + i * w, -s + (i + 1) * w
        band = [(-s, -s + v0), (2 * s, 2 * s + v0), (2 * s, 2 * s + v1), (-s, -s + v1)]
        regions.append(Region(PathData.polyline(band), f.tincture2))
    return regions


@division("bendySinister")
def bendy_sinister(f: ShieldField, env: _Env) -> list[Region]:
    # Bands of x + y over [0, 2s]
    s = env.s
    n = env.multiplicity(f)
    w = 2 * s / n
    regions = [_base(env, f.tincture1)]
    for i in range(1, n, 2):
        v0, v1 = i * w, (i + 1) * w
        band = [(-s, v0 + s), (2 * s, v0 - 2 * s), (2 * s, v1 - 2 * s), (-s, v1 + s)]
        regions.append(Region(PathData.polyline(band), f.tincture2))
    return regions


@division("chequy")
def chequy(f: ShieldField, env: _Env) -> list[Region]:
    n = env.multiplicity(f)
    w = env.s / n
    return [_base(env, f.tincture1)] + [
        Region(env.rect(col * w, row * w, w, w), f.tincture2)
        for row in range(n)
        for col in range(n)
        if (row + col) % 2 == 1
    ]


def _diamonds(f: ShieldField, env: _Env, ratio: float) -> list[Region]:
    # Second lattice of a two-lattice diamond tiling; the base shows the first
    n = env.multiplicity(f)
    w = env.s / n
    h = w * ratio
    rows = math.ceil(env.s / h)
    regions = [_base(env, f.tincture1)]
    for j in range(-1, rows + 1):
        for i in range(n):
            cx, cy = (i + 0.5) * w, (j + 0.5) * h
            diamond = [(cx, cy - h / 2), (cx + w / 2, cy), (cx, cy + h / 2), (cx - w / 2, cy)]
            regions.append(Region(PathData.polyline(diamond), f.tincture2))
    return regions


@division("lozengy")
def lozengy(f: ShieldField, env: _Env) -> list[Region]:
    return _diamonds(f, env, env.config.lozenge_ratio)


@division("fusily")
def fusily(f: ShieldField, env: _Env) -> list[Region]:
    return _diamonds(f, env, env.config.fusil_ratio)


def _third(f: ShieldField) -> str:
    return f.tincture3 or f.tincture1


@division("tiercedPale")
def tierced_pale(f: ShieldField, env: _Env) -> list[Region]:
    s = env.s
    a, b = s / 3, 2 * s / 3
    # The middle tierce runs to the edge; the third paints over it
    middle = env.polygon([(a, 0), (a, s), (s, s), (s, 0)], [True, False, False, False])
    last = env.polygon([(b, 0), (b, s), (s, s), (s, 0)], [True, False, False, False])
    return [_base(env, f.tincture1), Region(middle, f.tincture2), Region(last, _third(f))]


@division("tiercedFess")
def tierced_fess(f: ShieldField, env: _Env) -> list[Region]:
    s = env.s
    a, b = s / 3, 2 * s / 3
    middle = env.polygon([(0, a), (s, a), (s, s), (0, s)], [True, False, False, False])
    last = env.polygon([(0, b), (s, b), (s, s), (0, s)], [True, False, False, False])
    return [_base(env, f.tincture1), Region(middle, f.tincture2), Region(last, _third(f))]


class FieldCompositor:
    """Renders a ShieldField into ordered regions over the canonical canvas."""

    def __init__(
        self,
        config: RenderConfig | None = None,
        lines: LineStyleGenerator | None = None,
    ) -> None:
        self.config = config or RenderConfig()
        self.lines = lines or LineStyleGenerator(self.config)

    def compose(self, f: ShieldField) -> FieldLayout:
        division_id = f.division_type
        fn = _DIVISION_FNS.get(division_id)
        if fn is None:
            logger.warning("Unknown division %r, rendering plain", division_id)
            division_id, fn = "plain", plain

        spec = DIVISIONS[division_id]
        style = f.line_style if spec.supports_line else "straight"
        env = _Env(lines=self.lines, config=self.config, style=style)
        return FieldLayout(
            division=division_id,
            regions=fn(f, env),
            canvas_size=self.config.canvas_size,
        )
