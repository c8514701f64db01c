"""Ordinary layer renderer: chief, fess, bend, chevron and the other bands.

Each ordinary type is a builder registered via decorator. Shapes are closed
polygons traversed clockwise on screen, which makes the line generator's
normal point into the shape on every edge. Edges on the canvas border (or
outside it) stay straight; all others carry the ordinary's line texture.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from shapely.ops import unary_union
from shapely.geometry.base import BaseGeometry

from heraldry.engine.config import RenderConfig
from heraldry.engine.lines import LineStyleGenerator
from heraldry.models.composition import Ordinary
from heraldry.registry.catalog import ORDINARIES
from heraldry.registry.tinctures import fill_for
from heraldry.svg.path import PathData

logger = logging.getLogger(__name__)

Vertex = tuple[float, float]
Shape = tuple[list[Vertex], list[bool]]


@dataclass
class OrdinaryLayer:
    index: int
    ordinary: Ordinary
    paths: list[PathData] = field(default_factory=list)

    def to_element(self) -> dict[str, Any]:
        fill = fill_for(self.ordinary.tincture)
        return {
            "tag": "g",
            "data-layer": f"ordinary-{self.index}",
            "children": [{"tag": "path", "d": p.d(), "fill": fill} for p in self.paths],
        }

    def geometry(self) -> BaseGeometry:
        return unary_union([p.to_polygon() for p in self.paths])


@dataclass
class _Env:
    config: RenderConfig

    @property
    def s(self) -> float:
        return self.config.canvas_size

    def band(self, base: float, o: Ordinary) -> float:
        width = base * self.config.thickness.get(o.thickness, 1.0)
        if self.repeats(o) > 1:
            # Three full 50-wide bars with 30-unit gaps need 210 units on a 200 canvas
            width *= self.config.diminutive_factor
        return width

    def repeats(self, o: Ordinary) -> int:
        spec = ORDINARIES.get(o.type)
        return o.count if spec is not None and spec.supports_count else 1

    def offsets(self, o: Ordinary, step: float) -> list[float]:
        """Centred offsets of the repetitions, ``step`` apart."""
        n = self.repeats(o)
        return [(i - (n - 1) / 2) * step for i in range(n)]

    def flip_y(self, shape: Shape) -> Shape:
        return _reflect(shape, lambda x, y: (x, self.s - y))

    def flip_x(self, shape: Shape) -> Shape:
        return _reflect(shape, lambda x, y: (self.s - x, y))


def _reflect(shape: Shape, fn: Callable[[float, float], Vertex]) -> Shape:
    # Reflection flips orientation, so the vertex order is reversed to stay clockwise
    vertices, flags = shape
    n = len(vertices)
    mirrored = [fn(x, y) for x, y in reversed(vertices)]
    return mirrored, [flags[(n - 2 - i) % n] for i in range(n)]


OrdinaryFn = Callable[[Ordinary, _Env], list[Shape]]

_ORDINARY_FNS: dict[str, OrdinaryFn] = {}


def ordinary(type_id: str):
    """Decorator to register an ordinary builder."""

    def decorator(fn: OrdinaryFn) -> OrdinaryFn:
        if type_id not in ORDINARIES:
            raise ValueError(f"Unknown ordinary: {type_id}")
        _ORDINARY_FNS[type_id] = fn
        return fn

    return decorator


@ordinary("chief")
def chief(o: Ordinary, env: _Env) -> list[Shape]:
    s, h = env.s, env.band(env.config.chief_height, o)
    return [([(0, 0), (s, 0), (s, h), (0, h)], [False, False, True, False])]


@ordinary("base")
def base(o: Ordinary, env: _Env) -> list[Shape]:
    s, h = env.s, env.band(env.config.base_height, o)
    return [([(0, s - h), (s, s - h), (s, s), (0, s)], [True, False, False, False])]


@ordinary("fess")
def fess(o: Ordinary, env: _Env) -> list[Shape]:
    s, w = env.s, env.band(env.config.fess_width, o)
    shapes = []
    for off in env.offsets(o, w + env.config.fess_spacing):
        y = s / 2 + off - w / 2
        shapes.append(([(0, y), (s, y), (s, y + w), (0, y + w)], [True, False, True, False]))
    return shapes


@ordinary("pale")
def pale(o: Ordinary, env: _Env) -> list[Shape]:
    s, w = env.s, env.band(env.config.pale_width, o)
    shapes = []
    for off in env.offsets(o, w + env.config.pale_spacing):
        x = s / 2 + off - w / 2
        shapes.append(([(x, 0), (x + w, 0), (x + w, s), (x, s)], [False, True, False, True]))
    return shapes


@ordinary("bend")
def bend(o: Ordinary, env: _Env) -> list[Shape]:
    # Band around y = x + c; ends extend past the canvas
    s, w = env.s, env.band(env.config.bend_width, o)
    k = w / math.sqrt(2)
    shapes = []
    for off in env.offsets(o, w + env.config.bend_spacing):
        c = off * math.sqrt(2)
        vertices = [
            (-w, -w + c - k),
            (s + w, s + w + c - k),
            (s + w, s + w + c + k),
            (-w, -w + c + k),
        ]
        shapes.append((vertices, [True, False, True, False]))
    return shapes


@ordinary("bendSinister")
def bend_sinister(o: Ordinary, env: _Env) -> list[Shape]:
    return [env.flip_x(shape) for shape in bend(o, env)]


@ordinary("chevron")
def chevron(o: Ordinary, env: _Env) -> list[Shape]:
    s, w = env.s, env.band(env.config.chevron_width, o)
    peak, foot = s * 0.2, s * 0.8
    shapes = []
    for off in env.offsets(o, w + env.config.chevron_spacing):
        top, low = peak + off, foot + off
        vertices = [
            (0, low), (s / 2, top), (s, low),
            (s, low + w), (s / 2, top + w), (0, low + w),
        ]
        shape = (vertices, [True, True, False, True, True, False])
        shapes.append(env.flip_y(shape) if o.inverted else shape)
    return shapes


@ordinary("pile")
def pile(o: Ordinary, env: _Env) -> list[Shape]:
    s = env.s
    n = env.repeats(o)
    slot = s / n
    half = min(slot / 2, 0.4 * slot * env.config.thickness.get(o.thickness, 1.0))
    point = s * 0.8
    shapes = []
    for i in range(n):
        cx = slot * (i + 0.5)
        shape = ([(cx - half, 0), (cx + half, 0), (cx, point)], [False, True, True])
        shapes.append(env.flip_y(shape) if o.inverted else shape)
    return shapes


@ordinary("cross")
def cross(o: Ordinary, env: _Env) -> list[Shape]:
    s, w = env.s, env.band(env.config.cross_width, o)
    a, b = (s - w) / 2, (s + w) / 2
    vertices = [
        (a, 0), (b, 0), (b, a), (s, a), (s, b), (b, b),
        (b, s), (a, s), (a, b), (0, b), (0, a), (a, a),
    ]
    flags = [False, True, True, False, True, True, False, True, True, False, True, True]
    return [(vertices, flags)]


@ordinary("saltire")
def saltire(o: Ordinary, env: _Env) -> list[Shape]:
    s, w = env.s, env.band(env.config.saltire_width, o)
    k, h = w / math.sqrt(2), s / 2
    vertices = [
        (0, 0), (k, 0), (h, h - k), (s - k, 0),
        (s, 0), (s, k), (h + k, h), (s, s - k),
        (s, s), (s - k, s), (h, h + k), (k, s),
        (0, s), (0, s - k), (h - k, h), (0, k),
    ]
    flags = [False, True, True, False] * 4
    return [(vertices, flags)]


class OrdinaryLayerRenderer:
    """Renders visible ordinaries in array order (index 0 at the bottom)."""

    def __init__(
        self,
        config: RenderConfig | None = None,
        lines: LineStyleGenerator | None = None,
    ) -> None:
        self.config = config or RenderConfig()
        self.lines = lines or LineStyleGenerator(self.config)

    def render_one(self, index: int, o: Ordinary) -> OrdinaryLayer | None:
        fn = _ORDINARY_FNS.get(o.type)
        if fn is None:
            logger.warning("Unknown ordinary type %r at layer %d, skipping", o.type, index)
            return None
        env = _Env(self.config)
        paths = [self.lines.polygon(v, o.line_style, flags) for v, flags in fn(o, env)]
        return OrdinaryLayer(index=index, ordinary=o, paths=paths)

    def render(self, ordinaries: tuple[Ordinary, ...] | list[Ordinary]) -> list[OrdinaryLayer]:
        layers = []
        for i, o in enumerate(ordinaries):
            if not o.visible:
                continue
            layer = self.render_one(i, o)
            if layer is not None:
                layers.append(layer)
        return layers
