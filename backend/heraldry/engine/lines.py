"""Line texture synthesis: turns a straight baseline into a styled partition line.

Each style is a standalone function registered via decorator:

    @line_style("wavy")
    def wavy(path: PathData, frame: _Frame) -> None:
        ...

The baseline is split into N equal units (``max(min_units, round(length / unit))``).
``frame.perp`` is the left normal of the travel direction, so a polygon walked
in one consistent direction gets the same texture orientation on every edge.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from heraldry.engine.config import RenderConfig
from heraldry.errors import GeometryDegenerateError
from heraldry.registry.line_styles import LINE_STYLES
from heraldry.svg.path import PathData, PointLike, as_complex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Frame:
    p1: complex
    p2: complex
    units: int
    amplitude: float

    @property
    def direction(self) -> complex:
        d = self.p2 - self.p1
        return d / abs(d)

    @property
    def perp(self) -> complex:
        # (-uy, ux)
        return self.direction * 1j

    def at(self, t: float, units: int | None = None) -> complex:
        """Point on the baseline at unit coordinate ``t`` (0..units)."""
        n = units or self.units
        return self.p1 + (self.p2 - self.p1) * (t / n)


StyleFn = Callable[[PathData, _Frame], None]

_STYLE_FNS: dict[str, StyleFn] = {}


def line_style(style_id: str):
    """Decorator to register a line texture function."""

    def decorator(fn: StyleFn) -> StyleFn:
        if style_id not in LINE_STYLES:
            raise ValueError(f"Unknown line style: {style_id}")
        if style_id in _STYLE_FNS:
            raise ValueError(f"Duplicate line style: {style_id}")
        _STYLE_FNS[style_id] = fn
        return fn

    return decorator


def _alternate(i: int) -> int:
    return 1 if i % 2 == 0 else -1


@line_style("straight")
def straight(path: PathData, f: _Frame) -> None:
    path.line_to(f.p2)


@line_style("wavy")
def wavy(path: PathData, f: _Frame) -> None:
    amp = f.amplitude * 1.2
    for i in range(f.units):
        off = f.perp * amp * _alternate(i)
        path.cubic_to(f.at(i + 0.33) + off, f.at(i + 0.67) + off, f.at(i + 1))


@line_style("nebuly")
def nebuly(path: PathData, f: _Frame) -> None:
    amp = f.amplitude * 2
    for i in range(f.units):
        off = f.perp * amp * _alternate(i)
        path.cubic_to(f.at(i + 0.25) + off, f.at(i + 0.75) + off, f.at(i + 1))


@line_style("engrailed")
def engrailed(path: PathData, f: _Frame) -> None:
    for i in range(f.units):
        path.quad_to(f.at(i + 0.5) + f.perp * f.amplitude, f.at(i + 1))


@line_style("invected")
def invected(path: PathData, f: _Frame) -> None:
    for i in range(f.units):
        path.quad_to(f.at(i + 0.5) - f.perp * f.amplitude, f.at(i + 1))


@line_style("indented")
def indented(path: PathData, f: _Frame) -> None:
    for i in range(f.units):
        path.line_to(f.at(i + 0.5) + f.perp * f.amplitude * _alternate(i))
        path.line_to(f.at(i + 1))


@line_style("dancetty")
def dancetty(path: PathData, f: _Frame) -> None:
    n = max(3, round(f.units / 2))
    amp = f.amplitude * 2
    for i in range(n):
        path.line_to(f.at(i + 0.5, n) + f.perp * amp * _alternate(i))
        path.line_to(f.at(i + 1, n))


@line_style("embattled")
def embattled(path: PathData, f: _Frame) -> None:
    # Merlons on even units, crenels on odd ones
    off = f.perp * f.amplitude
    for i in range(f.units):
        if i % 2 == 0:
            path.line_to(f.at(i) + off)
            path.line_to(f.at(i + 1) + off)
        path.line_to(f.at(i + 1))


@line_style("raguly")
def raguly(path: PathData, f: _Frame) -> None:
    for i in range(f.units):
        off = f.perp * f.amplitude * _alternate(i)
        path.line_to(f.at(i + 0.3) + off * 0.5)
        path.line_to(f.at(i + 0.5) + off)
        path.line_to(f.at(i + 0.5))
        path.line_to(f.at(i + 1))


@line_style("dovetailed")
def dovetailed(path: PathData, f: _Frame) -> None:
    # Tenons flare outward: narrow at the root, wide at the tip
    for i in range(f.units):
        off = f.perp * f.amplitude * _alternate(i)
        path.line_to(f.at(i + 0.3))
        path.line_to(f.at(i + 0.2) + off)
        path.line_to(f.at(i + 0.8) + off)
        path.line_to(f.at(i + 0.7))
        path.line_to(f.at(i + 1))


class LineStyleGenerator:
    """Builds styled partition lines between two canonical points."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    def generate(self, p1: PointLike, p2: PointLike, style: str = "straight") -> PathData:
        """Styled path from ``p1`` to ``p2``.

        Deterministic for identical input. Unknown styles render straight;
        a zero-length baseline yields the single-point path ``M x y``.
        """
        a, b = as_complex(p1), as_complex(p2)
        path = PathData(start=a)
        fn = _STYLE_FNS.get(style)
        if fn is None:
            logger.warning("Unknown line style %r, drawing straight", style)
            fn = straight
        try:
            frame = self._frame(a, b)
        except GeometryDegenerateError:
            logger.debug("Zero-length baseline at %s, emitting a single point", a)
            return path
        fn(path, frame)
        return path

    def polygon(
        self,
        vertices: list[PointLike],
        style: str = "straight",
        styled_edges: list[bool] | None = None,
    ) -> PathData:
        """Closed polygon whose flagged edges carry the line texture.

        ``styled_edges[i]`` covers the edge from ``vertices[i]`` to the next
        vertex. Edges on the canvas border are usually left straight.
        """
        flags = styled_edges if styled_edges is not None else [True] * len(vertices)
        path = PathData.at(vertices[0])
        for i, flag in enumerate(flags):
            nxt = vertices[(i + 1) % len(vertices)]
            edge_style = style if flag else "straight"
            path.extend(self.generate(vertices[i], nxt, edge_style))
        return path.close()

    def _frame(self, a: complex, b: complex) -> _Frame:
        length = abs(b - a)
        if length < 1e-9:
            raise GeometryDegenerateError("zero-length baseline")
        units = max(self.config.min_line_units, round(length / self.config.line_unit_size))
        return _Frame(p1=a, p2=b, units=units, amplitude=self.config.line_amplitude)


def registered_styles() -> list[str]:
    return list(_STYLE_FNS)
