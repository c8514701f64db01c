"""PathData: a single open or closed sub-path built from svgpathtools segments.

Points are complex numbers (x + yj), the svgpathtools convention. The engine
builds region outlines with ``line_to``/``extend``/``close`` and serializes
them with ``d()``; ``to_polygon()`` gives the shapely geometry used for
coverage checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import numpy as np
from shapely.geometry import Polygon
from svgpathtools import CubicBezier, Line, Path, QuadraticBezier

Segment = Union[Line, QuadraticBezier, CubicBezier]
PointLike = Union[complex, tuple[float, float]]

_EPS = 1e-9


def as_complex(p: PointLike) -> complex:
    if isinstance(p, complex):
        return p
    return complex(p[0], p[1])


def fmt(v: float) -> str:
    """Compact number formatting: two decimals, trailing zeros stripped."""
    s = f"{v:.2f}".rstrip("0").rstrip(".")
    return "0" if s in ("-0", "") else s


def _pt(z: complex) -> str:
    return f"{fmt(z.real)} {fmt(z.imag)}"


@dataclass
class PathData:
    start: complex
    segments: list[Segment] = field(default_factory=list)
    closed: bool = False

    @classmethod
    def at(cls, p: PointLike) -> PathData:
        return cls(start=as_complex(p))

    @classmethod
    def polyline(cls, points: list[PointLike], closed: bool = True) -> PathData:
        path = cls.at(points[0])
        for p in points[1:]:
            path.line_to(p)
        if closed:
            path.close()
        return path

    @property
    def end(self) -> complex:
        return self.segments[-1].end if self.segments else self.start

    @property
    def is_degenerate(self) -> bool:
        return not self.segments

    def line_to(self, p: PointLike) -> PathData:
        self.segments.append(Line(self.end, as_complex(p)))
        return self

    def quad_to(self, control: PointLike, p: PointLike) -> PathData:
        self.segments.append(QuadraticBezier(self.end, as_complex(control), as_complex(p)))
        return self

    def cubic_to(self, c1: PointLike, c2: PointLike, p: PointLike) -> PathData:
        self.segments.append(CubicBezier(self.end, as_complex(c1), as_complex(c2), as_complex(p)))
        return self

    def extend(self, other: PathData) -> PathData:
        """Append another path, bridging with a line when its start is elsewhere."""
        if abs(other.start - self.end) > _EPS:
            self.line_to(other.start)
        self.segments.extend(other.segments)
        return self

    def close(self) -> PathData:
        self.closed = True
        return self

    def reversed(self) -> PathData:
        segs = [seg.reversed() for seg in reversed(self.segments)]
        return PathData(start=self.end, segments=segs, closed=self.closed)

    def d(self) -> str:
        """SVG path data string."""
        parts = [f"M {_pt(self.start)}"]
        for seg in self.segments:
            if isinstance(seg, Line):
                parts.append(f"L {_pt(seg.end)}")
            elif isinstance(seg, QuadraticBezier):
                parts.append(f"Q {_pt(seg.control)} {_pt(seg.end)}")
            else:
                parts.append(f"C {_pt(seg.control1)} {_pt(seg.control2)} {_pt(seg.end)}")
        if self.closed:
            parts.append("Z")
        return " ".join(parts)

    def sample(self, samples_per_curve: int = 12) -> np.ndarray:
        """Boundary points as an Nx2 array; curves are sampled, lines contribute endpoints."""
        pts = [self.start]
        for seg in self.segments:
            if isinstance(seg, Line):
                pts.append(seg.end)
            else:
                pts.extend(seg.point(t) for t in np.linspace(0.0, 1.0, samples_per_curve + 1)[1:])
        return np.array([[z.real, z.imag] for z in pts], dtype=np.float64)

    def to_polygon(self, samples_per_curve: int = 12) -> Polygon:
        pts = self.sample(samples_per_curve)
        if len(pts) < 3:
            return Polygon()
        poly = Polygon(pts)
        if not poly.is_valid:
            poly = poly.buffer(0)
        return poly

    def bbox(self) -> tuple[float, float, float, float]:
        """Exact (xmin, ymin, xmax, ymax) of the segments."""
        if not self.segments:
            return (self.start.real, self.start.imag, self.start.real, self.start.imag)
        xmin, xmax, ymin, ymax = Path(*self.segments).bbox()
        return (xmin, ymin, xmax, ymax)
