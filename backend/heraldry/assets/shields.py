"""Shield outline provider: the silhouettes artwork is projected onto.

Five outlines are built in. A directory of ``<type>.svg`` files can add more;
the first painted path outside ``<defs>`` is the outline. Unknown types fall
back to the default outline with a warning. Loaded outlines are cached for
the lifetime of the provider.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from svgpathtools import parse_path

from heraldry.errors import GeometryDegenerateError, ShieldOutlineError
from heraldry.svg.parser import ViewBox, outline_path_data, parse_view_box

logger = logging.getLogger(__name__)

DEFAULT_ALIAS = "default"

BUILTIN_OUTLINES: MappingProxyType[str, str] = MappingProxyType({
    "heater": "M100 0 L180 0 L180 140 L140 200 L100 200 L60 200 L20 140 L20 0 Z",
    "french": (
        "M100 0 L180 0 L180 120 Q180 160,140 180 Q100 200,60 180 Q20 160,20 120 L20 0 Z"
    ),
    "spanish": (
        "M100 0 L170 0 L180 10 L180 140 Q180 180,100 200 Q20 180,20 140 L20 10 L30 0 Z"
    ),
    "english": (
        "M80 0 Q90 20,100 20 Q110 20,120 0 L180 0 L180 140 L140 200 L100 200 L60 200"
        " L20 140 L20 0 Z"
    ),
    "swiss": (
        "M100 0 Q60 20,20 0 L20 140 L60 200 L100 200 L140 200 L180 140 L180 0 Q140 20,100 0 Z"
    ),
})
BUILTIN_VIEW_BOX: ViewBox = (0.0, 0.0, 200.0, 200.0)


@dataclass(frozen=True)
class ShieldOutline:
    shield_type: str
    outline_path: str
    view_box: ViewBox
    bounding_box: tuple[float, float, float, float]  # x, y, width, height

    @property
    def aspect_correction(self) -> float:
        """Width/height of the outline box, the inverse of the vertical stretch."""
        _, _, w, h = self.bounding_box
        return w / h


def outline_bounding_box(d: str, shield_type: str = "") -> tuple[float, float, float, float]:
    """Precise (x, y, width, height) of a path; raises on zero size."""
    try:
        xmin, xmax, ymin, ymax = parse_path(d).bbox()
    except (ValueError, IndexError) as e:
        raise ShieldOutlineError(shield_type, f"{shield_type}: unparseable outline path") from e
    w, h = xmax - xmin, ymax - ymin
    if w <= 0 or h <= 0:
        raise GeometryDegenerateError(f"{shield_type}: zero-size outline box")
    return (xmin, ymin, w, h)


class ShieldOutlineProvider:
    def __init__(self, directory: str | Path | None = None, default: str = "french") -> None:
        self.directory = Path(directory) if directory else None
        self._files: dict[str, Path] = {}
        if self.directory is not None and self.directory.is_dir():
            self._files = {p.stem: p for p in sorted(self.directory.glob("*.svg"))}
        if default not in BUILTIN_OUTLINES and default not in self._files:
            logger.warning("Default shield %r unknown, using french", default)
            default = "french"
        self.default = default
        self._cache: dict[str, ShieldOutline] = {}

    def available(self) -> list[str]:
        return sorted(set(BUILTIN_OUTLINES) | set(self._files))

    def resolve(self, shield_type: str | None) -> str:
        if not shield_type or shield_type == DEFAULT_ALIAS:
            return self.default
        if shield_type in BUILTIN_OUTLINES or shield_type in self._files:
            return shield_type
        logger.warning("Unknown shield type %r, using %s", shield_type, self.default)
        return self.default

    def load(self, shield_type: str | None = None) -> ShieldOutline:
        resolved = self.resolve(shield_type)
        cached = self._cache.get(resolved)
        if cached is not None:
            return cached
        text = self._read_file(resolved) if resolved in self._files else None
        return self._build(resolved, text)

    async def fetch(self, shield_type: str | None = None) -> ShieldOutline:
        """Like ``load``, but reads directory outlines off the event loop."""
        resolved = self.resolve(shield_type)
        cached = self._cache.get(resolved)
        if cached is not None:
            return cached
        text = None
        if resolved in self._files:
            text = await asyncio.to_thread(self._read_file, resolved)
        return self._build(resolved, text)

    def _build(self, resolved: str, text: str | None) -> ShieldOutline:
        # Directory outlines shadow built-ins of the same name
        if text is not None:
            d, view_box = self._parse_file(resolved, text)
        else:
            d, view_box = BUILTIN_OUTLINES[resolved], BUILTIN_VIEW_BOX

        try:
            bbox = outline_bounding_box(d, resolved)
        except GeometryDegenerateError:
            logger.warning("Outline %s has a zero-size box, using its viewBox", resolved)
            bbox = view_box

        outline = ShieldOutline(
            shield_type=resolved, outline_path=d, view_box=view_box, bounding_box=bbox
        )
        self._cache[resolved] = outline
        return outline

    def _read_file(self, shield_type: str) -> str:
        path = self._files[shield_type]
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ShieldOutlineError(shield_type, f"{shield_type}: {e}") from e

    def _parse_file(self, shield_type: str, text: str) -> tuple[str, ViewBox]:
        d = outline_path_data(text)
        if d is None:
            name = self._files[shield_type].name
            raise ShieldOutlineError(shield_type, f"{shield_type}: no outline path in {name}")
        return d, parse_view_box(text) or BUILTIN_VIEW_BOX
