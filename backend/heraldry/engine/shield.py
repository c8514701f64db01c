"""Shield projector: maps the canonical 200×200 artwork onto a shield outline.

The artwork is scaled non-uniformly to the outline's bounding box, clipped
by the outline and framed by the outline stroke. Charges are pre-scaled
vertically by ``aspect_correction`` so they come out undistorted.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from typing import Any

from heraldry.assets.shields import ShieldOutline
from heraldry.engine.config import RenderConfig
from heraldry.svg.serializer import serialize_svg

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Projection:
    scale_x: float
    scale_y: float
    translate_x: float
    translate_y: float

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.translate_x + x * self.scale_x, self.translate_y + y * self.scale_y)

    @property
    def transform(self) -> str:
        return (
            f"translate({self.translate_x:.4g},{self.translate_y:.4g}) "
            f"scale({self.scale_x:.6g},{self.scale_y:.6g})"
        )


class ShieldProjector:
    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    def projection(self, outline: ShieldOutline) -> Projection:
        bx, by, bw, bh = outline.bounding_box
        s = self.config.canvas_size
        return Projection(scale_x=bw / s, scale_y=bh / s, translate_x=bx, translate_y=by)

    def aspect_correction(self, outline: ShieldOutline) -> float:
        """Vertical pre-scale for charges: 1/r where r = scale_y/scale_x."""
        if self.config.aspect_correction is not None:
            return self.config.aspect_correction
        return outline.aspect_correction

    def project(
        self,
        artwork: list[dict[str, Any]],
        outline: ShieldOutline,
        defs: list[dict[str, Any]] | None = None,
        title: str = "",
        output_size: float | None = None,
    ) -> str:
        proj = self.projection(outline)
        digest = hashlib.sha1(
            (outline.outline_path + json.dumps(artwork, sort_keys=True)).encode("utf-8")
        ).hexdigest()[:10]
        clip_id = f"shield-clip-{digest}"

        clip = {"tag": "clipPath", "id": clip_id, "children": [{"tag": "path", "d": outline.outline_path}]}
        body = {
            "tag": "g",
            "clip-path": f"url(#{clip_id})",
            "children": [{"tag": "g", "transform": proj.transform, "children": artwork}],
        }
        border = {
            "tag": "path",
            "d": outline.outline_path,
            "fill": "none",
            "stroke": self.config.border_stroke,
            "stroke-width": f"{self.config.border_stroke_width:g}",
            "stroke-linejoin": "round",
            "stroke-linecap": "round",
        }

        vx, vy, vw, vh = outline.view_box
        width = height = None
        if output_size:
            k = output_size / max(vw, vh)
            width, height = round(vw * k, 2), round(vh * k, 2)

        logger.debug("Projected onto %s with %s", outline.shield_type, proj.transform)
        return serialize_svg(
            [body, border],
            canvas_w=vw,
            canvas_h=vh,
            min_x=vx,
            min_y=vy,
            title=title,
            defs=[clip, *(defs or [])],
            width=width,
            height=height,
        )
