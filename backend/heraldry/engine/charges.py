"""Charge layer compositor: places recolored charge artwork on the canvas.

Artwork for every distinct charge id is fetched concurrently, once. Stacking
follows array order regardless of which fetch finishes first. A charge whose
artwork cannot be loaded is skipped and reported; the rest still render.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from heraldry.assets.charges import ChargeAssetProvider
from heraldry.engine.config import RenderConfig
from heraldry.errors import AssetError, GeometryDegenerateError
from heraldry.models.composition import Charge
from heraldry.registry.catalog import arrangement_points
from heraldry.registry.tinctures import fill_for
from heraldry.svg.path import fmt
from heraldry.svg.recolor import ChargeAsset

logger = logging.getLogger(__name__)

_FALLBACK_VIEW_BOX = (0.0, 0.0, 100.0, 100.0)


@dataclass
class ChargeInstance:
    """One placed copy of a charge's artwork."""

    x: float
    y: float
    scale_x: float
    scale_y: float
    view_box: tuple[float, float, float, float]
    content: str

    def to_element(self) -> dict[str, Any]:
        min_x, min_y, w, h = self.view_box
        return {
            "tag": "g",
            "transform": f"translate({fmt(self.x)},{fmt(self.y)}) "
            f"scale({self.scale_x:.4g},{self.scale_y:.4g})",
            "children": [
                {
                    "tag": "g",
                    "transform": f"translate({fmt(-(min_x + w / 2))},{fmt(-(min_y + h / 2))})",
                    "content": self.content,
                }
            ],
        }

    def bounds(self) -> tuple[float, float, float, float]:
        """Canonical (xmin, ymin, xmax, ymax) of the artwork's viewBox."""
        _, _, w, h = self.view_box
        hw, hh = w * self.scale_x / 2, h * self.scale_y / 2
        return (self.x - hw, self.y - hh, self.x + hw, self.y + hh)


@dataclass
class ChargeLayer:
    index: int
    charge: Charge
    instances: list[ChargeInstance] = field(default_factory=list)

    def to_element(self) -> dict[str, Any]:
        return {
            "tag": "g",
            "data-layer": f"charge-{self.index}",
            "children": [inst.to_element() for inst in self.instances],
        }


@dataclass
class SkippedCharge:
    index: int
    charge_id: str
    reason: str


@dataclass
class ChargeComposition:
    layers: list[ChargeLayer] = field(default_factory=list)
    skipped: list[SkippedCharge] = field(default_factory=list)


def _usable_view_box(asset: ChargeAsset) -> tuple[float, float, float, float]:
    _, _, w, h = asset.view_box
    if w <= 0 or h <= 0:
        raise GeometryDegenerateError(f"{asset.charge_id}: zero-size viewBox")
    return asset.view_box


class ChargeLayerCompositor:
    def __init__(self, provider: ChargeAssetProvider, config: RenderConfig | None = None) -> None:
        self.provider = provider
        self.config = config or RenderConfig()

    async def fetch_all(self, charge_ids: list[str]) -> dict[str, ChargeAsset | AssetError]:
        """Fetch each distinct id once, concurrently. Asset errors are returned, not raised."""
        unique = list(dict.fromkeys(charge_ids))
        results = await asyncio.gather(
            *(self.provider.fetch(cid) for cid in unique), return_exceptions=True
        )
        fetched: dict[str, ChargeAsset | AssetError] = {}
        for cid, result in zip(unique, results):
            if isinstance(result, BaseException) and not isinstance(result, AssetError):
                raise result
            fetched[cid] = result
        return fetched

    def place(self, index: int, charge: Charge, asset: ChargeAsset, aspect_correction: float) -> ChargeLayer:
        try:
            view_box = _usable_view_box(asset)
        except GeometryDegenerateError:
            logger.warning("Charge %s has a degenerate viewBox, using 100×100", asset.charge_id)
            view_box = _FALLBACK_VIEW_BOX

        _, _, w, h = view_box
        scale = charge.scale
        if charge.count > 1:
            scale *= self.config.multi_charge_scale
        s = self.config.charge_base_size * scale / max(w, h)
        content = asset.recolored(fill_for(charge.tincture))

        instances = [
            ChargeInstance(
                x=x, y=y, scale_x=s, scale_y=s * aspect_correction, view_box=view_box, content=content
            )
            for x, y in arrangement_points(charge.count, charge.arrangement)
        ]
        return ChargeLayer(index=index, charge=charge, instances=instances)

    async def compose(
        self,
        charges: tuple[Charge, ...] | list[Charge],
        aspect_correction: float = 1.0,
    ) -> ChargeComposition:
        visible = [(i, c) for i, c in enumerate(charges) if c.visible]
        result = ChargeComposition()
        if not visible:
            return result

        assets = await self.fetch_all([c.charge_id for _, c in visible])
        for i, charge in visible:
            asset = assets[charge.charge_id]
            if isinstance(asset, AssetError):
                logger.warning("Skipping charge %d (%s): %s", i, charge.charge_id, asset)
                result.skipped.append(SkippedCharge(i, charge.charge_id, str(asset)))
                continue
            result.layers.append(self.place(i, charge, asset, aspect_correction))
        return result
