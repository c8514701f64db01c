"""RenderContext: the state of one render as it moves through the stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from heraldry.assets.shields import ShieldOutline
from heraldry.engine.charges import ChargeLayer, SkippedCharge
from heraldry.engine.field import FieldLayout
from heraldry.engine.ordinaries import OrdinaryLayer
from heraldry.models.composition import Composition
from heraldry.registry.tinctures import TINCTURES


@dataclass
class RenderContext:
    composition: Composition
    shield_type: str | None = None
    generation: int = 0
    outline: ShieldOutline | None = None
    aspect_correction: float = 1.0
    field_layout: FieldLayout | None = None
    ordinary_layers: list[OrdinaryLayer] = field(default_factory=list)
    charge_layers: list[ChargeLayer] = field(default_factory=list)
    skipped_charges: list[SkippedCharge] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    completed_stages: list[str] = field(default_factory=list)

    def artwork(self) -> list[dict[str, Any]]:
        """Canonical-space elements in paint order: field, ordinaries, charges."""
        elements: list[dict[str, Any]] = []
        if self.field_layout is not None:
            elements.append({"tag": "g", "data-layer": "field", "children": self.field_layout.elements()})
        elements.extend(layer.to_element() for layer in self.ordinary_layers)
        elements.extend(layer.to_element() for layer in self.charge_layers)
        return elements

    def tinctures_used(self) -> list[str]:
        used: list[str] = []
        if self.field_layout is not None:
            used.extend(r.tincture for r in self.field_layout.regions)
        used.extend(layer.ordinary.tincture for layer in self.ordinary_layers)
        used.extend(layer.charge.tincture for layer in self.charge_layers)
        return list(dict.fromkeys(used))

    def pattern_defs(self) -> list[dict[str, Any]]:
        """``<pattern>`` definitions for the furs in use."""
        defs = []
        for tid in self.tinctures_used():
            tincture = TINCTURES.get(tid)
            if tincture is not None and tincture.pattern is not None:
                defs.append(tincture.pattern.to_element(tincture.pattern_id))
        return defs
