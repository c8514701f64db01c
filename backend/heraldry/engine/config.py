"""Render configuration: geometric constants of the canonical 200×200 space."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RenderConfig:
    """Tunable constants shared by the compositors and the projector."""

    # Canonical drawing space
    canvas_size: float = 200.0

    # Line texture synthesis
    line_unit_size: float = 20.0
    line_amplitude: float = 12.0
    min_line_units: int = 4

    # Ordinary band widths at normal thickness
    chief_height: float = 60.0
    base_height: float = 60.0
    fess_width: float = 50.0
    pale_width: float = 50.0
    bend_width: float = 45.0
    chevron_width: float = 45.0
    cross_width: float = 50.0
    saltire_width: float = 40.0
    thickness: dict[str, float] = field(
        default_factory=lambda: {"narrow": 0.6, "normal": 1.0, "wide": 1.4}
    )
    # Width factor of repeated ordinaries (bars, pallets, bendlets, chevronels)
    diminutive_factor: float = 0.6
    fess_spacing: float = 30.0
    pale_spacing: float = 20.0
    bend_spacing: float = 15.0
    chevron_spacing: float = 12.0

    # Divisions
    default_multiplicity: int = 6
    lozenge_ratio: float = 1.4
    fusil_ratio: float = 2.0

    # Charges
    charge_base_size: float = 80.0
    multi_charge_scale: float = 0.7

    # Projection
    border_stroke: str = "#000000"
    border_stroke_width: float = 2.0
    # None = derive per outline from its bounding box
    aspect_correction: float | None = None
