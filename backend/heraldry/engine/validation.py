"""Pre-render checks: hard validation and the advisory rule of tincture."""

from __future__ import annotations

from heraldry.errors import ValidationError
from heraldry.models.composition import MAX_LAYERS, Composition
from heraldry.registry.catalog import DIVISIONS
from heraldry.registry.line_styles import LINE_STYLES
from heraldry.registry.tinctures import TINCTURES, tincture_name, violates_rule_of_tincture

# Divisions whose first two tinctures touch along a partition line
_ADJACENT_DIVISIONS = frozenset({
    "perPale", "perFess", "perBend", "perBendSinister", "quarterly", "perSaltire", "perChevron",
})


def validate_composition(composition: Composition) -> None:
    """Raise ValidationError listing every unknown id and structural violation."""
    problems: list[str] = []

    def _tincture(where: str, tid: str | None) -> None:
        if tid is not None and tid not in TINCTURES:
            problems.append(f"{where}: unknown tincture {tid!r}")

    def _line(where: str, style: str) -> None:
        if style not in LINE_STYLES:
            problems.append(f"{where}: unknown line style {style!r}")

    def _count(where: str, count: int) -> None:
        if not 1 <= count <= MAX_LAYERS:
            problems.append(f"{where}: count {count} outside 1..{MAX_LAYERS}")

    f = composition.field
    _tincture("field.tincture1", f.tincture1)
    _tincture("field.tincture2", f.tincture2)
    _tincture("field.tincture3", f.tincture3)
    _line("field.lineStyle", f.line_style)

    for kind, layers in (("ordinaries", composition.ordinaries), ("charges", composition.charges)):
        if len(layers) > MAX_LAYERS:
            problems.append(f"{kind}: {len(layers)} layers, at most {MAX_LAYERS} allowed")

    for i, o in enumerate(composition.ordinaries):
        _tincture(f"ordinaries[{i}].tincture", o.tincture)
        _line(f"ordinaries[{i}].lineStyle", o.line_style)
        _count(f"ordinaries[{i}].count", o.count)

    for i, c in enumerate(composition.charges):
        _tincture(f"charges[{i}].tincture", c.tincture)
        _count(f"charges[{i}].count", c.count)

    if problems:
        raise ValidationError(problems)


def check_tincture_contrast(composition: Composition) -> list[str]:
    """Advisory metal-on-metal / colour-on-colour warnings. Never raises."""
    warnings: list[str] = []
    f = composition.field
    divided = f.division_type in DIVISIONS and f.division_type != "plain"

    if f.division_type in _ADJACENT_DIVISIONS and violates_rule_of_tincture(f.tincture1, f.tincture2):
        warnings.append(
            f"Field: {tincture_name(f.tincture1)} adjoins {tincture_name(f.tincture2)}"
        )

    # A divided field shows more than one tincture beneath each layer
    if divided:
        return warnings

    beneath = f.tincture1
    for i, o in enumerate(composition.ordinaries):
        if o.visible and violates_rule_of_tincture(o.tincture, beneath):
            warnings.append(
                f"Ordinary {i + 1}: {tincture_name(o.tincture)} on {tincture_name(beneath)}"
            )
    if not any(o.visible for o in composition.ordinaries):
        for i, c in enumerate(composition.charges):
            if c.visible and violates_rule_of_tincture(c.tincture, beneath):
                warnings.append(
                    f"Charge {i + 1}: {tincture_name(c.tincture)} on {tincture_name(beneath)}"
                )
    return warnings
