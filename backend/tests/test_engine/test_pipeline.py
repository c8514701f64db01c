"""End-to-end tests for the render pipeline and render sessions."""

from __future__ import annotations

import asyncio

import numpy as np
import pytest
from shapely.geometry import Polygon
from svgpathtools import parse_path

from heraldry.assets.shields import ShieldOutlineProvider
from heraldry.engine.generation import GenerationCounter, RenderSession
from heraldry.engine.pipeline import RenderPipeline
from heraldry.errors import AssetFetchError, ShieldOutlineError, ValidationError
from heraldry.models.composition import Charge, Composition, Ordinary, ShieldField, load_composition


def _render(pipeline, composition, shield_type=None, generation=0):
    return asyncio.run(pipeline.render(composition, shield_type, generation=generation))


def test_render_per_pale(pipeline, per_pale):
    result = _render(pipeline, per_pale, "heater")
    assert result.blazon == "Per pale azure and or"
    assert result.shield_type == "heater"
    assert result.aspect_correction == pytest.approx(0.8)
    assert "<title>Per pale azure and or</title>" in result.svg
    assert 'fill="#0047AB"' in result.svg
    assert 'fill="#FFD700"' in result.svg
    assert result.skipped_charges == []


def test_canonical_svg_is_unprojected(pipeline, per_pale):
    result = _render(pipeline, per_pale)
    assert 'viewBox="0 0 200 200"' in result.canonical_svg
    assert "clip-path" not in result.canonical_svg
    assert "clip-path" in result.svg


def test_paint_order_is_field_ordinaries_charges(pipeline):
    composition = Composition(
        field=ShieldField(tincture1="azure"),
        ordinaries=(Ordinary(type="fess", tincture="or"),),
        charges=(Charge(charge_id="square", tincture="gules"),),
    )
    svg = _render(pipeline, composition).canonical_svg
    assert svg.index('data-layer="field"') < svg.index('data-layer="ordinary-0"') < svg.index(
        'data-layer="charge-0"'
    )


def test_default_shield_is_french(pipeline, per_pale):
    assert _render(pipeline, per_pale).shield_type == "french"
    assert _render(pipeline, per_pale, "default").shield_type == "french"


def test_unknown_shield_falls_back(pipeline, per_pale, caplog):
    result = _render(pipeline, per_pale, "kite")
    assert result.shield_type == "french"
    assert "kite" in caplog.text


def test_charges_are_prescaled_for_the_outline(pipeline):
    composition = Composition(charges=(Charge(charge_id="square"),))
    svg = _render(pipeline, composition, "heater").svg
    assert "scale(1.44,1.152)" in svg


def test_failed_charge_is_reported_not_fatal(pipeline, provider, three_mullets):
    provider.failures["mullet5"] = AssetFetchError("mullet5", "unreachable")
    result = _render(pipeline, three_mullets)
    assert [s.charge_id for s in result.skipped_charges] == ["mullet5"]
    assert any("mullet5" in w for w in result.warnings)
    # The blazon still names the charge
    assert result.blazon == "Azure, three mullets argent"
    assert 'data-layer="charge-0"' not in result.svg


def test_validation_error_aborts(pipeline):
    composition = Composition(field=ShieldField(tincture1="mauve"))
    with pytest.raises(ValidationError):
        _render(pipeline, composition)


def test_missing_outline_aborts(pipeline, per_pale, tmp_path):
    (tmp_path / "broken.svg").write_text("<svg><rect/></svg>", encoding="utf-8")
    pipeline.shield_provider = ShieldOutlineProvider(tmp_path)
    with pytest.raises(ShieldOutlineError):
        _render(pipeline, per_pale, "broken")


def test_fur_tinctures_emit_patterns(pipeline):
    composition = Composition(field=ShieldField(tincture1="ermine"))
    svg = _render(pipeline, composition).svg
    assert '<pattern id="fur-ermine"' in svg
    assert 'fill="url(#fur-ermine)"' in svg


def test_contrast_warnings_are_advisory(pipeline):
    composition = Composition(field=ShieldField(division_type="perPale", tincture1="or", tincture2="argent"))
    result = _render(pipeline, composition)
    assert result.warnings == ["Field: or adjoins argent"]


def test_render_is_deterministic(pipeline, three_mullets):
    assert _render(pipeline, three_mullets).svg == _render(pipeline, three_mullets).svg


def test_legacy_document_renders():
    legacy = {
        "division": "perPale",
        "tincture1": "azure",
        "tincture2": "or",
        "chargeEnabled": True,
        "chargeId": "mullet5",
        "chargeTincture": "argent",
        "chargeCount": 3,
        "chargeArrangement": "twoAndOne",
    }
    blazon = RenderPipeline().blazon(load_composition(legacy))
    assert blazon == "Per pale azure and or, three mullets argent"


# ---------------------------------------------------------------------------
# Generations
# ---------------------------------------------------------------------------


def test_generation_counter_is_monotonic():
    counter = GenerationCounter()
    assert [counter.next() for _ in range(3)] == [1, 2, 3]
    assert counter.current == 3


def test_session_keeps_latest_result(pipeline, per_pale):
    session = RenderSession(pipeline)
    result = asyncio.run(session.render(per_pale))
    assert result is not None
    assert result.generation == 1
    assert session.latest is result


def test_stale_render_is_discarded(pipeline, provider, per_pale, three_mullets):
    async def scenario():
        session = RenderSession(pipeline)
        gate = asyncio.Event()
        provider.gates["mullet5"] = gate
        slow = asyncio.create_task(session.render(three_mullets))
        for _ in range(5):
            await asyncio.sleep(0)
        fast = await session.render(per_pale)
        gate.set()
        return session, await slow, fast

    session, slow, fast = asyncio.run(scenario())
    assert slow is None
    assert fast is not None and fast.generation == 2
    assert session.latest is fast


# ---------------------------------------------------------------------------
# Projection properties
# ---------------------------------------------------------------------------


def _outline_polygon(outline) -> Polygon:
    path = parse_path(outline.outline_path)
    return Polygon([(z.real, z.imag) for z in (path.point(t) for t in np.linspace(0, 1, 400))])


@pytest.mark.parametrize("shield_type", ["heater", "french", "spanish", "english", "swiss"])
def test_charges_measure_square_after_projection(pipeline, shield_type):
    outline = pipeline.shield_provider.load(shield_type)
    ac = pipeline.projector.aspect_correction(outline)
    proj = pipeline.projector.projection(outline)
    charges = asyncio.run(pipeline.charges.compose([Charge(charge_id="square")], ac))
    inst = charges.layers[0].instances[0]
    width = 50 * inst.scale_x * proj.scale_x
    height = 50 * inst.scale_y * proj.scale_y
    assert width == pytest.approx(height)


def test_three_lions_land_inside_the_shield(pipeline):
    outline = pipeline.shield_provider.load()
    proj = pipeline.projector.projection(outline)
    ac = pipeline.projector.aspect_correction(outline)
    lions = Charge(charge_id="lion4", tincture="or", count=3, arrangement="twoAndOne")
    charges = asyncio.run(pipeline.charges.compose([lions], ac))
    instances = charges.layers[0].instances
    assert [(i.x, i.y) for i in instances] == [(65.0, 60.0), (135.0, 60.0), (100.0, 130.0)]

    shield = _outline_polygon(outline)
    for inst in instances:
        xmin, ymin, xmax, ymax = inst.bounds()
        corners = [proj.apply(x, y) for x, y in ((xmin, ymin), (xmax, ymin), (xmax, ymax), (xmin, ymax))]
        assert shield.contains(Polygon(corners))
