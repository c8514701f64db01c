"""Tests for the charge layer compositor."""

from __future__ import annotations

import asyncio

import pytest

from heraldry.engine.charges import ChargeLayerCompositor
from heraldry.errors import AssetFetchError
from heraldry.models.composition import Charge


@pytest.fixture
def compositor(provider, config) -> ChargeLayerCompositor:
    return ChargeLayerCompositor(provider, config)


def _compose(compositor, charges, aspect_correction=1.0):
    return asyncio.run(compositor.compose(charges, aspect_correction))


def test_single_charge_at_fess_point(compositor):
    result = _compose(compositor, [Charge(charge_id="square", tincture="gules")])
    (layer,) = result.layers
    (inst,) = layer.instances
    assert (inst.x, inst.y) == (100.0, 90.0)
    assert inst.scale_x == pytest.approx(1.44)
    assert inst.bounds() == pytest.approx((64, 54, 136, 126))


def test_instance_element_centres_the_viewbox(compositor):
    result = _compose(compositor, [Charge(charge_id="square", tincture="gules")])
    element = result.layers[0].instances[0].to_element()
    assert element["transform"] == "translate(100,90) scale(1.44,1.44)"
    inner = element["children"][0]
    assert inner["transform"] == "translate(-25,-25)"
    assert 'fill="#DC143C"' in inner["content"]


def test_offset_viewbox_is_centred_on_its_own_origin(compositor):
    result = _compose(compositor, [Charge(charge_id="lion4", tincture="or")])
    inner = result.layers[0].instances[0].to_element()["children"][0]
    assert inner["transform"] == "translate(-70,-80)"
    assert "clip-path" not in inner["content"]
    assert 'fill="#FFD700"' in inner["content"]


def test_three_charges_follow_arrangement(compositor):
    result = _compose(
        compositor,
        [Charge(charge_id="mullet5", tincture="argent", count=3, arrangement="twoAndOne")],
    )
    points = [(i.x, i.y) for i in result.layers[0].instances]
    assert points == [(65.0, 60.0), (135.0, 60.0), (100.0, 130.0)]
    # Multiple charges shrink
    assert result.layers[0].instances[0].scale_x == pytest.approx(80 * 0.9 * 0.7 / 100)


def test_unknown_arrangement_uses_first_template(compositor):
    result = _compose(compositor, [Charge(charge_id="square", count=2, arrangement="orle")])
    assert [(i.x, i.y) for i in result.layers[0].instances] == [(100.0, 60.0), (100.0, 130.0)]


def test_aspect_correction_prescales_vertically(compositor):
    result = _compose(compositor, [Charge(charge_id="square")], aspect_correction=0.8)
    inst = result.layers[0].instances[0]
    assert inst.scale_y == pytest.approx(inst.scale_x * 0.8)


def test_degenerate_viewbox_falls_back(compositor):
    result = _compose(compositor, [Charge(charge_id="flat")])
    inst = result.layers[0].instances[0]
    assert inst.view_box == (0.0, 0.0, 100.0, 100.0)


def test_distinct_ids_fetched_once(compositor, provider):
    _compose(compositor, [
        Charge(charge_id="square"),
        Charge(charge_id="mullet5"),
        Charge(charge_id="square", tincture="vert"),
    ])
    assert sorted(provider.calls) == ["mullet5", "square"]


def test_stacking_order_ignores_fetch_completion_order(compositor, provider):
    async def scenario():
        gate = asyncio.Event()
        provider.gates["square"] = gate
        task = asyncio.create_task(compositor.compose([
            Charge(charge_id="square"),
            Charge(charge_id="mullet5"),
        ]))
        # Let the mullet finish first
        for _ in range(5):
            await asyncio.sleep(0)
        gate.set()
        return await task

    result = asyncio.run(scenario())
    assert [layer.index for layer in result.layers] == [0, 1]
    assert [layer.charge.charge_id for layer in result.layers] == ["square", "mullet5"]


def test_failed_charge_is_skipped_and_reported(compositor, provider):
    provider.failures["mullet5"] = AssetFetchError("mullet5", "timed out")
    result = _compose(compositor, [
        Charge(charge_id="mullet5"),
        Charge(charge_id="nope"),
        Charge(charge_id="square"),
    ])
    assert [layer.index for layer in result.layers] == [2]
    assert [(s.index, s.charge_id) for s in result.skipped] == [(0, "mullet5"), (1, "nope")]
    assert result.skipped[0].reason == "timed out"


def test_unexpected_provider_errors_propagate(compositor, provider):
    provider.failures["square"] = RuntimeError("bug")
    with pytest.raises(RuntimeError):
        _compose(compositor, [Charge(charge_id="square")])


def test_hidden_charges_are_not_fetched(compositor, provider):
    result = _compose(compositor, [Charge(charge_id="square", visible=False)])
    assert result.layers == []
    assert provider.calls == []
