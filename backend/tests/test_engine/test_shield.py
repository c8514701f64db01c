"""Tests for the shield projector."""

from __future__ import annotations

import re

import pytest

from heraldry.assets.shields import ShieldOutlineProvider
from heraldry.engine.config import RenderConfig
from heraldry.engine.shield import ShieldProjector

ARTWORK = [{"tag": "path", "d": "M 0 0 L 200 0 L 200 200 L 0 200 Z", "fill": "#0047AB"}]


@pytest.fixture
def heater():
    return ShieldOutlineProvider().load("heater")


def test_projection_maps_canvas_onto_outline_box(heater):
    proj = ShieldProjector().projection(heater)
    assert (proj.scale_x, proj.scale_y) == pytest.approx((0.8, 1.0))
    assert (proj.translate_x, proj.translate_y) == pytest.approx((20, 0))
    assert proj.apply(0, 0) == pytest.approx((20, 0))
    assert proj.apply(200, 200) == pytest.approx((180, 200))


def test_aspect_correction_from_outline(heater):
    assert ShieldProjector().aspect_correction(heater) == pytest.approx(0.8)


def test_aspect_correction_override(heater):
    projector = ShieldProjector(RenderConfig(aspect_correction=1.0))
    assert projector.aspect_correction(heater) == 1.0


def test_project_clips_and_frames_the_artwork(heater):
    svg = ShieldProjector().project(ARTWORK, heater, title="Azure")
    clip_ids = re.findall(r'<clipPath id="([^"]+)"', svg)
    assert len(clip_ids) == 1
    assert f'clip-path="url(#{clip_ids[0]})"' in svg
    assert 'transform="translate(20,0) scale(0.8,1)"' in svg
    assert 'stroke="#000000"' in svg
    assert 'stroke-width="2"' in svg
    assert 'fill="none"' in svg
    # Outline stroke is painted last, above the artwork
    assert svg.rindex('fill="#0047AB"') < svg.rindex('stroke="#000000"')


def test_clip_ids_differ_between_documents(heater):
    projector = ShieldProjector()
    a = projector.project(ARTWORK, heater)
    b = projector.project([{**ARTWORK[0], "fill": "#FFD700"}], heater)
    id_a = re.search(r'<clipPath id="([^"]+)"', a).group(1)
    id_b = re.search(r'<clipPath id="([^"]+)"', b).group(1)
    assert id_a != id_b
    assert projector.project(ARTWORK, heater) == a


def test_output_size_sets_document_dimensions(heater):
    svg = ShieldProjector().project(ARTWORK, heater, output_size=400)
    assert 'width="400"' in svg
    assert 'height="400"' in svg
    assert 'viewBox="0 0 200 200"' in svg
