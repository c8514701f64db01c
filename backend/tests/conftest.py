"""Shared test fixtures."""

from __future__ import annotations

import asyncio

import pytest

from heraldry.assets.catalog import charge_blazon
from heraldry.assets.charges import asset_from_svg
from heraldry.assets.shields import ShieldOutlineProvider
from heraldry.engine.config import RenderConfig
from heraldry.engine.pipeline import RenderPipeline
from heraldry.errors import AssetNotFound
from heraldry.models.composition import Charge, Composition, Ordinary, ShieldField
from heraldry.svg.recolor import ChargeAsset


# Sample charge artwork

SQUARE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 50 50">
  <rect x="0" y="0" width="50" height="50" fill="#FFFFFF"/>
</svg>'''

OFFSET_SVG = '''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="10 5 120 150">
  <defs><clipPath id="c"><rect x="10" y="5" width="120" height="150"/></clipPath></defs>
  <g clip-path="url(#c)">
    <path fill="white" stroke="#000000" d="M10 5 L130 5 L130 155 L10 155 Z"/>
    <circle cx="70" cy="40" r="4" fill="#000000"/>
  </g>
</svg>'''

STAR_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <path style="fill:#fff;stroke:#000" d="M50 4 L61 38 L97 38 L68 59 L79 94 L50 72 L21 94 L32 59 L3 38 L39 38 Z"/>
</svg>'''

FLAT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 40 0">
  <path fill="#ffffff" d="M0 0 L40 0"/>
</svg>'''


class FakeChargeProvider:
    """In-memory charge provider that records fetches and can hold them open."""

    def __init__(self, svgs: dict[str, str] | None = None) -> None:
        self.svgs = dict(svgs or {})
        self.failures: dict[str, Exception] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []

    async def fetch(self, charge_id: str) -> ChargeAsset:
        self.calls.append(charge_id)
        gate = self.gates.get(charge_id)
        if gate is not None:
            await gate.wait()
        await asyncio.sleep(0)
        if charge_id in self.failures:
            raise self.failures[charge_id]
        if charge_id not in self.svgs:
            raise AssetNotFound(charge_id, f"Unknown charge: {charge_id}")
        return asset_from_svg(charge_id, self.svgs[charge_id])

    def blazon_term(self, charge_id: str, tincture_name: str, count: int) -> str:
        return charge_blazon(charge_id, tincture_name, count)


@pytest.fixture
def provider() -> FakeChargeProvider:
    return FakeChargeProvider({
        "lion4": OFFSET_SVG,
        "mullet5": STAR_SVG,
        "square": SQUARE_SVG,
        "flat": FLAT_SVG,
    })


@pytest.fixture
def config() -> RenderConfig:
    return RenderConfig()


@pytest.fixture
def pipeline(provider: FakeChargeProvider) -> RenderPipeline:
    return RenderPipeline(provider, ShieldOutlineProvider())


@pytest.fixture
def per_pale() -> Composition:
    return Composition(field=ShieldField(division_type="perPale", tincture1="azure", tincture2="or"))


@pytest.fixture
def two_bars() -> Composition:
    return Composition(
        field=ShieldField(tincture1="argent"),
        ordinaries=(Ordinary(type="fess", tincture="gules", count=2),),
    )


@pytest.fixture
def three_mullets() -> Composition:
    return Composition(
        field=ShieldField(tincture1="azure"),
        charges=(Charge(charge_id="mullet5", tincture="argent", count=3, arrangement="twoAndOne"),),
    )
