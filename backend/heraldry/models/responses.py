"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    environment: str = "development"
    tinctures_registered: int = 0
    line_styles_registered: int = 0
    divisions_registered: int = 0


class BlazonResponse(BaseModel):
    blazon: str
    composition: dict[str, Any]


class SkippedChargeInfo(BaseModel):
    index: int
    charge_id: str
    reason: str


class RenderResponse(BaseModel):
    svg: str
    canonical_svg: str
    blazon: str
    generation: int
    shield_type: str
    aspect_correction: float
    skipped_charges: list[SkippedChargeInfo] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class LayerOpsResponse(BaseModel):
    composition: dict[str, Any]
    blazon: str
    skipped: list[str] = Field(default_factory=list)


class TinctureInfo(BaseModel):
    id: str
    name: str
    hex: str
    kind: str


class NamedInfo(BaseModel):
    id: str
    name: str


class ChargeInfo(BaseModel):
    id: str
    name: str
    category: str
    blazon_term: str


class CatalogResponse(BaseModel):
    tinctures: list[TinctureInfo] = Field(default_factory=list)
    line_styles: list[NamedInfo] = Field(default_factory=list)
    divisions: list[NamedInfo] = Field(default_factory=list)
    ordinaries: list[NamedInfo] = Field(default_factory=list)
    arrangements: dict[int, list[str]] = Field(default_factory=dict)
    charge_sizes: dict[str, float] = Field(default_factory=dict)
    shields: list[str] = Field(default_factory=list)
