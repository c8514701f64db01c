"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from heraldry.models.layer_ops import LayerOp


class BlazonRequest(BaseModel):
    composition: dict[str, Any] = Field(..., description="Composition, current or legacy flat schema")


class RenderRequest(BaseModel):
    composition: dict[str, Any] = Field(..., description="Composition, current or legacy flat schema")
    shield_type: str | None = Field(default=None, description="Shield outline id (default if omitted)")


class LayerOpsRequest(BaseModel):
    composition: dict[str, Any] = Field(..., description="Composition to edit")
    operations: list[LayerOp] = Field(..., description="Ordered layer edits")
