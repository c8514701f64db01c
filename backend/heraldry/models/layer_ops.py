"""Layer edit operation models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

LayerKind = Literal["ordinaries", "charges"]


class LayerOp(BaseModel):
    """A single edit of the ordinary or charge layer stack."""

    action: Literal["add", "remove", "update", "moveUp", "moveDown", "duplicate", "toggleVisibility"]
    layer: LayerKind
    index: int | None = None  # Required for everything but add
    values: dict[str, Any] | None = None  # For add/update: layer fields (camelCase or snake_case)
