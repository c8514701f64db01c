"""Layer stack operations on immutable compositions.

Index 0 is the bottom layer. "Up" moves a layer toward index 0 and "down"
toward the end, so ``move_layer_down(move_layer_up(c, k, i), k, i - 1) == c``
for ``i > 0``. Every operation returns a new Composition.
"""

from __future__ import annotations

import logging
from typing import Any

import pydantic

from heraldry.errors import ValidationError
from heraldry.models.composition import MAX_LAYERS, Charge, Composition, Ordinary
from heraldry.models.layer_ops import LayerKind, LayerOp

logger = logging.getLogger(__name__)

_LAYER_MODELS: dict[str, type[Ordinary] | type[Charge]] = {
    "ordinaries": Ordinary,
    "charges": Charge,
}


def _layers(composition: Composition, kind: LayerKind) -> list[Any]:
    if kind not in _LAYER_MODELS:
        raise ValueError(f"Unknown layer kind: {kind}")
    return list(getattr(composition, kind))


def _with(composition: Composition, kind: LayerKind, layers: list[Any]) -> Composition:
    return composition.model_copy(update={kind: tuple(layers)})


def _check_index(layers: list[Any], index: int) -> None:
    if not 0 <= index < len(layers):
        raise IndexError(f"Layer index {index} out of range (0..{len(layers) - 1})")


def _build(kind: LayerKind, values: dict[str, Any]) -> Ordinary | Charge:
    try:
        return _LAYER_MODELS[kind].model_validate(values)
    except pydantic.ValidationError as e:
        raise ValidationError(
            [f"{kind}.{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        ) from e


def add_layer(composition: Composition, kind: LayerKind, values: dict[str, Any] | None = None) -> Composition:
    """Append a layer on top; defaults to a chief or a lion rampant, both or."""
    layers = _layers(composition, kind)
    if len(layers) >= MAX_LAYERS:
        raise ValidationError(f"{kind}: at most {MAX_LAYERS} layers allowed")
    layers.append(_build(kind, values or {}))
    return _with(composition, kind, layers)


def remove_layer(composition: Composition, kind: LayerKind, index: int) -> Composition:
    layers = _layers(composition, kind)
    _check_index(layers, index)
    del layers[index]
    return _with(composition, kind, layers)


def update_layer(
    composition: Composition, kind: LayerKind, index: int, values: dict[str, Any]
) -> Composition:
    """Merge ``values`` into one layer and revalidate it."""
    layers = _layers(composition, kind)
    _check_index(layers, index)
    fields = _LAYER_MODELS[kind].model_fields
    aliased = {(fields[k].alias or k) if k in fields else k: v for k, v in values.items()}
    layers[index] = _build(kind, {**layers[index].model_dump(by_alias=True), **aliased})
    return _with(composition, kind, layers)


def move_layer_up(composition: Composition, kind: LayerKind, index: int) -> Composition:
    """Swap with the layer below (index - 1). No-op for index 0.

    ``move_layer_down(move_layer_up(c, kind, i), kind, i - 1) == c`` holds for
    ``i > 0``; at index 0 the up move does nothing, so a following down move
    at 0 is not undone.
    """
    layers = _layers(composition, kind)
    _check_index(layers, index)
    if index == 0:
        return composition
    layers[index - 1], layers[index] = layers[index], layers[index - 1]
    return _with(composition, kind, layers)


def move_layer_down(composition: Composition, kind: LayerKind, index: int) -> Composition:
    """Swap with the layer above (index + 1). No-op for the last index."""
    layers = _layers(composition, kind)
    _check_index(layers, index)
    if index == len(layers) - 1:
        return composition
    layers[index], layers[index + 1] = layers[index + 1], layers[index]
    return _with(composition, kind, layers)


def duplicate_layer(composition: Composition, kind: LayerKind, index: int) -> Composition:
    """Insert a copy directly after ``index``."""
    layers = _layers(composition, kind)
    _check_index(layers, index)
    if len(layers) >= MAX_LAYERS:
        raise ValidationError(f"{kind}: at most {MAX_LAYERS} layers allowed")
    layers.insert(index + 1, layers[index])
    return _with(composition, kind, layers)


def toggle_visibility(composition: Composition, kind: LayerKind, index: int) -> Composition:
    layers = _layers(composition, kind)
    _check_index(layers, index)
    layers[index] = layers[index].model_copy(update={"visible": not layers[index].visible})
    return _with(composition, kind, layers)


def apply_layer_op(composition: Composition, op: LayerOp) -> Composition:
    if op.action == "add":
        return add_layer(composition, op.layer, op.values)
    if op.index is None:
        raise ValidationError(f"{op.action}: index is required")
    if op.action == "update":
        return update_layer(composition, op.layer, op.index, op.values or {})
    fn = {
        "remove": remove_layer,
        "moveUp": move_layer_up,
        "moveDown": move_layer_down,
        "duplicate": duplicate_layer,
        "toggleVisibility": toggle_visibility,
    }[op.action]
    return fn(composition, op.layer, op.index)


def apply_layer_ops(composition: Composition, ops: list[LayerOp]) -> tuple[Composition, list[str]]:
    """Apply ops in order. Invalid ops are skipped and reported, the rest still apply."""
    skipped: list[str] = []
    for n, op in enumerate(ops):
        try:
            composition = apply_layer_op(composition, op)
        except (IndexError, ValidationError) as e:
            logger.warning("Layer op %d (%s %s): %s, skipping", n, op.action, op.layer, e)
            skipped.append(f"op {n} ({op.action}): {e}")
    return composition, skipped
