"""Composition models: the immutable description of a coat of arms.

JSON uses camelCase (``divisionType``, ``lineStyle``, ``chargeId``); Python
attributes are snake_case. Every model is frozen: edits produce new values
(see ``heraldry.engine.layers``).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

import pydantic
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from heraldry.errors import ValidationError
from heraldry.registry.catalog import CHARGE_SIZES, DIVISIONS

MAX_LAYERS = 3

Thickness = Literal["narrow", "normal", "wide"]
ChargeSize = Literal["small", "medium", "large", "xlarge", "xxlarge", "massive", "colossal", "titanic"]


class _Frozen(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ShieldField(_Frozen):
    division_type: str = Field(
        default="plain",
        alias="divisionType",
        validation_alias=AliasChoices("divisionType", "division", "division_type"),
    )
    tincture1: str = "azure"
    tincture2: str = "or"
    tincture3: str | None = None  # tierced divisions only
    line_style: str = "straight"
    multiplicity: int | None = Field(default=None, ge=2, le=12)
    inverted: bool = False


class Ordinary(_Frozen):
    type: str = "chief"
    tincture: str = "or"
    line_style: str = "straight"
    thickness: Thickness = "normal"
    count: int = Field(default=1, ge=1, le=3)
    inverted: bool = False
    visible: bool = True


class Charge(_Frozen):
    charge_id: str = "lion4"
    tincture: str = "or"
    size: ChargeSize = "medium"
    count: int = Field(default=1, ge=1, le=3)
    arrangement: str = "fessPoint"
    visible: bool = True

    @property
    def scale(self) -> float:
        return CHARGE_SIZES[self.size]


class Composition(_Frozen):
    version: Literal[2] = 2
    field: ShieldField = Field(default_factory=ShieldField)
    ordinaries: tuple[Ordinary, ...] = Field(default=(), max_length=MAX_LAYERS)
    charges: tuple[Charge, ...] = Field(default=(), max_length=MAX_LAYERS)


class LegacyComposition(_Frozen):
    """The flat, single-charge schema used before layered compositions."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="ignore"
    )

    version: Literal[1] = 1
    division: str = "plain"
    tincture1: str = "azure"
    tincture2: str = "or"
    tincture3: str | None = None
    line_style: str = "straight"
    count: int | None = None  # stripe count of paly/barry/bendy
    inverted: bool = False
    charge_enabled: bool = False
    charge_id: str | None = None
    external_charge_id: str | None = None
    charge_tincture: str = "or"
    charge_size: str = "medium"
    charge_count: int = 1
    charge_arrangement: str = "fessPoint"


def migrate(legacy: LegacyComposition) -> Composition:
    """Lift a flat legacy document into the layered form. One-way."""
    spec = DIVISIONS.get(legacy.division)
    multiplicity = None
    if spec is not None and spec.uses_multiplicity and legacy.count and 2 <= legacy.count <= 12:
        multiplicity = legacy.count

    field = ShieldField(
        division_type=legacy.division,
        tincture1=legacy.tincture1,
        tincture2=legacy.tincture2,
        tincture3=legacy.tincture3,
        line_style=legacy.line_style,
        multiplicity=multiplicity,
        inverted=legacy.inverted,
    )

    charges: tuple[Charge, ...] = ()
    charge_id = legacy.external_charge_id or legacy.charge_id
    if legacy.charge_enabled and charge_id:
        charges = (
            Charge(
                charge_id=charge_id,
                tincture=legacy.charge_tincture,
                size=legacy.charge_size if legacy.charge_size in CHARGE_SIZES else "medium",
                count=min(max(legacy.charge_count, 1), MAX_LAYERS),
                arrangement=legacy.charge_arrangement,
            ),
        )
    return Composition(field=field, charges=charges)


_LAYERED_KEYS = frozenset({"field", "ordinaries", "charges"})
_LEGACY_KEYS = frozenset(
    key
    for name, info in LegacyComposition.model_fields.items()
    if name != "version"
    for key in (name, info.alias)
    if key
)


def _schema_version(data: Mapping[str, Any]) -> int:
    version = data.get("version")
    if version is not None:
        return int(version)
    # Unversioned documents are legacy only when they carry flat legacy keys
    if _LAYERED_KEYS.isdisjoint(data) and not _LEGACY_KEYS.isdisjoint(data):
        return 1
    return 2


def load_composition(data: Mapping[str, Any] | Composition) -> Composition:
    """Parse a current or legacy composition document.

    Raises ``heraldry.errors.ValidationError`` on malformed input.
    """
    if isinstance(data, Composition):
        return data
    try:
        version = _schema_version(data)
        if version == 1:
            return migrate(LegacyComposition.model_validate(data))
        if version == 2:
            return Composition.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(
            [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        ) from e
    except (TypeError, ValueError) as e:
        raise ValidationError(f"version: {e}") from e
    raise ValidationError(f"version: unsupported schema version {version}")
