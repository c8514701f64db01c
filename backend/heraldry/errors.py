"""Domain exceptions raised by the rendering engine and asset providers."""

from __future__ import annotations


class HeraldryError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(HeraldryError):
    """A composition references unknown ids or breaks a structural limit."""

    def __init__(self, problems: list[str] | str) -> None:
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class AssetError(HeraldryError):
    """Base class for charge artwork and shield outline failures."""

    def __init__(self, asset_id: str, message: str = "") -> None:
        self.asset_id = asset_id
        super().__init__(message or asset_id)


class AssetNotFound(AssetError):
    """The provider has no asset under the requested id."""


class AssetFetchError(AssetError):
    """The asset exists (or may exist) but could not be loaded."""


class ShieldOutlineError(AssetFetchError):
    """The shield outline could not be loaded. Fatal for a render."""


class GeometryDegenerateError(HeraldryError):
    """Zero-length baseline or zero-size box; callers substitute a fallback."""
