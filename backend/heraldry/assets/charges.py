"""Charge asset providers: load monochrome charge artwork by charge id.

Providers resolve ids through the charge catalog, parse the SVG into a
``ChargeAsset`` and keep it in an evict-never cache. Failures surface as
``AssetNotFound`` (no such charge) or ``AssetFetchError`` (load failed).
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Protocol, runtime_checkable

import httpx

from heraldry.assets.cache import AssetCache
from heraldry.assets.catalog import CHARGES, ChargeEntry, charge_blazon
from heraldry.errors import AssetFetchError, AssetNotFound
from heraldry.svg.parser import inner_content, parse_view_box
from heraldry.svg.recolor import ChargeAsset

logger = logging.getLogger(__name__)

BUNDLED_CHARGE_DIR = Path(__file__).resolve().parent.parent / "data" / "charges"
DEFAULT_TIMEOUT = 10.0


@runtime_checkable
class ChargeAssetProvider(Protocol):
    async def fetch(self, charge_id: str) -> ChargeAsset: ...

    def blazon_term(self, charge_id: str, tincture_name: str, count: int) -> str: ...


def asset_from_svg(charge_id: str, svg_text: str) -> ChargeAsset:
    if "<svg" not in svg_text.lower():
        raise AssetFetchError(charge_id, f"{charge_id}: not an SVG document")
    view_box = parse_view_box(svg_text)
    if view_box is None:
        logger.warning("Charge %s has no viewBox or size, assuming 100×100", charge_id)
        view_box = (0.0, 0.0, 100.0, 100.0)
    return ChargeAsset(charge_id=charge_id, view_box=view_box, content=inner_content(svg_text))


class _CatalogChargeProvider(ABC):
    """Shared catalog lookup, caching and blazon terms."""

    def __init__(self) -> None:
        self.cache: AssetCache[ChargeAsset] = AssetCache()

    def blazon_term(self, charge_id: str, tincture_name: str, count: int) -> str:
        return charge_blazon(charge_id, tincture_name, count)

    def entry(self, charge_id: str) -> ChargeEntry:
        entry = CHARGES.get(charge_id)
        if entry is None:
            raise AssetNotFound(charge_id, f"Unknown charge: {charge_id}")
        return entry

    async def fetch(self, charge_id: str) -> ChargeAsset:
        entry = self.entry(charge_id)
        return await self.cache.get_or_load(charge_id, lambda: self._load(entry))

    @abstractmethod
    async def _load(self, entry: ChargeEntry) -> ChargeAsset: ...


class DirectoryChargeProvider(_CatalogChargeProvider):
    """Reads ``<root>/<catalog filename>``; defaults to the bundled sample set."""

    def __init__(self, root: str | Path | None = None) -> None:
        super().__init__()
        self.root = Path(root) if root else BUNDLED_CHARGE_DIR

    async def _load(self, entry: ChargeEntry) -> ChargeAsset:
        path = self.root / entry.filename
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError as e:
            raise AssetNotFound(entry.id, f"{entry.id}: {path} not found") from e
        except (OSError, UnicodeDecodeError) as e:
            raise AssetFetchError(entry.id, f"{entry.id}: {e}") from e
        return asset_from_svg(entry.id, text)


class HttpChargeProvider(_CatalogChargeProvider):
    """Fetches ``<base_url>/<catalog filename>`` over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _load(self, entry: ChargeEntry) -> ChargeAsset:
        url = f"{self.base_url}/{entry.filename}"
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            raise AssetFetchError(entry.id, f"{entry.id}: {e}") from e
        if response.status_code == 404:
            raise AssetNotFound(entry.id, f"{entry.id}: {url} not found")
        if response.is_error:
            raise AssetFetchError(entry.id, f"{entry.id}: HTTP {response.status_code} from {url}")
        return asset_from_svg(entry.id, response.text)
