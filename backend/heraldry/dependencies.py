"""FastAPI dependency injection."""

from __future__ import annotations

import logging
from functools import lru_cache

from heraldry.assets.charges import ChargeAssetProvider, DirectoryChargeProvider, HttpChargeProvider
from heraldry.assets.shields import ShieldOutlineProvider
from heraldry.config import settings
from heraldry.engine.generation import GenerationCounter
from heraldry.engine.pipeline import RenderPipeline

logger = logging.getLogger(__name__)


def get_settings():
    return settings


@lru_cache
def get_pipeline() -> RenderPipeline:
    provider: ChargeAssetProvider
    if settings.charge_asset_base_url:
        logger.info("Charge artwork from %s", settings.charge_asset_base_url)
        provider = HttpChargeProvider(settings.charge_asset_base_url)
    else:
        provider = DirectoryChargeProvider(settings.charge_asset_dir or None)
    shields = ShieldOutlineProvider(settings.shield_asset_dir or None, settings.default_shield)
    return RenderPipeline(provider, shields, output_size=settings.output_size)


@lru_cache
def get_generation_counter() -> GenerationCounter:
    return GenerationCounter()
