"""Health check."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from heraldry.config import Settings
from heraldry.dependencies import get_settings
from heraldry.models.responses import HealthResponse
from heraldry.registry.catalog import DIVISIONS
from heraldry.registry.line_styles import LINE_STYLES
from heraldry.registry.tinctures import TINCTURES

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        environment=settings.heraldry_env,
        tinctures_registered=len(TINCTURES),
        line_styles_registered=len(LINE_STYLES),
        divisions_registered=len(DIVISIONS),
    )
