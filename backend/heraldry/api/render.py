"""POST /api/render and /api/blazon -- composition to SVG and text."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from heraldry.dependencies import get_generation_counter, get_pipeline
from heraldry.engine.generation import GenerationCounter
from heraldry.engine.pipeline import RenderPipeline
from heraldry.models.composition import load_composition
from heraldry.models.requests import BlazonRequest, RenderRequest
from heraldry.models.responses import BlazonResponse, RenderResponse, SkippedChargeInfo

router = APIRouter()


@router.post("/render", response_model=RenderResponse)
async def render(
    req: RenderRequest,
    pipeline: RenderPipeline = Depends(get_pipeline),
    counter: GenerationCounter = Depends(get_generation_counter),
) -> RenderResponse:
    composition = load_composition(req.composition)
    result = await pipeline.render(composition, req.shield_type, generation=counter.next())
    return RenderResponse(
        svg=result.svg,
        canonical_svg=result.canonical_svg,
        blazon=result.blazon,
        generation=result.generation,
        shield_type=result.shield_type,
        aspect_correction=result.aspect_correction,
        skipped_charges=[
            SkippedChargeInfo(index=s.index, charge_id=s.charge_id, reason=s.reason)
            for s in result.skipped_charges
        ],
        warnings=result.warnings,
    )


@router.post("/blazon", response_model=BlazonResponse)
async def blazon(req: BlazonRequest, pipeline: RenderPipeline = Depends(get_pipeline)) -> BlazonResponse:
    composition = load_composition(req.composition)
    return BlazonResponse(
        blazon=pipeline.blazon(composition),
        composition=composition.model_dump(by_alias=True),
    )
