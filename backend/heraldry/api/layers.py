"""POST /api/layers -- apply layer stack edits to a composition."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from heraldry.dependencies import get_pipeline
from heraldry.engine.layers import apply_layer_ops
from heraldry.engine.pipeline import RenderPipeline
from heraldry.models.composition import load_composition
from heraldry.models.requests import LayerOpsRequest
from heraldry.models.responses import LayerOpsResponse

router = APIRouter()


@router.post("/layers", response_model=LayerOpsResponse)
async def layers(req: LayerOpsRequest, pipeline: RenderPipeline = Depends(get_pipeline)) -> LayerOpsResponse:
    composition, skipped = apply_layer_ops(load_composition(req.composition), req.operations)
    return LayerOpsResponse(
        composition=composition.model_dump(by_alias=True),
        blazon=pipeline.blazon(composition),
        skipped=skipped,
    )
