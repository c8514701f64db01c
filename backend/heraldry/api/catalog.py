"""GET /api/catalog and /api/charges -- registry contents for editors."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from heraldry.assets.catalog import CHARGES, charges_by_category, search_charges
from heraldry.dependencies import get_pipeline
from heraldry.engine.pipeline import RenderPipeline
from heraldry.models.responses import CatalogResponse, ChargeInfo, NamedInfo, TinctureInfo
from heraldry.registry.catalog import ARRANGEMENTS, CHARGE_SIZES, DIVISIONS, ORDINARIES
from heraldry.registry.line_styles import LINE_STYLES
from heraldry.registry.tinctures import TINCTURES

router = APIRouter()


@router.get("/catalog", response_model=CatalogResponse)
async def catalog(pipeline: RenderPipeline = Depends(get_pipeline)) -> CatalogResponse:
    return CatalogResponse(
        tinctures=[
            TinctureInfo(id=t.id, name=t.name, hex=t.hex, kind=t.kind.value) for t in TINCTURES.values()
        ],
        line_styles=[NamedInfo(id=s.id, name=s.name) for s in LINE_STYLES.values()],
        divisions=[NamedInfo(id=d.id, name=d.name) for d in DIVISIONS.values()],
        ordinaries=[NamedInfo(id=o.id, name=o.singular) for o in ORDINARIES.values()],
        arrangements={count: list(templates) for count, templates in ARRANGEMENTS.items()},
        charge_sizes=dict(CHARGE_SIZES),
        shields=pipeline.shield_provider.available(),
    )


@router.get("/charges", response_model=list[ChargeInfo])
async def charges(
    q: str | None = Query(default=None, description="Search name, term or description"),
    category: str | None = Query(default=None),
) -> list[ChargeInfo]:
    if q:
        entries = search_charges(q)
    elif category:
        entries = charges_by_category(category)
    else:
        entries = list(CHARGES.values())
    if q and category:
        entries = [e for e in entries if e.category == category]
    return [ChargeInfo(id=e.id, name=e.name, category=e.category, blazon_term=e.term) for e in entries]
