"""Render pipeline: composition to projected SVG, plus its blazon.

Stages run in a fixed order: validate, outline, field, ordinaries, charges,
project. Validation errors and a missing shield outline abort the render;
failing charges are skipped and reported in the result.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from heraldry.assets.charges import ChargeAssetProvider, DirectoryChargeProvider
from heraldry.assets.shields import ShieldOutlineProvider
from heraldry.engine.blazon import BlazonGenerator
from heraldry.engine.charges import ChargeLayerCompositor, SkippedCharge
from heraldry.engine.config import RenderConfig
from heraldry.engine.context import RenderContext
from heraldry.engine.field import FieldCompositor
from heraldry.engine.lines import LineStyleGenerator
from heraldry.engine.ordinaries import OrdinaryLayerRenderer
from heraldry.engine.shield import ShieldProjector
from heraldry.engine.validation import check_tincture_contrast, validate_composition
from heraldry.models.composition import Composition
from heraldry.svg.serializer import serialize_svg

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    svg: str
    canonical_svg: str
    blazon: str
    generation: int
    shield_type: str
    aspect_correction: float
    skipped_charges: list[SkippedCharge] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@contextmanager
def _stage(ctx: RenderContext, name: str) -> Iterator[None]:
    t0 = time.perf_counter()
    yield
    ctx.completed_stages.append(name)
    logger.debug("  %s completed in %.1fms", name, (time.perf_counter() - t0) * 1000)


class RenderPipeline:
    def __init__(
        self,
        charge_provider: ChargeAssetProvider | None = None,
        shield_provider: ShieldOutlineProvider | None = None,
        config: RenderConfig | None = None,
        output_size: float | None = None,
    ) -> None:
        self.config = config or RenderConfig()
        self.charge_provider = charge_provider or DirectoryChargeProvider()
        self.shield_provider = shield_provider or ShieldOutlineProvider()
        self.output_size = output_size

        lines = LineStyleGenerator(self.config)
        self.field = FieldCompositor(self.config, lines)
        self.ordinaries = OrdinaryLayerRenderer(self.config, lines)
        self.charges = ChargeLayerCompositor(self.charge_provider, self.config)
        self.projector = ShieldProjector(self.config)
        self.blazoner = BlazonGenerator(self.charge_provider.blazon_term, self.config)

    def blazon(self, composition: Composition) -> str:
        return self.blazoner.generate(composition)

    async def render(
        self,
        composition: Composition,
        shield_type: str | None = None,
        generation: int = 0,
    ) -> RenderResult:
        """Run every stage and return the projected document."""
        start = time.perf_counter()
        ctx = RenderContext(composition=composition, shield_type=shield_type, generation=generation)

        with _stage(ctx, "validate"):
            validate_composition(composition)
            ctx.warnings.extend(check_tincture_contrast(composition))

        with _stage(ctx, "outline"):
            ctx.outline = await self.shield_provider.fetch(shield_type)
            ctx.aspect_correction = self.projector.aspect_correction(ctx.outline)

        with _stage(ctx, "field"):
            ctx.field_layout = self.field.compose(composition.field)

        with _stage(ctx, "ordinaries"):
            ctx.ordinary_layers = self.ordinaries.render(composition.ordinaries)

        with _stage(ctx, "charges"):
            charges = await self.charges.compose(composition.charges, ctx.aspect_correction)
            ctx.charge_layers = charges.layers
            ctx.skipped_charges = charges.skipped
            ctx.warnings.extend(
                f"Charge {s.index + 1} ({s.charge_id}) skipped: {s.reason}" for s in charges.skipped
            )

        blazon = self.blazon(composition)
        with _stage(ctx, "project"):
            artwork = ctx.artwork()
            defs = ctx.pattern_defs()
            size = self.config.canvas_size
            canonical = serialize_svg(artwork, canvas_w=size, canvas_h=size, title=blazon, defs=defs)
            svg = self.projector.project(
                artwork, ctx.outline, defs=defs, title=blazon, output_size=self.output_size
            )

        logger.info(
            "Render %d complete: %d stages, %d skipped charges in %.0fms",
            generation,
            len(ctx.completed_stages),
            len(ctx.skipped_charges),
            (time.perf_counter() - start) * 1000,
        )
        return RenderResult(
            svg=svg,
            canonical_svg=canonical,
            blazon=blazon,
            generation=generation,
            shield_type=ctx.outline.shield_type,
            aspect_correction=ctx.aspect_correction,
            skipped_charges=ctx.skipped_charges,
            warnings=ctx.warnings,
        )
