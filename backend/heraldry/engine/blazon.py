"""Blazon generator: a deterministic textual description of a composition.

Total by construction: unknown ids degrade to plain wording, and a failing
charge-term collaborator degrades to a generic phrase. Hidden layers are
not blazoned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from heraldry.assets.catalog import charge_blazon
from heraldry.engine.config import RenderConfig
from heraldry.models.composition import Charge, Composition, Ordinary, ShieldField
from heraldry.registry.catalog import DIVISIONS, ORDINARIES, number_word
from heraldry.registry.line_styles import line_adjective
from heraldry.registry.tinctures import tincture_name

logger = logging.getLogger(__name__)

ChargeTermFn = Callable[[str, str, int], str]


def _words(*parts: str) -> str:
    return " ".join(" ".join(parts).split())


class BlazonGenerator:
    def __init__(
        self,
        charge_term: ChargeTermFn | None = None,
        config: RenderConfig | None = None,
    ) -> None:
        self.charge_term = charge_term or charge_blazon
        self.config = config or RenderConfig()

    def field_clause(self, f: ShieldField) -> str:
        t1, t2 = tincture_name(f.tincture1), tincture_name(f.tincture2)
        spec = DIVISIONS.get(f.division_type)
        if spec is None or spec.id == "plain":
            return t1

        line = line_adjective(f.line_style) if spec.supports_line else ""
        if spec.tierced:
            t3 = tincture_name(f.tincture3 or f.tincture1)
            return _words(spec.name, line, f"{t1}, {t2}, and {t3}")
        if spec.numbered:
            n = f.multiplicity or self.config.default_multiplicity
            return _words(spec.name, "of", number_word(n), t1, "and", t2)
        inverted = "inverted" if spec.supports_invert and f.inverted else ""
        return _words(spec.name, line, inverted, t1, "and", t2)

    def ordinary_clause(self, o: Ordinary) -> str | None:
        spec = ORDINARIES.get(o.type)
        if spec is None:
            return None
        noun = spec.singular
        if spec.supports_count and o.count > 1:
            noun = f"{number_word(o.count)} {spec.plural}"
        inverted = spec.invert_word if spec.supports_invert and o.inverted else ""
        return _words(noun, line_adjective(o.line_style), inverted, tincture_name(o.tincture))

    def charge_clause(self, c: Charge) -> str:
        tincture = tincture_name(c.tincture)
        try:
            return _words(self.charge_term(c.charge_id, tincture, c.count))
        except Exception as e:
            logger.warning("Charge term for %s failed: %s", c.charge_id, e)
            term = "a charge" if c.count == 1 else f"{number_word(c.count)} charges"
            return _words(term, tincture)

    def generate(self, composition: Composition) -> str:
        clauses = [self.field_clause(composition.field)]
        for o in composition.ordinaries:
            if o.visible:
                clause = self.ordinary_clause(o)
                if clause:
                    clauses.append(clause)
        for c in composition.charges:
            if c.visible:
                clauses.append(self.charge_clause(c))

        text = ", ".join(c for c in clauses if c)
        return text[:1].upper() + text[1:]
