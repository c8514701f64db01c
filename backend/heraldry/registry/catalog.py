"""Field divisions, ordinaries, charge arrangements and charge sizes."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class DivisionSpec:
    id: str
    name: str  # blazon phrase, capitalized
    supports_line: bool = False
    supports_invert: bool = False
    uses_multiplicity: bool = False
    numbered: bool = False  # "Paly of six"
    tierced: bool = False


@dataclass(frozen=True)
class OrdinarySpec:
    id: str
    singular: str
    plural: str  # used for count 2 and 3
    supports_count: bool = True
    supports_invert: bool = False
    invert_word: str = "inverted"


_DIVISIONS = [
    DivisionSpec("plain", "Plain"),
    DivisionSpec("perPale", "Per pale", supports_line=True),
    DivisionSpec("perFess", "Per fess", supports_line=True),
    DivisionSpec("perBend", "Per bend", supports_line=True),
    DivisionSpec("perBendSinister", "Per bend sinister", supports_line=True),
    DivisionSpec("perChevron", "Per chevron", supports_line=True, supports_invert=True),
    DivisionSpec("quarterly", "Quarterly"),
    DivisionSpec("perSaltire", "Per saltire"),
    DivisionSpec("paly", "Paly", uses_multiplicity=True, numbered=True),
    DivisionSpec("barry", "Barry", uses_multiplicity=True, numbered=True),
    DivisionSpec("bendy", "Bendy", uses_multiplicity=True, numbered=True),
    DivisionSpec("bendySinister", "Bendy sinister", uses_multiplicity=True, numbered=True),
    DivisionSpec("chequy", "Chequy", uses_multiplicity=True),
    DivisionSpec("lozengy", "Lozengy", uses_multiplicity=True),
    DivisionSpec("fusily", "Fusily", uses_multiplicity=True),
    DivisionSpec("gyronny", "Gyronny"),
    DivisionSpec("tiercedPale", "Tierced in pale", supports_line=True, tierced=True),
    DivisionSpec("tiercedFess", "Tierced in fess", supports_line=True, tierced=True),
]

_ORDINARIES = [
    OrdinarySpec("chief", "a chief", "a chief", supports_count=False),
    OrdinarySpec("base", "a base", "a base", supports_count=False),
    OrdinarySpec("fess", "a fess", "bars"),
    OrdinarySpec("pale", "a pale", "pallets"),
    OrdinarySpec("bend", "a bend", "bendlets"),
    OrdinarySpec("bendSinister", "a bend sinister", "bendlets sinister"),
    OrdinarySpec("chevron", "a chevron", "chevronels", supports_invert=True),
    OrdinarySpec("pile", "a pile", "piles", supports_invert=True, invert_word="reversed"),
    OrdinarySpec("cross", "a cross", "a cross", supports_count=False),
    OrdinarySpec("saltire", "a saltire", "a saltire", supports_count=False),
]

DIVISIONS: MappingProxyType[str, DivisionSpec] = MappingProxyType({d.id: d for d in _DIVISIONS})
ORDINARIES: MappingProxyType[str, OrdinarySpec] = MappingProxyType({o.id: o for o in _ORDINARIES})

Point = tuple[float, float]

# Template points per charge count, in canonical coordinates
ARRANGEMENTS: MappingProxyType[int, MappingProxyType[str, tuple[Point, ...]]] = MappingProxyType({
    1: MappingProxyType({
        "fessPoint": ((100.0, 90.0),),
    }),
    2: MappingProxyType({
        "pale": ((100.0, 60.0), (100.0, 130.0)),
        "fess": ((65.0, 90.0), (135.0, 90.0)),
    }),
    3: MappingProxyType({
        "twoAndOne": ((65.0, 60.0), (135.0, 60.0), (100.0, 130.0)),
        "oneAndTwo": ((100.0, 50.0), (65.0, 120.0), (135.0, 120.0)),
        "pale": ((100.0, 40.0), (100.0, 100.0), (100.0, 160.0)),
        "fess": ((50.0, 90.0), (100.0, 90.0), (150.0, 90.0)),
        "bend": ((50.0, 50.0), (100.0, 100.0), (150.0, 150.0)),
    }),
})

CHARGE_SIZES: MappingProxyType[str, float] = MappingProxyType({
    "small": 0.7,
    "medium": 0.9,
    "large": 1.1,
    "xlarge": 1.3,
    "xxlarge": 1.5,
    "massive": 1.7,
    "colossal": 2.0,
    "titanic": 2.3,
})

NUMBER_WORDS: MappingProxyType[int, str] = MappingProxyType({
    1: "one", 2: "two", 3: "three", 4: "four", 5: "five", 6: "six",
    7: "seven", 8: "eight", 9: "nine", 10: "ten", 11: "eleven", 12: "twelve",
})


def arrangement_points(count: int, arrangement: str) -> tuple[Point, ...]:
    """Template points for ``count`` charges; unknown arrangements use the first template."""
    templates = ARRANGEMENTS.get(count) or ARRANGEMENTS[1]
    if arrangement in templates:
        return templates[arrangement]
    return next(iter(templates.values()))


def number_word(n: int) -> str:
    return NUMBER_WORDS.get(n, str(n))
