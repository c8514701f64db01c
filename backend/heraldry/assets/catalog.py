"""Charge catalog: artwork filenames and blazon terms keyed by charge id."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from heraldry.registry.catalog import number_word


@dataclass(frozen=True)
class ChargeEntry:
    id: str
    name: str
    category: str
    filename: str
    term: str  # singular blazon term with article, e.g. "a lion rampant"
    plural: str = ""  # without number word; derived from ``term`` when empty
    description: str = ""


CHARGE_CATEGORIES: MappingProxyType[str, str] = MappingProxyType({
    "beasts": "Beasts",
    "birds": "Birds",
    "seaCreatures": "Sea Creatures",
    "mythical": "Mythical",
    "insects": "Insects",
    "weapons": "Weapons",
    "flora": "Flora",
    "architecture": "Architecture",
    "celestial": "Celestial",
})

_ENTRIES = [
    ChargeEntry("lion4", "Lion Rampant", "beasts", "lion-4-mono.svg", "a lion rampant",
                description="A lion rampant"),
    ChargeEntry("lionPassant", "Lion Passant Reguardant", "beasts",
                "lion-passant-reguardant-mono.svg", "a lion passant reguardant",
                description="A lion walking, looking backward"),
    ChargeEntry("bearRampant2", "Bear Rampant", "beasts", "bear-rampant-2-mono.svg",
                "a bear rampant"),
    ChargeEntry("boarPassant", "Boar Passant", "beasts", "boar-passant-2-mono.svg",
                "a boar passant"),
    ChargeEntry("bearsHeadErased", "Bear's Head Erased", "beasts", "bears-head-erased-5-mono.svg",
                "a bear's head erased", plural="bears' heads erased"),
    ChargeEntry("stagsHeadCabossed", "Stag's Head Cabossed", "beasts",
                "stags-head-cabossed-5-mono.svg", "a stag's head cabossed",
                plural="stags' heads cabossed"),
    ChargeEntry("eagle5", "Eagle Displayed", "birds", "eagle-5-mono.svg", "an eagle displayed",
                description="An eagle with wings spread"),
    ChargeEntry("owl8", "Owl", "birds", "owl-8-mono.svg", "an owl"),
    ChargeEntry("escallop", "Escallop", "seaCreatures", "escallop-3-mono.svg", "an escallop",
                description="A scallop shell"),
    ChargeEntry("dragon6", "Dragon", "mythical", "dragon-6-mono.svg", "a dragon"),
    ChargeEntry("dragonPassant", "Dragon Passant", "mythical", "dragon-passant-6-mono.svg",
                "a dragon passant"),
    ChargeEntry("bee1", "Bee (Displayed)", "insects", "bee-1-mono.svg", "a bee volant"),
    ChargeEntry("sword10", "Sword (Simple)", "weapons", "sword-10-mono.svg", "a sword"),
    ChargeEntry("axePole", "Pole Axe", "weapons", "axe-pole-2-mono.svg", "a pole axe",
                plural="pole axes"),
    ChargeEntry("hammerWar", "War Hammer", "weapons", "hammer-war-mono.svg", "a war hammer",
                plural="war hammers"),
    ChargeEntry("rose8", "Rose (Heraldic)", "flora", "rose-8-mono.svg", "a rose"),
    ChargeEntry("oakLeaf1", "Oak Leaf", "flora", "oak-leaf-1-mono.svg", "an oak leaf",
                plural="oak leaves"),
    ChargeEntry("oakTree", "Oak Tree Fructed", "flora",
                "oak-tree-fructed-and-eradicated-2-mono.svg",
                "an oak tree fructed and eradicated", plural="oak trees fructed and eradicated"),
    ChargeEntry("wheatSheaf1", "Sheaf of Wheat", "flora", "wheat-sheaf-1-mono.svg",
                "a sheaf of wheat"),
    ChargeEntry("tower12", "Tower", "architecture", "tower-12-mono.svg", "a tower"),
    ChargeEntry("crescent1", "Crescent", "celestial", "crescent-1-mono.svg", "a crescent",
                description="A crescent moon"),
    ChargeEntry("estoile", "Estoile", "celestial", "estoile-2-mono.svg", "an estoile",
                description="A wavy-rayed star"),
    ChargeEntry("mullet5", "Mullet", "celestial", "mullet-of-5-points-2-mono.svg", "a mullet",
                description="A five-pointed star"),
]

CHARGES: MappingProxyType[str, ChargeEntry] = MappingProxyType({e.id: e for e in _ENTRIES})


def _pluralize_word(word: str) -> str:
    if word.endswith(("s", "x", "ch", "sh")):
        return word + "es"
    if word.endswith("f"):
        return word[:-1] + "ves"
    if word.endswith("y") and word[-2:-1] not in ("a", "e", "i", "o", "u"):
        return word[:-1] + "ies"
    return word + "s"


def _strip_article(term: str) -> str:
    for article in ("a ", "an "):
        if term.startswith(article):
            return term[len(article):]
    return term


def plural_term(entry: ChargeEntry) -> str:
    """Plural noun phrase without a number word: "lions rampant"."""
    if entry.plural:
        return entry.plural
    head, _, rest = _strip_article(entry.term).partition(" ")
    return f"{_pluralize_word(head)} {rest}".strip()


def charge_blazon(charge_id: str, tincture_name: str, count: int = 1) -> str:
    """Blazon of ``count`` charges: "a lion rampant or", "three mullets argent"."""
    entry = CHARGES.get(charge_id)
    if entry is None:
        term = "a charge" if count == 1 else f"{number_word(count)} charges"
        return f"{term} {tincture_name}"
    if count == 1:
        return f"{entry.term} {tincture_name}"
    return f"{number_word(count)} {plural_term(entry)} {tincture_name}"


def search_charges(query: str) -> list[ChargeEntry]:
    q = query.lower()
    return [
        e for e in CHARGES.values()
        if q in e.name.lower() or q in e.term.lower() or q in e.description.lower()
    ]


def charges_by_category(category: str) -> list[ChargeEntry]:
    return [e for e in CHARGES.values() if e.category == category]
