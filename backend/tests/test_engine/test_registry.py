"""Tests for the tincture, line style and catalog registries."""

from __future__ import annotations

import pytest

from heraldry.registry.catalog import ARRANGEMENTS, DIVISIONS, ORDINARIES, arrangement_points, number_word
from heraldry.registry.line_styles import LINE_STYLES, line_adjective
from heraldry.registry.tinctures import (
    TINCTURES,
    UNKNOWN_FILL,
    TinctureKind,
    fill_for,
    get_tincture,
    tincture_name,
)


def test_registry_sizes():
    assert len(TINCTURES) == 23
    assert len(LINE_STYLES) == 10
    assert len(DIVISIONS) == 18
    assert len(ORDINARIES) == 10


def test_registries_are_read_only():
    with pytest.raises(TypeError):
        TINCTURES["mauve"] = TINCTURES["or"]  # type: ignore[index]


def test_tincture_kinds():
    assert get_tincture("or").kind is TinctureKind.METAL
    assert get_tincture("murrey").kind is TinctureKind.STAIN
    assert get_tincture("vair").kind is TinctureKind.FUR
    assert get_tincture("mauve") is None


def test_tincture_names_keep_accents():
    assert tincture_name("tenne") == "tenné"
    assert tincture_name("brunatre") == "brunâtre"
    assert tincture_name("mauve") == "mauve"


def test_fills():
    assert fill_for("azure") == "#0047AB"
    assert fill_for("ermine") == "url(#fur-ermine)"
    assert fill_for("mauve") == UNKNOWN_FILL


def test_fur_pattern_element():
    element = TINCTURES["vair"].pattern.to_element("fur-vair")
    assert element["tag"] == "pattern"
    assert element["id"] == "fur-vair"
    assert element["children"][0]["fill"] == "#FFFFFF"


def test_straight_has_no_adjective():
    assert line_adjective("straight") == ""
    assert line_adjective("dovetailed") == "dovetailed"
    assert line_adjective("zigzag") == ""


def test_arrangements_match_their_count():
    for count, templates in ARRANGEMENTS.items():
        for points in templates.values():
            assert len(points) == count


def test_arrangement_fallback():
    assert arrangement_points(3, "orle") == ARRANGEMENTS[3]["twoAndOne"]
    assert arrangement_points(1, "pale") == ((100.0, 90.0),)


def test_number_words():
    assert number_word(6) == "six"
    assert number_word(12) == "twelve"
    assert number_word(40) == "40"
