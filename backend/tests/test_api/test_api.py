"""Tests for API endpoints (bundled charge artwork, built-in shields)."""

from __future__ import annotations

from fastapi.testclient import TestClient

from heraldry.main import app


client = TestClient(app)

PER_PALE = {"version": 2, "field": {"divisionType": "perPale", "tincture1": "azure", "tincture2": "or"}}


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["tinctures_registered"] == 23
    assert data["line_styles_registered"] == 10
    assert data["divisions_registered"] == 18


def test_catalog():
    data = client.get("/api/catalog").json()
    assert {"or", "gules", "ermine"} <= {t["id"] for t in data["tinctures"]}
    assert data["shields"] == ["english", "french", "heater", "spanish", "swiss"]
    assert data["arrangements"]["3"] == ["twoAndOne", "oneAndTwo", "pale", "fess", "bend"]
    assert data["charge_sizes"]["medium"] == 0.9


def test_charges_search_and_category():
    assert len(client.get("/api/charges").json()) == 23
    found = client.get("/api/charges", params={"q": "lion"}).json()
    assert [c["id"] for c in found] == ["lion4", "lionPassant"]
    birds = client.get("/api/charges", params={"category": "birds"}).json()
    assert {c["id"] for c in birds} == {"eagle5", "owl8"}


def test_blazon():
    response = client.post("/api/blazon", json={"composition": PER_PALE})
    assert response.status_code == 200
    data = response.json()
    assert data["blazon"] == "Per pale azure and or"
    assert data["composition"]["field"]["divisionType"] == "perPale"


def test_blazon_of_legacy_document():
    legacy = {
        "division": "perPale",
        "tincture1": "azure",
        "tincture2": "or",
        "chargeEnabled": True,
        "chargeId": "mullet5",
        "chargeTincture": "argent",
        "chargeCount": 3,
        "chargeArrangement": "twoAndOne",
    }
    data = client.post("/api/blazon", json={"composition": legacy}).json()
    assert data["blazon"] == "Per pale azure and or, three mullets argent"
    assert data["composition"]["version"] == 2
    assert data["composition"]["charges"][0]["count"] == 3


def test_render():
    composition = {
        **PER_PALE,
        "ordinaries": [{"type": "chief", "tincture": "gules", "lineStyle": "embattled"}],
        "charges": [{"chargeId": "lion4", "tincture": "argent"}],
    }
    response = client.post("/api/render", json={"composition": composition, "shield_type": "heater"})
    assert response.status_code == 200
    data = response.json()
    assert data["blazon"] == "Per pale azure and or, a chief embattled gules, a lion rampant argent"
    assert data["shield_type"] == "heater"
    assert data["svg"].startswith("<?xml")
    assert 'width="400"' in data["svg"]
    assert data["skipped_charges"] == []
    assert data["generation"] >= 1


def test_render_generations_increase():
    first = client.post("/api/render", json={"composition": PER_PALE}).json()["generation"]
    second = client.post("/api/render", json={"composition": PER_PALE}).json()["generation"]
    assert second > first


def test_render_reports_missing_artwork():
    composition = {**PER_PALE, "charges": [{"chargeId": "owl8"}, {"chargeId": "rose8"}]}
    data = client.post("/api/render", json={"composition": composition}).json()
    assert [s["charge_id"] for s in data["skipped_charges"]] == ["owl8"]
    assert 'data-layer="charge-1"' in data["svg"]


def test_render_invalid_composition():
    composition = {"field": {"tincture1": "mauve", "lineStyle": "zigzag"}}
    response = client.post("/api/render", json={"composition": composition})
    assert response.status_code == 422
    assert len(response.json()["detail"]) == 2


def test_render_malformed_composition():
    response = client.post("/api/render", json={"composition": {"charges": [{"count": 9}]}})
    assert response.status_code == 422


def test_layers():
    ops = [
        {"action": "add", "layer": "ordinaries", "values": {"type": "bend", "tincture": "or"}},
        {"action": "add", "layer": "charges", "values": {"chargeId": "mullet5", "tincture": "argent"}},
        {"action": "update", "layer": "charges", "index": 0, "values": {"count": 3}},
        {"action": "remove", "layer": "charges", "index": 4},
    ]
    response = client.post("/api/layers", json={"composition": PER_PALE, "operations": ops})
    assert response.status_code == 200
    data = response.json()
    assert data["blazon"] == "Per pale azure and or, a bend or, three mullets argent"
    assert len(data["skipped"]) == 1
    assert data["composition"]["charges"][0]["chargeId"] == "mullet5"
