"""Tests for API endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import CATALOG, CLUSTERS, PATTERN_MATCH, UNIT_MAP

from coimap.main import app


client = TestClient(app)


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["stages_registered"] == 5


def test_style():
    response = client.post("/api/cois/style", json={"clusters": CLUSTERS, "patterns": CATALOG})
    assert response.status_code == 200
    data = response.json()
    assert data["unit_map"] == UNIT_MAP
    assert data["pattern_match"] == PATTERN_MATCH
    assert data["chosen_patterns"] == CATALOG
    assert data["unassigned"] == []
    assert data["expression"][0] == "case"
    assert data["expression"][-1] == "transparent"
    assert data["paint"]["fill-pattern"] == data["expression"]


def test_style_first_precedence():
    response = client.post(
        "/api/cois/style",
        json={"clusters": CLUSTERS, "patterns": CATALOG, "precedence": "first"},
    )
    assert response.status_code == 200
    assert response.json()["expression"][2] == "p1"


def test_style_reports_unassigned():
    response = client.post("/api/cois/style", json={"clusters": CLUSTERS, "patterns": {"p1": "/p1.png"}})
    assert response.status_code == 200
    assert response.json()["unassigned"] == [["A", "Beta"], ["B", "Gamma"]]


def test_style_malformed_plan_is_422():
    bad = [{"plan": {"parts": [], "assignment": {"u1": 0}}}]
    response = client.post("/api/cois/style", json={"clusters": bad, "patterns": CATALOG})
    assert response.status_code == 422
    assert "Malformed cluster plan" in response.json()["detail"]


def test_opacity():
    response = client.post(
        "/api/cois/opacity",
        json={"geoids": ["unit1"], "opacity": 0.25, "layer_type": "symbol"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["paint_property"] == "icon-opacity"
    assert data["expression"] == ["case", ["in", ["get", "GEOID20"], ["literal", ["unit1"]]], 0, 0.25]
