# tests/test_api.py
"""
API TESTS: REST Endpoints
=========================
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_generate_default_frame(client):
    r = client.post("/api/frame", json={})
    assert r.status_code == 200
    body = r.json()
    
    assert body["n_members"] == 24
    assert [m["index"] for m in body["members"]] == list(range(24))
    assert body["members"][0]["role"] == "column_back"
    assert body["members"][0]["assembled_position"] == pytest.approx([-0.9, 1.5, 0.0])
    assert body["summary"]["all"]["count"] == 24
    assert len(body["length_bins"]) == 3


def test_generate_rejects_non_positive(client):
    r = client.post("/api/frame", json={"column_spacing": 0.0})
    assert r.status_code == 422


def test_explode_converges(client):
    r = client.post("/api/frame/explode", json={"ticks": 300})
    assert r.status_code == 200
    body = r.json()
    
    assert body["settled"] is True
    first = body["members"][0]
    assert first["current_position"] == pytest.approx([-1.08, 1.65, 0.0], abs=1e-4)


def test_explode_zero_ticks_stays_home(client):
    r = client.post("/api/frame/explode", json={"ticks": 0})
    body = r.json()
    for m in body["members"]:
        assert m["current_position"] == pytest.approx(m["assembled_position"])


def test_explode_assembled_is_settled(client):
    r = client.post("/api/frame/explode", json={"ticks": 10, "exploded": False})
    body = r.json()
    assert body["settled"] is True
    assert body["residual"] == pytest.approx(0.0)


def test_export_csv(client):
    r = client.post("/api/export/csv", json={"column_count": 3})
    assert r.status_code == 200
    lines = r.text.strip().splitlines()
    assert lines[0].startswith("index,role,length_m")
    assert len(lines) == 1 + 19


def test_explode_rejects_zero_scale(client):
    r = client.post("/api/frame/explode", json={"scale": [1.2, 0.0, 1.5]})
    assert r.status_code == 422
    assert "scale y" in r.json()["detail"]
