"""
Test the playground HTTP API.
"""

import json

from fastapi.testclient import TestClient

from playground import app

client = TestClient(app)


def test_validate_example_crate():
    res = client.post("/api/validate", json={})
    body = res.json()
    assert res.status_code == 200
    assert body["ok"] is True
    assert body["report"]["conforms"] is True
    assert "CONFORMS" in body["table"]


def test_validate_submitted_crate(object_doc):
    res = client.post("/api/validate", json={"crate": json.dumps(object_doc), "show_info": True})
    body = res.json()
    assert body["ok"] is True
    assert body["report"]["summary"]["errors"] == 0
    assert "[INFO]" in body["table"]


def test_validate_broken_crate():
    body = client.post("/api/validate", json={"crate": "{oops"}).json()
    assert body["ok"] is False
    assert body["error"].startswith("CrateError")


def test_index_page():
    res = client.get("/")
    assert res.status_code == 200
    assert "ldaclint playground" in res.text
