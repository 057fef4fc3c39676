from __future__ import annotations

from fastapi.testclient import TestClient

from app.core import app_factory


def test_health(client: TestClient):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_openapi_lists_routes_and_tags(client: TestClient):
    schema = client.get("/openapi.json").json()

    assert schema["info"]["title"] == "Interview API"
    assert {"/api/candidates", "/api/candidates/search", "/api/candidates/{candidate_id}"} <= set(schema["paths"])
    assert {"/api/employees", "/api/employees/{employee_id}"} <= set(schema["paths"])
    assert {"Candidates", "Employees", "Health"} <= {tag["name"] for tag in schema["tags"]}


def test_docs_can_be_disabled(monkeypatch):
    monkeypatch.setattr(app_factory.settings.app, "docs_enabled", False)

    client = TestClient(app_factory.create_app())

    assert client.get("/docs").status_code == 404
    assert client.get("/openapi.json").status_code == 404
