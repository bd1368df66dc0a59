from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from roster.app import create_app

from conftest import make_student


@pytest.fixture()
def client(settings_env):
    """FastAPI test client bound to a temporary JSON document."""
    return TestClient(create_app(settings_env))


def test_list_is_empty_without_document(client, data_file):
    response = client.get("/api/students")
    assert response.status_code == 200
    assert response.json() == []
    assert not data_file.exists()


def test_create_and_fetch(client, data_file):
    record = make_student("S1")
    response = client.post("/api/students", json=record)
    assert response.status_code == 201
    assert response.json() == record

    assert client.get("/api/students/S1").json() == record
    assert json.loads(data_file.read_text(encoding="utf-8")) == [record]


def test_create_missing_field_is_400(client):
    payload = make_student("S1")
    del payload["email"]
    response = client.post("/api/students", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "All fields are required"}


def test_create_non_object_body_is_400(client):
    response = client.post("/api/students", json=["S1"])
    assert response.status_code == 400
    assert "error" in response.json()


def test_create_duplicates_are_400(client):
    client.post("/api/students", json=make_student("S1"))
    response = client.post("/api/students", json=make_student("S1", email="z@example.com"))
    assert response.status_code == 400
    assert response.json() == {"error": "Student ID already exists"}
    response = client.post("/api/students", json=make_student("S2", email="s1@example.com"))
    assert response.status_code == 400
    assert response.json() == {"error": "Email already exists"}
    assert len(client.get("/api/students").json()) == 1


def test_get_unknown_is_404(client):
    response = client.get("/api/students/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Student not found"}


def test_update(client):
    client.post("/api/students", json=make_student("S1"))
    client.post("/api/students", json=make_student("S2"))
    body = make_student("S1", fullName="Renamed")
    response = client.put("/api/students/S1", json=body)
    assert response.status_code == 200
    assert response.json()["fullName"] == "Renamed"

    assert client.put("/api/students/S404", json=body).status_code == 404
    collision = client.put("/api/students/S1", json=make_student("S1", email="s2@example.com"))
    assert collision.status_code == 400
    assert collision.json() == {"error": "Email already exists"}
    missing = client.put("/api/students/S1", json={"fullName": "x"})
    assert missing.status_code == 400


def test_delete(client):
    client.post("/api/students", json=make_student("S1"))
    response = client.delete("/api/students/S1")
    assert response.status_code == 200
    assert response.json() == {"message": "Student deleted successfully"}
    assert client.get("/api/students").json() == []
    assert client.delete("/api/students/S1").status_code == 404


def test_stats_summary(client):
    client.post("/api/students", json=make_student("S1", gender="Male", program="CS"))
    client.post("/api/students", json=make_student("S2", gender="Female", program="Math"))
    response = client.get("/api/students/stats/summary")
    assert response.status_code == 200
    assert response.json() == {"total": 2, "male": 1, "female": 1, "programs": 2}


def test_list_accepts_filter_query(client, sample_students):
    for record in sample_students:
        client.post("/api/students", json=record)
    ids = [r["id"] for r in client.get("/api/students", params={"program": "CS"}).json()]
    assert ids == ["S1", "S3"]
    ids = [r["id"] for r in client.get("/api/students", params={"search": "ada", "yearLevel": "2nd Year"}).json()]
    assert ids == ["S2"]


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "OK"
    assert "timestamp" in payload


def test_storage_error_is_500(client, data_file):
    data_file.parent.mkdir(parents=True, exist_ok=True)
    data_file.write_text("not json", encoding="utf-8")
    response = client.get("/api/students")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to read students data"}


def test_security_headers(client):
    response = client.get("/api/health")
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_custom_api_prefix(monkeypatch, settings_env):
    from roster.core import config as core_config

    monkeypatch.setenv("API_PREFIX", "v1/")
    core_config.get_settings.cache_clear()
    client = TestClient(create_app(core_config.get_settings()))
    assert client.get("/v1/health").status_code == 200
    assert client.get("/api/health").status_code != 200


def test_ids_with_slashes_round_trip(client):
    record = make_student("CS/2024/01")
    assert client.post("/api/students", json=record).status_code == 201

    for path in ("/api/students/CS/2024/01", "/api/students/CS%2F2024%2F01"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json() == record

    updated = client.put("/api/students/CS%2F2024%2F01", json=make_student("CS/2024/01", program="Math"))
    assert updated.status_code == 200
    assert updated.json()["program"] == "Math"

    response = client.delete("/api/students/CS%2F2024%2F01")
    assert response.status_code == 200
    assert client.get("/api/students").json() == []


def test_stats_route_wins_over_path_ids(client):
    client.post("/api/students", json=make_student("S1"))
    assert client.get("/api/students/stats/summary").json()["total"] == 1


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_cors_allows_configured_origin(client):
    response = client.get("/api/health", headers={"Origin": "http://localhost:3000"})
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"

    preflight = client.options(
        "/api/students",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "DELETE"},
    )
    assert preflight.status_code == 200
    assert "DELETE" in preflight.headers["access-control-allow-methods"]


def test_cors_ignores_unknown_origin(client):
    response = client.get("/api/health", headers={"Origin": "http://evil.example"})
    assert "access-control-allow-origin" not in response.headers
