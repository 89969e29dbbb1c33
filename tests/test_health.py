"""Tests for liveness and readiness."""


async def test_health(client, monkeypatch):
    monkeypatch.setenv("BACKEND_BUILT_AT", "2026-10-01T12:00:00Z")
    response = await client.get("/api/v1/health")
    assert response.json() == {"status": "ok", "built_at": "2026-10-01T12:00:00Z"}


async def test_health_without_build_stamp(client, monkeypatch):
    monkeypatch.delenv("BACKEND_BUILT_AT", raising=False)
    response = await client.get("/api/v1/health")
    assert response.json() == {"status": "ok"}


async def test_ready(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "connected"}


async def test_root(client):
    response = await client.get("/")
    assert response.json()["status"] == "ok"
