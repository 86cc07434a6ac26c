"""Tests for the probes and the request-level gateway middleware."""
import uuid

import pytest
from django.db import OperationalError


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"message": "Marketplace server"}


@pytest.mark.django_db
def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "components": {"db": {"ok": True}}}


def test_health_reports_database_outage(client, monkeypatch):
    class BrokenConnection:
        def cursor(self):
            raise OperationalError("database is down")

    monkeypatch.setattr("apps.monitoring.api.connection", BrokenConnection())
    r = client.get("/health")
    assert r.status_code == 503
    assert r.json()["components"]["db"]["ok"] is False


def test_request_id_is_echoed(client):
    r = client.get("/", HTTP_X_REQUEST_ID="req-123")
    assert r["X-Request-ID"] == "req-123"


def test_request_id_is_generated(client):
    r = client.get("/")
    uuid.UUID(r["X-Request-ID"])


def test_oversized_body_is_rejected(client, monkeypatch):
    monkeypatch.setattr("gateway.middleware.MAX_API_BYTES", 16)
    r = client.post("/orders", data={"buyerEmail": "x" * 64}, content_type="application/json")
    assert r.status_code == 413
    assert r.json() == {"success": False, "message": "payload too large"}
    assert r["X-Request-ID"]


def test_unknown_route_is_404(client):
    assert client.get("/nowhere").status_code == 404
