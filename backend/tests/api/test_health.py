"""Tests for health check endpoints."""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from api import app


@pytest.fixture
def client(container):
    return TestClient(app)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        """Health endpoint should return 200 with status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "0.1.0", "environment": "test"}

    def test_health_is_not_enveloped(self, client):
        assert "success" not in client.get("/health").json()

    def test_readiness_check(self, client):
        """Readiness endpoint should return 200 when the user store answers."""
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ready", "user_store": "connected"}

    def test_readiness_reports_store_failure(self, client, container, monkeypatch):
        monkeypatch.setattr(
            container.user_store, "find_by_id", AsyncMock(side_effect=ConnectionError("db down"))
        )
        response = client.get("/ready")
        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"
