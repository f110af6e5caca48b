"""
Tests for application-level routes, handlers and middleware.
"""

import logging
from unittest.mock import Mock

from fastapi.testclient import TestClient

from personal_library.api.v1.dependencies import get_document_store
from personal_library.main import app


class TestHealth:
    """GET /health"""

    def test_ok_when_store_answers(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "store": True}

    def test_degraded_when_store_is_down(self):
        store = Mock()
        store.ping.return_value = False
        app.dependency_overrides[get_document_store] = lambda: store
        try:
            response = TestClient(app).get("/health")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503
        assert response.json() == {"status": "degraded", "store": False}


class TestApplication:
    """Root route, unknown routes and request logging."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/health"

    def test_unknown_route_uses_message_body(self, client):
        response = client.get("/authors")

        assert response.status_code == 404
        assert "message" in response.json()

    def test_wrong_method_uses_message_body(self, client):
        response = client.patch("/books")

        assert response.status_code == 405
        assert "message" in response.json()

    def test_requests_are_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger="personal_library.main")

        client.get("/books")

        assert any(
            "GET /books -> 200" in record.getMessage() for record in caplog.records
        )
