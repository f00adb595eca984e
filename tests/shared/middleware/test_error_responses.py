# -*- coding: utf-8 -*-
"""
backend/tests/shared/middleware/test_error_responses.py

Forma de las respuestas de error, health checks y /metrics.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from app.routes import health_routes
from app.shared.errors import InsufficientInventory, SecurityViolation
from app.shared.middleware import JSONExceptionMiddleware, register_exception_handlers


class _Body(BaseModel):
    quantity: int


@pytest.fixture
def error_app():
    app = FastAPI()
    app.add_middleware(JSONExceptionMiddleware)
    register_exception_handlers(app)

    @app.post("/domain")
    async def domain():
        raise InsufficientInventory(2)

    @app.post("/security")
    async def security():
        raise SecurityViolation("buyer mismatch")

    @app.post("/validated")
    async def validated(body: _Body):
        return {"ok": True}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("db password is hunter2")

    return app


@pytest.fixture
async def error_client(error_app):
    async with AsyncClient(transport=ASGITransport(app=error_app), base_url="http://testserver") as client:
        yield client


class TestErrorShape:
    async def test_domain_error(self, error_client):
        response = await error_client.post("/domain", headers={"X-Request-ID": "req-42"})

        assert response.status_code == 500
        assert response.json() == {"error": "Only 2 tickets available"}
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["x-request-id"] == "req-42"

    async def test_security_violation_hides_reason(self, error_client):
        response = await error_client.post("/security")

        assert response.json() == {"error": "Payment verification failed"}
        assert "buyer mismatch" not in response.text

    async def test_validation_error(self, error_client):
        response = await error_client.post("/validated", json={"quantity": "many"})

        assert response.status_code == 500
        assert response.json()["error"].startswith("Invalid quantity:")

    async def test_unhandled_exception_is_generic(self, error_client):
        response = await error_client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "hunter2" not in response.text
        assert response.headers["x-request-id"]


class TestHealth:
    async def test_liveness(self, async_client):
        response = await async_client.get("/health")
        assert response.json() == {"status": "ok"}

    async def test_ready(self, async_client, monkeypatch):
        async def _ok(timeout_s: float = 3.0):
            return True

        monkeypatch.setattr(health_routes, "check_database_health", _ok)
        response = await async_client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["database"]["reachable"] is True

    async def test_degraded(self, async_client, monkeypatch):
        async def _down(timeout_s: float = 3.0):
            return False

        monkeypatch.setattr(health_routes, "check_database_health", _down)
        response = await async_client.get("/health/ready")
        assert response.status_code == 503
        assert response.json()["status"] == "degraded"

    async def test_metrics(self, async_client):
        await async_client.get("/health")
        response = await async_client.get("/metrics")
        assert response.status_code == 200
        assert "checkout_sessions_created_total" in response.text
