"""
Integration Tests for Health Endpoints and Request Context.
"""

from unittest.mock import AsyncMock, patch

from httpx import AsyncClient


class TestHealthEndpoints:
    """Tests for /health and /health/ready."""

    async def test_liveness(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_liveness_needs_no_token(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code != 401

    async def test_readiness_healthy(self, client: AsyncClient):
        with patch(
            "notekeeper.api.health.check_database",
            AsyncMock(return_value={"status": "healthy", "latency_ms": 1}),
        ):
            response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"]["database"]["status"] == "healthy"

    async def test_readiness_unhealthy_returns_503(self, client: AsyncClient):
        with patch(
            "notekeeper.api.health.check_database",
            AsyncMock(return_value={"status": "unhealthy", "error": "connection refused"}),
        ):
            response = await client.get("/health/ready")

        assert response.status_code == 503


class TestRequestContext:
    """Tests for RequestContextMiddleware headers."""

    async def test_generates_request_id(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.headers.get("X-Request-ID")
        assert response.headers.get("X-Response-Time", "").endswith("ms")

    async def test_echoes_client_request_id(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "client-abc"})

        assert response.headers["X-Request-ID"] == "client-abc"

    async def test_error_envelope_carries_request_id(self, client: AsyncClient, api):
        response = await client.get("/api/v1/notes", headers={"X-Request-ID": "client-xyz"})

        data = api.assert_error(response, 401)
        assert data["metadata"]["request_id"] == "client-xyz"
