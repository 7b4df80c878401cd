"""
Tests for the health check, root endpoint and framework-level errors.
"""

from unittest.mock import AsyncMock

from fastapi import status
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.main import app
from tests.conftest import API


class TestHealthCheck:
    """Tests for GET /health endpoint."""

    async def test_health_ok(self, client):
        response = await client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "ok"

    async def test_health_database_unavailable(self, client):
        """Test that a failing database ping answers 503."""
        session = AsyncMock(spec=AsyncSession)
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

        async def broken_db():
            yield session

        app.dependency_overrides[get_db] = broken_db

        response = await client.get("/health")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["database"] == "unavailable"


class TestRoot:
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["api"] == API


class TestFrameworkErrors:
    """Errors raised by routing itself use the same envelope."""

    async def test_unknown_route(self, client):
        response = await client.get(f"{API}/nothing-here")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"status": "error", "message": "Not Found"}

    async def test_method_not_allowed(self, client):
        response = await client.patch(f"{API}/books/secure")

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert response.json() == {"status": "error", "message": "Method Not Allowed"}
        assert "allow" in response.headers

    async def test_cors_preflight(self, client):
        response = await client.options(
            f"{API}/books",
            headers={
                "Origin": "http://frontend.example",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert "POST" in response.headers["access-control-allow-methods"]


class TestAlive:
    """Tests for the /api/alive liveness check."""

    async def test_alive(self, client):
        response = await client.get(f"{API}/alive")

        assert response.status_code == status.HTTP_200_OK
        assert response.text == "."

    async def test_alive_head(self, client):
        response = await client.head(f"{API}/alive")

        assert response.status_code == status.HTTP_200_OK

    async def test_alive_ignores_database(self, client):
        """Test that /api/alive answers even when the database is down."""
        session = AsyncMock(spec=AsyncSession)
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

        async def broken_db():
            yield session

        app.dependency_overrides[get_db] = broken_db

        response = await client.get(f"{API}/alive")

        assert response.status_code == status.HTTP_200_OK


class TestRateLimit:
    """Each client IP gets 100 requests per minute."""

    async def test_requests_within_limit(self, client):
        statuses = {(await client.get(f"{API}/books/secure")).status_code for _ in range(100)}

        assert statuses == {status.HTTP_200_OK}

    async def test_request_over_limit(self, client):
        """Test that the 101st request in the window is rejected with 429."""
        for _ in range(100):
            await client.get(f"{API}/books/secure")

        response = await client.get(f"{API}/books/secure")

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.json() == {"status": "error", "message": "Too many requests"}
        assert response.headers["retry-after"] == "60"

    async def test_limit_is_per_client_ip(self, client):
        """Test that the real IP from proxy headers is the key."""
        for _ in range(101):
            await client.get(f"{API}/books/secure", headers={"X-Forwarded-For": "203.0.113.7"})

        blocked = await client.get(f"{API}/books/secure", headers={"X-Forwarded-For": "203.0.113.7"})
        other = await client.get(f"{API}/books/secure", headers={"X-Real-IP": "198.51.100.2"})

        assert blocked.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert other.status_code == status.HTTP_200_OK
