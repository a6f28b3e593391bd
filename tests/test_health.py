"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"


async def test_readiness_without_database_url(client: AsyncClient) -> None:
    """GET /api/v1/health/ready returns 503 when DATABASE_URL is not configured."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


async def test_root_returns_service_info(client: AsyncClient) -> None:
    """GET / returns the service name and a docs link."""
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"]
    assert data["docs"] == "/docs"


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    """A valid incoming X-Request-ID is returned on the response."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert response.headers.get("X-Request-ID") == "req-123"
