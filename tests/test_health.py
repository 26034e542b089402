"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"


async def test_unknown_route_returns_json_404(client: AsyncClient) -> None:
    """Unknown paths go through the HTTP exception handler."""
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"


async def test_search_without_analytics_is_unavailable(client: AsyncClient) -> None:
    """Without the lifespan, the analytics recorder is missing and search reports 503."""
    response = await client.get("/api/v1/search/global", params={"query": "team"})
    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"


async def test_readiness_without_database(client: AsyncClient, monkeypatch) -> None:
    """Readiness reports 503 not_ready when Postgres is not configured."""
    from app.api.v1.endpoints import health
    from app.domain.exceptions import SqlNotConfiguredException

    def _unconfigured():
        raise SqlNotConfiguredException()

    monkeypatch.setattr(health, "get_session_factory", _unconfigured)

    response = await client.get("/api/v1/health/ready")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "not_ready"
    assert "not configured" in body["message"]
