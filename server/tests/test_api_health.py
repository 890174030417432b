"""API health tests against the fully configured application."""

import pytest
from httpx import ASGITransport, AsyncClient

from catalog_api.main import create_app


@pytest.mark.asyncio
async def test_api_health_endpoints():
    """Test the inline health endpoints of the real app."""
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "travel-catalog-api"

        response = await client.get("/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["database"] == "ok"

        response = await client.get("/info")
        assert response.status_code == 200
        data = response.json()
        assert "service" in data
        assert data["features"]["suggestions"] is True


@pytest.mark.asyncio
async def test_metrics_endpoint():
    """Test the metrics endpoint."""
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await client.get("/health")
        response = await client.get("/metrics")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "http_requests_total" in response.text


@pytest.mark.asyncio
async def test_request_id_header():
    """Every response carries a request ID."""
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_openapi_docs():
    """Test that OpenAPI docs are available in development."""
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/docs")
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_traceparent_is_continued():
    """A valid inbound traceparent keeps its trace id on the response."""
    app = create_app()
    trace_id = "4bf92f3577b34da6a3ce929d0e0e4736"

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get(
            "/health", headers={"traceparent": f"00-{trace_id}-00f067aa0ba902b7-01"}
        )
        version, returned_trace, span_id, flags = response.headers["traceparent"].split("-")
        assert (version, returned_trace, flags) == ("00", trace_id, "01")
        assert span_id != "00f067aa0ba902b7"


def test_parse_traceparent():
    from catalog_api.core.middleware import parse_traceparent

    assert parse_traceparent("00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01") == (
        "4bf92f3577b34da6a3ce929d0e0e4736", "00f067aa0ba902b7", "01"
    )
    assert parse_traceparent("00-" + "0" * 32 + "-00f067aa0ba902b7-01") is None
    assert parse_traceparent("01-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01") is None
    assert parse_traceparent(None) is None


@pytest.mark.asyncio
async def test_ready_reports_unreachable_database(monkeypatch):
    import catalog_api.main as main_module

    async def unreachable():
        return False

    monkeypatch.setattr(main_module, "database_ready", unreachable)
    app = create_app()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/ready")
        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"
        assert response.json()["checks"]["database"] == "unavailable"
