"""
Tests for health check and metrics endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health check endpoint returns OK status."""
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["storage"] == "local"
    assert "warnings" not in data


@pytest.mark.asyncio
async def test_health_check_without_projects_index(client: AsyncClient, data_dir):
    """Test a missing projects index is reported as a warning."""
    (data_dir / "projects" / "index.json").unlink()

    response = await client.get("/api/v1/health")

    data = response.json()
    assert data["status"] == "ok"
    assert data["warnings"] == ["Projects index missing: projects/index.json"]


@pytest.mark.asyncio
async def test_root_endpoint(client: AsyncClient):
    """Test root endpoint returns service info."""
    response = await client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert "name" in data
    assert "version" in data
    assert data["odata"] == "/odata/"


@pytest.mark.asyncio
async def test_metrics_track_requests(client: AsyncClient):
    await client.get("/odata/Elements")

    response = await client.get("/api/v1/metrics")

    assert response.status_code == 200
    data = response.json()
    assert data["requests_by_endpoint"]["GET /odata/Elements"] >= 1
    assert data["aggregations"]["Hospital"]["models_skipped"] >= 1


@pytest.mark.asyncio
async def test_metrics_prometheus(client: AsyncClient):
    response = await client.get("/api/v1/metrics/prometheus")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "bim_odata_uptime_seconds" in response.text
