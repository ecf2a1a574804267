"""HTTP tests for the health endpoints."""

import pytest


@pytest.mark.api
@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["components"]["database"]["status"] == "healthy"


@pytest.mark.api
@pytest.mark.asyncio
async def test_liveness(client):
    response = await client.get("/api/health/live")

    assert response.status_code == 200
    assert response.json() == {"alive": True}
