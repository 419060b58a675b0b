"""
Testes para os endpoints de health check.
"""
import pytest
from httpx import ASGITransport, AsyncClient

from legalx.core.dependencies import get_backend
from legalx.main import app


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Testa endpoint de health check."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


@pytest.mark.asyncio
async def test_health_check_unauthenticated(unauthenticated_client: AsyncClient):
    """Health check deve funcionar sem autenticação."""
    response = await unauthenticated_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_readiness_check(unauthenticated_client: AsyncClient):
    response = await unauthenticated_client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["documents"] == "ok"


@pytest.mark.asyncio
async def test_readiness_check_backend_down(failing_backend):
    """Backend fora do ar deixa a aplicação indisponível."""
    app.dependency_overrides[get_backend] = lambda: failing_backend

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/api/v1/health/ready")

    app.dependency_overrides.clear()

    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    response = await client.get("/api/v1/health")
    assert response.headers.get("x-request-id")
