"""Tests for health check endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from watchconsole.main import app
from watchconsole.models.session import SessionContext
from watchconsole.services.console import ConsoleSession


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def console(gateway):
    """Install a console session on the app state for the duration of a test."""
    session = ConsoleSession(gateway, SessionContext(user_id="admin", username="Root"))
    app.state.console = session
    yield session
    del app.state.console


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness probe returns healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestReadyEndpoint:
    async def test_not_ready_without_session(self, client: AsyncClient) -> None:
        response = await client.get("/ready")

        assert response.status_code == 503
        assert response.json()["snapshot"] == "empty"

    async def test_not_ready_before_load(self, client: AsyncClient, console) -> None:
        response = await client.get("/ready")

        assert response.status_code == 503

    async def test_ready_after_load(self, client: AsyncClient, console) -> None:
        await console.load()

        response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "snapshot": "loaded"}
