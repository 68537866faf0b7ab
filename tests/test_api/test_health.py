"""Tests for health check endpoints."""

from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from adprojection.core.config import settings


class TestHealthEndpoints:
    """Test liveness and dependency checks."""

    @pytest.mark.asyncio
    async def test_health(self, test_client: AsyncClient) -> None:
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    @pytest.mark.asyncio
    async def test_health_db(self, test_client: AsyncClient) -> None:
        response = await test_client.get("/health/db")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_redis(self, test_client: AsyncClient) -> None:
        response = await test_client.get("/health/redis")

        assert response.status_code == 200
        assert response.json()["redis"] == "connected"

    @pytest.mark.asyncio
    async def test_health_redis_down(self, test_client: AsyncClient, test_redis: Any) -> None:
        """Test an unreachable Redis reports 503."""
        test_redis.ping = AsyncMock(side_effect=ConnectionError("refused"))

        response = await test_client.get("/health/redis")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_tracing_headers(self, test_client: AsyncClient) -> None:
        """Test correlation ids are echoed back."""
        response = await test_client.get("/health", headers={"X-Correlation-ID": "run-42"})

        assert response.headers["X-Correlation-ID"] == "run-42"
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_root(self, test_client: AsyncClient) -> None:
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"
