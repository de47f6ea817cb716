# tests/main/test_main.py
"""Tests for app/main.py module."""

import pytest
from fastapi import status
from httpx import AsyncClient
from pytest_mock.plugin import MockerFixture
from sqlalchemy.exc import OperationalError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.services import QueryComposer


class TestRootEndpoints:
    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient) -> None:
        response = await client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Blog API - Version REST"}

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "ok"
        assert data["database"] == "ok"
        assert data["version"] == "1.0.0"

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_body(self, client: AsyncClient) -> None:
        response = await client.get("/nowhere")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Not Found"}

    @pytest.mark.asyncio
    async def test_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/")

        assert response.headers["X-Content-Type-Options"] == "nosniff"

    @pytest.mark.asyncio
    async def test_health_degraded_when_store_fails(
        self,
        client: AsyncClient,
        mocker: MockerFixture,
    ) -> None:
        mocker.patch.object(
            AsyncSession,
            "execute",
            side_effect=OperationalError("SELECT 1", {}, Exception("connection refused")),
        )

        response = await client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "degraded"
        assert response.json()["database"] == "unavailable"


class TestUnhandledErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [RuntimeError("unexpected failure"), OSError("connection reset by peer")],
    )
    async def test_rendered_as_error_body(
        self,
        server_error_client: AsyncClient,
        mocker: MockerFixture,
        error: Exception,
    ) -> None:
        mocker.patch.object(QueryComposer, "list_blogs", side_effect=error)

        response = await server_error_client.get("/blogs")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": str(error)}
