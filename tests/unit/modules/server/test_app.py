"""Tests for the HTTP routes."""

import pytest
from aiohttp.test_utils import TestClient, TestServer

from src.modules.server import create_app
from tests.utils.test_logger import create_test_logger


@pytest.fixture
def logger():
    return create_test_logger()


@pytest.mark.asyncio
@pytest.mark.parametrize("path, message", [
    ("/", "Hello World"),
    ("/api", "Hello API"),
])
async def test_static_endpoints(logger, path, message):
    """Test that / and /api return their fixed JSON bodies."""
    async with TestClient(TestServer(create_app(logger))) as client:
        response = await client.get(path)

        assert response.status == 200
        assert response.content_type == "application/json"
        assert await response.json() == {
            "status": "success",
            "message": message,
            "data": None
        }


@pytest.mark.asyncio
async def test_health(logger):
    async with TestClient(TestServer(create_app(logger))) as client:
        response = await client.get("/health")

        assert response.status == 200
        assert response.content_type == "application/json"
        assert await response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_requests_are_logged(logger):
    async with TestClient(TestServer(create_app(logger))) as client:
        await client.get("/api")
        await client.get("/missing")

    assert "REQUEST: GET /api 200" in logger.get_logs()
    assert "REQUEST: GET /missing 404" in logger.get_logs()


@pytest.mark.asyncio
async def test_wrong_method_is_rejected(logger):
    async with TestClient(TestServer(create_app(logger))) as client:
        response = await client.post("/health")

        assert response.status == 405
