"""Tests for the health route."""

import pytest

from tests.harness import create_api_fixture

api_env = create_api_fixture()


@pytest.mark.asyncio
async def test_health_needs_no_token(api_env):
    response = await api_env.client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == "0.1.0"
