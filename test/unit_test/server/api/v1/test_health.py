import pytest
from httpx import AsyncClient

from asset_mcp_bridge.server.core.config import VERSION, settings


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_version(client: AsyncClient, invoker_mock):
    response = await client.get("/version")
    assert response.status_code == 200
    assert response.json() == {
        "version": VERSION,
        "schema_version": "v1",
        "mcp_protocol_version": settings.upstream.protocol_version,
    }
    assert "X-Process-Time" in response.headers
    invoker_mock.list_tools.assert_not_awaited()
