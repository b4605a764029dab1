from typing import AsyncGenerator
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from asset_mcp_bridge.mcp_client import ToolInvoker
from asset_mcp_bridge.oauth import OAuthTokenClient


@pytest.fixture
def invoker_mock() -> AsyncMock:
    return AsyncMock(spec=ToolInvoker)


@pytest.fixture
def oauth_mock() -> AsyncMock:
    return AsyncMock(spec=OAuthTokenClient)


@pytest_asyncio.fixture(name="client")
async def client_fixture(invoker_mock: AsyncMock, oauth_mock: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from asset_mcp_bridge.server.main import app
    from asset_mcp_bridge.server.services.deps import get_oauth_client, get_tool_invoker

    app.dependency_overrides[get_tool_invoker] = lambda: invoker_mock
    app.dependency_overrides[get_oauth_client] = lambda: oauth_mock

    # Mock the lifespan to keep monitoring and shared clients out of tests
    async def mock_lifespan(app):
        yield

    with patch("asset_mcp_bridge.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()
