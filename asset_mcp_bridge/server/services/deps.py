"""
Service Dependencies.

Provides process-wide instances of the tool invoker, the folder cleanup
workflow and the OAuth token client for API endpoints. The instances hold
HTTP clients only; credentials always come from the request.
"""

from typing import Annotated, Optional

from fastapi import Depends

from asset_mcp_bridge.core.logging_config import get_logger
from asset_mcp_bridge.mcp_client import ToolInvoker
from asset_mcp_bridge.oauth import OAuthTokenClient
from asset_mcp_bridge.server.core.config import settings
from asset_mcp_bridge.workflows import FolderCleanupOrchestrator

logger = get_logger(__name__)

_tool_invoker: Optional[ToolInvoker] = None
_oauth_client: Optional[OAuthTokenClient] = None


def get_tool_invoker() -> ToolInvoker:
    global _tool_invoker
    if _tool_invoker is None:
        upstream = settings.upstream
        _tool_invoker = ToolInvoker(
            upstream.sse_url,
            list_timeout=upstream.list_timeout,
            call_timeout=upstream.call_timeout,
            protocol_version=upstream.protocol_version,
            client_name=upstream.client_name,
            client_version=upstream.client_version,
        )
        logger.debug(f"Tool invoker created for {upstream.sse_url}")
    return _tool_invoker


def get_oauth_client() -> OAuthTokenClient:
    global _oauth_client
    if _oauth_client is None:
        oauth = settings.oauth
        _oauth_client = OAuthTokenClient(
            oauth.token_url,
            client_id=oauth.client_id,
            client_secret=oauth.client_secret,
            redirect_uri=oauth.redirect_uri,
            code_verifier=oauth.code_verifier,
            timeout=oauth.timeout,
        )
    return _oauth_client


ToolInvokerDep = Annotated[ToolInvoker, Depends(get_tool_invoker)]
OAuthClientDep = Annotated[OAuthTokenClient, Depends(get_oauth_client)]


def get_folder_cleanup(invoker: ToolInvokerDep) -> FolderCleanupOrchestrator:
    cleanup = settings.cleanup
    return FolderCleanupOrchestrator(
        invoker,
        max_results=cleanup.max_results,
        delete_pause_seconds=cleanup.delete_pause_seconds,
    )


FolderCleanupDep = Annotated[FolderCleanupOrchestrator, Depends(get_folder_cleanup)]


async def close_services() -> None:
    """Close the HTTP clients held by the shared services."""
    global _tool_invoker, _oauth_client
    if _tool_invoker is not None:
        await _tool_invoker.aclose()
        _tool_invoker = None
    if _oauth_client is not None:
        await _oauth_client.aclose()
        _oauth_client = None
