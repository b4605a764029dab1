"""
Upstream Failure Handlers.

Map tool-invocation and token-exchange failures to JSON error responses.
Tool failures (connection, protocol, timeout) are 500s carrying the error
text; token exchange failures keep the upstream status and body preview so
the caller can diagnose them.
"""

from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse

from asset_mcp_bridge.core.logging_config import get_logger
from asset_mcp_bridge.mcp_client.errors import McpClientError, McpConnectionError, McpProtocolError
from asset_mcp_bridge.oauth.errors import OAuthExchangeError

logger = get_logger(__name__)


async def mcp_client_exception_handler(request: Request, exc: McpClientError) -> JSONResponse:
    logger.warning(f"Tool invocation failed in {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    content: Dict[str, Any] = {"error": str(exc), "error_type": type(exc).__name__}
    if isinstance(exc, McpProtocolError):
        content["details"] = exc.error
    if isinstance(exc, McpConnectionError) and exc.status_code is not None:
        content["upstream_status"] = exc.status_code
    return JSONResponse(status_code=500, content=content)


async def oauth_exception_handler(request: Request, exc: OAuthExchangeError) -> JSONResponse:
    logger.error(
        f"Token exchange failed in {request.method} {request.url.path}: {exc}",
        extra={"upstream_status": exc.status_code, "error_type": type(exc).__name__},
    )
    content = exc.to_payload()
    content["error_type"] = type(exc).__name__
    return JSONResponse(status_code=exc.http_status, content=content)
