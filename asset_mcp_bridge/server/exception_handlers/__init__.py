"""
Exception handlers for the Asset MCP Bridge server.

This package contains custom exception handlers for different error types
and a setup function to register them with the FastAPI application.
"""

from fastapi import FastAPI

from asset_mcp_bridge.core.logging_config import get_logger
from asset_mcp_bridge.mcp_client.errors import McpClientError
from asset_mcp_bridge.oauth.errors import OAuthExchangeError

from .global_handler import global_exception_handler
from .upstream_handler import mcp_client_exception_handler, oauth_exception_handler

logger = get_logger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(McpClientError, mcp_client_exception_handler)
    app.add_exception_handler(OAuthExchangeError, oauth_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")


__all__ = ["setup_exception_handlers"]
