"""
Core utilities for the Asset MCP Bridge.

This package provides functionality shared by the protocol client and the
HTTP server: logging configuration and optional Logfire monitoring.
"""

from asset_mcp_bridge.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
