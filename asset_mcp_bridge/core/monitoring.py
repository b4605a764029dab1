"""
Optional Pydantic Logfire tracing.

When LOGFIRE_ENABLED is true and LOGFIRE_TOKEN is set, the bridge sends:
- FastAPI request spans and HTTPX spans (SSE GETs, handshake POSTs, token POSTs)
- one record per API request and per remote tool invocation

Otherwise every function here returns without importing logfire.
"""

import logging
import os
from typing import Any, Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


LOGFIRE_ENABLED = _env_flag("LOGFIRE_ENABLED", "false")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "asset-mcp-bridge")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.1.0")
LOGFIRE_TRACE_HTTPX = _env_flag("LOGFIRE_TRACE_HTTPX", "true")
LOGFIRE_TRACE_FASTAPI = _env_flag("LOGFIRE_TRACE_FASTAPI", "true")


def initialize_logfire(app: Optional[FastAPI] = None) -> bool:
    """
    Configure Logfire and instrument HTTPX and, when given, the FastAPI app.

    Returns:
        True when Logfire was configured.
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False
    if not LOGFIRE_TOKEN:
        logger.warning("LOGFIRE_ENABLED is set but LOGFIRE_TOKEN is empty; monitoring stays off.")
        return False

    try:
        import logfire
    except ImportError:
        logger.warning("LOGFIRE_ENABLED is set but the 'logfire' package is not installed.")
        return False

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to configure Logfire: {e}", exc_info=True)
        return False

    # Instrumentation is best effort: a missing extra must not stop the server.
    if LOGFIRE_TRACE_HTTPX:
        try:
            logfire.instrument_httpx()
        except Exception as e:
            logger.warning(f"Failed to instrument HTTPX: {e}")
    if LOGFIRE_TRACE_FASTAPI and app is not None:
        try:
            logfire.instrument_fastapi(app=app)
        except Exception as e:
            logger.warning(f"Failed to instrument FastAPI: {e}")

    logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")
    return True


def _emit(event: str, **attributes: Any) -> None:
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        logfire.info(event, **attributes)
    except Exception:
        logger.debug(f"Could not send '{event}' to Logfire")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    _emit("API request completed", method=method, path=path, status_code=status_code, duration_ms=duration_ms)


def log_tool_invocation(method: str, tool_name: Optional[str], outcome: str, duration_ms: float, **extra: Any) -> None:
    """
    Record one remote tool invocation.

    Args:
        method: tools/list or tools/call
        tool_name: Tool name for tools/call, None for tools/list
        outcome: "success" or the exception class name
        duration_ms: Wall time including connect and handshake
    """
    _emit("MCP tool invocation", method=method, tool_name=tool_name, outcome=outcome, duration_ms=duration_ms, **extra)
