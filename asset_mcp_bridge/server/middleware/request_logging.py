"""
Per-request timing and logging.

Every response gets an `X-Process-Time` header (milliseconds) and a
monitoring record. A tool request spends most of its time waiting on the
upstream event stream, so the slow threshold sits above the default list
deadline rather than at a typical web latency.
"""

import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from asset_mcp_bridge.core.logging_config import get_logger
from asset_mcp_bridge.core.monitoring import log_api_request

logger = get_logger(__name__)

SLOW_REQUEST_MS = 5000


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        method = request.method
        path = request.url.path
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.error(
                f"{method} {path} raised after {elapsed_ms:.2f}ms",
                exc_info=True,
                extra={"method": method, "path": path, "duration_ms": elapsed_ms, "error": str(e)},
            )
            log_api_request(method=method, path=path, status_code=500, duration_ms=elapsed_ms)
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Process-Time"] = f"{elapsed_ms:.2f}"
        log_api_request(method=method, path=path, status_code=response.status_code, duration_ms=elapsed_ms)

        if elapsed_ms > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow API request: {method} {path} took {elapsed_ms:.2f}ms",
                extra={"method": method, "path": path, "duration_ms": elapsed_ms, "status_code": response.status_code},
            )
        else:
            logger.debug(f"{method} {path} -> {response.status_code} in {elapsed_ms:.2f}ms")
        return response
