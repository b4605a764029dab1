"""
Fallback handler for exceptions no other handler claims.

The client only sees an opaque error id; the log line carrying the same id
has the request context and traceback.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from asset_mcp_bridge.core.logging_config import get_logger

logger = get_logger(__name__)


def _request_context(request: Request) -> dict:
    # Query values can be access tokens (?token=); only their names are logged.
    return {
        "method": request.method,
        "path": request.url.path,
        "query_keys": sorted(request.query_params.keys()),
        "client": request.client.host if request.client else "unknown",
    }


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception and answer 500.

    Returns:
        JSONResponse with `detail`, `error_id` and `error_type`
    """
    error_id = id(exc)
    error_type = type(exc).__name__
    context = _request_context(request)

    logger.error(
        f"Unhandled exception [{error_id}] in {context['method']} {context['path']}: {error_type}: {exc}",
        exc_info=exc,
        extra={"error_id": error_id, "error_type": error_type, **context},
    )

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error_id": error_id, "error_type": error_type},
    )
