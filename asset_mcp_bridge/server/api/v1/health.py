"""
Liveness and version endpoints.

Neither endpoint touches the upstream MCP server, so they stay green while
it is unreachable.
"""

from fastapi import APIRouter

from asset_mcp_bridge.server.core.config import VERSION, settings

router = APIRouter()


@router.get("/health", summary="Health Check", response_description="Status object.")
async def health_check():
    """Report that the bridge process is up."""
    return {"status": "ok"}


@router.get("/version", summary="Get Version", response_description="Version object.")
async def version():
    """
    Bridge version, API schema version and the MCP protocol revision sent
    in `initialize`.
    """
    return {
        "version": VERSION,
        "schema_version": "v1",
        "mcp_protocol_version": settings.upstream.protocol_version,
    }
