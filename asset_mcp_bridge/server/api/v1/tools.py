"""
Remote Tool Endpoints.

This module exposes the remote server's tool catalogue. Each request opens
its own upstream session with the caller's token.
"""
from typing import Optional

from fastapi import APIRouter, Body, HTTPException, Query

from asset_mcp_bridge.server.schemas import AccessTokenRequest
from asset_mcp_bridge.server.services.deps import ToolInvokerDep

router = APIRouter()


def resolve_token(payload: Optional[AccessTokenRequest], token: Optional[str]) -> str:
    """Pick the access token from the JSON body, falling back to the query string."""
    access_token = (payload.access_token if payload else None) or token
    if not access_token:
        raise HTTPException(status_code=400, detail="Missing access token")
    return access_token


@router.api_route(
    "/list-tools",
    methods=["GET", "POST"],
    summary="List Remote Tools",
    description="Run tools/list against the remote tool server on the caller's behalf.",
    response_description="The raw tools/list result.",
)
async def list_tools(
    invoker: ToolInvokerDep,
    payload: Optional[AccessTokenRequest] = Body(default=None),
    token: Optional[str] = Query(default=None, description="Access token (alternative to the JSON body)."),
):
    """
    List the tools offered upstream.

    Accepts the token as `{"access_token": ...}` in a POST body or as `?token=`.
    """
    return await invoker.list_tools(resolve_token(payload, token))
