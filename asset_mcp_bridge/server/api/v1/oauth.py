"""
OAuth Endpoints.

This module handles the browser side of the authorization-code flow: the
provider redirects to /callback, the page posts the code to /exchange, and
the resulting token is handed back to the page. No token is stored.
"""
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Body, HTTPException, Query
from fastapi.responses import RedirectResponse

from asset_mcp_bridge.core.logging_config import get_logger
from asset_mcp_bridge.server.schemas import CodeExchangeRequest, TokenExchangeResponse
from asset_mcp_bridge.server.services.deps import OAuthClientDep

router = APIRouter()
logger = get_logger(__name__)


@router.get(
    "/callback",
    summary="OAuth Callback",
    description="Receive the authorization code from the provider and hand it to the front page.",
    status_code=302,
)
async def oauth_callback(code: str = Query(default="", description="Authorization code from the provider.")):
    """
    OAuth redirect target.

    Redirects to `/?code=...` so the static page can pick the code up and call /exchange.
    """
    return RedirectResponse(url="/?" + urlencode({"code": code}), status_code=302)


@router.post(
    "/exchange",
    response_model=TokenExchangeResponse,
    summary="Exchange Authorization Code",
    description="Exchange an authorization code for an access token at the provider's token endpoint.",
    response_description="The access token and its metadata.",
)
async def exchange_code(oauth: OAuthClientDep, payload: Optional[CodeExchangeRequest] = Body(default=None)):
    """
    Exchange a code for a token.

    Upstream failures are mapped by the exception handlers: HTML or unparsable
    bodies become 502, a response without access_token becomes 400.
    """
    if payload is None or not payload.code:
        raise HTTPException(status_code=400, detail="Missing authorization code")

    token = await oauth.exchange_code(payload.code)
    return TokenExchangeResponse(
        access_token=token.access_token,
        token_type=token.token_type,
        expires_in=token.expires_in,
        scope=token.scope,
    )
