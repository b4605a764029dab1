from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from .errors import (
    MissingAccessTokenError,
    OAuthTransportError,
    UpstreamHTTPError,
    UpstreamHtmlError,
    UpstreamResponseError,
    preview,
)
from .models import TokenResponse


class OAuthTokenClient:
    """
    Thin HTTP client for the provider's OAuth token endpoint.

    Responsibilities:
    - exchange an authorization code (PKCE, confidential client) for an access token

    Note: tokens are returned to the caller and never stored or refreshed here.
    """

    def __init__(
        self,
        token_url: str,
        *,
        client_id: str,
        client_secret: Optional[str] = None,
        redirect_uri: str,
        code_verifier: Optional[str] = None,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.code_verifier = code_verifier
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    def _form(self, code: str) -> Dict[str, str]:
        form = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.redirect_uri,
            "client_id": self.client_id,
        }
        if self.client_secret:
            form["client_secret"] = self.client_secret
        if self.code_verifier:
            form["code_verifier"] = self.code_verifier
        return form

    async def exchange_code(self, code: str) -> TokenResponse:
        """Exchange an authorization code for a token.

        Raises:
            UpstreamHtmlError: The endpoint returned an HTML page.
            UpstreamResponseError: The body is not JSON (or not a token object).
            UpstreamHTTPError: The endpoint returned a non-2xx JSON body.
            MissingAccessTokenError: The JSON body has no access_token.
            OAuthTransportError: The endpoint could not be reached.
        """
        self._logger.info("OAuthTokenClient.exchange_code: POST %s code=%s...", self.token_url, code[:20])
        try:
            r = await self._client.post(
                self.token_url,
                data=self._form(code),
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            raise OAuthTransportError(f"Token endpoint request failed: {e}") from e

        raw = r.text
        self._logger.debug(
            "OAuthTokenClient.exchange_code: status=%s content-type=%s body=%s",
            r.status_code,
            r.headers.get("content-type"),
            preview(raw, 500),
        )

        if raw.strip().startswith("<"):
            self._logger.error("OAuthTokenClient.exchange_code: token endpoint returned HTML")
            raise UpstreamHtmlError(r.status_code, raw)

        try:
            data: Any = r.json()
        except ValueError as e:
            self._logger.error("OAuthTokenClient.exchange_code: JSON parse failed: %s", e)
            raise UpstreamResponseError(r.status_code, raw, str(e)) from e

        if r.is_error:
            raise UpstreamHTTPError(
                f"Token endpoint returned {r.status_code}",
                status_code=r.status_code,
                details=preview(raw),
            )

        if not isinstance(data, dict) or not data.get("access_token"):
            self._logger.error("OAuthTokenClient.exchange_code: no access_token in response")
            raise MissingAccessTokenError(r.status_code, data)

        try:
            token = TokenResponse.model_validate(data)
        except ValidationError as e:
            raise UpstreamResponseError(r.status_code, raw, str(e)) from e
        self._logger.info("OAuthTokenClient.exchange_code: access token received %s...", token.access_token[:20])
        return token

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
