"""Server-Sent Events (SSE) transport.

Provides a minimal SSE transport built on `httpx.AsyncClient`. It opens one
streamed GET per tool session and hands raw byte chunks to the caller, which
runs them through `SseFrameReader`. There is no reconnect: a stream that
breaks before the awaited reply fails the invocation.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Optional

import httpx

from ..errors import McpConnectionError


class BasicSseTransport:
    """Minimal SSE transport using httpx.AsyncClient.

    - connect(): start a streamed GET request against the SSE URL
    - aiter_bytes(): yield raw byte chunks in arrival order
    - close(): close the underlying response (and the client, if owned)

    Usage guidelines:
    - Pass a caller-provided AsyncClient when you need custom timeouts, proxies,
      or a mock transport; such a client is left open on close().
    - `auth_token` is the full Authorization header value (e.g. "Bearer abc").
    """

    def __init__(
        self,
        url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        auth_token: Optional[str] = None,
    ) -> None:
        self._url = url
        self._owns_client = client is None
        # Reads on an SSE stream can legitimately stall; the session deadline bounds them instead.
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(10.0, read=None), follow_redirects=True)
        self._auth_token = auth_token
        self._response: Optional[httpx.Response] = None
        self._logger = logging.getLogger(__name__)

    @property
    def url(self) -> httpx.URL:
        """Effective stream URL (after redirects once connected)."""
        if self._response is not None:
            return self._response.url
        return httpx.URL(self._url)

    def _headers(self) -> dict[str, str]:
        """Build headers for SSE requests.

        Returns:
            A dictionary with `Accept: text/event-stream` and optional `Authorization`.
        """
        h = {"Accept": "text/event-stream", "Cache-Control": "no-cache"}
        if self._auth_token:
            h["Authorization"] = self._auth_token
        return h

    async def connect(self) -> None:
        """Establish the streaming connection.

        Raises:
            McpConnectionError: If the response status is not 200 or the request
                fails at the transport level.
        """
        self._logger.debug("SSE connect: GET %s", self._url)
        req = self._client.build_request("GET", self._url, headers=self._headers())
        try:
            response = await self._client.send(req, stream=True)
        except httpx.HTTPError as e:
            raise McpConnectionError(f"SSE connection failed: {e}") from e
        if response.status_code != 200:
            await response.aclose()
            raise McpConnectionError(
                f"SSE connection failed with status {response.status_code}",
                status_code=response.status_code,
            )
        self._response = response

    async def aiter_bytes(self) -> AsyncIterator[bytes]:
        """Iterate over raw stream chunks.

        Raises:
            RuntimeError: If `connect()` was not called before iteration.
            McpConnectionError: If the stream breaks at the transport level.
        """
        if self._response is None:
            raise RuntimeError("SSE not connected. Call connect() first.")
        try:
            async for chunk in self._response.aiter_bytes():
                if chunk:
                    yield chunk
        except httpx.HTTPError as e:
            raise McpConnectionError(f"SSE stream error: {e}") from e

    async def close(self) -> None:
        """Close the current SSE response (if any) and the client when owned."""
        if self._response is not None:
            await self._response.aclose()
            self._response = None
        if self._owns_client:
            await self._client.aclose()
