"""Session handshake: callback endpoint discovery and the three-message opener.

The first SSE payload of a session names the private endpoint that accepts
the session's POSTs. Once it is known the client sends, in order and each
awaited, `initialize` (id 1), `notifications/initialized` (no id), and the
awaited operation (id 2). The POST responses carry no protocol data; the
operation's reply arrives later on the stream.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Dict, Optional

import httpx

from .errors import McpConnectionError
from .schemas.jsonrpc import (
    InitializeParams,
    JsonRpcNotification,
    McpOperation,
    initialize_request,
    initialized_notification,
)

_URL_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


class HandshakePhase(str, Enum):
    AWAITING_ENDPOINT = "awaiting_endpoint"
    ENDPOINT_FOUND = "endpoint_found"


def looks_like_endpoint(payload: str) -> bool:
    """True for a root-relative path or an absolute URL."""
    return payload.startswith("/") or bool(_URL_SCHEME.match(payload))


class SessionHandshake:
    """Two-state endpoint discovery plus the sequential handshake POSTs.

    - offer(payload): while awaiting, the first payload that looks like an
      endpoint is resolved against the stream URL and ends discovery
    - run(operation): POST initialize, initialized, then the operation

    Every POST carries the caller's Authorization header.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        stream_url: httpx.URL,
        *,
        auth_token: str,
        init_params: InitializeParams,
    ) -> None:
        self._http = http
        self._stream_url = stream_url
        self._auth_token = auth_token
        self._init_params = init_params
        self._logger = logging.getLogger(__name__)
        self.phase = HandshakePhase.AWAITING_ENDPOINT
        self.endpoint: Optional[str] = None

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json, text/event-stream",
            "Authorization": self._auth_token,
        }

    def offer(self, payload: str) -> Optional[str]:
        """Test a stream payload; return the endpoint URL when it ends discovery."""
        if self.phase is not HandshakePhase.AWAITING_ENDPOINT:
            return None
        if not looks_like_endpoint(payload):
            self._logger.debug("SessionHandshake.offer: ignoring non-endpoint payload while awaiting endpoint")
            return None
        self.endpoint = str(self._stream_url.join(payload))
        self.phase = HandshakePhase.ENDPOINT_FOUND
        self._logger.debug("SessionHandshake.offer: endpoint found %s", self.endpoint)
        return self.endpoint

    async def run(self, operation: McpOperation) -> None:
        """Send the handshake and the operation in strict order.

        Raises:
            RuntimeError: If called before an endpoint was found.
            McpConnectionError: If any POST fails or returns a non-2xx status.
        """
        if self.endpoint is None:
            raise RuntimeError("Handshake endpoint not discovered yet.")
        await self._post(initialize_request(self._init_params))
        await self._post(initialized_notification())
        await self._post(operation.as_request())

    async def _post(self, message: JsonRpcNotification) -> None:
        assert self.endpoint is not None
        self._logger.debug("SessionHandshake._post: POST %s method=%s", self.endpoint, message.method)
        try:
            r = await self._http.post(self.endpoint, headers=self._headers(), json=message.to_wire())
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise McpConnectionError(
                f"{message.method} POST failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise McpConnectionError(f"{message.method} POST failed: {e}") from e
