from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Dict, Optional

import httpx

from asset_mcp_bridge.core.monitoring import log_tool_invocation

from .errors import McpClientError, McpTimeoutError
from .schemas.jsonrpc import DEFAULT_PROTOCOL_VERSION, ClientInfo, InitializeParams, McpOperation
from .schemas.results import parse_tool_envelope
from .session import McpSseSession
from .transport import BasicSseTransport, SseTransport

TransportFactory = Callable[[str], SseTransport]


def _mask(token: str) -> str:
    return f"{token[:8]}..." if len(token) > 8 else "***"


class ToolInvoker:
    """
    Client for a remote tool server that answers POSTed requests on an SSE stream.

    - list_tools: `tools/list` with the (shorter) listing deadline
    - invoke: `tools/call` for one named tool with the call deadline
    - invoke_json: invoke, then decode the JSON text nested in the result

    Each call opens its own stream and session; nothing is shared between
    calls except the HTTP clients. The caller's credential is used for the
    stream and every POST and is never stored.
    """

    def __init__(
        self,
        sse_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        sse_client: Optional[httpx.AsyncClient] = None,
        list_timeout: float = 10.0,
        call_timeout: float = 30.0,
        protocol_version: str = DEFAULT_PROTOCOL_VERSION,
        client_name: str = "asset-mcp-bridge",
        client_version: str = "0.1.0",
    ) -> None:
        self.sse_url = sse_url
        self._owns_http = client is None
        self._http = client or httpx.AsyncClient(timeout=10.0, follow_redirects=True)
        self._sse_client = sse_client
        self.list_timeout = list_timeout
        self.call_timeout = call_timeout
        self._init_params = InitializeParams(
            protocol_version=protocol_version,
            client_info=ClientInfo(name=client_name, version=client_version),
        )
        self._logger = logging.getLogger(__name__)

    def _transport_for(self, auth_token: str) -> SseTransport:
        return BasicSseTransport(self.sse_url, client=self._sse_client, auth_token=auth_token)

    async def list_tools(self, credential: str) -> Any:
        return await self._run(credential, McpOperation.list_tools(), self.list_timeout)

    async def invoke(self, credential: str, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        if not tool_name:
            raise McpClientError("Tool name is required")
        return await self._run(credential, McpOperation.call_tool(tool_name, arguments), self.call_timeout)

    async def invoke_json(self, credential: str, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Invoke a tool and decode the JSON text of its first content element.

        Raises:
            EnvelopeParseError: If the result does not carry JSON text.
        """
        result = await self.invoke(credential, tool_name, arguments)
        return parse_tool_envelope(result)

    async def _run(self, credential: str, operation: McpOperation, timeout: float) -> Any:
        if not credential:
            raise McpClientError("Missing access token")
        auth_token = f"Bearer {credential}"
        session = McpSseSession(
            self._transport_for(auth_token),
            self._http,
            operation,
            auth_token=auth_token,
            init_params=self._init_params,
        )
        self._logger.debug(
            "ToolInvoker._run: %s tool=%s token=%s timeout=%ss",
            operation.method,
            operation.tool_name,
            _mask(credential),
            timeout,
        )
        start = time.monotonic()
        outcome = "success"
        try:
            # One budget covers the stream headers and the reply.
            try:
                await asyncio.wait_for(session.open(), timeout=timeout)
            except asyncio.TimeoutError:
                raise McpTimeoutError(operation.method, timeout) from None
            remaining = max(timeout - (time.monotonic() - start), 0.0)
            try:
                return await session.wait(remaining)
            except McpTimeoutError:
                raise McpTimeoutError(operation.method, timeout) from None
        except McpClientError as e:
            outcome = type(e).__name__
            self._logger.info("ToolInvoker._run: %s tool=%s failed: %s", operation.method, operation.tool_name, e)
            raise
        finally:
            await session.close()
            duration_ms = (time.monotonic() - start) * 1000
            self._logger.debug(
                "ToolInvoker._run: %s tool=%s finished outcome=%s in %.1fms",
                operation.method,
                operation.tool_name,
                outcome,
                duration_ms,
            )
            log_tool_invocation(operation.method, operation.tool_name, outcome, duration_ms)

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()
