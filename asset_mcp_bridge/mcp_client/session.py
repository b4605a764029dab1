"""One tool session: a stream, its handshake, and its awaited reply.

A session lives for exactly one invocation. A background task pumps stream
bytes through the frame reader; the first endpoint payload starts the
handshake task; every later payload goes to the correlator. `close()` tears
everything down once, whatever the outcome.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

import httpx

from .correlator import ResponseCorrelator
from .errors import McpClientError, McpConnectionError
from .handshake import HandshakePhase, SessionHandshake
from .schemas.jsonrpc import InitializeParams, McpOperation
from .transport import SseFrameReader, SseTransport


class McpSseSession:
    def __init__(
        self,
        transport: SseTransport,
        http: httpx.AsyncClient,
        operation: McpOperation,
        *,
        auth_token: str,
        init_params: InitializeParams,
    ) -> None:
        self._transport = transport
        self._http = http
        self._operation = operation
        self._auth_token = auth_token
        self._init_params = init_params
        self._frames = SseFrameReader()
        self._logger = logging.getLogger(__name__)
        self._tasks: List[asyncio.Task[None]] = []
        self._closed = False
        self.correlator = ResponseCorrelator(operation.method)
        self.handshake: Optional[SessionHandshake] = None

    @property
    def phase(self) -> HandshakePhase:
        if self.handshake is None:
            return HandshakePhase.AWAITING_ENDPOINT
        return self.handshake.phase

    async def open(self) -> None:
        """Connect the stream and start pumping it.

        Raises:
            McpConnectionError: If the stream cannot be opened (e.g. non-200).
        """
        await self._transport.connect()
        self.handshake = SessionHandshake(
            self._http,
            self._transport.url,
            auth_token=self._auth_token,
            init_params=self._init_params,
        )
        self._tasks.append(asyncio.create_task(self._pump()))

    async def wait(self, timeout: float) -> Any:
        return await self.correlator.wait(timeout)

    def dispatch(self, payload: str) -> None:
        """Route one stream payload to endpoint discovery or to the correlator."""
        assert self.handshake is not None
        if self.handshake.phase is HandshakePhase.AWAITING_ENDPOINT:
            if self.handshake.offer(payload) is not None:
                self._tasks.append(asyncio.create_task(self._run_handshake()))
            return
        self.correlator.feed(payload)

    async def _pump(self) -> None:
        try:
            async for chunk in self._transport.aiter_bytes():
                for payload in self._frames.feed(chunk):
                    self.dispatch(payload)
                    if self.correlator.resolved:
                        return
            self.correlator.fail(McpConnectionError("SSE stream closed before a response arrived"))
        except McpClientError as e:
            self.correlator.fail(e)
        except Exception as e:
            self._logger.error("McpSseSession._pump: unexpected stream failure", exc_info=True)
            self.correlator.fail(McpConnectionError(f"SSE stream error: {e}"))

    async def _run_handshake(self) -> None:
        assert self.handshake is not None
        try:
            await self.handshake.run(self._operation)
        except McpClientError as e:
            self._logger.warning("McpSseSession handshake failed: %s", e)
            self.correlator.fail(e)

    async def close(self) -> None:
        """Cancel the pump and any in-flight handshake, then close the stream."""
        if self._closed:
            return
        self._closed = True
        for task in self._tasks:
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        await self._transport.close()
