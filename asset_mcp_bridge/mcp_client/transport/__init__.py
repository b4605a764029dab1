"""Transport interfaces for the MCP client.

Defines the Protocol the invoker uses to read the event stream, so tests and
alternative transports can stand in for `BasicSseTransport`.
"""

from __future__ import annotations

from typing import AsyncIterator, Protocol

import httpx

from .frames import SseFrameReader
from .sse import BasicSseTransport


class SseTransport(Protocol):
    """Protocol for async Server-Sent Events (SSE) transports.

    Implementations manage the lifecycle of one persistent HTTP stream
    delivering text/event-stream bytes to a tool session.

    Examples:
        >>> await transport.connect()
        >>> async for chunk in transport.aiter_bytes():
        ...     payloads = reader.feed(chunk)
        >>> await transport.close()
    """

    @property
    def url(self) -> httpx.URL:
        """URL the stream was opened on; relative callback paths resolve against it."""
        ...

    async def connect(self) -> None:
        """Open the streaming connection.

        Raises:
            McpConnectionError: If the connection cannot be established.
        """
        ...

    def aiter_bytes(self) -> AsyncIterator[bytes]:
        """Yield raw chunks in arrival order."""
        ...

    async def close(self) -> None:
        """Close the stream and release resources."""
        ...


__all__ = ["BasicSseTransport", "SseFrameReader", "SseTransport"]
