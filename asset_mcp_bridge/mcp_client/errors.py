"""Error types raised by the split-channel MCP client.

Purpose:
- Give every failure of a tool invocation a typed exception so the HTTP layer
  and the cleanup workflow can decide what is fatal and what is recorded.

Usage:
- Catch `McpClientError` to handle any invocation failure.
- `McpConnectionError`: the SSE stream could not be opened (non-200), broke
  before the reply arrived, or a handshake POST failed.
- `McpProtocolError`: the correlated reply carried an `error` field.
- `McpTimeoutError`: no reply with the reserved id arrived before the deadline.
- `EnvelopeParseError`: a tool result's nested JSON text could not be decoded.
"""

from __future__ import annotations

import json
from typing import Any, Optional


class McpClientError(Exception):
    pass


class McpConnectionError(McpClientError):
    """Raised when the stream or a handshake POST fails before resolution.

    Args:
        message: Human-readable error description.
        status_code: HTTP status of the failing request, when there was one.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class McpProtocolError(McpClientError):
    """Raised when the correlated reply carries a JSON-RPC error.

    The raw error field is kept on `error`; the message is the error's own
    `message` when it has one, otherwise its JSON text.
    """

    def __init__(self, error: Any) -> None:
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            text = error["message"]
        elif isinstance(error, str):
            text = error
        else:
            text = json.dumps(error)
        super().__init__(text)
        self.error = error


class McpTimeoutError(McpClientError):
    def __init__(self, method: str, timeout: float) -> None:
        super().__init__(f"Timeout waiting for {method} response after {timeout:g}s")
        self.method = method
        self.timeout = timeout


class EnvelopeParseError(McpClientError):
    def __init__(self, message: str, *, raw: Any = None) -> None:
        super().__init__(f"Could not parse tool result envelope: {message}")
        self.raw = raw
