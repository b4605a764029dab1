from .errors import (
    EnvelopeParseError,
    McpClientError,
    McpConnectionError,
    McpProtocolError,
    McpTimeoutError,
)
from .invoker import ToolInvoker

__all__ = [
    "EnvelopeParseError",
    "McpClientError",
    "McpConnectionError",
    "McpProtocolError",
    "McpTimeoutError",
    "ToolInvoker",
]
