from .jsonrpc import (
    INITIALIZE_ID,
    OPERATION_ID,
    ClientInfo,
    InitializeParams,
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    McpOperation,
    initialize_request,
    initialized_notification,
)
from .results import ToolResultEnvelope, parse_tool_envelope, result_is_error, result_status_text

__all__ = [
    "INITIALIZE_ID",
    "OPERATION_ID",
    "ClientInfo",
    "InitializeParams",
    "JsonRpcNotification",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "McpOperation",
    "ToolResultEnvelope",
    "parse_tool_envelope",
    "result_is_error",
    "initialize_request",
    "initialized_notification",
    "result_status_text",
]
