"""JSON-RPC 2.0 envelopes exchanged with the remote tool server.

Outbound messages are POSTed to the session's callback endpoint; inbound
replies are read off the SSE stream. Ids are scoped to one session:
`INITIALIZE_ID` for the handshake and `OPERATION_ID` for the single awaited
operation. The `notifications/initialized` message carries no id.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseSchema

JSONRPC_VERSION = "2.0"

INITIALIZE_ID = 1
OPERATION_ID = 2

METHOD_INITIALIZE = "initialize"
METHOD_INITIALIZED = "notifications/initialized"
METHOD_TOOLS_LIST = "tools/list"
METHOD_TOOLS_CALL = "tools/call"

DEFAULT_PROTOCOL_VERSION = "2024-11-05"


class ClientInfo(BaseSchema):
    name: str = Field(..., min_length=1, max_length=128)
    version: str = Field(..., min_length=1, max_length=64)


class InitializeParams(BaseSchema):
    protocol_version: str = Field(default=DEFAULT_PROTOCOL_VERSION, description="MCP protocol revision.")
    capabilities: Dict[str, Any] = Field(default_factory=dict)
    client_info: ClientInfo


class JsonRpcNotification(BaseModel):
    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    method: str
    params: Dict[str, Any] = Field(default_factory=dict)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class JsonRpcRequest(JsonRpcNotification):
    id: int


class JsonRpcResponse(BaseModel):
    """Inbound message read from the stream.

    Notifications and server-initiated requests parse too (no `result`,
    maybe a `method`); correlation only looks at `id`.
    """

    model_config = ConfigDict(extra="allow")

    jsonrpc: Optional[str] = None
    id: Optional[Union[int, str]] = None
    method: Optional[str] = None
    result: Any = None
    error: Any = None

    @property
    def has_error(self) -> bool:
        return self.error not in (None, "", {}, [])


class McpOperation(BaseModel):
    """The awaited operation of one session, sent with `OPERATION_ID`."""

    model_config = ConfigDict(frozen=True)

    method: str
    params: Dict[str, Any] = Field(default_factory=dict)
    tool_name: Optional[str] = None

    @classmethod
    def list_tools(cls) -> "McpOperation":
        return cls(method=METHOD_TOOLS_LIST)

    @classmethod
    def call_tool(cls, name: str, arguments: Optional[Dict[str, Any]] = None) -> "McpOperation":
        return cls(
            method=METHOD_TOOLS_CALL,
            params={"name": name, "arguments": dict(arguments or {})},
            tool_name=name,
        )

    def as_request(self, request_id: int = OPERATION_ID) -> JsonRpcRequest:
        return JsonRpcRequest(id=request_id, method=self.method, params=dict(self.params))


def initialize_request(params: InitializeParams) -> JsonRpcRequest:
    return JsonRpcRequest(
        id=INITIALIZE_ID,
        method=METHOD_INITIALIZE,
        params=params.model_dump(by_alias=True, mode="json"),
    )


def initialized_notification() -> JsonRpcNotification:
    return JsonRpcNotification(method=METHOD_INITIALIZED)
