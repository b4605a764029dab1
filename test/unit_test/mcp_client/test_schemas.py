from __future__ import annotations

import pytest

from asset_mcp_bridge.mcp_client.errors import EnvelopeParseError, McpProtocolError
from asset_mcp_bridge.mcp_client.schemas import (
    ClientInfo,
    InitializeParams,
    McpOperation,
    initialize_request,
    initialized_notification,
    parse_tool_envelope,
    result_is_error,
    result_status_text,
)


def test_initialize_request_wire_shape() -> None:
    params = InitializeParams(client_info=ClientInfo(name="asset-mcp-bridge", version="0.1.0"))
    assert initialize_request(params).to_wire() == {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "initialize",
        "params": {
            "protocolVersion": "2024-11-05",
            "capabilities": {},
            "clientInfo": {"name": "asset-mcp-bridge", "version": "0.1.0"},
        },
    }


def test_initialized_notification_has_no_id() -> None:
    assert initialized_notification().to_wire() == {
        "jsonrpc": "2.0",
        "method": "notifications/initialized",
        "params": {},
    }


def test_operations() -> None:
    assert McpOperation.list_tools().as_request().to_wire() == {
        "jsonrpc": "2.0",
        "id": 2,
        "method": "tools/list",
        "params": {},
    }
    call = McpOperation.call_tool("delete-folder", {"folder": "/a"})
    assert call.tool_name == "delete-folder"
    assert call.as_request().params == {"name": "delete-folder", "arguments": {"folder": "/a"}}
    assert McpOperation.call_tool("search-folders").params["arguments"] == {}


def test_parse_tool_envelope() -> None:
    result = {"content": [{"type": "text", "text": '{"folders": [{"path": "/a"}]}'}, {"type": "text", "text": "x"}]}
    assert parse_tool_envelope(result) == {"folders": [{"path": "/a"}]}


@pytest.mark.parametrize(
    "result",
    [None, "text", {"content": []}, {"content": [{"type": "image"}]}, {"content": [{"type": "text", "text": "{"}]}],
)
def test_parse_tool_envelope_failures(result) -> None:
    with pytest.raises(EnvelopeParseError):
        parse_tool_envelope(result)


def test_result_status_text() -> None:
    assert result_status_text({"content": [{"type": "text", "text": "Folder deleted"}]}) == "Folder deleted"
    assert result_status_text({"ok": True}) == '{"ok": true}'


@pytest.mark.parametrize(
    "result,expected",
    [
        ({"isError": True, "content": [{"type": "text", "text": "Folder not empty"}]}, True),
        ({"isError": False, "content": []}, False),
        ({"content": [{"type": "text", "text": "Folder deleted"}]}, False),
        (["not", "an", "envelope"], False),
    ],
)
def test_result_is_error(result, expected) -> None:
    assert result_is_error(result) is expected


@pytest.mark.parametrize(
    "error,message",
    [
        ({"code": 1, "message": "denied"}, "denied"),
        ("plain failure", "plain failure"),
        ({"code": 7}, '{"code": 7}'),
    ],
)
def test_protocol_error_message(error, message) -> None:
    assert str(McpProtocolError(error)) == message
