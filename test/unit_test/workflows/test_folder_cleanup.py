from __future__ import annotations

import json
from typing import Any, Dict, List
from unittest.mock import AsyncMock

import pytest

from asset_mcp_bridge.mcp_client.errors import McpConnectionError, McpTimeoutError
from asset_mcp_bridge.workflows import DeletionStatus, FolderCleanupOrchestrator
from asset_mcp_bridge.workflows.folder_cleanup import DELETE_FOLDER_TOOL, SEARCH_FOLDERS_TOOL


def _envelope(payload: Any) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": json.dumps(payload)}]}


def _fake_invoker(search_result: Any, delete_results: Dict[str, Any]) -> AsyncMock:
    async def invoke(credential: str, tool_name: str, arguments: Dict[str, Any] = None) -> Any:
        if tool_name == SEARCH_FOLDERS_TOOL:
            if isinstance(search_result, Exception):
                raise search_result
            return search_result
        outcome = delete_results[arguments["folder"]]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return AsyncMock(side_effect=invoke)


def _orchestrator(invoke: AsyncMock) -> FolderCleanupOrchestrator:
    invoker = AsyncMock()
    invoker.invoke = invoke
    return FolderCleanupOrchestrator(invoker, max_results=50, delete_pause_seconds=0)


@pytest.mark.asyncio
async def test_search_arguments_and_sequential_deletes() -> None:
    invoke = _fake_invoker(
        _envelope({"folders": [{"path": "/a", "name": "a"}, {"path": "/b"}, {"path": "/c"}]}),
        {
            "/a": {"content": [{"type": "text", "text": "deleted /a"}]},
            "/b": McpConnectionError("POST failed"),
            "/c": {"deleted": True},
        },
    )

    result = await _orchestrator(invoke).cleanup("tok")

    first = invoke.await_args_list[0]
    assert first.args == ("tok", SEARCH_FOLDERS_TOOL, {"sort_by": [], "max_results": 50, "next_cursor": None})
    deletes = [c.args for c in invoke.await_args_list[1:]]
    assert deletes == [
        ("tok", DELETE_FOLDER_TOOL, {"folder": "/a"}),
        ("tok", DELETE_FOLDER_TOOL, {"folder": "/b"}),
        ("tok", DELETE_FOLDER_TOOL, {"folder": "/c"}),
    ]

    assert [f.path for f in result.folders_found] == ["/a", "/b", "/c"]
    assert result.folders_found[0].model_dump() == {"path": "/a", "name": "a"}
    assert [(o.folder, o.status) for o in result.report] == [
        ("/a", DeletionStatus.SUCCESS),
        ("/b", DeletionStatus.FAILED),
        ("/c", DeletionStatus.SUCCESS),
    ]
    assert result.report[0].details == "deleted /a"
    assert result.report[1].error == "POST failed"
    assert result.report[2].details == json.dumps({"deleted": True})


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "search_result",
    [
        {"content": [{"type": "text", "text": "not json"}]},
        {"content": []},
        _envelope({"total": 0}),
        _envelope({"folders": "nope"}),
        _envelope([1, 2]),
        "plain string",
    ],
)
async def test_undecodable_search_result_means_nothing_to_delete(search_result: Any) -> None:
    invoke = _fake_invoker(search_result, {})

    result = await _orchestrator(invoke).cleanup("tok")

    assert result.folders_found == []
    assert result.report == []
    assert invoke.await_count == 1


@pytest.mark.asyncio
async def test_search_failure_propagates() -> None:
    invoke = _fake_invoker(McpTimeoutError("tools/call", 30), {})

    with pytest.raises(McpTimeoutError):
        await _orchestrator(invoke).cleanup("tok")


@pytest.mark.asyncio
async def test_entries_without_path_are_skipped() -> None:
    invoke = _fake_invoker(_envelope({"folders": [{"name": "no path"}, {"path": "/ok"}]}), {"/ok": _envelope({})})

    result = await _orchestrator(invoke).cleanup("tok")

    assert [o.folder for o in result.report] == ["/ok"]


@pytest.mark.asyncio
async def test_unexpected_error_is_recorded_and_loop_continues() -> None:
    invoke = _fake_invoker(
        _envelope({"folders": [{"path": "/x"}, {"path": "/y"}]}),
        {"/x": ValueError("weird"), "/y": _envelope({"ok": True})},
    )

    result = await _orchestrator(invoke).cleanup("tok")

    assert result.report[0].status is DeletionStatus.FAILED
    assert result.report[0].error == "weird"
    assert result.report[1].status is DeletionStatus.SUCCESS


@pytest.mark.asyncio
async def test_delete_reply_flagged_as_error_is_failed() -> None:
    invoke = _fake_invoker(
        _envelope({"folders": [{"path": "/full"}, {"path": "/empty"}]}),
        {
            "/full": {"isError": True, "content": [{"type": "text", "text": "Folder not empty"}]},
            "/empty": {"isError": False, "content": [{"type": "text", "text": "deleted /empty"}]},
        },
    )

    result = await _orchestrator(invoke).cleanup("tok")

    assert [(o.folder, o.status) for o in result.report] == [
        ("/full", DeletionStatus.FAILED),
        ("/empty", DeletionStatus.SUCCESS),
    ]
    assert result.report[0].error == "Folder not empty"
    assert result.report[0].details is None
    assert result.report[1].details == "deleted /empty"


@pytest.mark.asyncio
async def test_cleanup_over_sse_with_one_timed_out_delete(fake_mcp_server, make_invoker) -> None:
    def responder(msg: Dict[str, Any]) -> Any:
        params = msg["params"]
        if params["name"] == SEARCH_FOLDERS_TOOL:
            text = json.dumps({"folders": [{"path": "/a"}, {"path": "/b"}]})
            return {"jsonrpc": "2.0", "id": 2, "result": {"content": [{"type": "text", "text": text}]}}
        if params["arguments"]["folder"] == "/a":
            return {"jsonrpc": "2.0", "id": 2, "result": {"content": [{"type": "text", "text": "Folder deleted"}]}}
        return None

    fake_mcp_server.responder = responder
    orchestrator = FolderCleanupOrchestrator(make_invoker(call_timeout=0.3), delete_pause_seconds=0)

    result = await orchestrator.cleanup("tok")

    report: List[Any] = [(o.folder, o.status, o.details, o.error) for o in result.report]
    assert report[0] == ("/a", DeletionStatus.SUCCESS, "Folder deleted", None)
    assert report[1][:2] == ("/b", DeletionStatus.FAILED)
    assert "Timeout" in report[1][3]
    assert len(fake_mcp_server.streams) == 3
