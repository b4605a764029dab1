from __future__ import annotations

import asyncio
import json
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio

from asset_mcp_bridge.mcp_client import ToolInvoker

Responder = Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]


class QueueByteStream(httpx.AsyncByteStream):
    """Event stream body fed from a queue; `None` ends the stream."""

    def __init__(self, queue: "asyncio.Queue[Optional[bytes]]") -> None:
        self._queue = queue
        self.close_count = 0

    async def __aiter__(self) -> AsyncIterator[bytes]:
        while True:
            chunk = await self._queue.get()
            if chunk is None:
                return
            yield chunk

    async def aclose(self) -> None:
        self.close_count += 1


def tool_reply(result: Any, request_id: int = 2) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


class FakeMcpServer:
    """In-memory split-channel MCP server for httpx.MockTransport.

    GET /sse opens a stream that first announces `endpoint`; POSTs to
    /messages are recorded and the awaited operation (id 2) is answered on the
    most recent stream with whatever `responder` returns (None: no reply).
    """

    def __init__(self, responder: Optional[Responder] = None) -> None:
        self.responder: Responder = responder or (lambda msg: tool_reply({"tools": []}))
        self.endpoint: Optional[str] = "/messages?session_id=abc"
        self.sse_status = 200
        self.preamble: List[bytes] = []
        self.close_after_endpoint = False
        self.post_status: Dict[str, int] = {}
        self.chunk_size: Optional[int] = None
        self.requests: List[httpx.Request] = []
        self.posted: List[Dict[str, Any]] = []
        self.streams: List["asyncio.Queue[Optional[bytes]]"] = []
        self.bodies: List[QueueByteStream] = []

    def push_bytes(self, data: bytes) -> None:
        queue = self.streams[-1]
        if self.chunk_size:
            for i in range(0, len(data), self.chunk_size):
                queue.put_nowait(data[i : i + self.chunk_size])
        else:
            queue.put_nowait(data)

    def push(self, message: Dict[str, Any]) -> None:
        self.push_bytes(f"data: {json.dumps(message)}\n\n".encode("utf-8"))

    def end_stream(self) -> None:
        self.streams[-1].put_nowait(None)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET" and request.url.path == "/sse":
            if self.sse_status != 200:
                return httpx.Response(self.sse_status, text="stream refused")
            queue: "asyncio.Queue[Optional[bytes]]" = asyncio.Queue()
            self.streams.append(queue)
            for chunk in self.preamble:
                self.push_bytes(chunk)
            if self.endpoint is not None:
                self.push_bytes(f"event: endpoint\ndata: {self.endpoint}\n\n".encode("utf-8"))
            if self.close_after_endpoint:
                self.end_stream()
            body = QueueByteStream(queue)
            self.bodies.append(body)
            return httpx.Response(200, headers={"content-type": "text/event-stream"}, stream=body)
        if request.method == "POST" and request.url.path == "/messages":
            message = json.loads(request.content)
            self.posted.append(message)
            status = self.post_status.get(message["method"], 202)
            if status >= 400:
                return httpx.Response(status, text="rejected")
            if message.get("id") == 2:
                reply = self.responder(message)
                if reply is not None:
                    self.push(reply)
            return httpx.Response(202, text="Accepted")
        return httpx.Response(404, json={"error": "not found"})

    def methods(self) -> List[str]:
        return [m["method"] for m in self.posted]

    def assert_streams_closed(self) -> None:
        assert self.bodies, "no event stream was opened"
        assert [body.close_count for body in self.bodies] == [1] * len(self.bodies)


@pytest.fixture
def fake_mcp_server() -> FakeMcpServer:
    return FakeMcpServer()


@pytest_asyncio.fixture
async def mock_http(fake_mcp_server: FakeMcpServer) -> AsyncIterator[httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_mcp_server.handler))
    yield client
    await client.aclose()


@pytest.fixture
def make_invoker(mock_http: httpx.AsyncClient) -> Callable[..., ToolInvoker]:
    def _make(**kwargs: Any) -> ToolInvoker:
        kwargs.setdefault("list_timeout", 2.0)
        kwargs.setdefault("call_timeout", 2.0)
        return ToolInvoker("http://mock/sse", client=mock_http, sse_client=mock_http, **kwargs)

    return _make
