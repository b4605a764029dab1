from __future__ import annotations

import json
from typing import List

import pytest

from asset_mcp_bridge.mcp_client.transport.frames import SseFrameReader

STREAM = (
    "event: endpoint\n"
    "data: /messages?session_id=abc\n"
    "\n"
    ": keep-alive comment\n"
    "data: " + json.dumps({"jsonrpc": "2.0", "id": 2, "result": {"text": "café ✓"}}, ensure_ascii=False) + "\n"
    "\n"
).encode("utf-8")


def _feed_in_chunks(data: bytes, size: int) -> List[str]:
    reader = SseFrameReader()
    out: List[str] = []
    for i in range(0, len(data), size):
        out.extend(reader.feed(data[i : i + size]))
    return out


def test_whole_stream_yields_data_payloads_only() -> None:
    reader = SseFrameReader()
    payloads = reader.feed(STREAM)
    assert payloads[0] == "/messages?session_id=abc"
    assert json.loads(payloads[1])["result"]["text"] == "café ✓"
    assert len(payloads) == 2
    assert reader.pending == b""


@pytest.mark.parametrize("size", [1, 2, 3, 7, 64])
def test_chunking_does_not_change_payloads(size: int) -> None:
    assert _feed_in_chunks(STREAM, size) == SseFrameReader().feed(STREAM)


def test_multibyte_character_split_across_chunks() -> None:
    data = "data: ✓\n".encode("utf-8")
    split = data.index("✓".encode("utf-8")) + 1
    reader = SseFrameReader()
    assert reader.feed(data[:split]) == []
    assert reader.feed(data[split:]) == ["✓"]


def test_crlf_line_endings_are_stripped() -> None:
    reader = SseFrameReader()
    assert reader.feed(b"data: hello\r\n\r\ndata:world\r\n") == ["hello", "world"]


def test_unterminated_line_stays_buffered() -> None:
    reader = SseFrameReader()
    assert reader.feed(b"data: partial") == []
    assert reader.pending == b"data: partial"
    assert reader.feed(b" line\n") == ["partial line"]


def test_non_data_lines_are_dropped() -> None:
    reader = SseFrameReader()
    assert reader.feed(b"event: message\nid: 7\nretry: 100\n: comment\n\n") == []
