"""Incremental SSE frame reader.

Turns raw bytes from an event stream into `data:` payload strings, however
the bytes happen to be chunked on the wire.
"""

from __future__ import annotations

from typing import List

DATA_MARKER = "data:"


class SseFrameReader:
    """Accumulate stream bytes and emit one payload per complete `data:` line.

    - feed(chunk): append bytes, return payloads of every line completed by it
    - Lines are split on LF and stripped, so CRLF streams work too
    - Lines without the `data:` marker (event:, id:, comments, blanks) are dropped
    - An unterminated tail stays buffered until a later chunk completes it

    The buffer holds bytes, not text, so a multi-byte UTF-8 character split
    across two chunks is decoded only once it is whole.

    Examples:
        >>> reader = SseFrameReader()
        >>> reader.feed(b"event: endpoint\\ndata: /mess")
        []
        >>> reader.feed(b"ages?session_id=1\\n\\n")
        ['/messages?session_id=1']
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    @property
    def pending(self) -> bytes:
        """Bytes received after the last line terminator."""
        return bytes(self._buffer)

    def feed(self, chunk: bytes) -> List[str]:
        self._buffer.extend(chunk)
        payloads: List[str] = []
        while True:
            idx = self._buffer.find(b"\n")
            if idx < 0:
                break
            raw = bytes(self._buffer[:idx])
            del self._buffer[: idx + 1]
            line = raw.decode("utf-8", errors="replace").strip()
            if line.startswith(DATA_MARKER):
                payloads.append(line[len(DATA_MARKER) :].strip())
        return payloads
