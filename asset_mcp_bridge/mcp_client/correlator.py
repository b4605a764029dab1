from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from pydantic import ValidationError

from .errors import McpProtocolError, McpTimeoutError
from .schemas.jsonrpc import OPERATION_ID, JsonRpcResponse


class ResponseCorrelator:
    """Resolve one awaited operation from the messages read off the stream.

    Backed by a one-shot `asyncio.Future`: the first message whose id matches
    the reserved id settles it (result, or `McpProtocolError` when the reply
    carries an error), and everything after that is a no-op. Payloads that
    are not JSON objects are keep-alives and are dropped.

    Must be created inside a running event loop.
    """

    def __init__(self, method: str, *, request_id: int = OPERATION_ID) -> None:
        self.method = method
        self.request_id = request_id
        self._future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._logger = logging.getLogger(__name__)

    @property
    def resolved(self) -> bool:
        return self._future.done()

    def feed(self, payload: str) -> bool:
        """Offer a stream payload; return True if it resolved the operation."""
        if self._future.done():
            return False
        try:
            data = json.loads(payload)
        except ValueError:
            self._logger.debug("ResponseCorrelator.feed: ignoring non-JSON payload")
            return False
        if not isinstance(data, dict):
            return False
        try:
            message = JsonRpcResponse.model_validate(data)
        except ValidationError:
            self._logger.debug("ResponseCorrelator.feed: ignoring malformed message")
            return False
        if isinstance(message.id, bool) or message.id != self.request_id:
            return False
        if message.has_error:
            self._logger.debug("ResponseCorrelator.feed: %s resolved with error", self.method)
            self._future.set_exception(McpProtocolError(message.error))
        else:
            self._logger.debug("ResponseCorrelator.feed: %s resolved", self.method)
            self._future.set_result(message.result)
        return True

    def fail(self, exc: BaseException) -> bool:
        """Reject the operation unless it is already settled."""
        if self._future.done():
            self._logger.debug("ResponseCorrelator.fail: already resolved, ignoring %s", type(exc).__name__)
            return False
        self._future.set_exception(exc)
        return True

    async def wait(self, timeout: float) -> Any:
        """Wait for resolution.

        Raises:
            McpTimeoutError: If nothing settled the operation within `timeout` seconds.
            McpProtocolError: If the reply carried an error.
            McpConnectionError: If the stream or handshake failed first.
        """
        try:
            return await asyncio.wait_for(self._future, timeout=timeout)
        except asyncio.TimeoutError:
            self._logger.warning("ResponseCorrelator.wait: %s timed out after %ss", self.method, timeout)
            raise McpTimeoutError(self.method, timeout) from None
