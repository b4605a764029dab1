"""Tool result envelopes.

A `tools/call` result looks like `{"content": [{"type": "text", "text": "..."}]}`.
Search-style tools put their real payload in the first content element as
JSON text, so it has to be decoded a second time.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import EnvelopeParseError


class ContentItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    text: Optional[str] = None


class ToolResultEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    content: List[ContentItem] = Field(default_factory=list)
    is_error: Optional[bool] = Field(default=None, alias="isError")

    def first_text(self) -> Optional[str]:
        if not self.content:
            return None
        return self.content[0].text


def parse_tool_envelope(result: Any) -> Any:
    """Decode the JSON text nested in the first content element of a tool result.

    Raises:
        EnvelopeParseError: If the result is not an envelope, has no text
            content, or the text is not valid JSON.
    """
    try:
        envelope = ToolResultEnvelope.model_validate(result)
    except ValidationError as e:
        raise EnvelopeParseError("result is not a content envelope", raw=result) from e
    text = envelope.first_text()
    if text is None:
        raise EnvelopeParseError("result has no text content", raw=result)
    try:
        return json.loads(text)
    except ValueError as e:
        raise EnvelopeParseError(str(e), raw=text) from e


def result_status_text(result: Any) -> str:
    """Human-readable status of a tool result: its first text, else its JSON."""
    try:
        text = ToolResultEnvelope.model_validate(result).first_text()
    except ValidationError:
        text = None
    if text is not None:
        return text
    return json.dumps(result)


def result_is_error(result: Any) -> bool:
    """True when the tool reported its own failure with `isError`."""
    try:
        return bool(ToolResultEnvelope.model_validate(result).is_error)
    except ValidationError:
        return False
