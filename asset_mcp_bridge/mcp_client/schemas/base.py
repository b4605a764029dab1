"""Base model for outbound protocol payloads.

The wire uses camelCase (`protocolVersion`, `clientInfo`); Python code uses
snake_case. Unknown fields are rejected so a typo never reaches the server.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        alias_generator=to_camel,
    )
