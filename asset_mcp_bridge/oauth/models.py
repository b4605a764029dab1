from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    """Subset of the token endpoint response handed back to the caller."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(..., min_length=1)
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None
