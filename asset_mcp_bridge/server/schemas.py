"""
API Schemas.

This module contains Pydantic models used for API request bodies and response validation.
These schemas define the interface contract between the browser client and the server.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from asset_mcp_bridge.workflows.models import DeletionOutcome


class CodeExchangeRequest(BaseModel):
    """
    Schema for exchanging an OAuth authorization code.

    The code is the one the provider appended to the /callback redirect.
    """
    code: Optional[str] = Field(
        default=None,
        description="Authorization code received on the OAuth callback.",
        examples=["f3c1a9..."]
    )


class TokenExchangeResponse(BaseModel):
    """
    Schema for a successful code exchange.

    Mirrors the provider's token response; nothing is stored server-side.
    """
    access_token: str = Field(..., description="Bearer token to send with every tool request.")
    token_type: Optional[str] = Field(default=None, examples=["Bearer"])
    expires_in: Optional[int] = Field(default=None, description="Token lifetime in seconds.")
    scope: Optional[str] = Field(default=None)


class AccessTokenRequest(BaseModel):
    """
    Schema for requests that act on the caller's behalf upstream.
    """
    access_token: Optional[str] = Field(
        default=None,
        description="Bearer token obtained from /exchange.",
    )

    model_config = ConfigDict(json_schema_extra={"example": {"access_token": "eyJhbGciOi..."}})


class CleanupFoldersResponse(BaseModel):
    """
    Schema for the folder cleanup report.

    `folders_found` lists the folders returned by the search; `deletion_report`
    has one entry per folder, in the same order.
    """
    folders_found: List[Dict[str, Any]] = Field(default_factory=list)
    deletion_report: List[DeletionOutcome] = Field(default_factory=list)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "folders_found": [{"path": "/a"}, {"path": "/b"}],
            "deletion_report": [
                {"folder": "/a", "status": "Success", "details": "deleted"},
                {"folder": "/b", "status": "Failed", "error": "Timeout waiting for tools/call response after 30s"},
            ],
        }
    })
