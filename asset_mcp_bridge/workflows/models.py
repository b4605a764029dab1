from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DeletionStatus(str, Enum):
    SUCCESS = "Success"
    FAILED = "Failed"


class FolderRecord(BaseModel):
    """A folder returned by the search tool; attributes other than `path` pass through."""

    model_config = ConfigDict(extra="allow")

    path: str = Field(..., description="Full folder path, used as the delete-folder argument.")


class DeletionOutcome(BaseModel):
    folder: str = Field(..., description="Path of the folder this outcome is for.")
    status: DeletionStatus
    details: Optional[str] = Field(None, description="Status text returned by the delete tool on success.")
    error: Optional[str] = Field(None, description="Error message when the deletion failed.")


class CleanupResult(BaseModel):
    folders_found: List[FolderRecord] = Field(default_factory=list)
    report: List[DeletionOutcome] = Field(default_factory=list)
