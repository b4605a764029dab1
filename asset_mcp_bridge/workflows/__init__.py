"""
Multi-step workflows built on the MCP tool invoker.
"""

from .folder_cleanup import FolderCleanupOrchestrator
from .models import CleanupResult, DeletionOutcome, DeletionStatus, FolderRecord

__all__ = [
    "CleanupResult",
    "DeletionOutcome",
    "DeletionStatus",
    "FolderCleanupOrchestrator",
    "FolderRecord",
]
