"""
Folder Cleanup Workflow.

Two phases built on the tool invoker:
1. search: call `search-folders` and decode the folder list nested in its result
2. delete: call `delete-folder` for each folder, one at a time, in search order

A failed deletion is recorded in the report and the loop moves on; only a
failed search invocation aborts the workflow. A search result that cannot be
decoded means there is nothing to clean.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Protocol

from pydantic import ValidationError

from asset_mcp_bridge.core.logging_config import get_logger
from asset_mcp_bridge.mcp_client.errors import EnvelopeParseError, McpClientError
from asset_mcp_bridge.mcp_client.schemas.results import parse_tool_envelope, result_is_error, result_status_text

from .models import CleanupResult, DeletionOutcome, DeletionStatus, FolderRecord

logger = get_logger(__name__)

SEARCH_FOLDERS_TOOL = "search-folders"
DELETE_FOLDER_TOOL = "delete-folder"


class ToolCaller(Protocol):
    async def invoke(self, credential: str, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> Any: ...


class FolderCleanupOrchestrator:
    """
    Search-then-delete workflow over a remote folder store.

    Deletions never run concurrently: each one waits for the previous
    invocation to finish, with an optional pause in between to go easy on the
    upstream service.
    """

    def __init__(
        self,
        invoker: ToolCaller,
        *,
        max_results: int = 500,
        delete_pause_seconds: float = 0.2,
    ) -> None:
        self._invoker = invoker
        self._max_results = max_results
        self._pause = delete_pause_seconds

    def _search_arguments(self) -> Dict[str, Any]:
        return {"sort_by": [], "max_results": self._max_results, "next_cursor": None}

    async def cleanup(self, credential: str) -> CleanupResult:
        """
        Run both phases and return the folders found with one outcome per folder.

        Raises:
            McpClientError: If the search invocation itself fails (connection,
                protocol error, timeout).
        """
        folders = await self.find_folders(credential)
        if not folders:
            logger.info("Folder cleanup: no folders found, nothing to delete")
            return CleanupResult()
        report = await self.delete_folders(credential, folders)
        failed = sum(1 for outcome in report if outcome.status is DeletionStatus.FAILED)
        logger.info(f"Folder cleanup finished: {len(report) - failed} deleted, {failed} failed")
        return CleanupResult(folders_found=folders, report=report)

    async def find_folders(self, credential: str) -> List[FolderRecord]:
        result = await self._invoker.invoke(credential, SEARCH_FOLDERS_TOOL, self._search_arguments())
        try:
            payload = parse_tool_envelope(result)
        except EnvelopeParseError as e:
            logger.info(f"Folder search result not decodable, treating as empty: {e}")
            return []

        raw_folders = payload.get("folders") if isinstance(payload, dict) else None
        if not isinstance(raw_folders, list):
            logger.info("Folder search result has no folders list, treating as empty")
            return []

        folders: List[FolderRecord] = []
        for item in raw_folders:
            try:
                folders.append(FolderRecord.model_validate(item))
            except ValidationError:
                logger.warning(f"Skipping folder entry without a path: {item!r}")
        logger.debug(f"Folder search found {len(folders)} folders")
        return folders

    async def delete_folders(self, credential: str, folders: List[FolderRecord]) -> List[DeletionOutcome]:
        report: List[DeletionOutcome] = []
        for index, folder in enumerate(folders):
            if index and self._pause > 0:
                await asyncio.sleep(self._pause)
            report.append(await self._delete_one(credential, folder))
        return report

    async def _delete_one(self, credential: str, folder: FolderRecord) -> DeletionOutcome:
        try:
            result = await self._invoker.invoke(credential, DELETE_FOLDER_TOOL, {"folder": folder.path})
        except McpClientError as e:
            logger.warning(f"Deleting folder {folder.path} failed: {e}")
            return DeletionOutcome(folder=folder.path, status=DeletionStatus.FAILED, error=str(e))
        except Exception as e:
            logger.error(f"Unexpected error deleting folder {folder.path}", exc_info=True)
            return DeletionOutcome(folder=folder.path, status=DeletionStatus.FAILED, error=str(e))
        if result_is_error(result):
            message = result_status_text(result)
            logger.warning(f"Deleting folder {folder.path} was refused: {message}")
            return DeletionOutcome(folder=folder.path, status=DeletionStatus.FAILED, error=message)
        logger.debug(f"Deleted folder {folder.path}")
        return DeletionOutcome(folder=folder.path, status=DeletionStatus.SUCCESS, details=result_status_text(result))
