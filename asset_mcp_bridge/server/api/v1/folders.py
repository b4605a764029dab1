"""
Folder Cleanup Endpoints.

This module triggers the search-then-delete folder workflow and returns its
per-folder report.
"""
from typing import Optional

from fastapi import APIRouter, Body

from asset_mcp_bridge.core.logging_config import get_logger
from asset_mcp_bridge.server.api.v1.tools import resolve_token
from asset_mcp_bridge.server.schemas import AccessTokenRequest, CleanupFoldersResponse
from asset_mcp_bridge.server.services.deps import FolderCleanupDep

router = APIRouter()
logger = get_logger(__name__)


@router.post(
    "/cleanup-folders",
    response_model=CleanupFoldersResponse,
    response_model_exclude_none=True,
    summary="Clean Up Folders",
    description="Search all folders upstream and delete them one by one.",
    response_description="Folders found and one deletion outcome per folder.",
)
async def cleanup_folders(cleanup: FolderCleanupDep, payload: Optional[AccessTokenRequest] = Body(default=None)):
    """
    Delete every folder the search returns.

    Individual deletion failures appear in the report; only a failed search
    makes the request fail.
    """
    result = await cleanup.cleanup(resolve_token(payload, None))
    logger.info(f"Cleanup request done: {len(result.folders_found)} folders, {len(result.report)} outcomes")
    return CleanupFoldersResponse(
        folders_found=[folder.model_dump() for folder in result.folders_found],
        deletion_report=result.report,
    )
