"""Backup export/import and theme endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from vdash.api.deps import get_workflow
from vdash.api.schemas import ImportResponse, ThemeRequest, ThemeResponse
from vdash.errors import BackupValidationError
from vdash.services.persistence import backup_filename, parse_backup
from vdash.services.workflow import WorkflowService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["backup"])


@router.get("/backup")
async def export_backup(wf: WorkflowService = Depends(get_workflow)) -> JSONResponse:
    """Download the full state as a backup document."""
    return JSONResponse(
        content=wf.to_state().to_document(),
        headers={"Content-Disposition": f'attachment; filename="{backup_filename()}"'},
    )


@router.post("/backup", response_model=ImportResponse)
async def import_backup(
    data: Any = Body(...),
    wf: WorkflowService = Depends(get_workflow),
) -> ImportResponse:
    """Replace the full state with a backup document.

    Nothing changes unless the whole document validates.
    """
    try:
        state = parse_backup(data)
    except BackupValidationError as e:
        logger.warning("Rejected backup import: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    promoted = wf.replace_state(state)
    logger.info(
        "Imported backup: %d drafts, %d published",
        len(state.drafts),
        len(state.published_videos),
    )
    return ImportResponse(
        drafts=len(wf.repository.drafts),
        published_videos=len(wf.repository.published),
        promoted=len(promoted),
    )


@router.get("/theme", response_model=ThemeResponse)
async def get_theme(wf: WorkflowService = Depends(get_workflow)) -> ThemeResponse:
    return ThemeResponse(theme=wf.theme)


@router.put("/theme", response_model=ThemeResponse)
async def set_theme(
    req: ThemeRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> ThemeResponse:
    wf.set_theme(req.theme)
    return ThemeResponse(theme=wf.theme)
