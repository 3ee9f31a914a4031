"""Draft endpoints: create, edit, toggle tasks, board view."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from vdash.api.deps import get_workflow, http_error
from vdash.api.schemas import BoardColumn, DraftCreateRequest, TaskSetRequest, VideoResponse
from vdash.errors import VDashError
from vdash.models.video import Video
from vdash.services import queries
from vdash.services.repository import Collection
from vdash.services.workflow import WorkflowService

router = APIRouter(prefix="/api/v1/drafts", tags=["drafts"])


def to_response(wf: WorkflowService, video: Video) -> VideoResponse:
    collection = wf.repository.collection_of(video.id) or Collection.DRAFTS
    return VideoResponse(collection=collection.value, stage=wf.classify(video), video=video)


def _require_draft(wf: WorkflowService, video_id: str) -> Video:
    if wf.repository.collection_of(video_id) is not Collection.DRAFTS:
        raise HTTPException(status_code=404, detail="Draft not found")
    return wf.repository.require(video_id)


# ------------------------------------------------------------------
# GET — query drafts
# ------------------------------------------------------------------


@router.get("", response_model=list[Video])
async def list_drafts(
    q: str = Query("", description="Case-insensitive title filter"),
    wf: WorkflowService = Depends(get_workflow),
) -> list[Video]:
    return queries.search_by_title(queries.sort_drafts(wf.repository.drafts), q)


@router.get("/board", response_model=list[BoardColumn])
async def get_board(
    q: str = Query("", description="Case-insensitive title filter"),
    wf: WorkflowService = Depends(get_workflow),
) -> list[BoardColumn]:
    return [BoardColumn(stage=stage, drafts=drafts) for stage, drafts in wf.board(q).items()]


@router.get("/overdue", response_model=list[Video])
async def list_overdue(
    today: date | None = Query(None, description="Reference date (defaults to today)"),
    wf: WorkflowService = Depends(get_workflow),
) -> list[Video]:
    return wf.overdue(today)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_draft(
    video_id: str,
    wf: WorkflowService = Depends(get_workflow),
) -> VideoResponse:
    return to_response(wf, _require_draft(wf, video_id))


# ------------------------------------------------------------------
# POST / PUT / DELETE — mutate drafts
# ------------------------------------------------------------------


@router.post("", response_model=VideoResponse, status_code=201)
async def create_draft(
    req: DraftCreateRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> VideoResponse:
    video = wf.create_draft(
        title=req.title,
        post_date=req.post_date,
        video_number=req.video_number,
    )
    return to_response(wf, video)


@router.put("/{video_id}", response_model=VideoResponse)
async def update_draft(
    video_id: str,
    video: Video,
    wf: WorkflowService = Depends(get_workflow),
) -> VideoResponse:
    _require_draft(wf, video_id)
    stored = wf.on_item_edited(video.model_copy(update={"id": video_id}))
    return to_response(wf, stored)


@router.put("/{video_id}/checklist/{key}", response_model=VideoResponse)
async def set_task(
    video_id: str,
    key: str,
    req: TaskSetRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> VideoResponse:
    _require_draft(wf, video_id)
    try:
        video = wf.set_task(video_id, key, req.completed)
    except VDashError as e:
        raise http_error(e) from e
    return to_response(wf, video)


@router.post("/{video_id}/checklist/{key}/toggle", response_model=VideoResponse)
async def toggle_task(
    video_id: str,
    key: str,
    wf: WorkflowService = Depends(get_workflow),
) -> VideoResponse:
    _require_draft(wf, video_id)
    try:
        video = wf.toggle_task(video_id, key)
    except VDashError as e:
        raise http_error(e) from e
    return to_response(wf, video)


@router.delete("/{video_id}", status_code=204)
async def delete_draft(
    video_id: str,
    wf: WorkflowService = Depends(get_workflow),
) -> None:
    _require_draft(wf, video_id)
    wf.delete(video_id)
