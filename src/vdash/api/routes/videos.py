"""Published video endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from vdash.api.deps import get_workflow, http_error
from vdash.api.routes.drafts import to_response
from vdash.api.schemas import PostPublicationUpdateRequest, TaskSetRequest, VideoResponse
from vdash.errors import VDashError
from vdash.models.video import Video
from vdash.services import queries
from vdash.services.repository import Collection
from vdash.services.workflow import WorkflowService

router = APIRouter(prefix="/api/v1/videos", tags=["videos"])


def _require_published(wf: WorkflowService, video_id: str) -> Video:
    if wf.repository.collection_of(video_id) is not Collection.PUBLISHED:
        raise HTTPException(status_code=404, detail="Video not found")
    return wf.repository.require(video_id)


@router.get("", response_model=list[Video])
async def list_videos(
    q: str = Query("", description="Case-insensitive title filter"),
    wf: WorkflowService = Depends(get_workflow),
) -> list[Video]:
    return queries.search_by_title(wf.repository.published, q)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(
    video_id: str,
    wf: WorkflowService = Depends(get_workflow),
) -> VideoResponse:
    return to_response(wf, _require_published(wf, video_id))


@router.put("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: str,
    video: Video,
    wf: WorkflowService = Depends(get_workflow),
) -> VideoResponse:
    _require_published(wf, video_id)
    stored = wf.on_item_edited(video.model_copy(update={"id": video_id}))
    return to_response(wf, stored)


@router.put("/{video_id}/checklist/{key}", response_model=VideoResponse)
async def set_task(
    video_id: str,
    key: str,
    req: TaskSetRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> VideoResponse:
    _require_published(wf, video_id)
    try:
        video = wf.set_task(video_id, key, req.completed)
    except VDashError as e:
        raise http_error(e) from e
    return to_response(wf, video)


@router.put("/{video_id}/post-publication", response_model=VideoResponse)
async def update_post_publication(
    video_id: str,
    req: PostPublicationUpdateRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> VideoResponse:
    try:
        video = wf.update_post_publication(video_id, req.items)
    except VDashError as e:
        raise http_error(e) from e
    return to_response(wf, video)


@router.delete("/{video_id}", status_code=204)
async def delete_video(
    video_id: str,
    wf: WorkflowService = Depends(get_workflow),
) -> None:
    _require_published(wf, video_id)
    wf.delete(video_id)
