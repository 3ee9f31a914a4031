"""Subtitle (SRT) generation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from vdash.api.deps import get_chunker, get_workflow
from vdash.api.schemas import SubtitleRequest
from vdash.services.subtitles import SubtitleChunker
from vdash.services.workflow import WorkflowService

router = APIRouter(prefix="/api/v1/subtitles", tags=["subtitles"])

SRT_MEDIA_TYPE = "application/x-subrip"


def _srt_response(chunker: SubtitleChunker, script: str, filename: str) -> PlainTextResponse:
    content = chunker.generate_srt(script)
    if content is None:
        raise HTTPException(status_code=422, detail="Script is empty")
    return PlainTextResponse(
        content,
        media_type=SRT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("")
async def generate_subtitles(
    req: SubtitleRequest,
    chunker: SubtitleChunker = Depends(get_chunker),
) -> PlainTextResponse:
    return _srt_response(chunker, req.script, "subtitles.srt")


@router.get("/{video_id}")
async def get_video_subtitles(
    video_id: str,
    wf: WorkflowService = Depends(get_workflow),
    chunker: SubtitleChunker = Depends(get_chunker),
) -> PlainTextResponse:
    """Generate subtitles from the script of a draft or published video."""
    video = wf.repository.get(video_id)
    if video is None:
        raise HTTPException(status_code=404, detail="Video not found")
    return _srt_response(chunker, video.script, "subtitles.srt")
