"""Request and response schemas for the vdash API."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from vdash.models.state import Theme
from vdash.models.video import PostPublicationItem, Video


# ------------------------------------------------------------------
# Stage template edits
# ------------------------------------------------------------------


class StageCreateRequest(BaseModel):
    name: str = Field(..., description="Stage name")


class StageRenameRequest(BaseModel):
    name: str = Field(..., description="New stage name")


class MoveRequest(BaseModel):
    offset: int = Field(..., description="-1 moves up, +1 moves down")


class TaskCreateRequest(BaseModel):
    label: str = Field(..., description="Task label")
    key: str | None = Field(None, description="Explicit task key (generated when omitted)")


class TaskRenameRequest(BaseModel):
    label: str = Field(..., description="New task label")


class TaskTransferRequest(BaseModel):
    stage_id: str = Field(..., description="Destination stage ID")


# ------------------------------------------------------------------
# Drafts and videos
# ------------------------------------------------------------------


class DraftCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(None, description="Initial title")
    post_date: date | None = Field(None, alias="postDate", description="Scheduled post date")
    video_number: int | None = Field(None, alias="videoNumber", description="Video number")


class TaskSetRequest(BaseModel):
    completed: bool


class PostPublicationUpdateRequest(BaseModel):
    items: list[PostPublicationItem] = Field(default_factory=list)


class VideoResponse(BaseModel):
    """A video together with where it lives and its current stage."""

    collection: str
    stage: str
    video: Video


class BoardColumn(BaseModel):
    stage: str
    drafts: list[Video] = Field(default_factory=list)


class SubtitleRequest(BaseModel):
    script: str = Field(..., description="Script text to chunk")


# ------------------------------------------------------------------
# Settings
# ------------------------------------------------------------------


class ThemeRequest(BaseModel):
    theme: Theme


class ThemeResponse(BaseModel):
    theme: Theme


class ImportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    drafts: int
    published_videos: int = Field(..., alias="publishedVideos")
    promoted: int = 0
