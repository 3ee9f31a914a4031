"""Health check endpoint."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from vdash.api.deps import get_workflow
from vdash.services.workflow import WorkflowService

router = APIRouter()


class HealthResponse(BaseModel):
    """Service status with the size of both collections."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    version: str
    drafts: int
    published_videos: int = Field(..., alias="publishedVideos")
    stages: int


@router.get("/health", response_model=HealthResponse)
async def health_check(wf: WorkflowService = Depends(get_workflow)) -> HealthResponse:
    from vdash import __version__

    return HealthResponse(
        status="healthy",
        version=__version__,
        drafts=len(wf.repository.drafts),
        published_videos=len(wf.repository.published),
        stages=len(wf.template),
    )
