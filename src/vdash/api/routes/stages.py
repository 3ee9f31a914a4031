"""Stage template endpoints."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from vdash.api.deps import get_workflow, http_error
from vdash.api.schemas import (
    MoveRequest,
    StageCreateRequest,
    StageRenameRequest,
    TaskCreateRequest,
    TaskRenameRequest,
    TaskTransferRequest,
)
from vdash.errors import VDashError
from vdash.models.template import Stage, StageTemplate
from vdash.services.workflow import WorkflowService

router = APIRouter(prefix="/api/v1/stages", tags=["stages"])


def _apply(
    workflow: WorkflowService,
    edit: Callable[[StageTemplate], StageTemplate],
) -> list[Stage]:
    """Apply a template edit and reconcile every video against the result."""
    try:
        template = edit(workflow.template)
    except VDashError as e:
        raise http_error(e) from e
    workflow.update_template(template)
    return list(workflow.template)


@router.get("", response_model=list[Stage])
async def list_stages(wf: WorkflowService = Depends(get_workflow)) -> list[Stage]:
    return list(wf.template)


@router.put("", response_model=list[Stage])
async def replace_stages(
    stages: list[Stage],
    wf: WorkflowService = Depends(get_workflow),
) -> list[Stage]:
    try:
        template = StageTemplate(tuple(stages))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    wf.update_template(template)
    return list(wf.template)


# ------------------------------------------------------------------
# Stages
# ------------------------------------------------------------------


@router.post("", response_model=list[Stage], status_code=201)
async def add_stage(
    req: StageCreateRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> list[Stage]:
    return _apply(wf, lambda t: t.add_stage(req.name))


@router.patch("/{stage_id}", response_model=list[Stage])
async def rename_stage(
    stage_id: str,
    req: StageRenameRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> list[Stage]:
    return _apply(wf, lambda t: t.rename_stage(stage_id, req.name))


@router.delete("/{stage_id}", response_model=list[Stage])
async def remove_stage(
    stage_id: str,
    wf: WorkflowService = Depends(get_workflow),
) -> list[Stage]:
    return _apply(wf, lambda t: t.remove_stage(stage_id))


@router.post("/{stage_id}/move", response_model=list[Stage])
async def move_stage(
    stage_id: str,
    req: MoveRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> list[Stage]:
    return _apply(wf, lambda t: t.move_stage(stage_id, req.offset))


# ------------------------------------------------------------------
# Tasks
# ------------------------------------------------------------------


@router.post("/{stage_id}/tasks", response_model=list[Stage], status_code=201)
async def add_task(
    stage_id: str,
    req: TaskCreateRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> list[Stage]:
    return _apply(wf, lambda t: t.add_task(stage_id, req.label, key=req.key))


@router.patch("/tasks/{key}", response_model=list[Stage])
async def rename_task(
    key: str,
    req: TaskRenameRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> list[Stage]:
    return _apply(wf, lambda t: t.rename_task(key, req.label))


@router.delete("/tasks/{key}", response_model=list[Stage])
async def remove_task(
    key: str,
    wf: WorkflowService = Depends(get_workflow),
) -> list[Stage]:
    return _apply(wf, lambda t: t.remove_task(key))


@router.post("/tasks/{key}/move", response_model=list[Stage])
async def move_task_order(
    key: str,
    req: MoveRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> list[Stage]:
    return _apply(wf, lambda t: t.move_task_order(key, req.offset))


@router.post("/tasks/{key}/transfer", response_model=list[Stage])
async def transfer_task(
    key: str,
    req: TaskTransferRequest,
    wf: WorkflowService = Depends(get_workflow),
) -> list[Stage]:
    return _apply(wf, lambda t: t.move_task(key, req.stage_id))
