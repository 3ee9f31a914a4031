"""FastAPI dependencies."""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException

from vdash.errors import DerivedTaskError, VDashError, VideoNotFoundError
from vdash.models.state import Theme
from vdash.services.persistence import DebouncedSaver, JSONStateStore, load_state
from vdash.services.subtitles import SubtitleChunker
from vdash.services.workflow import WorkflowService

_workflow: WorkflowService | None = None
_saver: DebouncedSaver | None = None
_chunker: SubtitleChunker | None = None


def init_workflow(
    store: JSONStateStore,
    save_delay: float = 1.0,
    chunker: SubtitleChunker | None = None,
    default_theme: Theme = "dark",
) -> WorkflowService:
    """Load state and initialize the global WorkflowService (called at app startup).

    Every change schedules a debounced save back into ``store``.
    """
    global _workflow, _saver, _chunker

    def snapshot() -> dict[str, Any]:
        return get_workflow().to_state().to_document()

    _saver = DebouncedSaver(snapshot, store.save, delay=save_delay)
    _workflow = WorkflowService.from_state(
        load_state(store.load(), default_theme=default_theme),
        on_change=_saver.schedule,
    )
    _chunker = chunker or SubtitleChunker()
    return _workflow


async def shutdown_workflow() -> None:
    """Write any pending change and drop the global service."""
    global _workflow, _saver
    if _saver is not None:
        await _saver.flush()
    _workflow = None
    _saver = None


def get_workflow() -> WorkflowService:
    """Dependency that provides the WorkflowService instance."""
    if _workflow is None:
        raise RuntimeError("WorkflowService not initialized — call init_workflow() first")
    return _workflow


def get_chunker() -> SubtitleChunker:
    if _chunker is None:
        raise RuntimeError("SubtitleChunker not initialized — call init_workflow() first")
    return _chunker


def http_error(exc: VDashError) -> HTTPException:
    """Map a domain error to the HTTP error the routes raise."""
    if isinstance(exc, VideoNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, DerivedTaskError):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=422, detail=str(exc))
