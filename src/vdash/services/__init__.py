"""Services module for vdash."""

from vdash.services.classifier import FALLBACK_STAGE_NAME, classify_stage, group_by_stage
from vdash.services.derivation import DERIVED_KEYS, apply_derivation, derive_completion, is_derived
from vdash.services.persistence import DebouncedSaver, JSONStateStore, load_state
from vdash.services.reconciler import flatten, new_checklist, reconcile
from vdash.services.repository import Collection, VideoRepository
from vdash.services.subtitles import SubtitleBlock, SubtitleChunker, chunk_script, render_srt
from vdash.services.workflow import WorkflowService

__all__ = [
    "FALLBACK_STAGE_NAME",
    "classify_stage",
    "group_by_stage",
    "DERIVED_KEYS",
    "apply_derivation",
    "derive_completion",
    "is_derived",
    "DebouncedSaver",
    "JSONStateStore",
    "load_state",
    "flatten",
    "new_checklist",
    "reconcile",
    "Collection",
    "VideoRepository",
    "SubtitleBlock",
    "SubtitleChunker",
    "chunk_script",
    "render_srt",
    "WorkflowService",
]
