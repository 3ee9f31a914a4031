"""Data models for vdash."""

from vdash.models.state import AppState, Theme
from vdash.models.template import DEFAULT_TEMPLATE, Stage, StageTemplate, TaskTemplate
from vdash.models.video import (
    ChecklistItem,
    CompletionSource,
    PostPublicationItem,
    Product,
    StoreLink,
    Video,
    default_post_publication_checklist,
)

__all__ = [
    # Template
    "TaskTemplate",
    "Stage",
    "StageTemplate",
    "DEFAULT_TEMPLATE",
    # Video
    "StoreLink",
    "Product",
    "ChecklistItem",
    "CompletionSource",
    "PostPublicationItem",
    "Video",
    "default_post_publication_checklist",
    # State
    "AppState",
    "Theme",
]
