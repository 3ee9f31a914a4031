"""Persisted application state document."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from vdash.models.template import DEFAULT_TEMPLATE, StageTemplate
from vdash.models.video import Video

Theme = Literal["light", "dark"]


class AppState(BaseModel):
    """Everything the dashboard persists, and the shape of a backup file.

    Serialized with ``by_alias=True`` this is exactly
    ``{drafts, publishedVideos, stagesConfig, theme}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    drafts: list[Video] = Field(default_factory=list)
    published_videos: list[Video] = Field(default_factory=list, alias="publishedVideos")
    stages_config: StageTemplate = Field(
        default_factory=lambda: DEFAULT_TEMPLATE, alias="stagesConfig"
    )
    theme: Theme = "dark"

    def to_document(self) -> dict:
        """Dump to the JSON-ready camelCase document."""
        return self.model_dump(mode="json", by_alias=True)
