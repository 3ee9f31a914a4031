"""In-memory repository owning the drafts and published collections."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from vdash.errors import VideoNotFoundError
from vdash.models.video import PostPublicationItem, Video, default_post_publication_checklist

logger = logging.getLogger(__name__)


class Collection(str, Enum):
    """Which collection a video lives in."""

    DRAFTS = "drafts"
    PUBLISHED = "published"


class VideoRepository:
    """Holds drafts and published videos as two disjoint ordered lists.

    New drafts and newly published videos are inserted at the front, so
    both lists read most-recent first. A video id is in at most one list.
    """

    def __init__(
        self,
        drafts: Iterable[Video] = (),
        published: Iterable[Video] = (),
    ) -> None:
        self._drafts: list[Video] = list(drafts)
        self._published: list[Video] = list(published)

    @property
    def drafts(self) -> list[Video]:
        return list(self._drafts)

    @property
    def published(self) -> list[Video]:
        return list(self._published)

    def get(self, video_id: str) -> Video | None:
        """Get a video by ID from either collection."""
        for video in self._drafts + self._published:
            if video.id == video_id:
                return video
        return None

    def require(self, video_id: str) -> Video:
        video = self.get(video_id)
        if video is None:
            raise VideoNotFoundError(f"Video not found: {video_id}")
        return video

    def collection_of(self, video_id: str) -> Collection | None:
        if any(v.id == video_id for v in self._drafts):
            return Collection.DRAFTS
        if any(v.id == video_id for v in self._published):
            return Collection.PUBLISHED
        return None

    def upsert(self, video: Video) -> Collection:
        """Replace a video in place, or add it as a new draft.

        Returns:
            The collection now holding the video
        """
        for items, collection in (
            (self._drafts, Collection.DRAFTS),
            (self._published, Collection.PUBLISHED),
        ):
            for i, existing in enumerate(items):
                if existing.id == video.id:
                    items[i] = video
                    return collection

        self._drafts.insert(0, video)
        return Collection.DRAFTS

    def remove(self, video_id: str) -> Video:
        """Permanently delete a video from whichever collection holds it."""
        for items in (self._drafts, self._published):
            for i, existing in enumerate(items):
                if existing.id == video_id:
                    return items.pop(i)
        raise VideoNotFoundError(f"Video not found: {video_id}")

    def replace_all(self, drafts: Iterable[Video], published: Iterable[Video]) -> None:
        self._drafts = list(drafts)
        self._published = list(published)

    def map_all(self, change: Callable[[Video], Video]) -> None:
        """Apply a transformation to every video in both collections."""
        self._drafts = [change(v) for v in self._drafts]
        self._published = [change(v) for v in self._published]

    def set_post_publication_checklist(
        self,
        video_id: str,
        items: list[PostPublicationItem],
    ) -> Video:
        """Replace the post-publication checklist of a published video."""
        for i, video in enumerate(self._published):
            if video.id == video_id:
                updated = video.model_copy(update={"post_publication_checklist": list(items)})
                self._published[i] = updated
                return updated
        raise VideoNotFoundError(f"Published video not found: {video_id}")

    def promote_eligible(self) -> list[Video]:
        """Move every fully checked draft to the published collection.

        Eligible drafts are collected first and then moved one by one, so
        several drafts becoming eligible at once are all promoted. Drafts
        with an empty checklist are never eligible. Published videos are
        not looked at.

        Returns:
            The promoted videos, in draft order
        """
        eligible = [d for d in self._drafts if d.is_fully_checked]
        promoted: list[Video] = []
        for draft in eligible:
            published = draft.model_copy(
                update={"post_publication_checklist": default_post_publication_checklist()}
            )
            self._drafts = [d for d in self._drafts if d.id != draft.id]
            self._published.insert(0, published)
            promoted.append(published)
            logger.info("Promoted draft %s (%s) to published", draft.id, draft.title)
        return promoted
