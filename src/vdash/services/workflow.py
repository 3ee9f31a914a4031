"""Workflow service - the edit pipeline tying template, rules and collections.

Every mutation goes through the same synchronous pipeline::

    reconcile -> derive -> store -> (draft) promote -> notify

so a draft that becomes fully checked is published before the call returns.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from vdash.errors import DerivedTaskError, TemplateError
from vdash.models.state import AppState, Theme
from vdash.models.template import DEFAULT_TEMPLATE, StageTemplate
from vdash.models.video import (
    PostPublicationItem,
    Product,
    Video,
    default_post_publication_checklist,
)
from vdash.services import queries
from vdash.services.classifier import classify_stage, group_by_stage
from vdash.services.derivation import apply_derivation, is_derived
from vdash.services.reconciler import new_checklist, reconcile
from vdash.services.repository import Collection, VideoRepository

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[], None]

NEW_DRAFT_PRODUCT_SLOTS = 5


def _with_post_publication(videos: list[Video]) -> list[Video]:
    """Give published videos lacking a post-publication checklist the default one."""
    return [
        v if v.post_publication_checklist
        else v.model_copy(update={"post_publication_checklist": default_post_publication_checklist()})
        for v in videos
    ]


class WorkflowService:
    """Owns the stage template and the video repository.

    ``on_change`` is called after every mutation; the surrounding
    application uses it to schedule saves.
    """

    def __init__(
        self,
        template: StageTemplate = DEFAULT_TEMPLATE,
        repository: VideoRepository | None = None,
        theme: Theme = "dark",
        on_change: ChangeCallback | None = None,
    ) -> None:
        self._template = template
        self.repository = repository or VideoRepository()
        self.theme: Theme = theme
        self.on_change = on_change

    # --- State ---

    @classmethod
    def from_state(
        cls,
        state: AppState,
        on_change: ChangeCallback | None = None,
    ) -> WorkflowService:
        """Build a service from persisted state.

        Checklists are reconciled against the stored template, published
        videos missing a post-publication checklist get the default one,
        and any draft that turns out fully checked is promoted.
        """
        service = cls(
            template=state.stages_config,
            repository=VideoRepository(state.drafts, _with_post_publication(state.published_videos)),
            theme=state.theme,
            on_change=on_change,
        )
        service._refresh_all()
        return service

    def to_state(self) -> AppState:
        return AppState(
            drafts=self.repository.drafts,
            published_videos=self.repository.published,
            stages_config=self._template,
            theme=self.theme,
        )

    def replace_state(self, state: AppState) -> list[Video]:
        """Swap in a whole new state (e.g. from a backup).

        Returns:
            Drafts promoted while reconciling the new state
        """
        self._template = state.stages_config
        self.repository.replace_all(state.drafts, _with_post_publication(state.published_videos))
        self.theme = state.theme
        promoted = self._refresh_all()
        self._notify()
        return promoted

    def set_theme(self, theme: Theme) -> None:
        self.theme = theme
        self._notify()

    # --- Template ---

    @property
    def template(self) -> StageTemplate:
        return self._template

    def update_template(self, template: StageTemplate) -> list[Video]:
        """Install a new template and reconcile every video against it.

        Returns:
            Drafts promoted as a consequence (e.g. an unfinished task removed)
        """
        self._template = template
        promoted = self._refresh_all()
        logger.info(
            "Stage template updated: %d stages, %d tasks",
            len(template),
            len(template.task_keys),
        )
        self._notify()
        return promoted

    # --- Items ---

    def create_draft(
        self,
        title: str | None = None,
        post_date: date | None = None,
        video_number: int | None = None,
    ) -> Video:
        """Create a new draft with empty product slots.

        Post date and video number default to the next free values.
        """
        drafts = self.repository.drafts
        products = [Product.empty() for _ in range(NEW_DRAFT_PRODUCT_SLOTS)]
        video = Video(
            title=title if title is not None else f"{len(products)} ",
            products=products,
            post_date=post_date or queries.default_post_date(drafts),
            video_number=video_number or queries.next_video_number(drafts),
            checklist=new_checklist(self._template),
        )
        self.repository.upsert(self._prepare(video))
        self.repository.promote_eligible()
        self._notify()
        return self.repository.require(video.id)

    def on_item_edited(self, video: Video) -> Video:
        """Run the edit pipeline for a changed video and store it.

        Unknown ids are added as new drafts. When the number of products
        changed, the title's leading product count is rewritten.

        Returns:
            The stored video (already in published if it was promoted)
        """
        previous = self.repository.get(video.id)
        if previous is not None and len(previous.products) != len(video.products):
            title = queries.sync_title_with_product_count(video.title, len(video.products))
            if title != video.title:
                video = video.model_copy(update={"title": title})

        video = self._prepare(video)
        collection = self.repository.upsert(video)
        if collection is Collection.DRAFTS:
            self.repository.promote_eligible()
        self._notify()
        return self.repository.require(video.id)

    def set_task(self, video_id: str, key: str, completed: bool) -> Video:
        """Set a manual checklist task.

        Raises:
            DerivedTaskError: If the task is computed from video fields
            TemplateError: If the video has no such task
            VideoNotFoundError: If the video does not exist
        """
        video = self.repository.require(video_id)
        if is_derived(key):
            raise DerivedTaskError(f"Task '{key}' is derived and cannot be set manually")
        if video.get_checklist_item(key) is None:
            raise TemplateError(f"Task not found: {key}")

        checklist = [
            item.model_copy(update={"completed": completed}) if item.key == key else item
            for item in video.checklist
        ]
        return self.on_item_edited(video.model_copy(update={"checklist": checklist}))

    def toggle_task(self, video_id: str, key: str) -> Video:
        video = self.repository.require(video_id)
        item = video.get_checklist_item(key)
        completed = item.completed if item is not None else False
        return self.set_task(video_id, key, not completed)

    def delete(self, video_id: str) -> Video:
        video = self.repository.remove(video_id)
        logger.info("Deleted video %s", video_id)
        self._notify()
        return video

    def update_post_publication(
        self,
        video_id: str,
        items: list[PostPublicationItem],
    ) -> Video:
        video = self.repository.set_post_publication_checklist(video_id, items)
        self._notify()
        return video

    # --- Views ---

    def classify(self, video: Video) -> str:
        return classify_stage(video, self._template)

    def board(self, query: str = "") -> dict[str, list[Video]]:
        """Drafts grouped by current stage, sorted and filtered by title."""
        drafts = queries.search_by_title(queries.sort_drafts(self.repository.drafts), query)
        return group_by_stage(drafts, self._template)

    def overdue(self, today: date | None = None) -> list[Video]:
        return queries.overdue_drafts(self.repository.drafts, today)

    # --- Internals ---

    def _prepare(self, video: Video) -> Video:
        reconciled = reconcile(self._template, video.checklist)
        if reconciled != video.checklist:
            video = video.model_copy(update={"checklist": reconciled})
        return apply_derivation(video)

    def _refresh_all(self) -> list[Video]:
        self.repository.map_all(self._prepare)
        return self.repository.promote_eligible()

    def _notify(self) -> None:
        if self.on_change:
            self.on_change()
