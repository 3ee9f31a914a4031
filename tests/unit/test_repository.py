"""Unit tests for the video repository and promotion."""

import pytest

from vdash.errors import VideoNotFoundError
from vdash.models.video import ChecklistItem, PostPublicationItem, Video
from vdash.services.repository import Collection, VideoRepository


def _video(video_id: str, *flags: bool) -> Video:
    return Video(
        id=video_id,
        title=video_id,
        checklist=[
            ChecklistItem(key=f"k{i}", label=f"K{i}", completed=flag)
            for i, flag in enumerate(flags)
        ],
    )


class TestCrud:
    def test_upsert_new_goes_to_front_of_drafts(self) -> None:
        repo = VideoRepository([_video("a", False)])
        assert repo.upsert(_video("b", False)) is Collection.DRAFTS
        assert [v.id for v in repo.drafts] == ["b", "a"]

    def test_upsert_replaces_in_place(self) -> None:
        repo = VideoRepository([_video("a", False), _video("b", False)])
        repo.upsert(_video("b", True).model_copy(update={"title": "changed"}))
        assert [v.id for v in repo.drafts] == ["a", "b"]
        assert repo.get("b").title == "changed"

    def test_upsert_published(self) -> None:
        repo = VideoRepository([], [_video("p", True)])
        assert repo.upsert(_video("p", True)) is Collection.PUBLISHED
        assert repo.drafts == []

    def test_collection_of(self) -> None:
        repo = VideoRepository([_video("d", False)], [_video("p", True)])
        assert repo.collection_of("d") is Collection.DRAFTS
        assert repo.collection_of("p") is Collection.PUBLISHED
        assert repo.collection_of("x") is None

    def test_remove(self) -> None:
        repo = VideoRepository([_video("d", False)], [_video("p", True)])
        assert repo.remove("p").id == "p"
        assert repo.published == []
        with pytest.raises(VideoNotFoundError):
            repo.remove("p")

    def test_require_missing(self) -> None:
        with pytest.raises(VideoNotFoundError):
            VideoRepository().require("nope")

    def test_lists_are_copies(self) -> None:
        repo = VideoRepository([_video("d", False)])
        repo.drafts.clear()
        assert len(repo.drafts) == 1

    def test_post_publication_checklist_only_for_published(self) -> None:
        repo = VideoRepository([_video("d", False)], [_video("p", True)])
        items = [PostPublicationItem(key="likePoints", label="Like", completed=True)]
        updated = repo.set_post_publication_checklist("p", items)
        assert updated.post_publication_checklist[0].completed is True
        with pytest.raises(VideoNotFoundError):
            repo.set_post_publication_checklist("d", items)


class TestPromotion:
    def test_fully_checked_draft_moves_to_front_of_published(self) -> None:
        repo = VideoRepository(
            [_video("a", True, True), _video("b", True, False)],
            [_video("old", True)],
        )
        promoted = repo.promote_eligible()

        assert [v.id for v in promoted] == ["a"]
        assert [v.id for v in repo.drafts] == ["b"]
        assert [v.id for v in repo.published] == ["a", "old"]

    def test_promoted_gets_post_publication_checklist(self) -> None:
        repo = VideoRepository([_video("a", True)])
        repo.promote_eligible()
        keys = [i.key for i in repo.published[0].post_publication_checklist]
        assert keys == ["likePoints", "fixedComment"]

    def test_several_eligible_promoted_together(self) -> None:
        repo = VideoRepository([_video("a", True), _video("b", False), _video("c", True)])
        promoted = repo.promote_eligible()
        assert [v.id for v in promoted] == ["a", "c"]
        assert [v.id for v in repo.drafts] == ["b"]
        assert [v.id for v in repo.published] == ["c", "a"]

    def test_empty_checklist_never_promoted(self) -> None:
        repo = VideoRepository([Video(id="empty")])
        assert repo.promote_eligible() == []
        assert repo.collection_of("empty") is Collection.DRAFTS

    def test_no_eligible_is_noop(self) -> None:
        repo = VideoRepository([_video("a", False)])
        assert repo.promote_eligible() == []
        assert repo.published == []

    def test_published_not_demoted(self) -> None:
        repo = VideoRepository([], [_video("p", False)])
        repo.promote_eligible()
        assert repo.collection_of("p") is Collection.PUBLISHED
