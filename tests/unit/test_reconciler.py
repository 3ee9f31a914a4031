"""Unit tests for checklist reconciliation."""

from vdash.models.template import Stage, StageTemplate, TaskTemplate
from vdash.models.video import ChecklistItem
from vdash.services.reconciler import flatten, new_checklist, reconcile


def _template(*stages: tuple[str, list[str]]) -> StageTemplate:
    return StageTemplate(
        tuple(
            Stage(
                id=stage_id,
                name=stage_id.upper(),
                tasks=tuple(TaskTemplate(key=k, label=k.title()) for k in keys),
            )
            for stage_id, keys in stages
        )
    )


TEMPLATE = _template(("s1", ["a", "b"]), ("s2", ["c"]))


def test_flatten_is_workflow_order() -> None:
    assert flatten(TEMPLATE) == [("a", "A"), ("b", "B"), ("c", "C")]


def test_new_checklist_all_incomplete() -> None:
    checklist = new_checklist(TEMPLATE)
    assert [i.key for i in checklist] == ["a", "b", "c"]
    assert not any(i.completed for i in checklist)


def test_preserves_completion_flags() -> None:
    checklist = [ChecklistItem(key="b", label="old", completed=True)]
    result = reconcile(TEMPLATE, checklist)
    assert {i.key: i.completed for i in result} == {"a": False, "b": True, "c": False}


def test_labels_come_from_template() -> None:
    checklist = [ChecklistItem(key="b", label="old label", completed=True)]
    result = reconcile(TEMPLATE, checklist)
    assert result[1].label == "B"


def test_drops_stale_keys() -> None:
    checklist = [
        ChecklistItem(key="gone", label="Gone", completed=True),
        ChecklistItem(key="a", label="A", completed=False),
    ]
    result = reconcile(TEMPLATE, checklist)
    assert "gone" not in {i.key for i in result}


def test_follows_template_order() -> None:
    checklist = [
        ChecklistItem(key="c", label="C", completed=True),
        ChecklistItem(key="a", label="A", completed=True),
    ]
    result = reconcile(TEMPLATE, checklist)
    assert [i.key for i in result] == ["a", "b", "c"]


def test_idempotent() -> None:
    checklist = [
        ChecklistItem(key="c", label="x", completed=True),
        ChecklistItem(key="zz", label="z", completed=True),
    ]
    once = reconcile(TEMPLATE, checklist)
    assert reconcile(TEMPLATE, once) == once


def test_does_not_mutate_input() -> None:
    checklist = [ChecklistItem(key="zz", label="z", completed=True)]
    reconcile(TEMPLATE, checklist)
    assert checklist == [ChecklistItem(key="zz", label="z", completed=True)]


def test_empty_template_yields_empty_checklist() -> None:
    checklist = [ChecklistItem(key="a", label="A", completed=True)]
    assert reconcile(StageTemplate(()), checklist) == []


def test_task_moved_between_stages_keeps_flag() -> None:
    checklist = reconcile(TEMPLATE, [ChecklistItem(key="a", label="A", completed=True)])
    moved = TEMPLATE.move_task("a", "s2")
    result = reconcile(moved, checklist)
    assert [i.key for i in result] == ["b", "c", "a"]
    assert result[-1].completed is True
