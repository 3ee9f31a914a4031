"""Checklist reconciliation against the stage template.

The template is the source of truth for which tasks exist, their order and
their labels; the existing checklist only contributes completion flags.
"""

from collections.abc import Sequence

from vdash.models.template import StageTemplate
from vdash.models.video import ChecklistItem


def flatten(template: StageTemplate) -> list[tuple[str, str]]:
    """Flatten a template into ``(key, label)`` pairs in workflow order."""
    return [(task.key, task.label) for stage in template for task in stage.tasks]


def new_checklist(template: StageTemplate) -> list[ChecklistItem]:
    """Build a fresh checklist with every task incomplete."""
    return [ChecklistItem(key=key, label=label) for key, label in flatten(template)]


def reconcile(
    template: StageTemplate,
    checklist: Sequence[ChecklistItem],
) -> list[ChecklistItem]:
    """Rebuild a checklist so it matches the template exactly.

    Keys missing from the template are dropped, keys new to the template are
    added as incomplete, and the output follows template order. Completion
    flags survive for every key present in both.

    Args:
        template: Current stage template
        checklist: The item's existing checklist (not modified)

    Returns:
        A new checklist list
    """
    completed = {item.key: item.completed for item in checklist}
    return [
        ChecklistItem(key=key, label=label, completed=completed.get(key, False))
        for key, label in flatten(template)
    ]
