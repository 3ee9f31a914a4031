"""Stage classification for drafts."""

from collections.abc import Iterable

from vdash.models.template import Stage, StageTemplate
from vdash.models.video import Video

FALLBACK_STAGE_NAME = "Finished"


def is_stage_complete(video: Video, stage: Stage) -> bool:
    """Check that every task of the stage is completed for this video.

    Keys absent from the video's checklist count as not completed.
    """
    completed = {item.key for item in video.checklist if item.completed}
    return all(key in completed for key in stage.task_keys)


def classify_stage(video: Video, template: StageTemplate) -> str:
    """Name of the first stage the video has not finished.

    A fully checked video reports the last stage; an empty template
    reports ``FALLBACK_STAGE_NAME``.
    """
    for stage in template:
        if not is_stage_complete(video, stage):
            return stage.name
    if len(template) == 0:
        return FALLBACK_STAGE_NAME
    return template[-1].name


def group_by_stage(
    videos: Iterable[Video],
    template: StageTemplate,
) -> dict[str, list[Video]]:
    """Group videos under their current stage name, in template order.

    Stages without videos are omitted. Input order is kept within a group.
    """
    groups: dict[str, list[Video]] = {}
    for video in videos:
        groups.setdefault(classify_stage(video, template), []).append(video)

    ordered: dict[str, list[Video]] = {}
    for stage in template:
        if stage.name in groups:
            ordered[stage.name] = groups.pop(stage.name)
    ordered.update(groups)
    return ordered
