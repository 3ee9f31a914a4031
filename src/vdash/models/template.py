"""Stage template models - the configurable workflow definition.

The template is an ordered sequence of stages, each owning an ordered list
of task templates. Every edit operation returns a new ``StageTemplate``;
instances are never mutated in place.
"""

from collections.abc import Iterator
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator

from vdash.errors import TemplateError


class TaskTemplate(BaseModel):
    """A checklist requirement within a stage."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Stable task identifier")
    label: str = Field(..., description="Display text")


class Stage(BaseModel):
    """A named phase of the production workflow."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable stage identifier")
    name: str = Field(..., description="Display name")
    tasks: tuple[TaskTemplate, ...] = Field(default_factory=tuple)

    @property
    def task_keys(self) -> list[str]:
        """Task keys in stage order."""
        return [task.key for task in self.tasks]


class StageTemplate(RootModel[tuple[Stage, ...]]):
    """Ordered stages defining workflow progression.

    Stage ids are unique, and a task key belongs to at most one stage.
    Templates violating this are rejected on construction.
    """

    model_config = ConfigDict(frozen=True)

    root: tuple[Stage, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def check_unique(self) -> "StageTemplate":
        stage_ids: set[str] = set()
        task_keys: set[str] = set()
        for stage in self.root:
            if stage.id in stage_ids:
                raise ValueError(f"Duplicate stage id: {stage.id}")
            stage_ids.add(stage.id)
            for task in stage.tasks:
                if task.key in task_keys:
                    raise ValueError(f"Duplicate task key: {task.key}")
                task_keys.add(task.key)
        return self

    def __iter__(self) -> Iterator[Stage]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> Stage:
        return self.root[index]

    @property
    def stages(self) -> tuple[Stage, ...]:
        return self.root

    @property
    def task_keys(self) -> list[str]:
        """All task keys, in stage order then task order."""
        return [task.key for stage in self.root for task in stage.tasks]

    def get_stage(self, stage_id: str) -> Stage | None:
        """Get a stage by ID."""
        for stage in self.root:
            if stage.id == stage_id:
                return stage
        return None

    def stage_of(self, key: str) -> Stage | None:
        """Get the stage owning a task key."""
        for stage in self.root:
            if key in stage.task_keys:
                return stage
        return None

    # --- Stage edits ---

    def add_stage(self, name: str) -> "StageTemplate":
        """Append a new empty stage."""
        name = name.strip()
        if not name:
            raise TemplateError("Stage name must not be empty")
        stage = Stage(id=f"stage_{uuid4().hex[:12]}", name=name)
        return StageTemplate(self.root + (stage,))

    def remove_stage(self, stage_id: str) -> "StageTemplate":
        """Remove a stage together with all of its tasks."""
        self._require_stage(stage_id)
        return StageTemplate(tuple(s for s in self.root if s.id != stage_id))

    def rename_stage(self, stage_id: str, name: str) -> "StageTemplate":
        self._require_stage(stage_id)
        return self._replace_stage(stage_id, lambda s: s.model_copy(update={"name": name}))

    def move_stage(self, stage_id: str, offset: int) -> "StageTemplate":
        """Swap a stage with its neighbour (offset -1 = up, +1 = down).

        Moves past either end are ignored.

        Raises:
            TemplateError: If the stage is unknown or offset is not -1 or +1
        """
        _check_offset(offset)
        stage = self._require_stage(stage_id)
        stages = list(self.root)
        index = stages.index(stage)
        target = index + offset
        if 0 <= target < len(stages):
            stages[index], stages[target] = stages[target], stages[index]
        return StageTemplate(tuple(stages))

    # --- Task edits ---

    def add_task(self, stage_id: str, label: str, key: str | None = None) -> "StageTemplate":
        """Append a task to a stage.

        Without an explicit key a fresh ``custom_<hex>`` key is generated.
        Explicit keys must not collide with an existing task, and keys that
        the derivation rules own cannot be used for custom tasks.

        Args:
            stage_id: Stage receiving the task
            label: Display label (stripped, must be non-empty)
            key: Optional explicit task key

        Returns:
            New template with the task appended
        """
        from vdash.services.derivation import is_derived

        label = label.strip()
        if not label:
            raise TemplateError("Task label must not be empty")
        self._require_stage(stage_id)

        if key is None:
            key = f"custom_{uuid4().hex[:12]}"
        elif is_derived(key):
            raise TemplateError(f"Task key is reserved for derived tasks: {key}")
        if key in self.task_keys:
            raise TemplateError(f"Task key already exists: {key}")

        task = TaskTemplate(key=key, label=label)
        return self._replace_stage(
            stage_id, lambda s: s.model_copy(update={"tasks": s.tasks + (task,)})
        )

    def remove_task(self, key: str) -> "StageTemplate":
        stage = self._require_task_stage(key)
        return self._replace_stage(
            stage.id,
            lambda s: s.model_copy(update={"tasks": tuple(t for t in s.tasks if t.key != key)}),
        )

    def rename_task(self, key: str, label: str) -> "StageTemplate":
        stage = self._require_task_stage(key)
        return self._replace_stage(
            stage.id,
            lambda s: s.model_copy(
                update={
                    "tasks": tuple(
                        t.model_copy(update={"label": label}) if t.key == key else t
                        for t in s.tasks
                    )
                }
            ),
        )

    def move_task_order(self, key: str, offset: int) -> "StageTemplate":
        """Swap a task with its neighbour inside its stage (offset -1 or +1)."""
        _check_offset(offset)
        stage = self._require_task_stage(key)
        tasks = list(stage.tasks)
        index = stage.task_keys.index(key)
        target = index + offset
        if 0 <= target < len(tasks):
            tasks[index], tasks[target] = tasks[target], tasks[index]
        return self._replace_stage(stage.id, lambda s: s.model_copy(update={"tasks": tuple(tasks)}))

    def move_task(self, key: str, destination_stage_id: str) -> "StageTemplate":
        """Move a task to the end of another stage (remove, then insert)."""
        source = self._require_task_stage(key)
        self._require_stage(destination_stage_id)
        if source.id == destination_stage_id:
            return self

        task = next(t for t in source.tasks if t.key == key)
        stages = []
        for stage in self.root:
            if stage.id == source.id:
                stage = stage.model_copy(
                    update={"tasks": tuple(t for t in stage.tasks if t.key != key)}
                )
            elif stage.id == destination_stage_id:
                stage = stage.model_copy(update={"tasks": stage.tasks + (task,)})
            stages.append(stage)
        return StageTemplate(tuple(stages))

    # --- Helpers ---

    def _require_stage(self, stage_id: str) -> Stage:
        stage = self.get_stage(stage_id)
        if stage is None:
            raise TemplateError(f"Stage not found: {stage_id}")
        return stage

    def _require_task_stage(self, key: str) -> Stage:
        stage = self.stage_of(key)
        if stage is None:
            raise TemplateError(f"Task not found: {key}")
        return stage

    def _replace_stage(self, stage_id: str, change) -> "StageTemplate":
        return StageTemplate(
            tuple(change(s) if s.id == stage_id else s for s in self.root)
        )


def _check_offset(offset: int) -> None:
    if offset not in (-1, 1):
        raise TemplateError(f"Move offset must be -1 or +1, got {offset}")


def _stage(stage_id: str, name: str, *tasks: tuple[str, str]) -> Stage:
    return Stage(
        id=stage_id,
        name=name,
        tasks=tuple(TaskTemplate(key=key, label=label) for key, label in tasks),
    )


DEFAULT_TEMPLATE = StageTemplate(
    (
        _stage(
            "in_draft",
            "Video ideas",
            ("productType", "Choose product type"),
            ("title", "Title"),
            ("selectProducts", "Select products"),
            ("affiliateLinks", "Affiliate links selected"),
        ),
        _stage(
            "pre_production",
            "Pre-production",
            ("productImages", "Save product images"),
            ("generateScript", "Generate script"),
        ),
        _stage(
            "production",
            "Production",
            ("cutting", "Cut"),
            ("editing", "Edit"),
            ("chapters", "Chapters"),
            ("render", "Render"),
        ),
        _stage(
            "pre_posting",
            "Pre-posting",
            ("tags", "Tags"),
            ("generateDescription", "Generate description"),
            ("thumbnail", "Thumbnail"),
        ),
    )
)
