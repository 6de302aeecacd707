"""Application state shared by the views and actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path

from ttodo.task import Tag, Task


class DeleteTarget(Enum):
    """What the delete confirmation dialog will remove."""

    TASK = "task"
    TAG = "tag"


class ActiveComponent(IntEnum):
    """The component that currently receives input."""

    TASK_LIST = 0
    TASK_INPUT = 1
    TAG_INPUT = 2
    TAG_MANAGER = 3
    DELETE_CONFIRMATION = 4
    HELP = 5


def _clamp(value: int, count: int) -> int:
    return max(0, min(value, max(0, count - 1)))


@dataclass
class AppState:
    """Everything the application keeps in memory."""

    tasks: list[Task] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    task_labels: list[str] = field(default_factory=list)
    tag_labels: list[str] = field(default_factory=list)
    next_task_id: int = 1
    next_tag_id: int = 1
    selected_task: int = 0
    selected_tag: int = 0
    active_component: ActiveComponent = ActiveComponent.TASK_LIST
    delete_return_component: ActiveComponent = ActiveComponent.TASK_LIST
    delete_target: DeleteTarget = DeleteTarget.TASK
    draft_task: str = ""
    draft_tag: str = ""
    storage_path: Path | None = None

    def has_selected_task(self) -> bool:
        """Return True if the selection points at an existing task."""
        return 0 <= self.selected_task < len(self.tasks)

    def clamp_selected_task(self) -> None:
        """Move the task selection back into the valid range."""
        self.selected_task = _clamp(self.selected_task, len(self.tasks))

    def clamp_selected_tag(self) -> None:
        """Move the tag selection back into the valid range."""
        self.selected_tag = _clamp(self.selected_tag, len(self.tags))