"""Tasks, tags and task status helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum


class TaskStatus(IntEnum):
    """Lifecycle status of a task; the integer values are stored on disk."""

    CREATED = 0
    IN_PROGRESS = 1
    COMPLETED = 2
    DEPRECATED = 3


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Task:
    """A single to-do item."""

    title: str
    id: int = 0
    status: TaskStatus = TaskStatus.CREATED
    created_at: datetime = field(default_factory=_now)
    status_changed_at: datetime | None = None
    tag_ids: list[int] = field(default_factory=list)

    def has_tag(self, tag_id: int) -> bool:
        """Return True if the task carries the tag with this id."""
        return tag_id in self.tag_ids


@dataclass
class Tag:
    """A named label that can be attached to tasks."""

    name: str
    id: int = 0


_ICONS = {
    TaskStatus.CREATED: "",
    TaskStatus.IN_PROGRESS: "",
    TaskStatus.COMPLETED: "",
    TaskStatus.DEPRECATED: "",
}

_NAMES = {
    TaskStatus.CREATED: "Created",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.COMPLETED: "Completed",
    TaskStatus.DEPRECATED: "Deprecated",
}


def task_status_icon(status) -> str:
    """Return the icon shown next to a task with this status."""
    return _ICONS.get(status, "?")


def task_status_name(status) -> str:
    """Return the human-readable name of a status."""
    return _NAMES.get(status, "Unknown")