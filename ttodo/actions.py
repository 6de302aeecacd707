"""Operations that change the application state and persist it."""

from __future__ import annotations

from datetime import datetime, timezone

from ttodo.state import AppState
from ttodo.storage import save_tasks
from ttodo.task import Tag, Task, TaskStatus

_WHITESPACE = " \t\n\v\f\r"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _selected_task(state: AppState) -> Task | None:
    return state.tasks[state.selected_task] if state.has_selected_task() else None


def refresh_task_labels(state: AppState) -> None:
    """Rebuild the task list labels from the task titles."""
    state.task_labels = [task.title for task in state.tasks]


def refresh_tag_labels(state: AppState) -> None:
    """Rebuild the tag labels, checked for tags of the selected task."""
    selected = _selected_task(state)
    state.tag_labels = [
        ("[x] " if selected is not None and selected.has_tag(tag.id) else "[ ] ")
        + tag.name
        for tag in state.tags
    ]


def add_task(state: AppState, title: str) -> None:
    """Add a task with the given title unless it is blank, and select it."""
    title = title.strip(_WHITESPACE)
    if not title:
        return
    state.tasks.append(
        Task(
            title=title,
            id=state.next_task_id,
            status=TaskStatus.CREATED,
            created_at=_now(),
        )
    )
    state.next_task_id += 1
    state.selected_task = len(state.tasks) - 1
    refresh_task_labels(state)
    save_tasks(state)


def change_task_status(state: AppState) -> None:
    """Advance the selected task: created, in progress, completed, created."""
    task = _selected_task(state)
    if task is None:
        return
    if task.status is TaskStatus.CREATED:
        task.status_changed_at = _now()
        task.status = TaskStatus.IN_PROGRESS
    elif task.status is TaskStatus.IN_PROGRESS:
        task.status_changed_at = _now()
        task.status = TaskStatus.COMPLETED
    else:
        task.status = TaskStatus.CREATED
        task.status_changed_at = None
    refresh_task_labels(state)
    save_tasks(state)


def delete_selected_task(state: AppState) -> None:
    """Remove the selected task."""
    if not state.has_selected_task():
        return
    del state.tasks[state.selected_task]
    state.clamp_selected_task()
    refresh_task_labels(state)
    save_tasks(state)


def toggle_task_deprecated(state: AppState) -> None:
    """Mark the selected task as deprecated."""
    task = _selected_task(state)
    if task is None:
        return
    task.status = TaskStatus.DEPRECATED
    task.status_changed_at = _now()
    refresh_task_labels(state)
    save_tasks(state)


def add_tag(state: AppState, name: str) -> None:
    """Add a tag with the given name unless it is blank, and select it."""
    name = name.strip(_WHITESPACE)
    if not name:
        return
    state.tags.append(Tag(name=name, id=state.next_tag_id))
    state.next_tag_id += 1
    state.selected_tag = len(state.tags) - 1
    refresh_tag_labels(state)
    save_tasks(state)


def delete_selected_tag(state: AppState) -> None:
    """Remove the selected tag and detach it from every task."""
    if not state.tags:
        state.selected_tag = 0
        return
    state.clamp_selected_tag()
    tag_id = state.tags.pop(state.selected_tag).id
    for task in state.tasks:
        task.tag_ids = [existing for existing in task.tag_ids if existing != tag_id]
    state.clamp_selected_tag()
    refresh_tag_labels(state)
    save_tasks(state)


def toggle_selected_task_tag(state: AppState) -> None:
    """Attach the selected tag to the selected task, or detach it."""
    task = _selected_task(state)
    if task is None or not state.tags:
        return
    state.clamp_selected_tag()
    tag_id = state.tags[state.selected_tag].id
    if task.has_tag(tag_id):
        task.tag_ids.remove(tag_id)
    else:
        task.tag_ids.append(tag_id)
    refresh_tag_labels(state)
    save_tasks(state)