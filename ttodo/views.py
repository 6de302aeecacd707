"""The main screen widgets: task list, details, status line and help."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime

import urwid

from ttodo.actions import refresh_task_labels
from ttodo.state import ActiveComponent, AppState
from ttodo.styles import STATUS_ATTRIBUTES
from ttodo.task import Task, TaskStatus, task_status_icon, task_status_name

DETAILS_WIDTH = 36


@dataclass
class TaskStats:
    """Counts of tasks by status."""

    total: int = 0
    created: int = 0
    in_progress: int = 0
    completed: int = 0
    deprecated: int = 0

    def progress(self) -> float:
        """Return the share of completed tasks, 0.0 when there are none."""
        if self.total == 0:
            return 0.0
        return self.completed / self.total


def calculate_task_stats(state: AppState) -> TaskStats:
    """Count the state's tasks by status."""
    counts = Counter(task.status for task in state.tasks)
    return TaskStats(
        total=len(state.tasks),
        created=counts[TaskStatus.CREATED],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        completed=counts[TaskStatus.COMPLETED],
        deprecated=counts[TaskStatus.DEPRECATED],
    )


def task_tags_text(state: AppState, task: Task) -> str:
    """Return the names of the task's known tags, or "none"."""
    names = {tag.id: tag.name for tag in reversed(state.tags)}
    text = ", ".join(names[tag_id] for tag_id in task.tag_ids if tag_id in names)
    return text or "none"


def format_timestamp(timestamp: datetime) -> str:
    """Format a timestamp in local time."""
    return timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def current_localized_datetime() -> str:
    """Return the current local date and time for the status line."""
    return datetime.now().strftime("%d %B %a %H:%M")


def detail_rows(state: AppState) -> list[tuple[str, str]]:
    """Return (label, value) rows describing the selected task."""
    if not state.tasks:
        return []
    index = max(0, min(state.selected_task, len(state.tasks) - 1))
    task = state.tasks[index]
    rows = [
        ("title: ", task.title),
        ("status: ", task_status_name(task.status)),
        ("tags: ", task_tags_text(state, task)),
        ("created at: ", format_timestamp(task.created_at)),
    ]
    if task.status != TaskStatus.CREATED and task.status_changed_at is not None:
        rows.append(
            (
                f"{task_status_name(task.status)} at: ",
                format_timestamp(task.status_changed_at),
            )
        )
    return rows


def _task_entry_markup(task: Task, label: str, active: bool):
    icon = task_status_icon(task.status)
    if active:
        return ("entry_active", f"> {icon} {label}")
    return [
        ("entry", "  "),
        (STATUS_ATTRIBUTES.get(task.status, "entry"), icon),
        ("entry", " " + label),
    ]


class TaskListView(urwid.WidgetWrap):
    """The framed list of tasks with the selected one highlighted."""

    def __init__(self, state: AppState):
        self._state = state
        refresh_task_labels(state)
        super().__init__(self._build())

    def selectable(self) -> bool:
        return True

    def refresh(self) -> None:
        """Rebuild the list from the current state."""
        self._w = self._build()

    def _build(self) -> urwid.Widget:
        state = self._state
        if not state.tasks:
            empty = urwid.Filler(
                urwid.Pile(
                    [
                        urwid.Text(("dim", "No tasks yet"), align="center"),
                        urwid.Text(("dim", "Press n to add a task"), align="center"),
                    ]
                )
            )
            return urwid.LineBox(empty, title="ttodo")

        state.clamp_selected_task()
        entries = [
            urwid.Text(_task_entry_markup(task, label, index == state.selected_task))
            for index, (task, label) in enumerate(zip(state.tasks, state.task_labels))
        ]
        walker = urwid.SimpleFocusListWalker(entries)
        listbox = urwid.ListBox(walker)
        if state.selected_task < len(entries):
            listbox.set_focus(state.selected_task)
        return urwid.LineBox(listbox, title="ttodo")

    def keypress(self, size, key):
        count = len(self._state.tasks)
        if count == 0:
            return key
        page = max(1, size[1] - 2) if len(size) > 1 else 1
        moves = {
            "up": -1,
            "k": -1,
            "down": 1,
            "j": 1,
            "page up": -page,
            "page down": page,
            "home": -count,
            "end": count,
        }
        if key not in moves:
            return key
        selected = self._state.selected_task + moves[key]
        self._state.selected_task = max(0, min(count - 1, selected))
        self.refresh()
        return None


class _Gauge(urwid.ProgressBar):
    def get_text(self) -> str:
        return ""


def _stat_row(label: str, count: int, attribute: str) -> urwid.Widget:
    return urwid.Columns(
        [
            urwid.Text((attribute, label)),
            urwid.Text((attribute, str(count)), align="right"),
        ]
    )


def _stats_widgets(stats: TaskStats) -> list[urwid.Widget]:
    progress = stats.progress()
    return [
        urwid.Columns(
            [
                urwid.Text(("dim", "Total")),
                urwid.Text(str(stats.total), align="right"),
            ]
        ),
        _stat_row("Created", stats.created, STATUS_ATTRIBUTES[TaskStatus.CREATED]),
        _stat_row(
            "In progress",
            stats.in_progress,
            STATUS_ATTRIBUTES[TaskStatus.IN_PROGRESS],
        ),
        _stat_row(
            "Completed", stats.completed, STATUS_ATTRIBUTES[TaskStatus.COMPLETED]
        ),
        _stat_row(
            "Deprecated", stats.deprecated, STATUS_ATTRIBUTES[TaskStatus.DEPRECATED]
        ),
        urwid.Divider("─"),
        urwid.Columns(
            [
                urwid.Text(("dim", "Progress")),
                urwid.Text(("bold", f"{int(progress * 100.0)}%"), align="right"),
            ]
        ),
        _Gauge(
            "progress_normal",
            "progress_complete",
            current=stats.completed,
            done=max(stats.total, 1),
        ),
    ]


class TaskDetailsView(urwid.WidgetWrap):
    """Statistics for all tasks and details of the selected one."""

    def __init__(self, state: AppState):
        self._state = state
        self._pile = urwid.Pile([])
        super().__init__(
            urwid.LineBox(urwid.Filler(self._pile, valign="top"), title="statistic")
        )
        self.refresh()

    def refresh(self) -> None:
        """Rebuild the statistics and details from the current state."""
        widgets = _stats_widgets(calculate_task_stats(self._state))
        widgets.append(urwid.Divider("─"))
        rows = detail_rows(self._state)
        if not rows:
            widgets.append(urwid.Text(("dim", "No selected task"), align="center"))
        for label, value in rows:
            widgets.append(
                urwid.Columns(
                    [("pack", urwid.Text(("dim", label))), urwid.Text(value)]
                )
            )
        self._pile.contents = [(widget, self._pile.options()) for widget in widgets]


class StatusLine(urwid.WidgetWrap):
    """The inverted top line with the program name and the date."""

    def __init__(self):
        self._clock = urwid.Text(current_localized_datetime(), align="right")
        columns = urwid.Columns(
            [
                ("pack", urwid.Text("    ")),
                ("pack", urwid.Text(("bold", "ttodo"))),
                ("pack", urwid.Text(" ")),
                self._clock,
                ("pack", urwid.Text("    ")),
            ]
        )
        super().__init__(urwid.AttrMap(columns, "status_line"))

    def refresh(self) -> None:
        """Update the displayed date and time."""
        self._clock.set_text(current_localized_datetime())


_HELP_ROWS = [
    ("n", "       new task"),
    ("t", "       new tag"),
    ("Enter", "   manage task tags"),
    ("Space", "   next status"),
    ("d", "       deprecated"),
    ("Ctrl+D", "  delete task/tag"),
    ("Up/Down", " select task"),
    ("q", "       quit"),
]


class HelpWindow(urwid.WidgetWrap):
    """A window listing the key bindings; swallows every key."""

    def __init__(self, state: AppState):
        self._state = state
        rows = [urwid.Text([("bold", key), text]) for key, text in _HELP_ROWS]
        rows.append(urwid.Divider("─"))
        rows.append(
            urwid.Text([("bold", "h"), " / ", ("bold", "Esc"), " close help"])
        )
        super().__init__(urwid.LineBox(urwid.Pile(rows), title="Help"))

    def selectable(self) -> bool:
        return True

    def keypress(self, size, key):
        if key in ("esc", "h"):
            self._state.active_component = ActiveComponent.TASK_LIST
        return None