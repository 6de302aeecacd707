"""Colours, palette entries and entry markup shared by the views."""

from __future__ import annotations

from ttodo.task import TaskStatus

_STATUS_COLORS = {
    TaskStatus.CREATED: "h15",
    TaskStatus.IN_PROGRESS: "h214",
    TaskStatus.COMPLETED: "h2",
    TaskStatus.DEPRECATED: "h88",
}

_STATUS_FALLBACK_COLORS = {
    TaskStatus.CREATED: "white",
    TaskStatus.IN_PROGRESS: "brown",
    TaskStatus.COMPLETED: "dark green",
    TaskStatus.DEPRECATED: "dark red",
}

STATUS_ATTRIBUTES = {status: f"status_{status.name.lower()}" for status in TaskStatus}


def task_status_color(status) -> str:
    """Return the 256-colour foreground used for a task status."""
    return _STATUS_COLORS.get(status, _STATUS_COLORS[TaskStatus.CREATED])


def menu_entry_markup(label: str, active: bool) -> tuple[str, str]:
    """Return text markup for a menu entry, highlighted when active."""
    if active:
        return ("entry_active", "> " + label)
    return ("entry", "  " + label)


PALETTE = [
    *(
        (
            STATUS_ATTRIBUTES[status],
            _STATUS_FALLBACK_COLORS[status],
            "",
            None,
            task_status_color(status),
            "",
        )
        for status in TaskStatus
    ),
    ("entry", "light gray", ""),
    ("entry_active", "black,bold", "dark gray"),
    ("dim", "dark gray", ""),
    ("bold", "default,bold", ""),
    ("status_line", "standout", ""),
    ("input", "default", ""),
    ("input_focus", "black", "dark gray"),
    ("input_placeholder", "dark gray", ""),
    ("progress_normal", "default", ""),
    ("progress_complete", "black", "light gray"),
    ("backdrop", "dark gray", ""),
]