"""Reading and writing tasks and tags as tab-separated lines."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from ttodo.task import Tag, Task, TaskStatus

if TYPE_CHECKING:
    from ttodo.state import AppState

_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def storage_path(env: Mapping[str, str] | None = None) -> Path:
    """Return the file tasks are kept in, following XDG_DATA_HOME."""
    if env is None:
        env = os.environ
    xdg_data_home = env.get("XDG_DATA_HOME")
    if xdg_data_home:
        base = Path(xdg_data_home)
    else:
        base = Path(env.get("HOME", ".")) / ".local/share"
    return base / "ttodo" / "tasks.tsv"


def escape_field(value: str) -> str:
    """Escape backslashes, newlines and tabs so a value fits in one field."""
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace("\t", "\\t")


def unescape_field(value: str) -> str:
    """Undo escape_field; unknown escapes yield the escaped character."""
    result: list[str] = []
    escaped = False
    for character in value:
        if escaped:
            result.append({"n": "\n", "t": "\t"}.get(character, character))
            escaped = False
        elif character == "\\":
            escaped = True
        else:
            result.append(character)
    if escaped:
        result.append("\\")
    return "".join(result)


def _split(text: str, separator: str) -> list[str]:
    parts = text.split(separator)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def _parse_int(text: str, bits: int = 32) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"invalid integer: {text!r}")
    value = int(match.group(1))
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _to_epoch_seconds(timestamp: datetime) -> int:
    return int(timestamp.timestamp())


def _from_epoch_seconds(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def _parse_status(value: str) -> TaskStatus:
    status = _parse_int(value)
    try:
        return TaskStatus(status)
    except ValueError:
        return TaskStatus.CREATED


def _parse_tag_ids(value: str) -> list[int]:
    tag_ids = []
    for part in _split(value, ","):
        if not part:
            continue
        try:
            tag_ids.append(_parse_int(part))
        except ValueError:
            continue
    return tag_ids


def _parse_task_fields(fields: Sequence[str], offset: int) -> Task | None:
    try:
        status_changed_at = _parse_int(fields[offset + 4], 64)
        return Task(
            title=unescape_field(fields[offset + 1]),
            id=_parse_int(fields[offset]),
            status=_parse_status(fields[offset + 2]),
            created_at=_from_epoch_seconds(_parse_int(fields[offset + 3], 64)),
            status_changed_at=(
                _from_epoch_seconds(status_changed_at)
                if status_changed_at > 0
                else None
            ),
            tag_ids=(
                _parse_tag_ids(fields[offset + 5])
                if len(fields) > offset + 5
                else []
            ),
        )
    except (ValueError, OverflowError, OSError):
        return None


def parse_task(fields: Sequence[str]) -> Task | None:
    """Build a task from a stored line's fields, or return None."""
    if len(fields) == 5:
        return _parse_task_fields(fields, 0)
    if len(fields) in (6, 7) and fields[0] == "TASK":
        return _parse_task_fields(fields, 1)
    return None


def parse_tag(fields: Sequence[str]) -> Tag | None:
    """Build a tag from a stored line's fields, or return None."""
    if len(fields) != 3 or fields[0] != "TAG":
        return None
    try:
        return Tag(name=unescape_field(fields[2]), id=_parse_int(fields[1]))
    except ValueError:
        return None


def _resolve(state: AppState, path: os.PathLike | str | None) -> Path:
    if path is not None:
        return Path(path)
    if state.storage_path is not None:
        return Path(state.storage_path)
    return storage_path()


def load_tasks(state: AppState, path: os.PathLike | str | None = None) -> None:
    """Replace the state's tasks and tags with those stored on disk.

    A missing or unreadable file leaves the state untouched.
    """
    target = _resolve(state, path)
    try:
        content = target.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError:
        return

    state.tasks.clear()
    state.tags.clear()

    for line in _split(content, "\n"):
        fields = _split(line, "\t")
        tag = parse_tag(fields)
        if tag is not None:
            state.tags.append(tag)
            continue
        task = parse_task(fields)
        if task is not None:
            state.tasks.append(task)

    state.next_task_id = max((task.id for task in state.tasks), default=0) + 1
    state.next_tag_id = max((tag.id for tag in state.tags), default=0) + 1
    state.selected_task = 0


def save_tasks(state: AppState, path: os.PathLike | str | None = None) -> None:
    """Write all tags and tasks of the state to disk."""
    target = _resolve(state, path)
    target.parent.mkdir(parents=True, exist_ok=True)

    lines = [f"TAG\t{tag.id}\t{escape_field(tag.name)}\n" for tag in state.tags]
    for task in state.tasks:
        changed = (
            _to_epoch_seconds(task.status_changed_at)
            if task.status_changed_at is not None
            else 0
        )
        tag_ids = ",".join(str(tag_id) for tag_id in task.tag_ids)
        lines.append(
            f"TASK\t{task.id}\t{escape_field(task.title)}\t{int(task.status)}"
            f"\t{_to_epoch_seconds(task.created_at)}\t{changed}\t{tag_ids}\n"
        )

    try:
        with target.open(
            "w", encoding="utf-8", errors="surrogateescape", newline="\n"
        ) as output:
            output.writelines(lines)
    except OSError:
        return