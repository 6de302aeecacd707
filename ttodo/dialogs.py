"""Modal windows: new task, tags, task tags and delete confirmation."""

from __future__ import annotations

import urwid

from ttodo.actions import (
    add_tag,
    add_task,
    delete_selected_tag,
    delete_selected_task,
    refresh_tag_labels,
    toggle_selected_task_tag,
)
from ttodo.state import ActiveComponent, AppState, DeleteTarget
from ttodo.styles import menu_entry_markup

VISIBLE_TAG_ROWS = 8
_DIVIDER = "─"


class _PlaceholderEdit(urwid.Edit):
    """A single-line edit that shows a dim hint while it is empty."""

    def __init__(self, placeholder: str):
        super().__init__(multiline=False)
        self._placeholder = placeholder

    def get_text(self):
        if self.edit_text or self.caption:
            return super().get_text()
        return self._placeholder, [("input_placeholder", len(self._placeholder))]

    def sync(self, text: str) -> None:
        if self.edit_text != text:
            self.set_edit_text(text)
            self.set_edit_pos(len(text))


def _inner_size(size, default_width: int) -> tuple[int]:
    width = size[0] if size else default_width
    return (max(1, width - 2),)


def _menu_move(selected: int, count: int, key: str) -> int | None:
    moves = {"up": -1, "k": -1, "down": 1, "j": 1, "home": -count, "end": count}
    if count == 0 or key not in moves:
        return None
    return max(0, min(count - 1, selected + moves[key]))


def _menu_widget(labels: list[str], selected: int, rows: int) -> urwid.Widget:
    entries = [
        urwid.Text(menu_entry_markup(label, index == selected))
        for index, label in enumerate(labels)
    ]
    listbox = urwid.ListBox(urwid.SimpleFocusListWalker(entries))
    if entries:
        listbox.set_focus(max(0, min(selected, len(entries) - 1)))
    return urwid.BoxAdapter(listbox, rows)


def _selected_task_title(state: AppState) -> str:
    if state.has_selected_task():
        return state.tasks[state.selected_task].title
    return "selected task"


def _selected_tag_name(state: AppState) -> str:
    if 0 <= state.selected_tag < len(state.tags):
        return state.tags[state.selected_tag].name
    return "selected tag"


def delete_title(state: AppState) -> str:
    """Return the title of the delete confirmation window."""
    return "Delete tag" if state.delete_target is DeleteTarget.TAG else "Delete task"


def delete_message(state: AppState) -> list[str]:
    """Return the lines asking to confirm the pending deletion."""
    if state.delete_target is DeleteTarget.TAG:
        return [
            f'Delete tag "{_selected_tag_name(state)}"?',
            "This removes it from all tasks.",
        ]
    return [f'Delete task "{_selected_task_title(state)}"?']


class TaskInputWindow(urwid.WidgetWrap):
    """A window with one line of input for the title of a new task."""

    width = 50

    def __init__(self, state: AppState):
        self._state = state
        self._edit = _PlaceholderEdit("Enter task title...")
        self._edit.sync(state.draft_task)
        body = urwid.Pile(
            [
                urwid.AttrMap(self._edit, "input", "input_focus"),
                urwid.Divider(_DIVIDER),
                urwid.Text("Enter: add  Esc: cancel"),
            ]
        )
        super().__init__(urwid.LineBox(body, title="New task"))

    def selectable(self) -> bool:
        return True

    def keypress(self, size, key):
        state = self._state
        self._edit.sync(state.draft_task)
        if key == "esc":
            state.draft_task = ""
            state.active_component = ActiveComponent.TASK_LIST
            self._edit.sync(state.draft_task)
            return None
        if key == "enter":
            add_task(state, state.draft_task)
            state.draft_task = ""
            state.active_component = ActiveComponent.TASK_LIST
            self._edit.sync(state.draft_task)
            return None
        result = self._edit.keypress(_inner_size(size, self.width), key)
        state.draft_task = self._edit.edit_text
        return result


class TagInputWindow(urwid.WidgetWrap):
    """A window listing all tags with an input for creating new ones."""

    width = 50

    def __init__(self, state: AppState):
        self._state = state
        self._input_focused = True
        self._edit = _PlaceholderEdit("Enter tag name...")
        self._edit_map = urwid.AttrMap(self._edit, "input", "input_focus")
        self._pile = urwid.Pile([])
        super().__init__(urwid.LineBox(self._pile, title="Tags"))
        self.refresh()

    def selectable(self) -> bool:
        return True

    def refresh(self) -> None:
        """Rebuild the tag list and input from the current state."""
        state = self._state
        state.clamp_selected_tag()
        self._edit.sync(state.draft_tag)
        names = [tag.name for tag in state.tags]
        if names:
            tag_list = _menu_widget(names, state.selected_tag, VISIBLE_TAG_ROWS)
        else:
            tag_list = urwid.BoxAdapter(
                urwid.Filler(urwid.Text(("dim", "No tags created")), valign="top"),
                VISIBLE_TAG_ROWS,
            )
        widgets = [
            tag_list,
            urwid.Divider(_DIVIDER),
            self._edit_map,
            urwid.Divider(_DIVIDER),
            urwid.Text("Tab: focus  Enter: add  Ctrl+D: delete  Esc: close"),
        ]
        self._pile.contents = [(widget, self._pile.options()) for widget in widgets]
        self._pile.focus_position = 2 if self._input_focused else 0

    def keypress(self, size, key):
        state = self._state
        self._edit.sync(state.draft_tag)
        if key == "esc":
            state.draft_tag = ""
            self._edit.sync(state.draft_tag)
            state.active_component = ActiveComponent.TASK_LIST
            return None
        if key in ("tab", "shift tab"):
            self._input_focused = not self._input_focused
            self.refresh()
            return None
        if key == "ctrl d":
            if state.tags:
                state.delete_target = DeleteTarget.TAG
                state.delete_return_component = ActiveComponent.TAG_INPUT
                state.active_component = ActiveComponent.DELETE_CONFIRMATION
            return None
        if key == "enter" and self._input_focused:
            add_tag(state, state.draft_tag)
            state.draft_tag = ""
            self.refresh()
            return None
        if self._input_focused:
            result = self._edit.keypress(_inner_size(size, self.width), key)
            state.draft_tag = self._edit.edit_text
            return result
        moved = _menu_move(state.selected_tag, len(state.tags), key)
        if moved is None:
            return key
        state.selected_tag = moved
        self.refresh()
        return None


class TagManagerWindow(urwid.WidgetWrap):
    """A window for attaching tags to the selected task."""

    width = 55

    def __init__(self, state: AppState):
        self._state = state
        super().__init__(self._build())

    def selectable(self) -> bool:
        return True

    def refresh(self) -> None:
        """Rebuild the window from the current state."""
        self._w = self._build()

    def _build(self) -> urwid.Widget:
        state = self._state
        if not state.has_selected_task():
            body = urwid.Text(("dim", "No selected task"))
        elif not state.tags:
            body = urwid.Pile(
                [
                    urwid.Text(("dim", "No tags created")),
                    urwid.Divider(_DIVIDER),
                    urwid.Text("Press t to create a tag"),
                    urwid.Text("Esc: close"),
                ]
            )
        else:
            if len(state.tag_labels) != len(state.tags):
                refresh_tag_labels(state)
            state.clamp_selected_tag()
            rows = max(1, min(len(state.tag_labels), VISIBLE_TAG_ROWS))
            body = urwid.Pile(
                [
                    _menu_widget(state.tag_labels, state.selected_tag, rows),
                    urwid.Divider(_DIVIDER),
                    urwid.Text(("dim", "Space: toggle  Enter/Esc: close")),
                ]
            )
        return urwid.LineBox(body, title="Task tags")

    def keypress(self, size, key):
        state = self._state
        if key in ("esc", "enter"):
            state.active_component = ActiveComponent.TASK_LIST
            return None
        if key == " ":
            toggle_selected_task_tag(state)
            self.refresh()
            return None
        moved = _menu_move(state.selected_tag, len(state.tag_labels), key)
        if moved is None:
            return key
        state.selected_tag = moved
        self.refresh()
        return None


class DeleteConfirmationWindow(urwid.WidgetWrap):
    """A window asking whether to delete the selected task or tag."""

    width = 55

    def __init__(self, state: AppState):
        self._state = state
        super().__init__(self._build())

    def selectable(self) -> bool:
        return True

    def refresh(self) -> None:
        """Rebuild the question from the current state."""
        self._w = self._build()

    def _build(self) -> urwid.Widget:
        first, *rest = delete_message(self._state)
        widgets = [urwid.Text(first)]
        widgets.extend(urwid.Text(("dim", line)) for line in rest)
        widgets.append(urwid.Divider(_DIVIDER))
        widgets.append(urwid.Text(("dim", "Enter: delete  Esc: cancel")))
        return urwid.LineBox(urwid.Pile(widgets), title=delete_title(self._state))

    def keypress(self, size, key):
        state = self._state
        if key == "esc":
            state.active_component = state.delete_return_component
            return None
        if key == "enter":
            if state.delete_target is DeleteTarget.TAG:
                delete_selected_tag(state)
            else:
                delete_selected_task(state)
            state.active_component = state.delete_return_component
            self.refresh()
            return None
        return key