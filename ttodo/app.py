"""The main application: screen layout, key bindings and event loop."""

from __future__ import annotations

import argparse
import os
from collections.abc import Callable
from pathlib import Path

import urwid

from ttodo.actions import change_task_status, refresh_tag_labels, toggle_task_deprecated
from ttodo.dialogs import (
    DeleteConfirmationWindow,
    TagInputWindow,
    TagManagerWindow,
    TaskInputWindow,
)
from ttodo.state import ActiveComponent, AppState, DeleteTarget
from ttodo.storage import load_tasks
from ttodo.styles import PALETTE
from ttodo.views import (
    DETAILS_WIDTH,
    HelpWindow,
    StatusLine,
    TaskDetailsView,
    TaskListView,
)

_HELP_WIDTH = 47
_CLOCK_INTERVAL = 30
_DIMMED = {None: "backdrop", **{entry[0]: "backdrop" for entry in PALETTE}}


class _Root(urwid.WidgetPlaceholder):
    """Top widget that hands every key to the application."""

    def __init__(self, handle_key: Callable[[str], bool]):
        self._handle_key = handle_key
        self.size: tuple[int, ...] = (80, 24)
        super().__init__(urwid.SolidFill())

    def selectable(self) -> bool:
        return True

    def keypress(self, size, key):
        self.size = size
        return None if self._handle_key(key) else key


class TodoApp:
    """The full-screen to-do application."""

    def __init__(
        self,
        storage_path: os.PathLike | str | None = None,
        on_quit: Callable[[], None] | None = None,
    ):
        self.state = AppState(
            storage_path=Path(storage_path) if storage_path is not None else None
        )
        load_tasks(self.state)
        self._on_quit = on_quit if on_quit is not None else self._exit_loop

        state = self.state
        self.task_list = TaskListView(state)
        self.details = TaskDetailsView(state)
        self.status_line = StatusLine()
        self.task_input = TaskInputWindow(state)
        self.tag_input = TagInputWindow(state)
        self.tag_manager = TagManagerWindow(state)
        self.delete_window = DeleteConfirmationWindow(state)
        self.help_window = HelpWindow(state)

        self._windows = {
            ActiveComponent.TASK_INPUT: (self.task_input, TaskInputWindow.width),
            ActiveComponent.TAG_INPUT: (self.tag_input, TagInputWindow.width),
            ActiveComponent.TAG_MANAGER: (self.tag_manager, TagManagerWindow.width),
            ActiveComponent.DELETE_CONFIRMATION: (
                self.delete_window,
                DeleteConfirmationWindow.width,
            ),
            ActiveComponent.HELP: (self.help_window, _HELP_WIDTH),
        }

        self._main = urwid.Pile(
            [
                ("pack", self.status_line),
                urwid.Columns([self.task_list, (DETAILS_WIDTH, self.details)]),
            ]
        )
        self.root = _Root(self.handle_key)
        self.refresh()

    @staticmethod
    def _exit_loop() -> None:
        raise urwid.ExitMainLoop()

    def handle_key(self, key: str) -> bool:
        """Process one key press; return True if it was used."""
        active = self.state.active_component
        if active != ActiveComponent.TASK_LIST:
            window, width = self._windows[ActiveComponent(active)]
            handled = window.keypress((width,), key) is None
        else:
            handled = self._handle_main_key(key)
        self.refresh()
        return handled

    def _handle_main_key(self, key: str) -> bool:
        state = self.state
        if key == "n":
            state.draft_task = ""
            state.active_component = ActiveComponent.TASK_INPUT
            return True
        if key == "t":
            state.draft_tag = ""
            state.active_component = ActiveComponent.TAG_INPUT
            return True
        if key == "enter":
            if state.has_selected_task():
                refresh_tag_labels(state)
                state.active_component = ActiveComponent.TAG_MANAGER
            return True
        if key == "h":
            state.active_component = ActiveComponent.HELP
            return True
        if key == " ":
            change_task_status(state)
            return True
        if key == "d":
            toggle_task_deprecated(state)
            return True
        if key == "ctrl d":
            if state.has_selected_task():
                state.delete_target = DeleteTarget.TASK
                state.delete_return_component = ActiveComponent.TASK_LIST
                state.active_component = ActiveComponent.DELETE_CONFIRMATION
            return True
        if key == "q":
            self._on_quit()
            return True
        return self.task_list.keypress(self.root.size, key) is None

    def refresh(self) -> None:
        """Rebuild every view and show the active window."""
        self.task_list.refresh()
        self.details.refresh()
        self.status_line.refresh()
        self.tag_input.refresh()
        self.tag_manager.refresh()
        self.delete_window.refresh()

        active = self.state.active_component
        if active == ActiveComponent.TASK_LIST:
            self.root.original_widget = self._main
            return
        window, width = self._windows[ActiveComponent(active)]
        self.root.original_widget = urwid.Overlay(
            window,
            urwid.AttrMap(self._main, _DIMMED),
            align="center",
            width=width,
            valign="middle",
            height="pack",
        )

    def run(self) -> None:
        """Run the interactive loop until the user quits."""
        loop = urwid.MainLoop(self.root, PALETTE, handle_mouse=False)
        loop.screen.set_terminal_properties(colors=256)
        loop.screen.register_palette(PALETTE)

        def tick(main_loop, _user_data):
            self.status_line.refresh()
            main_loop.set_alarm_in(_CLOCK_INTERVAL, tick)

        loop.set_alarm_in(_CLOCK_INTERVAL, tick)
        loop.run()


def main(argv=None) -> int:
    """Start the application."""
    parser = argparse.ArgumentParser(
        prog="ttodo", description="Keep a list of tasks in the terminal."
    )
    parser.parse_args(argv)
    TodoApp().run()
    return 0