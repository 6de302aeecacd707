import pytest

from ttodo.dialogs import (
    DeleteConfirmationWindow,
    TagInputWindow,
    TagManagerWindow,
    TaskInputWindow,
    delete_message,
    delete_title,
)
from ttodo.state import ActiveComponent, AppState, DeleteTarget
from ttodo.task import Tag, Task


@pytest.fixture
def state(tmp_path):
    return AppState(storage_path=tmp_path / "tasks.tsv")


def _type(window, text, width=50):
    for character in text:
        window.keypress((width,), character)


def _rendered(widget, width=60):
    return b"\n".join(widget.render((width,)).text)


def test_delete_title_follows_target(state):
    state.delete_target = DeleteTarget.TAG
    assert delete_title(state) == "Delete tag"
    state.delete_target = DeleteTarget.TASK
    assert delete_title(state) == "Delete task"


def test_delete_message_for_task_and_fallback(state):
    assert delete_message(state) == ['Delete task "selected task"?']
    state.tasks.append(Task(title="write", id=1))
    assert delete_message(state) == ['Delete task "write"?']


def test_delete_message_for_tag(state):
    state.delete_target = DeleteTarget.TAG
    assert delete_message(state)[0] == 'Delete tag "selected tag"?'
    state.tags.append(Tag(name="home", id=1))
    assert delete_message(state) == [
        'Delete tag "home"?',
        "This removes it from all tasks.",
    ]


def test_task_input_typing_updates_draft(state):
    window = TaskInputWindow(state)
    _type(window, "buy milk")
    assert state.draft_task == "buy milk"


def test_task_input_enter_adds_task(state):
    state.active_component = ActiveComponent.TASK_INPUT
    window = TaskInputWindow(state)
    _type(window, "  read  ")
    assert window.keypress((50,), "enter") is None
    assert [task.title for task in state.tasks] == ["read"]
    assert state.draft_task == ""
    assert state.active_component == ActiveComponent.TASK_LIST
    assert state.storage_path.exists()


def test_task_input_blank_enter_adds_nothing(state):
    state.active_component = ActiveComponent.TASK_INPUT
    window = TaskInputWindow(state)
    _type(window, "   ")
    window.keypress((50,), "enter")
    assert state.tasks == []
    assert state.active_component == ActiveComponent.TASK_LIST


def test_task_input_escape_discards_draft(state):
    state.active_component = ActiveComponent.TASK_INPUT
    window = TaskInputWindow(state)
    _type(window, "draft")
    window.keypress((50,), "esc")
    assert state.draft_task == ""
    assert state.tasks == []
    assert state.active_component == ActiveComponent.TASK_LIST


def test_task_input_shows_placeholder(state):
    window = TaskInputWindow(state)
    assert b"Enter task title..." in _rendered(window)


def test_tag_input_enter_adds_tag_and_stays_open(state):
    state.active_component = ActiveComponent.TAG_INPUT
    window = TagInputWindow(state)
    _type(window, "work")
    window.keypress((50,), "enter")
    assert [tag.name for tag in state.tags] == ["work"]
    assert state.draft_tag == ""
    assert state.active_component == ActiveComponent.TAG_INPUT


def test_tag_input_enter_ignored_when_menu_focused(state):
    window = TagInputWindow(state)
    _type(window, "x")
    assert window.keypress((50,), "tab") is None
    assert window.keypress((50,), "enter") == "enter"
    assert state.tags == []


def test_tag_input_menu_moves_selection(state):
    state.tags.extend([Tag(name="a", id=1), Tag(name="b", id=2)])
    window = TagInputWindow(state)
    window.keypress((50,), "tab")
    window.keypress((50,), "down")
    assert state.selected_tag == 1
    window.keypress((50,), "down")
    assert state.selected_tag == 1
    window.keypress((50,), "up")
    assert state.selected_tag == 0


def test_tag_input_ctrl_d_opens_confirmation(state):
    state.tags.append(Tag(name="a", id=1))
    state.active_component = ActiveComponent.TAG_INPUT
    window = TagInputWindow(state)
    window.keypress((50,), "ctrl d")
    assert state.delete_target is DeleteTarget.TAG
    assert state.delete_return_component == ActiveComponent.TAG_INPUT
    assert state.active_component == ActiveComponent.DELETE_CONFIRMATION


def test_tag_input_ctrl_d_without_tags_does_nothing(state):
    state.active_component = ActiveComponent.TAG_INPUT
    window = TagInputWindow(state)
    assert window.keypress((50,), "ctrl d") is None
    assert state.active_component == ActiveComponent.TAG_INPUT


def test_tag_input_escape_closes(state):
    state.active_component = ActiveComponent.TAG_INPUT
    window = TagInputWindow(state)
    _type(window, "abc")
    window.keypress((50,), "esc")
    assert state.draft_tag == ""
    assert state.active_component == ActiveComponent.TASK_LIST


def test_tag_input_renders_empty_hint(state):
    window = TagInputWindow(state)
    assert b"No tags created" in _rendered(window)


def test_tag_manager_toggles_tag(state):
    state.tasks.append(Task(title="t", id=1))
    state.tags.append(Tag(name="work", id=4))
    window = TagManagerWindow(state)
    window.keypress((55,), " ")
    assert state.tasks[0].tag_ids == [4]
    assert state.tag_labels == ["[x] work"]
    window.keypress((55,), " ")
    assert state.tasks[0].tag_ids == []
    assert state.tag_labels == ["[ ] work"]


def test_tag_manager_moves_and_closes(state):
    state.tasks.append(Task(title="t", id=1))
    state.tags.extend([Tag(name="a", id=1), Tag(name="b", id=2)])
    state.active_component = ActiveComponent.TAG_MANAGER
    window = TagManagerWindow(state)
    window.keypress((55,), "down")
    assert state.selected_tag == 1
    assert window.keypress((55,), "x") == "x"
    window.keypress((55,), "enter")
    assert state.active_component == ActiveComponent.TASK_LIST


def test_tag_manager_without_task(state):
    window = TagManagerWindow(state)
    assert b"No selected task" in _rendered(window)


def test_delete_confirmation_deletes_tag_and_returns(state):
    state.tags.append(Tag(name="a", id=1))
    state.tasks.append(Task(title="t", id=1, tag_ids=[1]))
    state.delete_target = DeleteTarget.TAG
    state.delete_return_component = ActiveComponent.TAG_INPUT
    state.active_component = ActiveComponent.DELETE_CONFIRMATION
    window = DeleteConfirmationWindow(state)
    assert window.keypress((55,), "enter") is None
    assert state.tags == []
    assert state.tasks[0].tag_ids == []
    assert state.active_component == ActiveComponent.TAG_INPUT


def test_delete_confirmation_deletes_task(state):
    state.tasks.extend([Task(title="a", id=1), Task(title="b", id=2)])
    state.selected_task = 1
    state.active_component = ActiveComponent.DELETE_CONFIRMATION
    window = DeleteConfirmationWindow(state)
    window.keypress((55,), "enter")
    assert [task.title for task in state.tasks] == ["a"]
    assert state.selected_task == 0
    assert state.active_component == ActiveComponent.TASK_LIST


def test_delete_confirmation_escape_keeps_everything(state):
    state.tasks.append(Task(title="a", id=1))
    state.active_component = ActiveComponent.DELETE_CONFIRMATION
    window = DeleteConfirmationWindow(state)
    assert window.keypress((55,), "q") == "q"
    window.keypress((55,), "esc")
    assert len(state.tasks) == 1
    assert state.active_component == ActiveComponent.TASK_LIST


def test_delete_confirmation_renders_question(state):
    state.tasks.append(Task(title="laundry", id=1))
    window = DeleteConfirmationWindow(state)
    assert b'Delete task "laundry"?' in _rendered(window)