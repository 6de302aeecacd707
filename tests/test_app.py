import pytest

from ttodo.app import TodoApp, main
from ttodo.state import ActiveComponent, DeleteTarget
from ttodo.task import TaskStatus


@pytest.fixture
def path(tmp_path):
    return tmp_path / "tasks.tsv"


@pytest.fixture
def quits():
    return []


@pytest.fixture
def app(path, quits):
    return TodoApp(storage_path=path, on_quit=lambda: quits.append(True))


def _type(app, text):
    for character in text:
        app.handle_key(character)


def _add_task(app, title):
    app.handle_key("n")
    _type(app, title)
    app.handle_key("enter")


def _screen_text(app):
    canvas = app.root.render((100, 30), focus=True)
    return b"\n".join(canvas.text)


def test_new_task_is_added_and_saved(app, path):
    assert app.handle_key("n") is True
    assert app.state.active_component == ActiveComponent.TASK_INPUT
    _type(app, "ab")
    app.handle_key("enter")
    assert [task.title for task in app.state.tasks] == ["ab"]
    assert app.state.active_component == ActiveComponent.TASK_LIST
    reloaded = TodoApp(storage_path=path)
    assert [task.title for task in reloaded.state.tasks] == ["ab"]


def test_letters_go_to_input_not_commands(app):
    app.handle_key("n")
    _type(app, "hq")
    assert app.state.draft_task == "hq"
    assert app.state.active_component == ActiveComponent.TASK_INPUT


def test_space_advances_status(app):
    _add_task(app, "x")
    app.handle_key(" ")
    assert app.state.tasks[0].status is TaskStatus.IN_PROGRESS
    app.handle_key(" ")
    assert app.state.tasks[0].status is TaskStatus.COMPLETED
    app.handle_key(" ")
    assert app.state.tasks[0].status is TaskStatus.CREATED


def test_d_marks_deprecated(app):
    _add_task(app, "x")
    app.handle_key("d")
    assert app.state.tasks[0].status is TaskStatus.DEPRECATED
    assert app.state.tasks[0].status_changed_at is not None


def test_ctrl_d_then_enter_deletes_task(app):
    _add_task(app, "x")
    app.handle_key("ctrl d")
    assert app.state.active_component == ActiveComponent.DELETE_CONFIRMATION
    assert app.state.delete_target is DeleteTarget.TASK
    app.handle_key("enter")
    assert app.state.tasks == []
    assert app.state.active_component == ActiveComponent.TASK_LIST


def test_ctrl_d_and_enter_without_tasks_stay_on_list(app):
    assert app.handle_key("ctrl d") is True
    assert app.state.active_component == ActiveComponent.TASK_LIST
    assert app.handle_key("enter") is True
    assert app.state.active_component == ActiveComponent.TASK_LIST


def test_help_swallows_keys_until_closed(app):
    app.handle_key("h")
    assert app.state.active_component == ActiveComponent.HELP
    assert app.handle_key("n") is True
    assert app.state.active_component == ActiveComponent.HELP
    app.handle_key("h")
    assert app.state.active_component == ActiveComponent.TASK_LIST


def test_q_calls_quit(app, quits):
    assert app.handle_key("q") is True
    assert quits == [True]


def test_unknown_key_is_not_handled(app):
    assert app.handle_key("x") is False


def test_arrow_keys_move_selection(app):
    _add_task(app, "a")
    _add_task(app, "b")
    assert app.state.selected_task == 1
    app.handle_key("up")
    assert app.state.selected_task == 0
    app.handle_key("down")
    assert app.state.selected_task == 1


def test_tag_flow_attaches_tag(app):
    _add_task(app, "task")
    app.handle_key("t")
    _type(app, "work")
    app.handle_key("enter")
    app.handle_key("esc")
    assert [tag.name for tag in app.state.tags] == ["work"]
    app.handle_key("enter")
    assert app.state.active_component == ActiveComponent.TAG_MANAGER
    app.handle_key(" ")
    assert app.state.tasks[0].tag_ids == [app.state.tags[0].id]
    assert app.state.tag_labels == ["[x] work"]
    app.handle_key("esc")
    assert app.state.active_component == ActiveComponent.TASK_LIST


def test_tag_deletion_returns_to_tag_input(app):
    app.handle_key("t")
    _type(app, "tmp")
    app.handle_key("enter")
    app.handle_key("ctrl d")
    assert app.state.active_component == ActiveComponent.DELETE_CONFIRMATION
    app.handle_key("enter")
    assert app.state.tags == []
    assert app.state.active_component == ActiveComponent.TAG_INPUT


def test_render_main_screen(app):
    text = _screen_text(app)
    assert b"ttodo" in text
    assert b"No tasks yet" in text


def test_render_modal(app):
    app.handle_key("n")
    assert b"New task" in _screen_text(app)


def test_main_help_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    assert "ttodo" in capsys.readouterr().out