# ttodo

A small full-screen to-do list for the terminal. Tasks move through the statuses
*Created → In progress → Completed*, can be marked *Deprecated*, and can carry
any number of tags. A side panel shows counts per status, overall progress and
the details of the selected task; the top line shows the program name and the
local date and time, updated every 30 seconds.

## Installing

```
pip install .
```

## Running

```
ttodo
```

The command takes no options besides `--help`. It runs until you press `q`.
The interface uses 256 colours when the terminal offers them.

## Keys

In the task list:

| Key                 | Action                                   |
|---------------------|------------------------------------------|
| `n`                 | new task                                 |
| `t`                 | open the tag window                      |
| `Enter`             | choose the tags of the selected task     |
| `Space`             | advance the selected task to next status |
| `d`                 | mark the selected task as deprecated     |
| `Ctrl+D`            | delete the selected task (asks first)    |
| `Up/Down`, `k/j`    | select a task                            |
| `PgUp/PgDn`         | move the selection a page                |
| `Home/End`          | select the first or last task            |
| `h`                 | show help                                |
| `q`                 | quit                                     |

In the new-task window, `Enter` adds the typed title (blank titles are ignored)
and `Esc` cancels.

In the tag window, `Tab` (or `Shift+Tab`) switches between the tag list and the
name field, `Enter` in the name field adds the typed tag, `Up/Down` moves
through the list while it has focus, `Ctrl+D` asks to delete the highlighted tag
(which also removes it from every task) and `Esc` closes the window.

In the task-tags window, `Up/Down` moves through the tags, `Space` toggles the
highlighted tag on the selected task, and `Enter` or `Esc` closes it.

In the delete confirmation, `Enter` deletes and `Esc` cancels. The help window
closes with `h` or `Esc`.

Pressing `Space` on a completed or deprecated task puts it back to *Created*.

## Storage

Tasks and tags are saved after every change to a tab-separated file at
`$XDG_DATA_HOME/ttodo/tasks.tsv`, or `$HOME/.local/share/ttodo/tasks.tsv` when
`XDG_DATA_HOME` is unset or empty. Each line is either

```
TAG	<id>	<name>
TASK	<id>	<title>	<status>	<created>	<status changed>	<tag ids>
```

with times in seconds since the epoch (`0` meaning "never changed"), status
numbers `0`–`3` for Created, In progress, Completed and Deprecated (other
numbers read as Created), and tag ids separated by commas. Backslashes, tabs
and newlines in names are escaped as `\\`, `\t` and `\n`. Lines that cannot be
read are skipped; a missing file simply means an empty list.

## Using it from Python

The state and actions behind the interface can be used directly. Every action
saves to the state's `storage_path`, or to the default file above when it is
not set:

```python
from ttodo.state import AppState
from ttodo.actions import add_task, add_tag, change_task_status, toggle_selected_task_tag
from ttodo.storage import load_tasks
from ttodo.task import task_status_name

state = AppState(storage_path="/tmp/ttodo-demo/tasks.tsv")
add_task(state, "Write report")
change_task_status(state)
add_tag(state, "work")
toggle_selected_task_tag(state)
print(task_status_name(state.tasks[0].status))  # In progress

again = AppState()
load_tasks(again, "/tmp/ttodo-demo/tasks.tsv")
print(again.tasks[0].title, again.tasks[0].tag_ids)  # Write report [1]
```

`ttodo.storage` also offers `save_tasks(state, path)`, `storage_path(env)`,
`escape_field`, `unescape_field`, `parse_task` and `parse_tag`.
`ttodo.app.TodoApp(storage_path=...)` builds the full interface on a given
file; its `run()` method starts the interactive loop.

## Tests

```
pip install ".[test]"
pytest
```