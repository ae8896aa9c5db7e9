import asyncio
import io
from datetime import date, datetime
from uuid import uuid4

from taskboard.backend.schemas.task import TaskRead
from taskboard.client.cli import CLI
from taskboard.client.manager import Progress, TaskManager
from taskboard.client.view import ConsoleView


def _task(title, completed=False, **extra):
    return TaskRead(id=uuid4(), title=title, completed=completed, created_at=datetime(2026, 3, 4), **extra)


def _view(answers=()):
    replies = iter(answers)
    out = io.StringIO()
    return ConsoleView(out=out, input_fn=lambda prompt: next(replies), use_color=False), out


class RecordingManager(TaskManager):
    """Real manager state, with the network-facing actions recorded instead."""

    def __init__(self, view, tasks):
        super().__init__(api=None, view=view)
        self.tasks = tasks
        self.actions = []

    async def toggle(self, task_id):
        self.actions.append(("toggle", task_id))
        return True

    async def delete(self, task_id):
        self.actions.append(("delete", task_id))
        return True

    async def add(self, title, description="", category="personal"):
        self.actions.append(("add", title, description, category))
        return True

    async def save_edit(self):
        self.actions.append(("save_edit", self.edit_buffer))
        return True


def test_task_lines_show_empty_state():
    view, _ = _view()

    assert view.task_lines([]) == ["No tasks found", "Add a new task to get started!"]


def test_task_lines_number_the_filtered_view():
    view, _ = _view()
    tasks = [
        _task("Buy milk", description="2%", due_date=date(2026, 3, 9)),
        _task("Ship it", completed=True, category="work", priority="high"),
    ]

    lines = view.task_lines(tasks)

    assert lines[0] == " 1. [ ] Buy milk"
    assert lines[1].strip() == "2%"
    assert lines[2].strip() == "personal | medium | 2026-03-04 | due 2026-03-09"
    assert lines[3] == " 2. [x] Ship it"
    assert lines[4].strip() == "work | high | 2026-03-04"


def test_progress_lines():
    view, _ = _view()

    lines = view.progress_lines(Progress(total=4, completed=2, percentage=50, tier="warning"))

    assert lines == [
        "Total: 4  Completed: 2",
        "[##########----------] 50% Complete",
    ]


def test_confirm_accepts_yes_only():
    yes, _ = _view(["y"])
    no, _ = _view([""])

    assert yes.confirm("Delete?") is True
    assert no.confirm("Delete?") is False


def test_numbers_resolve_against_filtered_view():
    view, _ = _view()
    done, open_ = _task("done", completed=True), _task("open")
    manager = RecordingManager(view, [done, open_])
    cli = CLI(manager, view)

    manager.set_filter("pending")
    asyncio.run(cli.handle("toggle 1"))
    asyncio.run(cli.handle("rm 1"))

    assert manager.actions == [("toggle", open_.id), ("delete", open_.id)]


def test_invalid_number_is_reported():
    view, out = _view()
    manager = RecordingManager(view, [_task("only")])
    cli = CLI(manager, view)

    asyncio.run(cli.handle("toggle 5"))

    assert manager.actions == []
    assert "Invalid task number." in out.getvalue()


def test_inline_add():
    view, _ = _view()
    manager = RecordingManager(view, [])

    asyncio.run(CLI(manager, view).handle("add write the report"))

    assert manager.actions == [("add", "write the report", "", "personal")]


def test_prompted_add_defaults_category():
    view, _ = _view(["Title", "Desc", ""])
    manager = RecordingManager(view, [])

    asyncio.run(CLI(manager, view).handle("add"))

    assert manager.actions == [("add", "Title", "Desc", "personal")]


def test_edit_keeps_values_left_blank():
    view, _ = _view(["New title", "", "work"])
    task = _task("Old title", description="keep me")
    manager = RecordingManager(view, [task])

    asyncio.run(CLI(manager, view).handle("edit 1"))

    (name, buf), = manager.actions
    assert name == "save_edit"
    assert (buf.title, buf.description, buf.category) == ("New title", "keep me", "work")


def test_filter_command_and_unknown_command():
    view, out = _view()
    manager = RecordingManager(view, [_task("a", completed=True), _task("b")])
    cli = CLI(manager, view)

    asyncio.run(cli.handle("filter completed"))
    asyncio.run(cli.handle("filter archived"))
    asyncio.run(cli.handle("frobnicate"))

    assert manager.current_filter == "completed"
    text = out.getvalue()
    assert "Tasks (completed)" in text
    assert "Usage: filter <all|completed|pending>" in text
    assert "Unknown command" in text
