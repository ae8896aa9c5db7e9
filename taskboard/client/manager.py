"""Client-side task state and the actions the UI binds to.

Every mutation is request-then-full-reload: the local list is never patched
optimistically, so what is rendered after an action is what the API returned.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Protocol
from uuid import UUID

from taskboard.backend.schemas.task import TaskRead, TaskStats, percentage_of
from taskboard.client.api import TaskApi, TaskApiError

FILTERS = ("all", "completed", "pending")
DEFAULT_CATEGORY = "personal"
EXIT_ANIMATION_SEC = 0.3


@dataclass
class EditBuffer:
    title: str
    description: str
    category: str


@dataclass(frozen=True)
class Progress:
    total: int
    completed: int
    percentage: int
    tier: str


class TaskView(Protocol):
    def render(self, tasks: List[TaskRead], current_filter: str) -> None: ...
    def update_progress(self, progress: Progress) -> None: ...
    def show_stats(self, stats: TaskStats) -> None: ...
    def notify(self, message: str, level: str = "info") -> None: ...
    def confirm(self, prompt: str) -> bool: ...
    def start_exit(self, task_id: UUID) -> None: ...
    def reverse_exit(self, task_id: UUID) -> None: ...
    def open_editor(self, buffer: EditBuffer) -> None: ...
    def close_editor(self) -> None: ...


def progress_tier(percentage: int) -> str:
    if percentage == 100:
        return "success"
    if percentage >= 50:
        return "warning"
    return "primary"


def filter_tasks(tasks: List[TaskRead], current_filter: str) -> List[TaskRead]:
    if current_filter == "completed":
        return [t for t in tasks if t.completed]
    if current_filter == "pending":
        return [t for t in tasks if not t.completed]
    return list(tasks)


class TaskManager:
    def __init__(
        self,
        api: TaskApi,
        view: TaskView,
        *,
        exit_animation_sec: float = EXIT_ANIMATION_SEC,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.api = api
        self.view = view
        self.exit_animation_sec = exit_animation_sec
        self._sleep = sleep

        self.tasks: List[TaskRead] = []
        self.current_filter: str = "all"
        self.editing_task_id: Optional[UUID] = None
        self.edit_buffer: Optional[EditBuffer] = None

    # -------------------- queries --------------------
    def find(self, task_id: UUID) -> Optional[TaskRead]:
        return next((t for t in self.tasks if t.id == task_id), None)

    def filtered_tasks(self) -> List[TaskRead]:
        return filter_tasks(self.tasks, self.current_filter)

    # -------------------- actions --------------------
    async def load(self) -> bool:
        """Replace the local list with the server's; keep the old one on failure."""
        try:
            self.tasks = await self.api.list_tasks()
        except TaskApiError as exc:
            self.view.notify(f"Failed to load tasks: {exc.message}", "error")
            return False
        self.render()
        self.update_progress()
        return True

    async def add(self, title: str, description: str = "", category: str = DEFAULT_CATEGORY) -> bool:
        title = (title or "").strip()
        if not title:
            self.view.notify("Task title is required", "error")
            return False

        try:
            await self.api.create_task(title, (description or "").strip(), category or DEFAULT_CATEGORY)
        except TaskApiError as exc:
            ok, message = False, f"Failed to add task: {exc.message}"
        else:
            ok, message = True, "Task added"
        await self.load()
        self.view.notify(message, "success" if ok else "error")
        return ok

    async def toggle(self, task_id: UUID) -> bool:
        task = self.find(task_id)
        if task is None:
            self.view.notify("Task not found", "error")
            return False
        try:
            await self.api.update_task(task_id, completed=not task.completed)
        except TaskApiError as exc:
            self.view.notify(f"Failed to update task: {exc.message}", "error")
            return False
        await self.load()
        return True

    def edit(self, task_id: UUID) -> Optional[EditBuffer]:
        task = self.find(task_id)
        if task is None:
            self.view.notify("Task not found", "error")
            return None
        self.editing_task_id = task_id
        self.edit_buffer = EditBuffer(task.title, task.description, task.category)
        self.view.open_editor(self.edit_buffer)
        return self.edit_buffer

    async def save_edit(self) -> bool:
        if self.editing_task_id is None or self.edit_buffer is None:
            return False
        buf = self.edit_buffer
        title = buf.title.strip()
        if not title:
            self.view.notify("Task title is required", "error")
            return False
        try:
            await self.api.update_task(
                self.editing_task_id,
                title=title,
                description=buf.description.strip(),
                category=buf.category,
            )
        except TaskApiError as exc:
            self.view.notify(f"Failed to save task: {exc.message}", "error")
            return False
        await self.load()
        self.cancel_edit()
        self.view.notify("Task updated", "success")
        return True

    def cancel_edit(self) -> None:
        self.editing_task_id = None
        self.edit_buffer = None
        self.view.close_editor()

    async def delete(self, task_id: UUID) -> bool:
        # the view blocks on terminal input
        confirmed = await asyncio.to_thread(self.view.confirm, "Are you sure you want to delete this task?")
        if not confirmed:
            return False

        loop = asyncio.get_running_loop()
        started = loop.time()
        # the view animates while the request is in flight
        self.view.start_exit(task_id)
        try:
            await self.api.delete_task(task_id)
        except TaskApiError as exc:
            self.view.reverse_exit(task_id)
            self.view.notify(f"Failed to delete task: {exc.message}", "error")
            return False

        remaining = self.exit_animation_sec - (loop.time() - started)
        if remaining > 0:
            await self._sleep(remaining)
        await self.load()
        self.view.notify("Task deleted", "success")
        return True

    def set_filter(self, current_filter: str) -> None:
        if current_filter not in FILTERS:
            raise ValueError(f"filter must be one of {', '.join(FILTERS)}")
        self.current_filter = current_filter
        self.render()

    async def stats(self) -> Optional[TaskStats]:
        try:
            stats = await self.api.stats()
        except TaskApiError as exc:
            self.view.notify(f"Failed to load stats: {exc.message}", "error")
            return None
        self.view.show_stats(stats)
        return stats

    # -------------------- rendering --------------------
    def render(self) -> None:
        self.view.render(self.filtered_tasks(), self.current_filter)

    def update_progress(self) -> Progress:
        # over the full list, not the filtered view
        total = len(self.tasks)
        completed = sum(1 for t in self.tasks if t.completed)
        pct = percentage_of(completed, total)
        progress = Progress(total=total, completed=completed, percentage=pct, tier=progress_tier(pct))
        self.view.update_progress(progress)
        return progress
