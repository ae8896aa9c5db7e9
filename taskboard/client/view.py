"""Terminal rendering for the task client.

- Colors are disabled when stdout is not a TTY unless FORCE_COLOR=1.
- NO_COLOR disables them completely.
- Numbers in the list index the *filtered* view; the CLI resolves them.
"""
from __future__ import annotations

import os
import sys
from typing import Callable, List, Optional, TextIO
from uuid import UUID

from taskboard.backend.schemas.task import TaskRead, TaskStats
from taskboard.client.manager import EditBuffer, Progress

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None


def _code(part: str) -> str:
    return f"\033[{part}m"


RESET = _code("0")
BOLD = _code("1")
DIM = _code("2")
STRIKE = _code("9")
GREEN = _code("32")
YELLOW = _code("33")
BLUE = _code("34")
RED = _code("31")
CYAN = _code("36")

TIER_COLOR = {"success": GREEN, "warning": YELLOW, "primary": BLUE}
LEVEL_COLOR = {"success": GREEN, "error": RED, "info": CYAN}

BAR_WIDTH = 20
EMPTY_STATE = ("No tasks found", "Add a new task to get started!")


def _colors_enabled(stream: TextIO) -> bool:
    if _NO_COLOR:
        return False
    return _FORCE or (hasattr(stream, "isatty") and stream.isatty())


class ConsoleView:
    def __init__(
        self,
        out: TextIO = sys.stdout,
        input_fn: Callable[[str], str] = input,
        use_color: Optional[bool] = None,
    ):
        self.out = out
        self.input_fn = input_fn
        self.use_color = _colors_enabled(out) if use_color is None else use_color

    def color(self, text: str, *styles: str) -> str:
        if not self.use_color:
            return text
        return "".join(styles) + text + RESET

    def _print(self, line: str = "") -> None:
        print(line, file=self.out)

    # -------------------- pure formatting --------------------
    def task_lines(self, tasks: List[TaskRead]) -> List[str]:
        if not tasks:
            title, hint = EMPTY_STATE
            return [self.color(title, BOLD), self.color(hint, DIM)]

        lines: List[str] = []
        for n, task in enumerate(tasks, start=1):
            box = "[x]" if task.completed else "[ ]"
            title = self.color(task.title, DIM, STRIKE) if task.completed else task.title
            lines.append(f"{self.color(f'{n:>2}.', BOLD)} {box} {title}")
            if task.description:
                lines.append(f"        {self.color(task.description, DIM)}")
            meta = [task.category, task.priority, task.created_at.strftime("%Y-%m-%d")]
            if task.due_date:
                meta.append(f"due {task.due_date.isoformat()}")
            lines.append(f"        {self.color(' | '.join(meta), CYAN)}")
        return lines

    def progress_lines(self, progress: Progress) -> List[str]:
        filled = progress.percentage * BAR_WIDTH // 100
        bar = "#" * filled + "-" * (BAR_WIDTH - filled)
        tier = TIER_COLOR.get(progress.tier, "")
        return [
            f"Total: {progress.total}  Completed: {progress.completed}",
            f"[{self.color(bar, tier)}] {progress.percentage}% Complete",
        ]

    # -------------------- TaskView --------------------
    def render(self, tasks: List[TaskRead], current_filter: str) -> None:
        self._print()
        self._print(self.color(f"Tasks ({current_filter})", BOLD))
        for line in self.task_lines(tasks):
            self._print(line)

    def update_progress(self, progress: Progress) -> None:
        for line in self.progress_lines(progress):
            self._print(line)

    def show_stats(self, stats: TaskStats) -> None:
        self._print(self.color("Summary", BOLD))
        self._print(f"  total {stats.total}, completed {stats.completed}, pending {stats.pending} ({stats.percentage}%)")
        for category, n in sorted(stats.by_category.items()):
            self._print(f"  {category}: {n}")

    def notify(self, message: str, level: str = "info") -> None:
        self._print(self.color(message, LEVEL_COLOR.get(level, "")))

    def confirm(self, prompt: str) -> bool:
        answer = self.input_fn(f"{prompt} [y/N] ").strip().lower()
        return answer in {"y", "yes"}

    def start_exit(self, task_id: UUID) -> None:
        self._print(self.color("Deleting...", DIM))

    def reverse_exit(self, task_id: UUID) -> None:
        self._print(self.color("Delete reverted.", DIM))

    def open_editor(self, buffer: EditBuffer) -> None:
        self._print(self.color(f"Editing: {buffer.title}", BOLD))

    def close_editor(self) -> None:
        pass
