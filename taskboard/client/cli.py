"""Command loop for the terminal task client.

The manager is constructed once at startup and handed in; commands call
straight into it. List numbers refer to the current filtered view.
"""
from __future__ import annotations

import asyncio
from typing import Callable, List, Optional
from uuid import UUID

from taskboard.client.manager import FILTERS, TaskManager
from taskboard.client.view import ConsoleView

HELP = (
    "Commands:",
    "  add                 Add a task (prompts for title, description, category)",
    "  add <title...>      Shorthand add with inline title",
    "  toggle <n>          Mark task n completed / pending",
    "  edit <n>            Edit title, description and category of task n",
    "  rm <n>              Delete task n (asks for confirmation)",
    "  filter <f>          Show all | completed | pending",
    "  stats               Server-side summary by category",
    "  refresh             Reload the list from the server",
    "  help                Show this help",
    "  exit                Quit",
)


class CLI:
    def __init__(self, manager: TaskManager, view: ConsoleView):
        self.manager = manager
        self.view = view

    async def _ask(self, prompt: str) -> str:
        return await asyncio.to_thread(self.view.input_fn, prompt)

    async def run(self) -> None:
        await self.manager.load()
        try:
            while True:
                line = (await self._ask("\n: ")).strip()
                if not line:
                    continue
                if line.lower() == "exit":
                    break
                await self.handle(line)
        except (KeyboardInterrupt, EOFError):
            pass
        self.view.notify("Goodbye.")

    # -------------------- command dispatch --------------------
    async def handle(self, line: str) -> None:
        tokens = line.split()
        cmd, args = tokens[0].lower(), tokens[1:]
        if cmd == "add":
            await self._cmd_add(args)
        elif cmd in ("toggle", "done"):
            await self._with_task(args, "toggle <n>", self.manager.toggle)
        elif cmd == "edit":
            await self._with_task(args, "edit <n>", self._edit)
        elif cmd in ("rm", "delete"):
            await self._with_task(args, "rm <n>", self.manager.delete)
        elif cmd == "filter":
            self._cmd_filter(args)
        elif cmd == "stats":
            await self.manager.stats()
        elif cmd == "refresh":
            await self.manager.load()
        elif cmd == "help":
            for row in HELP:
                self.view.notify(row)
        else:
            self.view.notify("Unknown command. Type 'help' for instructions.", "error")

    def resolve(self, raw: str) -> Optional[UUID]:
        raw = raw.rstrip(".")
        if not raw.isdigit():
            return None
        visible = self.manager.filtered_tasks()
        idx = int(raw) - 1
        if idx < 0 or idx >= len(visible):
            return None
        return visible[idx].id

    async def _with_task(self, args: List[str], usage: str, action: Callable) -> None:
        if len(args) != 1:
            self.view.notify(f"Usage: {usage}", "error")
            return
        task_id = self.resolve(args[0])
        if task_id is None:
            self.view.notify("Invalid task number.", "error")
            return
        await action(task_id)

    async def _cmd_add(self, args: List[str]) -> None:
        if args:
            await self.manager.add(" ".join(args))
            return
        title = await self._ask("Title: ")
        description = await self._ask("Description: ")
        category = (await self._ask("Category [personal]: ")).strip()
        await self.manager.add(title, description, category or "personal")

    async def _edit(self, task_id: UUID) -> None:
        buf = self.manager.edit(task_id)
        if buf is None:
            return
        # empty input keeps the current value
        buf.title = (await self._ask(f"Title [{buf.title}]: ")) or buf.title
        buf.description = (await self._ask(f"Description [{buf.description}]: ")) or buf.description
        buf.category = (await self._ask(f"Category [{buf.category}]: ")).strip() or buf.category
        if not await self.manager.save_edit():
            self.manager.cancel_edit()

    def _cmd_filter(self, args: List[str]) -> None:
        if len(args) != 1 or args[0].lower() not in FILTERS:
            self.view.notify(f"Usage: filter <{'|'.join(FILTERS)}>", "error")
            return
        self.manager.set_filter(args[0].lower())
