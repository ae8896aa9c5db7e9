"""Entry point for the terminal task client (`taskboard`)."""
import asyncio

from dotenv import load_dotenv

from taskboard.backend.core.logging_config import setup_logging
from taskboard.client.api import TaskApi
from taskboard.client.cli import CLI
from taskboard.client.config import ClientSettings
from taskboard.client.manager import TaskManager
from taskboard.client.view import ConsoleView


async def _run(settings: ClientSettings) -> None:
    async with TaskApi(settings.api_url, timeout=settings.timeout_sec) as api:
        view = ConsoleView()
        manager = TaskManager(api, view)
        await CLI(manager, view).run()


def main() -> None:
    load_dotenv()
    settings = ClientSettings()
    setup_logging(settings.log_level.upper())
    asyncio.run(_run(settings))


if __name__ == "__main__":
    main()
