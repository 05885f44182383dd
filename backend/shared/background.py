"""
Fire-and-forget background tasks.

Work that must not hold up a response (sending emails after registration,
for example) is handed to a BackgroundDispatcher. The dispatcher schedules
the coroutine on the running loop, keeps a strong reference until it
finishes, and logs the outcome. Failures never reach the caller.

Usage:
    dispatcher = BackgroundDispatcher()
    dispatcher.spawn(email.send_welcome_email(to, name), "welcome email")

    # On shutdown (or in tests, to observe the side effects)
    await dispatcher.drain()
"""

import asyncio
import logging
from typing import Any, Coroutine, Optional

logger = logging.getLogger(__name__)


class BackgroundDispatcher:
    """Schedules detached tasks and tracks them until completion."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of tasks that have not finished yet."""
        return len(self._tasks)

    def spawn(
        self,
        coro: Coroutine[Any, Any, Any],
        description: str = "background task",
    ) -> Optional[asyncio.Task]:
        """
        Schedule a coroutine without awaiting it.

        Args:
            coro: The coroutine to run.
            description: Short label used in log messages.

        Returns:
            The created task, or None if no event loop is running
            (the coroutine is closed in that case).
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, dropping %s", description)
            coro.close()
            return None

        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._on_done(t, description))
        return task

    def _on_done(self, task: asyncio.Task, description: str) -> None:
        self._tasks.discard(task)

        if task.cancelled():
            logger.warning("%s was cancelled", description)
            return

        exc = task.exception()
        if exc is not None:
            logger.error(
                "%s failed",
                description,
                exc_info=(type(exc), exc, exc.__traceback__),
            )
        elif task.result() is False:
            logger.warning("%s reported a delivery failure", description)

    async def drain(self) -> None:
        """Wait for every outstanding task to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
