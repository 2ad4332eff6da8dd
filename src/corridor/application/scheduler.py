import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .poller import CorridorPoller

logger = logging.getLogger(__name__)


class PollScheduler:
    """
    Fixed-delay trigger: waits ``initial_delay_s``, then runs a cycle and
    sleeps ``interval_s`` after each one ends.
    """

    def __init__(
        self,
        poller: CorridorPoller,
        interval_s: float,
        initial_delay_s: float = 5.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.poller = poller
        self.interval_s = interval_s
        self.initial_delay_s = initial_delay_s
        self._sleep = sleep
        self._stopped = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    async def run_once(self):
        try:
            return await self.poller.poll_all()
        except Exception as e:
            logger.exception(f"Poll cycle failed: {e}")
            return []

    async def run_forever(self):
        await self._sleep(self.initial_delay_s)
        while not self._stopped.is_set():
            await self.run_once()
            if self._stopped.is_set():
                break
            await self._sleep(self.interval_s)

    def start(self) -> asyncio.Task:
        """Starts the loop as a background task on the running event loop."""
        self._stopped.clear()
        self._task = asyncio.create_task(self.run_forever())
        return self._task

    async def stop(self):
        self._stopped.set()
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
