"""
Repeating timers driving the playback sampling loop
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SamplingHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass


class SamplingScheduler(ABC):
    @abstractmethod
    def start(self, interval: float, callback: Callable[[], None]) -> SamplingHandle:
        """Call callback every interval seconds until the handle is cancelled"""
        pass


class AsyncioSamplingHandle(SamplingHandle):
    def __init__(self, task: asyncio.Task):
        self.task = task
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        if not self.task.done():
            self.task.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled or self.task.done()


class AsyncioSamplingScheduler(SamplingScheduler):
    """Runs the sampling loop as a task on the running event loop"""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop

    def start(self, interval: float, callback: Callable[[], None]) -> SamplingHandle:
        loop = self.loop or asyncio.get_running_loop()
        task = loop.create_task(self._sample_loop(interval, callback))
        return AsyncioSamplingHandle(task)

    async def _sample_loop(self, interval: float, callback: Callable[[], None]):
        while True:
            await asyncio.sleep(interval)
            try:
                callback()
            except Exception as e:
                logger.error(f"Sampling callback failed: {e}")
