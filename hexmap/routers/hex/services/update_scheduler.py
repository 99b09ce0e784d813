import asyncio
import threading
import time
from typing import Callable

from loguru import logger

from .constants import DEBOUNCE_MS, SCHEDULER_TICK_MS


class UpdateScheduler:
    """
    Debounces viewport notifications into a single recompute trigger.

    Each ``notify`` pushes the pending fire time to ``now + debounce``; the trigger
    fires from ``poll`` once that time is reached with no newer notification.
    ``run`` polls on a fixed tick until ``shutdown``.
    """

    def __init__(
            self,
            callback: Callable[[], None],
            debounce_ms: int = DEBOUNCE_MS,
            clock: Callable[[], float] = time.monotonic,
            tick_ms: int = SCHEDULER_TICK_MS,
    ):
        self.callback = callback
        self.debounce = debounce_ms / 1000
        self.tick = tick_ms / 1000
        self.clock = clock
        self._fire_at: float | None = None
        self._closed = False
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._fire_at is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def notify(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._fire_at = self.clock() + self.debounce

    def poll(self) -> bool:
        """
        Fire the callback if the quiet period has elapsed

        Returns:
            bool: whether the callback was fired
        """
        with self._lock:
            if self._closed or self._fire_at is None or self.clock() < self._fire_at:
                return False
            self._fire_at = None
        self.callback()
        return True

    async def run(self) -> None:
        logger.info(f"Update scheduler started with {self.debounce * 1000:.0f} ms debounce")
        while not self._closed:
            try:
                self.poll()
            except Exception as e:
                logger.error(f"Scheduled update failed: {e}")
            await asyncio.sleep(self.tick)
        logger.info("Update scheduler stopped")

    def shutdown(self) -> None:
        with self._lock:
            self._closed = True
            self._fire_at = None
