"""
RefreshTask: a cancellable repeating asyncio task.

The dashboard re-fetches quotes on a timer. The timer belongs to whoever
displays the quotes and must stop with it, so it is an explicit task object
rather than a free-running loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger("zoff.display")

DEFAULT_REFRESH_INTERVAL = 15.0


class RefreshTask:
    """
    Run `callback` now and then every `interval` seconds until stopped.

    A failing tick is logged and the loop keeps going.

    Usage:
        async with RefreshTask(board.refresh, interval=15):
            await asyncio.sleep(60)
    """

    def __init__(
        self,
        callback: Callable[[], Awaitable[Any]],
        interval: float = DEFAULT_REFRESH_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._callback = callback
        self._interval = interval
        self._task: asyncio.Task | None = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            raise RuntimeError("refresh task already running")
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _run(self) -> None:
        while True:
            try:
                await self._callback()
            except Exception as e:
                logger.warning(f"Refresh failed: {e!r}")
            self.ticks += 1
            await asyncio.sleep(self._interval)

    async def __aenter__(self) -> RefreshTask:
        self.start()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.stop()
