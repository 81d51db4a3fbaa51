"""Host services the batch scheduler relies on.

The scheduler never blocks: it asks the host for a repeating timer, tells it
when it must be kept alive and delegates process and directory handling to it.
``EventLoopHost`` provides these on top of an asyncio event loop, whose
callbacks never overlap.
"""

import asyncio
import shutil
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from export_builder.batch.process import ProcessHandle, spawn_process
from export_builder.utils import get_logger

logger = get_logger(__name__)


class CancellableTimer(Protocol):
    """Handle of a scheduled repeating callback."""

    def cancel(self) -> None: ...


class SchedulerHost(Protocol):
    """Services consumed by BatchScheduler."""

    def schedule_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> CancellableTimer: ...

    def set_keepalive(self, keep_alive: bool) -> None: ...

    def remove_directory(self, path: Path) -> None: ...

    def spawn_process(self, command: Sequence[str]) -> ProcessHandle: ...


class RepeatingTimer:
    """Calls ``callback`` every ``interval`` seconds on an event loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callable[[], None],
    ):
        self._loop = loop
        self.interval = interval
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._cancelled = False

    @property
    def active(self) -> bool:
        return self._handle is not None and not self._cancelled

    def start(self) -> "RepeatingTimer":
        """Schedule the first call."""
        if self._handle is None and not self._cancelled:
            self._handle = self._loop.call_later(self.interval, self._fire)
        return self

    def cancel(self) -> None:
        """Stop calling back. Safe to call from the callback itself."""
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        if self._cancelled:
            return
        # Reschedule first so the callback may cancel the timer.
        self._handle = self._loop.call_later(self.interval, self._fire)
        self._callback()


class EventLoopHost:
    """SchedulerHost running on the current asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        """Initialize host.

        Args:
            loop: Event loop to schedule on (default: the running loop at
                scheduling time).
        """
        self._loop = loop
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def keep_alive(self) -> bool:
        """Whether a batch currently needs the loop to keep running."""
        return not self._idle.is_set()

    def schedule_repeating(self, interval: float, callback: Callable[[], None]) -> RepeatingTimer:
        loop = self._loop or asyncio.get_running_loop()
        return RepeatingTimer(loop, interval, callback).start()

    def set_keepalive(self, keep_alive: bool) -> None:
        if keep_alive:
            self._idle.clear()
        else:
            self._idle.set()

    async def wait_until_idle(self) -> None:
        """Wait until no batch keeps the host alive."""
        await self._idle.wait()

    def remove_directory(self, path: Path) -> None:
        """Remove a directory tree.

        Raises:
            OSError: If the directory could not be removed.
        """
        shutil.rmtree(path)
        logger.debug(f"Removed directory: {path}")

    def spawn_process(self, command: Sequence[str]) -> ProcessHandle:
        return spawn_process(command)
