"""Tick schedulers for the playback driver.

The player never talks to a timer API directly; it asks a scheduler
to run a callback on the next frame and cancels that request when
playback stops or pauses.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional
import asyncio
import itertools
import logging
import threading
import time

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Scheduler(ABC):
    """Abstract frame scheduler."""

    @abstractmethod
    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    @abstractmethod
    def schedule(self, callback: Callback) -> Any:
        """Run ``callback`` on the next frame; returns a cancellation handle."""
        ...

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Cancel a scheduled callback; unknown or fired handles are ignored."""
        ...

    @abstractmethod
    def wake(self, callback: Callback) -> None:
        """Run ``callback`` soon on the scheduler's thread (thread-safe)."""
        ...


class AsyncioScheduler(Scheduler):
    """Schedules ticks on an asyncio event loop at a fixed frame rate.

    Args:
        fps: Target frames per second
        loop: Event loop to use; the running loop when omitted
    """

    def __init__(self, fps: int = 60, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self.fps = max(1, fps)
        self.frame_time = 1.0 / self.fps
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return time.monotonic() * 1000.0

    def schedule(self, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(self.frame_time, callback)

    def cancel(self, handle: Any) -> None:
        if handle is not None:
            handle.cancel()

    def wake(self, callback: Callback) -> None:
        self.loop.call_soon_threadsafe(callback)


class ManualScheduler(Scheduler):
    """Deterministic scheduler driven by a virtual clock.

    Nothing fires until :meth:`advance` is called, which moves the clock
    forward and runs every callback pending at that moment. Used for
    tests and headless frame stepping.

    Args:
        frame_ms: Default clock step for :meth:`advance`
    """

    def __init__(self, frame_ms: float = 1000.0 / 60) -> None:
        self.frame_ms = frame_ms
        self.now_ms = 0.0
        self._pending: Dict[int, Callback] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def now(self) -> float:
        return self.now_ms

    def schedule(self, callback: Callback) -> int:
        with self._lock:
            handle = next(self._ids)
            self._pending[handle] = callback
        return handle

    def cancel(self, handle: Any) -> None:
        with self._lock:
            self._pending.pop(handle, None)

    def wake(self, callback: Callback) -> None:
        self.schedule(callback)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def advance(self, ms: Optional[float] = None) -> int:
        """Move the clock forward and fire the callbacks pending now.

        Callbacks scheduled while firing wait for the next advance.

        Returns:
            Number of callbacks fired
        """
        self.now_ms += self.frame_ms if ms is None else ms
        with self._lock:
            due = list(self._pending.values())
            self._pending.clear()
        for callback in due:
            callback()
        return len(due)

    def run(self, max_frames: int = 10_000) -> int:
        """Advance frame by frame until nothing is pending.

        Returns:
            Number of frames advanced
        """
        frames = 0
        while self._pending and frames < max_frames:
            self.advance()
            frames += 1
        if self._pending:
            logger.warning(f"ManualScheduler stopped after {max_frames} frames with callbacks pending")
        return frames
