"""
Elapsed-time source for a game session.

The stopwatch keeps a reference instant shifted back by any previously
accumulated time, so stop() followed by start() resumes instead of
restarting. Paused time never accumulates.

An optional display tick reports the running time every tick_interval_ms.
It runs as a single asyncio task that is cancelled on stop(), reset() and
close(); without a running event loop no tick is scheduled and the
stopwatch still measures correctly.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

import structlog

from rapidtype.logic.settings import TIMER_INTERVAL_MS

if TYPE_CHECKING:
    from collections.abc import Callable

    from rapidtype.logic.settings import EngineSettings

logger = structlog.get_logger()


def monotonic_ms() -> int:
    """Monotonic clock reading in whole milliseconds."""
    return time.monotonic_ns() // 1_000_000


def epoch_ms() -> int:
    """Wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class Stopwatch:
    """Start/stop/reset/lap stopwatch measuring milliseconds."""

    def __init__(
        self,
        clock: Callable[[], int] | None = None,
        *,
        tick_interval_ms: int = TIMER_INTERVAL_MS,
        on_tick: Callable[[int], None] | None = None,
    ) -> None:
        if tick_interval_ms < 1:
            raise ValueError(f"tick_interval_ms must be >= 1, got {tick_interval_ms}")
        self._clock = clock or monotonic_ms
        self._tick_interval_ms = tick_interval_ms
        self._on_tick = on_tick
        self._start_ref: int | None = None  # clock reading minus time already accumulated
        self._elapsed_ms = 0
        self._tick_task: asyncio.Task[None] | None = None

    @classmethod
    def from_settings(
        cls,
        settings: EngineSettings,
        clock: Callable[[], int] | None = None,
        on_tick: Callable[[int], None] | None = None,
    ) -> Stopwatch:
        """Build a Stopwatch using the configured tick interval."""
        return cls(clock, tick_interval_ms=settings.tick_interval_ms, on_tick=on_tick)

    @property
    def is_running(self) -> bool:
        return self._start_ref is not None

    @property
    def time_ms(self) -> int:
        """Elapsed time, live while running and frozen while stopped."""
        if self._start_ref is None:
            return self._elapsed_ms
        return self._clock() - self._start_ref

    def start(self) -> None:
        """Start or resume. No-op while already running."""
        if self._start_ref is not None:
            return
        self._start_ref = self._clock() - self._elapsed_ms
        self._start_tick()

    def stop(self) -> None:
        """Stop and keep the elapsed time. No-op while already stopped."""
        if self._start_ref is None:
            return
        self._cancel_tick()
        self._elapsed_ms = self._clock() - self._start_ref
        self._start_ref = None

    def reset(self) -> None:
        """Stop and zero the elapsed time."""
        self._cancel_tick()
        self._start_ref = None
        self._elapsed_ms = 0

    def lap(self) -> int:
        """Return the elapsed time without stopping."""
        return self.time_ms

    def close(self) -> None:
        """Release the display tick. Elapsed time is kept."""
        self._cancel_tick()

    def _start_tick(self) -> None:
        if self._on_tick is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("no running event loop, stopwatch tick disabled")
            return
        self._cancel_tick()
        self._tick_task = loop.create_task(self._run_tick(self._on_tick))

    def _cancel_tick(self) -> None:
        if self._tick_task is not None and not self._tick_task.done():
            self._tick_task.cancel()
        self._tick_task = None

    async def _run_tick(self, on_tick: Callable[[int], None]) -> None:
        interval = self._tick_interval_ms / 1000
        try:
            while True:
                await asyncio.sleep(interval)
                on_tick(self.time_ms)
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("stopwatch tick callback failed")
