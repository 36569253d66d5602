"""
Refresh scheduling and input debouncing.

PollingScheduler drives the periodic chart refresh. Debouncer delays typed
input until the user stops typing. Both run on the asyncio event loop and
must be used from within it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, Generic, TypeVar

from sdswatch.utils.validators import parse_positive_number

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SchedulerState(Enum):
    """Polling scheduler state."""

    IDLE = "idle"
    ACTIVE = "active"


class PollingScheduler:
    """Repeating refresh timer.

    A valid configure() call restarts the timer: the previous timer is
    cancelled, one tick fires right away, and further ticks follow every
    period. Invalid periods leave the current schedule running.
    """

    def __init__(self, on_tick: Callable[[], None]) -> None:
        """Initialize the scheduler in the idle state.

        Args:
            on_tick: Called on every tick. Must not block.
        """
        self._on_tick = on_tick
        self._task: asyncio.Task[None] | None = None
        self._period_ms: float | None = None
        self.tick_count = 0

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.ACTIVE if self._task is not None else SchedulerState.IDLE

    @property
    def period_ms(self) -> float | None:
        """Period of the active schedule, None when idle."""
        return self._period_ms

    def configure(self, period_ms: Any) -> bool:
        """Start ticking every period_ms milliseconds.

        Args:
            period_ms: Refresh period. Non-numeric, non-finite or non-positive
                values are ignored.

        Returns:
            True if the schedule was (re)started
        """
        period = parse_positive_number(period_ms)
        if period is None:
            logger.debug("Ignoring invalid refresh period: %r", period_ms)
            return False

        loop = asyncio.get_running_loop()
        self._cancel()
        self._period_ms = period
        self._task = loop.create_task(self._run(period / 1000))
        logger.debug("Refresh scheduled every %sms", period)

        self._fire()
        return True

    def stop(self) -> None:
        """Cancel the active schedule, if any."""
        if self._task is not None:
            logger.debug("Refresh stopped")
        self._cancel()
        self._period_ms = None

    def _cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self, period_s: float) -> None:
        while True:
            await asyncio.sleep(period_s)
            self._fire()

    def _fire(self) -> None:
        self.tick_count += 1
        try:
            self._on_tick()
        except Exception:
            logger.exception("Refresh tick handler failed")


class Debouncer(Generic[T]):
    """Delay a callback until pushes stop for a quiet period.

    Only the most recent pushed value is delivered.
    """

    def __init__(self, delay_ms: float, callback: Callable[[T], None]) -> None:
        """Initialize the debouncer.

        Args:
            delay_ms: Quiet period in milliseconds. 0 delivers on the next loop iteration.
            callback: Receives the latest value once the quiet period ends.
        """
        self.delay_ms = delay_ms
        self._callback = callback
        self._handle: asyncio.TimerHandle | asyncio.Handle | None = None

    @property
    def pending(self) -> bool:
        """Whether a delivery is waiting for the quiet period to end."""
        return self._handle is not None

    def push(self, value: T) -> None:
        """Restart the quiet period with a new value."""
        loop = asyncio.get_running_loop()
        self.cancel()
        if self.delay_ms <= 0:
            self._handle = loop.call_soon(self._deliver, value)
        else:
            self._handle = loop.call_later(self.delay_ms / 1000, self._deliver, value)

    def cancel(self) -> None:
        """Drop the pending delivery, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _deliver(self, value: T) -> None:
        self._handle = None
        self._callback(value)
