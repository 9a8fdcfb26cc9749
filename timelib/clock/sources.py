"""Clock sources returning :class:`TimeValue` readings."""

from __future__ import annotations

import time
from typing import Callable

from .timevalue import TimeValue

Clock = Callable[[], TimeValue]


def monotonic_clock() -> TimeValue:
    """Monotonic clock, unaffected by system time changes."""

    return TimeValue.from_nanoseconds(time.monotonic_ns())


def wall_clock() -> TimeValue:
    """Wall-clock time since the epoch."""

    return TimeValue.from_nanoseconds(time.time_ns())


class ManualClock:
    """A clock that only moves when told to.

    Handy for driving stopwatches and timers deterministically::

        clock = ManualClock()
        timer = Timer(clock=clock)
        clock.advance(0.5)
    """

    def __init__(self, start: object = 0.0):
        self._now = TimeValue.coerce(start)

    def __call__(self) -> TimeValue:
        return self._now

    def advance(self, value: object) -> TimeValue:
        step = TimeValue.coerce(value)
        if step < TimeValue.zero():
            raise ValueError("ManualClock cannot move backwards")
        self._now = self._now + step
        return self._now

    def set(self, value: object) -> None:
        self._now = TimeValue.coerce(value)


__all__ = ["Clock", "ManualClock", "monotonic_clock", "wall_clock"]
