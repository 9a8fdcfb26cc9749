"""Pausable timer with timeout detection."""

from __future__ import annotations

from typing import Optional

from ..clock.sources import Clock, monotonic_clock
from ..clock.timevalue import TimeValue
from ..format.duration import DisplayLike, DisplayMode, Duration
from ..report.schemas import TimerSummary
from ..utils.logging import logger


class Timer:
    """Measure elapsed time since the last reset, excluding paused intervals.

    Elapsed time is ``accumulated + (now - reference)`` while running and
    ``accumulated`` while paused. ``start()`` resumes after ``pause()`` and
    keeps the accumulated time; only ``reset()`` (and ``stop()``) clear it.
    A zero timeout disables :meth:`has_timeout`.
    """

    def __init__(
        self,
        print_mode: DisplayLike = "human",
        format: str = "",
        *,
        timeout: object = None,
        clock: Optional[Clock] = None,
    ):
        self.clock: Clock = clock or monotonic_clock
        self._display = DisplayMode.parse(print_mode, format)
        # Kept across mode switches; only custom mode renders through it.
        self._format = format or self._display.format
        self._reference: TimeValue = self.clock()
        self._accumulated = TimeValue.zero()
        self._paused = False
        self._timeout = TimeValue.zero()
        if timeout is not None:
            self.set_timeout(timeout)

    @property
    def display(self) -> DisplayMode:
        return self._display

    @property
    def is_paused(self) -> bool:
        return self._paused

    def set_print_mode(self, print_mode: DisplayLike) -> None:
        self._display = DisplayMode.parse(print_mode, self._format)
        if self._display.format:
            self._format = self._display.format

    def set_format(self, format: str) -> None:
        self._format = format
        self._display = DisplayMode.custom(format)

    def set_timeout(self, value: object) -> None:
        """Set the timeout: float seconds, int nanoseconds, a Duration or a TimeValue."""

        timeout = TimeValue.coerce(value)
        if timeout < TimeValue.zero():
            raise ValueError(f"Timeout must be non-negative, got {timeout.count()}s")
        self._timeout = timeout

    def get_timeout(self) -> Duration:
        return Duration(self._timeout, self._display)

    def reset(self) -> None:
        """Clear the accumulated time and start measuring from now."""

        self._accumulated = TimeValue.zero()
        self._reference = self.clock()
        self._paused = False

    def start(self) -> None:
        """Resume after a pause, or re-mark the reference point while running."""

        self._reference = self.clock()
        self._paused = False

    def pause(self) -> None:
        """Fold the running interval into the accumulated time and freeze."""

        if self._paused:
            return
        self._accumulated = self._accumulated + (self.clock() - self._reference)
        self._paused = True

    def _elapsed(self) -> TimeValue:
        if self._paused:
            return self._accumulated
        return self._accumulated + (self.clock() - self._reference)

    def elapsed(self) -> Duration:
        return Duration(self._elapsed(), self._display)

    def stop(self) -> Duration:
        """Return the elapsed time, then reset."""

        elapsed = self.elapsed()
        self.reset()
        logger.debug("Timer stopped after {elapsed:.9f}s", elapsed=elapsed.count())
        return elapsed

    def remaining(self) -> Duration:
        """Time left before the timeout, never negative."""

        left = self._timeout - self._elapsed()
        return Duration(max(left, TimeValue.zero()), self._display)

    def has_timeout(self) -> bool:
        if not self._timeout:
            return False
        return self._elapsed() > self._timeout

    def summary(self) -> TimerSummary:
        elapsed = self._elapsed()
        remaining = max(self._timeout - elapsed, TimeValue.zero())
        return TimerSummary(
            elapsed=Duration(elapsed, self._display).to_model(),
            timeout=self.get_timeout().to_model() if self._timeout else None,
            remaining=Duration(remaining, self._display).to_model(),
            has_timeout=bool(self._timeout) and elapsed > self._timeout,
            paused=self._paused,
        )

    def to_string(self) -> str:
        return self.elapsed().to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        state = "paused" if self._paused else "running"
        return f"Timer({state}, elapsed={self._elapsed().count():.9f}s, timeout={self._timeout.count():g}s)"


__all__ = ["Timer"]
