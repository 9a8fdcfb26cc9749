"""Stopwatch recording rounds (laps) for benchmarking."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Tuple

from ..clock.sources import Clock, monotonic_clock
from ..clock.timevalue import TimeValue
from ..format.duration import DisplayLike, DisplayMode, Duration
from ..report.schemas import StopwatchSummary
from ..utils.logging import logger


class Stopwatch:
    """Accumulate elapsed time across repeated rounds.

    ``round()`` closes the current interval and opens the next one in the same
    call, so there is no stopped state. Instances are not thread-safe; share
    one between threads only under external locking.
    """

    def __init__(
        self,
        print_mode: DisplayLike = "human",
        format: str = "",
        *,
        clock: Optional[Clock] = None,
    ):
        self.clock: Clock = clock or monotonic_clock
        self._display = DisplayMode.parse(print_mode, format)
        # Kept across mode switches; only custom mode renders through it.
        self._format = format or self._display.format
        self._last_start: TimeValue = self.clock()
        self._total = Duration(TimeValue.zero(), self._display)
        self._rounds: List[Duration] = []

    @property
    def display(self) -> DisplayMode:
        return self._display

    def set_print_mode(self, print_mode: DisplayLike) -> None:
        """Switch the print mode of the total and of every recorded round."""

        self._apply_display(DisplayMode.parse(print_mode, self._format))

    def set_format(self, format: str) -> None:
        """Render through ``format`` placeholders from now on (custom mode)."""

        self._format = format
        self._apply_display(DisplayMode.custom(format))

    def _apply_display(self, display: DisplayMode) -> None:
        self._display = display
        if display.format:
            self._format = display.format
        self._total = self._total.with_display(display)
        self._rounds = [duration.with_display(display) for duration in self._rounds]

    def reset(self) -> None:
        """Clear all rounds and the total, then start timing again from now."""

        self._total = Duration(TimeValue.zero(), self._display)
        self._rounds.clear()
        self.start()
        logger.debug("Stopwatch reset")

    def start(self) -> None:
        """Mark a new reference point without touching the recorded rounds."""

        self._last_start = self.clock()

    def round(self) -> Duration:
        """Record the time since the last start/round and begin the next round."""

        now = self.clock()
        elapsed = Duration(now - self._last_start, self._display)
        self._last_start = now
        self._total = self._total + elapsed
        self._rounds.append(elapsed)
        logger.debug("Round {index}: {elapsed:.9f}s", index=len(self._rounds), elapsed=elapsed.count())
        return elapsed

    def total(self) -> Duration:
        return self._total

    def mean(self) -> Duration:
        """Average round duration.

        Raises:
            ValueError: if no round has been recorded yet.
        """

        if not self._rounds:
            raise ValueError("Cannot compute the mean of a stopwatch with no rounds")
        return self._total / len(self._rounds)

    def last_round(self) -> Duration:
        """The latest round, or the time elapsed so far when there is none."""

        if not self._rounds:
            return Duration(self.clock() - self._last_start, self._display)
        return self._rounds[-1]

    @property
    def rounds(self) -> Tuple[Duration, ...]:
        return tuple(self._rounds)

    def partials(self) -> List[Duration]:
        return list(self._rounds)

    def __len__(self) -> int:
        return len(self._rounds)

    def __iter__(self) -> Iterator[Duration]:
        return iter(list(self._rounds))

    def __getitem__(self, position: int) -> Duration:
        if -len(self._rounds) <= position < len(self._rounds):
            return self._rounds[position]
        raise IndexError(f"Round {position} is out of range ({len(self._rounds)} recorded)")

    @contextmanager
    def measure(self) -> Iterator["Stopwatch"]:
        """Time the enclosed block as one round."""

        self.start()
        try:
            yield self
        finally:
            self.round()

    def summary(self) -> StopwatchSummary:
        return StopwatchSummary(
            rounds=[duration.to_model() for duration in self._rounds],
            total=self._total.to_model(),
            mean=self.mean().to_model() if self._rounds else None,
        )

    def to_string(self) -> str:
        if not self._rounds:
            return self.last_round().to_string()
        return self._total.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Stopwatch(rounds={len(self._rounds)}, total={self._total.count():.9f}s, mode={self._display.kind.value})"


def time(stopwatch: Stopwatch, function: Callable[[], object]) -> Stopwatch:
    """Run ``function`` once and record its duration as the only round."""

    stopwatch.reset()
    function()
    stopwatch.round()
    return stopwatch


def repeat_n_times(stopwatch: Stopwatch, function: Callable[[], object], n: int) -> Stopwatch:
    """Run ``function`` ``n`` times, recording one round per call."""

    if n < 0:
        raise ValueError(f"Repeat count must be non-negative, got {n}")
    stopwatch.reset()
    for _ in range(n):
        function()
        stopwatch.round()
    return stopwatch


__all__ = ["Stopwatch", "time", "repeat_n_times"]
