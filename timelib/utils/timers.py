"""Named stopwatches for profiling code blocks."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from ..bench.stopwatch import Stopwatch
from ..clock.sources import Clock
from ..format.duration import DisplayLike, DisplayMode
from ..report.schemas import StopwatchSummary
from .logging import logger


@dataclass
class TimerPool:
    """Manage a collection of stopwatches identified by names."""

    display: DisplayLike = "human"
    clock: Optional[Clock] = None
    stopwatches: Dict[str, Stopwatch] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.display = DisplayMode.parse(self.display)

    @contextmanager
    def track(self, name: str) -> Iterator[Stopwatch]:
        """Record the enclosed block as one round of the stopwatch ``name``."""

        stopwatch = self.stopwatches.get(name)
        if stopwatch is None:
            stopwatch = Stopwatch(self.display, clock=self.clock)
            self.stopwatches[name] = stopwatch
        with stopwatch.measure():
            yield stopwatch

    def get(self, name: str) -> Stopwatch:
        try:
            return self.stopwatches[name]
        except KeyError:
            raise KeyError(f"No stopwatch named {name!r}") from None

    def names(self) -> List[str]:
        return list(self.stopwatches)

    def summary(self) -> Dict[str, StopwatchSummary]:
        return {name: stopwatch.summary() for name, stopwatch in self.stopwatches.items()}

    def log_summary(self, level: str = "INFO") -> None:
        for name, stopwatch in self.stopwatches.items():
            if not len(stopwatch):
                continue
            logger.log(
                level,
                "{name}: total={total} mean={mean} rounds={rounds}",
                name=name,
                total=stopwatch.total().to_string().strip(),
                mean=stopwatch.mean().to_string().strip(),
                rounds=len(stopwatch),
            )

    def clear(self) -> None:
        self.stopwatches.clear()


__all__ = ["TimerPool"]
