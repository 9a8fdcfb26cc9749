"""Stopwatch, pausable timer and duration formatting utilities."""

from importlib.metadata import version

from loguru import logger

from .bench.stopwatch import Stopwatch, repeat_n_times, time
from .bench.timer import Timer
from .clock.sources import ManualClock, monotonic_clock, wall_clock
from .clock.timevalue import TimeValue
from .format.duration import DisplayMode, Duration, Formattable, PrintMode

logger.disable("timelib")

__all__ = [
    "__version__",
    "DisplayMode",
    "Duration",
    "Formattable",
    "ManualClock",
    "PrintMode",
    "Stopwatch",
    "TimeValue",
    "Timer",
    "monotonic_clock",
    "repeat_n_times",
    "time",
    "wall_clock",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return version("timelib")
        except Exception:  # pragma: no cover - fallback when pkg metadata missing
            return "1.1.0"
    raise AttributeError(name)
