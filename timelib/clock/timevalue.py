"""Normalized (seconds, nanoseconds) value type."""

from __future__ import annotations

import math
import numbers
import time
from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING, Optional, Tuple, Union

if TYPE_CHECKING:  # pragma: no cover
    from .sources import Clock

NS_PER_MICROSECOND = 1_000
NS_PER_MILLISECOND = 1_000_000
NS_PER_SECOND = 1_000_000_000
NS_PER_MINUTE = 60 * NS_PER_SECOND
NS_PER_HOUR = 60 * NS_PER_MINUTE


def truncate_div(value: int, unit: int) -> int:
    """Integer division rounding toward zero."""

    quotient = abs(value) // unit
    return -quotient if value < 0 else quotient


def split(value: int, unit: int) -> Tuple[int, int]:
    """Return ``(quotient, remainder)`` with the remainder taking the sign of ``value``."""

    quotient = truncate_div(value, unit)
    return quotient, value - quotient * unit


def _is_scalar(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass(frozen=True, order=True)
class TimeValue:
    """A duration or time point with nanosecond resolution.

    ``nanoseconds`` always lies in ``[0, 1e9)``; negative values carry their
    sign in ``seconds`` (``-0.25s`` is stored as ``(-1, 750_000_000)``).
    """

    seconds: int = 0
    nanoseconds: int = 0

    def __post_init__(self) -> None:
        for name in ("seconds", "nanoseconds"):
            if not isinstance(getattr(self, name), numbers.Integral):
                raise TypeError(
                    f"TimeValue {name} must be an integer, got {getattr(self, name)!r}; "
                    "use TimeValue.from_seconds for fractional seconds"
                )
        carry, nanoseconds = divmod(int(self.nanoseconds), NS_PER_SECOND)
        object.__setattr__(self, "seconds", int(self.seconds) + carry)
        object.__setattr__(self, "nanoseconds", nanoseconds)

    @classmethod
    def normalize(cls, seconds: int, nanoseconds: int) -> "TimeValue":
        return cls(seconds, nanoseconds)

    def normalized(self) -> "TimeValue":
        return TimeValue.normalize(self.seconds, self.nanoseconds)

    @classmethod
    def zero(cls) -> "TimeValue":
        return cls(0, 0)

    @classmethod
    def now(cls, clock: Optional["Clock"] = None) -> "TimeValue":
        """Read the current time from ``clock`` or the monotonic system clock."""

        if clock is not None:
            return clock()
        return cls.from_nanoseconds(time.monotonic_ns())

    @classmethod
    def from_nanoseconds(cls, value: int) -> "TimeValue":
        return cls(0, int(value))

    @classmethod
    def from_seconds(cls, value: float) -> "TimeValue":
        if not math.isfinite(value):
            raise ValueError(f"Cannot build a time value from {value!r}")
        whole = math.floor(value)
        return cls(int(whole), round((value - whole) * NS_PER_SECOND))

    @classmethod
    def coerce(cls, value: object) -> "TimeValue":
        """Convert ``value`` into a TimeValue.

        Floats are read as seconds and integers as nanoseconds. Anything
        exposing a TimeValue through ``.value`` (a Duration) is unwrapped.
        """

        if isinstance(value, TimeValue):
            return value
        inner = getattr(value, "value", None)
        if isinstance(inner, TimeValue):
            return inner
        if isinstance(value, bool):
            raise TypeError("Booleans are not valid time values")
        if isinstance(value, numbers.Integral):
            return cls.from_nanoseconds(int(value))
        if isinstance(value, numbers.Real):
            return cls.from_seconds(float(value))
        raise TypeError(f"Cannot convert {type(value).__name__} to TimeValue")

    # -- conversions -----------------------------------------------------

    def to_nanoseconds(self) -> int:
        return self.seconds * NS_PER_SECOND + self.nanoseconds

    def to_microseconds(self) -> int:
        return truncate_div(self.to_nanoseconds(), NS_PER_MICROSECOND)

    def to_milliseconds(self) -> int:
        return truncate_div(self.to_nanoseconds(), NS_PER_MILLISECOND)

    def to_seconds(self) -> int:
        return truncate_div(self.to_nanoseconds(), NS_PER_SECOND)

    def to_minutes(self) -> int:
        return truncate_div(self.to_nanoseconds(), NS_PER_MINUTE)

    def to_hours(self) -> int:
        return truncate_div(self.to_nanoseconds(), NS_PER_HOUR)

    def count(self) -> float:
        """Return the value as floating-point seconds."""

        return self.seconds + self.nanoseconds / NS_PER_SECOND

    def breakdown(self) -> Tuple[int, int, int, int, int, int]:
        """Split into hours, minutes, seconds, milliseconds, microseconds and nanoseconds."""

        rest = self.to_nanoseconds()
        hours, rest = split(rest, NS_PER_HOUR)
        minutes, rest = split(rest, NS_PER_MINUTE)
        seconds, rest = split(rest, NS_PER_SECOND)
        millis, rest = split(rest, NS_PER_MILLISECOND)
        micros, rest = split(rest, NS_PER_MICROSECOND)
        return hours, minutes, seconds, millis, micros, rest

    # -- arithmetic ------------------------------------------------------

    def __bool__(self) -> bool:
        return self.seconds != 0 or self.nanoseconds != 0

    def __neg__(self) -> "TimeValue":
        return TimeValue.from_nanoseconds(-self.to_nanoseconds())

    def __abs__(self) -> "TimeValue":
        return TimeValue.from_nanoseconds(abs(self.to_nanoseconds()))

    def __add__(self, other: object) -> "TimeValue":
        if not isinstance(other, TimeValue):
            return NotImplemented
        return TimeValue(self.seconds + other.seconds, self.nanoseconds + other.nanoseconds)

    def __radd__(self, other: object) -> "TimeValue":
        # sum() starts from the integer 0.
        if isinstance(other, numbers.Integral) and other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: object) -> "TimeValue":
        if not isinstance(other, TimeValue):
            return NotImplemented
        return TimeValue(self.seconds - other.seconds, self.nanoseconds - other.nanoseconds)

    def __mul__(self, other: object) -> "TimeValue":
        if not _is_scalar(other):
            return NotImplemented
        # Fractions keep the product exact before rounding to 1ns.
        return TimeValue.from_nanoseconds(round(Fraction(self.to_nanoseconds()) * Fraction(other)))

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Union["TimeValue", float]:
        if isinstance(other, TimeValue):
            return self.to_nanoseconds() / other.to_nanoseconds()
        if not _is_scalar(other):
            return NotImplemented
        if other == 0:
            raise ZeroDivisionError("TimeValue division by zero")
        return TimeValue.from_nanoseconds(round(Fraction(self.to_nanoseconds()) / Fraction(other)))


__all__ = [
    "TimeValue",
    "NS_PER_HOUR",
    "NS_PER_MINUTE",
    "NS_PER_SECOND",
    "NS_PER_MILLISECOND",
    "NS_PER_MICROSECOND",
    "split",
    "truncate_div",
]
