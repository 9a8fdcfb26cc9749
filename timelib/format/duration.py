"""Duration value with configurable text rendering."""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Protocol, Union, runtime_checkable

from ..clock.timevalue import TimeValue
from ..report.schemas import DurationModel


class PrintMode(str, Enum):
    """The way durations are rendered as text."""

    HUMAN = "human"  # "  1H   4M   2s   1m 153u 399n "
    NUMERIC = "numeric"  # "1.4.2.1.153.399"
    TOTAL = "total"  # "3842"
    CUSTOM = "custom"  # placeholders %H %M %s %m %u %n


@dataclass(frozen=True)
class DisplayMode:
    """A print mode together with the format string used in custom mode."""

    kind: PrintMode = PrintMode.HUMAN
    format: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", PrintMode(self.kind))
        if self.kind is not PrintMode.CUSTOM:
            object.__setattr__(self, "format", "")

    @classmethod
    def human(cls) -> "DisplayMode":
        return cls(PrintMode.HUMAN)

    @classmethod
    def numeric(cls) -> "DisplayMode":
        return cls(PrintMode.NUMERIC)

    @classmethod
    def total(cls) -> "DisplayMode":
        return cls(PrintMode.TOTAL)

    @classmethod
    def custom(cls, fmt: str) -> "DisplayMode":
        return cls(PrintMode.CUSTOM, fmt)

    @classmethod
    def parse(cls, value: "DisplayLike", fmt: str = "") -> "DisplayMode":
        """Build a display mode from a DisplayMode, a PrintMode or a mode name."""

        if isinstance(value, DisplayMode):
            return value
        if isinstance(value, str) and not isinstance(value, PrintMode):
            try:
                value = PrintMode(value.strip().lower())
            except ValueError:
                choices = ", ".join(mode.value for mode in PrintMode)
                raise ValueError(f"Unknown print mode {value!r} (expected one of: {choices})") from None
        if not isinstance(value, PrintMode):
            raise TypeError(f"Cannot build a display mode from {type(value).__name__}")
        return cls(value, fmt)


DisplayLike = Union[DisplayMode, PrintMode, str]

_PLACEHOLDERS = ("%H", "%M", "%s", "%m", "%u", "%n")
_HUMAN_UNITS = ("H", "M", "s", "m", "u", "n")


@runtime_checkable
class Formattable(Protocol):
    """Anything that renders itself through ``to_string``."""

    def to_string(self) -> str:
        ...


def render(value: TimeValue, display: DisplayMode) -> str:
    """Render ``value`` according to ``display``."""

    if display.kind is PrintMode.TOTAL:
        return format(value.to_nanoseconds() * 1e-9, "g")
    parts = value.breakdown()
    if display.kind is PrintMode.HUMAN:
        return "".join(f"{part:>3}{unit} " for part, unit in zip(parts, _HUMAN_UNITS) if part)
    if display.kind is PrintMode.NUMERIC:
        return ".".join(str(part) for part in parts)
    output = display.format
    for placeholder, part in zip(_PLACEHOLDERS, parts):
        output = output.replace(placeholder, str(part))
    return output


def _is_scalar(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass(frozen=True, order=True)
class Duration:
    """A :class:`TimeValue` paired with the way it should be printed.

    Durations compare by value only; the display mode never takes part in
    equality or ordering.
    """

    value: TimeValue = field(default_factory=TimeValue.zero)
    display: DisplayMode = field(default_factory=DisplayMode, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", TimeValue.coerce(self.value))
        object.__setattr__(self, "display", DisplayMode.parse(self.display))

    @classmethod
    def zero(cls, display: Optional[DisplayMode] = None) -> "Duration":
        return cls(TimeValue.zero(), display or DisplayMode())

    def count(self) -> float:
        """Return the duration in seconds."""

        return self.value.count()

    __float__ = count

    def to_string(self) -> str:
        return render(self.value, self.display)

    def __str__(self) -> str:
        return self.to_string()

    def __bool__(self) -> bool:
        return bool(self.value)

    def with_display(self, display: DisplayMode) -> "Duration":
        return replace(self, display=display)

    def with_print_mode(self, mode: DisplayLike) -> "Duration":
        return self.with_display(DisplayMode.parse(mode, self.display.format))

    def with_format(self, fmt: str) -> "Duration":
        return self.with_display(DisplayMode.custom(fmt))

    def to_model(self) -> DurationModel:
        return DurationModel(
            seconds=self.value.seconds,
            nanoseconds=self.value.nanoseconds,
            count=self.count(),
            text=self.to_string(),
        )

    # -- arithmetic ------------------------------------------------------

    def _wrap(self, value: TimeValue) -> "Duration":
        return Duration(value, self.display)

    def __add__(self, other: object) -> "Duration":
        if isinstance(other, (Duration, TimeValue)):
            return self._wrap(self.value + TimeValue.coerce(other))
        return NotImplemented

    def __radd__(self, other: object) -> "Duration":
        # sum() starts from the integer 0.
        if isinstance(other, numbers.Integral) and other == 0:
            return self
        if isinstance(other, TimeValue):
            return self._wrap(other + self.value)
        return NotImplemented

    def __sub__(self, other: object) -> "Duration":
        if isinstance(other, (Duration, TimeValue)):
            return self._wrap(self.value - TimeValue.coerce(other))
        return NotImplemented

    def __rsub__(self, other: object) -> "Duration":
        if isinstance(other, TimeValue):
            return self._wrap(other - self.value)
        return NotImplemented

    def __mul__(self, other: object) -> "Duration":
        if not _is_scalar(other):
            return NotImplemented
        return self._wrap(self.value * other)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Union["Duration", float]:
        if isinstance(other, (Duration, TimeValue)):
            return self.value / TimeValue.coerce(other)
        if not _is_scalar(other):
            return NotImplemented
        return self._wrap(self.value / other)

    def __neg__(self) -> "Duration":
        return self._wrap(-self.value)

    def __abs__(self) -> "Duration":
        return self._wrap(abs(self.value))


__all__ = ["Duration", "DisplayMode", "DisplayLike", "Formattable", "PrintMode", "render"]
