"""Durations and points in time, counted in microseconds."""

from __future__ import annotations

from dataclasses import dataclass

_BITS = 64
_MASK = (1 << _BITS) - 1


@dataclass(frozen=True, order=True)
class Span:
    """A duration in microseconds, held as an unsigned 64-bit value.

    The all-ones value stands for an infinite span. Arithmetic wraps
    around modulo 2**64.
    """

    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.value & _MASK)

    @staticmethod
    def zero() -> Span:
        return Span(0)

    @staticmethod
    def infinite() -> Span:
        return Span(_MASK)

    @staticmethod
    def from_usecs(value: int) -> Span:
        return Span(value)

    @staticmethod
    def from_msecs(value: int) -> Span:
        return Span.from_usecs((value * 1000) & _MASK)

    @staticmethod
    def from_secs(value: int) -> Span:
        return Span.from_msecs((value * 1000) & _MASK)

    @staticmethod
    def from_minutes(value: int) -> Span:
        return Span.from_secs((value * 60) & _MASK)

    @staticmethod
    def from_hours(value: int) -> Span:
        return Span.from_minutes((value * 60) & _MASK)

    @staticmethod
    def from_days(value: int) -> Span:
        return Span.from_hours((value * 24) & _MASK)

    @staticmethod
    def from_weeks(value: int) -> Span:
        return Span.from_days((value * 7) & _MASK)

    @staticmethod
    def from_months(value: int) -> Span:
        return Span.from_weeks((value * 4) & _MASK)

    @staticmethod
    def from_years(value: int) -> Span:
        return Span.from_months((value * 12) & _MASK)

    def is_infinite(self) -> bool:
        return self.value == _MASK

    def to_usecs(self) -> int:
        return self.value

    def to_msecs(self) -> int:
        return self.to_usecs() // 1000

    def to_secs(self) -> int:
        return self.to_msecs() // 1000

    def to_minutes(self) -> int:
        return self.to_secs() // 60

    def to_hours(self) -> int:
        return self.to_minutes() // 60

    def to_days(self) -> int:
        return self.to_hours() // 24

    def to_weeks(self) -> int:
        return self.to_days() // 7

    def to_months(self) -> int:
        return self.to_weeks() // 4

    def to_years(self) -> int:
        return self.to_months() // 12

    def __add__(self, other: Span) -> Span:
        if not isinstance(other, Span):
            return NotImplemented
        return Span(self.value + other.value)

    def __sub__(self, other: Span) -> Span:
        if not isinstance(other, Span):
            return NotImplemented
        return Span(self.value - other.value)


@dataclass(frozen=True, order=True)
class Stamp:
    """A point in time in microseconds since the epoch.

    The all-ones value marks the end of time, which absorbs any span
    added to or taken from it.
    """

    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.value & _MASK)

    @staticmethod
    def epoch() -> Stamp:
        return Stamp(0)

    @staticmethod
    def end_of_time() -> Stamp:
        return Stamp(_MASK)

    def is_end_of_time(self) -> bool:
        return self.value == _MASK

    def __add__(self, other: Span) -> Stamp:
        if not isinstance(other, Span):
            return NotImplemented
        if other.is_infinite():
            return Stamp.end_of_time()
        if self.is_end_of_time():
            return self
        return Stamp(self.value + other.value)

    def __sub__(self, other: Span) -> Stamp:
        if not isinstance(other, Span):
            return NotImplemented
        if self.is_end_of_time():
            return self
        return Stamp(self.value - other.value)