"""Signed nanosecond durations."""

from __future__ import annotations

from dataclasses import dataclass

_NS_PER_US = 1000
_NS_PER_MS = _NS_PER_US * 1000
_NS_PER_S = _NS_PER_MS * 1000
_NS_PER_MIN = _NS_PER_S * 60
_NS_PER_HOUR = _NS_PER_MIN * 60
_NS_PER_DAY = _NS_PER_HOUR * 24


def _div_trunc(value: int, divisor: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(value) // divisor
    return -quotient if value < 0 else quotient


@dataclass(frozen=True, order=True)
class TimeSpan:
    """A duration held as a whole number of nanoseconds."""

    nanoseconds: int = 0

    @classmethod
    def from_nanoseconds(cls, ns: int) -> TimeSpan:
        return cls(ns)

    @classmethod
    def from_microseconds(cls, us: int) -> TimeSpan:
        return cls(us * _NS_PER_US)

    @classmethod
    def from_milliseconds(cls, ms: int) -> TimeSpan:
        return cls(ms * _NS_PER_MS)

    @classmethod
    def from_seconds(cls, s: int) -> TimeSpan:
        return cls(s * _NS_PER_S)

    @classmethod
    def from_minutes(cls, m: int) -> TimeSpan:
        return cls(m * _NS_PER_MIN)

    @classmethod
    def from_hours(cls, h: int) -> TimeSpan:
        return cls(h * _NS_PER_HOUR)

    @classmethod
    def from_days(cls, d: int) -> TimeSpan:
        return cls(d * _NS_PER_DAY)

    @property
    def microseconds(self) -> int:
        return _div_trunc(self.nanoseconds, _NS_PER_US)

    @property
    def milliseconds(self) -> int:
        return _div_trunc(self.nanoseconds, _NS_PER_MS)

    @property
    def seconds(self) -> int:
        return _div_trunc(self.nanoseconds, _NS_PER_S)

    @property
    def minutes(self) -> int:
        return _div_trunc(self.nanoseconds, _NS_PER_MIN)

    @property
    def hours(self) -> int:
        return _div_trunc(self.nanoseconds, _NS_PER_HOUR)

    @property
    def days(self) -> int:
        return _div_trunc(self.nanoseconds, _NS_PER_DAY)

    def __add__(self, other: TimeSpan) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan(self.nanoseconds + other.nanoseconds)

    def __sub__(self, other: TimeSpan) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan(self.nanoseconds - other.nanoseconds)