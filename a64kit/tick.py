"""System tick values and the tick counter."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .timespan import TimeSpan

INT64_MAX = (1 << 63) - 1
TICKS_PER_SECOND = 19_200_000

_NS_PER_SECOND = TimeSpan.from_seconds(1).nanoseconds

# Tick frequency must be less than INT64_MAX / 1 second.
MAX_TICK_FREQUENCY = INT64_MAX // _NS_PER_SECOND - 1


@dataclass(frozen=True, order=True)
class Tick:
    """A count of system counter ticks."""

    value: int = 0

    def __add__(self, other: Tick) -> Tick:
        if not isinstance(other, Tick):
            return NotImplemented
        return Tick(self.value + other.value)

    def __sub__(self, other: Tick) -> Tick:
        if not isinstance(other, Tick):
            return NotImplemented
        return Tick(self.value - other.value)

    def __int__(self) -> int:
        return self.value


class TickManager:
    """Reads a counter running at a fixed frequency from a nanosecond clock."""

    def __init__(self, clock: Callable[[], int] = time.monotonic_ns) -> None:
        self._clock = clock

    def _read(self) -> Tick:
        return Tick(self._clock() * TICKS_PER_SECOND // _NS_PER_SECOND)

    def get_tick(self) -> Tick:
        return self._read()

    def get_system_tick_ordered(self) -> Tick:
        return self._read()

    @property
    def tick_frequency(self) -> int:
        return TICKS_PER_SECOND

    @property
    def max_tick(self) -> int:
        return (INT64_MAX // _NS_PER_SECOND) * TICKS_PER_SECOND

    @property
    def max_time_span_ns(self) -> int:
        return TimeSpan.from_nanoseconds(INT64_MAX).nanoseconds