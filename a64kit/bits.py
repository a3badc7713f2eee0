"""Bit masks, bit sets and fixed-width field encoding."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Mask:
    """A contiguous run of bits from ``low`` (inclusive) to ``high`` (exclusive)."""

    low: int
    high: int | None = field(default=None)

    def __post_init__(self) -> None:
        if self.high is None:
            object.__setattr__(self, "high", self.low + 1)
        if self.low < 0:
            raise ValueError(f"mask low bit must not be negative, got {self.low}")
        if self.high <= self.low:
            raise ValueError(f"mask high bit {self.high} must be above low bit {self.low}")

    @property
    def count(self) -> int:
        """Number of bits covered by the mask."""
        return self.high - self.low

    @property
    def value(self) -> int:
        """The mask as an integer with its bits set."""
        return ((1 << self.count) - 1) << self.low


class BitSet:
    """An unsigned integer of fixed width with masked field access."""

    __slots__ = ("_data", "_width")

    def __init__(self, data: int = 0, width: int = 32) -> None:
        self._width = width
        self._data = data & self._limit

    @property
    def _limit(self) -> int:
        return (1 << self._width) - 1

    @property
    def width(self) -> int:
        return self._width

    @property
    def value(self) -> int:
        return self._data

    @value.setter
    def value(self, data: int) -> None:
        self._data = data & self._limit

    def bits_of(self, mask: Mask) -> int:
        """Return the bits under ``mask``, shifted down to bit zero."""
        return (self._data & mask.value) >> mask.low

    def set_bits(self, mask: Mask, value: int) -> None:
        """Replace the bits under ``mask`` with ``value``, truncated to fit."""
        self._data &= ~mask.value
        self._data |= (int(value) << mask.low) & mask.value
        self._data &= self._limit

    def __int__(self) -> int:
        return self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BitSet):
            return self._data == other._data and self._width == other._width
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._data, self._width))

    def __repr__(self) -> str:
        digits = (self._width + 3) // 4
        return f"BitSet(0x{self._data:0{digits}X}, width={self._width})"


def sign_extend(value: int, bits: int) -> int:
    """Return the two's-complement encoding of ``value`` in a field ``bits`` wide."""
    return int(value) & ((1 << bits) - 1)