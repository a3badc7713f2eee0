"""Base instruction word and the top-level encoding groups."""

from __future__ import annotations

import enum
from typing import Any

from .bits import BitSet, Mask


class Field:
    """Descriptor giving named access to a bit range of an instruction word."""

    def __init__(self, low: int, high: int | None = None) -> None:
        self.mask = Mask(low, high)
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @property
    def count(self) -> int:
        return self.mask.count

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance._bits.bits_of(self.mask)

    def __set__(self, instance: Any, value: int) -> None:
        instance._bits.set_bits(self.mask, int(value))

    def __repr__(self) -> str:
        return f"Field({self.name!r}, {self.mask.low}, {self.mask.high})"


class ShiftType(enum.IntEnum):
    LSL = 0b00
    LSR = 0b01
    ASR = 0b10
    ROR = 0b11


class ExtendType(enum.IntEnum):
    UXTB = 0b000
    UXTH = 0b001
    UXTW = 0b010
    UXTX = 0b011
    LSL = 0b011
    SXTB = 0b100
    SXTH = 0b101
    SXTW = 0b110
    SXTX = 0b111


class Instruction:
    """A 32-bit A64 instruction word."""

    main_op0 = Field(25, 29)

    def __init__(self, op0: int) -> None:
        self._bits = BitSet(0, 32)
        self.main_op0 = op0

    @property
    def value(self) -> int:
        return self._bits.value

    def to_bytes(self) -> bytes:
        """Return the instruction as it sits in memory (little-endian)."""
        return self.value.to_bytes(4, "little")

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Instruction):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(0x{self.value:08X})"


class Op100xInstruction(Instruction):
    """Data processing (immediate) group."""

    op0 = Field(23, 26)

    def __init__(self, op0: int) -> None:
        super().__init__(0b1000)
        self.op0 = op0


class Op101xInstruction(Instruction):
    """Branches, exception generation and system instructions."""

    op0 = Field(29, 32)
    op1 = Field(12, 26)
    op2 = Field(0, 5)

    def __init__(self, op0: int) -> None:
        super().__init__(0b1010)
        self.op0 = op0


class Opx101Instruction(Instruction):
    """Data processing (register) group."""

    op0 = Field(30)
    op1 = Field(28)
    op2 = Field(20, 24)
    op3 = Field(10, 15)

    def __init__(self, op0: int, op1: int, op2: int, op3: int) -> None:
        super().__init__(0b0101)
        self.op0 = op0
        self.op1 = op1
        self.op2 = op2
        self.op3 = op3


class Opx1x0Instruction(Instruction):
    """Loads and stores group."""

    op0 = Field(28, 32)
    op1 = Field(26)
    op2 = Field(23, 25)
    op3 = Field(16, 22)
    op4 = Field(10, 12)

    def __init__(self, op0: int) -> None:
        super().__init__(0b0100)
        self.op0 = op0