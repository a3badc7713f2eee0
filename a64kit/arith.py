"""Data processing (immediate) instructions: add/sub, logical, move wide, PC-relative."""

from __future__ import annotations

import enum

from .encoding import Field, Op100xInstruction
from .registers import NONE32, NONE64, Register

_U32 = 0xFFFFFFFF
_U16 = 0xFFFF


class AddSubtractImmediate(Op100xInstruction):
    """Add/subtract with a 12-bit immediate, optionally shifted left by 12."""

    OP0 = 0b010
    IMM_SHIFT = 12
    MASK_FOR_IMM_SHIFT = (1 << IMM_SHIFT) - 1

    sf = Field(31)
    op = Field(30)
    s = Field(29)
    sh = Field(22)
    imm12 = Field(10, 22)
    rn = Field(5, 10)
    rd = Field(0, 5)

    def __init__(self, sf: int, op: int, s: int) -> None:
        super().__init__(self.OP0)
        self.sf = sf
        self.op = op
        self.s = s

    @staticmethod
    def calc_sh(imm: int) -> bool:
        """Whether ``imm`` is encoded with the 12-bit left shift."""
        imm &= _U32
        return imm != 0 and (imm & AddSubtractImmediate.MASK_FOR_IMM_SHIFT) == 0

    @staticmethod
    def calc_imm(imm: int) -> int:
        """The immediate as it goes into the instruction, after any shift."""
        imm &= _U32
        if AddSubtractImmediate.calc_sh(imm):
            imm >>= AddSubtractImmediate.IMM_SHIFT
        return imm & _U16

    def _encode_operands(self, rd: Register, rn: Register, imm: int) -> None:
        self.rd = rd.index
        self.rn = rn.index
        self.imm12 = self.calc_imm(imm)
        self.sh = self.calc_sh(imm)


class _AddSubtractImmediateForm(AddSubtractImmediate):
    OP = 0
    S = 0

    def __init__(self, rd: Register, rn: Register, imm: int) -> None:
        super().__init__(rd.is64(), self.OP, self.S)
        self._encode_operands(rd, rn, imm)


class AddImmediate(_AddSubtractImmediateForm):
    """ADD (immediate)."""

    OP = 0b0
    S = 0b0


class AddsImmediate(_AddSubtractImmediateForm):
    """ADDS (immediate)."""

    OP = 0b0
    S = 0b1


class SubImmediate(_AddSubtractImmediateForm):
    """SUB (immediate)."""

    OP = 0b1
    S = 0b0


class SubsImmediate(_AddSubtractImmediateForm):
    """SUBS (immediate)."""

    OP = 0b1
    S = 0b1


def _discard_register(reg: Register) -> Register:
    return NONE64 if reg.is64() else NONE32


class CmnImmediate(AddsImmediate):
    """CMN (immediate): ADDS with the result discarded."""

    def __init__(self, reg: Register, imm: int) -> None:
        super().__init__(_discard_register(reg), reg, imm)


class CmpImmediate(SubsImmediate):
    """CMP (immediate): SUBS with the result discarded."""

    def __init__(self, reg: Register, imm: int) -> None:
        super().__init__(_discard_register(reg), reg, imm)


class LogicalImmediate(Op100xInstruction):
    """Logical operation with a bitmask immediate."""

    OP0 = 0b100

    sf = Field(31)
    opc = Field(29, 31)
    n = Field(22)
    immr = Field(16, 22)
    imms = Field(10, 16)
    rn = Field(5, 10)
    rd = Field(0, 5)

    def __init__(self, sf: int, opc: int) -> None:
        super().__init__(self.OP0)
        self.sf = sf
        self.opc = opc


class MoveWideImmediate(Op100xInstruction):
    """Move a 16-bit immediate into a register."""

    OP0 = 0b101

    sf = Field(31)
    opc = Field(29, 31)
    hw = Field(21, 23)
    imm16 = Field(5, 21)
    rd = Field(0, 5)

    def __init__(self, reg: Register, opc: int, hw: int, imm: int) -> None:
        super().__init__(self.OP0)
        self.sf = reg.is64()
        self.opc = opc
        self.hw = hw
        self.imm16 = imm & _U16
        self.rd = reg.index


class _MoveWideForm(MoveWideImmediate):
    OPC = 0
    HW = 0b00

    def __init__(self, reg: Register, imm: int) -> None:
        super().__init__(reg, self.OPC, self.HW, imm)


class Movk(_MoveWideForm):
    """MOVK: move a 16-bit immediate keeping the other bits."""

    OPC = 0b11


class Movn(_MoveWideForm):
    """MOVN: move the inverse of a 16-bit immediate."""

    OPC = 0b00


class Movz(_MoveWideForm):
    """MOVZ: move a 16-bit immediate, zeroing the other bits."""

    OPC = 0b10


class PcRelOp(enum.IntEnum):
    ADR = 0
    ADRP = 1


class PcRelAddressing(Op100xInstruction):
    """PC-relative address computation."""

    OP0 = 0b000

    op = Field(31)
    immlo = Field(29, 31)
    immhi = Field(5, 24)
    rd = Field(0, 5)

    def __init__(self, reg: Register, imm: int, op: PcRelOp | int) -> None:
        super().__init__(self.OP0)
        imm &= _U32
        self.op = PcRelOp(op)
        self.immlo = imm
        self.immhi = imm >> type(self).immlo.count
        self.rd = reg.index


class Adr(PcRelAddressing):
    """ADR: form a PC-relative address."""

    def __init__(self, reg: Register, imm: int) -> None:
        super().__init__(reg, imm, PcRelOp.ADR)


class Adrp(PcRelAddressing):
    """ADRP: form a PC-relative address to a 4KB page."""

    def __init__(self, reg: Register, imm: int) -> None:
        super().__init__(reg, (imm & _U32) >> 12, PcRelOp.ADRP)