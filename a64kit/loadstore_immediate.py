"""Load/store with an unscaled signed or a scaled unsigned immediate offset."""

from __future__ import annotations

from .bits import sign_extend
from .encoding import Field, Opx1x0Instruction
from .registers import Register

_U16 = 0xFFFF


def _access_size(rt: Register) -> int:
    return 0b10 | int(rt.is64())


class LoadStoreRegisterUnscaledImmediate(Opx1x0Instruction):
    """Load/store addressed by base register plus a signed 9-bit byte offset."""

    OP0 = 0b0011
    OP2 = 0b00
    OP3 = 0b000000
    OP4 = 0b00

    size = Field(30, 32)
    v = Field(26)
    opc = Field(22, 24)
    imm9 = Field(12, 21)
    rn = Field(5, 10)
    rt = Field(0, 5)

    def __init__(
        self, size: int, v: int, opc: int, imm9: int, rn: Register, rt: Register
    ) -> None:
        super().__init__(self.OP0)
        self.op2 = self.OP2
        self.op3 = self.OP3
        self.op4 = self.OP4
        self.size = size
        self.v = v
        self.opc = opc
        self.imm9 = sign_extend(imm9, type(self).imm9.count)
        self.rn = rn.index
        self.rt = rt.index


class _UnscaledForm(LoadStoreRegisterUnscaledImmediate):
    V = 0b0
    OPC = 0b00

    def __init__(self, rt: Register, rn: Register, imm9: int = 0) -> None:
        super().__init__(_access_size(rt), self.V, self.OPC, imm9, rn, rt)


class LdurUnscaledImmediate(_UnscaledForm):
    """LDUR: load with an unscaled signed offset."""

    OPC = 0b01


class SturUnscaledImmediate(_UnscaledForm):
    """STUR: store with an unscaled signed offset."""

    OPC = 0b00


class LoadStoreRegisterUnsignedImmediate(Opx1x0Instruction):
    """Load/store addressed by base register plus an unsigned 12-bit scaled offset."""

    OP0 = 0b0011
    OP2 = 0b10

    size = Field(30, 32)
    v = Field(26)
    opc = Field(22, 24)
    imm12 = Field(10, 22)
    rn = Field(5, 10)
    rt = Field(0, 5)

    def __init__(
        self, size: int, v: int, opc: int, imm12: int, rn: Register, rt: Register
    ) -> None:
        super().__init__(self.OP0)
        self.op2 = self.OP2
        self.size = size
        self.v = v
        self.opc = opc
        self.imm12 = imm12 & _U16
        self.rn = rn.index
        self.rt = rt.index


class _UnsignedForm(LoadStoreRegisterUnsignedImmediate):
    V = 0b0
    OPC = 0b00

    def __init__(self, rt: Register, rn: Register, imm12: int = 0) -> None:
        super().__init__(_access_size(rt), self.V, self.OPC, imm12, rn, rt)


class LdrRegisterImmediate(_UnsignedForm):
    """LDR (immediate, unsigned offset)."""

    OPC = 0b01


class StrRegisterImmediate(_UnsignedForm):
    """STR (immediate, unsigned offset)."""

    OPC = 0b00