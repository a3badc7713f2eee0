"""Load literal and load/store with a register offset."""

from __future__ import annotations

from .bits import sign_extend
from .encoding import ExtendType, Field, Opx1x0Instruction
from .registers import Register

_U32 = 0xFFFFFFFF


class LoadRegisterLiteral(Opx1x0Instruction):
    """Load a register from a PC-relative literal."""

    OP0 = 0b0001
    OP2 = 0b00

    opc = Field(30, 31)
    v = Field(26)
    imm19 = Field(5, 24)
    rt = Field(0, 5)

    def __init__(self, rt: Register, imm19: int, v: int, opc: int) -> None:
        super().__init__(self.OP0)
        self.op0 = self.OP0
        self.op2 = self.OP2
        self.opc = opc
        self.v = v
        self.imm19 = sign_extend(imm19, type(self).imm19.count)
        self.rt = rt.index


class LdrLiteral(LoadRegisterLiteral):
    """LDR (literal) into a general-purpose register."""

    V = 0b0

    def __init__(self, rt: Register, relative_distance: int) -> None:
        super().__init__(rt, (relative_distance & _U32) // 4, self.V, int(rt.is64()))


class LoadStoreRegisterOffset(Opx1x0Instruction):
    """Load/store addressed by base register plus an extended register."""

    OP0 = 0b0011
    OP1 = 0
    OP2 = 0b00
    OP3 = 0b100000
    OP4 = 0b10

    size = Field(30, 32)
    v = Field(26)
    opc = Field(22, 24)
    rm = Field(16, 21)
    option = Field(13, 16)
    s = Field(12)
    rn = Field(5, 10)
    rt = Field(0, 5)

    _OPTIONS = {
        ExtendType.UXTW: 0b010,
        ExtendType.LSL: 0b011,
        ExtendType.SXTW: 0b110,
        ExtendType.SXTX: 0b111,
    }

    def __init__(self, size: int, v: int, opc: int) -> None:
        super().__init__(self.OP0)
        self.size = size
        self.opc = opc
        self.op1 = self.OP1
        self.op2 = self.OP2
        self.op3 = self.OP3
        self.op4 = self.OP4
        self.v = v

    @staticmethod
    def create_option(extend: ExtendType | int) -> int:
        """The option field for an extend type; unsupported types give zero."""
        return LoadStoreRegisterOffset._OPTIONS.get(extend, 0b000)

    @staticmethod
    def create_s(rt: Register, amount: int) -> bool:
        """Whether the offset is scaled by the access size."""
        if amount == 0:
            return False
        if rt.is64() and amount == 3:
            return True
        if rt.is32() and amount == 2:
            return True
        return False


class _RegisterOffsetForm(LoadStoreRegisterOffset):
    V = 0b0
    OPC = 0b00

    def __init__(
        self,
        rt: Register,
        rn: Register,
        rm: Register,
        extend: ExtendType | int = ExtendType.LSL,
        amount: int = 0,
    ) -> None:
        if not isinstance(extend, ExtendType):
            if amount != 0:
                raise TypeError("extend must be an ExtendType when amount is given")
            extend, amount = ExtendType.LSL, extend
        amount &= 0xFF
        size = 0b10 | int(rt.is64())
        super().__init__(size, self.V, self.OPC)
        self.size = size
        self.rm = rm.index
        self.option = self.create_option(extend)
        self.s = self.create_s(rt, amount)
        self.rt = rt.index
        self.rn = rn.index


class LdrRegisterOffset(_RegisterOffsetForm):
    """LDR (register)."""

    OPC = 0b01


class StrRegisterOffset(_RegisterOffsetForm):
    """STR (register)."""

    OPC = 0b00