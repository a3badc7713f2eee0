import pytest

from a64kit.encoding import ExtendType
from a64kit.loadstore_offset import (
    LdrLiteral,
    LdrRegisterOffset,
    LoadRegisterLiteral,
    LoadStoreRegisterOffset,
    StrRegisterOffset,
)
from a64kit.registers import (
    W0, W1, W2, W3, W5, W7, W8, X0, X1, X2, X3, X4, X5, X6, X7, X8,
)


@pytest.mark.parametrize(
    "rt, distance, expected",
    [
        (X0, 0x08, 0x58000040),
        (W1, 0x10, 0x18000081),
        (X2, 0x18, 0x580000C2),
        (W3, 0x20, 0x18000103),
        (X4, 0x28, 0x58000144),
        (W5, 0x30, 0x18000185),
        (X6, 0x38, 0x580001C6),
        (W7, 0x40, 0x18000207),
    ],
)
def test_ldr_literal(rt, distance, expected):
    assert LdrLiteral(rt, distance).value == expected


def test_ldr_literal_negative_matches_word_offset():
    assert LdrLiteral(X0, -8).value == LoadRegisterLiteral(X0, -2, 0, 1).value


def test_ldr_literal_fields():
    inst = LdrLiteral(X6, 0x38)
    assert inst.imm19 == 0x38 // 4
    assert inst.rt == 6
    assert inst.opc == 1


@pytest.mark.parametrize(
    "regs, expected",
    [
        ((X0, X1, X2), 0xF8626820),
        ((X3, X4, X5), 0xF8656883),
        ((X6, X7, X8), 0xF86868E6),
    ],
)
def test_ldr_register_offset_default(regs, expected):
    assert LdrRegisterOffset(*regs).value == expected


@pytest.mark.parametrize(
    "regs, extend, expected",
    [
        ((X0, X1, W2), ExtendType.UXTW, 0xF8625820),
        ((X3, X4, W5), ExtendType.UXTW, 0xF8655883),
        ((X6, X7, W8), ExtendType.UXTW, 0xF86858E6),
        ((X0, X1, X2), ExtendType.SXTX, 0xF862F820),
        ((X3, X4, X5), ExtendType.SXTX, 0xF865F883),
        ((X6, X7, X8), ExtendType.SXTX, 0xF868F8E6),
    ],
)
def test_ldr_register_offset_extended(regs, extend, expected):
    assert LdrRegisterOffset(*regs, extend, 3).value == expected


@pytest.mark.parametrize(
    "regs, expected",
    [
        ((X0, X1, X2), 0xF8226820),
        ((X3, X4, X5), 0xF8256883),
        ((X6, X7, X8), 0xF82868E6),
    ],
)
def test_str_register_offset_default(regs, expected):
    assert StrRegisterOffset(*regs).value == expected


@pytest.mark.parametrize(
    "regs, extend, expected",
    [
        ((X0, X1, W2), ExtendType.UXTW, 0xF8225820),
        ((X3, X4, W5), ExtendType.UXTW, 0xF8255883),
        ((X6, X7, W8), ExtendType.UXTW, 0xF82858E6),
        ((X0, X1, X2), ExtendType.SXTX, 0xF822F820),
        ((X3, X4, X5), ExtendType.SXTX, 0xF825F883),
        ((X6, X7, X8), ExtendType.SXTX, 0xF828F8E6),
    ],
)
def test_str_register_offset_extended(regs, extend, expected):
    assert StrRegisterOffset(*regs, extend, 3).value == expected


def test_amount_only_form_matches_lsl():
    assert LdrRegisterOffset(X0, X1, X2, 3) == LdrRegisterOffset(X0, X1, X2, ExtendType.LSL, 3)
    assert StrRegisterOffset(X0, X1, X2, 3).s == 1


def test_amount_only_form_rejects_extra_amount():
    with pytest.raises(TypeError):
        LdrRegisterOffset(X0, X1, X2, 3, 3)


@pytest.mark.parametrize(
    "extend, expected",
    [
        (ExtendType.UXTW, 0b010),
        (ExtendType.LSL, 0b011),
        (ExtendType.UXTX, 0b011),
        (ExtendType.SXTW, 0b110),
        (ExtendType.SXTX, 0b111),
        (ExtendType.UXTB, 0b000),
        (ExtendType.SXTH, 0b000),
    ],
)
def test_create_option(extend, expected):
    assert LoadStoreRegisterOffset.create_option(extend) == expected


@pytest.mark.parametrize(
    "rt, amount, expected",
    [
        (X0, 0, False),
        (X0, 3, True),
        (X0, 2, False),
        (W0, 2, True),
        (W0, 3, False),
    ],
)
def test_create_s(rt, amount, expected):
    assert LoadStoreRegisterOffset.create_s(rt, amount) is expected


def test_32bit_load_size():
    assert LdrRegisterOffset(W0, X1, X2).size == 0b10
    assert LdrRegisterOffset(X0, X1, X2).size == 0b11


def test_load_and_store_differ_only_in_opc():
    ldr = LdrRegisterOffset(X3, X4, X5)
    st = StrRegisterOffset(X3, X4, X5)
    assert ldr.opc == 1 and st.opc == 0
    assert ldr.value ^ st.value == 1 << 22