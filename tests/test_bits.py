import pytest

from a64kit.bits import BitSet, Mask, sign_extend


def test_mask_default_high_is_single_bit():
    mask = Mask(7)
    assert mask.high == 8
    assert mask.count == 1


def test_mask_value_covers_exactly_count_bits():
    mask = Mask(25, 29)
    assert mask.count == 4
    assert mask.value >> mask.low == (1 << mask.count) - 1
    assert mask.value & ((1 << mask.low) - 1) == 0


def test_mask_rejects_empty_range():
    with pytest.raises(ValueError):
        Mask(5, 5)
    with pytest.raises(ValueError):
        Mask(6, 3)


def test_set_then_get_round_trip():
    bits = BitSet()
    mask = Mask(10, 22)
    bits.set_bits(mask, 0x123)
    assert bits.bits_of(mask) == 0x123


def test_set_bits_leaves_other_bits_alone():
    bits = BitSet(0xFFFFFFFF)
    mask = Mask(5, 10)
    bits.set_bits(mask, 0)
    assert bits.bits_of(mask) == 0
    assert bits.value | mask.value == 0xFFFFFFFF


def test_set_bits_truncates_to_mask_width():
    bits = BitSet()
    mask = Mask(0, 4)
    bits.set_bits(mask, 0xFF)
    assert bits.bits_of(mask) == 0xF
    assert bits.value == mask.value


def test_bitset_limits_value_to_width():
    bits = BitSet(1 << 40, width=32)
    assert bits.value == 0
    bits.value = (1 << 32) | 7
    assert bits.value == 7


def test_sign_extend_keeps_small_positive_values():
    assert sign_extend(5, 9) == 5


def test_sign_extend_encodes_negative_values():
    encoded = sign_extend(-5, 9)
    assert 0 <= encoded < (1 << 9)
    assert encoded - (1 << 9) == -5


def test_sign_extend_minus_one_fills_field():
    assert sign_extend(-1, 19) == (1 << 19) - 1