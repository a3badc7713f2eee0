import pytest

from a64kit.branch import Nop
from a64kit.patcher import (
    PAGE_SIZE,
    CodeImage,
    CodePatcher,
    PageClaim,
    PatcherImpl,
    RandomAccessPatcher,
    StreamPatcher,
)

RO = 0x7100004000
RW_BASE = 0x8000000000


def make_image(size=0x100):
    return CodeImage(RO, bytes(size), rw_base=RW_BASE)


def test_claim_alignment_invariants():
    claim = PageClaim(RO + 0x234, RW_BASE + 0x234, 0x10)
    assert claim.aligned_ro % PAGE_SIZE == 0
    assert claim.aligned_ro <= claim.ro < claim.aligned_ro + PAGE_SIZE
    assert claim.aligned_rw % PAGE_SIZE == 0
    assert claim.aligned_size % PAGE_SIZE == 0
    assert claim.aligned_size >= claim.size


def test_claim_address_conversion_round_trip():
    claim = PageClaim(RO, RW_BASE, 0x100)
    addr = RO + 0x40
    assert claim.rw_to_ro(claim.ro_to_rw(addr)) == addr
    assert claim.ro_to_offset(addr) == claim.rw_to_offset(claim.ro_to_rw(addr))


def test_claim_bounds():
    claim = PageClaim(RO, RW_BASE, 0x100)
    assert claim.in_ro(RO)
    assert claim.in_ro(RO + 0xFF)
    assert not claim.in_ro(RO + 0x100)
    assert not claim.in_ro(RO - 1)
    assert claim.in_rw(RW_BASE)
    assert not claim.in_rw(RW_BASE + 0x100)


def test_image_rejects_unaligned_mirror():
    with pytest.raises(ValueError):
        CodeImage(RO, bytes(16), rw_base=RW_BASE + 1)


def test_image_read_out_of_range():
    image = make_image(0x10)
    with pytest.raises(IndexError):
        image.read(image.claim.rw + 0xC, 8)


def test_write_is_visible_only_after_flush():
    image = make_image()
    image.write(image.claim.rw, b"\xAA\xBB")
    assert image.read(image.claim.rw, 2) == b"\xAA\xBB"
    assert image.fetch(RO, 2) == b"\x00\x00"
    image.flush_range(RO, 2)
    assert image.fetch(RO, 2) == b"\xAA\xBB"


def test_patcher_impl_conversions():
    image = make_image()
    impl = PatcherImpl(image)
    assert impl.ro_from_addr(0x20) == RO + 0x20
    assert impl.addr_from_ro(impl.ro_from_addr(0x20)) == 0x20
    assert impl.addr_from_rw(impl.rw_from_addr(0x30)) == 0x30


def test_stream_patcher_writes_and_flushes_on_exit():
    image = make_image()
    with StreamPatcher(image, 0x10) as patcher:
        patcher.write("I", 0xD503201F)
        patcher.write("I", 0xD503201F)
        assert patcher.current == 0x18
    assert image.fetch(RO + 0x10, 8) == Nop().to_bytes() * 2
    assert image.flushes == [(RO + 0x10, 8)]


def test_stream_patcher_seek_rel_zero_does_not_flush():
    image = make_image()
    patcher = StreamPatcher(image, 0)
    patcher.write("I", 1)
    patcher.seek_rel(0)
    assert image.flushes == []
    assert patcher.current == 4


def test_stream_patcher_seek_flushes_and_moves():
    image = make_image()
    patcher = StreamPatcher(image, 0)
    patcher.write("H", 0x1234)
    patcher.seek(0x40)
    assert image.flushes == [(RO, 2)]
    assert patcher.current == 0x40
    patcher.write("H", 0x5678)
    patcher.flush()
    assert image.flushes[-1] == (RO + 0x40, 2)
    assert PatcherImpl(image)._load(0x40, "H") == 0x5678


def test_random_access_patcher_flushes_covered_span():
    image = make_image()
    with RandomAccessPatcher(image) as patcher:
        patcher.write(0x10, "I", 0xD503201F)
        patcher.write(0x4, "I", 0xD503201F)
        assert patcher.read(0x10, "I") == 0xD503201F
    assert image.flushes == [(RO + 0x4, 0x14 - 0x4)]
    assert image.fetch(RO + 0x4, 4) == Nop().to_bytes()


def test_random_access_patcher_nothing_to_flush():
    image = make_image()
    RandomAccessPatcher(image).flush()
    assert image.flushes == []


def test_code_patcher_branches_from_source_encodings():
    image = make_image(0x100)
    patcher = CodePatcher(image, 0)
    patcher.branch_inst(0x4440)
    patcher.branch_link_inst(4 + 0x4440)
    patcher.branch_inst_rel(0x0008)
    patcher.write_inst(Nop())
    reader = RandomAccessPatcher(image)
    assert reader.read(0, "I") == 0x14001110
    assert reader.read(4, "I") == 0x94001110
    assert reader.read(8, "I") == 0x14000002
    assert reader.read(12, "I") == 0xD503201F


def test_code_patcher_branch_is_relative_to_position():
    image = make_image(0x200)
    patcher = CodePatcher(image, 0x100)
    patcher.branch_inst(0x100 + 0x6900)
    patcher.branch_link_inst_rel(0x4200)
    reader = RandomAccessPatcher(image)
    assert reader.read(0x100, "I") == 0x14001A40
    assert reader.read(0x104, "I") == 0x94001080