"""Patching code through a writable mirror of a read-only code image."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from .branch import Branch, BranchLink
from .encoding import Instruction

PAGE_SIZE = 0x1000


def _align_down(value: int, alignment: int) -> int:
    return value & ~(alignment - 1)


def _align_up(value: int, alignment: int) -> int:
    return (value + alignment - 1) & ~(alignment - 1)


@lru_cache(maxsize=None)
def _codec(fmt: str) -> struct.Struct:
    """A struct codec for ``fmt``, little-endian unless the format says otherwise."""
    if not fmt or fmt[0] not in "<>!=@":
        fmt = "<" + fmt
    return struct.Struct(fmt)


@dataclass(frozen=True)
class PageClaim:
    """A read-only region and the writable mirror that maps the same memory."""

    ro: int = 0
    rw: int = 0
    size: int = 0

    @property
    def aligned_ro(self) -> int:
        return _align_down(self.ro, PAGE_SIZE)

    @property
    def aligned_rw(self) -> int:
        return _align_down(self.rw, PAGE_SIZE)

    @property
    def aligned_size(self) -> int:
        return _align_up(self.size, PAGE_SIZE)

    def ro_to_offset(self, address: int) -> int:
        """Offset of a read-only address within the region."""
        return address - self.ro

    def rw_to_offset(self, address: int) -> int:
        """Offset of a writable address within the mirror."""
        return address - self.rw

    def ro_to_rw(self, address: int) -> int:
        return self.rw + self.ro_to_offset(address)

    def rw_to_ro(self, address: int) -> int:
        return self.rw_to_offset(address) + self.ro

    def in_ro(self, address: int) -> bool:
        return 0 <= self.ro_to_offset(address) < self.size

    def in_rw(self, address: int) -> bool:
        return 0 <= self.rw_to_offset(address) < self.size


class CodeImage:
    """A code region seen twice: as executed (read-only) and as written (mirror).

    Writes go to the mirror and reach the executed view only once the range
    is flushed, as with data and instruction caches.
    """

    def __init__(self, ro: int, data: bytes, rw_base: int | None = None) -> None:
        if ro < 0:
            raise ValueError(f"region address must not be negative, got {ro}")
        aligned_ro = _align_down(ro, PAGE_SIZE)
        if rw_base is None:
            rw_base = aligned_ro
        if rw_base < 0 or rw_base % PAGE_SIZE:
            raise ValueError(f"mirror base 0x{rw_base:X} is not page aligned")
        self.claim = PageClaim(ro, rw_base + (ro - aligned_ro), len(data))
        self._mirror = bytearray(data)
        self._executed = bytearray(data)
        self.flushes: list[tuple[int, int]] = []

    def __len__(self) -> int:
        return self.claim.size

    def _check(self, offset: int, size: int, address: int) -> int:
        if size < 0 or offset < 0 or offset + size > self.claim.size:
            raise IndexError(f"0x{size:X} bytes at 0x{address:X} fall outside the image")
        return offset

    def read(self, rw_address: int, size: int) -> bytes:
        """Read bytes from the writable mirror."""
        offset = self._check(self.claim.rw_to_offset(rw_address), size, rw_address)
        return bytes(self._mirror[offset : offset + size])

    def write(self, rw_address: int, data: bytes) -> None:
        """Write bytes into the writable mirror."""
        offset = self._check(self.claim.rw_to_offset(rw_address), len(data), rw_address)
        self._mirror[offset : offset + len(data)] = data

    def fetch(self, ro_address: int, size: int) -> bytes:
        """Read bytes as they are executed, from the read-only view."""
        offset = self._check(self.claim.ro_to_offset(ro_address), size, ro_address)
        return bytes(self._executed[offset : offset + size])

    def flush_range(self, ro_address: int, size: int) -> None:
        """Make written bytes in a range visible to execution."""
        offset = self._check(self.claim.ro_to_offset(ro_address), size, ro_address)
        self._executed[offset : offset + size] = self._mirror[offset : offset + size]
        self.flushes.append((ro_address, size))


class PatcherImpl:
    """Converts between offsets into the image and its two address views."""

    def __init__(self, image: CodeImage) -> None:
        self._image = image

    @property
    def image(self) -> CodeImage:
        return self._image

    def addr_from_ro(self, ro: int) -> int:
        return ro - self._image.claim.ro

    def addr_from_rw(self, rw: int) -> int:
        return rw - self._image.claim.rw

    def ro_from_addr(self, addr: int) -> int:
        return self._image.claim.ro + addr

    def rw_from_addr(self, addr: int) -> int:
        return self._image.claim.rw + addr

    def _store(self, addr: int, fmt: str, value: Any) -> int:
        codec = _codec(fmt)
        self._image.write(self.rw_from_addr(addr), codec.pack(value))
        return codec.size

    def _load(self, addr: int, fmt: str) -> Any:
        codec = _codec(fmt)
        values = codec.unpack(self._image.read(self.rw_from_addr(addr), codec.size))
        return values[0] if len(values) == 1 else values


class StreamPatcher(PatcherImpl):
    """Writes values one after another from a starting offset."""

    def __init__(self, image: CodeImage, start: int) -> None:
        super().__init__(image)
        self._start = start
        self._current = start

    @property
    def current(self) -> int:
        return self._current

    def write(self, fmt: str, value: Any) -> None:
        """Pack ``value`` with the struct format ``fmt`` at the current offset."""
        self._current += self._store(self._current, fmt, value)

    def seek_rel(self, offset: int) -> None:
        """Flush what has been written, then move by ``offset`` bytes."""
        if offset == 0:
            return
        address = self._current + offset
        self.flush()
        self._start = address
        self._current = address

    def seek(self, address: int) -> None:
        """Flush what has been written, then move to an offset into the image."""
        self.seek_rel(address - self._current)

    def flush(self) -> None:
        """Make everything written since the last flush visible to execution."""
        if self._start == self._current:
            return
        size = self._current - self._start
        self._image.flush_range(self.ro_from_addr(self._start), size)
        self._start += size

    def __enter__(self) -> StreamPatcher:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.flush()


class RandomAccessPatcher(PatcherImpl):
    """Writes values anywhere and flushes the span they cover."""

    def __init__(self, image: CodeImage) -> None:
        super().__init__(image)
        self._lowest: int | None = None
        self._highest: int | None = None

    def write(self, addr: int, fmt: str, value: Any) -> None:
        """Pack ``value`` with the struct format ``fmt`` at offset ``addr``."""
        size = _codec(fmt).size
        end = addr + size
        if self._lowest is None or self._highest is None:
            self._lowest, self._highest = addr, end
        else:
            self._lowest = min(self._lowest, addr)
            self._highest = max(self._highest, end)
        self._store(addr, fmt, value)

    def read(self, addr: int, fmt: str) -> Any:
        """Unpack a value with the struct format ``fmt`` from offset ``addr``."""
        return self._load(addr, fmt)

    def flush(self) -> None:
        """Make the span of all writes visible to execution."""
        if self._lowest is None or self._highest is None:
            return
        self._image.flush_range(self.ro_from_addr(self._lowest), self._highest - self._lowest)

    def __enter__(self) -> RandomAccessPatcher:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.flush()


class CodePatcher(StreamPatcher):
    """A stream patcher that writes instructions."""

    def write_inst(self, inst: Instruction | int) -> None:
        self.write("I", int(inst))

    def branch_inst_rel(self, offset: int) -> None:
        """Write a branch to ``offset`` bytes from the current position."""
        self.write_inst(Branch(offset))

    def branch_link_inst_rel(self, offset: int) -> None:
        """Write a branch with link to ``offset`` bytes from the current position."""
        self.write_inst(BranchLink(offset))

    def branch_inst(self, address: int) -> None:
        """Write a branch to an offset into the image."""
        self.branch_inst_rel(address - self._current)

    def branch_link_inst(self, address: int) -> None:
        """Write a branch with link to an offset into the image."""
        self.branch_link_inst_rel(address - self._current)