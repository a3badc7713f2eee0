"""Discovery of loaded modules from a process's memory map."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Sequence

MAX_MODULES = 13
RTLD_MODULE_INDEX = 0
MAIN_MODULE_INDEX = 1
MEM_STATE_TYPE_MASK = 0xFF


@dataclass(frozen=True)
class Range:
    """An address range given by its start and size."""

    start: int = 0
    size: int = 0

    @property
    def end(self) -> int:
        return self.start + self.size


@dataclass(frozen=True)
class ModuleInfo:
    """The address ranges of one loaded module."""

    total: Range = field(default_factory=Range)
    text: Range = field(default_factory=Range)
    rodata: Range = field(default_factory=Range)
    data: Range = field(default_factory=Range)


class MemoryType(enum.IntEnum):
    """The type part of a memory state."""

    UNMAPPED = 0x00
    IO = 0x01
    NORMAL = 0x02
    CODE_STATIC = 0x03
    CODE_MUTABLE = 0x04
    HEAP = 0x05


class Permission(enum.IntFlag):
    NONE = 0
    R = 1
    W = 2
    X = 4


_RX = Permission.R | Permission.X
_RW = Permission.R | Permission.W


@dataclass(frozen=True)
class MemoryRegion:
    """One entry of the memory map, as a memory query reports it."""

    addr: int
    size: int
    state: int
    perm: Permission

    @property
    def type(self) -> int:
        return int(self.state) & MEM_STATE_TYPE_MASK


class TooManyModulesError(RuntimeError):
    """More modules were found than the layout can hold."""


@dataclass(frozen=True)
class ModuleLayout:
    """The modules found in the address space, in address order."""

    modules: tuple[ModuleInfo, ...]
    self_index: int = RTLD_MODULE_INDEX

    @property
    def count(self) -> int:
        return len(self.modules)

    def module(self, index: int) -> ModuleInfo:
        if not 0 <= index < len(self.modules):
            raise IndexError(f"module index {index} out of range ({len(self.modules)} modules)")
        return self.modules[index]

    def rtld(self) -> ModuleInfo:
        return self.module(RTLD_MODULE_INDEX)

    def main(self) -> ModuleInfo:
        return self.module(MAIN_MODULE_INDEX)

    def self_module(self) -> ModuleInfo:
        return self.module(self.self_index)

    def sdk(self) -> ModuleInfo:
        return self.module(len(self.modules) - 1)

    def target_offset(self, offset: int) -> int:
        """An address relative to the start of the main module."""
        return self.main().total.start + offset


class _State(enum.Enum):
    LOOKING_FOR_TEXT = enum.auto()
    EXPECTING_RODATA = enum.auto()
    EXPECTING_DATA = enum.auto()


def find_modules(
    regions: Iterable[MemoryRegion], self_start: int | None = None
) -> ModuleLayout:
    """Find modules as runs of text (RX), rodata (R) and data (RW) regions.

    With ``self_start`` the module starting there is taken as our own;
    without it our own module is the first one.
    """
    modules: list[ModuleInfo] = []
    self_index: int | None = RTLD_MODULE_INDEX if self_start is None else None
    state = _State.LOOKING_FOR_TEXT
    text = rodata = Range()

    for region in regions:
        if len(modules) >= MAX_MODULES:
            raise TooManyModulesError(f"more than {MAX_MODULES} modules in the address space")

        kind = region.type
        if state is _State.LOOKING_FOR_TEXT:
            if kind == MemoryType.CODE_STATIC and region.perm == _RX:
                text = Range(region.addr, region.size)
                state = _State.EXPECTING_RODATA
        elif state is _State.EXPECTING_RODATA:
            if kind == MemoryType.CODE_STATIC and region.perm == Permission.R:
                rodata = Range(region.addr, region.size)
                state = _State.EXPECTING_DATA
            else:
                state = _State.LOOKING_FOR_TEXT
        else:
            if kind == MemoryType.CODE_MUTABLE and region.perm == _RW:
                data = Range(region.addr, region.size)
                total = Range(text.start, data.end - text.start)
                if self_start is not None and total.start == self_start:
                    self_index = len(modules)
                modules.append(ModuleInfo(total, text, rodata, data))
            state = _State.LOOKING_FOR_TEXT

    if not modules:
        raise LookupError("no modules found in the memory map")
    if self_index is None:
        raise LookupError(f"no module starts at 0x{self_start:X}")
    return ModuleLayout(tuple(modules), self_index)


def layout_from(modules: Sequence[ModuleInfo], self_index: int = RTLD_MODULE_INDEX) -> ModuleLayout:
    """Build a layout from already known modules."""
    if len(modules) > MAX_MODULES:
        raise TooManyModulesError(f"more than {MAX_MODULES} modules")
    return ModuleLayout(tuple(modules), self_index)