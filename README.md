# a64kit

Small, dependency-free building blocks for working with AArch64 machine code
from Python.

## What is in the package

| Module | Contents |
| --- | --- |
| `a64kit.bits` | `Mask`, `BitSet`, `sign_extend` |
| `a64kit.registers` | `Register`, `RegisterKind`, `w()`, `x()`, `W0`…`W30`, `X0`…`X30`, `LR`, `SP`, `NONE32`, `NONE64` |
| `a64kit.encoding` | `Instruction`, the `Field` descriptor, `ShiftType`, `ExtendType`, and the group bases `Op100xInstruction`, `Op101xInstruction`, `Opx101Instruction`, `Opx1x0Instruction` |
| `a64kit.arith` | `AddImmediate`, `AddsImmediate`, `SubImmediate`, `SubsImmediate`, `CmnImmediate`, `CmpImmediate`, `Movz`, `Movk`, `Movn`, `Adr`, `Adrp`, plus `LogicalImmediate` (field layout only) |
| `a64kit.branch` | `Nop`, `Branch`, `BranchLink`, `BranchRegister`, `Ret` |
| `a64kit.logical` | `OrrShiftedRegister`, `MovRegister` |
| `a64kit.loadstore_offset` | `LdrLiteral`, `LdrRegisterOffset`, `StrRegisterOffset` |
| `a64kit.loadstore_immediate` | `LdurUnscaledImmediate`, `SturUnscaledImmediate`, `LdrRegisterImmediate`, `StrRegisterImmediate` |
| `a64kit.patcher` | `PageClaim`, `CodeImage`, `StreamPatcher`, `RandomAccessPatcher`, `CodePatcher` |
| `a64kit.layout` | `MemoryRegion`, `MemoryType`, `Permission`, `Range`, `ModuleInfo`, `ModuleLayout`, `find_modules`, `layout_from`, `TooManyModulesError` |
| `a64kit.pointer_path` | `follow`, `follow_safe` |
| `a64kit.timespan` | `TimeSpan` |
| `a64kit.tick` | `Tick`, `TickManager` |

## Installation

```
pip install a64kit
```

## Encoding instructions

Every instruction is an `Instruction`: its named bit-fields can be read and
written as attributes, `int()` gives the 32-bit word, and `to_bytes()` gives
the four bytes as they sit in memory (little-endian).

```python
from a64kit.registers import x, w
from a64kit.arith import AddImmediate, CmpImmediate
from a64kit.branch import Branch, Ret

assert int(AddImmediate(x(0), x(1), 12)) == 0x91003020
assert int(CmpImmediate(w(1), 32)) == 0x7100803F
assert int(Branch(0x8)) == 0x14000002
assert Ret().to_bytes() == bytes.fromhex("c0035fd6")

inst = AddImmediate(x(0), x(1), 12)
assert inst.imm12 == 12 and inst.rn == 1
```

Immediates of the add/subtract forms that are non-zero multiples of 0x1000 are
encoded with the 12-bit shift. `LdrRegisterOffset` and `StrRegisterOffset`
take an `ExtendType` and a shift amount, or a shift amount alone (meaning LSL).

## Patching code

`CodeImage` holds a code region seen twice: a read-only view (what is
executed) and a writable mirror. Writes go to the mirror and reach the
read-only view only when their range is flushed; every flush is recorded in
`image.flushes`.

```python
from a64kit.patcher import CodeImage, CodePatcher
from a64kit.branch import Nop

image = CodeImage(0x7100000000, bytes(0x1000))
with CodePatcher(image, 0x100) as patcher:
    patcher.write_inst(Nop())
    patcher.branch_inst(0x200)   # branch to offset 0x200 from the base

assert image.fetch(0x7100000100, 4) == Nop().to_bytes()
```

Leaving the `with` block flushes everything that was written.
`StreamPatcher.write(fmt, value)` and `RandomAccessPatcher.write(addr, fmt, value)`
take `struct` formats (little-endian unless the format says otherwise);
`seek` and `seek_rel` flush before moving. `RandomAccessPatcher` flushes the
single span that covers all of its writes.

## Finding modules

`find_modules` walks `MemoryRegion`s in address order and records each run of
a static-code RX region, a static-code R region and a mutable-code RW region as
one `ModuleInfo`. At most 13 modules are allowed (`TooManyModulesError`
otherwise); `LookupError` is raised if none is found, or if `self_start` is
given and no module starts there.

```python
from a64kit.layout import MemoryRegion, MemoryType, Permission, find_modules

RX = Permission.R | Permission.X
RW = Permission.R | Permission.W
regions = [
    MemoryRegion(0x1000, 0x1000, MemoryType.CODE_STATIC, RX),
    MemoryRegion(0x2000, 0x1000, MemoryType.CODE_STATIC, Permission.R),
    MemoryRegion(0x3000, 0x1000, MemoryType.CODE_MUTABLE, RW),
]
layout = find_modules(regions)
assert layout.rtld().total.end == 0x4000
```

`ModuleLayout` gives `rtld()`, `main()`, `self_module()`, `sdk()`,
`module(index)` and `target_offset(offset)` (an address relative to the main
module).

## Following pointer paths

```python
from a64kit.pointer_path import follow, follow_safe

memory = {0x1010: 0x2000, 0x2008: 0}
read_pointer = memory.__getitem__

assert follow(read_pointer, 0x1000, 0x10, 0x8) == 0x2008
assert follow_safe(read_pointer, 0x1000, 0x10, 0x8, 0x20) == 0
```

The first offset is added to the pointer; each further offset is added after
dereferencing. `follow_safe` returns `0` as soon as a dereference yields a
null pointer; `follow` does not check.

## Time spans and ticks

`TimeSpan` is a signed nanosecond count with `from_*` constructors and
truncating `microseconds` … `days` properties. `Tick` counts 19.2 MHz system
ticks; `TickManager` derives them from a nanosecond clock
(`time.monotonic_ns` by default, or any callable you pass).

## What the package does not do

It does not touch real process memory. There is no memory querying, no
mapping of writable mirrors and no cache maintenance: `CodeImage` is an
in-memory model, `find_modules` works on a memory map you supply, and the
pointer-path functions read through the function you pass. There is no
command-line tool, no disassembler and no text assembler; instructions are
built from Python objects only.

## Running the tests

```
pip install -e ".[test]"
pytest
```