"""Following chains of pointers with offsets."""

from __future__ import annotations

from typing import Callable

_U64 = (1 << 64) - 1

ReadPointer = Callable[[int], int]


def _walk(read_pointer: ReadPointer, ptr: int, offsets: tuple[int, ...], safe: bool) -> int:
    current = ptr & _U64
    if not offsets:
        return current
    if current == 0:
        return 0
    current = (current + offsets[0]) & _U64
    for offset in offsets[1:]:
        current = read_pointer(current) & _U64
        if safe and current == 0:
            return 0
        current = (current + offset) & _U64
    return current


def follow(read_pointer: ReadPointer, ptr: int, *args: int) -> int:
    """Add the first offset to ``ptr``, then dereference and add each further offset."""
    return _walk(read_pointer, ptr, args, safe=False)


def follow_safe(read_pointer: ReadPointer, ptr: int, *args: int) -> int:
    """Like :func:`follow`, but give 0 as soon as a dereference yields a null pointer."""
    return _walk(read_pointer, ptr, args, safe=True)