"""General-purpose registers of the 64-bit ARM architecture."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class RegisterKind(enum.Enum):
    """Register width: W is 32-bit, X is 64-bit."""

    W = 0
    X = 1


@dataclass(frozen=True)
class Register:
    """A register view of a given width and index (stored as a 7-bit signed value)."""

    kind: RegisterKind
    index: int

    def __post_init__(self) -> None:
        if not -64 <= self.index <= 63:
            raise ValueError(f"register index {self.index} does not fit in 7 bits")

    def is32(self) -> bool:
        return self.kind is RegisterKind.W

    def is64(self) -> bool:
        return self.kind is RegisterKind.X

    def __str__(self) -> str:
        return f"{self.kind.name}{self.index}"


def w(index: int) -> Register:
    """Return the 32-bit register with the given index."""
    return Register(RegisterKind.W, index)


def x(index: int) -> Register:
    """Return the 64-bit register with the given index."""
    return Register(RegisterKind.X, index)


(
    W0, W1, W2, W3, W4, W5, W6, W7, W8, W9,
    W10, W11, W12, W13, W14, W15, W16, W17, W18, W19,
    W20, W21, W22, W23, W24, W25, W26, W27, W28, W29,
    W30,
) = (w(i) for i in range(31))

(
    X0, X1, X2, X3, X4, X5, X6, X7, X8, X9,
    X10, X11, X12, X13, X14, X15, X16, X17, X18, X19,
    X20, X21, X22, X23, X24, X25, X26, X27, X28, X29,
    X30,
) = (x(i) for i in range(31))

LR = X30
SP = Register(RegisterKind.X, 31)
NONE32 = Register(RegisterKind.W, -1)
NONE64 = Register(RegisterKind.X, -1)