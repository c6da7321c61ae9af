"""Register catalogue: canonical register spellings and their identifiers.

The machine has eight 16-bit registers A..H. Each splits into two
independently addressable 8-bit halves, X and Y, encoded as
``2 * whole + (0 for X, 1 for Y)``.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class WholeRegister(Enum):
    """16-bit register, valued by its encoding."""

    A = 0
    B = 1
    C = 2
    D = 3
    E = 4
    F = 5
    G = 6
    H = 7

    @property
    def halves(self) -> tuple[HalfRegister, HalfRegister]:
        """The (X, Y) halves of this register."""
        return HalfRegister(2 * self.value), HalfRegister(2 * self.value + 1)

    @property
    def spelling(self) -> str:
        return "r" + self.name.lower()


class HalfRegister(Enum):
    """8-bit register half, valued by its encoding."""

    AX = 0
    AY = 1
    BX = 2
    BY = 3
    CX = 4
    CY = 5
    DX = 6
    DY = 7
    EX = 8
    EY = 9
    FX = 10
    FY = 11
    GX = 12
    GY = 13
    HX = 14
    HY = 15

    @property
    def whole(self) -> WholeRegister:
        """The 16-bit register this half belongs to."""
        return WholeRegister(self.value // 2)

    @property
    def spelling(self) -> str:
        return "r" + self.name.lower()


Register = HalfRegister | WholeRegister

# Lowercase spelling -> register, e.g. "rax" -> HalfRegister.AX, "ra" -> WholeRegister.A
REGISTERS: MappingProxyType[str, Register] = MappingProxyType(
    {reg.spelling: reg for reg in (*WholeRegister, *HalfRegister)}
)


def resolve(name: str) -> Register | None:
    """Look up *name* case-insensitively; return None if it names no register."""
    return REGISTERS.get(name.lower())
