"""Token types, source positions, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from rasm.registers import Register


@dataclass(frozen=True, slots=True)
class Position:
    """Source position: 0-based character offset, row, and column."""

    offset: int
    row: int
    column: int

    @classmethod
    def start(cls) -> Position:
        return cls(0, 0, 0)

    @property
    def line(self) -> int:
        """1-based line number, for diagnostics."""
        return self.row + 1

    @property
    def col(self) -> int:
        """1-based column number, for diagnostics."""
        return self.column + 1

    def next(self) -> Position:
        """Position after one ordinary character."""
        return Position(self.offset + 1, self.row, self.column + 1)

    def next_line(self) -> Position:
        """Position after a newline character."""
        return Position(self.offset + 1, self.row + 1, 0)

    def advance(self, ch: str) -> Position:
        """Position after consuming *ch*."""
        if ch == "\n":
            return self.next_line()
        return self.next()


class TokenType(Enum):
    WHITESPACE = auto()  # maximal whitespace run, newlines included
    INTEGER = auto()  # value is the decoded int
    STRING = auto()  # value is the escape-decoded text, quotes excluded
    REGISTER = auto()  # value is a HalfRegister or WholeRegister
    INSTRUCTION = auto()  # mnemonic or keyword, value is the lowercased name
    SYMBOL = auto()  # @name label reference
    SYMBOL_LITERAL = auto()  # name: label definition


TokenValue = int | str | Register | None


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with decoded value and original source text."""

    type: TokenType
    value: TokenValue
    raw: str
    position: Position


_DIGITS = "0123456789abcdef"

# Radix prefix letter (after a leading 0) -> radix
RADIX_PREFIXES = {"x": 16, "o": 8, "b": 2}


def is_whitespace(ch: str) -> bool:
    return ch.isspace()


def is_decimal_digit(ch: str) -> bool:
    """Return True for the ASCII digits 0-9 only."""
    return len(ch) == 1 and ch in "0123456789"


def is_ident_start(ch: str) -> bool:
    return ch.isalpha()


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier."""
    return ch.isalnum()


def digit_value(ch: str, radix: int) -> int | None:
    """Return the value of *ch* as a digit in *radix*, or None if it is not one."""
    if len(ch) != 1:
        return None
    idx = _DIGITS.find(ch.lower())
    if 0 <= idx < radix:
        return idx
    return None
