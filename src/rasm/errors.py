"""Error types with formatted source context."""

from __future__ import annotations

from rasm.tokens import Position

DEFAULT_FILENAME = "input.asm"


class LexError(Exception):
    """Raised on the first lexing error, with position and source context."""

    def __init__(
        self,
        message: str,
        position: Position,
        source: str,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    @property
    def line(self) -> int:
        """1-based line number."""
        return self.position.line

    @property
    def col(self) -> int:
        """1-based column number."""
        return self.position.col

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename
        lines = self.source.split("\n")
        line_idx = self.position.row
        col = self.position.col

        # Rows count "\n" only, so split the same way
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\r")
        else:
            source_line = ""

        # Single caret under the error column
        pad = " " * (col - 1)
        carets = "^"

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class MalformedInteger(LexError):
    """A radix prefix not followed by any digit valid in that radix."""


class IntegerOverflow(LexError):
    """An integer literal too wide for the configured signed width."""

    def __init__(
        self,
        value: int,
        bits: int,
        position: Position,
        source: str,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self.value = value
        self.bits = bits
        super().__init__(
            f"integer literal {value} does not fit in a signed {bits}-bit word",
            position,
            source,
            filename,
        )


class UnterminatedString(LexError):
    """End of input inside a string literal. Positioned at the opening quote."""

    def __init__(self, position: Position, source: str, filename: str = DEFAULT_FILENAME) -> None:
        super().__init__(
            f"unterminated string literal (starts on line {position.line}, column {position.col})",
            position,
            source,
            filename,
        )


class InvalidEscapeSequence(LexError):
    def __init__(
        self, char: str, position: Position, source: str, filename: str = DEFAULT_FILENAME
    ) -> None:
        self.char = char
        super().__init__(f"invalid escape sequence '\\{char}'", position, source, filename)


class MalformedEscape(LexError):
    def __init__(self, position: Position, source: str, filename: str = DEFAULT_FILENAME) -> None:
        super().__init__("unexpected end of input in string escape", position, source, filename)


class MalformedSymbol(LexError):
    """A bare '@' or a register name used as a label."""


class UnexpectedCharacter(LexError):
    def __init__(
        self, char: str, position: Position, source: str, filename: str = DEFAULT_FILENAME
    ) -> None:
        self.char = char
        super().__init__(f"unexpected character {char!r}", position, source, filename)


class SourceReadError(Exception):
    """Raised when an input file cannot be read as text."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")
