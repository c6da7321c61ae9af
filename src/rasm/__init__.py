"""Lexical front end for the rasm register-machine assembler."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rasm.lexer import DEFAULT_INTEGER_BITS

if TYPE_CHECKING:
    from rasm.tokens import Token

__version__ = "0.1.0"


def tokenize(
    source: str,
    filename: str = "input.asm",
    *,
    integer_bits: int = DEFAULT_INTEGER_BITS,
) -> list[Token]:
    """Lex rasm source into a token list, raising LexError on the first error."""
    from rasm.lexer import tokenize as _tokenize

    return _tokenize(source, filename, integer_bits=integer_bits)
