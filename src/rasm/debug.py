"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from rasm.registers import HalfRegister, WholeRegister
from rasm.tokens import Token, TokenType


def dump_tokens(tokens: list[Token], *, file: TextIO | None = None) -> None:
    """Print one human-readable line per token to *file* (default: current sys.stderr)."""
    if file is None:
        file = sys.stderr
    for tok in tokens:
        file.write(f"{tok.position.line:>4}:{tok.position.col:<4} {format_token(tok)}\n")


def format_token(tok: Token) -> str:
    if tok.type == TokenType.WHITESPACE:
        return f"Whitespace({tok.raw!r})"
    if tok.type == TokenType.INTEGER:
        return f"Integer({tok.value})"
    if tok.type == TokenType.STRING:
        return f"String({tok.value!r})"
    if tok.type == TokenType.REGISTER:
        return f"Register({_register_name(tok.value)})"
    if tok.type == TokenType.INSTRUCTION:
        return f"Instruction({tok.value})"
    if tok.type == TokenType.SYMBOL:
        return f"Symbol(@{tok.value})"
    # SYMBOL_LITERAL
    return f"Label({tok.value}:)"


def _register_name(reg: object) -> str:
    if isinstance(reg, HalfRegister):
        return f"{reg.spelling}, half {reg.value} of {reg.whole.spelling}"
    if isinstance(reg, WholeRegister):
        return f"{reg.spelling}, whole {reg.value}"
    return repr(reg)
