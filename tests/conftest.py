"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from rasm.lexer import tokenize
from rasm.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns all tokens."""

    def _lex(source: str, **kwargs) -> list[Token]:
        return tokenize(source, **kwargs)

    return _lex


@pytest.fixture
def lex_significant():
    """Return a helper that tokenizes source and drops whitespace tokens."""

    def _lex(source: str, **kwargs) -> list[Token]:
        return [t for t in tokenize(source, **kwargs) if t.type != TokenType.WHITESPACE]

    return _lex


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[object]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def reconstruct(tokens: list[Token], source: str) -> str:
    """Rebuild the source from token start offsets and the source length."""
    starts = [t.position.offset for t in tokens]
    ends = starts[1:] + [len(source)]
    return "".join(source[s:e] for s, e in zip(starts, ends))
