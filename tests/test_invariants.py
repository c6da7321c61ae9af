"""Property-based tests for lexer invariants using Hypothesis.

These check that the token stream always partitions the input and that
positions agree with the source text, for inputs that lex without error.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from rasm.lexer import tokenize
from rasm.registers import REGISTERS
from rasm.tokens import Position, TokenType

from .conftest import reconstruct

# No radix prefix letters (x, o, b) and no punctuation, so any string lexes cleanly
_SAFE_ALPHABET = "acdefghrARH019 \t\r\n"

_WHITESPACE = st.text(alphabet=" \t\r\n\u00a0\u2003\x0b\x0c", min_size=1, max_size=50)

_names = st.from_regex(r"[a-zA-Z][a-zA-Z0-9]{0,8}", fullmatch=True).filter(
    lambda s: s.lower() not in REGISTERS
)
_integers = st.integers(min_value=0, max_value=2**63 - 1)
_fragments = st.one_of(
    _names,
    st.sampled_from(sorted(REGISTERS)),
    _integers.map(str),
    _integers.map(hex),
    _integers.map(oct),
    _integers.map(bin),
    _names.map(lambda s: s + ":"),
    _names.map(lambda s: "@" + s),
    st.text(alphabet="abc \né", max_size=10).map(lambda s: f'"{s}"'),
    st.just('"a\\nb\\r\\"c"'),
)
_programs = st.lists(st.tuples(_fragments, _WHITESPACE), max_size=30).map(
    lambda parts: "".join(frag + ws for frag, ws in parts)
)


def _position_of(source: str, offset: int) -> Position:
    pos = Position.start()
    for ch in source[:offset]:
        pos = pos.advance(ch)
    return pos


class TestWhitespaceOnly:
    @given(_WHITESPACE)
    @settings(max_examples=100)
    def test_single_token(self, source: str) -> None:
        tokens = tokenize(source)
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.WHITESPACE
        assert tokens[0].raw == source


class TestReconstruction:
    @given(st.text(alphabet=_SAFE_ALPHABET, max_size=300))
    @settings(max_examples=200)
    def test_safe_text(self, source: str) -> None:
        tokens = tokenize(source, integer_bits=4096)
        assert reconstruct(tokens, source) == source
        assert "".join(t.raw for t in tokens) == source

    @given(_programs)
    @settings(max_examples=200)
    def test_programs(self, source: str) -> None:
        tokens = tokenize(source)
        assert reconstruct(tokens, source) == source
        assert "".join(t.raw for t in tokens) == source


class TestPositions:
    @given(_programs)
    @settings(max_examples=100)
    def test_strictly_increasing(self, source: str) -> None:
        offsets = [t.position.offset for t in tokenize(source)]
        assert offsets == sorted(set(offsets))

    @given(_programs)
    @settings(max_examples=100)
    def test_row_and_column_match_source(self, source: str) -> None:
        for tok in tokenize(source):
            assert tok.position == _position_of(source, tok.position.offset)

    @given(_programs)
    @settings(max_examples=100)
    def test_whitespace_never_adjacent(self, source: str) -> None:
        tokens = tokenize(source)
        for a, b in zip(tokens, tokens[1:]):
            assert not (a.type == TokenType.WHITESPACE and b.type == TokenType.WHITESPACE)


class TestIntegers:
    @given(_integers, st.sampled_from([str, hex, oct, bin]))
    @settings(max_examples=200)
    def test_every_radix_decodes(self, value: int, fmt) -> None:
        tokens = tokenize(fmt(value))
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.INTEGER
        assert tokens[0].value == value
