"""rasm lexer: converts assembler source text into a flat token stream."""

from __future__ import annotations

from rasm.errors import (
    IntegerOverflow,
    InvalidEscapeSequence,
    LexError,
    MalformedEscape,
    MalformedInteger,
    MalformedSymbol,
    UnexpectedCharacter,
    UnterminatedString,
)
from rasm.logger import get_logger
from rasm.registers import resolve
from rasm.tokens import (
    RADIX_PREFIXES,
    Position,
    Token,
    TokenType,
    TokenValue,
    digit_value,
    is_decimal_digit,
    is_ident_char,
    is_ident_start,
    is_whitespace,
)

logger = get_logger(__name__)

DEFAULT_INTEGER_BITS = 64
MAX_INTEGER_BITS = 4096

# Escaped character -> decoded character, inside string literals
_STRING_ESCAPES = {"n": "\n", "r": "\r", '"': '"'}


class Lexer:
    """Tokenize rasm source text one token per step.

    Drive it with :meth:`step` or :meth:`run`, then take the tokens with
    :meth:`finish`. Most callers want :func:`tokenize` instead.
    """

    def __init__(
        self,
        source: str,
        filename: str = "input.asm",
        *,
        integer_bits: int = DEFAULT_INTEGER_BITS,
    ) -> None:
        if not 1 <= integer_bits <= MAX_INTEGER_BITS:
            raise ValueError(
                f"integer_bits must be between 1 and {MAX_INTEGER_BITS}, got {integer_bits}"
            )
        self._source = source
        self._filename = filename
        self._integer_bits = integer_bits
        self._max_integer = 2 ** (integer_bits - 1) - 1
        self._position = Position.start()
        self._tokens: list[Token] = []
        self._done = False
        self._failed = False
        self._finished = False

    @property
    def position(self) -> Position:
        """Position of the next unconsumed character."""
        return self._position

    @property
    def tokens(self) -> tuple[Token, ...]:
        """Tokens produced so far."""
        return tuple(self._tokens)

    @property
    def done(self) -> bool:
        return self._done

    def step(self) -> bool:
        """Lex at most one token. Return True once the input is exhausted."""
        if self._finished:
            raise RuntimeError("lexer has been finished; create a new one")
        if self._failed:
            raise RuntimeError("lexer stopped after an error")

        ch = self._peek()
        if ch == "":
            if not self._done:
                logger.debug("%s: end of input after %d tokens", self._filename, len(self._tokens))
            self._done = True
            return True

        try:
            self._lex_token(ch)
        except LexError:
            self._failed = True
            raise
        return False

    def run(self) -> None:
        """Step until the input is exhausted or a LexError is raised."""
        while not self.step():
            pass

    def finish(self) -> list[Token]:
        """Hand over the token list. Only valid once run() has completed."""
        if self._finished:
            raise RuntimeError("finish() already called")
        if not self._done:
            raise RuntimeError("finish() called before the lexer ran to completion")
        self._finished = True
        tokens, self._tokens = self._tokens, []
        return tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._position.offset >= len(self._source)

    def _peek(self, offset: int = 0) -> str:
        idx = self._position.offset + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._position.offset]
        self._position = self._position.advance(ch)
        return ch

    def _emit(self, tt: TokenType, value: TokenValue, start: Position) -> Token:
        raw = self._source[start.offset : self._position.offset]
        tok = Token(tt, value, raw, start)
        self._tokens.append(tok)
        return tok

    def _take_while_ident(self) -> str:
        chars = []
        while not self._at_end() and is_ident_char(self._peek()):
            chars.append(self._advance())
        return "".join(chars)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_token(self, ch: str) -> None:
        pos = self._position

        if is_whitespace(ch):
            logger.debug("guess: whitespace at %d:%d", pos.line, pos.col)
            self._lex_whitespace()
            return

        if is_decimal_digit(ch):
            logger.debug("guess: integer at %d:%d", pos.line, pos.col)
            self._lex_integer()
            return

        if ch == '"':
            logger.debug("guess: string at %d:%d", pos.line, pos.col)
            self._lex_string()
            return

        if is_ident_start(ch):
            logger.debug("guess: identifier at %d:%d", pos.line, pos.col)
            self._lex_identifier()
            return

        if ch == "@":
            logger.debug("guess: symbol reference at %d:%d", pos.line, pos.col)
            self._lex_symbol()
            return

        raise UnexpectedCharacter(ch, pos, self._source, self._filename)

    # ------------------------------------------------------------------
    # Whitespace
    # ------------------------------------------------------------------

    def _lex_whitespace(self) -> None:
        start = self._position
        while not self._at_end() and is_whitespace(self._peek()):
            self._advance()
        self._emit(TokenType.WHITESPACE, None, start)

    # ------------------------------------------------------------------
    # Integer literals
    # ------------------------------------------------------------------

    def _lex_integer(self) -> None:
        start = self._position
        radix = 10

        if self._peek() == "0" and self._peek(1) in RADIX_PREFIXES:
            radix = RADIX_PREFIXES[self._peek(1)]
            self._advance()
            self._advance()
            if self._at_end():
                raise MalformedInteger(
                    "malformed integer: end of input before integer body",
                    self._position,
                    self._source,
                    self._filename,
                )
            if digit_value(self._peek(), radix) is None:
                raise MalformedInteger(
                    "malformed integer: no integer body",
                    self._position,
                    self._source,
                    self._filename,
                )

        value = 0
        while not self._at_end():
            digit = digit_value(self._peek(), radix)
            if digit is None:
                break
            value = value * radix + digit
            self._advance()

        if value > self._max_integer:
            raise IntegerOverflow(
                value, self._integer_bits, start, self._source, self._filename
            )

        self._emit(TokenType.INTEGER, value, start)

    # ------------------------------------------------------------------
    # String literals
    # ------------------------------------------------------------------

    def _lex_string(self) -> None:
        start = self._position
        self._advance()  # consume opening quote

        chars = []
        while True:
            if self._at_end():
                raise UnterminatedString(start, self._source, self._filename)

            ch = self._peek()
            if ch == '"':
                self._advance()
                break

            if ch == "\\":
                chars.append(self._lex_string_escape())
                continue

            chars.append(self._advance())

        self._emit(TokenType.STRING, "".join(chars), start)

    def _lex_string_escape(self) -> str:
        start = self._position
        self._advance()  # consume backslash

        if self._at_end():
            raise MalformedEscape(start, self._source, self._filename)

        ch = self._peek()
        if ch in _STRING_ESCAPES:
            self._advance()
            return _STRING_ESCAPES[ch]

        raise InvalidEscapeSequence(ch, start, self._source, self._filename)

    # ------------------------------------------------------------------
    # Identifiers, registers and labels
    # ------------------------------------------------------------------

    def _lex_identifier(self) -> None:
        start = self._position
        name = self._take_while_ident()

        # name: defines a label
        if self._peek() == ":":
            if resolve(name) is not None:
                raise MalformedSymbol(
                    f"register name '{name}' cannot be used as a label",
                    start,
                    self._source,
                    self._filename,
                )
            self._advance()
            self._emit(TokenType.SYMBOL_LITERAL, name, start)
            return

        lowered = name.lower()
        register = resolve(lowered)
        if register is not None:
            self._emit(TokenType.REGISTER, register, start)
        else:
            self._emit(TokenType.INSTRUCTION, lowered, start)

    def _lex_symbol(self) -> None:
        start = self._position
        self._advance()  # consume @

        if not is_ident_start(self._peek()):
            raise MalformedSymbol(
                "expected a label name after '@'", start, self._source, self._filename
            )

        name = self._take_while_ident()
        if resolve(name) is not None:
            raise MalformedSymbol(
                f"register name '{name}' cannot be used as a label",
                start,
                self._source,
                self._filename,
            )
        self._emit(TokenType.SYMBOL, name, start)


def tokenize(
    source: str,
    filename: str = "input.asm",
    *,
    integer_bits: int = DEFAULT_INTEGER_BITS,
) -> list[Token]:
    """Convenience function: tokenize source text and return the token list."""
    lexer = Lexer(source, filename, integer_bits=integer_bits)
    lexer.run()
    return lexer.finish()
