"""Command-line interface for rasm."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rasm.errors import LexError, SourceReadError
from rasm.lexer import DEFAULT_INTEGER_BITS, MAX_INTEGER_BITS, tokenize
from rasm.logger import configure, get_logger
from rasm.tokens import Token

logger = get_logger(__name__)

CONFIG_FILENAME = "rasm.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    integer_bits: int
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="rasm",
        description="Lexer for the rasm register-machine assembler",
    )
    p.add_argument("input", help="Input assembler source file")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_FILENAME})",
    )
    p.add_argument(
        "--integer-bits",
        default=None,
        metavar="N",
        help=f"Signed width integer literals must fit in (default: {DEFAULT_INTEGER_BITS})",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-lex")
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def parse_integer_bits(value: object) -> int:
    """Validate an integer width from the CLI or config file."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise argparse.ArgumentTypeError(f"invalid integer width: {value!r}")
    try:
        bits = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer width: {value!r}") from None
    if bits < 1:
        raise argparse.ArgumentTypeError(f"integer width must be positive: {bits}")
    if bits > MAX_INTEGER_BITS:
        raise argparse.ArgumentTypeError(
            f"integer width must be at most {MAX_INTEGER_BITS}: {bits}"
        )
    return bits


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_FILENAME

    if not path.is_file():
        logger.debug("no config file at %s", path)
        return {}

    logger.debug("loading config from %s", path)
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except UnicodeDecodeError as exc:
        raise argparse.ArgumentTypeError(
            f"cannot read config {path}: not valid UTF-8 ({exc.reason})"
        ) from exc
    except OSError as exc:
        raise argparse.ArgumentTypeError(
            f"cannot read config {path}: {exc.strerror or exc}"
        ) from exc


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    integer_bits = DEFAULT_INTEGER_BITS
    cfg_lexer = config.get("lexer")
    if cfg_lexer is not None and not isinstance(cfg_lexer, dict):
        logger.debug("ignoring non-table [lexer] entry in config: %r", cfg_lexer)
    if isinstance(cfg_lexer, dict) and "integer_bits" in cfg_lexer:
        integer_bits = parse_integer_bits(cfg_lexer["integer_bits"])
    if args.integer_bits is not None:
        integer_bits = parse_integer_bits(args.integer_bits)

    return CliOptions(
        input_file=input_file,
        integer_bits=integer_bits,
        watch=args.watch,
        debug=args.debug,
    )


def read_source(path: Path) -> str:
    """Read an input file fully as UTF-8 text."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SourceReadError(str(path), f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise SourceReadError(str(path), exc.strerror or str(exc)) from exc


def lex_file(options: CliOptions) -> list[Token]:
    """Read and tokenize an assembler source file."""
    from rasm.debug import dump_tokens

    source = read_source(options.input_file)
    tokens = tokenize(source, str(options.input_file), integer_bits=options.integer_bits)

    if options.debug:
        dump_tokens(tokens)

    logger.info("lexed %s: %d tokens", options.input_file, len(tokens))
    return tokens


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-lex on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    tokens = lex_file(options)
                    print(f"{options.input_file}: {len(tokens)} tokens", file=sys.stderr)
                except LexError as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
                except SourceReadError as exc:
                    print(f"error: {exc}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure(args.verbose)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        tokens = lex_file(options)
    except LexError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except SourceReadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(f"{options.input_file}: {len(tokens)} tokens", file=sys.stderr)
    return 0
