"""Logging helpers for rasm.

Example:
    >>> from rasm.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("lexing %s", "boot.asm")
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a standard library logger under the "rasm." namespace.

    Example:
        >>> get_logger("mymodule").name
        'rasm.mymodule'
    """
    if not (name == "rasm" or name.startswith("rasm.")):
        name = f"rasm.{name}"
    return logging.getLogger(name)


def configure(verbose: bool = False) -> None:
    """Send rasm log records to stderr; DEBUG when *verbose*, else WARNING."""
    logging.basicConfig(format=LOG_FORMAT)
    get_logger("rasm").setLevel(logging.DEBUG if verbose else logging.WARNING)
