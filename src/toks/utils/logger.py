"""Minimal logging utilities for toks.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from toks.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Registered rule %r", rule)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "toks." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("grammar")
        >>> logger.name
        'toks.grammar'
    """
    if not (name == "toks" or name.startswith("toks.")):
        name = f"toks.{name}"
    return logging.getLogger(name)
