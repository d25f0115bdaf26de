"""Minimal logging utilities for lexgen.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from lexgen.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Compiled 4 rules")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "lexgen." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'lexgen.mymodule'
    """
    if not (name == "lexgen" or name.startswith("lexgen.")):
        name = f"lexgen.{name}"
    return logging.getLogger(name)
