"""Minimal logging utilities for markgen.

Provides a simple get_logger function that wraps the standard library logging.
markgen never installs handlers; hosts decide where records go.

Example:
    >>> from markgen.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Walking %d nodes", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "markgen." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("compiler")
        >>> logger.name
        'markgen.compiler'
    """
    if not (name == "markgen" or name.startswith("markgen.")):
        name = f"markgen.{name}"
    return logging.getLogger(name)
