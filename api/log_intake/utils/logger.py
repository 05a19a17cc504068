"""
Logging for the intake API.

Every intake module logs through a child of the ``log-intake`` logger, so the
level chosen in ``setup_logging`` (or ``LOG_LEVEL``) governs all of them.
"""

import logging
import os
import sys
from typing import Optional

LOGGER_NAME = 'log-intake'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _resolve_level(level: Optional[str]) -> int:
    if level is None:
        level = os.environ.get('LOG_LEVEL', 'INFO')
    return getattr(logging, level.upper(), logging.INFO)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return the intake logger, or a named child of it

    Args:
        name: Component name, e.g. 'queue' gives 'log-intake.queue'
    """
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure stdout logging and set the intake logger's level

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR); defaults to LOG_LEVEL

    Returns:
        The 'log-intake' logger
    """
    resolved = _resolve_level(level)

    logging.basicConfig(level=resolved, format=LOG_FORMAT, stream=sys.stdout)

    logger = get_logger()
    logger.setLevel(resolved)
    return logger
