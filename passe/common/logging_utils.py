"""
Logging helpers shared by the CLI and the sync server.
"""

from __future__ import annotations

import logging
from typing import TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    logger: logging.Logger, log_level: int, stream: TextIO | None = None
) -> None:
    """
    Give ``logger`` one formatted StreamHandler at ``log_level``.

    Calling this again only adjusts the level, so repeated CLI invocations
    in one process never stack handlers.

    Args:
        logger: The logger instance to configure
        log_level: The logging level to set
        stream: Where to write records (default: stderr)
    """
    logger.setLevel(log_level)
    for existing in logger.handlers:
        if isinstance(existing, logging.StreamHandler):
            existing.setLevel(log_level)
            return
    handler = logging.StreamHandler(stream)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
