"""Logging setup shared by the CLI and tests.

Usage:
    from loanledger.logging import setup_logging
    setup_logging("DEBUG")
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries whose INFO output drowns the ledger's own messages
NOISY_LOGGERS = ["sqlalchemy.engine", "sqlalchemy.pool"]


def setup_logging(level: Optional[str | int] = None) -> logging.Logger:
    """Configure the loanledger logger to write to stderr.

    Args:
        level: Log level name or number. If None, checks LOANLEDGER_LOG_LEVEL
            environment variable, then defaults to WARNING

    Returns:
        The configured "loanledger" logger
    """
    if level is None:
        level = os.environ.get("LOANLEDGER_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger("loanledger")
    logger.setLevel(level)

    # Avoid stacking handlers when the CLI is invoked repeatedly in one process
    for handler in list(logger.handlers):
        if getattr(handler, "_loanledger_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler._loanledger_handler = True
    logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
