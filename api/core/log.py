"""
Logging setup.

Modules log through `logging.getLogger(__name__)` using an
`event key=value ...` message style. This only configures the root logger.
"""

from __future__ import annotations

import logging
import sys

from . import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None


def configure_logging(level: str | None = None) -> logging.Handler:
    """Configure the root logger and return the handler it installed."""
    global _handler

    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or settings.log_level()).upper(), logging.INFO))

    # Re-running (reload, tests) must not stack handlers.
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(_handler)

    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    return _handler
