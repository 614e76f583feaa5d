"""Logging configuration for the engine and API."""

import logging
import sys
from typing import Union

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def setup_logging(level: Union[str, int] = "INFO") -> None:
    """
    Configure a console handler on the root logger.

    Safe to call more than once; only the level changes on repeat calls.

    Args:
        level: Level name ("DEBUG", "INFO"...) or numeric level.
    """
    global _configured

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
    _configured = True

