"""
Logging setup for the command line.
"""
from __future__ import annotations

import logging

from rich.logging import RichHandler


LOG_FORMAT = "%(name)s - %(message)s"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Route sheet_* loggers through a rich handler. Safe to call twice."""
    level = logging.DEBUG if verbose else logging.INFO
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in root_logger.handlers):
        handler = RichHandler(show_path=False, markup=False)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)

    for handler in root_logger.handlers:
        handler.setLevel(level)
    return root_logger
