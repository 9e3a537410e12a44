"""Logging setup for command-line entry points.

The library itself only creates module loggers; call ``configure_logging()`` once
from an entry point to get output. The function is idempotent: if the root logger
already has handlers, it does nothing.
"""

import logging

from discretebn import config


def configure_logging(level=None, log_file: str = None) -> None:
    """Configure root logger with a console handler and an optional file handler.

    level: a logging level (int or name), defaults to config.LOG_LEVEL
    log_file: if given, records are also appended to this file
    """
    root = logging.getLogger()
    if root.handlers:
        return

    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = logging.Formatter(fmt)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file is not None:
        fh = logging.FileHandler(log_file, mode="a")
        fh.setFormatter(formatter)
        root.addHandler(fh)

    root.setLevel(level)
