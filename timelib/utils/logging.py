"""Logging utilities built on top of :mod:`loguru`."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger


def setup_logging(log_file: Optional[Path] = None, level: str = "INFO") -> None:
    """Route loguru output to stdout, and optionally a file, then enable ``timelib`` records.

    Args:
        log_file: Where stopwatch and timer records are also written, rotated
            at 10 MB. Parent directories are created.
        level: Lowest level emitted; round and reset records are ``DEBUG``.
    """

    logger.remove()
    logger.add(lambda msg: print(msg, end=""), level=level)
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level, rotation="10 MB", retention="7 days")
    logger.enable("timelib")


__all__ = ["setup_logging", "logger"]
