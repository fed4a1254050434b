"""Utilities to configure consistent logging for the analytics CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(
    log_path: Path | None = None,
    level: int | str = logging.INFO,
    stream: TextIO | None = None,
) -> None:
    """Install stream (and optional file) handlers on the root logger.

    Args:
        log_path: Optional path to a file where logs will be written.
        level: Logging level, numeric or by name (defaults to INFO).
        stream: Console stream for log lines (defaults to stdout).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    # force=True drops handlers installed by an earlier call
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
