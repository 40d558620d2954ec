# src/gist_todo/logging_setup.py

"""
Logging for the gist-todo CLI.

Command output goes to stdout via print(); logs never do. stderr only shows our
own records at the configured level (WARNING by default) plus third-party errors.
Every run appends DEBUG detail to <data_dir>/gist_todo.log, rotated by size.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "gist_todo.log"
LOG_FILE_MAX_BYTES = 1_000_000
LOG_FILE_BACKUPS = 3

_APP_LOGGER = "gist_todo"


class _ConsoleNoiseFilter(logging.Filter):
    """gist_todo records pass; anything else (httpx, py.warnings, ...) only at ERROR."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == _APP_LOGGER or record.name.startswith(_APP_LOGGER + "."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """Install the stderr and file handlers on the root logger, replacing any present."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(process)d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)

    logging.captureWarnings(True)

    # httpx request lines stay in the file; httpcore wire traces do not.
    logging.getLogger("httpcore").setLevel(logging.INFO)
