# Filename: logger.py
# Author: Rich Lewis @RichLewis007
# Description: Logging configuration utilities. Sets up a rotating file handler for the full
#              trash activity history and a console handler for the chosen log level.

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

from platformdirs import PlatformDirs

from .config import APP_NAME, ORG_NAME

LOG_FILENAME = "recoverable-rm.log"


def _get_log_path() -> Path:
    # Return the path to the rotating log file, creating folders as needed.
    dirs = PlatformDirs(appname=APP_NAME, appauthor=ORG_NAME)
    path = Path(dirs.user_log_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path / LOG_FILENAME


def configure(*, log_level: str = "WARNING", log_path: Path | None = None) -> Path:
    # Configure root logger with rotating file and console handlers; return the log file path.
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    if log_path is None:
        log_path = _get_log_path()
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=2 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(threadName)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)

    # Console output shares stderr with per-item error reports.
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("rrm: %(levelname)s: %(message)s"))
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.WARNING))

    # Avoid duplicate handlers when reconfiguring.
    for handler in list(root.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.close()
    root.handlers.clear()
    root.addHandler(file_handler)
    root.addHandler(console_handler)
    return log_path
