# Filename: app.py
# Author: Rich Lewis @RichLewis007
# Description: Application entry point for the Recoverable rm trash viewer. Handles argument
#              parsing, logging setup, trash store resolution and QApplication creation.

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication, QMessageBox

from . import __version__
from .main_window import TrashWindow
from .services import config as config_service
from .services import logger as logger_service
from .services.errors import ConfigurationError

APP_DISPLAY_NAME = "Recoverable rm"


def _build_arg_parser() -> argparse.ArgumentParser:
    # Construct and return the CLI argument parser.
    parser = argparse.ArgumentParser(
        prog="rrm-gui",
        description="Browse, restore and empty the trash used by rrm.",
    )
    parser.add_argument(
        "--home",
        type=Path,
        default=None,
        help="Home directory whose trash is shown (default: the current user's).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set application log level (default: saved preference, else INFO).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _ensure_qapp() -> QApplication:
    # Return the active QApplication, creating one if needed.
    existing = QApplication.instance()
    if isinstance(existing, QApplication):
        return existing

    QGuiApplication.setApplicationName(APP_DISPLAY_NAME)
    QGuiApplication.setApplicationDisplayName(APP_DISPLAY_NAME)
    QGuiApplication.setOrganizationName(config_service.ORG_NAME)

    app = QApplication(sys.argv)
    app.setApplicationName(APP_DISPLAY_NAME)
    app.setApplicationDisplayName(APP_DISPLAY_NAME)
    app.setOrganizationName(config_service.ORG_NAME)
    return app


def main(argv: list[str] | None = None) -> int:
    # Entry point for the rrm-gui console script.
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    settings_store = config_service.SettingsStore()
    log_level = args.log_level
    if log_level is None:
        log_level = "DEBUG" if settings_store.load_debug_log_level() else "INFO"
    logger_service.configure(log_level=log_level)
    logger = logging.getLogger(__name__)
    logger.debug("Starting viewer with argv=%s", argv)
    logger.debug("Settings stored at %s", settings_store.path)

    app = _ensure_qapp()
    try:
        store = config_service.TrashStore.from_home(args.home.expanduser() if args.home else None)
        store.ensure()
    except ConfigurationError as exc:
        logger.error("Cannot open trash: %s", exc)
        QMessageBox.critical(None, APP_DISPLAY_NAME, str(exc))
        return 1

    window = TrashWindow(store=store, settings_store=settings_store)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
