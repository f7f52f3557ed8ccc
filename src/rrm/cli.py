# Filename: cli.py
# Author: Rich Lewis @RichLewis007
# Description: Command-line interface for Recoverable rm. Parses rm-style flags and dispatches to
#              trashing, listing, emptying or restoring, returning the process exit status.

from __future__ import annotations

import argparse
import logging
import os
import sys

from . import __version__
from .services import logger as logger_service
from .services.config import TrashStore
from .services.emptier import count_items, empty_trash
from .services.errors import ConfigurationError, TrashError
from .services.listing import list_trash, render_table
from .services.prompt import confirm
from .services.relocator import RelocationOptions, TrashRelocator
from .services.restore import restore_item
from .workers.batch_executor import BatchFailure, run_batch

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    # Create and configure the command-line argument parser.
    parser = argparse.ArgumentParser(
        prog="rrm",
        description="Move files and directories to the trash instead of deleting them.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Files or directories to send to the trash.",
    )
    parser.add_argument(
        "-r",
        "-R",
        "--recursive",
        action="store_true",
        help="Remove directories and their contents.",
    )
    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Prompt before every removal (items are processed one at a time).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Explain what is being done.",
    )
    parser.add_argument(
        "--skip-trash",
        action="store_true",
        help="Delete permanently instead of moving to the trash.",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        metavar="N",
        help="Number of worker threads (default: CPU count).",
    )

    actions = parser.add_mutually_exclusive_group()
    actions.add_argument(
        "--view-trash",
        action="store_true",
        help="Display the contents of the trash.",
    )
    actions.add_argument(
        "--empty",
        action="store_true",
        help="Permanently delete everything in the trash.",
    )
    actions.add_argument(
        "--restore",
        metavar="NAME",
        help="Move a trashed entry back to its original location.",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level (default: %(default)s).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _report_failure(failure: BatchFailure) -> None:
    message = failure.message
    if not message.startswith("cannot remove"):
        message = f"cannot remove '{failure.source}': {message}"
    print(f"rrm: {message}", file=sys.stderr, flush=True)


def _trash_files(args: argparse.Namespace, store: TrashStore) -> int:
    options = RelocationOptions(
        recursive=args.recursive,
        skip_trash=args.skip_trash,
        interactive=args.interactive,
        verbose=args.verbose,
    )
    relocator = TrashRelocator(store, confirm=confirm, echo=lambda text: print(text, flush=True))
    max_workers = args.jobs if args.jobs and args.jobs > 0 else os.cpu_count()
    result = run_batch(
        args.files,
        options,
        relocator,
        max_workers=max_workers,
        on_error=_report_failure,
    )
    for item in result.succeeded:
        if item.metadata_error is not None:
            print(
                f"rrm: warning: '{item.source}' trashed without restore information: "
                f"{item.metadata_error}",
                file=sys.stderr,
            )
    return EXIT_OK if result.ok else EXIT_FAILURE


def _empty(store: TrashStore) -> int:
    count = count_items(store)
    if not confirm(f"Permanently delete all {count} file(s) in the trash?"):
        print("Cancelled")
        return EXIT_OK
    removed = empty_trash(store)
    logger.debug("Removed %d entries while emptying", removed)
    return EXIT_OK


def _restore(store: TrashStore, name: str) -> int:
    destination = restore_item(store, name)
    print(f"restored '{name}' to {destination}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    # Entry point for the CLI utility.
    parser = build_parser()
    args = parser.parse_args(argv)

    has_action = args.view_trash or args.empty or args.restore is not None
    if not args.files and not has_action:
        parser.print_usage(sys.stderr)
        print("rrm: error: missing operand", file=sys.stderr)
        print("Try 'rrm --help' for more information.", file=sys.stderr)
        return EXIT_USAGE
    if args.files and has_action:
        parser.error("FILE operands cannot be combined with --view-trash, --empty or --restore")

    try:
        logger_service.configure(log_level=args.log_level)
    except OSError as exc:
        # Fall back to console-only logging.
        logging.basicConfig(level=args.log_level)
        logger.warning("File logging unavailable: %s", exc)
    logger.debug("Starting rrm with argv=%s", argv)

    try:
        store = TrashStore.from_home()
        store.ensure()
    except ConfigurationError as exc:
        print(f"rrm: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        if args.view_trash:
            print(render_table(list_trash(store)))
            return EXIT_OK
        if args.empty:
            return _empty(store)
        if args.restore is not None:
            return _restore(store, args.restore)
        return _trash_files(args, store)
    except (TrashError, OSError) as exc:
        print(f"rrm: {exc}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
