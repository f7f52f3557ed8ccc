# Filename: listing.py
# Author: Rich Lewis @RichLewis007
# Description: Reads the trash store for display. Pairs each entry under ``files`` with its
#              ``.trashinfo`` sidecar and renders the result as a text table.

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .config import TrashStore
from .formatting import format_bytes, format_date, or_unknown
from .trashinfo import info_name, read_trashinfo

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "The trash is empty."
HEADERS = ("File", "Original Path", "Deleted", "Size")


@dataclass(frozen=True, slots=True)
class TrashEntry:
    # One row of the trash listing.

    name: str
    original_path: str | None
    deletion_date: datetime | None
    size: int | None
    is_dir: bool

    @property
    def has_metadata(self) -> bool:
        return self.original_path is not None

    def row(self) -> tuple[str, str, str, str]:
        # Display strings, substituting the placeholder for unknown fields.
        return (
            self.name + ("/" if self.is_dir else ""),
            or_unknown(self.original_path),
            format_date(self.deletion_date),
            format_bytes(self.size),
        )


def entry_size(path: Path) -> int | None:
    # Apparent size of a file, or the sum of a directory tree; None if unreadable.
    try:
        if path.is_symlink() or not path.is_dir():
            return path.lstat().st_size
        total = 0
        for dirpath, _dirnames, filenames in os.walk(path):
            for filename in filenames:
                try:
                    total += os.lstat(os.path.join(dirpath, filename)).st_size
                except OSError:
                    continue
        return total
    except OSError:
        return None


def list_trash(store: TrashStore) -> list[TrashEntry]:
    # Collect every entry under ``files`` sorted by name.
    if not store.files_root.is_dir():
        return []

    entries: list[TrashEntry] = []
    try:
        children = sorted(store.files_root.iterdir(), key=lambda item: item.name)
    except OSError as exc:
        logger.info("Failed to read the trash directory %s: %s", store.files_root, exc)
        raise

    for child in children:
        info = read_trashinfo(store.info_root / info_name(child.name))
        entries.append(
            TrashEntry(
                name=child.name,
                original_path=info.path if info else None,
                deletion_date=info.deletion_date if info else None,
                size=entry_size(child),
                is_dir=child.is_dir() and not child.is_symlink(),
            )
        )
    logger.debug("Listed %d trash entries", len(entries))
    return entries


def render_table(entries: list[TrashEntry]) -> str:
    # Box-drawn table of the listing, or the empty-trash message.
    if not entries:
        return EMPTY_MESSAGE

    rows = [entry.row() for entry in entries]
    widths = [len(header) for header in HEADERS]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row, strict=True)]

    def line(left: str, mid: str, right: str) -> str:
        return left + mid.join("─" * (width + 2) for width in widths) + right

    def cells(values: tuple[str, ...]) -> str:
        padded = (
            f" {value.rjust(width) if index == 3 else value.ljust(width)} "
            for index, (value, width) in enumerate(zip(values, widths, strict=True))
        )
        return "│" + "│".join(padded) + "│"

    out = [line("┌", "┬", "┐"), cells(HEADERS), line("├", "┼", "┤")]
    out.extend(cells(row) for row in rows)
    out.append(line("└", "┴", "┘"))
    return "\n".join(out)


__all__ = ["EMPTY_MESSAGE", "HEADERS", "TrashEntry", "entry_size", "list_trash", "render_table"]
