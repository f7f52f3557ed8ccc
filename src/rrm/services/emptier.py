# Filename: emptier.py
# Author: Rich Lewis @RichLewis007
# Description: Permanently empties the trash. Counts stored items and removes everything
#              inside ``files`` and ``info`` while keeping the directories themselves.

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from .config import TrashStore
from .errors import from_os_error

logger = logging.getLogger(__name__)

ProgressFn = Callable[[int, int, str], None]


def count_items(store: TrashStore) -> int:
    # Number of recorded items, taken from the ``info`` directory.
    if not store.info_root.is_dir():
        return 0
    return sum(1 for _ in store.info_root.iterdir())


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _contents(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(directory.iterdir())


def empty_trash(store: TrashStore, *, progress: ProgressFn | None = None) -> int:
    """Delete every entry in the trash store and return how many were removed.

    ``progress`` is called as ``(index, total, name)`` before each removal.
    The first failure stops the run and is raised as a ``TrashError``.
    """
    targets = _contents(store.files_root) + _contents(store.info_root)
    total = len(targets)
    for index, target in enumerate(targets, start=1):
        if progress is not None:
            progress(index, total, target.name)
        try:
            _remove(target)
        except FileNotFoundError:
            continue
        except OSError as exc:
            raise from_os_error(exc, target) from exc
    logger.info("Emptied trash at %s (%d entries)", store.base, total)
    return total


__all__ = ["count_items", "empty_trash"]
