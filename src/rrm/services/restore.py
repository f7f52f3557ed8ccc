# Filename: restore.py
# Author: Rich Lewis @RichLewis007
# Description: Moves a trashed entry back to the location recorded in its ``.trashinfo``
#              sidecar, then removes the sidecar.

from __future__ import annotations

import logging
import os
from pathlib import Path

from .config import TrashStore
from .errors import ConflictError, NotFoundError, from_os_error
from .trashinfo import info_name, read_trashinfo, remove_trashinfo

logger = logging.getLogger(__name__)


def restore_item(store: TrashStore, name: str) -> Path:
    # Restore ``files/<name>`` to its original path and return that path.
    source = store.files_root / name
    if not os.path.lexists(source):
        raise NotFoundError(f"'{name}' is not in the trash", path=source)

    info_path = store.info_root / info_name(name)
    info = read_trashinfo(info_path)
    if info is None:
        raise NotFoundError(
            f"no restore information for '{name}'",
            path=info_path,
        )

    destination = Path(info.path)
    if os.path.lexists(destination):
        raise ConflictError(
            f"cannot restore '{name}': {destination} already exists",
            path=destination,
        )

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        os.rename(source, destination)
    except OSError as exc:
        raise from_os_error(exc, destination) from exc

    remove_trashinfo(info_path)
    logger.info("Restored %s to %s", name, destination)
    return destination


__all__ = ["restore_item"]
