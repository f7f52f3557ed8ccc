# Filename: empty_worker.py
# Author: Rich Lewis @RichLewis007
# Description: Background worker for emptying the trash. Runs the permanent deletion in a
#              separate thread so the viewer stays responsive, reporting progress as it goes.

from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QObject, Signal

from rrm.services.config import TrashStore
from rrm.services.emptier import empty_trash
from rrm.services.errors import TrashError


@dataclass(slots=True)
class EmptyResult:
    # Summary of an empty request.

    removed: int


class EmptyWorker(QObject):
    # Permanently deletes the trash contents in a worker thread.

    progress = Signal(int, int, str)
    finished = Signal(object)  # EmptyResult
    error = Signal(str)

    def __init__(self, store: TrashStore) -> None:
        super().__init__()
        self._store = store

    def start(self) -> None:
        # Remove every entry, emitting progress and a final result or error.
        try:
            removed = empty_trash(self._store, progress=self.progress.emit)
        except (TrashError, OSError) as exc:
            self.error.emit(f"Failed to empty the trash: {exc}")
            return
        self.finished.emit(EmptyResult(removed=removed))
