# Filename: trash_model.py
# Author: Rich Lewis @RichLewis007
# Description: Qt table model for the trash viewer. Presents TrashEntry rows with their
#              original path, deletion date and size, keeping the entry on each name item.

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import ClassVar

from PySide6.QtCore import QObject, Qt
from PySide6.QtGui import QBrush, QColor, QStandardItem, QStandardItemModel

from rrm.services.listing import TrashEntry

logger = logging.getLogger(__name__)

_MISSING_INFO_COLOR = QColor(160, 160, 160)


class TrashTableModel(QStandardItemModel):
    # Qt model representing the entries of a trash store.

    HEADERS: ClassVar[list[str]] = [
        "File",
        "Original Path",
        "Deleted",
        "Size",
    ]

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.setHorizontalHeaderLabels(self.HEADERS)
        self._entries: list[TrashEntry] = []

    def load_entries(self, entries: Sequence[TrashEntry]) -> None:
        # Replace the model contents with ``entries``.
        self.clear()
        self.setHorizontalHeaderLabels(self.HEADERS)
        self._entries = list(entries)
        for entry in self._entries:
            self.appendRow(self._create_row(entry))
        logger.info("Loaded %d trash entries into table model", len(self._entries))

    def entries(self) -> list[TrashEntry]:
        return list(self._entries)

    def entry_at(self, row: int) -> TrashEntry | None:
        # Return the entry stored on the name item of ``row``.
        item = self.item(row, 0)
        if item is None:
            return None
        entry = item.data(Qt.ItemDataRole.UserRole)
        return entry if isinstance(entry, TrashEntry) else None

    def _create_row(self, entry: TrashEntry) -> list[QStandardItem]:
        # Create a standard-item row for ``entry``.
        name, original, deleted, size = entry.row()
        name_item = QStandardItem(name)
        name_item.setData(entry, Qt.ItemDataRole.UserRole)
        if entry.is_dir:
            font = name_item.font()
            font.setBold(True)
            name_item.setFont(font)

        size_item = QStandardItem(size)
        size_item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)

        row = [name_item, QStandardItem(original), QStandardItem(deleted), size_item]
        for item in row:
            item.setEditable(False)
            if not entry.has_metadata:
                item.setForeground(QBrush(_MISSING_INFO_COLOR))
        return row
