# Filename: status_bar.py
# Author: Rich Lewis @RichLewis007
# Description: Status bar widget for the trash viewer. Shows the item count, the trash
#              location and progress while the trash is being emptied.

from __future__ import annotations

from PySide6.QtWidgets import QLabel, QProgressBar, QStatusBar, QWidget


class AppStatusBar(QStatusBar):
    # Status bar showing trash stats and empty progress.

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._progress = QProgressBar(self)
        self._progress.setVisible(False)

        self._stats = QLabel("Ready", self)
        self._location = QLabel("", self)

        self.addWidget(self._stats, 1)
        self.addPermanentWidget(self._location, 0)
        self.addPermanentWidget(self._progress, 0)

    def set_message(self, message: str) -> None:
        self._stats.setText(message)

    def set_location(self, location: str) -> None:
        self._location.setText(location)

    def set_progress(self, current: int | None, total: int = 0) -> None:
        # Show ``current`` of ``total`` or hide the bar when ``current`` is None.
        if current is None or total <= 0:
            self._progress.setVisible(False)
            return
        self._progress.setRange(0, total)
        self._progress.setValue(current)
        self._progress.setVisible(True)
