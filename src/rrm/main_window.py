# Filename: main_window.py
# Author: Rich Lewis @RichLewis007
# Description: Main window for the Recoverable rm trash viewer. Lists trashed entries and offers
#              refresh, restore and empty actions, running the empty operation on a worker thread.

from __future__ import annotations

import logging

from PySide6.QtCore import Qt, QThread
from PySide6.QtGui import QAction, QCloseEvent, QKeySequence
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHeaderView,
    QMainWindow,
    QMessageBox,
    QTableView,
    QToolBar,
    QWidget,
)

from .models.trash_model import TrashTableModel
from .services.config import SettingsStore, TrashStore
from .services.emptier import count_items
from .services.errors import TrashError
from .services.listing import TrashEntry, list_trash
from .services.restore import restore_item
from .views.status_bar import AppStatusBar
from .workers.empty_worker import EmptyResult, EmptyWorker

logger = logging.getLogger(__name__)


class TrashWindow(QMainWindow):
    # Primary viewer window.

    def __init__(
        self,
        *,
        store: TrashStore,
        settings_store: SettingsStore,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._settings_store = settings_store
        self._empty_thread: QThread | None = None
        self._empty_worker: EmptyWorker | None = None

        self.setWindowTitle("Trash")
        self.resize(1000, 600)
        logger.debug("TrashWindow initialized: files=%s", store.files_root)

        self._init_ui()
        self._restore_state()
        self.refresh()

    def _init_ui(self) -> None:
        # Create child widgets and compose the layout.
        self.model = TrashTableModel(self)
        self.table = QTableView(self)
        self.table.setModel(self.model)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.table.setSortingEnabled(True)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(
            1, QHeaderView.ResizeMode.Stretch
        )
        self.table.horizontalHeader().sortIndicatorChanged.connect(self._on_sort_changed)
        self.setCentralWidget(self.table)

        self.status_bar = AppStatusBar(self)
        self.status_bar.set_location(str(self._store.base))
        self.setStatusBar(self.status_bar)

        self._create_actions()
        self.table.selectionModel().selectionChanged.connect(self._update_action_states)

    def _create_actions(self) -> None:
        # Build the window toolbar and key QAction objects.
        toolbar = QToolBar("Trash actions", self)
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self.refresh_action = QAction("Refresh", self)
        self.refresh_action.setShortcut(QKeySequence.StandardKey.Refresh)
        self.refresh_action.triggered.connect(self.refresh)
        toolbar.addAction(self.refresh_action)

        self.restore_action = QAction("Restore", self)
        self.restore_action.setEnabled(False)
        self.restore_action.setToolTip("Move the selected entries back to where they came from")
        self.restore_action.triggered.connect(self._restore_selection)
        toolbar.addAction(self.restore_action)

        toolbar.addSeparator()

        self.empty_action = QAction("Empty Trash..", self)
        self.empty_action.setToolTip("Permanently delete everything in the trash")
        self.empty_action.triggered.connect(self._prompt_empty)
        toolbar.addAction(self.empty_action)

        self.debug_action = QAction("Debug logging", self)
        self.debug_action.setCheckable(True)
        self.debug_action.setChecked(self._settings_store.load_debug_log_level())
        self.debug_action.toggled.connect(self._on_debug_toggled)

        self.quit_action = QAction("Quit", self)
        self.quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        self.quit_action.triggered.connect(self.close)

        file_menu = self.menuBar().addMenu("&File")
        file_menu.addAction(self.refresh_action)
        file_menu.addAction(self.restore_action)
        file_menu.addSeparator()
        file_menu.addAction(self.empty_action)
        file_menu.addSeparator()
        file_menu.addAction(self.debug_action)
        file_menu.addSeparator()
        file_menu.addAction(self.quit_action)

    def _restore_state(self) -> None:
        # Restore geometry and sort column.
        geometry = self._settings_store.load_window_geometry()
        if geometry is not None:
            self.restoreGeometry(geometry)
        else:
            logger.debug("No previous window geometry stored.")
        column = self._settings_store.load_sort_column()
        if 0 <= column < len(TrashTableModel.HEADERS):
            self.table.sortByColumn(column, Qt.SortOrder.AscendingOrder)

    def closeEvent(self, event: QCloseEvent) -> None:
        # Persist state and wait for background work before closing.
        self._cancel_active_empty(wait=True)
        self._settings_store.save_window_geometry(self.saveGeometry())
        super().closeEvent(event)

    # ------------------------------------------------------------------
    # Listing

    def refresh(self) -> None:
        # Reload the table from disk.
        try:
            entries = list_trash(self._store)
        except OSError as exc:
            QMessageBox.critical(self, "Trash", f"Failed to read the trash directory:\n{exc}")
            return
        self.model.load_entries(entries)
        header = self.table.horizontalHeader()
        self.table.sortByColumn(header.sortIndicatorSection(), header.sortIndicatorOrder())
        self.table.resizeColumnToContents(0)
        self.status_bar.set_message(
            f"{len(entries)} item(s) in trash" if entries else "The trash is empty."
        )
        self.empty_action.setEnabled(bool(entries) or count_items(self._store) > 0)
        self._update_action_states()

    def _selected_entries(self) -> list[TrashEntry]:
        rows = {index.row() for index in self.table.selectionModel().selectedRows()}
        entries = [self.model.entry_at(row) for row in sorted(rows)]
        return [entry for entry in entries if entry is not None]

    def _update_action_states(self, *_args: object) -> None:
        selected = self._selected_entries()
        self.restore_action.setEnabled(any(entry.has_metadata for entry in selected))

    def _on_debug_toggled(self, enabled: bool) -> None:
        # Persist the preference and apply it to the console handler right away.
        self._settings_store.save_debug_log_level(enabled)
        level = logging.DEBUG if enabled else logging.INFO
        for handler in logging.getLogger().handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)

    def _on_sort_changed(self, column: int, _order: Qt.SortOrder) -> None:
        self._settings_store.save_sort_column(column)

    # ------------------------------------------------------------------
    # Restore workflow

    def _restore_selection(self) -> None:
        # Restore each selected entry, collecting failures for one report.
        errors: list[str] = []
        restored = 0
        for entry in self._selected_entries():
            try:
                restore_item(self._store, entry.name)
            except TrashError as exc:
                errors.append(f"{entry.name}: {exc}")
                continue
            restored += 1

        if errors:
            QMessageBox.warning(self, "Restore issues", "\n".join(errors))
        self.refresh()
        self.status_bar.set_message(f"Restored {restored} item(s). {len(errors)} failed.")

    # ------------------------------------------------------------------
    # Empty workflow

    def _prompt_empty(self) -> None:
        count = count_items(self._store)
        response = QMessageBox.question(
            self,
            "Empty trash",
            f"Permanently delete all {count} file(s) in the trash?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if response != QMessageBox.StandardButton.Yes:
            self.status_bar.set_message("Cancelled")
            return
        self._start_empty()

    def _start_empty(self) -> None:
        # Start the background worker that empties the trash.
        self._cancel_active_empty(wait=True)
        self.status_bar.set_message("Emptying trash…")
        self._set_controls_enabled(False)

        worker = EmptyWorker(self._store)
        thread = QThread(self)
        worker.moveToThread(thread)

        thread.started.connect(worker.start)
        worker.progress.connect(self._on_empty_progress)
        worker.finished.connect(self._on_empty_finished)
        worker.error.connect(self._on_empty_error)

        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)
        worker.error.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.finished.connect(self._on_empty_thread_finished)

        self._empty_worker = worker
        self._empty_thread = thread
        thread.start()

    def _cancel_active_empty(self, *, wait: bool) -> None:
        # Stop the empty worker thread if it is running.
        if self._empty_thread is not None:
            self._empty_thread.quit()
            if wait:
                self._empty_thread.wait(3000)
            self._empty_thread = None
            self._empty_worker = None

    def _on_empty_progress(self, current: int, total: int, name: str) -> None:
        self.status_bar.set_progress(current, total)
        self.status_bar.set_message(f"Deleting {current}/{total}: {name}")

    def _on_empty_error(self, message: str) -> None:
        self.status_bar.set_progress(None)
        self._set_controls_enabled(True)
        QMessageBox.critical(self, "Empty failed", message)
        self.refresh()

    def _on_empty_finished(self, result: EmptyResult) -> None:
        self.status_bar.set_progress(None)
        self._set_controls_enabled(True)
        self.refresh()
        self.status_bar.set_message(f"Deleted {result.removed} entries.")

    def _on_empty_thread_finished(self) -> None:
        self._empty_thread = None
        self._empty_worker = None

    def _set_controls_enabled(self, enabled: bool) -> None:
        for action in (self.refresh_action, self.restore_action, self.empty_action):
            action.setEnabled(enabled)
        if enabled:
            self._update_action_states()
