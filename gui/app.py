"""
Cursor browser GUI.

A single window listing the rows of a query against a SQLite database. Queries
run off the UI thread; each result replaces the previous cursor through the
list adapter, which disposes the old one.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListView,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cursor_engine.cursor.api import Column
from gui.adapters.cursor_loader import CursorLoaderAdapter
from gui.adapters.record_list import RecordListAdapter
from gui.settings_store import ViewerSettings

logger = logging.getLogger(__name__)


class CursorBrowserWindow(QWidget):
    """
    Main window for browsing query results.

    Responsibilities
    ----------------
    - Host a list view bound to a RecordListAdapter
    - Dispatch queries to the background loader
    - Release the loader thread and the active cursor on close
    """

    def __init__(self, database_path: Path, settings: ViewerSettings) -> None:
        """
        Initialize the window and issue the first query.

        Parameters
        ----------
        database_path:
            SQLite database to query.
        settings:
            Query, id column and fetch window defaults.
        """
        super().__init__()
        self.setWindowTitle(f"cursorlist - {database_path.name}")
        self.resize(720, 540)

        id_column = Column(settings.id_column, int) if settings.id_column else None
        self.adapter = RecordListAdapter(id_column=id_column, parent=self)

        self._loader = CursorLoaderAdapter(database_path, fetch_window=settings.fetch_window)
        self._loader.cursor_loaded.connect(self._on_cursor_loaded)
        self._loader.error.connect(self._on_error)

        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)

        top = QHBoxLayout()
        self.query_edit = QLineEdit(settings.query)
        self.btn_refresh = QPushButton("Run")
        self.btn_refresh.clicked.connect(self.refresh)
        self.query_edit.returnPressed.connect(self.refresh)
        top.addWidget(QLabel("Query:"))
        top.addWidget(self.query_edit, 1)
        top.addWidget(self.btn_refresh)
        root.addLayout(top)

        self.list_view = QListView()
        self.list_view.setModel(self.adapter)
        self.list_view.setUniformItemSizes(True)
        root.addWidget(self.list_view, 1)

        self.status_label = QLabel("")
        self.status_label.setStyleSheet("color: #666;")
        root.addWidget(self.status_label)

        self.refresh()

    def refresh(self) -> None:
        """Queue the current query on the loader."""
        sql = self.query_edit.text().strip()
        if not sql:
            return
        self.status_label.setText("Loading…")
        self._loader.request_load.emit(sql, ())

    def _on_cursor_loaded(self, cursor: object) -> None:
        self.adapter.change_cursor(cursor)  # type: ignore[arg-type]
        self.status_label.setText(f"{self.adapter.item_count()} rows")

    def _on_error(self, message: str) -> None:
        logger.warning("Query failed: %s", message)
        self.status_label.setText(f"Error: {message}")

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """
        Handle window close by stopping the loader and closing the cursor.

        Parameters
        ----------
        event:
            Qt close event.
        """
        try:
            self._loader.shutdown()
            self.adapter.change_cursor(None)
        finally:
            super().closeEvent(event)


def main(database_path: Path, settings: ViewerSettings) -> int:
    """
    Run the browser application.

    Returns
    -------
    int
        Qt application exit code.
    """
    app = QApplication.instance() or QApplication(sys.argv)
    w = CursorBrowserWindow(database_path, settings)
    w.show()
    return app.exec()
