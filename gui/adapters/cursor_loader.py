"""Qt adapter that runs cursor queries off the UI thread.

The GUI never touches SQLite directly. It emits a load request; a worker on a
dedicated QThread runs the query to completion and hands back a materialized
cursor that is safe to use on the GUI thread.

Threading model
--------------
- A single worker QObject lives on a dedicated QThread.
- The worker opens and closes its own sqlite3 connection per request.
- The GUI communicates with the worker via queued Qt signals.
- Ownership of every delivered cursor passes to the receiver, which normally
  installs it with ``CursorListAdapter.change_cursor``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Qt, QThread, Signal, Slot

from cursor_engine.cursor.sqlite_cursor import DEFAULT_FETCH_WINDOW, load_rows

logger = logging.getLogger(__name__)


class CursorLoaderWorker(QObject):
    """Worker that executes queries in a background thread."""

    cursor_loaded = Signal(object)  # RowListCursor
    error = Signal(str)  # message

    def __init__(self, database_path: Path, fetch_window: int = DEFAULT_FETCH_WINDOW) -> None:
        super().__init__()
        self._database_path = database_path
        self._fetch_window = fetch_window

    @Slot(str, object)
    def load(self, sql: str, params: object) -> None:
        """Run ``sql`` and emit the materialized cursor."""
        try:
            cursor = load_rows(
                self._database_path,
                sql,
                tuple(params) if params else (),  # type: ignore[arg-type]
                fetch_window=self._fetch_window,
            )
        except Exception as e:
            logger.debug("Query failed: %s", e)
            self.error.emit(str(e))
            return
        self.cursor_loaded.emit(cursor)


class CursorLoaderAdapter(QObject):
    """Qt adapter that marshals query requests onto a worker thread."""

    # Requests (GUI emits; wired as queued connections to worker slots)
    request_load = Signal(str, object)  # sql, params

    # Results (worker emits; adapter forwards)
    cursor_loaded = Signal(object)  # RowListCursor
    error = Signal(str)  # message

    def __init__(self, database_path: Path, fetch_window: int = DEFAULT_FETCH_WINDOW) -> None:
        super().__init__()

        self._thread = QThread()
        self._worker = CursorLoaderWorker(database_path=database_path, fetch_window=fetch_window)
        self._worker.moveToThread(self._thread)

        self.request_load.connect(self._worker.load, type=Qt.ConnectionType.QueuedConnection)

        self._worker.cursor_loaded.connect(self.cursor_loaded)
        self._worker.error.connect(self.error)

        self._thread.start()

    def shutdown(self) -> None:
        """Stop the worker thread cleanly."""
        self._thread.quit()
        self._thread.wait()
