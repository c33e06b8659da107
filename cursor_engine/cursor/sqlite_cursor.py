"""
SQLite implementation of Cursor.

Rows are streamed from the underlying ``sqlite3.Cursor`` in fixed-size windows
and retained once fetched, so random access behind the fetch frontier is
served from memory and access beyond it only fetches as far as needed.

Threading
---------
sqlite3 connections are not shared across threads in this implementation. A
``SqliteCursor`` must be created and used on one thread. To hand a result set
to another thread, materialize it with ``load_rows``.

Diagnostics
-----------
``SqliteCursor.fetched_rows`` reports how far the stream has been pulled. It
is not part of the Cursor contract and exists to observe lazy fetching.
"""

from __future__ import annotations

import logging
import sqlite3
import sys
from pathlib import Path
from typing import Any, Sequence

from ..errors import CursorClosedError, CursorStateError, UnknownColumnError
from .api import Column
from .row_list import RowListCursor

logger = logging.getLogger(__name__)

DEFAULT_FETCH_WINDOW = 64


def _connect(database_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(database_path)
    conn.row_factory = sqlite3.Row
    return conn


def _validate_window(fetch_window: int) -> int:
    if fetch_window < 1:
        raise ValueError(f"fetch_window must be >= 1, got {fetch_window}")
    return fetch_window


class SqliteCursor:
    """
    Streaming cursor over a single SQLite query.

    Parameters
    ----------
    conn:
        Open connection. Rows are read through ``sqlite3.Row`` regardless of
        the connection's own row factory.
    sql:
        A single SELECT statement.
    params:
        Query parameters.
    fetch_window:
        Number of rows fetched per round trip.
    owns_connection:
        If True, ``close()`` also closes ``conn``.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        sql: str,
        params: Sequence[Any] = (),
        *,
        fetch_window: int = DEFAULT_FETCH_WINDOW,
        owns_connection: bool = False,
    ) -> None:
        self._conn = conn
        self._sql = sql
        self._params = tuple(params)
        self._fetch_window = _validate_window(fetch_window)
        self._owns_connection = owns_connection

        self._cursor = conn.cursor()
        self._cursor.row_factory = sqlite3.Row
        self._cursor.execute(sql, self._params)
        description = self._cursor.description or ()
        self._column_names: tuple[str, ...] = tuple(str(d[0]) for d in description)

        self._rows: list[sqlite3.Row] = []
        self._exhausted = False
        self._count: int | None = None
        self._position = -1
        self._closed = False
        logger.debug("Opened cursor over %r (window=%d)", sql, self._fetch_window)

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def column_names(self) -> tuple[str, ...]:
        return self._column_names

    @property
    def fetched_rows(self) -> int:
        """Number of rows pulled from SQLite so far."""
        return len(self._rows)

    def _fetch_through(self, position: int) -> None:
        while not self._exhausted and len(self._rows) <= position:
            chunk = self._cursor.fetchmany(self._fetch_window)
            self._rows.extend(chunk)
            if len(chunk) < self._fetch_window:
                self._exhausted = True
                self._count = len(self._rows)

    def count(self) -> int:
        """
        See Cursor.count.

        Notes
        -----
        Until the stream is exhausted the count is obtained with a wrapping
        ``SELECT COUNT(*)`` query and cached. Statements that cannot be
        wrapped (``PRAGMA``, ...) are counted by draining the stream instead.
        Once the stream is exhausted the fetched row count is authoritative.
        """
        if self._closed:
            return 0
        if self._count is None:
            inner = self._sql.strip().rstrip(";").rstrip()
            try:
                row = self._conn.execute(
                    f"SELECT COUNT(*) FROM ({inner})", self._params
                ).fetchone()
            except sqlite3.Error as exc:
                logger.debug("Counting by draining %r: %s", self._sql, exc)
                self._fetch_through(sys.maxsize)
            else:
                self._count = int(row[0])
        assert self._count is not None
        return self._count

    def move_to_position(self, position: int) -> bool:
        """See Cursor.move_to_position."""
        if self._closed or position < 0:
            self._position = -1
            return False
        self._fetch_through(position)
        if position >= len(self._rows):
            self._position = -1
            return False
        self._position = position
        return True

    def get(self, column: Column) -> object:
        """See Cursor.get."""
        if self._closed:
            raise CursorClosedError("Cursor is closed.")
        if self._position < 0:
            raise CursorStateError("Cursor is not positioned on a row.")
        if column.name not in self._column_names:
            raise UnknownColumnError(f"Unknown column: {column.name}")
        return column.coerce(self._rows[self._position][column.name])

    def close(self) -> None:
        """See Cursor.close."""
        if self._closed:
            raise CursorClosedError("Cursor is already closed.")
        self._closed = True
        self._position = -1
        self._rows = []
        self._cursor.close()
        if self._owns_connection:
            self._conn.close()
        logger.debug("Closed cursor over %r", self._sql)


def open_sqlite_cursor(
    database_path: Path,
    sql: str,
    params: Sequence[Any] = (),
    *,
    fetch_window: int = DEFAULT_FETCH_WINDOW,
) -> SqliteCursor:
    """
    Open a connection and return a cursor that owns it.

    Parameters
    ----------
    database_path:
        Path to the SQLite database.
    sql:
        Query to run.
    params:
        Query parameters.
    fetch_window:
        Rows fetched per round trip.

    Returns
    -------
    SqliteCursor
        Cursor whose ``close()`` also closes the connection.
    """
    conn = _connect(database_path)
    try:
        return SqliteCursor(
            conn, sql, params, fetch_window=fetch_window, owns_connection=True
        )
    except Exception:
        conn.close()
        raise


def load_rows(
    database_path: Path,
    sql: str,
    params: Sequence[Any] = (),
    *,
    fetch_window: int = DEFAULT_FETCH_WINDOW,
) -> RowListCursor:
    """
    Run a query to completion and return its rows as a materialized cursor.

    The returned cursor holds no database resources and may be handed to
    another thread.
    """
    fetch_window = _validate_window(fetch_window)
    conn = _connect(database_path)
    try:
        cur = conn.execute(sql, tuple(params))
        names = tuple(str(d[0]) for d in (cur.description or ()))
        rows: list[dict[str, object]] = []
        while True:
            chunk = cur.fetchmany(fetch_window)
            rows.extend({name: r[name] for name in names} for r in chunk)
            if len(chunk) < fetch_window:
                break
    finally:
        conn.close()
    logger.debug("Loaded %d rows for %r", len(rows), sql)
    return RowListCursor(rows, column_names=names)
