"""
Materialized cursor over an in-memory sequence of rows.

Used for result sets that were fully fetched elsewhere (for example by the GUI
loader worker thread) and for tests.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from ..errors import CursorClosedError, CursorStateError, UnknownColumnError
from .api import Column


class RowListCursor:
    """
    Cursor over a fixed sequence of row mappings.

    Parameters
    ----------
    rows:
        Rows keyed by column name. The sequence is copied; later mutation of
        the caller's list is not observed.
    column_names:
        Result set columns. If omitted, taken from the first row (an empty
        result set then has no columns).
    """

    def __init__(
        self,
        rows: Sequence[Mapping[str, object]],
        column_names: Sequence[str] | None = None,
    ) -> None:
        self._rows: tuple[Mapping[str, object], ...] = tuple(rows)
        if column_names is None:
            column_names = tuple(self._rows[0].keys()) if self._rows else ()
        self._column_names: tuple[str, ...] = tuple(column_names)
        self._position = -1
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def column_names(self) -> tuple[str, ...]:
        return self._column_names

    @property
    def position(self) -> int:
        """Current row index, or -1 when not positioned."""
        return self._position

    def count(self) -> int:
        """See Cursor.count."""
        if self._closed:
            return 0
        return len(self._rows)

    def move_to_position(self, position: int) -> bool:
        """See Cursor.move_to_position."""
        if self._closed or position < 0 or position >= len(self._rows):
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
        return column.coerce(self._rows[self._position].get(column.name))

    def close(self) -> None:
        """See Cursor.close."""
        if self._closed:
            raise CursorClosedError("Cursor is already closed.")
        self._closed = True
        self._position = -1
        self._rows = ()
