"""Cursor contract and implementations."""

from .api import NO_ID, Column, Cursor
from .row_list import RowListCursor
from .sqlite_cursor import SqliteCursor, load_rows, open_sqlite_cursor

__all__ = [
    "NO_ID",
    "Column",
    "Cursor",
    "RowListCursor",
    "SqliteCursor",
    "load_rows",
    "open_sqlite_cursor",
]
