"""
Cursor public API.

This module defines the contract that list surfaces consume: a positionable,
closeable reader over a randomly-addressable result set. Implementations are
engine-owned; surfaces must speak only in terms of ``Cursor`` and ``Column``.

Notes
-----
- Positions are zero-based row indexes.
- A cursor has exactly one owner responsible for closing it. Closing twice is
  an error of the underlying resource, not something callers may rely on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Protocol

# Reserved "no stable identity" value reported for items without an id.
NO_ID: Final[int] = -1


@dataclass(frozen=True, slots=True)
class Column:
    """
    A typed selector for one column of a result set.

    Attributes
    ----------
    name:
        Column name as reported by the query (``cursor.description``).
    value_type:
        Python type values are coerced to on read. ``object`` disables
        coercion.
    """

    name: str
    value_type: type = object

    def coerce(self, value: object) -> object:
        """
        Coerce a raw column value to ``value_type``.

        Parameters
        ----------
        value:
            Raw value read from the row. ``None`` is returned unchanged.

        Returns
        -------
        object
            The coerced value.
        """
        if value is None or self.value_type is object:
            return value
        if isinstance(value, self.value_type):
            return value
        return self.value_type(value)


class Cursor(Protocol):
    """
    Positionable, closeable reader over rows.

    Implementations must tolerate repeated ``move_to_position`` calls and must
    report the current row count at any time until closed.
    """

    @property
    def is_closed(self) -> bool:
        """Return True once ``close()`` has been called."""
        ...

    @property
    def column_names(self) -> tuple[str, ...]:
        """Return the result set's column names in query order."""
        ...

    def count(self) -> int:
        """
        Return the number of rows in the result set.

        Returns
        -------
        int
            Row count. A closed cursor reports 0.
        """
        ...

    def move_to_position(self, position: int) -> bool:
        """
        Position the cursor on a row.

        Parameters
        ----------
        position:
            Zero-based row index.

        Returns
        -------
        bool
            True if the cursor now points at ``position``. False for
            negative or out-of-range positions and for closed cursors.
        """
        ...

    def get(self, column: Column) -> object:
        """
        Read a column from the current row.

        Raises
        ------
        CursorStateError
            If the cursor is not positioned on a row.
        UnknownColumnError
            If the column is not part of the result set.
        """
        ...

    def close(self) -> None:
        """
        Release the cursor's resources.

        Raises
        ------
        CursorClosedError
            If the cursor was already closed.
        """
        ...
