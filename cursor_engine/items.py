"""
Row items populated from cursors.

A ``RowItem`` is the recyclable, mutable model object a list surface keeps per
visible row. Its fields are fully determined by its column mapping, so reading
a row into an item is generic and identical for every list.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping

from .cursor.api import Column, Cursor


class RowItem:
    """
    Base class for items whose attributes mirror cursor columns.

    Subclasses declare ``columns``. Each column is exposed as an attribute of
    the same name, initialized to None until ``read_columns`` is called.

    Examples
    --------
    >>> class Task(RowItem):
    ...     columns = (Column("id", int), Column("title", str))
    """

    columns: ClassVar[tuple[Column, ...]] = ()

    def __init__(self, **values: Any) -> None:
        for column in self.columns:
            setattr(self, column.name, None)
        for name, value in values.items():
            if name not in self.column_names():
                raise AttributeError(f"{type(self).__name__} has no column {name!r}")
            setattr(self, name, value)

    @classmethod
    def column_names(cls) -> tuple[str, ...]:
        return tuple(c.name for c in cls.columns)

    def read_columns(self, cursor: Cursor) -> None:
        """
        Populate every mapped attribute from the cursor's current row.

        Parameters
        ----------
        cursor:
            A cursor already positioned on the row to read.
        """
        for column in self.columns:
            setattr(self, column.name, cursor.get(column))

    def values(self) -> Mapping[str, object]:
        """Return the current attribute values keyed by column name."""
        return {c.name: getattr(self, c.name) for c in self.columns}

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.values().items())
        return f"{type(self).__name__}({fields})"


class RecordItem(RowItem):
    """
    Item that mirrors every column the cursor reports.

    Used where the result set shape is only known at run time (ad-hoc queries
    in the CLI and browser window).
    """

    def __init__(self) -> None:
        super().__init__()
        self._values: dict[str, object] = {}

    def read_columns(self, cursor: Cursor) -> None:
        """Populate the record from every column of the current row."""
        self._values = {name: cursor.get(Column(name)) for name in cursor.column_names}

    def values(self) -> Mapping[str, object]:
        return dict(self._values)

    def __getitem__(self, name: str) -> object:
        return self._values[name]
