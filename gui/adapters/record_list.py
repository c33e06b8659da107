"""List adapter for ad-hoc query results.

Rows are read into ``RecordItem`` instances and rendered as one line of text
per row, with the id column (if any) left out of the display text.
"""

from __future__ import annotations

from typing import Mapping

from PySide6.QtCore import Qt

from cursor_engine.cursor.api import Column, Cursor
from cursor_engine.items import RecordItem, RowItem

from .cursor_list_adapter import CursorListAdapter, ItemHolder


def format_record(values: Mapping[str, object], skip: str | None = None) -> str:
    """
    Render a row as ``" | "``-joined values.

    Parameters
    ----------
    values:
        Column values in query order.
    skip:
        Column name to leave out (typically the id column).
    """
    return " | ".join("" if v is None else str(v) for k, v in values.items() if k != skip)


class RecordListAdapter(CursorListAdapter):
    """
    CursorListAdapter that renders rows as text.

    ``item_type`` defaults to ``RecordItem`` so any result set can be shown;
    a typed ``RowItem`` may be given when the query shape is known.
    """

    def __init__(
        self,
        cursor: Cursor | None = None,
        id_column: Column | None = None,
        *,
        item_type: type[RowItem] = RecordItem,
        parent=None,
    ) -> None:
        super().__init__(cursor, id_column, item_type=item_type, parent=parent)
        self._skip = None if id_column is None else id_column.name

    def on_bind_item(self, holder: ItemHolder, position: int) -> None:
        values = holder.item.values()
        holder.set_role(Qt.ItemDataRole.DisplayRole, format_record(values, self._skip))
        holder.set_role(
            Qt.ItemDataRole.ToolTipRole,
            "\n".join(f"{k} = {v!r}" for k, v in values.items()),
        )
