"""Qt list model backed by an engine Cursor.

The adapter holds zero or one cursor and presents it to Qt views as a flat
list. Views read the item count, optional stable item ids, and per-role values
produced by binding a row into a recycled ``ItemHolder``.

Cursor ownership
----------------
- ``swap_cursor`` installs a new cursor and returns the previous one unclosed.
  The caller becomes responsible for closing it.
- ``change_cursor`` installs a new cursor and closes the previous one.
- The adapter never closes a cursor for any other reason, including its own
  destruction.

Threading model
--------------
All calls must come from the GUI thread. Cursors loaded elsewhere are handed
over through queued signals (see ``gui.adapters.cursor_loader``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Final

from PySide6.QtCore import QAbstractListModel, QModelIndex, QPersistentModelIndex, Qt

from cursor_engine.cursor.api import NO_ID, Column, Cursor
from cursor_engine.errors import CursorStateError
from cursor_engine.items import RowItem

logger = logging.getLogger(__name__)

# Role under which data() reports item_id(row).
ITEM_ID_ROLE: Final[int] = int(Qt.ItemDataRole.UserRole) + 1


@dataclass(slots=True)
class ItemHolder:
    """
    Recyclable binding target for one visible row.

    Attributes
    ----------
    item:
        Row item populated from the cursor before the bind hook runs.
    view:
        Rendered values keyed by integer Qt role.
    position:
        Row most recently bound into this holder, or -1.
    """

    item: RowItem
    view: dict[int, object] = field(default_factory=dict)
    position: int = -1

    def set_role(self, role: int | Qt.ItemDataRole, value: object) -> None:
        """Store ``value`` for ``role``."""
        self.view[int(role)] = value

    def role_value(self, role: int | Qt.ItemDataRole) -> object:
        """Return the stored value for ``role`` or None."""
        return self.view.get(int(role))


BindHook = Callable[[ItemHolder, int], None]


class CursorListAdapter(QAbstractListModel):
    """
    Flat Qt list model over a swappable engine cursor.

    Parameters
    ----------
    cursor:
        Optional initial cursor. The adapter borrows it; see the module notes
        for when it is closed.
    id_column:
        Column read as each row's stable id. Supplying it enables stable ids
        for the adapter's whole lifetime.
    item_type:
        RowItem subclass instantiated for each holder.
    bind_hook:
        Called as ``bind_hook(holder, position)`` after the holder's item is
        populated. Subclasses may override ``on_bind_item`` instead.
    parent:
        Optional Qt parent.
    """

    def __init__(
        self,
        cursor: Cursor | None = None,
        id_column: Column | None = None,
        *,
        item_type: type[RowItem] = RowItem,
        bind_hook: BindHook | None = None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._cursor = cursor
        self._id_column = id_column
        self._stable_ids: Final[bool] = id_column is not None
        self._item_type = item_type
        self._bind_hook = bind_hook
        self._holder: ItemHolder | None = None

    # ------------------------------------------------------------------
    # List surface contract
    # ------------------------------------------------------------------

    def has_stable_ids(self) -> bool:
        """Return True if the adapter reports row-derived item ids."""
        return self._stable_ids

    def item_count(self) -> int:
        """Return the current cursor's row count, or 0 without a cursor."""
        cursor = self._cursor
        return 0 if cursor is None else cursor.count()

    def default_item_id(self, position: int) -> int:
        """Identity reported when stable ids are disabled."""
        return NO_ID

    def item_id(self, position: int) -> int:
        """
        Return the stable id of the item at ``position``.

        Returns
        -------
        int
            ``default_item_id(position)`` if stable ids are disabled. Otherwise
            the id column value, or ``NO_ID`` when there is no cursor or the
            cursor cannot move to ``position``.
        """
        if not self._stable_ids:
            return self.default_item_id(position)
        cursor = self._cursor
        if cursor is None or not cursor.move_to_position(position):
            return NO_ID
        assert self._id_column is not None
        value = cursor.get(self._id_column)
        return NO_ID if value is None else int(value)

    def cursor(self) -> Cursor | None:
        """Return the cursor currently backing the adapter."""
        return self._cursor

    def create_holder(self) -> ItemHolder:
        """Return a new holder wrapping a fresh ``item_type`` instance."""
        return ItemHolder(item=self._item_type())

    def bind_item(self, holder: ItemHolder, position: int) -> None:
        """
        Populate ``holder`` with the row at ``position`` and render it.

        The holder's item is filled from every mapped column first; only then
        is ``on_bind_item`` called.

        Raises
        ------
        CursorStateError
            If there is no cursor or it cannot move to ``position``. Views only
            bind positions below the last reported ``item_count()``, so this
            means the view is out of sync with the adapter.
        """
        cursor = self._cursor
        if cursor is None or not cursor.move_to_position(position):
            raise CursorStateError(
                f"bind_item({position}) requires a cursor positioned on a valid row"
            )
        holder.item.read_columns(cursor)
        holder.position = position
        self.on_bind_item(holder, position)

    def on_bind_item(self, holder: ItemHolder, position: int) -> None:
        """
        Render the populated ``holder.item`` into ``holder.view``.

        The default delegates to the ``bind_hook`` given at construction.
        """
        if self._bind_hook is None:
            raise NotImplementedError(
                f"{type(self).__name__} needs a bind_hook or an on_bind_item override"
            )
        self._bind_hook(holder, position)

    # ------------------------------------------------------------------
    # Cursor replacement
    # ------------------------------------------------------------------

    def swap_cursor(self, new_cursor: Cursor | None) -> Cursor | None:
        """
        Install ``new_cursor`` and return the previous cursor without closing it.

        Returns
        -------
        Cursor | None
            The previously installed cursor, or None if there was none or if
            ``new_cursor`` is already installed (in which case nothing changes
            and views are not notified).
        """
        if new_cursor is self._cursor:
            return None
        old_cursor = self._cursor
        self.beginResetModel()
        self._cursor = new_cursor
        self._holder = None
        self.endResetModel()
        logger.debug("Swapped cursor (had previous: %s)", old_cursor is not None)
        return old_cursor

    def change_cursor(self, new_cursor: Cursor | None) -> None:
        """Install ``new_cursor`` and close the previous cursor, if any."""
        old_cursor = self.swap_cursor(new_cursor)
        if old_cursor is not None:
            old_cursor.close()
            logger.debug("Closed replaced cursor")

    # ------------------------------------------------------------------
    # QAbstractListModel
    # ------------------------------------------------------------------

    def rowCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:  # noqa: B008
        if parent.isValid():
            return 0
        return self.item_count()

    def data(
        self,
        index: QModelIndex | QPersistentModelIndex,
        role: int = Qt.ItemDataRole.DisplayRole,
    ) -> object:
        if not index.isValid() or index.row() >= self.item_count():
            return None
        row = index.row()
        if int(role) == ITEM_ID_ROLE:
            return self.item_id(row)
        if self._holder is None:
            self._holder = self.create_holder()
        holder = self._holder
        # Views query several roles for the same row; bind it once.
        if holder.position != row:
            holder.view.clear()
            holder.position = -1
            self.bind_item(holder, row)
        return holder.role_value(role)
