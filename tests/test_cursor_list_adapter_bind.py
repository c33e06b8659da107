from __future__ import annotations

import pytest
from PySide6.QtCore import QModelIndex, Qt

from cursor_engine.cursor.api import NO_ID, Column
from cursor_engine.errors import CursorStateError
from cursor_engine.items import RowItem
from gui.adapters.cursor_list_adapter import ITEM_ID_ROLE, CursorListAdapter, ItemHolder
from recording_cursor import RecordingCursor, id_rows


class Row(RowItem):
    columns = (Column("id", int), Column("title", str))


class TitleAdapter(CursorListAdapter):
    def on_bind_item(self, holder: ItemHolder, position: int) -> None:
        holder.set_role(Qt.ItemDataRole.DisplayRole, f"{position}: {holder.item.title}")


def test_bind_without_cursor_is_a_state_error() -> None:
    adapter = TitleAdapter(item_type=Row)
    with pytest.raises(CursorStateError):
        adapter.bind_item(adapter.create_holder(), 0)


@pytest.mark.parametrize("position", [-1, 2, 10])
def test_bind_unreachable_position_is_a_state_error(position: int) -> None:
    adapter = TitleAdapter(RecordingCursor(id_rows(1, 2)), item_type=Row)
    with pytest.raises(CursorStateError):
        adapter.bind_item(adapter.create_holder(), position)


def test_bind_populates_item_before_hook_runs() -> None:
    seen: list[dict[str, object]] = []

    def hook(holder: ItemHolder, position: int) -> None:
        seen.append(dict(holder.item.values()))
        assert holder.position == position

    adapter = CursorListAdapter(
        RecordingCursor(id_rows(5, 6)), item_type=Row, bind_hook=hook
    )
    holder = adapter.create_holder()
    adapter.bind_item(holder, 1)
    adapter.bind_item(holder, 0)

    assert seen == [{"id": 6, "title": "row 6"}, {"id": 5, "title": "row 5"}]


def test_subclass_hook_renders_view() -> None:
    adapter = TitleAdapter(RecordingCursor(id_rows(5, 6)), item_type=Row)
    holder = adapter.create_holder()
    adapter.bind_item(holder, 1)
    assert holder.role_value(Qt.ItemDataRole.DisplayRole) == "1: row 6"


def test_bind_without_hook_is_not_implemented() -> None:
    adapter = CursorListAdapter(RecordingCursor(id_rows(1)), item_type=Row)
    with pytest.raises(NotImplementedError):
        adapter.bind_item(adapter.create_holder(), 0)


def test_data_renders_rows_through_bind() -> None:
    adapter = TitleAdapter(RecordingCursor(id_rows(5, 6, 7)), item_type=Row)

    assert adapter.data(adapter.index(2, 0)) == "2: row 7"
    assert adapter.data(adapter.index(0, 0), Qt.ItemDataRole.DisplayRole) == "0: row 5"
    assert adapter.data(adapter.index(0, 0), Qt.ItemDataRole.ToolTipRole) is None


def test_data_reports_item_ids_under_id_role() -> None:
    with_ids = TitleAdapter(RecordingCursor(id_rows(5, 6)), Column("id", int), item_type=Row)
    without_ids = TitleAdapter(RecordingCursor(id_rows(5, 6)), item_type=Row)

    assert with_ids.data(with_ids.index(1, 0), ITEM_ID_ROLE) == 6
    assert without_ids.data(without_ids.index(1, 0), ITEM_ID_ROLE) == NO_ID


def test_data_ignores_invalid_and_stale_indexes() -> None:
    adapter = TitleAdapter(RecordingCursor(id_rows(5, 6)), item_type=Row)
    stale = adapter.index(1, 0)

    assert adapter.data(QModelIndex()) is None
    assert adapter.data(adapter.index(5, 0)) is None

    adapter.swap_cursor(RecordingCursor(id_rows(9)))
    assert adapter.data(stale) is None


def test_row_count_is_zero_for_child_indexes() -> None:
    adapter = TitleAdapter(RecordingCursor(id_rows(5, 6)), item_type=Row)
    assert adapter.rowCount(adapter.index(0, 0)) == 0


def test_data_binds_each_row_once_across_roles() -> None:
    cursor = RecordingCursor(id_rows(5, 6, 7))
    adapter = TitleAdapter(cursor, item_type=Row)
    index = adapter.index(1, 0)

    for role in (
        Qt.ItemDataRole.DisplayRole,
        Qt.ItemDataRole.ToolTipRole,
        Qt.ItemDataRole.DecorationRole,
        Qt.ItemDataRole.DisplayRole,
    ):
        adapter.data(index, role)

    assert cursor.move_calls == 1
    assert adapter.data(adapter.index(2, 0)) == "2: row 7"
    assert cursor.move_calls == 2


def test_data_after_swap_reads_new_cursor_for_same_row() -> None:
    adapter = TitleAdapter(RecordingCursor(id_rows(5, 6)), item_type=Row)
    assert adapter.data(adapter.index(0, 0)) == "0: row 5"

    replacement = RecordingCursor(id_rows(8))
    adapter.swap_cursor(replacement)

    assert adapter.data(adapter.index(0, 0)) == "0: row 8"
    assert replacement.move_calls == 1
