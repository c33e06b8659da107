from __future__ import annotations

import pytest

from cursor_engine.cursor.api import NO_ID, Column
from gui.adapters.cursor_list_adapter import CursorListAdapter
from recording_cursor import RecordingCursor, id_rows

ID = Column("id", int)


def test_item_count_is_zero_without_cursor() -> None:
    adapter = CursorListAdapter()
    assert adapter.item_count() == 0
    assert adapter.rowCount() == 0
    assert adapter.cursor() is None


def test_item_count_reflects_cursor_rows() -> None:
    adapter = CursorListAdapter(RecordingCursor(id_rows(1, 2, 3)))
    assert adapter.item_count() == 3
    assert adapter.rowCount() == 3


def test_stable_ids_follow_id_column_presence() -> None:
    assert not CursorListAdapter().has_stable_ids()
    assert not CursorListAdapter(RecordingCursor(id_rows(1))).has_stable_ids()
    assert CursorListAdapter(id_column=ID).has_stable_ids()
    assert CursorListAdapter(RecordingCursor(id_rows(1)), ID).has_stable_ids()


@pytest.mark.parametrize("position", [-1, 0, 1, 2, 50])
def test_item_id_without_id_column_never_reads_cursor(position: int) -> None:
    cursor = RecordingCursor(id_rows(10, 20, 30))
    adapter = CursorListAdapter(cursor)

    assert adapter.item_id(position) == NO_ID
    assert cursor.move_calls == 0
    assert cursor.get_calls == 0


def test_item_id_reads_id_column_in_range_and_sentinel_outside() -> None:
    cursor = RecordingCursor(id_rows(10, 20, 30))
    adapter = CursorListAdapter(cursor, ID)

    assert [adapter.item_id(p) for p in range(3)] == [10, 20, 30]
    for position in (-1, 3, 4, 100):
        assert adapter.item_id(position) == NO_ID


def test_item_id_without_cursor_returns_sentinel() -> None:
    adapter = CursorListAdapter(id_column=ID)
    assert adapter.item_id(0) == NO_ID


def test_item_id_on_closed_cursor_returns_sentinel() -> None:
    cursor = RecordingCursor(id_rows(10))
    adapter = CursorListAdapter(cursor, ID)
    cursor.close()
    assert adapter.item_id(0) == NO_ID


def test_item_id_null_id_value_returns_sentinel() -> None:
    adapter = CursorListAdapter(RecordingCursor([{"id": None}]), ID)
    assert adapter.item_id(0) == NO_ID


def test_swap_scenario_updates_count_and_ids() -> None:
    c0 = RecordingCursor(id_rows(10, 20, 30))
    c1 = RecordingCursor(id_rows(99))
    adapter = CursorListAdapter(c0, ID)
    resets: list[int] = []
    adapter.modelReset.connect(lambda: resets.append(adapter.item_count()))

    assert adapter.item_count() == 3
    assert adapter.item_id(1) == 20

    assert adapter.swap_cursor(c1) is c0
    assert resets == [1]
    assert adapter.item_count() == 1
    assert adapter.item_id(0) == 99
    assert adapter.item_id(1) == NO_ID
