from __future__ import annotations

from pathlib import Path

from cursor_engine.cursor.api import Column
from cursor_engine.sample_store import DEFAULT_QUERY, init_demo_database
from gui.adapters.cursor_list_adapter import CursorListAdapter
from gui.adapters.cursor_loader import CursorLoaderWorker
from recording_cursor import RecordingCursor, id_rows


def test_worker_emits_materialized_cursor(tmp_path: Path) -> None:
    db = tmp_path / "demo.sqlite"
    init_demo_database(db, rows=5)
    worker = CursorLoaderWorker(db, fetch_window=2)
    loaded: list[object] = []
    errors: list[str] = []
    worker.cursor_loaded.connect(loaded.append)
    worker.error.connect(errors.append)

    worker.load("SELECT id FROM tasks WHERE id >= ? ORDER BY id", (3,))

    assert errors == []
    assert len(loaded) == 1
    cursor = loaded[0]
    assert cursor.count() == 3  # type: ignore[attr-defined]


def test_worker_reports_query_errors(tmp_path: Path) -> None:
    db = tmp_path / "demo.sqlite"
    init_demo_database(db, rows=1)
    worker = CursorLoaderWorker(db)
    loaded: list[object] = []
    errors: list[str] = []
    worker.cursor_loaded.connect(loaded.append)
    worker.error.connect(errors.append)

    worker.load("SELECT nope FROM missing_table", None)

    assert loaded == []
    assert len(errors) == 1
    assert "missing_table" in errors[0]


def test_loaded_cursor_replaces_and_disposes_previous(tmp_path: Path) -> None:
    db = tmp_path / "demo.sqlite"
    init_demo_database(db, rows=4)
    previous = RecordingCursor(id_rows(1))
    adapter = CursorListAdapter(previous, Column("id", int))
    worker = CursorLoaderWorker(db)
    worker.cursor_loaded.connect(adapter.change_cursor)

    worker.load(DEFAULT_QUERY, ())

    assert previous.close_calls == 1
    assert adapter.item_count() == 4
    assert [adapter.item_id(p) for p in range(4)] == [1, 2, 3, 4]
