"""
Demo task database used by the CLI and GUI.

Notes
-----
The schema is intentionally tiny: one table with an integer primary key that
doubles as the stable list id.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Final

from .cursor.api import Column
from .items import RowItem

SCHEMA_V1 = """
CREATE TABLE IF NOT EXISTS tasks (
    id    INTEGER PRIMARY KEY,
    title TEXT NOT NULL,
    done  INTEGER NOT NULL DEFAULT 0 CHECK(done IN (0, 1))
);
"""

DEFAULT_QUERY: Final[str] = "SELECT id, title, done FROM tasks ORDER BY id"


class Task(RowItem):
    """One row of the ``tasks`` table."""

    columns = (Column("id", int), Column("title", str), Column("done", bool))


def init_demo_database(database_path: Path, rows: int = 25) -> int:
    """
    Create the demo schema and seed it with numbered tasks.

    Parameters
    ----------
    database_path:
        Path to the SQLite database. Parent directories are created.
    rows:
        Number of tasks to ensure exist.

    Returns
    -------
    int
        Number of tasks inserted by this call (existing ids are kept).
    """
    if rows < 0:
        raise ValueError(f"rows must be >= 0, got {rows}")
    database_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(database_path)
    try:
        with conn:
            conn.executescript(SCHEMA_V1)
            cur = conn.executemany(
                "INSERT OR IGNORE INTO tasks(id, title, done) VALUES(?, ?, ?)",
                ((i, f"Task {i}", int(i % 3 == 0)) for i in range(1, rows + 1)),
            )
            inserted = cur.rowcount
    finally:
        conn.close()
    return inserted
