"""
Command-line interface for cursorlist.

Notes
-----
The CLI is intentionally thin. It parses arguments and delegates to engine
modules and the list adapter. ``list`` runs headless: rows are bound through
the same adapter the GUI uses and printed instead of rendered.
"""

from __future__ import annotations

import argparse
import logging
import sqlite3
from dataclasses import replace
from pathlib import Path

from PySide6.QtCore import Qt

from cursor_engine.cursor.api import Column
from cursor_engine.cursor.sqlite_cursor import DEFAULT_FETCH_WINDOW, open_sqlite_cursor
from cursor_engine.errors import CursorEngineError
from cursor_engine.items import RecordItem, RowItem
from cursor_engine.sample_store import DEFAULT_QUERY, Task, init_demo_database
from gui.adapters.record_list import RecordListAdapter
from gui.settings_store import default_settings_path, load_viewer_settings, save_viewer_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="cursorlist",
        description="Browse SQLite query results through a cursor-backed list adapter",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    init_p = sub.add_parser("init-demo", help="Create and seed the demo tasks database")
    init_p.add_argument("--db", required=True, type=Path, help="SQLite database path")
    init_p.add_argument("--rows", type=int, default=25, help="Number of tasks (default: 25).")

    list_p = sub.add_parser("list", help="Print query rows as bound by the list adapter")
    list_p.add_argument("--db", required=True, type=Path, help="SQLite database path")
    list_p.add_argument("--query", default=DEFAULT_QUERY, help="SELECT statement to list.")
    list_p.add_argument(
        "--id-column",
        default=None,
        help="Column used as the stable item id. If omitted, ids print as '-'.",
    )
    list_p.add_argument(
        "--window",
        type=int,
        default=DEFAULT_FETCH_WINDOW,
        help=f"Rows fetched per round trip (default: {DEFAULT_FETCH_WINDOW}).",
    )
    list_p.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of rows to print.",
    )

    gui_p = sub.add_parser("gui", help="Open the query browser window")
    gui_p.add_argument("--db", type=Path, default=None, help="SQLite database path")
    gui_p.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Viewer settings file. Defaults to $CURSORLIST_HOME/viewer_settings.json.",
    )

    return parser


def _run_list(
    db: Path,
    query: str,
    id_column: str | None,
    window: int,
    limit: int | None,
) -> int:
    if not db.is_file():
        raise ValueError(f"Database not found: {db}")
    cursor = open_sqlite_cursor(db, query, fetch_window=window)
    item_type: type[RowItem] = Task if query == DEFAULT_QUERY else RecordItem
    adapter = RecordListAdapter(
        cursor, Column(id_column, int) if id_column else None, item_type=item_type
    )
    try:
        count = adapter.item_count()
        if limit is not None:
            count = min(count, max(0, limit))
        holder = adapter.create_holder()
        for position in range(count):
            adapter.bind_item(holder, position)
            item_id = adapter.item_id(position) if adapter.has_stable_ids() else "-"
            print(f"{item_id}\t{holder.role_value(Qt.ItemDataRole.DisplayRole)}")
    finally:
        adapter.change_cursor(None)
    return 0


def _run_gui(db: Path | None, settings_path: Path | None) -> int:
    # Widgets are only loaded here; headless commands need no GUI libraries.
    from gui.app import main as gui_main

    path = settings_path if settings_path is not None else default_settings_path()
    settings = load_viewer_settings(path)
    database_path = db if db is not None else settings.database_path
    if database_path is None:
        print("ERROR: no database given (use --db or set database_path in settings).")
        return 2
    if db is not None and db != settings.database_path:
        save_viewer_settings(path, replace(settings, database_path=db))
    return gui_main(database_path, settings)


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Parameters
    ----------
    argv:
        Optional argument vector. If None, argparse uses sys.argv.

    Returns
    -------
    int
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "init-demo":
            inserted = init_demo_database(args.db, rows=args.rows)
            print(f"Inserted {inserted} tasks into {args.db}")
            return 0

        if args.command == "list":
            return _run_list(args.db, args.query, args.id_column, args.window, args.limit)

        if args.command == "gui":
            return _run_gui(args.db, args.settings)
    except (CursorEngineError, sqlite3.Error, ValueError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"ERROR: {exc}")
        return 2

    parser.print_help()
    return 0
