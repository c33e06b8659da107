from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from cursor_engine.cursor.sqlite_cursor import DEFAULT_FETCH_WINDOW
from cursor_engine.sample_store import DEFAULT_QUERY

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "CURSORLIST_HOME"


@dataclass(frozen=True, slots=True)
class ViewerSettings:
    """
    Persisted viewer settings.

    Notes
    -----
    These settings only control defaults for the browser window. A missing
    ``id_column`` disables stable item ids for adapters built from them.
    """

    database_path: Path | None
    query: str
    id_column: str | None
    fetch_window: int

    @staticmethod
    def defaults() -> "ViewerSettings":
        return ViewerSettings(
            database_path=None,
            query=DEFAULT_QUERY,
            id_column="id",
            fetch_window=DEFAULT_FETCH_WINDOW,
        )


def default_settings_path() -> Path:
    """
    Resolve where viewer settings live.

    Preference order:
    1) $CURSORLIST_HOME/viewer_settings.json
    2) ~/.cursorlist/viewer_settings.json
    """
    home = os.environ.get(HOME_ENV_VAR)
    root = Path(home) if home else Path.home() / ".cursorlist"
    return root / "viewer_settings.json"


def load_viewer_settings(path: Path) -> ViewerSettings:
    """
    Load viewer settings from disk.

    Parameters
    ----------
    path:
        Settings file.

    Returns
    -------
    ViewerSettings
        Loaded settings, or defaults if missing/unreadable.
    """
    defaults = ViewerSettings.defaults()
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return defaults
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return defaults
    if not isinstance(payload, dict):
        logger.warning("Ignoring malformed settings file %s", path)
        return defaults

    raw_db = payload.get("database_path")
    database_path = Path(raw_db) if isinstance(raw_db, str) and raw_db.strip() else None

    query = payload.get("query", defaults.query)
    if not isinstance(query, str) or not query.strip():
        query = defaults.query

    id_column = payload.get("id_column", defaults.id_column)
    if id_column is not None and (not isinstance(id_column, str) or not id_column.strip()):
        id_column = defaults.id_column

    fetch_window = payload.get("fetch_window", defaults.fetch_window)
    if not isinstance(fetch_window, int) or isinstance(fetch_window, bool):
        fetch_window = defaults.fetch_window

    return ViewerSettings(
        database_path=database_path,
        query=query,
        id_column=id_column,
        fetch_window=max(1, fetch_window),
    )


def save_viewer_settings(path: Path, settings: ViewerSettings) -> None:
    """
    Save viewer settings to disk.

    Parameters
    ----------
    path:
        Settings file. Parent directories are created.
    settings:
        Settings to persist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "database_path": str(settings.database_path)
        if settings.database_path is not None
        else None,
        "query": settings.query,
        "id_column": settings.id_column,
        "fetch_window": settings.fetch_window,
    }
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
