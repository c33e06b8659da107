"""
Domain exceptions for the cursor engine.

Notes
-----
Expected failure modes map to a domain exception with clear meaning. Callers
that surface errors to users (the CLI, the loader worker) catch
``CursorEngineError`` rather than generic exceptions.
"""

from __future__ import annotations


class CursorEngineError(RuntimeError):
    """Base exception for all cursor engine failures."""


class CursorStateError(CursorEngineError):
    """Raised when an operation requires a cursor state that does not hold."""


class CursorClosedError(CursorStateError):
    """Raised when a closed cursor is used or closed again."""


class UnknownColumnError(CursorEngineError):
    """Raised when a column is not part of the cursor's result set."""
