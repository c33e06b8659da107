"""
Cursor engine.

Positionable, closeable row cursors and the row items populated from them.
Nothing in this package imports Qt; list surfaces live under ``gui``.
"""
