"""GUI adapter layer.

This package provides Qt-shaped adapters over engine cursors.

Notes
-----
Adapters exist to:
- present engine cursors as Qt item models,
- keep query execution off the UI thread,
- own cursor disposal so views never close engine resources.
"""
