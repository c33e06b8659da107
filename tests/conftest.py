from __future__ import annotations

from typing import Iterator

import pytest
from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope="session", autouse=True)
def qt_core_app() -> Iterator[QCoreApplication]:
    """Provide a Qt application instance for model and signal tests."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app  # type: ignore[misc]
