from typing import Iterator

import pytest
from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope="session")
def qt_app() -> Iterator[QCoreApplication]:
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
