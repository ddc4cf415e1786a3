import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    from PyQt5.QtGui import QGuiApplication

    app = QGuiApplication.instance() or QGuiApplication(["metaballmenu-tests"])
    yield app
