"""Shared fixtures for the TimeDial test suite."""

import pytest

from timedial.core.paths import set_app_data_directory
from timedial.core.store import IntervalStore


@pytest.fixture(scope="session")
def qt_core_app():
    """A QCoreApplication so QObject signals behave as they do in the app."""
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def app_data_dir(tmp_path):
    """Redirect settings, logs and exports into a throwaway directory."""
    path = set_app_data_directory(tmp_path / "appdata")
    yield path
    set_app_data_directory(None)


@pytest.fixture
def store():
    return IntervalStore()
