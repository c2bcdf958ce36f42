"""Shared pytest fixtures for Tabata timer tests."""

import os
import sys
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from tabata.database.db import configure_engine, init_db
from tabata.timer.engine import TimerEngine
from tabata.timer.stages import build_stages


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def stages():
    """Two-cycle program: Prepare, Work, Rest, Work, Finish."""
    return build_stages(2)


@pytest.fixture
def engine(qapp, stages):
    """Fresh TimerEngine with DB enabled."""
    return TimerEngine(stages, parent=None, db_enabled=True)


@pytest.fixture
def engine_no_db(qapp, stages):
    """Fresh TimerEngine with DB disabled (pure host-loop tests)."""
    return TimerEngine(stages, parent=None, db_enabled=False)
