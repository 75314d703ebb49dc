"""Shared pytest fixtures for IntervalQuest tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from intervalquest.database.db import configure_engine, init_db
from intervalquest.timer.config import TimerConfiguration
from intervalquest.timer.engine import TimerEngine

from helpers import ManualScheduler


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def engine(qapp, scheduler):
    """Fresh TimerEngine: 30 s work, 10 s rest, 5 rounds, no exercises."""
    return TimerEngine(
        parent=None,
        configuration=TimerConfiguration(30, 10, 5),
        scheduler=scheduler,
    )


@pytest.fixture
def engine_abc(qapp, scheduler):
    """Same configuration with exercises A, B, C."""
    return TimerEngine(
        parent=None,
        configuration=TimerConfiguration(30, 10, 5),
        exercises=["A", "B", "C"],
        scheduler=scheduler,
    )
