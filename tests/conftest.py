"""Shared pytest fixtures for Pomodore tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from pomodore.database.db import configure_engine, init_db
from pomodore.service.status import StatusService
from pomodore.settings import DEFAULT_SETTINGS, SettingsRepository, settings_to_rows
from pomodore.timer.controller import SessionController
from pomodore.timer.engine import TimerEngine

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db(settings_to_rows(DEFAULT_SETTINGS))
    yield


@pytest.fixture
def engine():
    """Fresh TimerEngine with default settings (no Qt needed)."""
    return TimerEngine()


@pytest.fixture
def repository(qapp):
    return SettingsRepository()


@pytest.fixture
def controller(repository):
    """SessionController on the default settings; tick by calling _on_tick."""
    c = SessionController(repository)
    yield c
    c.shutdown()


@pytest.fixture
def clock():
    return FakeClock(start=1_000_000)


@pytest.fixture
def status_service(qapp, clock):
    """StatusService driven by a fake clock; refresh by calling _refresh."""
    service = StatusService(clock)
    yield service
    service.handle_command("stop")
