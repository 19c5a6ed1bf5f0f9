"""Shared pytest fixtures for Countdown tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from countdown.timer.engine import TimerEngine

from helpers import FakeClock, ManualScheduler


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real settings file."""
    monkeypatch.setattr("countdown.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("countdown.settings.SETTINGS_PATH", tmp_path / "settings.json")
    yield


@pytest.fixture
def scheduler(qapp):
    return ManualScheduler()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_engine(qapp, scheduler, clock):
    """Factory for engines wired to the manual scheduler and fake clock."""

    def _make(total_ms: int = 5000, **kwargs) -> TimerEngine:
        kwargs.setdefault("scheduler", scheduler)
        kwargs.setdefault("clock", clock)
        return TimerEngine(total_ms, **kwargs)

    return _make


@pytest.fixture
def engine(make_engine):
    """Fresh 5 s engine, not looping, not started."""
    return make_engine(5000)
