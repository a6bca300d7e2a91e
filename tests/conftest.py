"""Shared pytest fixtures for Interval Alarm tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from intervalalarm.database.db import configure_engine, init_db
from intervalalarm.database.models import AlarmSession
from intervalalarm.settings import Settings
from intervalalarm.sync.channel import OutboxChannel
from intervalalarm.timer.core import IntervalSessionController
from intervalalarm.timer.driver import IntervalTimer

from helpers import FakeClock


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
def clock():
    return FakeClock()


@pytest.fixture
def session():
    """Unsaved session entity for controller-only tests."""
    return AlarmSession.new()


@pytest.fixture
def controller(clock):
    """Production configuration: 10 x 180 s."""
    return IntervalSessionController(clock=clock)


@pytest.fixture
def short(clock):
    """Short configuration for full-session runs: 3 x 10 s."""
    return IntervalSessionController(
        interval_duration=10, total_intervals=3, clock=clock,
    )


@pytest.fixture
def outbox():
    return OutboxChannel()


@pytest.fixture
def timer(qapp, clock, outbox):
    """IntervalTimer with DB enabled, 3 x 10 s intervals."""
    return IntervalTimer(
        settings=Settings(interval_duration=10, total_intervals=3),
        db_enabled=True,
        sync_channel=outbox,
        clock=clock,
    )


@pytest.fixture
def timer_no_db(qapp, clock):
    return IntervalTimer(
        settings=Settings(interval_duration=10, total_intervals=3),
        db_enabled=False,
        clock=clock,
    )
