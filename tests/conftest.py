"""Shared fixtures for Money Tracker tests."""

from datetime import datetime, timedelta, timezone

import pytest

from money_tracker.config import get_settings
from money_tracker.ledger import Ledger
from money_tracker.services.storage import InMemoryEntryStore


class FakeClock:
    """Deterministic clock; advances one second per call unless frozen."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path):
    """Isolate every test from the developer's environment and .env."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "MONEY_TRACKER_STORAGE_BACKEND",
        "MONEY_TRACKER_STORAGE_PATH",
        "MONEY_TRACKER_STORAGE_KEY",
        "MONEY_TRACKER_CURRENCY_SYMBOL",
        "MONEY_TRACKER_THOUSANDS_SEPARATOR",
        "MONEY_TRACKER_DECIMAL_SEPARATOR",
        "MONEY_TRACKER_DECIMAL_PLACES",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def store():
    return InMemoryEntryStore()


@pytest.fixture
def ledger(store, clock):
    return Ledger(store, clock=clock)


@pytest.fixture
def make_clock():
    """Build a FakeClock with a custom start and step."""
    return FakeClock
