"""Shared fixtures for the trading-journal test suite."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from trading_journal.core.clock import SimClock

# A Friday, so weekday-based checks are predictable.
TODAY = date(2024, 3, 15)


def days_ago(n: int, today: date = TODAY) -> str:
    """ISO date *n* days before *today*."""
    return (today - timedelta(days=n)).isoformat()


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def sim_clock() -> SimClock:
    return SimClock.on(TODAY)
