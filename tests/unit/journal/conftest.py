"""Shared fixtures for journal tests."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from trading_journal.core.enums import TradeOutcome
from trading_journal.journal.cache import ScoreCache
from trading_journal.journal.record import TradeRecord

from ...conftest import TODAY

FOUR_RULES = ("plan", "size", "stop", "target")


def make_record(
    trade_date: date | datetime | str = TODAY,
    outcome: TradeOutcome | None = None,
    stop_loss: float | None = None,
    emotion_before: str | None = "neutral",
    rules_followed: tuple[str, ...] = (),
    instrument: str = "EURUSD",
    r_multiple: float | None = None,
    setup_type: str | None = None,
    setup_type_custom: str | None = None,
) -> TradeRecord:
    """Helper to create a TradeRecord."""
    if isinstance(trade_date, str):
        trade_date = date.fromisoformat(trade_date)
    return TradeRecord(
        trade_date=trade_date,
        outcome=outcome,
        stop_loss=Decimal(str(stop_loss)) if stop_loss is not None else None,
        emotion_before=emotion_before,
        rules_followed=rules_followed,
        instrument=instrument,
        r_multiple=Decimal(str(r_multiple)) if r_multiple is not None else None,
        setup_type=setup_type,
        setup_type_custom=setup_type_custom,
    )


@pytest.fixture
def disciplined_record():
    return make_record(
        stop_loss=1.0950,
        emotion_before="calm",
        rules_followed=FOUR_RULES,
    )


@pytest.fixture
def score_cache(sim_clock):
    return ScoreCache(ttl_seconds=300, clock=sim_clock)
