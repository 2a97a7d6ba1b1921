"""Headline journal numbers: win rate and journaling streak."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..core.clock import IClock
from ..core.enums import TradeOutcome
from .record import ActivityDate, TradeRecord, coerce_records
from .streak import calculate_streak


@dataclass(frozen=True)
class JournalStats:
    win_rate: float = 0.0  # percent of trades with an outcome
    journal_streak: int = 0
    total_with_outcome: int = 0

    def to_dict(self) -> dict:
        return {
            "win_rate": self.win_rate,
            "journal_streak": self.journal_streak,
            "total_with_outcome": self.total_with_outcome,
        }


def summarize_journal(
    entries: Iterable[TradeRecord | Mapping[str, Any]],
    checkin_dates: Iterable[ActivityDate] = (),
    *,
    allowed_rest_days_per_week: int = 1,
    clock: IClock | None = None,
) -> JournalStats:
    records = coerce_records(entries)
    if not records:
        return JournalStats()

    resolved = [r for r in records if r.outcome is not None]
    wins = sum(1 for r in resolved if r.outcome == TradeOutcome.WIN)
    win_rate = wins / len(resolved) * 100 if resolved else 0.0

    streak = calculate_streak(
        {r.trade_day for r in records},
        checkin_dates,
        allowed_rest_days_per_week,
        clock=clock,
    )
    return JournalStats(
        win_rate=win_rate,
        journal_streak=streak.current_streak,
        total_with_outcome=len(resolved),
    )
