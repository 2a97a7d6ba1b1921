"""Consistency score — a discipline grade, not a profitability grade.

Aggregates the most recent trades into four sub-scores and a weighted
composite, each an integer 0-100:

    Sub-score                Weight   Measures
    ──────────────────────────────────────────────────────────────
    Rule adherence            40%     trades with >= 4 rules followed
    Risk management           25%     trades with a stop-loss set
    Emotional discipline      20%     trades entered calm/confident/neutral
    Journaling consistency    15%     distinct trading days vs 14-day target

Every sub-score is rounded before it is weighted so the numbers shown to
the trader are exactly the ones the overall score is built from.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..core.enums import Emotion
from ..core.rounding import percent, round_half_up
from .record import TradeRecord, coerce_records

GOOD_EMOTIONS: frozenset[str] = frozenset(
    e.value for e in (Emotion.CALM, Emotion.CONFIDENT, Emotion.NEUTRAL)
)
MIN_RULES_COUNT = 4
TARGET_UNIQUE_DAYS = 14
RECENT_ENTRIES_LIMIT = 20

SCORE_WEIGHTS: dict[str, Decimal] = {
    "rule_adherence": Decimal("0.40"),
    "risk_management": Decimal("0.25"),
    "emotional_discipline": Decimal("0.20"),
    "journaling_consistency": Decimal("0.15"),
}


@dataclass(frozen=True)
class ConsistencyScoreBreakdown:
    rule_adherence: int = 0
    risk_management: int = 0
    emotional_discipline: int = 0
    journaling_consistency: int = 0
    overall: int = 0

    def to_dict(self) -> dict:
        return {
            "rule_adherence": self.rule_adherence,
            "risk_management": self.risk_management,
            "emotional_discipline": self.emotional_discipline,
            "journaling_consistency": self.journaling_consistency,
            "overall": self.overall,
        }


def recent_window(
    records: Iterable[TradeRecord], limit: int = RECENT_ENTRIES_LIMIT
) -> list[TradeRecord]:
    """Most recent *limit* records, newest first.

    The sort is stable, so records sharing a timestamp keep input order.
    """
    return sorted(records, key=lambda r: r.sort_key, reverse=True)[:limit]


def weighted_overall(
    rule_adherence: int,
    risk_management: int,
    emotional_discipline: int,
    journaling_consistency: int,
) -> int:
    """Combine already-rounded sub-scores with :data:`SCORE_WEIGHTS`."""
    total = (
        SCORE_WEIGHTS["rule_adherence"] * rule_adherence
        + SCORE_WEIGHTS["risk_management"] * risk_management
        + SCORE_WEIGHTS["emotional_discipline"] * emotional_discipline
        + SCORE_WEIGHTS["journaling_consistency"] * journaling_consistency
    )
    return round_half_up(total)


def calculate_consistency_score(
    entries: Iterable[TradeRecord | Mapping[str, Any]],
) -> ConsistencyScoreBreakdown:
    """Score the most recent :data:`RECENT_ENTRIES_LIMIT` journal entries.

    Entries may be :class:`TradeRecord` objects or raw storage rows.
    An empty input gives the all-zero breakdown.
    """
    window = recent_window(coerce_records(entries))
    total = len(window)
    if total == 0:
        return ConsistencyScoreBreakdown()

    enough_rules = sum(1 for r in window if len(r.rules_followed) >= MIN_RULES_COUNT)
    with_stop = sum(1 for r in window if r.stop_loss is not None)
    good_emotion = sum(1 for r in window if r.emotion_before in GOOD_EMOTIONS)
    unique_days = len({r.trade_day for r in window})

    rule_adherence = percent(enough_rules, total)
    risk_management = percent(with_stop, total)
    emotional_discipline = percent(good_emotion, total)
    journaling_consistency = min(100, percent(unique_days, TARGET_UNIQUE_DAYS))

    return ConsistencyScoreBreakdown(
        rule_adherence=rule_adherence,
        risk_management=risk_management,
        emotional_discipline=emotional_discipline,
        journaling_consistency=journaling_consistency,
        overall=weighted_overall(
            rule_adherence,
            risk_management,
            emotional_discipline,
            journaling_consistency,
        ),
    )
