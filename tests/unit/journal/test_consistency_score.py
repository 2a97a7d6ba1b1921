"""Tests for calculate_consistency_score — weighted discipline score."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from trading_journal.core.errors import InvalidRecordError
from trading_journal.journal.consistency import (
    RECENT_ENTRIES_LIMIT,
    SCORE_WEIGHTS,
    TARGET_UNIQUE_DAYS,
    ConsistencyScoreBreakdown,
    calculate_consistency_score,
    recent_window,
    weighted_overall,
)
from trading_journal.journal.record import coerce_records

from ...conftest import days_ago
from .conftest import FOUR_RULES, make_record


def _good(day: int):
    return make_record(
        trade_date=days_ago(day),
        stop_loss=1.0950,
        emotion_before="calm",
        rules_followed=FOUR_RULES,
    )


def _bad(day: int):
    return make_record(
        trade_date=days_ago(day),
        stop_loss=None,
        emotion_before="anxious",
        rules_followed=("plan",),
    )


class TestPolicyTables:
    def test_weights_sum_to_one(self):
        assert sum(SCORE_WEIGHTS.values()) == Decimal("1")

    def test_constants(self):
        assert RECENT_ENTRIES_LIMIT == 20
        assert TARGET_UNIQUE_DAYS == 14


class TestConsistencyScoreScenarios:
    def test_empty_entries(self):
        result = calculate_consistency_score([])
        assert result == ConsistencyScoreBreakdown()
        assert result.overall == 0
        assert result.rule_adherence == 0
        assert result.journaling_consistency == 0

    def test_perfect_discipline(self):
        entries = [_good(i % 14) for i in range(20)]
        result = calculate_consistency_score(entries)
        assert result.rule_adherence == 100
        assert result.risk_management == 100
        assert result.emotional_discipline == 100
        assert result.journaling_consistency == 100
        assert result.overall == 100

    def test_mixed_discipline(self):
        entries = []
        for i in range(10):
            entries.append(make_record(
                trade_date=days_ago(i % 5),
                stop_loss=1.1 if i < 5 else None,
                emotion_before="greedy",
                rules_followed=("plan", "size"),
            ))
        result = calculate_consistency_score(entries)
        assert result.rule_adherence == 0
        assert result.risk_management == 50
        assert result.emotional_discipline == 0
        assert result.journaling_consistency == 36
        assert result.overall == 18

    def test_only_recent_window_is_scored(self):
        recent = [_good(i % 14) for i in range(20)]
        old = [_bad(30 + i) for i in range(5)]
        result = calculate_consistency_score(old + recent)
        assert result.overall == 100

    def test_window_follows_dates_not_input_order(self):
        entries = [_bad(40)] + [_good(i) for i in range(20)]
        window = recent_window(entries)
        assert len(window) == 20
        assert all(r.emotion_before == "calm" for r in window)

    def test_window_orders_mixed_offsets_by_instant(self):
        earlier = {"trade_date": "2024-03-15T01:00:00+05:00"}  # 20:00Z on the 14th
        later = {"trade_date": "2024-03-14T22:00:00+00:00"}
        window = recent_window(coerce_records([earlier, later]), limit=1)
        assert window[0].sort_key == datetime(2024, 3, 14, 22)

    def test_window_is_newest_first(self):
        entries = [_good(3), _good(1), _good(2)]
        window = recent_window(entries)
        assert [r.trade_date for r in window] == sorted(
            (r.trade_date for r in entries), reverse=True
        )


class TestSubScores:
    def test_rule_threshold_is_four(self):
        entries = [
            make_record(rules_followed=("a", "b", "c")),
            make_record(rules_followed=("a", "b", "c", "d")),
        ]
        assert calculate_consistency_score(entries).rule_adherence == 50

    def test_zero_stop_loss_counts_as_set(self):
        entries = [make_record(stop_loss=0.0)]
        assert calculate_consistency_score(entries).risk_management == 100

    def test_good_emotions(self):
        entries = [
            make_record(emotion_before="calm"),
            make_record(emotion_before="confident"),
            make_record(emotion_before="neutral"),
            make_record(emotion_before=None),
        ]
        assert calculate_consistency_score(entries).emotional_discipline == 75

    def test_unique_days_ignore_time_of_day(self):
        base = datetime(2024, 3, 15, 9, 0)
        entries = [make_record(trade_date=base + timedelta(hours=h)) for h in range(5)]
        # one distinct day out of 14 -> 7.14 -> 7
        assert calculate_consistency_score(entries).journaling_consistency == 7

    def test_journaling_capped_at_100(self):
        entries = [_good(i) for i in range(20)]
        assert calculate_consistency_score(entries).journaling_consistency == 100

    def test_sub_scores_round_half_up(self):
        entries = [make_record(stop_loss=1.1)] + [make_record() for _ in range(7)]
        # 1 / 8 = 12.5 %
        assert calculate_consistency_score(entries).risk_management == 13


class TestWeightedOverall:
    def test_half_rounds_up(self):
        assert weighted_overall(0, 50, 0, 0) == 13

    def test_uses_rounded_sub_scores(self):
        assert weighted_overall(0, 50, 0, 36) == 18

    def test_all_max(self):
        assert weighted_overall(100, 100, 100, 100) == 100


class TestInputs:
    def test_accepts_raw_rows(self):
        rows = [
            {
                "trade_date": days_ago(i % 14),
                "outcome": "win",
                "stop_loss": "1.0950",
                "emotion_before": "calm",
                "rules_followed": list(FOUR_RULES),
            }
            for i in range(20)
        ]
        assert calculate_consistency_score(rows).overall == 100

    def test_raw_row_without_date_rejected(self):
        with pytest.raises(InvalidRecordError, match="trade_date"):
            calculate_consistency_score([{"outcome": "win"}])

    def test_input_not_mutated(self):
        entries = [_good(2), _good(0), _good(1)]
        snapshot = list(entries)
        calculate_consistency_score(entries)
        assert entries == snapshot

    def test_to_dict(self):
        result = calculate_consistency_score([_good(0)])
        assert set(result.to_dict()) == {
            "rule_adherence",
            "risk_management",
            "emotional_discipline",
            "journaling_consistency",
            "overall",
        }
