"""Tests for generate_nudges — pre-trade pattern warnings."""

from datetime import date

from trading_journal.core.clock import SimClock
from trading_journal.core.enums import Emotion, NudgeSeverity, NudgeType, TradeOutcome
from trading_journal.journal.nudges import MAX_NUDGES, generate_nudges

from ...conftest import days_ago
from .conftest import make_record

WIN = TradeOutcome.WIN
LOSS = TradeOutcome.LOSS


def _types(nudges):
    return [n.type for n in nudges]


class TestLossStreak:
    def test_three_losses_warn(self, sim_clock):
        entries = [make_record(days_ago(i), LOSS) for i in (1, 2, 3)]
        nudges = generate_nudges(entries, clock=sim_clock)
        assert _types(nudges) == [NudgeType.LOSS_STREAK]
        assert nudges[0].severity == NudgeSeverity.WARNING
        assert nudges[0].id == "nudge-loss-streak-3"

    def test_five_losses_are_danger(self, sim_clock):
        entries = [make_record(days_ago(i), LOSS) for i in (1, 2, 3, 4, 5)]
        nudges = generate_nudges(entries, clock=sim_clock)
        assert nudges[0].severity == NudgeSeverity.DANGER
        assert "5 trades were losses" in nudges[0].message

    def test_recent_win_resets_streak(self, sim_clock):
        entries = [make_record(days_ago(1), WIN)] + [
            make_record(days_ago(i), LOSS) for i in (2, 3, 4)
        ]
        assert generate_nudges(entries, clock=sim_clock) == []

    def test_fewer_than_three_entries(self, sim_clock):
        entries = [make_record(days_ago(i), LOSS) for i in (1, 2)]
        assert generate_nudges(entries, clock=sim_clock) == []


class TestInstrument:
    def _history(self, wins: int):
        return [
            make_record(days_ago(i), WIN if i <= wins else LOSS, instrument="GBPUSD")
            for i in range(1, 6)
        ]

    def test_low_win_rate_is_danger(self, sim_clock):
        nudges = generate_nudges(self._history(1), instrument="GBPUSD", clock=sim_clock)
        assert _types(nudges) == [NudgeType.INSTRUMENT]
        assert nudges[0].severity == NudgeSeverity.DANGER
        assert nudges[0].message == "Your GBPUSD win rate: 20% (5 trades)"

    def test_forty_percent_is_fine(self, sim_clock):
        assert generate_nudges(self._history(2), instrument="GBPUSD", clock=sim_clock) == []

    def test_symbol_format_insensitive(self, sim_clock):
        nudges = generate_nudges(self._history(1), instrument="gbp/usd", clock=sim_clock)
        assert _types(nudges) == [NudgeType.INSTRUMENT]

    def test_only_checked_when_instrument_given(self, sim_clock):
        assert generate_nudges(self._history(1), clock=sim_clock) == []


class TestDayOfWeek:
    def test_weak_weekday(self, sim_clock):
        # 2024-03-15 is a Friday; 7/14/21 days back are Fridays too.
        entries = [make_record(days_ago(1), WIN)] + [
            make_record(days_ago(d), LOSS) for d in (7, 14, 21)
        ]
        nudges = generate_nudges(entries, clock=sim_clock)
        assert _types(nudges) == [NudgeType.DAY_OF_WEEK]
        assert nudges[0].title == "Weak Friday Performance"
        assert nudges[0].id == "nudge-day-5"
        assert nudges[0].severity == NudgeSeverity.DANGER

    def test_sunday_id_is_zero(self):
        sunday = date(2024, 3, 17)
        entries = [
            make_record(days_ago(d, sunday), LOSS) for d in (7, 14, 21)
        ] + [make_record(days_ago(1, sunday), WIN)]
        nudges = generate_nudges(entries, clock=SimClock.on(sunday))
        assert [n.id for n in nudges] == ["nudge-day-0"]


class TestEmotion:
    def test_negative_emotion_history(self, sim_clock):
        entries = [
            make_record(days_ago(i), WIN if i == 1 else LOSS, emotion_before="anxious")
            for i in (1, 2, 3, 4)
        ]
        nudges = generate_nudges(entries, emotion=Emotion.ANXIOUS, clock=sim_clock)
        assert _types(nudges) == [NudgeType.EMOTION]
        # 3 of 4 = 75 %
        assert nudges[0].severity == NudgeSeverity.WARNING
        assert nudges[0].message == "Last time you felt anxious, you lost 3 of 4 trades"

    def test_positive_emotion_never_nudges(self, sim_clock):
        entries = [make_record(days_ago(i), LOSS, emotion_before="calm") for i in (2, 4, 6)]
        nudges = generate_nudges(entries, emotion="calm", clock=sim_clock)
        assert NudgeType.EMOTION not in _types(nudges)

    def test_excited_is_not_a_warning_emotion(self, sim_clock):
        entries = [
            make_record(days_ago(i), LOSS, emotion_before="excited") for i in (2, 4, 6)
        ]
        nudges = generate_nudges(entries, emotion=Emotion.EXCITED, clock=sim_clock)
        assert NudgeType.EMOTION not in _types(nudges)

    def test_unknown_emotion_is_ignored(self, sim_clock):
        assert generate_nudges([], emotion="bored", clock=sim_clock) == []


class TestRanking:
    def test_most_severe_two_returned(self, sim_clock):
        entries = [
            make_record(days_ago(0), LOSS, emotion_before="anxious", instrument="GBPUSD"),
            make_record(days_ago(1), LOSS, emotion_before="anxious", instrument="GBPUSD"),
            make_record(days_ago(2), LOSS, emotion_before="anxious", instrument="GBPUSD"),
            make_record(days_ago(3), WIN, emotion_before="calm", instrument="GBPUSD"),
            make_record(days_ago(4), LOSS, emotion_before="calm", instrument="GBPUSD"),
        ]
        nudges = generate_nudges(
            entries, instrument="GBPUSD", emotion="anxious", clock=sim_clock
        )
        assert len(nudges) == MAX_NUDGES
        assert _types(nudges) == [NudgeType.INSTRUMENT, NudgeType.EMOTION]
        assert all(n.severity == NudgeSeverity.DANGER for n in nudges)

    def test_to_dict(self, sim_clock):
        entries = [make_record(days_ago(i), LOSS) for i in (1, 2, 3)]
        payload = generate_nudges(entries, clock=sim_clock)[0].to_dict()
        assert payload["type"] == "loss_streak"
        assert payload["severity"] == "warning"
