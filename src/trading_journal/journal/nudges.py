"""Pre-trade nudges — warnings built from the trader's own history.

Before a new trade is logged, past entries are scanned for patterns the
trader tends to lose money on.  Each check either returns a nudge or
nothing; the two most severe nudges are shown.

Checks
------
loss_streak    the latest 3+ trades were all losses
instrument     win rate on the chosen instrument is below 40%
day_of_week    win rate on today's weekday is below 35%
emotion        the chosen negative emotion has preceded >60% losses
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..core.clock import IClock, WallClock
from ..core.enums import Emotion, NudgeSeverity, NudgeType, TradeOutcome
from ..core.instruments import normalize_symbol
from ..core.rounding import percent
from .record import TradeRecord, coerce_records

logger = logging.getLogger(__name__)

MAX_NUDGES = 2

NEGATIVE_EMOTIONS: frozenset[str] = frozenset(
    e.value
    for e in (Emotion.ANXIOUS, Emotion.FEARFUL, Emotion.GREEDY, Emotion.FRUSTRATED)
)

_SEVERITY_ORDER: dict[NudgeSeverity, int] = {
    NudgeSeverity.DANGER: 3,
    NudgeSeverity.WARNING: 2,
    NudgeSeverity.INFO: 1,
}

_DAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


@dataclass(frozen=True)
class PreTradeNudge:
    id: str
    type: NudgeType
    severity: NudgeSeverity
    title: str
    message: str
    icon: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "severity": self.severity.value,
            "title": self.title,
            "message": self.message,
            "icon": self.icon,
        }


def _check_loss_streak(records: list[TradeRecord]) -> PreTradeNudge | None:
    if len(records) < 3:
        return None

    newest_first = sorted(records, key=lambda r: r.sort_key, reverse=True)
    losses = 0
    for record in newest_first:
        if record.outcome != TradeOutcome.LOSS:
            break
        losses += 1

    if losses < 3:
        return None

    return PreTradeNudge(
        id=f"nudge-loss-streak-{losses}",
        type=NudgeType.LOSS_STREAK,
        severity=NudgeSeverity.DANGER if losses >= 5 else NudgeSeverity.WARNING,
        title="Loss Streak Detected",
        message=(
            f"Your last {losses} trades were losses. "
            "Consider sizing down or taking a break."
        ),
        icon="local_fire_department",
    )


def _check_instrument(records: list[TradeRecord], instrument: str) -> PreTradeNudge | None:
    symbol = normalize_symbol(instrument)
    trades = [
        r for r in records
        if r.outcome is not None and normalize_symbol(r.instrument) == symbol
    ]
    if len(trades) < 5:
        return None

    wins = sum(1 for r in trades if r.outcome == TradeOutcome.WIN)
    win_rate = percent(wins, len(trades))
    if win_rate >= 40:
        return None

    return PreTradeNudge(
        id=f"nudge-instrument-{instrument.lower()}",
        type=NudgeType.INSTRUMENT,
        severity=NudgeSeverity.DANGER if win_rate < 25 else NudgeSeverity.WARNING,
        title=f"Low Win Rate on {instrument}",
        message=f"Your {instrument} win rate: {win_rate}% ({len(trades)} trades)",
        icon="show_chart",
    )


def _check_day_of_week(records: list[TradeRecord], clock: IClock) -> PreTradeNudge | None:
    weekday = clock.today().weekday()
    day_name = _DAY_NAMES[weekday]
    trades = [
        r for r in records
        if r.outcome is not None and r.trade_day.weekday() == weekday
    ]
    if len(trades) < 3:
        return None

    wins = sum(1 for r in trades if r.outcome == TradeOutcome.WIN)
    win_rate = percent(wins, len(trades))
    if win_rate >= 35:
        return None

    return PreTradeNudge(
        id=f"nudge-day-{(weekday + 1) % 7}",  # 0 = Sunday
        type=NudgeType.DAY_OF_WEEK,
        severity=NudgeSeverity.DANGER if win_rate < 20 else NudgeSeverity.WARNING,
        title=f"Weak {day_name} Performance",
        message=f"It's {day_name}. Your {day_name} win rate: {win_rate}%",
        icon="calendar_today",
    )


def _check_emotion(records: list[TradeRecord], emotion: str) -> PreTradeNudge | None:
    if emotion not in NEGATIVE_EMOTIONS:
        return None

    trades = [
        r for r in records
        if r.outcome is not None and r.emotion_before == emotion
    ]
    if len(trades) < 3:
        return None

    losses = sum(1 for r in trades if r.outcome == TradeOutcome.LOSS)
    loss_rate = percent(losses, len(trades))
    if loss_rate <= 60:
        return None

    return PreTradeNudge(
        id=f"nudge-emotion-{emotion}",
        type=NudgeType.EMOTION,
        severity=NudgeSeverity.DANGER if loss_rate >= 80 else NudgeSeverity.WARNING,
        title="Emotional Pattern Detected",
        message=(
            f"Last time you felt {emotion}, you lost {losses} "
            f"of {len(trades)} trades"
        ),
        icon="psychology_alt",
    )


def generate_nudges(
    entries: Iterable[TradeRecord | Mapping[str, Any]],
    *,
    instrument: str | None = None,
    emotion: Emotion | str | None = None,
    clock: IClock | None = None,
) -> list[PreTradeNudge]:
    """Return up to :data:`MAX_NUDGES` nudges, most severe first.

    Parameters
    ----------
    entries : iterable
        Past journal entries (records or raw rows).
    instrument : str, optional
        Instrument about to be traded; enables the instrument check.
    emotion : Emotion | str, optional
        Current emotion; enables the emotion check.
    clock : IClock, optional
        Decides what "today" is for the weekday check.
    """
    records = coerce_records(entries)
    clock = clock or WallClock()

    candidates = [_check_loss_streak(records)]
    if instrument:
        candidates.append(_check_instrument(records, instrument))
    candidates.append(_check_day_of_week(records, clock))
    if emotion:
        tag = emotion.value if isinstance(emotion, Emotion) else str(emotion)
        candidates.append(_check_emotion(records, tag))

    nudges = [n for n in candidates if n is not None]
    nudges.sort(key=lambda n: _SEVERITY_ORDER[n.severity], reverse=True)
    if nudges:
        logger.debug("Generated nudges: %s", [n.id for n in nudges])
    return nudges[:MAX_NUDGES]
