"""Progressive unlock ladder.

Features open up as the trader journals more trades.  The ladder is a
fixed ascending table; a tier is reached when the cumulative trade count
is ``>=`` its threshold.  Nothing exists above the top tier: lookups past
it return ``None`` rather than extrapolating.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..core.rounding import percent


@dataclass(frozen=True)
class UnlockLevel:
    level: int
    trades: int  # cumulative trades required
    title: str
    unlocks: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "trades": self.trades,
            "title": self.title,
            "unlocks": list(self.unlocks),
        }


@dataclass(frozen=True)
class LevelProgress:
    """Progress from the current tier's threshold toward the next one."""

    current: int
    target: int
    percent: int

    def to_dict(self) -> dict:
        return {"current": self.current, "target": self.target, "percent": self.percent}


PROGRESSIVE_LEVELS: tuple[UnlockLevel, ...] = (
    UnlockLevel(1, 1, "Journal Activated", ("Dashboard", "First trading tip")),
    UnlockLevel(2, 3, "First Patterns", ("First insights", "Trading DNA preview")),
    UnlockLevel(3, 7, "Consistency Tracker", ("Consistency Score", "Basic patterns")),
    UnlockLevel(4, 15, "Pattern Seeker", ("Weekly Review", "Playbook")),
    UnlockLevel(5, 30, "Disciplined Trader", ("Pre-trade nudges", "Full analytics")),
    UnlockLevel(
        6, 50, "Trading Pro", ("Advanced patterns", "Historical comparisons", "Export")
    ),
)

MAX_LEVEL = PROGRESSIVE_LEVELS[-1]


def get_level_for_trades(trades: int) -> UnlockLevel:
    """Highest tier whose threshold *trades* meets.

    Below the first threshold (zero trades) the first tier is returned so
    callers always have something to display; progress toward the next
    tier reports 0 in that case.
    """
    current = PROGRESSIVE_LEVELS[0]
    for level in PROGRESSIVE_LEVELS:
        if trades >= level.trades:
            current = level
        else:
            break
    return current


def get_next_level(trades: int) -> UnlockLevel | None:
    """The tier after the current one, or ``None`` at the top."""
    index = PROGRESSIVE_LEVELS.index(get_level_for_trades(trades)) + 1
    if index >= len(PROGRESSIVE_LEVELS):
        return None
    return PROGRESSIVE_LEVELS[index]


def get_progress_to_next_level(trades: int) -> LevelProgress:
    """Trades made since the current threshold vs trades needed for the next.

    At the top tier ``percent`` is 100 and ``target`` is the top threshold.
    """
    current = get_level_for_trades(trades)
    next_level = get_next_level(trades)

    if next_level is None:
        return LevelProgress(current=trades, target=current.trades, percent=100)

    progress = max(0, trades - current.trades)
    needed = next_level.trades - current.trades
    pct = min(100, percent(progress, needed))
    return LevelProgress(current=progress, target=needed, percent=pct)


def is_feature_unlocked(trades: int, required_level: int) -> bool:
    """True when *trades* reaches at least tier *required_level*."""
    return get_level_for_trades(trades).level >= required_level
