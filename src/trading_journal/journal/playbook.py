"""Per-setup performance breakdown for the trader's playbook.

Groups journal entries by the setup they were tagged with and reports
win / loss counts and R statistics for each, so the trader can see which
setups are an actual edge.  Custom setups are grouped by their
case-insensitive name.

Usage::

    stats = calculate_playbook_stats(entries)
    stats[0].label        # "Breakout"
    stats[0].is_edge      # True once 5+ trades win more than 55 %
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..core.enums import TradeOutcome
from ..core.rounding import round_1dp, round_2dp
from .record import TradeRecord, coerce_records

logger = logging.getLogger(__name__)

SETUP_LABELS = {
    "breakout": "Breakout",
    "pullback": "Pullback",
    "reversal": "Reversal",
    "range": "Range",
    "trend_continuation": "Trend Continuation",
    "news": "News",
    "custom": "Custom",
}

CUSTOM_PREFIX = "custom:"
EDGE_MIN_TRADES = 5
EDGE_MIN_WIN_RATE = Decimal(55)  # strictly above


@dataclass(frozen=True)
class SetupStats:
    """Performance of one setup group."""

    setup_type: str
    label: str
    total_trades: int
    wins: int
    losses: int
    breakevens: int
    win_rate: Decimal  # percent of resolved trades, 1 dp
    avg_r: Decimal
    total_r: Decimal
    is_edge: bool

    def to_dict(self) -> dict:
        return {
            "setup_type": self.setup_type,
            "label": self.label,
            "total_trades": self.total_trades,
            "wins": self.wins,
            "losses": self.losses,
            "breakevens": self.breakevens,
            "win_rate": float(self.win_rate),
            "avg_r": float(self.avg_r),
            "total_r": float(self.total_r),
            "is_edge": self.is_edge,
        }


def get_setup_label(setup_type: str) -> str:
    """Display label for a built-in setup; unknown keys are returned as-is."""
    return SETUP_LABELS.get(setup_type, setup_type)


def _group_key(record: TradeRecord) -> str | None:
    if not record.setup_type:
        return None
    if record.setup_type != "custom":
        return str(record.setup_type)
    name = (record.setup_type_custom or "").strip()
    if not name:
        return None
    return CUSTOM_PREFIX + name.lower()


def _label(key: str) -> str:
    if key.startswith(CUSTOM_PREFIX):
        words = key[len(CUSTOM_PREFIX):].split(" ")
        return " ".join(w[:1].upper() + w[1:] for w in words)
    return get_setup_label(key)


def _summarize(key: str, group: list[TradeRecord]) -> SetupStats:
    wins = sum(1 for r in group if r.outcome == TradeOutcome.WIN)
    losses = sum(1 for r in group if r.outcome == TradeOutcome.LOSS)
    breakevens = sum(1 for r in group if r.outcome == TradeOutcome.BREAKEVEN)
    closed = wins + losses + breakevens
    win_rate = Decimal(100 * wins) / Decimal(closed) if closed else Decimal(0)

    r_values = [r.r_multiple for r in group if r.r_multiple is not None]
    total_r = sum(r_values, Decimal(0))
    avg_r = total_r / len(r_values) if r_values else Decimal(0)

    return SetupStats(
        setup_type=key,
        label=_label(key),
        total_trades=len(group),
        wins=wins,
        losses=losses,
        breakevens=breakevens,
        win_rate=round_1dp(win_rate),
        avg_r=round_2dp(avg_r),
        total_r=round_2dp(total_r),
        is_edge=len(group) >= EDGE_MIN_TRADES and win_rate > EDGE_MIN_WIN_RATE,
    )


def calculate_playbook_stats(
    entries: Iterable[TradeRecord | Mapping[str, Any]],
) -> list[SetupStats]:
    """Group entries by setup and summarise each group.

    Entries without a setup, and ``custom`` entries without a name, are
    skipped.  Groups are ordered by trade count, largest first; ties keep
    the order in which each setup first appeared.
    """
    groups: dict[str, list[TradeRecord]] = {}
    skipped = 0
    for record in coerce_records(entries):
        key = _group_key(record)
        if key is None:
            skipped += 1
            continue
        groups.setdefault(key, []).append(record)

    if skipped:
        logger.debug("Playbook skipped %d entries without a setup", skipped)

    stats = [_summarize(key, group) for key, group in groups.items()]
    stats.sort(key=lambda s: s.total_trades, reverse=True)
    return stats
