"""Journaling streak with a weekly rest-day allowance.

The streak counts consecutive days, walking backward from today, on
which the trader either logged a trade or checked in.  A missed day does
not break it as long as the miss is isolated and the rolling 7-day
window it falls in has not already used up the rest-day allowance.

Usage::

    result = calculate_streak(
        ["2024-03-04", "2024-03-03", "2024-03-01"],
        checkin_dates=[],
        allowed_rest_days_per_week=1,
        clock=SimClock.on(date(2024, 3, 4)),
    )
    result.current_streak         # 4 (the 2nd is a forgiven rest day)
    result.rest_days_available    # 0
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from ..core.clock import IClock, WallClock
from .record import ActivityDate, parse_activity_date

logger = logging.getLogger(__name__)

DEFAULT_REST_DAYS_PER_WEEK = 1
MAX_LOOKBACK_DAYS = 365
WINDOW_DAYS = 7


@dataclass(frozen=True)
class StreakResult:
    """Streak snapshot as of the clock's current date."""

    current_streak: int
    rest_days_used_this_week: int
    rest_days_available: int
    has_checked_in_today: bool
    has_traded_today: bool

    def to_dict(self) -> dict:
        return {
            "current_streak": self.current_streak,
            "rest_days_used_this_week": self.rest_days_used_this_week,
            "rest_days_available": self.rest_days_available,
            "has_checked_in_today": self.has_checked_in_today,
            "has_traded_today": self.has_traded_today,
        }


def _to_date_set(dates: Iterable[ActivityDate]) -> set[date]:
    return {parse_activity_date(d) for d in dates}


def _gaps_in_window(active: set[date], gap_day: date, today: date) -> int:
    """Missed days in the 7-day window that starts at *gap_day*.

    Only days already covered by the backward walk (``<= today``) count,
    so the gap itself plus any rest days spent in the six days after it.
    """
    # Window runs forward from the gap on purpose; older days are not walked yet.
    end = min(gap_day + timedelta(days=WINDOW_DAYS - 1), today)
    count = 0
    day = gap_day
    while day <= end:
        if day not in active:
            count += 1
        day += timedelta(days=1)
    return count


def calculate_streak(
    trade_dates: Iterable[ActivityDate],
    checkin_dates: Iterable[ActivityDate],
    allowed_rest_days_per_week: int = DEFAULT_REST_DAYS_PER_WEEK,
    *,
    clock: IClock | None = None,
    max_lookback_days: int = MAX_LOOKBACK_DAYS,
) -> StreakResult:
    """Compute the current streak and this week's rest-day usage.

    Parameters
    ----------
    trade_dates : iterable of date-like
        Days with at least one journaled trade.  Duplicates are fine.
    checkin_dates : iterable of date-like
        Days with a voluntary check-in.
    allowed_rest_days_per_week : int
        Missed days forgiven per rolling 7-day window.  Default 1.
    clock : IClock, optional
        Source of "today".  Defaults to the UTC wall clock.
    max_lookback_days : int
        Hard cap on how far back the walk goes.

    Returns
    -------
    StreakResult
    """
    if allowed_rest_days_per_week < 0:
        raise ValueError(
            f"allowed_rest_days_per_week must be >= 0, got {allowed_rest_days_per_week}"
        )

    today = (clock or WallClock()).today()
    traded = _to_date_set(trade_dates)
    checked_in = _to_date_set(checkin_dates)
    active = traded | checked_in

    has_traded_today = today in traded
    has_checked_in_today = today in checked_in or has_traded_today

    streak = 0
    pending_rest = 0  # spent rest days not yet bridged by an older active day
    consecutive_gaps = 0

    for offset in range(max_lookback_days):
        day = today - timedelta(days=offset)

        if day in active:
            streak += 1 + pending_rest
            pending_rest = 0
            consecutive_gaps = 0
            continue

        consecutive_gaps += 1
        rest_in_window = _gaps_in_window(active, day, today)
        if rest_in_window <= allowed_rest_days_per_week and consecutive_gaps <= 1:
            pending_rest += 1
            continue

        logger.debug(
            "Streak ends at %s (gaps_in_window=%d, consecutive_gaps=%d)",
            day.isoformat(),
            rest_in_window,
            consecutive_gaps,
        )
        break

    used = sum(
        1
        for offset in range(WINDOW_DAYS)
        if today - timedelta(days=offset) not in active
    )
    # Today is still in progress; it does not count against the allowance yet.
    if not has_checked_in_today:
        used = max(0, used - 1)

    return StreakResult(
        current_streak=streak,
        rest_days_used_this_week=min(used, allowed_rest_days_per_week),
        rest_days_available=max(0, allowed_rest_days_per_week - used),
        has_checked_in_today=has_checked_in_today,
        has_traded_today=has_traded_today,
    )


def today_iso(clock: IClock | None = None) -> str:
    """Today's date as ``YYYY-MM-DD``."""
    return (clock or WallClock()).today().isoformat()


def is_today(value: ActivityDate, clock: IClock | None = None) -> bool:
    """True when *value* falls on the clock's current date."""
    return parse_activity_date(value) == (clock or WallClock()).today()
