"""Trade journal calculators — habit, discipline and trade arithmetic.

Every function here is pure: immutable inputs in, a frozen result out,
no I/O.  "Today" comes from an injectable clock.

Key components
--------------
**Habit & discipline**

calculate_streak             Activity streak with weekly rest-day allowance
calculate_consistency_score  Weighted 0-100 discipline score
summarize_journal            Win rate + streak headline numbers
generate_nudges              Pre-trade pattern warnings
calculate_playbook_stats     Win rate and R per playbook setup

**Trade arithmetic**

calculate_pnl                Pips, P&L and R-multiple for one trade

**Gamification**

get_level_for_trades         Progressive unlock ladder lookups
ScoreCache                   Per-user TTL cache for consistency scores
"""

from .record import TradeRecord
from .streak import StreakResult, calculate_streak
from .consistency import ConsistencyScoreBreakdown, calculate_consistency_score
from .pnl import PnlResult, calculate_pnl
from .levels import (
    PROGRESSIVE_LEVELS,
    LevelProgress,
    UnlockLevel,
    get_level_for_trades,
    get_next_level,
    get_progress_to_next_level,
    is_feature_unlocked,
)
from .stats import JournalStats, summarize_journal
from .nudges import PreTradeNudge, generate_nudges
from .playbook import SetupStats, calculate_playbook_stats
from .cache import ScoreCache

__all__ = [
    "TradeRecord",
    "StreakResult",
    "calculate_streak",
    "ConsistencyScoreBreakdown",
    "calculate_consistency_score",
    "PnlResult",
    "calculate_pnl",
    "PROGRESSIVE_LEVELS",
    "LevelProgress",
    "UnlockLevel",
    "get_level_for_trades",
    "get_next_level",
    "get_progress_to_next_level",
    "is_feature_unlocked",
    "JournalStats",
    "summarize_journal",
    "PreTradeNudge",
    "generate_nudges",
    "SetupStats",
    "calculate_playbook_stats",
    "ScoreCache",
]
