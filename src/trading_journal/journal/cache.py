"""Time-boxed consistency score cache.

The score is a pure function of the entries, so caching only saves the
data fetch + recompute on repeated dashboard renders.  One slot per user;
an entry older than the TTL is treated as absent and dropped on read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from ..core.clock import IClock, WallClock
from ..core.config import CacheConfig
from .consistency import ConsistencyScoreBreakdown, calculate_consistency_score
from .record import TradeRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


@dataclass(frozen=True)
class _CachedScore:
    score: ConsistencyScoreBreakdown
    fetched_at: datetime


class ScoreCache:
    """Per-user cache of :class:`ConsistencyScoreBreakdown`.

    Parameters
    ----------
    ttl_seconds : float
        How long a cached score stays valid.  Default 300.
    clock : IClock, optional
        Time source; defaults to the wall clock.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: IClock | None = None,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be > 0, got {ttl_seconds}")
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or WallClock()
        self._entries: dict[str, _CachedScore] = {}

    @classmethod
    def from_config(cls, config: CacheConfig, clock: IClock | None = None) -> ScoreCache:
        return cls(ttl_seconds=config.ttl_seconds, clock=clock)

    def get(self, user_id: str) -> ConsistencyScoreBreakdown | None:
        """Cached score for *user_id*, or None if missing or stale."""
        cached = self._entries.get(user_id)
        if cached is None:
            return None
        if self._clock.now() - cached.fetched_at >= self._ttl:
            del self._entries[user_id]
            logger.debug("Score cache expired for %s", user_id)
            return None
        return cached.score

    def put(self, user_id: str, score: ConsistencyScoreBreakdown) -> None:
        self._entries[user_id] = _CachedScore(score=score, fetched_at=self._clock.now())

    def get_or_compute(
        self,
        user_id: str,
        entries: Iterable[TradeRecord | Mapping[str, Any]],
    ) -> ConsistencyScoreBreakdown:
        """Return the cached score or compute, store and return a fresh one."""
        score = self.get(user_id)
        if score is not None:
            logger.debug("Score cache hit for %s", user_id)
            return score
        score = calculate_consistency_score(entries)
        self.put(user_id, score)
        return score

    def invalidate(self, user_id: str | None = None) -> None:
        """Drop one user's entry, or everything when *user_id* is None."""
        if user_id is None:
            self._entries.clear()
        else:
            self._entries.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._entries
