"""Journal entry snapshot consumed by the scoring engines.

A TradeRecord is a read-only copy of one journaled trade as supplied by
the data-fetch layer.  Only the fields the calculators read are typed;
everything else the row carried is ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.enums import TradeOutcome
from ..core.errors import InvalidRecordError

ActivityDate = date | datetime | str  # ISO "YYYY-MM-DD" when a string


def parse_activity_date(value: ActivityDate) -> date:
    """Normalise an ISO string, ``date`` or ``datetime`` to a calendar date.

    Strings may carry a time part (``2024-03-01T09:30:00Z``); it is dropped.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def _parse_trade_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if len(text) <= 10:
        d = date.fromisoformat(text)
        return datetime(d.year, d.month, d.day)
    return datetime.fromisoformat(text.replace("Z", "+00:00"))


def _decimal_or_none(name: str, value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidRecordError(name, f"not a number: {value!r}") from exc


def _first(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in row:
            return row[key]
    return None


@dataclass(frozen=True)
class TradeRecord:
    """One journaled trade.

    Parameters
    ----------
    trade_date : date | datetime
        When the trade was taken.  Time of day is ignored by the
        day-based metrics.
    outcome : TradeOutcome | None
        ``None`` while the trade is unresolved.
    stop_loss : Decimal | None
        Stop price, ``None`` when the trader set no stop.
    emotion_before : str | None
        Emotion tag captured before entry (``"calm"``, ``"anxious"`` ...).
    rules_followed : tuple[str, ...]
        Identifiers of the playbook rules honoured on this trade.
    instrument : str
        Traded symbol as entered (``"EUR/USD"``, ``"xauusd"`` ...).
    r_multiple : Decimal | None
        Realised reward in units of initial risk.
    setup_type : str | None
        Playbook setup (``"breakout"``, ``"pullback"`` ... or ``"custom"``).
    setup_type_custom : str | None
        Trader's own setup name when ``setup_type`` is ``"custom"``.
    """

    trade_date: date | datetime
    outcome: TradeOutcome | None = None
    stop_loss: Decimal | None = None
    emotion_before: str | None = None
    rules_followed: tuple[str, ...] = field(default_factory=tuple)

    instrument: str = ""
    r_multiple: Decimal | None = None
    setup_type: str | None = None
    setup_type_custom: str | None = None

    @property
    def trade_day(self) -> date:
        """Calendar date of the trade."""
        return parse_activity_date(self.trade_date)

    @property
    def sort_key(self) -> datetime:
        """Naive UTC datetime used to order records chronologically."""
        ts = _parse_trade_date(self.trade_date)
        if ts.tzinfo is None:
            return ts
        return ts.astimezone(timezone.utc).replace(tzinfo=None)

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> TradeRecord:
        """Build a record from a storage row.

        Accepts the snake_case column names of the ``journal_entries``
        table; camelCase aliases are also understood.

        Raises
        ------
        InvalidRecordError
            ``trade_date`` is missing or unparseable, or a numeric or
            enum field holds garbage.
        """
        raw_date = _first(row, "trade_date", "tradeDate")
        if raw_date in (None, ""):
            raise InvalidRecordError("trade_date", "missing")
        try:
            trade_date = _parse_trade_date(raw_date)
        except (TypeError, ValueError) as exc:
            raise InvalidRecordError("trade_date", f"unparseable: {raw_date!r}") from exc

        raw_outcome = row.get("outcome")
        try:
            outcome = TradeOutcome(raw_outcome) if raw_outcome else None
        except ValueError as exc:
            raise InvalidRecordError("outcome", f"unknown value {raw_outcome!r}") from exc

        rules = _first(row, "rules_followed", "rulesFollowed")
        rules_followed = (
            tuple(str(r) for r in rules)
            if isinstance(rules, Iterable) and not isinstance(rules, (str, bytes))
            else ()
        )

        return cls(
            trade_date=trade_date,
            outcome=outcome,
            stop_loss=_decimal_or_none("stop_loss", _first(row, "stop_loss", "stopLoss")),
            emotion_before=_first(row, "emotion_before", "emotionBefore"),
            rules_followed=rules_followed,
            instrument=row.get("instrument") or "",
            r_multiple=_decimal_or_none("r_multiple", _first(row, "r_multiple", "rMultiple")),
            setup_type=_first(row, "setup_type", "setupType") or None,
            setup_type_custom=_first(row, "setup_type_custom", "setupTypeCustom") or None,
        )

    def to_dict(self) -> dict:
        """Export to a flat dictionary for logging / storage."""
        return {
            "trade_date": self.trade_date.isoformat(),
            "outcome": self.outcome.value if self.outcome else None,
            "stop_loss": str(self.stop_loss) if self.stop_loss is not None else None,
            "emotion_before": self.emotion_before,
            "rules_followed": list(self.rules_followed),
            "instrument": self.instrument,
            "r_multiple": str(self.r_multiple) if self.r_multiple is not None else None,
            "setup_type": self.setup_type,
            "setup_type_custom": self.setup_type_custom,
        }


def coerce_records(
    entries: Iterable[TradeRecord | Mapping[str, Any]],
) -> list[TradeRecord]:
    """Accept records or raw rows; rows go through :meth:`TradeRecord.from_dict`.

    Raises
    ------
    InvalidRecordError
        A row is neither a TradeRecord nor a mapping, or fails validation.
    """
    records = []
    for e in entries:
        if isinstance(e, TradeRecord):
            records.append(e)
        elif isinstance(e, Mapping):
            records.append(TradeRecord.from_dict(e))
        else:
            raise InvalidRecordError("row", f"expected an object, got {type(e).__name__}")
    return records
