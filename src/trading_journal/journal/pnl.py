"""Pip / P&L / R-multiple calculator for a single trade.

Works in ``Decimal`` throughout so that ``1.1050 - 1.1000`` is exactly
50 pips on EURUSD.  Results are rounded to two decimals, matching what
the journal stores.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import Direction
from ..core.errors import InvalidInputError
from ..core.instruments import get_instrument_meta
from ..core.rounding import round_2dp, to_decimal

Number = Decimal | float | int | str


@dataclass(frozen=True)
class PnlResult:
    pnl: Decimal
    pips: Decimal
    r_multiple: Decimal | None

    def to_dict(self) -> dict:
        return {
            "pnl": float(self.pnl),
            "pips": float(self.pips),
            "r_multiple": float(self.r_multiple) if self.r_multiple is not None else None,
        }


def _direction(value: Direction | str) -> Direction:
    try:
        return Direction(value)
    except ValueError as exc:
        raise InvalidInputError(
            f"direction must be 'long' or 'short', got {value!r}"
        ) from exc


def calculate_pnl(
    instrument: str,
    direction: Direction | str,
    entry_price: Number,
    exit_price: Number,
    position_size: Number,
    stop_loss: Number | None = None,
) -> PnlResult:
    """Compute pips, monetary P&L and R-multiple.

    Parameters
    ----------
    instrument : str
        Symbol, e.g. ``"EURUSD"``.  Unknown symbols use the default
        pip specification.
    direction : Direction | str
        ``"long"`` or ``"short"``.
    entry_price, exit_price : number
    position_size : number
        Size in standard lots.
    stop_loss : number, optional
        Initial stop.  When absent or equal to entry, ``r_multiple`` is
        ``None``.

    Raises
    ------
    InvalidInputError
        Unknown direction.
    """
    side = _direction(direction)
    meta = get_instrument_meta(instrument)
    entry = to_decimal(entry_price)
    exit_ = to_decimal(exit_price)
    size = to_decimal(position_size)

    if side == Direction.LONG:
        price_diff = exit_ - entry
    else:
        price_diff = entry - exit_

    pips = round_2dp(price_diff / meta.pip_size)
    pnl = round_2dp(pips * meta.pip_value_per_lot * size)

    r_multiple: Decimal | None = None
    if stop_loss is not None:
        risk = abs(entry - to_decimal(stop_loss))
        if risk > 0:
            r_multiple = round_2dp(price_diff / risk)

    return PnlResult(pnl=pnl, pips=pips, r_multiple=r_multiple)
