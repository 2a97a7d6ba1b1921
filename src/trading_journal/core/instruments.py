"""Instrument definitions used by the P&L calculator.

Pip sizes and pip values are quoted per standard lot in the account
currency (USD).  Symbols are stored without separators (``"EURUSD"``);
lookups accept ``"EUR/USD"`` and ``"eur_usd"`` as well.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from .enums import InstrumentCategory

logger = logging.getLogger(__name__)


class InstrumentMeta(BaseModel):
    """Static pip / contract specification for one tradable symbol."""

    model_config = ConfigDict(frozen=True)

    symbol: str  # "EURUSD"
    label: str  # "EUR/USD"
    pip_size: Decimal
    contract_size: Decimal
    pip_value_per_lot: Decimal
    category: InstrumentCategory


def _meta(
    symbol: str,
    label: str,
    pip_size: str,
    contract_size: str,
    pip_value_per_lot: str,
    category: InstrumentCategory,
) -> InstrumentMeta:
    return InstrumentMeta(
        symbol=symbol,
        label=label,
        pip_size=Decimal(pip_size),
        contract_size=Decimal(contract_size),
        pip_value_per_lot=Decimal(pip_value_per_lot),
        category=category,
    )


_FX = InstrumentCategory.FOREX
_METALS = InstrumentCategory.METALS
_CRYPTO = InstrumentCategory.CRYPTO
_INDICES = InstrumentCategory.INDICES

INSTRUMENTS: dict[str, InstrumentMeta] = {
    m.symbol: m
    for m in (
        _meta("EURUSD", "EUR/USD", "0.0001", "100000", "10", _FX),
        _meta("GBPUSD", "GBP/USD", "0.0001", "100000", "10", _FX),
        _meta("USDJPY", "USD/JPY", "0.01", "100000", "6.5", _FX),
        _meta("USDCHF", "USD/CHF", "0.0001", "100000", "10", _FX),
        _meta("AUDUSD", "AUD/USD", "0.0001", "100000", "10", _FX),
        _meta("USDCAD", "USD/CAD", "0.0001", "100000", "7.5", _FX),
        _meta("NZDUSD", "NZD/USD", "0.0001", "100000", "10", _FX),
        _meta("XAUUSD", "Gold (XAUUSD)", "0.01", "100", "1", _METALS),
        _meta("XAGUSD", "Silver (XAGUSD)", "0.001", "5000", "5", _METALS),
        _meta("BTCUSD", "Bitcoin (BTC/USD)", "1", "1", "1", _CRYPTO),
        _meta("ETHUSD", "Ethereum (ETH/USD)", "0.01", "1", "0.01", _CRYPTO),
        _meta("US30", "US30 (Dow Jones)", "1", "1", "1", _INDICES),
        _meta("US100", "US100 (Nasdaq)", "1", "1", "1", _INDICES),
        _meta("SPX500", "SPX500 (S&P 500)", "0.1", "1", "0.1", _INDICES),
    )
}

# Used for symbols the registry does not know.
DEFAULT_INSTRUMENT = _meta("OTHER", "Other", "0.01", "1", "0.01", _FX)


def normalize_symbol(symbol: str) -> str:
    """``"eur/usd"`` -> ``"EURUSD"``."""
    return symbol.replace("/", "").replace("_", "").strip().upper()


def get_instrument_meta(symbol: str) -> InstrumentMeta:
    """Look up an instrument, falling back to :data:`DEFAULT_INSTRUMENT`."""
    meta = INSTRUMENTS.get(normalize_symbol(symbol))
    if meta is None:
        logger.debug("Unknown instrument %r, using default pip spec", symbol)
        return DEFAULT_INSTRUMENT
    return meta


def instrument_options() -> list[dict[str, str]]:
    """(value, label) pairs for form dropdowns, ``OTHER`` last."""
    options = [{"value": m.symbol, "label": m.label} for m in INSTRUMENTS.values()]
    options.append({"value": DEFAULT_INSTRUMENT.symbol, "label": DEFAULT_INSTRUMENT.label})
    return options
