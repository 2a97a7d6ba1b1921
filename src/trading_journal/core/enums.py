"""Enumerations used across the journal."""

from enum import Enum


class Direction(str, Enum):
    LONG = "long"
    SHORT = "short"


class TradeOutcome(str, Enum):
    """Win / loss / break-even classification."""

    WIN = "win"
    LOSS = "loss"
    BREAKEVEN = "breakeven"


class Emotion(str, Enum):
    """Emotion tags a trader can attach before entering a trade."""

    CALM = "calm"
    CONFIDENT = "confident"
    NEUTRAL = "neutral"
    ANXIOUS = "anxious"
    FEARFUL = "fearful"
    GREEDY = "greedy"
    FRUSTRATED = "frustrated"
    EXCITED = "excited"


class InstrumentCategory(str, Enum):
    FOREX = "forex"
    METALS = "metals"
    CRYPTO = "crypto"
    INDICES = "indices"


class NudgeSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class NudgeType(str, Enum):
    LOSS_STREAK = "loss_streak"
    INSTRUMENT = "instrument"
    DAY_OF_WEEK = "day_of_week"
    EMOTION = "emotion"
