"""Trading journal analytics: streaks, consistency scoring, P&L and levels."""

__version__ = "0.1.0"
