"""Custom exception hierarchy for the journal core."""


class JournalError(Exception):
    """Base exception for all journal errors."""


# --- Configuration ---
class ConfigError(JournalError):
    """Invalid or missing configuration."""


# --- Input ---
class InvalidInputError(JournalError):
    """Caller-supplied value cannot be used (e.g. unknown direction)."""


class InvalidRecordError(InvalidInputError):
    """A stored journal row cannot be turned into a TradeRecord."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid trade record [{field}]: {reason}")
