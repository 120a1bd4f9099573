"""
Custom exception hierarchy for the backtest results service.

This module defines domain-specific exceptions for better error handling.
"""


class BacktestException(Exception):
    """Base exception for all backtest-related errors."""

    pass


class ValidationError(BacktestException):
    """Raised when input validation fails."""

    pass


class DataError(BacktestException):
    """Raised when stored data cannot be read or written."""

    pass


class CalculationError(BacktestException):
    """Raised when mathematical calculations fail."""

    pass


class ConfigurationError(BacktestException):
    """Raised when configuration is invalid."""

    pass


class BacktestNotFoundError(DataError):
    """Raised when no document exists for a backtest id."""

    def __init__(self, backtest_id: str):
        self.backtest_id = backtest_id
        super().__init__(f"Backtest not found: {backtest_id}")


class InvalidFormatError(ValidationError):
    """Raised when a backtest document lacks required substructures.

    Carries every missing or malformed field so callers can report them
    all at once instead of one per round-trip.
    """

    def __init__(self, missing_fields: list[str], schema_version: str | None = None):
        self.missing_fields = list(missing_fields)
        self.schema_version = schema_version
        schema = f" ({schema_version} schema)" if schema_version else ""
        super().__init__(
            f"Invalid backtest document{schema}: missing or malformed "
            f"{', '.join(self.missing_fields)}"
        )
