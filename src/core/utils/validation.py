"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

import re

from src.core.constants import MAX_BACKTEST_ID_LENGTH
from src.core.exceptions.backtest import ValidationError

_SAFE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def validate_backtest_id(backtest_id: str, param_name: str = "backtest_id") -> str:
    """Validate a backtest id before it is turned into a file name.

    Args:
        backtest_id: Opaque id supplied by the caller
        param_name: Parameter name for error messages

    Returns:
        The validated id

    Raises:
        ValidationError: If the id is empty, too long, or could escape
            the data directory
    """
    if not isinstance(backtest_id, str) or not backtest_id:
        raise ValidationError(f"{param_name} cannot be empty")

    if ".." in backtest_id or "/" in backtest_id or "\\" in backtest_id:
        raise ValidationError(f"Invalid {param_name}: contains path traversal characters")

    if not _SAFE_ID_PATTERN.match(backtest_id):
        raise ValidationError(
            f"Invalid {param_name}: '{backtest_id}' contains invalid characters. "
            f"Only alphanumeric, underscore, dash, and dot are allowed."
        )

    if len(backtest_id) > MAX_BACKTEST_ID_LENGTH:
        raise ValidationError(
            f"{param_name} too long: maximum {MAX_BACKTEST_ID_LENGTH} characters"
        )

    return backtest_id


def validate_non_negative(value: float, param_name: str) -> float:
    """Validate that a numeric value is zero or positive.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{param_name} must be non-negative, got {value}")
    return value

