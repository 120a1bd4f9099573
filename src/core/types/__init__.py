"""
Core type definitions and utilities.
"""

# Re-export numeric utilities for easy access
from .financial import (
    HUNDRED,
    ZERO,
    percentage,
    safe_divide,
    to_float,
    try_float,
)

__all__ = [
    # Utility functions
    "to_float",
    "try_float",
    "safe_divide",
    "percentage",
    # Constants
    "ZERO",
    "HUNDRED",
]
