"""
Trading timeframe enumerations.

This module defines the chart timeframes a strategy may analyse, using the
MetaTrader labels the backtest producer writes into ``TFs``.
"""

from enum import StrEnum


class Timeframe(StrEnum):
    """
    Allowed chart timeframes.

    Supports minute, hour, day, week and month timeframes.
    """

    # Minute intervals
    M1 = "M1"
    M5 = "M5"
    M15 = "M15"
    M30 = "M30"

    # Hour intervals
    H1 = "H1"
    H4 = "H4"

    # Day/Week/Month intervals
    D1 = "D1"
    W1 = "W1"
    MN1 = "MN1"

    @classmethod
    def from_string(cls, value: str) -> "Timeframe":
        """
        Convert string to Timeframe enum.

        Args:
            value: String representation of timeframe

        Returns:
            Corresponding Timeframe enum value

        Raises:
            ValueError: If timeframe is not supported
        """
        value_upper = value.strip().upper()

        for tf in cls:
            if tf.value == value_upper:
                return tf

        raise ValueError(
            f"Unsupported timeframe: {value}. "
            f"Supported timeframes: {', '.join([tf.value for tf in cls])}"
        )
