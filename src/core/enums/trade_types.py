"""
Trade side and outcome enumerations.

This module defines the allowed order sides and trade results as they
appear in stored backtest documents.
"""

from enum import StrEnum


class OrderSide(StrEnum):
    """
    Allowed order sides.

    Defines whether the trade was opened long or short.
    """

    BUY = "BUY"
    SELL = "SELL"


class TradeOutcome(StrEnum):
    """
    Allowed trade results.

    A trade closes either at its take-profit or at its stop-loss.
    """

    TP = "TP"
    SL = "SL"

    @property
    def is_win(self) -> bool:
        """Check if the outcome counts as a win."""
        return self == self.TP

    @property
    def is_loss(self) -> bool:
        """Check if the outcome counts as a loss."""
        return self == self.SL
