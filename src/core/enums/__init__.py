"""
Core enumerations for the backtest results service.

This module provides centralized enumerations for domain concepts
like order sides, trade outcomes, weekdays and timeframes.
"""

from .timeframes import Timeframe
from .trade_types import OrderSide, TradeOutcome
from .weekdays import Weekday

__all__ = ["OrderSide", "TradeOutcome", "Weekday", "Timeframe"]
