"""
Cumulative balance series for charting.

The balance series is canonical and deterministic. The equity series is a
display variant that overlays cosmetic jitter on the same balances.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import numpy as np
import pandas as pd

from src.core.constants import DEFAULT_EQUITY_JITTER
from src.core.models.trade import Trade
from src.core.utils.validation import validate_non_negative

from .trade_frame import build_trade_frame


@dataclass(frozen=True)
class SeriesPoint:
    """One chart point: a timestamp and the balance at that time."""

    timestamp: datetime
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.timestamp.isoformat(), "y": self.value}


def balance_points_from_frame(
    frame: pd.DataFrame, initial_balance: float, commission: float
) -> list[SeriesPoint]:
    """Balance points for an already built trade frame."""
    if frame.empty:
        return []

    timestamps = [moment.to_pydatetime() for moment in frame["timestamp"]]
    balances = initial_balance + np.cumsum(frame["pnl"].to_numpy() - commission)

    points = [SeriesPoint(timestamp=timestamps[0], value=float(initial_balance))]
    points.extend(
        SeriesPoint(timestamp=moment, value=float(balance))
        for moment, balance in zip(timestamps, balances, strict=True)
    )
    return points


def build_balance_series(
    trades: Sequence[Trade], initial_balance: float, commission: float
) -> list[SeriesPoint]:
    """
    Build the cumulative balance series.

    Malformed trades are skipped and the rest sorted by timestamp. The
    series opens with the initial balance at the first trade's timestamp,
    followed by one point per trade after applying ``P&L - commission``.

    Returns:
        Chart points, or an empty list when there are no valid trades
    """
    validate_non_negative(commission, "commission")
    frame = build_trade_frame(trades)
    return balance_points_from_frame(frame, float(initial_balance), commission)


def build_equity_series(
    trades: Sequence[Trade],
    initial_balance: float,
    commission: float,
    jitter: float = DEFAULT_EQUITY_JITTER,
    rng: np.random.Generator | None = None,
) -> list[SeriesPoint]:
    """
    Build the display equity series: the balance series plus uniform noise.

    Args:
        trades: Trades in stored order
        initial_balance: Balance before the first trade
        commission: Commission charged per trade
        jitter: Noise amplitude; each trade point moves by a value drawn
            from ``[-jitter, jitter)``. Zero disables the noise.
        rng: Random generator; pass a seeded one for reproducible output

    Returns:
        Chart points, or an empty list when there are no valid trades
    """
    validate_non_negative(jitter, "jitter")
    points = build_balance_series(trades, initial_balance, commission)
    if not points or jitter == 0:
        return points

    generator = rng if rng is not None else np.random.default_rng()
    noise = generator.uniform(-jitter, jitter, size=len(points) - 1)
    return [points[0]] + [
        SeriesPoint(timestamp=point.timestamp, value=point.value + float(offset))
        for point, offset in zip(points[1:], noise, strict=True)
    ]
