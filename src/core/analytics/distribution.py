"""
Profit distribution of individual trade results.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from src.core.constants import DISTRIBUTION_PERCENTILES, MAX_HISTOGRAM_BINS
from src.core.models.trade import Trade
from src.core.types import ZERO, percentage

from .trade_frame import build_trade_frame


@dataclass(frozen=True)
class HistogramBin:
    lower: float
    upper: float
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"lower": self.lower, "upper": self.upper, "count": self.count}


@dataclass(frozen=True)
class ProfitDistribution:
    """Summary statistics and histogram of per-trade P&L."""

    count: int = 0
    mean: float = ZERO
    std_dev: float = ZERO
    minimum: float = ZERO
    maximum: float = ZERO
    percentiles: dict[int, float] = field(default_factory=dict)
    positive_count: int = 0
    negative_count: int = 0
    positive_pct: float = ZERO
    negative_pct: float = ZERO
    histogram: list[HistogramBin] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "mean": self.mean,
            "std_dev": self.std_dev,
            "min": self.minimum,
            "max": self.maximum,
            "percentiles": {str(p): value for p, value in self.percentiles.items()},
            "positive_count": self.positive_count,
            "negative_count": self.negative_count,
            "positive_pct": self.positive_pct,
            "negative_pct": self.negative_pct,
            "histogram": [bucket.to_dict() for bucket in self.histogram],
        }


def floor_percentile(sorted_values: np.ndarray, pct: int) -> float:
    """Percentile picked by flooring ``pct / 100 * n`` into the sorted values."""
    index = min(math.floor(pct / 100 * len(sorted_values)), len(sorted_values) - 1)
    return float(sorted_values[index])


def build_histogram(values: np.ndarray) -> list[HistogramBin]:
    """
    Equal-width histogram over ``[min, max]``.

    Uses ``min(15, n // 2)`` bins (at least one); the maximum falls in the
    last bin. When every value is equal a single bin holds them all.
    """
    if len(values) == 0:
        return []
    low, high = float(values.min()), float(values.max())
    bin_count = max(1, min(MAX_HISTOGRAM_BINS, len(values) // 2))
    if high == low:
        return [HistogramBin(lower=low, upper=high, count=len(values))]

    width = (high - low) / bin_count
    indexes = np.minimum(((values - low) / width).astype(int), bin_count - 1)
    counts = np.bincount(indexes, minlength=bin_count)
    return [
        HistogramBin(lower=low + i * width, upper=low + (i + 1) * width, count=int(counts[i]))
        for i in range(bin_count)
    ]


def distribution_from_frame(frame: pd.DataFrame) -> ProfitDistribution:
    """Describe the distribution of P&L over an already built trade frame."""
    if frame.empty:
        return ProfitDistribution()

    values = frame["pnl"].to_numpy()
    ordered = np.sort(values)
    count = len(values)
    positive = int((values > 0).sum())
    negative = int((values < 0).sum())
    return ProfitDistribution(
        count=count,
        mean=float(values.mean()),
        std_dev=float(values.std()),
        minimum=float(ordered[0]),
        maximum=float(ordered[-1]),
        percentiles={p: floor_percentile(ordered, p) for p in DISTRIBUTION_PERCENTILES},
        positive_count=positive,
        negative_count=negative,
        positive_pct=percentage(positive, count),
        negative_pct=percentage(negative, count),
        histogram=build_histogram(values),
    )


def profit_distribution(trades: Sequence[Trade]) -> ProfitDistribution:
    """Describe the distribution of P&L over the valid trades."""
    return distribution_from_frame(build_trade_frame(trades))
