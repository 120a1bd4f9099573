"""
Single-pass analysis of a backtest.

The API builds one ``BacktestAnalysis`` per request and hands its parts to
whoever needs them, so every view of a backtest is derived from the same
trade frame and agrees with every other view.
"""

from dataclasses import dataclass
from typing import Any

from loguru import logger

from src.core.models.backtest import Backtest
from src.core.models.statistics import AggregateStats

from .distribution import ProfitDistribution, distribution_from_frame
from .returns import MonthlyTable, ReturnHighlights, monthly_table, return_highlights
from .sequence_analyzer import SequenceStats, analyze_outcomes
from .series_builder import SeriesPoint, balance_points_from_frame
from .statistics_aggregator import StatisticsAggregator
from .trade_calendar import (
    DaySummary,
    HeatmapCell,
    daily_summaries_from_frame,
    heatmap_from_frame,
)


@dataclass(frozen=True)
class BacktestAnalysis:
    """Every derived view of one backtest."""

    aggregates: AggregateStats
    sequences: SequenceStats
    balance_series: list[SeriesPoint]
    distribution: ProfitDistribution
    calendar: dict[str, DaySummary]
    heatmap: list[HeatmapCell]
    monthly_table: MonthlyTable
    highlights: ReturnHighlights

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.aggregates.to_dict(),
            "sequences": self.sequences.to_dict(),
            "balance_series": [point.to_dict() for point in self.balance_series],
            "distribution": self.distribution.to_dict(),
            "calendar": {key: day.to_dict() for key, day in self.calendar.items()},
            "heatmap": [cell.to_dict() for cell in self.heatmap],
            "monthly_table": self.monthly_table.to_dict(),
            "highlights": self.highlights.to_dict(),
        }


class BacktestAnalyzer:
    """
    Derives every statistic of a backtest from its trades.

    The trade list is parsed into a frame once; all views are computed from
    that frame.
    """

    def __init__(self, backtest: Backtest) -> None:
        self.backtest = backtest
        self._aggregator = StatisticsAggregator(
            backtest.trades, backtest.initial_balance, backtest.commission
        )

    def aggregates(self) -> AggregateStats:
        """Regenerate the aggregates a stored document carries."""
        return self._aggregator.aggregate()

    def analyze(self) -> BacktestAnalysis:
        """Compute every derived view."""
        frame = self._aggregator.frame
        aggregates = self._aggregator.aggregate()
        config = self.backtest.config
        outcomes = frame["outcome"].tolist() if not frame.empty else []

        analysis = BacktestAnalysis(
            aggregates=aggregates,
            sequences=analyze_outcomes(outcomes),
            balance_series=balance_points_from_frame(
                frame, config.initial_balance, config.commission
            ),
            distribution=distribution_from_frame(frame),
            calendar=daily_summaries_from_frame(frame),
            heatmap=heatmap_from_frame(frame),
            monthly_table=monthly_table(aggregates.monthly_returns),
            highlights=return_highlights(
                aggregates.global_stats.total_pnl,
                config.initial_balance,
                aggregates.monthly_returns,
                start=config.start(),
                end=config.end(),
            ),
        )
        logger.debug(
            f"Analyzed backtest {self.backtest.backtest_id or '<unnamed>'}: "
            f"{aggregates.global_stats.valid_trade_count}/"
            f"{aggregates.global_stats.trade_count} trades used"
        )
        return analysis
