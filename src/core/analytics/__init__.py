"""
Backtest statistics derivation.

Pure functions over a trade list: aggregate statistics, result sequences,
balance series, profit distribution, calendar views and return highlights.
"""

from .analyzer import BacktestAnalysis, BacktestAnalyzer
from .distribution import ProfitDistribution, profit_distribution
from .returns import ReturnHighlights, monthly_table, return_highlights
from .sequence_analyzer import SequenceStats, analyze_outcomes, analyze_sequences
from .series_builder import SeriesPoint, build_balance_series, build_equity_series
from .statistics_aggregator import StatisticsAggregator, aggregate_trades
from .trade_calendar import daily_summaries, winrate_heatmap

__all__ = [
    "BacktestAnalysis",
    "BacktestAnalyzer",
    "ProfitDistribution",
    "ReturnHighlights",
    "SequenceStats",
    "SeriesPoint",
    "StatisticsAggregator",
    "aggregate_trades",
    "analyze_outcomes",
    "analyze_sequences",
    "build_balance_series",
    "build_equity_series",
    "daily_summaries",
    "monthly_table",
    "profit_distribution",
    "return_highlights",
    "winrate_heatmap",
]
