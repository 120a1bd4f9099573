"""
Statistics aggregation over a backtest trade list.

Regenerates every aggregate a stored backtest document carries (global
stats, weekday and hour buckets, monthly returns) from the trades, the
initial balance and the commission charged per trade.
"""

from collections.abc import Iterable, Sequence

import numpy as np
import pandas as pd

from src.core.constants import HOUR_KEYS, MONTH_LABELS, WEEKDAY_NAMES
from src.core.exceptions.backtest import CalculationError
from src.core.models.statistics import AggregateStats, BucketStats, GlobalStats
from src.core.models.trade import Trade
from src.core.types import ZERO, HUNDRED, percentage, safe_divide
from src.core.utils.validation import validate_non_negative

from .trade_frame import build_trade_frame


class StatisticsAggregator:
    """
    Computes aggregate statistics for one backtest run.

    The trade frame is built once per aggregator, so computing every view
    costs a single pass over the raw trade records.
    """

    def __init__(
        self, trades: Sequence[Trade], initial_balance: float, commission: float
    ) -> None:
        """
        Args:
            trades: Trades in stored order; malformed records are tolerated
            initial_balance: Account balance before the first trade
            commission: Commission charged per trade
        """
        self.trades = trades
        self.initial_balance = float(initial_balance)
        self.commission = validate_non_negative(float(commission), "commission")
        self.frame = build_trade_frame(trades)

    def aggregate(self) -> AggregateStats:
        """Compute every aggregate view."""
        return AggregateStats(
            global_stats=self.global_stats(),
            day_stats=self.day_stats(),
            hour_stats=self.hour_stats(),
            monthly_returns=self.monthly_returns(),
        )

    def global_stats(self) -> GlobalStats:
        """Compute whole-run statistics."""
        frame = self.frame
        count = len(frame)
        if count == 0:
            return GlobalStats(
                initial_balance=self.initial_balance,
                final_balance=self.initial_balance,
                peak_balance=self.initial_balance,
                total_pnl=ZERO,
                total_commission=ZERO,
                trade_count=len(self.trades),
                valid_trade_count=0,
                wins=0,
                losses=0,
                winrate=ZERO,
                win_streak=0,
                loss_streak=0,
                max_drawdown=ZERO,
                sharpe_ratio=ZERO,
                profit_factor=ZERO,
                avg_win=ZERO,
                avg_loss=ZERO,
                expectancy=ZERO,
            )

        net = frame["pnl"].to_numpy() - self.commission
        balances = self.initial_balance + np.cumsum(net)
        final_balance = float(balances[-1])
        if not np.isfinite(final_balance):
            raise CalculationError("Running balance is not finite")
        total_net = final_balance - self.initial_balance

        wins = int(frame["is_win"].sum())
        losses = int(frame["is_loss"].sum())
        avg_win = float(frame.loc[frame["is_win"], "pnl"].mean()) if wins else ZERO
        avg_loss = float(frame.loc[frame["is_loss"], "pnl"].mean()) if losses else ZERO
        outcomes = frame["outcome"].tolist()

        return GlobalStats(
            initial_balance=self.initial_balance,
            final_balance=final_balance,
            peak_balance=peak_balance(self.initial_balance, balances),
            total_pnl=total_net,
            total_commission=self.commission * count,
            trade_count=len(self.trades),
            valid_trade_count=count,
            wins=wins,
            losses=losses,
            winrate=percentage(wins, count),
            win_streak=longest_streak(outcomes, "TP"),
            loss_streak=longest_streak(outcomes, "SL"),
            max_drawdown=max_drawdown(self.initial_balance, balances),
            sharpe_ratio=sharpe_ratio(self.initial_balance, net),
            profit_factor=profit_factor(avg_win, wins, avg_loss, losses),
            avg_win=avg_win,
            avg_loss=avg_loss,
            expectancy=safe_divide(total_net, count),
        )

    def day_stats(self) -> dict[str, BucketStats]:
        """Per-weekday statistics, keyed Monday..Sunday."""
        return _bucket_stats(self.frame, "weekday", WEEKDAY_NAMES)

    def hour_stats(self) -> dict[str, BucketStats]:
        """Per-hour statistics, keyed "0".."23"."""
        if self.frame.empty:
            return {key: BucketStats() for key in HOUR_KEYS}
        frame = self.frame.assign(hour_key=self.frame["hour"].astype(str))
        return _bucket_stats(frame, "hour_key", HOUR_KEYS)

    def monthly_returns(self) -> dict[str, dict[str, float]]:
        """
        Net return percentage per year and month.

        Each month's P&L is taken against the fixed initial balance, with no
        compounding across months. Years with trades list all twelve months.
        """
        if self.frame.empty:
            return {}

        sums = self.frame.groupby(["year", "month"], sort=False)["pnl"].sum()
        result: dict[str, dict[str, float]] = {}
        for year in sorted(self.frame["year"].unique()):
            result[year] = {label: ZERO for label in MONTH_LABELS}
        for (year, month), pnl in sums.items():
            result[year][month] = percentage(float(pnl), self.initial_balance)
        return result


def _bucket_stats(
    frame: pd.DataFrame, column: str, keys: Iterable[str]
) -> dict[str, BucketStats]:
    """Aggregate a frame by one key column, filling every missing key with zeros."""
    if frame.empty:
        return {key: BucketStats() for key in keys}

    grouped = frame.groupby(column, sort=False).agg(
        trades=("pnl", "size"),
        wins=("is_win", "sum"),
        losses=("is_loss", "sum"),
        pnl=("pnl", "sum"),
    )

    result = {}
    for key in keys:
        if key not in grouped.index:
            result[key] = BucketStats()
            continue
        row = grouped.loc[key]
        trades = int(row["trades"])
        wins = int(row["wins"])
        pnl = float(row["pnl"])
        result[key] = BucketStats(
            trades=trades,
            wins=wins,
            losses=int(row["losses"]),
            winrate=percentage(wins, trades),
            pnl=pnl,
            avg_pnl=safe_divide(pnl, trades),
        )
    return result


def longest_streak(outcomes: Iterable[str], target: str) -> int:
    """Length of the longest run of consecutive ``target`` outcomes."""
    longest = current = 0
    for outcome in outcomes:
        if outcome == target:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def peak_balance(initial_balance: float, balances: np.ndarray) -> float:
    """Highest balance reached, counting the initial balance."""
    if len(balances) == 0:
        return initial_balance
    return float(max(initial_balance, float(np.max(balances))))


def max_drawdown(initial_balance: float, balances: np.ndarray) -> float:
    """
    Maximum drawdown percentage.

    Each balance is measured against the peak seen so far (starting at the
    initial balance), not against the global peak. Non-positive peaks
    contribute no drawdown.
    """
    if len(balances) == 0:
        return ZERO
    peaks = np.maximum.accumulate(np.concatenate(([initial_balance], balances)))[1:]
    positive = peaks > 0
    if not positive.any():
        return ZERO
    drawdowns = (peaks[positive] - balances[positive]) / peaks[positive] * HUNDRED
    return float(max(ZERO, float(np.max(drawdowns))))


def sharpe_ratio(initial_balance: float, net_results: np.ndarray) -> float:
    """
    Per-trade Sharpe ratio: mean over population standard deviation of the
    returns ``net_i / balance_before_i``.

    Returns measured against a non-positive balance are dropped; fewer than
    two returns or zero variance yields zero.
    """
    if len(net_results) < 2:
        return ZERO
    balances_before = initial_balance + np.concatenate(([ZERO], np.cumsum(net_results)[:-1]))
    usable = balances_before > 0
    returns = net_results[usable] / balances_before[usable]
    if len(returns) < 2:
        return ZERO
    deviation = float(np.std(returns))
    if deviation == ZERO or not np.isfinite(deviation):
        return ZERO
    return safe_divide(float(np.mean(returns)), deviation)


def profit_factor(avg_win: float, wins: int, avg_loss: float, losses: int) -> float:
    """Gross wins over gross losses; zero when there are no losses to divide by."""
    gross_loss = abs(avg_loss) * losses
    if losses == 0 or avg_loss == ZERO:
        return ZERO
    return safe_divide(avg_win * wins, gross_loss)


def aggregate_trades(
    trades: Sequence[Trade], initial_balance: float, commission: float
) -> AggregateStats:
    """Compute every aggregate for a trade list."""
    return StatisticsAggregator(trades, initial_balance, commission).aggregate()
