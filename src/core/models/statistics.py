"""
Aggregate statistics models.

Field names follow Python conventions; ``to_dict`` produces the keys the
backtest producer writes into stored documents so recomputed aggregates
can replace stored ones one-for-one.
"""

from dataclasses import dataclass, field
from typing import Any

from src.core.constants import HOUR_KEYS, WEEKDAY_NAMES


@dataclass(frozen=True)
class GlobalStats:
    """Whole-run performance figures."""

    initial_balance: float
    final_balance: float
    peak_balance: float
    total_pnl: float
    total_commission: float
    trade_count: int
    valid_trade_count: int
    wins: int
    losses: int
    winrate: float
    win_streak: int
    loss_streak: int
    max_drawdown: float
    sharpe_ratio: float
    profit_factor: float
    avg_win: float
    avg_loss: float
    expectancy: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "BALANCE INICIAL": self.initial_balance,
            "BALANCE": self.final_balance,
            "PEAK BALANCE": self.peak_balance,
            "P&L": self.total_pnl,
            "COMISSION": self.total_commission,
            "OPERACIONES": self.trade_count,
            "VALID OPERACIONES": self.valid_trade_count,
            "GANADAS": self.wins,
            "PERDIDAS": self.losses,
            "WINRATE": self.winrate,
            "WIN STREAK": self.win_streak,
            "LOSE STREAK": self.loss_streak,
            "MDD": self.max_drawdown,
            "SHARPE RATIO": self.sharpe_ratio,
            "PROFIT FACTOR": self.profit_factor,
            "AVG WIN": self.avg_win,
            "AVG LOSS": self.avg_loss,
            "EXPECTANCY": self.expectancy,
        }


@dataclass(frozen=True)
class BucketStats:
    """Performance of the trades falling into one weekday or hour bucket."""

    trades: int = 0
    wins: int = 0
    losses: int = 0
    winrate: float = 0.0
    pnl: float = 0.0
    avg_pnl: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "TRADES": self.trades,
            "WINS": self.wins,
            "LOSSES": self.losses,
            "WINRATE": self.winrate,
            "P&L": self.pnl,
            "AVG_P&L": self.avg_pnl,
        }


@dataclass(frozen=True)
class AggregateStats:
    """Every aggregate a stored backtest document carries.

    ``day_stats`` is keyed by weekday name and ``hour_stats`` by the hour as
    a string; both always hold every key. ``monthly_returns`` maps year to
    month label to net return percentage.
    """

    global_stats: GlobalStats
    day_stats: dict[str, BucketStats]
    hour_stats: dict[str, BucketStats]
    monthly_returns: dict[str, dict[str, float]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stats": self.global_stats.to_dict(),
            "day_stats": {name: self.day_stats[name].to_dict() for name in WEEKDAY_NAMES},
            "hour_stats": {key: self.hour_stats[key].to_dict() for key in HOUR_KEYS},
            "monthly_stats": {
                year: dict(months) for year, months in self.monthly_returns.items()
            },
        }
