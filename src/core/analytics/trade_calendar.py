"""
Calendar views of a trade list: per-date summaries and a weekday-by-hour
winrate heatmap.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import pandas as pd

from src.core.constants import CALENDAR_DATE_FORMAT, WEEKDAY_NAMES
from src.core.models.trade import Trade
from src.core.types import percentage

from .trade_frame import build_trade_frame


@dataclass(frozen=True)
class DaySummary:
    """Trades closed on one calendar date."""

    date: str
    trades: int
    wins: int
    losses: int
    pnl: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "trades": self.trades,
            "wins": self.wins,
            "losses": self.losses,
            "pnl": self.pnl,
        }


@dataclass(frozen=True)
class HeatmapCell:
    """Winrate of the trades sharing a weekday and an hour."""

    weekday: str
    hour: int
    total: int
    wins: int
    winrate: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "weekday": self.weekday,
            "hour": self.hour,
            "total": self.total,
            "wins": self.wins,
            "winrate": self.winrate,
        }


def daily_summaries_from_frame(frame: pd.DataFrame) -> dict[str, DaySummary]:
    """Summaries keyed by ``YYYY-MM-DD``, in date order. Dates without trades are absent."""
    if frame.empty:
        return {}

    grouped = frame.groupby("date", sort=True).agg(
        trades=("pnl", "size"),
        wins=("is_win", "sum"),
        losses=("is_loss", "sum"),
        pnl=("pnl", "sum"),
    )
    result = {}
    for day, row in grouped.iterrows():
        key = day.strftime(CALENDAR_DATE_FORMAT)
        result[key] = DaySummary(
            date=key,
            trades=int(row["trades"]),
            wins=int(row["wins"]),
            losses=int(row["losses"]),
            pnl=float(row["pnl"]),
        )
    return result


def heatmap_from_frame(frame: pd.DataFrame) -> list[HeatmapCell]:
    """
    Winrate per (weekday, hour) combination.

    Only combinations with at least one trade produce a cell; cells are
    ordered Monday..Sunday, then by hour.
    """
    if frame.empty:
        return []

    grouped = frame.groupby(["weekday", "hour"]).agg(
        total=("pnl", "size"), wins=("is_win", "sum")
    )
    cells = []
    for (weekday, hour), row in grouped.iterrows():
        total = int(row["total"])
        wins = int(row["wins"])
        cells.append(
            HeatmapCell(
                weekday=weekday,
                hour=int(hour),
                total=total,
                wins=wins,
                winrate=percentage(wins, total),
            )
        )
    return sorted(cells, key=lambda cell: (WEEKDAY_NAMES.index(cell.weekday), cell.hour))


def daily_summaries(trades: Sequence[Trade]) -> dict[str, DaySummary]:
    """Per-date summaries of the valid trades."""
    return daily_summaries_from_frame(build_trade_frame(trades))


def winrate_heatmap(trades: Sequence[Trade]) -> list[HeatmapCell]:
    """Weekday-by-hour winrate cells of the valid trades."""
    return heatmap_from_frame(build_trade_frame(trades))
