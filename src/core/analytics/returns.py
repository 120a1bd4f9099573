"""
Return highlights derived from monthly returns and the run window.

All percentages are simple (non-compounded) returns on the initial
balance, matching how monthly returns are stored.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.core.constants import MONTH_LABELS
from src.core.types import ZERO, percentage, safe_divide, try_float

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30
MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class MonthlyTable:
    """Totals of the year-by-month return table."""

    yearly_totals: dict[str, float]
    month_totals: dict[str, float]
    grand_total: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "yearly_totals": dict(self.yearly_totals),
            "month_totals": dict(self.month_totals),
            "grand_total": self.grand_total,
        }


@dataclass(frozen=True)
class ReturnHighlights:
    total_return_pct: float
    avg_monthly_return_pct: float
    annualized_return_pct: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_return_pct": self.total_return_pct,
            "avg_monthly_return_pct": self.avg_monthly_return_pct,
            "annualized_return_pct": self.annualized_return_pct,
        }


def _month_value(months: Mapping[str, Any], label: str) -> float:
    value = try_float(months.get(label))
    return value if value is not None else ZERO


def monthly_table(monthly_returns: Mapping[str, Mapping[str, Any]]) -> MonthlyTable:
    """
    Row, column and grand totals of a monthly returns table.

    Years are listed newest first. Missing or non-numeric months count as zero.
    """
    years = sorted(monthly_returns, key=lambda year: try_float(year) or ZERO, reverse=True)
    yearly_totals = {
        year: sum(_month_value(monthly_returns[year], label) for label in MONTH_LABELS)
        for year in years
    }
    month_totals = {
        label: sum(_month_value(monthly_returns[year], label) for year in years)
        for label in MONTH_LABELS
    }
    return MonthlyTable(
        yearly_totals=yearly_totals,
        month_totals=month_totals,
        grand_total=sum(yearly_totals.values()),
    )


def count_months(monthly_returns: Mapping[str, Mapping[str, Any]]) -> int:
    """Number of month entries listed across all years."""
    return sum(len(months) for months in monthly_returns.values())


def return_highlights(
    net_profit: float,
    initial_balance: float,
    monthly_returns: Mapping[str, Mapping[str, Any]],
    start: datetime | None = None,
    end: datetime | None = None,
) -> ReturnHighlights:
    """
    Total, average monthly and annualized return percentages.

    The average monthly return spreads the total return over the months
    listed in ``monthly_returns``; without monthly data it falls back to the
    number of 30-day periods in the run window, or to twelve months when
    the window is unknown. The annualized return spreads the total over the
    window length in years (the total itself when the window is unknown).
    """
    total = percentage(net_profit, initial_balance)

    months = count_months(monthly_returns)
    span_days = None
    if start is not None and end is not None:
        span_days = math.ceil((end - start).total_seconds() / 86400)

    if months > 0:
        monthly = safe_divide(total, months)
    elif span_days is None:
        monthly = safe_divide(total, MONTHS_PER_YEAR)
    else:
        periods = math.ceil(span_days / DAYS_PER_MONTH)
        monthly = safe_divide(total, periods) if periods > 0 else ZERO

    if span_days is None:
        annualized = total
    elif span_days <= 0:
        annualized = ZERO
    else:
        annualized = safe_divide(total, span_days / DAYS_PER_YEAR)

    return ReturnHighlights(
        total_return_pct=total,
        avg_monthly_return_pct=monthly,
        annualized_return_pct=annualized,
    )
