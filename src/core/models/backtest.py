"""
Backtest configuration and document models.

``Backtest`` is the canonical in-memory form every stored document is
normalized into, whatever schema version it was written in.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

from loguru import logger

from src.core.enums import Timeframe
from src.core.exceptions.backtest import InvalidFormatError
from src.core.types import ZERO, to_float
from src.core.utils.timestamps import parse_date

from .trade import Trade

if TYPE_CHECKING:
    from src.core.models.statistics import AggregateStats


def _read_number(data: dict[str, Any], key: str, default: float, invalid: list[str]) -> float:
    """Read an optional numeric key, recording it as invalid when not numeric."""
    if key not in data or data[key] is None:
        return default
    try:
        return to_float(data[key])
    except (TypeError, ValueError):
        invalid.append(key)
        return default


@dataclass(frozen=True)
class BacktestConfig:
    """Run parameters of a backtest. Immutable per backtest."""

    symbol: str
    strategy: str
    start_date: str
    end_date: str
    initial_balance: float
    candles: int
    spread: float
    commission: float
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("SYMBOL", "STRATEGY", "INICIO", "FIN", "BALANCE", "VELAS", "SPREAD", "COMISSION")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BacktestConfig":
        """Build config from its document representation.

        Raises:
            InvalidFormatError: If a numeric key holds a non-numeric value
        """
        invalid: list[str] = []
        config = cls(
            symbol=str(data.get("SYMBOL", "")),
            strategy=str(data.get("STRATEGY", "")),
            start_date=str(data.get("INICIO", "")),
            end_date=str(data.get("FIN", "")),
            initial_balance=_read_number(data, "BALANCE", ZERO, invalid),
            candles=int(_read_number(data, "VELAS", ZERO, invalid)),
            spread=_read_number(data, "SPREAD", ZERO, invalid),
            commission=_read_number(data, "COMISSION", ZERO, invalid),
            extra={key: value for key, value in data.items() if key not in cls._KEYS},
        )
        if config.commission < 0 and "COMISSION" not in invalid:
            invalid.append("COMISSION")
        if invalid:
            raise InvalidFormatError(invalid)
        return config

    def start(self) -> datetime | None:
        """Parsed start date (None when absent or invalid)."""
        return parse_date(self.start_date)

    def end(self) -> datetime | None:
        """Parsed end date (None when absent or invalid)."""
        return parse_date(self.end_date)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "STRATEGY": self.strategy,
            "INICIO": self.start_date,
            "FIN": self.end_date,
            "BALANCE": self.initial_balance,
            "VELAS": self.candles,
            "SPREAD": self.spread,
            "COMISSION": self.commission,
            "SYMBOL": self.symbol,
            **self.extra,
        }


@dataclass(frozen=True)
class StrategyConfig:
    """Strategy parameters of a backtest. Immutable per backtest."""

    risk: float
    risk_reward: float
    trading_hours: list[list[str]]
    excluded_days: list[str]
    last_trade: float
    timeframes: list[str]
    topic: str | None = None
    description: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = (
        "TRADING HOURS",
        "DESCRIPTION",
        "TOPIC",
        "EXCLUDED DAYS",
        "LAST TRADE",
        "TFs",
        "RIESGO",
        "RR",
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StrategyConfig":
        """Build strategy config from its document representation.

        Raises:
            InvalidFormatError: If a numeric or list key holds the wrong kind
        """
        invalid: list[str] = []
        lists = {}
        for key in ("TRADING HOURS", "EXCLUDED DAYS", "TFs"):
            value = data.get(key, [])
            if not isinstance(value, list):
                invalid.append(key)
                value = []
            lists[key] = value
        if not all(isinstance(window, list) for window in lists["TRADING HOURS"]):
            invalid.append("TRADING HOURS")
            lists["TRADING HOURS"] = []

        config = cls(
            risk=_read_number(data, "RIESGO", ZERO, invalid),
            risk_reward=_read_number(data, "RR", ZERO, invalid),
            trading_hours=[list(window) for window in lists["TRADING HOURS"]],
            excluded_days=[str(day) for day in lists["EXCLUDED DAYS"]],
            last_trade=_read_number(data, "LAST TRADE", ZERO, invalid),
            timeframes=[str(tf) for tf in lists["TFs"]],
            topic=data.get("TOPIC"),
            description=data.get("DESCRIPTION"),
            extra={key: value for key, value in data.items() if key not in cls._KEYS},
        )
        if invalid:
            raise InvalidFormatError(invalid)

        for label in config.timeframes:
            try:
                Timeframe.from_string(label)
            except ValueError:
                logger.warning(f"Unrecognized timeframe label in strategy config: {label}")
        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert strategy config to dictionary."""
        result: dict[str, Any] = {
            "TRADING HOURS": [list(window) for window in self.trading_hours],
        }
        if self.description is not None:
            result["DESCRIPTION"] = self.description
        if self.topic is not None:
            result["TOPIC"] = self.topic
        result.update(
            {
                "EXCLUDED DAYS": list(self.excluded_days),
                "LAST TRADE": self.last_trade,
                "TFs": list(self.timeframes),
                "RIESGO": self.risk,
                "RR": self.risk_reward,
            }
        )
        result.update(self.extra)
        return result


@dataclass(frozen=True)
class Backtest:
    """Canonical backtest document.

    Stored aggregates are kept as the plain mappings they were written as,
    so they are served back unchanged. ``backtest_id``, ``generated_at`` and
    ``schema_version`` describe where the document came from and do not take
    part in equality.
    """

    config: BacktestConfig
    strategy_config: StrategyConfig
    trades: list[Trade]
    stats: dict[str, Any]
    day_stats: dict[str, Any]
    hour_stats: dict[str, Any]
    monthly_stats: dict[str, Any]
    backtest_id: str | None = field(default=None, compare=False)
    generated_at: str | None = field(default=None, compare=False)
    schema_version: str = field(default="legacy", compare=False)

    @property
    def initial_balance(self) -> float:
        return self.config.initial_balance

    @property
    def commission(self) -> float:
        return self.config.commission

    def with_aggregates(self, aggregates: "AggregateStats") -> "Backtest":
        """Return a copy whose stored aggregates are replaced by recomputed ones."""
        documents = aggregates.to_dict()
        return replace(
            self,
            stats=documents["stats"],
            day_stats=documents["day_stats"],
            hour_stats=documents["hour_stats"],
            monthly_stats=documents["monthly_stats"],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the canonical (legacy-shaped) document."""
        return {
            "config": self.config.to_dict(),
            "strategy_config": self.strategy_config.to_dict(),
            "stats": self.stats,
            "trades": [trade.to_dict() for trade in self.trades],
            "day_stats": self.day_stats,
            "hour_stats": self.hour_stats,
            "monthly_stats": self.monthly_stats,
        }
