"""
Shared fixtures for backtest tests.
"""

import copy
from collections.abc import Callable
from typing import Any

import pytest

from src.core.models.trade import Trade

TradeFactory = Callable[..., Trade]


def trade_record(
    pnl: Any,
    hora: Any,
    resultado: str = "TP",
    orden: str = "BUY",
    **extra: Any,
) -> dict[str, Any]:
    """Build one stored trade record."""
    record = {
        "ORDEN": orden,
        "RESULTADO": resultado,
        "ENTRADA": 1.1,
        "HORA": hora,
        "P&L": pnl,
    }
    record.update(extra)
    return record


@pytest.fixture
def make_trade() -> TradeFactory:
    """Factory for Trade objects from the stored record fields."""

    def _make(pnl: Any, hora: Any, resultado: str = "TP", orden: str = "BUY", **extra: Any):
        return Trade.from_dict(trade_record(pnl, hora, resultado, orden, **extra))

    return _make


@pytest.fixture
def legacy_document() -> dict[str, Any]:
    """Small legacy (flat) backtest document."""
    return {
        "config": {
            "STRATEGY": "SIMPLE_SMC",
            "INICIO": "2024-01-01",
            "FIN": "2024-03-01",
            "BALANCE": 1000,
            "VELAS": 150,
            "SPREAD": 0.0001,
            "COMISSION": 2,
            "SYMBOL": "EURUSD",
        },
        "strategy_config": {
            "TRADING HOURS": [["08:00:00", "12:00:00"]],
            "DESCRIPTION": "Sample",
            "TOPIC": "SMC",
            "EXCLUDED DAYS": [],
            "LAST TRADE": 30,
            "TFs": ["M30", "M5"],
            "RIESGO": 0.01,
            "RR": 2,
        },
        "stats": {"BALANCE INICIAL": 1000, "BALANCE": 1046, "OPERACIONES": 2},
        "trades": [
            trade_record(100, "2024-01-01T08:00:00Z", "TP", "BUY", TP=1.102, SL=1.099),
            trade_record(-50, "2024-01-02T09:00:00Z", "SL", "SELL", DAY_OF_WEEK="Tuesday"),
        ],
        "day_stats": {"Monday": {"TRADES": 1}},
        "hour_stats": {"8": {"TRADES": 1}},
        "monthly_stats": {"2024": {"Ene": 4.6}},
    }


@pytest.fixture
def new_document(legacy_document: dict[str, Any]) -> dict[str, Any]:
    """The legacy document converted by hand into the nested layout."""
    legacy = copy.deepcopy(legacy_document)
    return {
        "backtest_id": "sample",
        "metadata": {
            "timestamp": "2024-03-02T10:00:00Z",
            "config": legacy["config"],
            "strategy_config": legacy["strategy_config"],
        },
        "statistics": {
            "global": legacy["stats"],
            "daily": legacy["day_stats"],
            "hourly": legacy["hour_stats"],
            "monthly": legacy["monthly_stats"],
        },
        "trades": legacy["trades"],
    }
