"""
Generated demo backtest.

Served for the ``demo`` id when demo mode is enabled and no stored document
exists. Trades come from a seeded generator so every request sees the same
run, and the aggregates are computed from those trades.
"""

import copy
from datetime import UTC, datetime, timedelta
from typing import Any

import numpy as np

from src.core.analytics import aggregate_trades
from src.core.constants import DEMO_SEED, DEMO_TRADE_COUNT
from src.core.enums import Weekday
from src.core.models.trade import Trade

DEMO_CONFIG = {
    "STRATEGY": "SIMPLE_SMC",
    "INICIO": "2024-01-01",
    "FIN": "2024-08-21",
    "BALANCE": 5000,
    "VELAS": 150,
    "SPREAD": 0.0001,
    "COMISSION": 2,
    "SYMBOL": "EURUSD",
}

DEMO_STRATEGY_CONFIG = {
    "TRADING HOURS": [["06:00:00", "11:00:00"], ["15:00:00", "17:00:00"]],
    "DESCRIPTION": "Demo",
    "TOPIC": "DEMO",
    "EXCLUDED DAYS": [],
    "LAST TRADE": 30,
    "TFs": ["M30", "M5"],
    "RIESGO": 0.01,
    "RR": 1,
}

DEMO_TRADING_HOURS = (6, 7, 8, 9, 10, 15, 16)
DEMO_WIN_COUNT = 36
DEMO_RESULT = 50.0
DEMO_PIP = 0.001


def _demo_trades(rng: np.random.Generator) -> list[dict[str, Any]]:
    start = datetime(2024, 1, 1, tzinfo=UTC)
    span_days = (datetime(2024, 8, 21, tzinfo=UTC) - start).days

    outcomes = np.array([True] * DEMO_WIN_COUNT + [False] * (DEMO_TRADE_COUNT - DEMO_WIN_COUNT))
    rng.shuffle(outcomes)

    trades = []
    for is_win in outcomes:
        moment = start + timedelta(days=int(rng.integers(0, span_days)))
        while Weekday.from_datetime(moment).is_weekend:
            moment += timedelta(days=1)
        moment = moment.replace(
            hour=int(rng.choice(DEMO_TRADING_HOURS)), minute=int(rng.integers(0, 60))
        )

        side = "BUY" if rng.random() > 0.5 else "SELL"
        entry = round(1.09 + rng.uniform(-0.01, 0.01), 4)
        direction = 1 if side == "BUY" else -1
        trades.append(
            {
                "ORDEN": side,
                "RESULTADO": "TP" if is_win else "SL",
                "ENTRADA": entry,
                "TP": round(entry + direction * DEMO_PIP, 4),
                "SL": round(entry - direction * DEMO_PIP, 4),
                "HORA": moment.isoformat(),
                "P&L": DEMO_RESULT if is_win else -DEMO_RESULT,
            }
        )

    return sorted(trades, key=lambda trade: trade["HORA"])


def build_demo_document(seed: int = DEMO_SEED) -> dict[str, Any]:
    """Build a legacy-schema demo document with aggregates matching its trades."""
    rng = np.random.default_rng(seed)
    records = _demo_trades(rng)
    aggregates = aggregate_trades(
        [Trade.from_dict(record) for record in records],
        float(DEMO_CONFIG["BALANCE"]),
        float(DEMO_CONFIG["COMISSION"]),
    ).to_dict()

    return {
        "config": copy.deepcopy(DEMO_CONFIG),
        "strategy_config": copy.deepcopy(DEMO_STRATEGY_CONFIG),
        "stats": aggregates["stats"],
        "trades": records,
        "day_stats": aggregates["day_stats"],
        "hour_stats": aggregates["hour_stats"],
        "monthly_stats": aggregates["monthly_stats"],
    }
