"""
Tabular view of a trade list.

Every analytics component works from the same DataFrame: valid trades only,
sorted by timestamp ascending with a stable sort so trades sharing a
timestamp keep their input order.
"""

from collections.abc import Sequence

import pandas as pd
from loguru import logger

from src.core.constants import MONTH_LABELS
from src.core.enums import Weekday
from src.core.models.trade import Trade

FRAME_COLUMNS = [
    "timestamp",
    "pnl",
    "outcome",
    "is_win",
    "is_loss",
    "weekday",
    "hour",
    "date",
    "year",
    "month",
]


def build_trade_frame(trades: Sequence[Trade]) -> pd.DataFrame:
    """
    Build the chronologically sorted frame of valid trades.

    Args:
        trades: Trades in stored order

    Returns:
        DataFrame with one row per valid trade and the columns in
        ``FRAME_COLUMNS``; the index is reset to 0..n-1
    """
    records = []
    skipped = 0
    for trade in trades:
        timestamp = trade.timestamp
        pnl = trade.pnl
        if timestamp is None or pnl is None:
            skipped += 1
            continue
        records.append(
            {
                "timestamp": timestamp,
                "pnl": pnl,
                "outcome": trade.outcome.value,
                "is_win": trade.outcome.is_win,
                "is_loss": trade.outcome.is_loss,
                "weekday": Weekday.from_datetime(timestamp).value,
                "hour": timestamp.hour,
                "date": timestamp.date(),
                "year": str(timestamp.year),
                "month": MONTH_LABELS[timestamp.month - 1],
            }
        )

    if skipped:
        logger.warning(f"Excluded {skipped} malformed trade(s) from derived statistics")

    frame = pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)
    if frame.empty:
        return frame

    frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True)
    frame["pnl"] = frame["pnl"].astype("float64")
    frame["hour"] = frame["hour"].astype("int64")
    frame["is_win"] = frame["is_win"].astype(bool)
    frame["is_loss"] = frame["is_loss"].astype(bool)
    return frame.sort_values("timestamp", kind="stable").reset_index(drop=True)
