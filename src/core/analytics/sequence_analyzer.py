"""
Consecutive-result analysis.

Counts every length-2 and length-3 run of TP/SL outcomes in chronological
order and derives the conditional probabilities of winning or losing after
a win or a loss.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from itertools import product
from typing import Any

from src.core.constants import SEQUENCE_SEPARATOR
from src.core.enums import TradeOutcome
from src.core.models.trade import Trade
from src.core.types import safe_divide

from .trade_frame import build_trade_frame

_OUTCOMES = (TradeOutcome.TP.value, TradeOutcome.SL.value)

# Fixed enumeration order; also the tie-break order for the most common sequence
PAIR_KEYS = tuple(SEQUENCE_SEPARATOR.join(combo) for combo in product(_OUTCOMES, repeat=2))
TRIPLE_KEYS = tuple(SEQUENCE_SEPARATOR.join(combo) for combo in product(_OUTCOMES, repeat=3))


@dataclass(frozen=True)
class SequenceCount:
    """A result sequence and how often it occurred."""

    sequence: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"sequence": self.sequence, "count": self.count}


@dataclass(frozen=True)
class SequenceStats:
    """Sequence counts and conditional probabilities (fractions in [0, 1])."""

    counts: dict[str, int]
    win_after_win: float
    win_after_loss: float
    loss_after_win: float
    loss_after_loss: float
    most_common_pair: SequenceCount | None
    most_common_triple: SequenceCount | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "sequences": dict(self.counts),
            "win_after_win": self.win_after_win,
            "win_after_loss": self.win_after_loss,
            "loss_after_win": self.loss_after_win,
            "loss_after_loss": self.loss_after_loss,
            "most_common_pair": self.most_common_pair.to_dict()
            if self.most_common_pair
            else None,
            "most_common_triple": self.most_common_triple.to_dict()
            if self.most_common_triple
            else None,
        }


def count_sequences(outcomes: Sequence[str]) -> dict[str, int]:
    """
    Count every length-2 and length-3 window over an outcome sequence.

    Args:
        outcomes: "TP"/"SL" values in chronological order

    Returns:
        Mapping of every pair and triple key (in enumeration order) to its count
    """
    counts = {key: 0 for key in PAIR_KEYS + TRIPLE_KEYS}
    for length in (2, 3):
        for start in range(len(outcomes) - length + 1):
            key = SEQUENCE_SEPARATOR.join(outcomes[start : start + length])
            if key in counts:
                counts[key] += 1
    return counts


def most_common(counts: dict[str, int], keys: Sequence[str]) -> SequenceCount | None:
    """
    Most frequent sequence among ``keys``.

    Ties go to the key listed first. Returns None when none of the keys
    was observed.
    """
    best: SequenceCount | None = None
    for key in keys:
        count = counts.get(key, 0)
        if count > 0 and (best is None or count > best.count):
            best = SequenceCount(sequence=key, count=count)
    return best


def analyze_outcomes(outcomes: Sequence[str]) -> SequenceStats:
    """Compute sequence statistics over chronologically ordered outcomes."""
    counts = count_sequences(outcomes)
    after_win = counts["TP-TP"] + counts["TP-SL"]
    after_loss = counts["SL-TP"] + counts["SL-SL"]
    return SequenceStats(
        counts=counts,
        win_after_win=safe_divide(counts["TP-TP"], after_win),
        win_after_loss=safe_divide(counts["SL-TP"], after_loss),
        loss_after_win=safe_divide(counts["TP-SL"], after_win),
        loss_after_loss=safe_divide(counts["SL-SL"], after_loss),
        most_common_pair=most_common(counts, PAIR_KEYS),
        most_common_triple=most_common(counts, TRIPLE_KEYS),
    )


def analyze_sequences(trades: Sequence[Trade]) -> SequenceStats:
    """Compute sequence statistics for the valid trades of a backtest."""
    frame = build_trade_frame(trades)
    outcomes = frame["outcome"].tolist() if not frame.empty else []
    return analyze_outcomes(outcomes)
