"""
Unit tests for the consecutive-result analyzer.
"""

import pytest

from src.core.analytics.sequence_analyzer import (
    PAIR_KEYS,
    TRIPLE_KEYS,
    SequenceCount,
    analyze_outcomes,
    analyze_sequences,
    count_sequences,
    most_common,
)


class TestCountSequences:
    """Tests for sequence counting."""

    def test_should_enumerate_keys_in_fixed_order(self) -> None:
        """Test key order with TP before SL."""
        assert PAIR_KEYS == ("TP-TP", "TP-SL", "SL-TP", "SL-SL")
        assert TRIPLE_KEYS[0] == "TP-TP-TP"
        assert TRIPLE_KEYS[-1] == "SL-SL-SL"
        assert len(TRIPLE_KEYS) == 8

    def test_should_count_overlapping_windows(self) -> None:
        """Test [TP, TP, SL, TP, TP] counts TP-TP twice."""
        counts = count_sequences(["TP", "TP", "SL", "TP", "TP"])

        assert counts["TP-TP"] == 2
        assert counts["TP-SL"] == 1
        assert counts["SL-TP"] == 1
        assert counts["SL-SL"] == 0
        assert counts["TP-TP-SL"] == 1
        assert counts["TP-SL-TP"] == 1
        assert counts["SL-TP-TP"] == 1
        assert sum(counts[key] for key in PAIR_KEYS) == 4
        assert sum(counts[key] for key in TRIPLE_KEYS) == 3

    def test_should_list_every_key_for_short_input(self) -> None:
        """Test that all keys are present even when nothing was counted."""
        counts = count_sequences(["TP"])

        assert list(counts) == list(PAIR_KEYS + TRIPLE_KEYS)
        assert all(count == 0 for count in counts.values())


class TestAnalyzeOutcomes:
    """Tests for conditional probabilities and the most common sequences."""

    def test_should_compute_conditional_probabilities(self) -> None:
        """Test win-after-win = TP-TP / (TP-TP + TP-SL)."""
        stats = analyze_outcomes(["TP", "TP", "SL", "TP", "TP"])

        assert stats.win_after_win == pytest.approx(2 / 3)
        assert stats.loss_after_win == pytest.approx(1 / 3)
        assert stats.win_after_loss == 1.0
        assert stats.loss_after_loss == 0.0

    def test_should_keep_probabilities_in_unit_interval(self) -> None:
        """Test probabilities are fractions, not percentages."""
        stats = analyze_outcomes(["SL", "SL", "TP", "SL", "TP", "TP", "SL"])

        for value in (
            stats.win_after_win,
            stats.win_after_loss,
            stats.loss_after_win,
            stats.loss_after_loss,
        ):
            assert 0.0 <= value <= 1.0
        assert stats.win_after_win + stats.loss_after_win == pytest.approx(1.0)
        assert stats.win_after_loss + stats.loss_after_loss == pytest.approx(1.0)

    def test_should_return_zero_without_predecessors(self) -> None:
        """Test zero denominators."""
        stats = analyze_outcomes(["SL"])

        assert stats.win_after_win == 0.0
        assert stats.loss_after_loss == 0.0
        assert stats.most_common_pair is None
        assert stats.most_common_triple is None

    def test_should_pick_most_common_sequences(self) -> None:
        """Test most common pair and triple."""
        stats = analyze_outcomes(["TP", "TP", "SL", "TP", "TP"])

        assert stats.most_common_pair == SequenceCount("TP-TP", 2)
        assert stats.most_common_triple == SequenceCount("TP-TP-SL", 1)

    def test_should_break_ties_by_enumeration_order(self) -> None:
        """Test that the first listed key wins a tie."""
        assert most_common({"TP-SL": 2, "SL-TP": 2}, PAIR_KEYS) == SequenceCount("TP-SL", 2)
        assert most_common({"SL-SL": 1, "TP-TP": 1}, PAIR_KEYS) == SequenceCount("TP-TP", 1)

    def test_should_serialize(self) -> None:
        """Test to_dict shape."""
        result = analyze_outcomes(["TP", "SL"]).to_dict()

        assert result["sequences"]["TP-SL"] == 1
        assert result["most_common_pair"] == {"sequence": "TP-SL", "count": 1}
        assert result["most_common_triple"] is None


class TestAnalyzeSequences:
    """Tests for sequence analysis over trades."""

    def test_should_use_chronological_order_of_valid_trades(self, make_trade) -> None:
        """Test trades are sorted and malformed ones skipped."""
        trades = [
            make_trade(-10, "2024-01-01T10:00:00Z", "SL"),
            make_trade(10, "2024-01-01T08:00:00Z", "TP"),
            make_trade(10, "bad", "TP"),
            make_trade(10, "2024-01-01T09:00:00Z", "TP"),
        ]

        stats = analyze_sequences(trades)

        assert stats.counts["TP-TP"] == 1
        assert stats.counts["TP-SL"] == 1
        assert stats.counts["TP-TP-SL"] == 1

    def test_should_handle_empty_trade_list(self) -> None:
        """Test no trades."""
        stats = analyze_sequences([])

        assert all(count == 0 for count in stats.counts.values())
        assert stats.most_common_pair is None
