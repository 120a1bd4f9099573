"""
Unit tests for enum types.
Testing all enum methods and properties.
"""

from datetime import datetime

import pytest

from src.core.enums import OrderSide, Timeframe, TradeOutcome, Weekday


class TestOrderSideEnum:
    """Tests for OrderSide enum."""

    def test_should_have_correct_values(self) -> None:
        """Test that OrderSide matches the stored ORDEN values."""
        assert OrderSide.BUY.value == "BUY"
        assert OrderSide.SELL.value == "SELL"

    def test_should_reject_unknown_side(self) -> None:
        """Test that unknown sides are not accepted."""
        with pytest.raises(ValueError):
            OrderSide("HOLD")


class TestTradeOutcomeEnum:
    """Tests for TradeOutcome enum."""

    def test_should_have_correct_values(self) -> None:
        """Test that TradeOutcome matches the stored RESULTADO values."""
        assert TradeOutcome.TP.value == "TP"
        assert TradeOutcome.SL.value == "SL"

    def test_should_classify_wins_and_losses(self) -> None:
        """Test is_win and is_loss properties."""
        assert TradeOutcome.TP.is_win
        assert not TradeOutcome.TP.is_loss
        assert TradeOutcome.SL.is_loss
        assert not TradeOutcome.SL.is_win

    def test_should_compare_equal_to_plain_strings(self) -> None:
        """Test that outcomes behave as strings."""
        assert TradeOutcome.TP == "TP"
        assert f"{TradeOutcome.SL}" == "SL"


class TestWeekdayEnum:
    """Tests for Weekday enum."""

    def test_should_follow_python_weekday_order(self) -> None:
        """Test that member order starts on Monday."""
        assert [day.value for day in Weekday] == [
            "Monday",
            "Tuesday",
            "Wednesday",
            "Thursday",
            "Friday",
            "Saturday",
            "Sunday",
        ]

    def test_should_resolve_weekday_from_datetime(self) -> None:
        """Test from_datetime; 2024-01-01 was a Monday."""
        assert Weekday.from_datetime(datetime(2024, 1, 1)) == Weekday.MONDAY
        assert Weekday.from_datetime(datetime(2024, 1, 7)) == Weekday.SUNDAY

    def test_should_identify_weekend(self) -> None:
        """Test is_weekend property."""
        assert Weekday.SATURDAY.is_weekend
        assert Weekday.SUNDAY.is_weekend
        assert not Weekday.FRIDAY.is_weekend


class TestTimeframeEnum:
    """Tests for Timeframe enum."""

    def test_should_have_correct_values(self) -> None:
        """Test that Timeframe uses the MetaTrader labels."""
        assert Timeframe.M1.value == "M1"
        assert Timeframe.M30.value == "M30"
        assert Timeframe.H4.value == "H4"
        assert Timeframe.MN1.value == "MN1"

    def test_should_convert_from_string_case_insensitive(self) -> None:
        """Test from_string method with various cases."""
        assert Timeframe.from_string("M30") == Timeframe.M30
        assert Timeframe.from_string("m5") == Timeframe.M5
        assert Timeframe.from_string(" h1 ") == Timeframe.H1

    def test_should_raise_error_for_invalid_timeframe(self) -> None:
        """Test that from_string raises error for unknown labels."""
        with pytest.raises(ValueError, match="Unsupported timeframe"):
            Timeframe.from_string("M3")

        with pytest.raises(ValueError, match="Unsupported timeframe"):
            Timeframe.from_string("")
