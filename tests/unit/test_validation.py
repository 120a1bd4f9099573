"""
Unit tests for validation and timestamp utilities.
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from src.core.exceptions.backtest import ValidationError
from src.core.utils.timestamps import parse_date, parse_timestamp
from src.core.utils.validation import (
    validate_backtest_id,
    validate_non_negative,
)


class TestValidateBacktestId:
    """Tests for backtest id validation."""

    @pytest.mark.parametrize("backtest_id", ["demo", "run_01", "EURUSD-2024.v2", "a" * 100])
    def test_should_accept_safe_ids(self, backtest_id: str) -> None:
        """Test that safe ids are returned unchanged."""
        assert validate_backtest_id(backtest_id) == backtest_id

    @pytest.mark.parametrize("backtest_id", ["..", "a/b", "..\\x", "../etc/passwd", "a..b"])
    def test_should_reject_path_traversal(self, backtest_id: str) -> None:
        """Test that ids able to escape the data directory are rejected."""
        with pytest.raises(ValidationError, match="path traversal"):
            validate_backtest_id(backtest_id)

    @pytest.mark.parametrize("backtest_id", ["has space", "semi;colon", "ñandú", "a*b"])
    def test_should_reject_invalid_characters(self, backtest_id: str) -> None:
        """Test character whitelist."""
        with pytest.raises(ValidationError, match="invalid characters"):
            validate_backtest_id(backtest_id)

    def test_should_reject_empty_and_long_ids(self) -> None:
        """Test length limits."""
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_backtest_id("")
        with pytest.raises(ValidationError, match="too long"):
            validate_backtest_id("a" * 101)


class TestNumericValidation:
    """Tests for numeric validators."""

    def test_should_accept_non_negative_values(self) -> None:
        """Test validate_non_negative."""
        assert validate_non_negative(0.0, "commission") == 0.0
        assert validate_non_negative(2.5, "commission") == 2.5

    def test_should_reject_negative_values(self) -> None:
        """Test validate_non_negative with a negative value."""
        with pytest.raises(ValidationError, match="commission"):
            validate_non_negative(-1.0, "commission")


class TestParseTimestamp:
    """Tests for trade timestamp parsing."""

    def test_should_parse_zulu_suffix(self) -> None:
        """Test ISO-8601 with Z suffix."""
        assert parse_timestamp("2024-01-01T08:00:00Z") == datetime(2024, 1, 1, 8, tzinfo=UTC)

    def test_should_treat_naive_values_as_utc(self) -> None:
        """Test naive timestamps keep their wall-clock time."""
        result = parse_timestamp("2024-01-01T08:30:00")
        assert result == datetime(2024, 1, 1, 8, 30, tzinfo=UTC)
        assert result is not None and result.tzinfo is not None

    def test_should_convert_offsets_to_utc(self) -> None:
        """Test aware values are converted to UTC."""
        result = parse_timestamp("2024-01-01T01:00:00+02:00")
        assert result == datetime(2023, 12, 31, 23, tzinfo=UTC)
        assert result is not None and result.hour == 23

    def test_should_accept_datetime_objects(self) -> None:
        """Test datetime passthrough."""
        moment = datetime(2024, 5, 1, 12, tzinfo=timezone(timedelta(hours=-5)))
        assert parse_timestamp(moment) == datetime(2024, 5, 1, 17, tzinfo=UTC)

    @pytest.mark.parametrize("value", ["not-a-date", "", "   ", None, 1704096000, ["x"]])
    def test_should_return_none_for_invalid_values(self, value: object) -> None:
        """Test unparseable timestamps."""
        assert parse_timestamp(value) is None

    def test_should_parse_configuration_dates(self) -> None:
        """Test plain dates as written in INICIO/FIN."""
        assert parse_date("2024-08-21") == datetime(2024, 8, 21, tzinfo=UTC)
        assert parse_date("") is None
