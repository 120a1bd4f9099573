"""
Unit tests for custom exceptions.
Testing all exception classes and their attributes.
"""

import pytest

from src.core.exceptions.backtest import (
    BacktestException,
    BacktestNotFoundError,
    CalculationError,
    ConfigurationError,
    DataError,
    InvalidFormatError,
    ValidationError,
)


class TestBacktestException:
    """Tests for BacktestException base class."""

    def test_should_create_base_exception_with_message(self) -> None:
        """Test creating base exception with message."""
        exc = BacktestException("Test error message")
        assert str(exc) == "Test error message"
        assert isinstance(exc, Exception)

    @pytest.mark.parametrize(
        "exc_class", [ValidationError, DataError, CalculationError, ConfigurationError]
    )
    def test_should_derive_all_errors_from_base(self, exc_class: type) -> None:
        """Test that every domain error can be caught as BacktestException."""
        exc = exc_class("failure")
        assert isinstance(exc, BacktestException)
        assert str(exc) == "failure"


class TestBacktestNotFoundError:
    """Tests for BacktestNotFoundError."""

    def test_should_carry_backtest_id(self) -> None:
        """Test that the missing id is kept on the exception."""
        exc = BacktestNotFoundError("run-42")
        assert exc.backtest_id == "run-42"
        assert "run-42" in str(exc)

    def test_should_be_a_data_error(self) -> None:
        """Test hierarchy placement."""
        assert isinstance(BacktestNotFoundError("x"), DataError)


class TestInvalidFormatError:
    """Tests for InvalidFormatError."""

    def test_should_carry_every_missing_field(self) -> None:
        """Test that all missing fields are reported together."""
        exc = InvalidFormatError(["statistics.hourly", "trades"], schema_version="new")
        assert exc.missing_fields == ["statistics.hourly", "trades"]
        assert exc.schema_version == "new"
        assert "statistics.hourly" in str(exc)
        assert "trades" in str(exc)
        assert "new schema" in str(exc)

    def test_should_copy_missing_fields(self) -> None:
        """Test that the caller's list is not shared."""
        fields = ["config"]
        exc = InvalidFormatError(fields)
        fields.append("stats")
        assert exc.missing_fields == ["config"]

    def test_should_be_a_validation_error(self) -> None:
        """Test hierarchy placement."""
        exc = InvalidFormatError(["trades"])
        assert isinstance(exc, ValidationError)
        assert exc.schema_version is None
