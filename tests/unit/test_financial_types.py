"""
Unit tests for numeric helpers.
Every ratio must stay finite: zero denominators resolve to zero.
"""

import math

import pytest

from src.core.types.financial import (
    HUNDRED,
    ZERO,
    percentage,
    safe_divide,
    to_float,
    try_float,
)


class TestFinancialTypeConversions:
    """Test suite for numeric conversions."""

    def test_should_return_float_unchanged(self) -> None:
        """Test that float input is returned unchanged."""
        # Act
        result = to_float(50.0)

        # Assert
        assert isinstance(result, float)
        assert result == 50.0

    def test_should_convert_string_and_int_to_float(self) -> None:
        """Test converting numeric text and ints."""
        assert to_float("-12.5") == -12.5
        assert to_float(100) == 100.0
        assert isinstance(to_float(100), float)

    @pytest.mark.parametrize("value", [None, True, False, "abc", "", math.nan, math.inf])
    def test_should_reject_non_numeric_values(self, value: object) -> None:
        """Test that bools, None, text and non-finite values are rejected."""
        with pytest.raises(ValueError):
            to_float(value)

    def test_should_reject_containers(self) -> None:
        """Test that lists and dicts are rejected."""
        with pytest.raises(TypeError):
            to_float([1])

    def test_should_reject_integers_beyond_float_range(self) -> None:
        """Test a JSON integer too large for a float."""
        with pytest.raises(ValueError, match="out of float range"):
            to_float(10**400)
        assert try_float(10**400) is None

    def test_should_return_none_instead_of_raising(self) -> None:
        """Test try_float on bad input."""
        assert try_float("50") == 50.0
        assert try_float("n/a") is None
        assert try_float(None) is None
        assert try_float({"a": 1}) is None


class TestSafeArithmetic:
    """Test suite for finite-only arithmetic."""

    def test_should_divide_normally(self) -> None:
        """Test ordinary division."""
        assert safe_divide(1.0, 4.0) == 0.25

    def test_should_return_zero_on_zero_denominator(self) -> None:
        """Test division by zero."""
        assert safe_divide(1.0, 0.0) == ZERO
        assert safe_divide(0.0, 0.0) == ZERO

    def test_should_return_zero_on_overflow(self) -> None:
        """Test non-finite quotient."""
        assert safe_divide(1e308, 1e-308) == ZERO

    def test_should_compute_percentage(self) -> None:
        """Test percentage helper."""
        assert percentage(1, 2) == 50.0
        assert percentage(1, 0) == ZERO
        assert percentage(3, 3) == HUNDRED
