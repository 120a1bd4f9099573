"""
Unit tests for return highlights and the monthly table.
"""

from datetime import UTC, datetime

import pytest

from src.core.analytics.returns import count_months, monthly_table, return_highlights


class TestMonthlyTable:
    """Tests for monthly table totals."""

    def test_should_total_rows_columns_and_grand_total(self) -> None:
        """Test yearly, monthly and grand totals."""
        table = monthly_table(
            {
                "2023": {"Dic": 2.0},
                "2024": {"Ene": 4.0, "Feb": -1.5, "Dic": 1.0},
            }
        )

        assert list(table.yearly_totals) == ["2024", "2023"]
        assert table.yearly_totals["2024"] == pytest.approx(3.5)
        assert table.yearly_totals["2023"] == pytest.approx(2.0)
        assert table.month_totals["Dic"] == pytest.approx(3.0)
        assert table.month_totals["Mar"] == 0.0
        assert table.grand_total == pytest.approx(5.5)

    def test_should_treat_non_numeric_months_as_zero(self) -> None:
        """Test tolerant reading of stored tables."""
        table = monthly_table({"2024": {"Ene": "n/a", "Feb": "2.5"}})

        assert table.yearly_totals["2024"] == pytest.approx(2.5)

    def test_should_count_listed_months(self) -> None:
        """Test month counting across years."""
        assert count_months({"2023": {"Dic": 1.0}, "2024": {"Ene": 1.0, "Feb": 0.0}}) == 3
        assert count_months({}) == 0


class TestReturnHighlights:
    """Tests for total, average monthly and annualized returns."""

    def test_should_spread_total_over_listed_months(self) -> None:
        """Test average monthly return uses the monthly table."""
        result = return_highlights(
            120.0,
            1000.0,
            {"2024": {"Ene": 6.0, "Feb": 6.0}},
            start=datetime(2024, 1, 1, tzinfo=UTC),
            end=datetime(2024, 12, 31, tzinfo=UTC),
        )

        assert result.total_return_pct == pytest.approx(12.0)
        assert result.avg_monthly_return_pct == pytest.approx(6.0)
        assert result.annualized_return_pct == pytest.approx(12.0 / (365 / 365))

    def test_should_fall_back_to_window_months(self) -> None:
        """Test 30-day periods when no monthly data is listed."""
        result = return_highlights(
            90.0,
            1000.0,
            {},
            start=datetime(2024, 1, 1, tzinfo=UTC),
            end=datetime(2024, 3, 31, tzinfo=UTC),
        )

        # 90 days -> 3 periods
        assert result.avg_monthly_return_pct == pytest.approx(3.0)
        assert result.annualized_return_pct == pytest.approx(9.0 / (90 / 365))

    def test_should_fall_back_to_twelve_months_without_dates(self) -> None:
        """Test unknown window."""
        result = return_highlights(120.0, 1000.0, {})

        assert result.avg_monthly_return_pct == pytest.approx(1.0)
        assert result.annualized_return_pct == pytest.approx(12.0)

    def test_should_return_zero_for_empty_window(self) -> None:
        """Test non-positive span."""
        moment = datetime(2024, 1, 1, tzinfo=UTC)
        result = return_highlights(50.0, 1000.0, {}, start=moment, end=moment)

        assert result.annualized_return_pct == 0.0
        assert result.avg_monthly_return_pct == 0.0

    def test_should_return_zero_total_with_zero_balance(self) -> None:
        """Test zero basis."""
        assert return_highlights(50.0, 0.0, {}).total_return_pct == 0.0
