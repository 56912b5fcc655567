"""Relative strength calculator unit tests"""

import numpy as np
import pytest

from libs.ranking.src.domain.services.market_context_builder import (
    build_fallback_market_context,
)
from libs.ranking.src.domain.services.relative_strength_calculator import (
    build_rs_line,
    calculate_benchmark_change,
    calculate_horizon_performance,
    calculate_period_performance,
    calculate_relative_strength,
    calculate_rs_line_slope,
    calculate_rs_one_day_change,
    calculate_rs_rating,
)


def _performance(p3: float, p6: float, p9: float, p12: float) -> dict:
    return {
        "performance_3m": p3,
        "performance_6m": p6,
        "performance_9m": p9,
        "performance_12m": p12,
    }


class TestPeriodPerformance:
    """Test percent change over a horizon"""

    def test_change_against_earlier_close(self) -> None:
        """Last close vs the close `days` bars back"""
        closes = [100.0, 105.0, 110.0]

        assert calculate_period_performance(closes, 2) == pytest.approx(10.0)

    def test_short_history_is_zero(self) -> None:
        """Not enough history gives 0.0"""
        assert calculate_period_performance([100.0, 110.0], 5) == 0.0

    def test_horizon_performance_keys(self) -> None:
        """All four horizons are reported"""
        result = calculate_horizon_performance([100.0] * 300)

        assert set(result) == {
            "performance_3m",
            "performance_6m",
            "performance_9m",
            "performance_12m",
        }
        assert all(v == 0.0 for v in result.values())


class TestRsRating:
    """Test RS rating"""

    def test_equal_performance_is_one(self) -> None:
        """Matching the benchmark gives 1.0"""
        perf = _performance(5, 10, 12, 15)

        assert calculate_rs_rating(perf, perf) == pytest.approx(1.0)

    def test_clamped_to_three(self) -> None:
        """Extreme outperformance is capped"""
        stock = _performance(1000, 1000, 1000, 1000)
        benchmark = _performance(0, 0, 0, 0)

        assert calculate_rs_rating(stock, benchmark) == 3.0

    def test_non_positive_benchmark_is_neutral(self) -> None:
        """A wiped-out benchmark cannot invert the rating"""
        stock = _performance(10, 10, 10, 10)
        benchmark = _performance(-100, -100, -100, -100)

        assert calculate_rs_rating(stock, benchmark) == 1.0

    def test_rating_within_bounds(self) -> None:
        """Random performances stay in [0, 3]"""
        np.random.seed(42)
        for _ in range(100):
            stock = _performance(*np.random.uniform(-90, 300, 4))
            benchmark = _performance(*np.random.uniform(-50, 100, 4))

            assert 0.0 <= calculate_rs_rating(stock, benchmark) <= 3.0


class TestRsLine:
    """Test RS line and its changes"""

    def test_only_shared_dates(self, make_quotes) -> None:
        """Dates missing from the benchmark are skipped"""
        quotes = make_quotes([10.0, 20.0, 30.0])
        close_by_date = {quotes[0]["date"]: 100.0, quotes[2]["date"]: 100.0}

        rs_line = build_rs_line(quotes, close_by_date)

        assert list(rs_line) == pytest.approx([0.1, 0.3])

    def test_slope_needs_lookback(self) -> None:
        """A line shorter than the lookback has zero slope"""
        assert calculate_rs_line_slope(np.ones(20)) == 0.0

    def test_slope_against_lookback_point(self) -> None:
        """Compares against the point 21 entries back"""
        rs_line = np.array([1.0] * 20 + [1.1])

        assert calculate_rs_line_slope(rs_line) == pytest.approx(0.1)

    def test_one_day_change(self) -> None:
        """Fractional change of the last point"""
        assert calculate_rs_one_day_change(np.array([2.0, 2.2])) == pytest.approx(0.1)
        assert calculate_rs_one_day_change(np.array([2.0])) == 0.0

    def test_benchmark_change(self, make_quotes) -> None:
        """Latest benchmark daily change in percent"""
        quotes = make_quotes([396.0, 400.0, 404.0])

        assert calculate_benchmark_change(quotes) == pytest.approx(1.0)

    def test_benchmark_change_needs_three_quotes(self, make_quotes) -> None:
        """Two quotes or fewer give no daily change"""
        quotes = make_quotes([400.0, 404.0])

        assert calculate_benchmark_change(quotes) == 0.0
        assert calculate_benchmark_change(quotes[:1]) == 0.0


class TestCalculateRelativeStrength:
    """Test the combined relative strength"""

    def test_uptrend_beats_flat_benchmark(self, uptrend_quotes, flat_context) -> None:
        """Rising ticker vs flat benchmark rates above 1 with a rising RS line"""
        result = calculate_relative_strength(uptrend_quotes, flat_context)

        assert result["rs_rating"] > 1.0
        assert result["rs_line_slope"] > 0
        assert result["benchmark_change_pct"] == 0.0

    def test_fallback_context_has_flat_rs_line(self, uptrend_quotes) -> None:
        """Without benchmark quotes the RS line is empty"""
        result = calculate_relative_strength(
            uptrend_quotes, build_fallback_market_context()
        )

        assert result["rs_line_slope"] == 0.0
        assert result["rs_one_day_change"] == 0.0
        assert 0.0 <= result["rs_rating"] <= 3.0
