"""Series statistics unit tests"""

import numpy as np
import pytest

from libs.ranking.src.domain.services.series_statistics import (
    average_true_range,
    exponential_moving_average,
    last_defined,
    mean,
    percent_adr,
    rolling_std,
    simple_moving_average,
    std,
    true_range,
    up_down_volume_ratio,
)
from libs.shared.src.enums.atr_smoothing import AtrSmoothing
from libs.shared.src.enums.ema_seed_mode import EmaSeedMode


class TestMeanAndStd:
    """Test scalar helpers"""

    def test_mean_of_empty_is_zero(self) -> None:
        """Empty input averages to 0.0"""
        assert mean([]) == 0.0

    def test_std_needs_two_values(self) -> None:
        """A single value has no deviation"""
        assert std([5.0]) == 0.0
        assert std([1.0, 3.0]) == pytest.approx(1.0)


class TestSimpleMovingAverage:
    """Test trailing SMA"""

    def test_undefined_before_window_fills(self) -> None:
        """Entries before period-1 are NaN"""
        result = simple_moving_average([1.0, 2.0, 3.0, 4.0], 3)

        assert np.isnan(result[0]) and np.isnan(result[1])
        assert result[2] == pytest.approx(2.0)
        assert result[3] == pytest.approx(3.0)

    def test_matches_window_mean(self) -> None:
        """Each defined entry is the mean of its trailing window"""
        np.random.seed(42)
        values = np.random.uniform(10, 200, 60)
        period = 20

        result = simple_moving_average(values, period)

        for i in range(period - 1, len(values)):
            assert result[i] == pytest.approx(values[i - period + 1 : i + 1].mean())

    def test_short_series_all_nan(self) -> None:
        """Fewer values than the period yields only NaN"""
        assert np.all(np.isnan(simple_moving_average([1.0, 2.0], 5)))


class TestExponentialMovingAverage:
    """Test EMA seeding modes"""

    @pytest.fixture
    def linear_closes(self) -> list[float]:
        return [10.0 + i for i in range(20)]

    def test_sma_seed_starts_at_period_minus_one(self, linear_closes) -> None:
        """SMA seed is the mean of the first `period` values"""
        result = exponential_moving_average(linear_closes, 10, EmaSeedMode.SMA)

        assert np.all(np.isnan(result[:9]))
        assert result[9] == pytest.approx(14.5)

    def test_sma_seed_on_linear_series_lags_by_constant(self, linear_closes) -> None:
        """A linear series keeps a constant (period-1)/2 lag behind price"""
        result = exponential_moving_average(linear_closes, 10, EmaSeedMode.SMA)

        for i in range(9, 20):
            assert result[i] == pytest.approx(linear_closes[i] - 4.5)

    def test_first_value_seed_defined_everywhere(self, linear_closes) -> None:
        """FIRST_VALUE seed starts at the first value"""
        result = exponential_moving_average(
            linear_closes, 10, EmaSeedMode.FIRST_VALUE
        )

        assert not np.any(np.isnan(result))
        assert result[0] == 10.0
        assert result[1] == pytest.approx(10.0 + 2.0 / 11)

    def test_sma_seed_short_series(self) -> None:
        """SMA-seeded EMA is undefined when the series is shorter than the period"""
        result = exponential_moving_average([1.0, 2.0, 3.0], 10, EmaSeedMode.SMA)

        assert np.all(np.isnan(result))


class TestRollingStd:
    """Test population rolling deviation"""

    def test_constant_series_has_zero_deviation(self) -> None:
        """No dispersion, no deviation"""
        result = rolling_std([7.0] * 25, 20)

        assert result[19] == 0.0
        assert result[-1] == 0.0

    def test_uses_population_divisor(self) -> None:
        """Divides by the period, not period - 1"""
        values = [1.0, 2.0, 3.0, 4.0]

        result = rolling_std(values, 4)

        assert result[3] == pytest.approx(np.std(values))


class TestTrueRange:
    """Test true range and ATR"""

    def test_first_bar_is_high_minus_low(self) -> None:
        """TR[0] has no previous close"""
        tr = true_range([11.0], [9.0], [10.0])

        assert tr[0] == pytest.approx(2.0)

    def test_gap_uses_previous_close(self) -> None:
        """A gap up measures from the previous close"""
        tr = true_range([11.0, 16.0], [9.0, 14.0], [10.0, 15.0])

        assert tr[1] == pytest.approx(6.0)

    def test_constant_range_atr(self) -> None:
        """Both smoothings equal the true range when it is constant"""
        closes = [100.0] * 30
        highs = [101.0] * 30
        lows = [99.0] * 30

        wilder = average_true_range(highs, lows, closes, 14, AtrSmoothing.WILDER)
        rolling = average_true_range(
            highs, lows, closes, 14, AtrSmoothing.ROLLING_MEAN
        )

        assert np.isnan(wilder[12])
        assert wilder[-1] == pytest.approx(2.0)
        assert rolling[-1] == pytest.approx(2.0)

    def test_smoothings_diverge_on_range_spike(self) -> None:
        """Wilder keeps decaying memory of a spike, the rolling mean keeps the window"""
        ranges = [2.0, 2.0, 2.0, 8.0, 2.0]
        closes = [100.0] * 5
        highs = [100 + r / 2 for r in ranges]
        lows = [100 - r / 2 for r in ranges]

        wilder = average_true_range(highs, lows, closes, 3, AtrSmoothing.WILDER)
        rolling = average_true_range(
            highs, lows, closes, 3, AtrSmoothing.ROLLING_MEAN
        )

        # Wilder: seed mean(2, 2, 2) = 2, then (2*2 + 8) / 3 = 4, (4*2 + 2) / 3
        assert list(wilder[2:]) == pytest.approx([2.0, 4.0, 10 / 3])
        # Rolling mean: mean(2, 2, 2), mean(2, 2, 8), mean(2, 8, 2)
        assert list(rolling[2:]) == pytest.approx([2.0, 4.0, 4.0])
        assert wilder[-1] != pytest.approx(rolling[-1])


class TestPercentAdr:
    """Test average daily range percent"""

    def test_fixed_range(self) -> None:
        """101 / 99 gives roughly 2.02%"""
        result = percent_adr([101.0] * 20, [99.0] * 20)

        assert result == pytest.approx((101 / 99 - 1) * 100)

    def test_zero_low_stays_finite(self) -> None:
        """A zero low is treated as 1"""
        result = percent_adr([2.0], [0.0])

        assert np.isfinite(result)


class TestUpDownVolumeRatio:
    """Test up/down volume ratio"""

    def test_no_down_volume_caps_at_five(self) -> None:
        """Only up days gives 5.0"""
        closes = [float(i) for i in range(1, 30)]

        assert up_down_volume_ratio(closes, [100.0] * 29) == 5.0

    def test_alternating_days(self) -> None:
        """Up volume over down volume"""
        closes = [10.0, 11.0, 10.0, 11.0, 10.0]
        volumes = [0.0, 200.0, 100.0, 200.0, 100.0]

        assert up_down_volume_ratio(closes, volumes) == pytest.approx(2.0)


class TestLastDefined:
    """Test last_defined"""

    def test_nan_tail_returns_default(self) -> None:
        """NaN at the end falls back to the default"""
        assert last_defined(np.array([1.0, np.nan]), 0.5) == 0.5

    def test_empty_returns_default(self) -> None:
        """Empty series falls back to the default"""
        assert last_defined(np.array([])) == 0.0
