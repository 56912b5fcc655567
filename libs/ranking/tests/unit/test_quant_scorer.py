"""Quant scorer unit tests"""

import copy

import numpy as np
import pytest

from libs.ranking.src.domain.services.quant_scorer import (
    calculate_score,
    calculate_score_breakdown,
    get_adjusted_weights,
    get_pullback_sub_score,
    normalize_weights,
    sanitize_stock_metrics,
    sigmoid_normalize,
)
from libs.shared.src.constants.scoring_config import BASE_WEIGHTS


@pytest.fixture
def metrics() -> dict:
    """Healthy uptrend sitting just above its 10 EMA"""
    return {
        "price": 100.0,
        "high": 101.0,
        "low": 99.0,
        "percent_change": 1.0,
        "rs_rating": 1.3,
        "ud_ratio": 1.8,
        "percent_adr": 3.0,
        "atr": 2.5,
        "distance_from_ema10": 0.5,
        "distance_from_ema20": 1.5,
        "distance_from_ema50": 3.0,
        "ema10": 99.5,
        "ema20": 98.5,
        "ema50": 97.0,
        "ema200": 90.0,
        "ema10_prev5": 98.0,
        "ema20_prev5": 97.5,
        "ema50_prev5": 96.5,
        "rs_line_slope": 0.05,
    }


class TestSigmoidNormalize:
    """Test logistic normalization"""

    def test_midpoint_is_half(self) -> None:
        """The middle of the range maps to 0.5"""
        assert sigmoid_normalize(5.0, 0.0, 10.0) == pytest.approx(0.5)

    def test_degenerate_range(self) -> None:
        """min == max gives 0.5 / 1.0 / 0.0"""
        assert sigmoid_normalize(1.0, 1.0, 1.0) == 0.5
        assert sigmoid_normalize(2.0, 1.0, 1.0) == 1.0
        assert sigmoid_normalize(0.0, 1.0, 1.0) == 0.0

    def test_asymmetric_penalizes_weak_side(self) -> None:
        """Below the midpoint the asymmetric curve is lower"""
        plain = sigmoid_normalize(2.0, 0.0, 10.0, 1.0)
        asymmetric = sigmoid_normalize(2.0, 0.0, 10.0, 1.0, asymmetric=True)

        assert asymmetric < plain

    def test_output_in_unit_interval(self) -> None:
        """Values beyond the range are clamped first"""
        assert 0.0 < sigmoid_normalize(-1e9, 0.0, 1.0) < 0.01
        assert 0.99 < sigmoid_normalize(1e9, 0.0, 1.0) < 1.0


class TestNormalizeWeights:
    """Test weight normalization"""

    def test_random_weights_sum_to_one(self) -> None:
        """Any non-negative weights are rescaled to sum to 1"""
        np.random.seed(42)
        for _ in range(50):
            raw = {k: float(v) for k, v in zip(BASE_WEIGHTS, np.random.uniform(-1, 2, 6))}
            raw["pullback"] = 1.0

            result = normalize_weights(raw)

            assert sum(result.values()) == pytest.approx(1.0)
            assert all(v >= 0 for v in result.values())

    def test_all_zero_is_uniform(self) -> None:
        """Zero total falls back to equal weights"""
        result = normalize_weights({k: 0.0 for k in BASE_WEIGHTS})

        assert all(v == pytest.approx(1 / 6) for v in result.values())

    def test_negative_clamped_to_zero(self) -> None:
        """Negative weights carry no weight"""
        result = normalize_weights({"a": -1.0, "b": 1.0})

        assert result == {"a": 0.0, "b": 1.0}


class TestAdjustedWeights:
    """Test VIX regime weight shifts"""

    def test_no_context_uses_base_weights(self) -> None:
        """Without VIX data the base weights apply"""
        result = get_adjusted_weights(None)

        for key, value in BASE_WEIGHTS.items():
            assert result[key] == pytest.approx(value)

    def test_backwardation_shifts_to_risk(self) -> None:
        """VIX above VIX3M moves weight into risk and out of daily performance"""
        result = get_adjusted_weights(
            {"price": 25.0, "previous_close": 25.0, "reference_price": 20.0}
        )

        assert result["risk"] > BASE_WEIGHTS["risk"]
        assert result["daily_performance"] < BASE_WEIGHTS["daily_performance"]
        assert sum(result.values()) == pytest.approx(1.0)

    def test_spike_triggers_stress(self) -> None:
        """A >10% one-day VIX jump is stress even in contango"""
        result = get_adjusted_weights(
            {"price": 18.0, "previous_close": 15.0, "reference_price": 20.0}
        )

        assert result["risk"] > BASE_WEIGHTS["risk"]

    def test_complacency_adds_strength(self) -> None:
        """Deep contango rewards strength"""
        result = get_adjusted_weights(
            {"price": 12.0, "previous_close": 12.0, "reference_price": 16.0}
        )

        assert result["strength"] > BASE_WEIGHTS["strength"]


class TestPullbackSubScore:
    """Test pullback sub-score"""

    def test_inside_window_with_moderate_slope(self) -> None:
        """Ideal window and a modest rise score 1.0"""
        assert get_pullback_sub_score(1.0, 1.5, 0.003) == pytest.approx(1.0)

    def test_steep_slope_boosts(self) -> None:
        """A rising EMA multiplies by 1.2"""
        assert get_pullback_sub_score(1.0, 1.5, 0.01) == pytest.approx(1.2)

    def test_falling_slope_halves(self) -> None:
        """A falling EMA multiplies by 0.5"""
        assert get_pullback_sub_score(1.0, 1.5, -0.01) == pytest.approx(0.5)

    def test_extended_decays_linearly(self) -> None:
        """Above the window the score decays with the excess"""
        assert get_pullback_sub_score(3.0, 1.5, 0.003) == pytest.approx(0.5)

    def test_deep_undercut_is_zero(self) -> None:
        """Far below the EMA gives nothing"""
        assert get_pullback_sub_score(-5.0, 1.5, 0.003) == 0.0

    def test_shallow_undercut_decays_quadratically(self) -> None:
        """Just under the tolerance loses severity squared over 2"""
        assert get_pullback_sub_score(-1.0, 1.5, 0.003) == pytest.approx(0.875)

    def test_slope_multiplier_tiers(self) -> None:
        """Falling 0.5, flat 0.8, modest 1.0, rising 1.2"""
        expected = {
            -0.0001: 0.5,
            0.0: 0.8,
            0.001: 0.8,
            0.003: 1.0,
            0.005: 1.0,
            0.0051: 1.2,
        }

        for slope, multiplier in expected.items():
            assert get_pullback_sub_score(1.0, 1.5, slope) == pytest.approx(
                multiplier
            )


class TestSanitizeStockMetrics:
    """Test metric sanitization"""

    def test_non_finite_get_neutral_defaults(self, metrics) -> None:
        """NaN / inf fields become neutral values"""
        metrics["rs_rating"] = float("nan")
        metrics["price"] = float("inf")
        metrics["ud_ratio"] = None

        clean = sanitize_stock_metrics(metrics)

        assert clean["rs_rating"] == 1.0
        assert clean["price"] == 5.0
        assert clean["ud_ratio"] == 1.0

    def test_bounds_applied(self, metrics) -> None:
        """Out-of-range values are clamped"""
        metrics["percent_change"] = 50.0
        metrics["distance_from_ema50"] = -40.0
        metrics["atr"] = -1.0

        clean = sanitize_stock_metrics(metrics)

        assert clean["percent_change"] == 20.0
        assert clean["distance_from_ema50"] == -10.0
        assert clean["atr"] == 0.0001

    def test_invalid_ema200_dropped(self, metrics) -> None:
        """Non-positive EMA200 is removed"""
        metrics["ema200"] = 0.0

        assert "ema200" not in sanitize_stock_metrics(metrics)

    def test_input_not_mutated(self, metrics) -> None:
        """Sanitization works on a copy"""
        metrics["percent_change"] = 50.0
        original = copy.deepcopy(metrics)

        sanitize_stock_metrics(metrics)

        assert metrics == original


class TestCalculateScore:
    """Test the composite score"""

    def test_score_is_int_in_range(self, metrics) -> None:
        """Random and non-finite metrics still give an int in [0, 100]"""
        np.random.seed(42)
        specials = [float("nan"), float("inf"), float("-inf"), 0.0, -1e6, 1e6]
        for _ in range(200):
            noisy = dict(metrics)
            for field in noisy:
                if np.random.rand() < 0.3:
                    noisy[field] = specials[np.random.randint(len(specials))]
                else:
                    noisy[field] = float(np.random.uniform(-50, 200))
            vix = float(np.random.uniform(10, 60))

            score = calculate_score(
                noisy,
                {"price": vix, "previous_close": 20.0, "reference_price": 22.0},
                float(np.random.uniform(-5, 5)),
            )

            assert isinstance(score, int)
            assert 0 <= score <= 100

    def test_deterministic(self, metrics) -> None:
        """Same inputs give the same score"""
        context = {"price": 16.0, "previous_close": 15.5, "reference_price": 18.0}

        first = calculate_score(metrics, context, 0.3)
        second = calculate_score(metrics, context, 0.3)

        assert first == second

    def test_healthy_pullback_scores_well(self, metrics) -> None:
        """A clean bullish pullback scores in the upper half"""
        breakdown = calculate_score_breakdown(metrics, None, 0.0)

        assert breakdown["is_bullish_stack"]
        assert breakdown["pullback"] == pytest.approx(1.0)
        assert breakdown["score"] > 50

    def test_penny_stock_penalized(self, metrics) -> None:
        """Prices under 1 take the 0.6 penalty"""
        metrics["price"] = 0.5

        breakdown = calculate_score_breakdown(metrics, None, 0.0)

        assert breakdown["price_penalty"] == 0.6

    def test_low_price_penalty_interpolates(self, metrics) -> None:
        """Between 1 and 5 the penalty rises from 0.7 to 1.0"""
        metrics["price"] = 3.0

        breakdown = calculate_score_breakdown(metrics, None, 0.0)

        assert breakdown["price_penalty"] == pytest.approx(0.85)

    def test_extreme_adr_penalized(self, metrics) -> None:
        """%ADR above 20 takes the 0.85 penalty"""
        metrics["percent_adr"] = 25.0

        breakdown = calculate_score_breakdown(metrics, None, 0.0)

        assert breakdown["adr_penalty"] == 0.85


class TestScoreBreakdownRules:
    """Test individual sub-score rules of the breakdown"""

    @pytest.fixture
    def coiled_metrics(self, metrics) -> dict:
        """Bullish stack with EMA10/EMA20 within 0.2 ATR and an extended 10/50"""
        metrics.update(
            {
                "ema10": 99.5,
                "ema20": 99.0,
                "ema50": 97.0,
                "ema10_prev5": 99.3,
                "ema20_prev5": 98.8,
                "ema50_prev5": 96.8,
                "distance_from_ema10": 3.0,
                "distance_from_ema20": 1.0,
                "distance_from_ema50": 8.0,
                "rs_line_slope": 0.12,
            }
        )
        return metrics

    def test_risk_nearest_support_bullish_window(self, metrics) -> None:
        """Bullish stack measures the nearest support over a 4% window"""
        breakdown = calculate_score_breakdown(metrics, None, 0.0)

        assert breakdown["is_bullish_stack"]
        assert breakdown["risk"] == pytest.approx(
            1 - sigmoid_normalize(0.5, 0, 4.0, 1.5)
        )

    def test_risk_nearest_support_non_bullish_window(self, metrics) -> None:
        """Without a bullish stack the window tightens to 3%"""
        metrics["ema200"] = 120.0

        breakdown = calculate_score_breakdown(metrics, None, 0.0)

        assert not breakdown["is_bullish_stack"]
        assert breakdown["risk"] == pytest.approx(
            1 - sigmoid_normalize(0.5, 0, 3.0, 1.5)
        )
        assert breakdown["risk"] < calculate_score_breakdown(
            {**metrics, "ema200": 90.0}, None, 0.0
        )["risk"]

    def test_risk_below_every_ema(self, metrics) -> None:
        """No support left: 0.2 x nearest resistance"""
        metrics.update(
            {
                "distance_from_ema10": -2.0,
                "distance_from_ema20": -4.0,
                "distance_from_ema50": -6.0,
            }
        )

        breakdown = calculate_score_breakdown(metrics, None, 0.0)

        assert breakdown["risk"] == pytest.approx(
            0.2 * sigmoid_normalize(-2.0, -5, 0, 1.0)
        )
        assert breakdown["risk"] <= 0.2

    def test_coiled_bonus_when_all_conditions_hold(self, coiled_metrics) -> None:
        """Bullish, coiled, bouncing and strong RS add 0.25 to pullback"""
        breakdown = calculate_score_breakdown(coiled_metrics, None, 0.0)

        assert breakdown["is_coiled"]
        # 0.4 * 0.5 + 0.4 * 1.0 + 0.2 * 0.5 + 0.25
        assert breakdown["pullback"] == pytest.approx(0.95)

    def test_coiled_bonus_needs_every_condition(self, coiled_metrics) -> None:
        """Dropping any one condition removes the bonus"""
        broken = {
            "weak_rs": {"rs_line_slope": 0.05},
            "not_bullish": {"ema200": 120.0},
            "separated": {"ema20": 98.0, "ema20_prev5": 97.8},
            "undercut": {"distance_from_ema10": -0.2},
        }

        for name, overrides in broken.items():
            breakdown = calculate_score_breakdown(
                {**coiled_metrics, **overrides}, None, 0.0
            )

            assert breakdown["pullback"] < 0.95, name

    def test_rs_divergence_multiplier(self, metrics) -> None:
        """Rising RS line on a flat or down tape is worth 1.25x"""
        diverging = calculate_score_breakdown(metrics, None, 0.0)
        following = calculate_score_breakdown(metrics, None, 0.5)

        assert diverging["rs_line_momentum"] == pytest.approx(
            1.25 * following["rs_line_momentum"]
        )
        assert following["rs_line_momentum"] == pytest.approx(
            sigmoid_normalize(5.0, 0, 15, 1.0)
        )

    def test_falling_rs_line_gets_no_multiplier(self, metrics) -> None:
        """The 1.25x only rewards a rising RS line"""
        metrics["rs_line_slope"] = -0.05

        breakdown = calculate_score_breakdown(metrics, None, -1.0)

        assert breakdown["rs_line_momentum"] == pytest.approx(
            sigmoid_normalize(-5.0, 0, 15, 1.0)
        )

    def test_daily_bonus_on_falling_tape(self, metrics) -> None:
        """Rising while the benchmark drops more than 1.5% adds 0.15"""
        metrics["percent_change"] = 0.1

        breakdown = calculate_score_breakdown(metrics, None, -1.6)

        unboosted = sigmoid_normalize(1.7, -3, 3, 2.0, True)
        assert unboosted < 1.0
        assert breakdown["daily_performance"] == pytest.approx(
            min(1.0, unboosted + 0.15)
        )

    def test_no_daily_bonus_when_stock_falls(self, metrics) -> None:
        """A falling stock on a falling tape gets only its relative alpha"""
        metrics["percent_change"] = -0.1

        breakdown = calculate_score_breakdown(metrics, None, -1.6)

        assert breakdown["daily_performance"] == pytest.approx(
            sigmoid_normalize(1.5, -3, 3, 2.0, True)
        )

    def test_no_daily_bonus_on_mild_dip(self, metrics) -> None:
        """A benchmark dip of 1.5% or less earns nothing extra"""
        metrics["percent_change"] = 0.1

        breakdown = calculate_score_breakdown(metrics, None, -1.0)

        assert breakdown["daily_performance"] == pytest.approx(
            sigmoid_normalize(1.1, -3, 3, 2.0, True)
        )
