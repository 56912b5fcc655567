"""Quant Scorer

Composite 0-100 quality score of a ticker: daily relative performance, RS
strength, volume accumulation, pullback quality, support proximity risk and
RS-line momentum, each squashed through a logistic curve and blended with
VIX-regime adjusted weights.

All functions are pure; the same inputs always give the same score.
"""

import math
from typing import Mapping, Optional

from libs.shared.src.constants.scoring_config import (
    ADR_HIGH_PENALTY,
    ADR_HIGH_THRESHOLD,
    ADR_LOW_PENALTY,
    ADR_LOW_THRESHOLD,
    BASE_WEIGHTS,
    COILED_BONUS,
    COILED_MAX_SEPARATION_ATR,
    LOW_PRICE_PENALTY_FLOOR,
    MAX_EMA_DISTANCE,
    MAX_PERCENT_CHANGE,
    MAX_UD_RATIO,
    MIN_ATR,
    MIN_EMA_DISTANCE,
    MIN_PERCENT_CHANGE,
    MIN_PRICE,
    PENNY_PENALTY,
    PENNY_PRICE,
    PULLBACK_BLEND,
    PULLBACK_IDEAL_MAX,
    UNDERCUT_TOLERANCE,
)
from libs.shared.src.constants.vix_thresholds import (
    MAX_VIX_SPIKE,
    VIX_COMPLACENT_RATIO,
    VIX_SPIKE_DAY_CHANGE,
    VIX_STRESS_RATIO,
)
from libs.shared.src.dtos.market.market_context_dto import VolatilityContextDTO
from libs.shared.src.dtos.ranking.score_breakdown_dto import ScoreBreakdownDTO
from libs.shared.src.dtos.ranking.scoring_weights_dto import ScoringWeightsDTO
from libs.shared.src.dtos.ranking.stock_metrics_dto import StockMetricsDTO

REQUIRED_FIELDS = (
    "price",
    "high",
    "low",
    "percent_change",
    "rs_rating",
    "ud_ratio",
    "percent_adr",
    "atr",
    "distance_from_ema10",
    "distance_from_ema20",
    "distance_from_ema50",
    "ema10",
    "ema20",
    "ema50",
    "rs_line_slope",
    "ema10_prev5",
    "ema20_prev5",
    "ema50_prev5",
)

# Neutral substitutes for non-finite inputs (everything else becomes 0)
NEUTRAL_DEFAULTS = {"rs_rating": 1.0, "ud_ratio": 1.0, "price": MIN_PRICE}


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _is_finite(value) -> bool:
    if value is None:
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def sigmoid_normalize(
    value: float,
    min_val: float,
    max_val: float,
    steepness: float = 1.0,
    asymmetric: bool = False,
) -> float:
    """Map a raw value to (0, 1) through a logistic curve

    The value is clamped to [min_val, max_val], scaled linearly to [0, 1] and
    squashed with 1 / (1 + exp(-s * (x - 0.5) * 10)).

    Args:
        value: Raw value
        min_val: Lower bound of the input range
        max_val: Upper bound of the input range
        steepness: Logistic steepness
        asymmetric: Steepen the curve by 1.5x below the midpoint so weak
            readings are penalized harder than strong ones are rewarded

    Returns:
        float: Normalized score. A degenerate range gives 0.5 at the point,
        1.0 above it and 0.0 below it.
    """
    if max_val == min_val:
        if value == min_val:
            return 0.5
        return 1.0 if value > max_val else 0.0

    clamped = _clamp(value, min_val, max_val)
    linear = (clamped - min_val) / (max_val - min_val)
    adj_steepness = steepness
    if asymmetric and linear < 0.5:
        adj_steepness *= 1.5
    return 1 / (1 + math.exp(-adj_steepness * (linear - 0.5) * 10))


def normalize_weights(weights: Mapping[str, float]) -> ScoringWeightsDTO:
    """Clamp negatives to 0 and rescale to sum to 1

    An all-zero input becomes the uniform distribution.
    """
    clamped = {k: max(0.0, v) for k, v in weights.items()}
    total = sum(clamped.values())
    if total == 0:
        return {k: 1.0 / len(clamped) for k in clamped}  # type: ignore[return-value]
    return {k: v / total for k, v in clamped.items()}  # type: ignore[return-value]


def get_adjusted_weights(
    volatility_context: Optional[VolatilityContextDTO],
) -> ScoringWeightsDTO:
    """Base weights shifted by the VIX regime

    Stress (VIX above its VIX3M reference, or a >10% one-day spike) moves
    weight into risk, pullback and RS momentum and out of daily performance.
    Complacency (VIX / VIX3M < 0.85) adds weight to strength.
    """
    weights = dict(BASE_WEIGHTS)
    if not volatility_context or volatility_context["price"] <= 0:
        return normalize_weights(weights)

    vix_price = volatility_context["price"]
    reference_price = volatility_context.get("reference_price") or vix_price
    previous_close = volatility_context.get("previous_close") or vix_price

    vv_ratio = vix_price / reference_price if reference_price > 0 else 1.0
    vix_day_change = min(MAX_VIX_SPIKE, (vix_price - previous_close) / previous_close)

    if vv_ratio > VIX_STRESS_RATIO or vix_day_change > VIX_SPIKE_DAY_CHANGE:
        stress = max(vv_ratio, 1 + vix_day_change)
        weights["risk"] += 0.15 * stress
        weights["pullback"] += 0.10
        weights["daily_performance"] -= 0.20
        weights["rs_line_momentum"] += 0.10
    elif vv_ratio < VIX_COMPLACENT_RATIO:
        weights["strength"] += 0.10

    return normalize_weights(weights)


def calculate_slope(current: float, previous: float) -> float:
    """Fractional change from previous to current (0.0 when previous is 0)"""
    if previous == 0:
        return 0.0
    return (current - previous) / previous


def get_pullback_sub_score(distance: float, ideal_max: float, slope: float) -> float:
    """Pullback quality against one EMA

    Args:
        distance: Percent distance of price above the EMA
        ideal_max: Upper edge of the ideal pullback window
        slope: Fractional 5-bar change of the EMA

    Returns:
        float: 1.0 inside [UNDERCUT_TOLERANCE, ideal_max], linear decay above,
        quadratic decay below, times the EMA slope multiplier
    """
    if UNDERCUT_TOLERANCE <= distance <= ideal_max:
        base_score = 1.0
    elif distance > ideal_max:
        excess = distance - ideal_max
        base_score = max(0.0, 1 - excess / (ideal_max * 2))
    else:
        severity = abs(distance - UNDERCUT_TOLERANCE)
        base_score = max(0.0, 1 - severity**2 / 2)

    if slope > 0.005:
        slope_multiplier = 1.2
    elif slope < 0:
        slope_multiplier = 0.5
    elif slope <= 0.001:
        slope_multiplier = 0.8
    else:
        slope_multiplier = 1.0

    return base_score * slope_multiplier


def sanitize_stock_metrics(metrics: StockMetricsDTO) -> StockMetricsDTO:
    """Copy of the metrics with non-finite fields replaced and bounds applied"""
    clean: dict = dict(metrics)

    for field in REQUIRED_FIELDS:
        if not _is_finite(clean.get(field)):
            clean[field] = NEUTRAL_DEFAULTS.get(field, 0.0)

    if clean["atr"] <= 0:
        clean["atr"] = MIN_ATR

    clean["percent_change"] = _clamp(
        clean["percent_change"], MIN_PERCENT_CHANGE, MAX_PERCENT_CHANGE
    )
    clean["ud_ratio"] = _clamp(clean["ud_ratio"], 0.0, MAX_UD_RATIO)
    for field in ("distance_from_ema10", "distance_from_ema20", "distance_from_ema50"):
        clean[field] = _clamp(clean[field], MIN_EMA_DISTANCE, MAX_EMA_DISTANCE)

    if not _is_finite(clean.get("ema200")) or clean["ema200"] <= 0:
        clean.pop("ema200", None)

    return clean  # type: ignore[return-value]


def _risk_score(distances: tuple[float, float, float], bullish: bool) -> float:
    supports = [d for d in distances if d >= 0]
    if supports:
        risk_window = 4.0 if bullish else 3.0
        risk = 1 - sigmoid_normalize(min(supports), 0, risk_window, 1.5)
    else:
        nearest_resistance = max(distances)
        risk = 0.2 * sigmoid_normalize(nearest_resistance, -5, 0, 1.0)
    return _clamp(risk, 0.0, 1.0)


def _price_penalty(price: float) -> float:
    if price >= MIN_PRICE:
        return 1.0
    if price >= PENNY_PRICE:
        return LOW_PRICE_PENALTY_FLOOR + (1 - LOW_PRICE_PENALTY_FLOOR) * (
            (price - PENNY_PRICE) / (MIN_PRICE - PENNY_PRICE)
        )
    return PENNY_PENALTY


def _adr_penalty(percent_adr: float) -> float:
    if percent_adr > ADR_HIGH_THRESHOLD:
        return ADR_HIGH_PENALTY
    if percent_adr < ADR_LOW_THRESHOLD:
        return ADR_LOW_PENALTY
    return 1.0


def calculate_score_breakdown(
    metrics: StockMetricsDTO,
    volatility_context: Optional[VolatilityContextDTO],
    benchmark_change: float,
) -> ScoreBreakdownDTO:
    """Composite score with every sub-score and penalty

    Args:
        metrics: Ticker metrics (sanitized here, the input is not mutated)
        volatility_context: VIX snapshot driving the weight shift
        benchmark_change: Benchmark daily change in percent

    Returns:
        ScoreBreakdownDTO
    """
    stock = sanitize_stock_metrics(metrics)
    weights = get_adjusted_weights(volatility_context)

    # Daily performance, with a bonus for rising on a falling tape
    relative_alpha = stock["percent_change"] - benchmark_change
    daily_performance = sigmoid_normalize(relative_alpha, -3, 3, 2.0, True)
    if benchmark_change < -1.5 and stock["percent_change"] > 0:
        daily_performance = min(1.0, daily_performance + 0.15)

    strength = sigmoid_normalize(stock["rs_rating"], 0.5, 1.5, 2.0, True)
    accumulation = sigmoid_normalize(stock["ud_ratio"], 0.7, 2.5, 1.5, True)

    # Pullback
    raw_pullback = 0.0
    for ema in ("ema10", "ema20", "ema50"):
        slope = calculate_slope(stock[ema], stock[f"{ema}_prev5"])
        sub_score = get_pullback_sub_score(
            stock[f"distance_from_{ema}"], PULLBACK_IDEAL_MAX[ema], slope
        )
        raw_pullback += sub_score * PULLBACK_BLEND[ema]

    bullish = (
        stock["price"] > stock["ema50"]
        and stock["ema10"] > stock["ema20"] > stock["ema50"]
    )
    if "ema200" in stock:
        bullish = bullish and stock["ema50"] > stock["ema200"]

    ema_separation = abs(stock["ema10"] - stock["ema20"]) / stock["atr"]
    coiled = ema_separation < COILED_MAX_SEPARATION_ATR
    bouncing = stock["distance_from_ema10"] >= 0
    rs_slope_pct = stock["rs_line_slope"] * 100
    high_rs = sigmoid_normalize(rs_slope_pct, 0, 15) > 0.8

    if bullish and coiled and bouncing and high_rs:
        raw_pullback += COILED_BONUS
    pullback = _clamp(raw_pullback, 0.0, 1.0)

    risk = _risk_score(
        (
            stock["distance_from_ema10"],
            stock["distance_from_ema20"],
            stock["distance_from_ema50"],
        ),
        bullish,
    )

    # RS momentum, rewarded for diverging from a flat/down benchmark
    rs_multiplier = 1.25 if benchmark_change <= 0 and rs_slope_pct > 0 else 1.0
    rs_line_momentum = min(
        1.0, sigmoid_normalize(rs_slope_pct, 0, 15, 1.0) * rs_multiplier
    )

    composite = (
        daily_performance * weights["daily_performance"]
        + strength * weights["strength"]
        + accumulation * weights["accumulation"]
        + pullback * weights["pullback"]
        + risk * weights["risk"]
        + rs_line_momentum * weights["rs_line_momentum"]
    )

    adr_penalty = _adr_penalty(stock["percent_adr"])
    price_penalty = _price_penalty(stock["price"])
    final = _clamp(composite * adr_penalty * price_penalty, 0.0, 1.0)

    return {
        "score": int(math.floor(final * 100 + 0.5)),
        "composite": composite,
        "daily_performance": daily_performance,
        "strength": strength,
        "accumulation": accumulation,
        "pullback": pullback,
        "risk": risk,
        "rs_line_momentum": rs_line_momentum,
        "weights": weights,
        "adr_penalty": adr_penalty,
        "price_penalty": price_penalty,
        "is_bullish_stack": bullish,
        "is_coiled": coiled,
    }


def calculate_score(
    metrics: StockMetricsDTO,
    volatility_context: Optional[VolatilityContextDTO],
    benchmark_change: float,
) -> int:
    """Composite quality score in [0, 100]"""
    return calculate_score_breakdown(metrics, volatility_context, benchmark_change)[
        "score"
    ]
