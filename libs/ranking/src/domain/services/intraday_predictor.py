"""Intraday EOD Predictor

Projects a ticker's end-of-day return (on the previous close) from intraday
price and volume action, with a confidence band.

States:
- invalid_input: required prices non-finite or non-positive, all zeros
- closed: session over, the realized return is the point prediction
- predicting: regime label (low_vol / normal_vol / high_vol / unknown),
  suffixed with _failed_gap_up / _failed_gap_down when a gap reversed
"""

import math
from typing import NamedTuple, Optional

from libs.shared.src.constants.predictor_params import (
    ADR_CAP_MULTIPLE,
    ATR_WEIGHT,
    ATR_ZSCORE_CAP,
    BASE_CONFIDENCE,
    CONFIDENCE_BOUNDS,
    EXTREME_VOLATILITY_THRESHOLD,
    FAILED_GAP_MINUTES,
    GAP_PERCENT_BOUNDS,
    HIGH_RELATIVE_VOLUME,
    HOLD_CHECK_GAP_PCT,
    HOLD_FACTOR_DECAY,
    HOLD_FACTOR_FLOOR,
    HOLD_THRESHOLD,
    INTRADAY_TANH_SCALE,
    LATE_DAY_FRACTION,
    MAX_VOLUME_BOOST,
    MOMENTUM_STRONG_ROC,
    PERF_BIAS_STRONG,
    PERF_BIAS_WEAK,
    RELATIVE_VOLUME_BOUNDS,
    ROC_BOUNDS,
    SIGNIFICANT_GAP_PCT,
    TIME_DECAY_ALPHA,
    TOTAL_TRADING_MINUTES,
    VIX_PCT_CHANGE_BOUNDS,
    VM_CEIL,
    VM_FLOOR,
    VOLUME_BOOST_RELATIVE_VOLUME,
)
from libs.shared.src.constants.vix_thresholds import (
    VIX_CALM_CONFIDENCE_MAX,
    VIX_HIGH_VOL_MIN,
    VIX_LOW_VOL_MAX,
)
from libs.shared.src.constants.volume_profile import (
    BUCKET_MINUTES,
    CUMULATIVE_VOLUME_PROFILE,
    ONE_MINUTE_BUCKETS,
)
from libs.shared.src.dtos.ranking.predictor_dto import (
    PredictorInputDTO,
    PredictorOutputDTO,
    ProjectedRangeDTO,
)
from libs.shared.src.enums.session_phase import SessionPhase
from libs.shared.src.enums.vix_regime import VixRegime


class SignalWeights(NamedTuple):
    open: float
    vwap: float
    roc: float


class VolatilityRegime(NamedTuple):
    regime: VixRegime
    multiplier: float
    volatility_regime: str  # normal / elevated / extreme (ATR z-score)


class ProjectedRange(NamedTuple):
    projected_range: float
    atr_z_score: Optional[float]
    breakdown: ProjectedRangeDTO


# VIX band -> (base multiplier, divisor applied to the VIX % change)
VIX_REGIME_MULTIPLIERS: dict[VixRegime, tuple[float, Optional[float]]] = {
    VixRegime.LOW_VOL: (1.2, 200.0),
    VixRegime.NORMAL_VOL: (1.0, 150.0),
    VixRegime.HIGH_VOL: (0.8, 100.0),
    VixRegime.UNKNOWN: (1.0, None),
}

# |ATR z| above threshold -> (label, adjustment when z > 0, when z < 0)
ATR_Z_ADJUSTMENTS = (
    (2.0, "extreme", 0.7, 1.3),
    (1.0, "elevated", 0.85, 1.15),
)

# (session phase, significant gap, high volume) -> signal weights
ADAPTIVE_WEIGHTS: dict[tuple[SessionPhase, bool, bool], SignalWeights] = {
    (SessionPhase.EARLY, True, True): SignalWeights(0.5, 0.2, 0.3),
    (SessionPhase.EARLY, True, False): SignalWeights(0.6, 0.2, 0.2),
    (SessionPhase.EARLY, False, True): SignalWeights(0.4, 0.4, 0.2),
    (SessionPhase.EARLY, False, False): SignalWeights(0.4, 0.4, 0.2),
    (SessionPhase.MIDDAY, True, True): SignalWeights(0.3, 0.5, 0.2),
    (SessionPhase.MIDDAY, False, True): SignalWeights(0.3, 0.5, 0.2),
    (SessionPhase.MIDDAY, True, False): SignalWeights(0.4, 0.4, 0.2),
    (SessionPhase.MIDDAY, False, False): SignalWeights(0.4, 0.4, 0.2),
    (SessionPhase.LATE, True, True): SignalWeights(0.5, 0.4, 0.1),
    (SessionPhase.LATE, True, False): SignalWeights(0.5, 0.4, 0.1),
    (SessionPhase.LATE, False, True): SignalWeights(0.5, 0.4, 0.1),
    (SessionPhase.LATE, False, False): SignalWeights(0.5, 0.4, 0.1),
}


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _is_finite(value) -> bool:
    if value is None:
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def _sign(x: float) -> int:
    return (x > 0) - (x < 0)


def _pct(fraction: float) -> float:
    return round(fraction * 100, 2)


def get_projected_relative_volume(
    current_volume: float, avg_volume: float, minutes_since_open: float
) -> float:
    """Full-day relative volume projected from volume so far

    Volume so far is divided by the share of a typical day's volume traded by
    this minute (U-shaped cumulative profile) and compared to the average.

    Args:
        current_volume: Volume traded today so far
        avg_volume: Average daily volume
        minutes_since_open: Minutes since the regular-session open

    Returns:
        float: Projected relative volume, 0.0 without an average
    """
    if avg_volume == 0:
        return 0.0
    if minutes_since_open >= TOTAL_TRADING_MINUTES:
        return current_volume / avg_volume

    if minutes_since_open < ONE_MINUTE_BUCKETS:
        idx = min(ONE_MINUTE_BUCKETS - 1, max(0, math.floor(minutes_since_open)))
    else:
        idx = ONE_MINUTE_BUCKETS + math.floor(
            (minutes_since_open - ONE_MINUTE_BUCKETS) / BUCKET_MINUTES
        )
    percent_complete = CUMULATIVE_VOLUME_PROFILE[
        min(len(CUMULATIVE_VOLUME_PROFILE) - 1, idx)
    ]
    percent_complete = _clamp(percent_complete, 0.001, 1.0)

    projected_volume = current_volume / percent_complete
    return max(0.0, projected_volume / avg_volume)


def classify_vix_level(vix_level: Optional[float]) -> VixRegime:
    if vix_level is None:
        return VixRegime.UNKNOWN
    if vix_level < VIX_LOW_VOL_MAX:
        return VixRegime.LOW_VOL
    if vix_level > VIX_HIGH_VOL_MIN:
        return VixRegime.HIGH_VOL
    return VixRegime.NORMAL_VOL


def get_volatility_regime(
    vix_level: Optional[float],
    vix_change: float,
    atr_z_score: Optional[float],
) -> VolatilityRegime:
    """Volatility regime multiplier from VIX level/change and ATR z-score

    Args:
        vix_level: VIX level (None when unavailable)
        vix_change: VIX one-day change in percent
        atr_z_score: ATR z-score (None when not computable)

    Returns:
        VolatilityRegime: VIX regime, multiplier clamped to [0.5, 1.5] and the
        ATR-based volatility label
    """
    regime = classify_vix_level(vix_level)
    base, divisor = VIX_REGIME_MULTIPLIERS[regime]
    base_multiplier = base - vix_change / divisor if divisor else base

    volatility_regime = "normal"
    atr_adjustment = 1.0
    if atr_z_score is not None:
        for threshold, label, up_adj, down_adj in ATR_Z_ADJUSTMENTS:
            if abs(atr_z_score) > threshold:
                volatility_regime = label
                atr_adjustment = up_adj if atr_z_score > 0 else down_adj
                break

    return VolatilityRegime(
        regime, _clamp(base_multiplier * atr_adjustment, 0.5, 1.5), volatility_regime
    )


def calculate_projected_range(
    percent_adr: float,
    atr14: Optional[float],
    atr14_mean: Optional[float],
    atr14_std: Optional[float],
    current_price: float,
    volume_multiplier: float,
    gap_percent: float,
) -> ProjectedRange:
    """Projected total-day range as a fraction of price

    Blends an ATR-derived range (70%) with %ADR (30%) when the ATR z-score is
    computable, else uses %ADR alone; scaled by volume, floored at the gap and
    clamped to [0.3, 12] x ADR.
    """
    adr_frac = percent_adr / 100
    atr_z_score = None
    atr_based_range = 0.0

    if all(_is_finite(v) for v in (atr14, atr14_mean, atr14_std)) and atr14_std > 0:
        atr_z_score = _clamp((atr14 - atr14_mean) / atr14_std, -3, 3)
        atr_percent = atr14 / current_price
        volatility_scaler = _clamp(1 + atr_z_score * 0.2, 0.6, 1.6)
        atr_based_range = atr_percent * volatility_scaler

    if atr_based_range > 0:
        base_range = atr_based_range * ATR_WEIGHT + adr_frac * (1 - ATR_WEIGHT)
        base_range = max(base_range, adr_frac * 0.5)
    else:
        base_range = adr_frac
        atr_based_range = adr_frac

    volume_adjusted = base_range * volume_multiplier
    gap_adjusted = max(volume_adjusted, abs(gap_percent / 100))
    final_projected = _clamp(gap_adjusted, adr_frac * 0.3, adr_frac * 12)

    return ProjectedRange(
        final_projected,
        atr_z_score,
        {
            "adr_component": adr_frac,
            "atr_component": atr_based_range,
            "final_projected": final_projected,
        },
    )


def get_session_phase(minutes_since_open: float) -> SessionPhase:
    progress = _clamp(minutes_since_open / TOTAL_TRADING_MINUTES, 0, 1)
    if progress < 0.3:
        return SessionPhase.EARLY
    if progress < 0.7:
        return SessionPhase.MIDDAY
    return SessionPhase.LATE


def get_adaptive_weights(
    gap_percent: float, relative_volume: float, minutes_since_open: float
) -> SignalWeights:
    """Open / VWAP / ROC signal weights for the session phase"""
    key = (
        get_session_phase(minutes_since_open),
        abs(gap_percent) > SIGNIFICANT_GAP_PCT,
        relative_volume > HIGH_RELATIVE_VOLUME,
    )
    return ADAPTIVE_WEIGHTS[key]


def calculate_hold_factor(
    gap_percent: float, price_vs_open: float, price_vs_vwap: Optional[float]
) -> float:
    """How well a gap is holding (1.0 holding, decays to 0.2 when fading)

    Gaps under 1% always hold. The weaker of open/VWAP in the gap direction
    is compared against a small tolerance.
    """
    if abs(gap_percent) < HOLD_CHECK_GAP_PCT:
        return 1.0

    gap_direction = _sign(gap_percent)
    vs_level = price_vs_open
    if price_vs_vwap is not None:
        if gap_direction > 0:
            vs_level = min(price_vs_open, price_vs_vwap)
        else:
            vs_level = max(price_vs_open, price_vs_vwap)

    if gap_direction > 0:
        holding = vs_level >= -HOLD_THRESHOLD
    else:
        holding = vs_level <= HOLD_THRESHOLD
    if holding:
        return 1.0

    gap_frac = abs(gap_percent / 100)
    deterioration = abs(vs_level) / (gap_frac + 1e-6)
    return max(HOLD_FACTOR_FLOOR, 1 - deterioration * HOLD_FACTOR_DECAY)


def _invalid_output() -> PredictorOutputDTO:
    return {
        "predicted_eod_change_pct": 0.0,
        "lower_bound_pct": 0.0,
        "upper_bound_pct": 0.0,
        "confidence_level": 0.0,
        "regime": "invalid_input",
        "atr_z_score": None,
    }


def predict(inputs: PredictorInputDTO) -> PredictorOutputDTO:
    """Predict the end-of-day change with a confidence band

    Args:
        inputs: Intraday observables; open_price, current_price, prev_close
            and percent_adr are required and must be positive

    Returns:
        PredictorOutputDTO: Percentages on the previous close, 2 d.p.
    """
    open_price = inputs.get("open_price")
    current_price = inputs.get("current_price")
    prev_close = inputs.get("prev_close")
    percent_adr = inputs.get("percent_adr")

    required = (open_price, current_price, prev_close, percent_adr)
    if not all(_is_finite(v) for v in required) or min(required) <= 0:
        return _invalid_output()

    relative_volume = inputs.get("relative_volume")
    roc = inputs.get("roc")
    gap_percent = inputs.get("gap_percent")
    vix_level = inputs.get("vix_level")
    vix_pct_change = inputs.get("vix_pct_change")
    minutes_since_open = inputs.get("minutes_since_open")
    today_high = inputs.get("today_high")
    today_low = inputs.get("today_low")
    vwap = inputs.get("vwap")

    rel_vol = _clamp(
        relative_volume if _is_finite(relative_volume) else 1.0, *RELATIVE_VOLUME_BOUNDS
    )
    roc = _clamp(roc if _is_finite(roc) else 0.0, *ROC_BOUNDS)
    vix_level = vix_level if _is_finite(vix_level) else None
    vix_change = _clamp(
        vix_pct_change if _is_finite(vix_pct_change) else 0.0, *VIX_PCT_CHANGE_BOUNDS
    )
    minutes = _clamp(
        minutes_since_open if _is_finite(minutes_since_open) else 0.0,
        0,
        TOTAL_TRADING_MINUTES,
    )

    # A zero supplied gap with a real computed gap is an upstream default
    computed_gap = _clamp((open_price - prev_close) / prev_close * 100, *GAP_PERCENT_BOUNDS)
    gap = computed_gap
    if _is_finite(gap_percent):
        supplied_gap = _clamp(gap_percent, *GAP_PERCENT_BOUNDS)
        if not (supplied_gap == 0 and abs(computed_gap) > 0.01):
            gap = supplied_gap
    gap_direction = _sign(gap)

    if minutes >= TOTAL_TRADING_MINUTES:
        final_change = _pct((current_price - prev_close) / prev_close)
        return {
            "predicted_eod_change_pct": final_change,
            "lower_bound_pct": final_change,
            "upper_bound_pct": final_change,
            "confidence_level": 1.0,
            "regime": "closed",
            "atr_z_score": None,
        }

    return_so_far = (current_price - prev_close) / prev_close
    if _is_finite(today_high) and _is_finite(today_low) and today_high > 0 and today_low > 0:
        realized_range = max(0.0, today_high - today_low) / prev_close
    else:
        realized_range = abs(return_so_far)

    remaining_fraction = _clamp(
        (TOTAL_TRADING_MINUTES - minutes) / TOTAL_TRADING_MINUTES, 0, 1
    )
    volume_multiplier = _clamp(1 + math.log(max(0.1, rel_vol)), VM_FLOOR, VM_CEIL)

    range_calculation = calculate_projected_range(
        percent_adr,
        inputs.get("atr14"),
        inputs.get("atr14_mean"),
        inputs.get("atr14_std"),
        current_price,
        volume_multiplier,
        gap,
    )
    projected_range = range_calculation.projected_range
    atr_z_score = range_calculation.atr_z_score
    atr_z = (
        _clamp(atr_z_score, -ATR_ZSCORE_CAP, ATR_ZSCORE_CAP)
        if atr_z_score is not None
        else None
    )

    price_vs_open = (current_price - open_price) / open_price
    price_vs_vwap = (
        (current_price - vwap) / vwap if _is_finite(vwap) and vwap > 0 else None
    )

    weights = get_adaptive_weights(gap, rel_vol, minutes)

    # Intraday raw signal
    roc_cumulative = roc * max(1.0, minutes)
    is_high_volume = rel_vol > HIGH_RELATIVE_VOLUME
    is_small_gap = abs(gap) < SIGNIFICANT_GAP_PCT
    roc_influence = roc_cumulative if (is_small_gap or is_high_volume) else roc_cumulative * 0.25
    roc_signal = math.tanh(_clamp(roc_influence, -10, 10))

    performance_score = 0.0
    if price_vs_vwap is not None:
        below_vwap = price_vs_vwap < 0
        below_open = price_vs_open < 0
        if below_vwap and below_open:
            performance_score -= PERF_BIAS_WEAK
            if roc <= 0:
                performance_score -= PERF_BIAS_WEAK
        elif not below_vwap and not below_open:
            performance_score += PERF_BIAS_STRONG
            if roc >= 0:
                performance_score += PERF_BIAS_STRONG
        intraday_raw = (
            price_vs_open * weights.open
            + price_vs_vwap * weights.vwap
            + roc_signal * weights.roc
            + performance_score
        )
    else:
        total = weights.open + weights.roc
        intraday_raw = (
            price_vs_open * (weights.open / total)
            + roc_signal * (weights.roc / total)
            + performance_score
        )

    regime = get_volatility_regime(vix_level, vix_change, atr_z)
    hold_factor = calculate_hold_factor(gap, price_vs_open, price_vs_vwap)

    # Momentum boost, net of the ROC weight already in the raw signal
    gap_aligned = _sign(roc) == gap_direction
    momentum_strength = _clamp(abs(roc) / max(1e-6, MOMENTUM_STRONG_ROC), 0, 1)
    time_factor = 0.5 + 0.5 * remaining_fraction
    base_boost = (0.2 if gap_aligned else 0.1) * momentum_strength * time_factor
    momentum_boost = 1 + base_boost * (1 - weights.roc)

    intraday_score = (
        math.tanh(intraday_raw * INTRADAY_TANH_SCALE) * hold_factor * regime.multiplier
    )
    adjusted_intraday_score = intraday_score * momentum_boost

    time_decay = remaining_fraction**TIME_DECAY_ALPHA
    if rel_vol > VOLUME_BOOST_RELATIVE_VOLUME:
        boost = min(MAX_VOLUME_BOOST, math.log10(rel_vol / VOLUME_BOOST_RELATIVE_VOLUME) * 0.2)
        time_decay *= 1 + max(0.0, boost)

    remaining_potential = max(0.0, projected_range - realized_range)
    directional_move = remaining_potential * adjusted_intraday_score * time_decay
    predicted = return_so_far + directional_move

    # Failed gap: significant gap on high volume that crossed back through VWAP
    has_crossed_against = price_vs_vwap is not None and gap_direction * price_vs_vwap < 0
    is_failed_gap = (
        abs(gap) > SIGNIFICANT_GAP_PCT
        and is_high_volume
        and has_crossed_against
        and minutes > FAILED_GAP_MINUTES
    )
    regime_suffix = ""
    if is_failed_gap:
        regime_suffix = "_failed_gap_up" if gap_direction > 0 else "_failed_gap_down"

    adr_frac = percent_adr / 100
    base_cap = max(abs(gap / 100), adr_frac * ADR_CAP_MULTIPLE)
    if atr_z is not None and abs(atr_z) > EXTREME_VOLATILITY_THRESHOLD:
        extreme_multiplier = 1 + (abs(atr_z) - EXTREME_VOLATILITY_THRESHOLD) * 0.25
        base_cap *= min(extreme_multiplier, 2.5)
    cap = _clamp(base_cap, adr_frac * 0.3, adr_frac * 12)

    buffer = adr_frac * (0.05 + min(0.1, 0.05 * rel_vol / 2))
    if atr_z is not None and abs(atr_z) > 1:
        buffer *= 1 + abs(atr_z) * 0.1
    buffer *= 1 + 0.5 * momentum_strength * time_factor * (1 if gap_aligned else 0.5)

    late_day = remaining_fraction < LATE_DAY_FRACTION
    strong_trend = (
        gap_aligned
        and not has_crossed_against
        and momentum_strength > 0.3
        and adjusted_intraday_score > 0.3
        and projected_range - realized_range > 0.0
        and abs(price_vs_open) > 0.01
    )

    safe_high = today_high if _is_finite(today_high) else 0.0
    safe_low = today_low if _is_finite(today_low) else 0.0

    should_cap_up = gap_direction > 0 and safe_high > 0 and (not strong_trend or late_day)
    should_cap_down = gap_direction < 0 and safe_low > 0 and (not strong_trend or late_day)
    if is_failed_gap:
        if gap_direction > 0:
            should_cap_up = True
        else:
            should_cap_down = True

    high_cap = (safe_high * (1 + buffer) - prev_close) / prev_close
    low_cap = (safe_low * (1 - buffer) - prev_close) / prev_close
    if should_cap_up:
        predicted = min(predicted, high_cap)
    if should_cap_down:
        predicted = max(predicted, low_cap)
    predicted = _clamp(predicted, -cap, cap)

    # Confidence and interval
    base_interval = projected_range * 0.4
    confidence = BASE_CONFIDENCE
    if atr_z is not None and abs(atr_z) > 2:
        confidence -= 0.2
        base_interval *= 1.5 + (abs(atr_z) - 2) * 0.3
    elif atr_z is not None:
        base_interval *= 1.0 + abs(atr_z) * 0.2
    if rel_vol > 5 or rel_vol < 0.5:
        confidence -= 0.1
    if vix_level is not None and vix_level > VIX_HIGH_VOL_MIN:
        confidence -= 0.1
    if is_failed_gap:
        confidence -= 0.15
    if rel_vol < 0.5 and (atr_z is None or abs(atr_z) < 1):
        confidence -= 0.05
    if (
        gap_aligned
        and not has_crossed_against
        and momentum_strength > 0.3
        and (vix_level is None or vix_level < VIX_CALM_CONFIDENCE_MAX)
        and (atr_z is None or abs(atr_z) < 1)
    ):
        confidence += 0.03
    confidence = _clamp(confidence, *CONFIDENCE_BOUNDS)

    volume_uncertainty = 1.3 if rel_vol > 5 else (1.4 if rel_vol < 0.5 else 1.0)
    interval = base_interval * regime.multiplier * volume_uncertainty
    interval = max(interval, adr_frac * 0.05)

    lower = _clamp(predicted - interval, -cap, cap)
    upper = _clamp(predicted + interval, -cap, cap)
    if should_cap_up:
        upper = min(upper, high_cap)
    if should_cap_down:
        lower = max(lower, low_cap)

    # The band always contains the point prediction
    lower = min(lower, predicted)
    upper = max(upper, predicted)

    return {
        "predicted_eod_change_pct": _pct(predicted),
        "lower_bound_pct": _pct(lower),
        "upper_bound_pct": _pct(upper),
        "confidence_level": round(confidence, 2),
        "regime": regime.regime.value + regime_suffix,
        "atr_z_score": atr_z_score,
        "volatility_regime": regime.volatility_regime,
        "projected_range_breakdown": range_calculation.breakdown,
    }
