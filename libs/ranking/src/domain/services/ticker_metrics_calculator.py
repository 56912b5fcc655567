"""Ticker Metrics Calculator

Per-ticker pipeline: indicator series -> squeeze -> relative strength ->
composite score and intraday prediction, merged into one ranking row.
"""

from typing import Optional, Sequence

import numpy as np

from libs.ranking.src.domain.services.intraday_predictor import (
    get_projected_relative_volume,
    predict,
)
from libs.ranking.src.domain.services.quant_scorer import calculate_score
from libs.ranking.src.domain.services.relative_strength_calculator import (
    calculate_relative_strength,
)
from libs.ranking.src.domain.services.series_statistics import (
    average_true_range,
    exponential_moving_average,
    last_defined,
    mean,
    percent_adr,
    std,
    up_down_volume_ratio,
)
from libs.ranking.src.domain.services.squeeze_classifier import (
    calculate_squeeze_status,
)
from libs.shared.src.constants.rolling_windows import (
    ADR_WINDOW,
    ATR_PERIOD,
    AVG_VOLUME_WINDOW,
    EMA_PERIODS,
    EMA_SLOPE_LOOKBACK,
    MIN_QUOTES_FOR_METRICS,
    UD_VOLUME_WINDOW,
)
from libs.shared.src.dtos.market.market_context_dto import MarketContextDTO
from libs.shared.src.dtos.market.ohlcv_dto import DailyOhlcvDTO
from libs.shared.src.dtos.ranking.predictor_dto import PredictorInputDTO
from libs.shared.src.dtos.ranking.ranked_result_dto import RankedResultDTO
from libs.shared.src.dtos.ranking.stock_metrics_dto import StockMetricsDTO
from libs.shared.src.enums.atr_smoothing import AtrSmoothing
from libs.shared.src.enums.ema_seed_mode import EmaSeedMode

# ATR substitute when the series is undefined or zero
DEFAULT_ATR = 0.01


def _ema_with_prior(closes: np.ndarray, period: int) -> tuple[float, float]:
    """Latest first-value-seeded EMA and its value EMA_SLOPE_LOOKBACK bars earlier"""
    series = exponential_moving_average(closes, period, EmaSeedMode.FIRST_VALUE)
    current = float(series[-1])
    prior_idx = -1 - EMA_SLOPE_LOOKBACK
    prior = float(series[prior_idx]) if len(series) > EMA_SLOPE_LOOKBACK else 0.0
    return current, (prior or current)


def _percent_distance(price: float, ema: float) -> float:
    return (price - ema) / ema * 100 if ema else 0.0


def calculate_metrics(
    ticker: str,
    quotes: Sequence[DailyOhlcvDTO],
    context: MarketContextDTO,
    minutes_since_open: float,
) -> Optional[RankedResultDTO]:
    """Score and predict one ticker

    Args:
        ticker: Ticker symbol
        quotes: Daily quotes, oldest first; the last bar is today
        context: Market context snapshot for this run
        minutes_since_open: Session progress (390 when closed)

    Returns:
        RankedResultDTO, or None when there are fewer than 50 quotes
    """
    if len(quotes) < MIN_QUOTES_FOR_METRICS:
        return None

    closes = np.array([q["close"] for q in quotes], dtype=float)
    highs = np.array([q["high"] for q in quotes], dtype=float)
    lows = np.array([q["low"] for q in quotes], dtype=float)
    volumes = np.array([q["volume"] for q in quotes], dtype=float)
    today = quotes[-1]

    current_price = float(closes[-1])
    prev_close = float(closes[-2])
    open_price = float(today["open"])

    (
        (ema10, ema10_prev5),
        (ema20, ema20_prev5),
        (ema50, ema50_prev5),
        (ema200, _),
    ) = (_ema_with_prior(closes, period) for period in EMA_PERIODS)

    atrs = average_true_range(
        highs, lows, closes, ATR_PERIOD, AtrSmoothing.ROLLING_MEAN
    )
    atr = last_defined(atrs) or DEFAULT_ATR
    adr = percent_adr(highs, lows, ADR_WINDOW)

    squeeze_status = calculate_squeeze_status(highs, lows, closes)
    relative_strength = calculate_relative_strength(quotes, context)
    ud_ratio = up_down_volume_ratio(closes, volumes, UD_VOLUME_WINDOW)

    relative_volume = get_projected_relative_volume(
        float(volumes[-1]), mean(volumes[-AVG_VOLUME_WINDOW:]), minutes_since_open
    )
    percent_change = (current_price - prev_close) / prev_close * 100
    gap_percent = (open_price - prev_close) / prev_close * 100
    roc = percent_change / minutes_since_open if minutes_since_open > 0 else 0.0

    recent_atrs = atrs[-ATR_PERIOD:]
    recent_atrs = recent_atrs[~np.isnan(recent_atrs)]

    volatility = context["volatility_context"]
    vix_pct_change = 0.0
    if volatility["previous_close"]:
        vix_pct_change = (
            (volatility["price"] - volatility["previous_close"])
            / volatility["previous_close"]
            * 100
        )

    predictor_inputs: PredictorInputDTO = {
        "open_price": open_price,
        "current_price": current_price,
        "prev_close": prev_close,
        "vwap": current_price,  # no intraday VWAP in daily bars
        "relative_volume": relative_volume,
        "percent_adr": adr,
        "minutes_since_open": minutes_since_open,
        "roc": roc,
        "gap_percent": gap_percent,
        "atr14": atr,
        "atr14_mean": mean(recent_atrs),
        "atr14_std": std(recent_atrs),
        "vix_level": volatility["price"],
        "vix_pct_change": vix_pct_change,
        "today_high": float(today["high"]),
        "today_low": float(today["low"]),
    }
    prediction = predict(predictor_inputs)

    stock: StockMetricsDTO = {
        "price": current_price,
        "high": float(today["high"]),
        "low": float(today["low"]),
        "percent_change": percent_change,
        "rs_rating": relative_strength["rs_rating"],
        "ud_ratio": ud_ratio,
        "percent_adr": adr,
        "atr": atr,
        "distance_from_ema10": _percent_distance(current_price, ema10),
        "distance_from_ema20": _percent_distance(current_price, ema20),
        "distance_from_ema50": _percent_distance(current_price, ema50),
        "ema10": ema10,
        "ema20": ema20,
        "ema50": ema50,
        "ema200": ema200,
        "ema10_prev5": ema10_prev5,
        "ema20_prev5": ema20_prev5,
        "ema50_prev5": ema50_prev5,
        "rs_line_slope": relative_strength["rs_line_slope"],
    }
    quant_score = calculate_score(
        stock, volatility, relative_strength["benchmark_change_pct"]
    )

    return {
        "quant_score": quant_score,
        "ticker": ticker,
        "price": round(current_price, 2),
        "percent_change": round(percent_change, 2),
        "relative_volume": round(relative_volume, 2),
        "predicted_change_pct": prediction["predicted_eod_change_pct"],
        "predicted_lower_pct": prediction["lower_bound_pct"],
        "predicted_upper_pct": prediction["upper_bound_pct"],
        "prediction_confidence": prediction["confidence_level"],
        "prediction_regime": prediction["regime"],
        "rs_one_day_change_pct": round(relative_strength["rs_one_day_change"] * 100, 2),
        "ud_ratio": round(ud_ratio, 2),
        "squeeze_status": squeeze_status.value,
        "atr": round(atr, 2),
        "percent_adr": round(adr, 2),
        "ema10_distance_atr": round((current_price - ema10) / atr, 2),
        "ema20_distance_atr": round((current_price - ema20) / atr, 2),
        "ema50_distance_atr": round((current_price - ema50) / atr, 2),
        "rs_rating": round(relative_strength["rs_rating"], 3),
    }
