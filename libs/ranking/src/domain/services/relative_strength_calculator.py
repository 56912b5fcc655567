"""Relative Strength Calculator

Ticker-vs-benchmark strength over 3/6/9/12-month horizons (IBD style, 3M
weighted double) plus the RS line (ticker close / benchmark close).
"""

from collections.abc import Mapping
from typing import Sequence

import numpy as np

from libs.shared.src.constants.rolling_windows import (
    RS_HORIZON_WEIGHTS,
    RS_HORIZONS,
    RS_LINE_SLOPE_LOOKBACK,
)
from libs.shared.src.dtos.market.market_context_dto import (
    BenchmarkPerformanceDTO,
    MarketContextDTO,
)
from libs.shared.src.dtos.market.ohlcv_dto import DailyOhlcvDTO
from libs.shared.src.dtos.ranking.relative_strength_dto import RelativeStrengthDTO

MAX_RS_RATING = 3.0
NEUTRAL_RS_RATING = 1.0


def calculate_period_performance(closes: Sequence[float], days: int) -> float:
    """Percent change of the last close vs the close `days` bars earlier

    Returns 0.0 when the history is not longer than `days`.
    """
    if len(closes) <= days:
        return 0.0
    old = closes[-1 - days]
    if old == 0:
        return 0.0
    return (closes[-1] - old) / old * 100


def calculate_horizon_performance(closes: Sequence[float]) -> BenchmarkPerformanceDTO:
    """Percent performance over each RS horizon"""
    p3, p6, p9, p12 = (calculate_period_performance(closes, d) for d in RS_HORIZONS)
    return {
        "performance_3m": p3,
        "performance_6m": p6,
        "performance_9m": p9,
        "performance_12m": p12,
    }


def calculate_weighted_relative_performance(
    performance: BenchmarkPerformanceDTO,
) -> float:
    """Weighted sum of (1 + pct / 100) across the horizons"""
    relatives = (
        1 + performance["performance_3m"] / 100,
        1 + performance["performance_6m"] / 100,
        1 + performance["performance_9m"] / 100,
        1 + performance["performance_12m"] / 100,
    )
    return sum(r * w for r, w in zip(relatives, RS_HORIZON_WEIGHTS))


def calculate_rs_rating(
    stock_performance: BenchmarkPerformanceDTO,
    benchmark_performance: BenchmarkPerformanceDTO,
) -> float:
    """RS rating = ticker weighted performance / benchmark weighted performance

    Clamped to [0, 3]. A non-positive benchmark denominator would invert the
    sign, so the rating is neutral (1.0) in that case.
    """
    stock_weighted = calculate_weighted_relative_performance(stock_performance)
    benchmark_weighted = calculate_weighted_relative_performance(benchmark_performance)

    if benchmark_weighted <= 0:
        return NEUTRAL_RS_RATING
    rating = stock_weighted / benchmark_weighted
    return max(0.0, min(MAX_RS_RATING, rating))


def calculate_raw_rs_score(closes: Sequence[float]) -> float:
    """Weighted raw fractional performance (no benchmark)"""
    return sum(
        calculate_period_performance(closes, d) / 100 * w
        for d, w in zip(RS_HORIZONS, RS_HORIZON_WEIGHTS)
    )


def build_rs_line(
    quotes: Sequence[DailyOhlcvDTO],
    benchmark_close_by_date: Mapping[str, float],
) -> np.ndarray:
    """Daily ticker close / benchmark close on dates both have"""
    points = []
    for quote in quotes:
        benchmark_close = benchmark_close_by_date.get(quote["date"])
        if benchmark_close:
            points.append(quote["close"] / benchmark_close)
    return np.asarray(points, dtype=float)


def calculate_rs_line_slope(
    rs_line: np.ndarray, lookback: int = RS_LINE_SLOPE_LOOKBACK
) -> float:
    """Fractional change of the RS line vs the point `lookback` entries back"""
    if len(rs_line) < lookback or rs_line[-lookback] == 0:
        return 0.0
    return float((rs_line[-1] - rs_line[-lookback]) / rs_line[-lookback])


def calculate_rs_one_day_change(rs_line: np.ndarray) -> float:
    """Fractional one-point change of the RS line"""
    if len(rs_line) < 2 or rs_line[-2] == 0:
        return 0.0
    return float((rs_line[-1] - rs_line[-2]) / rs_line[-2])


def calculate_benchmark_change(benchmark_quotes: Sequence[DailyOhlcvDTO]) -> float:
    """Benchmark's latest daily change in percent (0.0 with two quotes or fewer)"""
    if len(benchmark_quotes) <= 2:
        return 0.0
    last = benchmark_quotes[-1]["close"]
    prev = benchmark_quotes[-2]["close"]
    if not prev:
        return 0.0
    return (last - prev) / prev * 100


def calculate_relative_strength(
    quotes: Sequence[DailyOhlcvDTO],
    context: MarketContextDTO,
) -> RelativeStrengthDTO:
    """Relative strength of a ticker against the context's benchmark

    Args:
        quotes: Ticker daily quotes, oldest first
        context: Market context snapshot (may be the fallback context)

    Returns:
        RelativeStrengthDTO
    """
    closes = [q["close"] for q in quotes]

    rs_rating = calculate_rs_rating(
        calculate_horizon_performance(closes), context["benchmark_performance"]
    )
    rs_line = build_rs_line(quotes, context["benchmark_close_by_date"])

    return {
        "rs_rating": rs_rating,
        "rs_line_slope": calculate_rs_line_slope(rs_line),
        "rs_one_day_change": calculate_rs_one_day_change(rs_line),
        "raw_rs_score": calculate_raw_rs_score(closes),
        "benchmark_change_pct": calculate_benchmark_change(context["benchmark_quotes"]),
    }
