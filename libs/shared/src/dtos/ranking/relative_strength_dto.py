"""Relative Strength DTO"""

from typing import TypedDict


class RelativeStrengthDTO(TypedDict):
    """Ticker-vs-benchmark relative strength"""

    rs_rating: float  # weighted relative performance ratio, [0, 3]
    rs_line_slope: float  # fraction, vs 21 points back
    rs_one_day_change: float  # fraction
    raw_rs_score: float  # IBD-style weighted raw performance
    benchmark_change_pct: float  # benchmark's latest daily change, percent
