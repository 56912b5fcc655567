"""Intraday Predictor DTOs"""

from typing import NotRequired, TypedDict


class PredictorInputDTO(TypedDict, total=False):
    """Raw intraday observables for one ticker

    Prices in currency units; percentages in percent (2.0 = 2%).
    `roc` is percent change per minute since the open.
    """

    open_price: float
    current_price: float
    prev_close: float
    vwap: float
    relative_volume: float
    percent_adr: float
    minutes_since_open: float
    roc: float
    gap_percent: float
    atr14: float
    atr14_mean: float
    atr14_std: float
    vix_level: float
    vix_pct_change: float
    today_high: float
    today_low: float


class ProjectedRangeDTO(TypedDict):
    """Projected total-day range components (fractions of price)"""

    adr_component: float
    atr_component: float
    final_projected: float


class PredictorOutputDTO(TypedDict):
    """Predicted end-of-day change with confidence band (percent, 2 d.p.)"""

    predicted_eod_change_pct: float
    lower_bound_pct: float
    upper_bound_pct: float
    confidence_level: float
    regime: str
    atr_z_score: float | None
    volatility_regime: NotRequired[str]
    projected_range_breakdown: NotRequired[ProjectedRangeDTO]
