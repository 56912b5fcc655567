"""Ranked Result DTO"""

from typing import TypedDict


class RankedResultDTO(TypedDict):
    """One ticker's ranking row"""

    quant_score: int
    ticker: str
    price: float
    percent_change: float
    relative_volume: float
    predicted_change_pct: float
    predicted_lower_pct: float
    predicted_upper_pct: float
    prediction_confidence: float
    prediction_regime: str
    rs_one_day_change_pct: float
    ud_ratio: float
    squeeze_status: str
    atr: float
    percent_adr: float
    ema10_distance_atr: float
    ema20_distance_atr: float
    ema50_distance_atr: float
    rs_rating: float
