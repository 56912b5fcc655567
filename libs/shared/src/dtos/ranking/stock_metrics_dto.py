"""Stock Metrics DTO"""

from typing import TypedDict


class StockMetricsDTO(TypedDict, total=False):
    """Composite scorer inputs for one ticker

    Distances are percent of price above (+) / below (-) each EMA.
    """

    price: float
    high: float
    low: float
    percent_change: float
    rs_rating: float
    ud_ratio: float
    percent_adr: float
    atr: float
    distance_from_ema10: float
    distance_from_ema20: float
    distance_from_ema50: float
    ema10: float
    ema20: float
    ema50: float
    ema200: float
    ema10_prev5: float
    ema20_prev5: float
    ema50_prev5: float
    rs_line_slope: float
