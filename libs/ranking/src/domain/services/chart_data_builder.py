"""Chart Data Builder

Daily bars with EMA overlays and the binary squeeze flag for the indicator
panel. Uses the SMA-seeded EMA and Wilder ATR(20).
"""

import math
from typing import Optional, Sequence

from libs.ranking.src.domain.services.series_statistics import (
    average_true_range,
    exponential_moving_average,
    rolling_std,
    simple_moving_average,
)
from libs.ranking.src.domain.services.squeeze_classifier import (
    calculate_indicator_squeeze,
)
from libs.shared.src.constants.rolling_windows import EMA_PERIODS, SQUEEZE_LENGTH
from libs.shared.src.dtos.market.ohlcv_dto import DailyOhlcvDTO
from libs.shared.src.dtos.ranking.chart_bar_dto import ChartBarDTO
from libs.shared.src.enums.atr_smoothing import AtrSmoothing
from libs.shared.src.enums.ema_seed_mode import EmaSeedMode


def _defined(value: float) -> Optional[float]:
    return None if math.isnan(value) else float(value)


def build_chart_data(quotes: Sequence[DailyOhlcvDTO]) -> list[ChartBarDTO]:
    """Chart bars for a quote history

    Args:
        quotes: Daily quotes, oldest first

    Returns:
        list[ChartBarDTO]: One bar per quote; overlays are None until defined
    """
    if not quotes:
        return []

    closes = [q["close"] for q in quotes]
    highs = [q["high"] for q in quotes]
    lows = [q["low"] for q in quotes]

    emas = {
        period: exponential_moving_average(closes, period, EmaSeedMode.SMA)
        for period in EMA_PERIODS
    }
    sma20 = simple_moving_average(closes, SQUEEZE_LENGTH)
    std20 = rolling_std(closes, SQUEEZE_LENGTH, sma20)
    atr20 = average_true_range(
        highs, lows, closes, SQUEEZE_LENGTH, AtrSmoothing.WILDER
    )
    squeeze = calculate_indicator_squeeze(sma20, std20, emas[20], atr20)

    bars: list[ChartBarDTO] = []
    for i, quote in enumerate(quotes):
        bars.append(
            {
                "date": quote["date"],
                "open": quote["open"],
                "high": quote["high"],
                "low": quote["low"],
                "close": quote["close"],
                "volume": quote["volume"],
                "ema10": _defined(emas[10][i]),
                "ema20": _defined(emas[20][i]),
                "ema50": _defined(emas[50][i]),
                "ema200": _defined(emas[200][i]),
                "squeeze": squeeze[i].value,
            }
        )
    return bars
