"""yfinance history DataFrame -> DailyOhlcvDTO list"""

import math
from typing import TYPE_CHECKING

from libs.shared.src.dtos.market.ohlcv_dto import DailyOhlcvDTO

if TYPE_CHECKING:
    import pandas as pd


def to_daily_quotes(df: "pd.DataFrame") -> list[DailyOhlcvDTO]:
    """Convert a `Ticker.history()` frame, dropping rows without a usable close"""
    result: list[DailyOhlcvDTO] = []
    for idx, row in df.iterrows():
        close = float(row["Close"])
        if not math.isfinite(close) or close <= 0:
            continue
        volume = float(row["Volume"])
        result.append(
            {
                "date": idx.strftime("%Y-%m-%d"),
                "open": float(row["Open"]),
                "high": float(row["High"]),
                "low": float(row["Low"]),
                "close": close,
                "volume": int(volume) if math.isfinite(volume) else 0,
            }
        )
    return result
