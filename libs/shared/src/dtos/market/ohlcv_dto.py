"""OHLCV Data Structure"""

from typing import TypedDict


class DailyOhlcvDTO(TypedDict):
    """Daily OHLCV bar (one quote per trading day)

    Sequences of quotes are ordered by strictly increasing, unique date.
    """

    date: str  # YYYY-MM-DD format
    open: float
    high: float
    low: float
    close: float
    volume: int
