"""Chart Bar DTO"""

from typing import TypedDict


class ChartBarDTO(TypedDict):
    """Daily bar with indicator-panel overlays (None while undefined)"""

    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int
    ema10: float | None
    ema20: float | None
    ema50: float | None
    ema200: float | None
    squeeze: str
