"""Quote History Provider Port"""

from typing import Protocol, runtime_checkable

from libs.shared.src.dtos.market.ohlcv_dto import DailyOhlcvDTO


@runtime_checkable
class QuoteHistoryProviderPort(Protocol):
    """Daily quote history provider

    Used by ranking runs and the chart query
    """

    def get_daily_quotes(self, symbol: str, years: int = 2) -> list[DailyOhlcvDTO]:
        """Get daily OHLCV history

        Args:
            symbol: Ticker symbol
            years: Years of history to request

        Returns:
            list[DailyOhlcvDTO]: Quotes ordered by date, oldest first

        Raises:
            StockDataUnavailableError: When no usable history exists
        """
        ...
