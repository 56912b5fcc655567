"""Quote History Fake Adapter

Implements QuoteHistoryProviderPort for tests
"""

from libs.ranking.src.ports.quote_history_provider_port import (
    QuoteHistoryProviderPort,
)
from libs.shared.src.dtos.market.ohlcv_dto import DailyOhlcvDTO
from libs.shared.src.errors.stock_data_unavailable_error import (
    StockDataUnavailableError,
)


class QuoteHistoryFakeAdapter(QuoteHistoryProviderPort):
    """Quote History Fake Adapter (for tests)"""

    def __init__(self) -> None:
        self._quotes: dict[str, list[DailyOhlcvDTO]] = {}
        self._errors: dict[str, Exception] = {}
        self.requested: list[str] = []

    def set_quotes(self, symbol: str, quotes: list[DailyOhlcvDTO]) -> None:
        """Set quotes for a symbol (test helper)"""
        self._quotes[symbol] = quotes

    def set_error(self, symbol: str, error: Exception) -> None:
        """Make a symbol raise (test helper)"""
        self._errors[symbol] = error

    def get_daily_quotes(self, symbol: str, years: int = 2) -> list[DailyOhlcvDTO]:
        """Get stored quotes"""
        self.requested.append(symbol)
        if symbol in self._errors:
            raise self._errors[symbol]
        if symbol not in self._quotes:
            raise StockDataUnavailableError(symbol, "no fake data")
        return list(self._quotes[symbol])
