"""Quote History Yahoo Finance Adapter

Uses the yfinance SDK directly
"""

from datetime import date, timedelta

import yfinance as yf

from libs.ranking.src.adapters.driven.yahoo.ohlcv_frame_converter import (
    to_daily_quotes,
)
from libs.ranking.src.ports.quote_history_provider_port import (
    QuoteHistoryProviderPort,
)
from libs.shared.src.dtos.market.ohlcv_dto import DailyOhlcvDTO
from libs.shared.src.errors.stock_data_unavailable_error import (
    StockDataUnavailableError,
)


class YahooQuoteHistoryAdapter(QuoteHistoryProviderPort):
    """Quote History Yahoo Finance Adapter"""

    def get_daily_quotes(self, symbol: str, years: int = 2) -> list[DailyOhlcvDTO]:
        """Get daily OHLCV history (today's partial bar included)"""
        end_date = date.today() + timedelta(days=1)
        start_date = end_date - timedelta(days=365 * years + 1)

        ticker = yf.Ticker(symbol)
        df = ticker.history(start=start_date, end=end_date)

        if df is None or df.empty:
            raise StockDataUnavailableError(symbol, "empty history")

        quotes = to_daily_quotes(df)
        if not quotes:
            raise StockDataUnavailableError(symbol, "no usable close")
        return quotes
