"""Market Context Yahoo Finance Adapter

Benchmark (SPY) two-year history + VIX / VIX3M levels, with bounded retry
and a neutral fallback context when every attempt fails.
"""

import logging
import time
from datetime import date, timedelta
from typing import Callable

import yfinance as yf

from libs.ranking.src.adapters.driven.yahoo.ohlcv_frame_converter import (
    to_daily_quotes,
)
from libs.ranking.src.domain.services.market_context_builder import (
    build_fallback_market_context,
    build_market_context,
)
from libs.ranking.src.ports.market_context_provider_port import (
    MarketContextProviderPort,
)
from libs.ranking.src.ports.quote_history_provider_port import (
    QuoteHistoryProviderPort,
)
from libs.shared.src.constants.yfinance_settings import (
    CONTEXT_MAX_RETRIES,
    CONTEXT_RETRY_BACKOFF_SECONDS,
    DEFAULT_BENCHMARK_SYMBOL,
    QUOTE_HISTORY_YEARS,
    VIX3M_SYMBOL,
    VIX_HISTORY_DAYS,
    VIX_SYMBOL,
)
from libs.shared.src.dtos.market.market_context_dto import MarketContextDTO
from libs.shared.src.dtos.market.ohlcv_dto import DailyOhlcvDTO


class YahooMarketContextAdapter(MarketContextProviderPort):
    """Market Context Yahoo Finance Adapter"""

    def __init__(
        self,
        quote_provider: QuoteHistoryProviderPort,
        benchmark_symbol: str = DEFAULT_BENCHMARK_SYMBOL,
        max_retries: int = CONTEXT_MAX_RETRIES,
        backoff_seconds: float = CONTEXT_RETRY_BACKOFF_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._logger = logging.getLogger(self.__class__.__name__)
        self._quote_provider = quote_provider
        self._benchmark_symbol = benchmark_symbol
        self._max_retries = max_retries
        self._backoff_seconds = backoff_seconds
        self._sleep = sleep

    def _get_recent_quotes(self, symbol: str, days: int) -> list[DailyOhlcvDTO]:
        end_date = date.today() + timedelta(days=1)
        start_date = end_date - timedelta(days=days)
        df = yf.Ticker(symbol).history(start=start_date, end=end_date)
        if df is None or df.empty:
            return []
        return to_daily_quotes(df)

    def _get_reference_price(self) -> float | None:
        """Latest VIX3M close, None when unavailable"""
        try:
            quotes = self._get_recent_quotes(VIX3M_SYMBOL, VIX_HISTORY_DAYS)
        except Exception as e:
            self._logger.warning(f"{VIX3M_SYMBOL} fetch failed: [{type(e).__name__}] {e}")
            return None
        return quotes[-1]["close"] if quotes else None

    def _fetch_once(self) -> MarketContextDTO:
        benchmark_quotes = self._quote_provider.get_daily_quotes(
            self._benchmark_symbol, years=QUOTE_HISTORY_YEARS
        )
        vix_quotes = self._get_recent_quotes(VIX_SYMBOL, VIX_HISTORY_DAYS)
        return build_market_context(
            benchmark_quotes,
            vix_quotes,
            reference_price=self._get_reference_price(),
            benchmark_symbol=self._benchmark_symbol,
        )

    def get_market_context(self) -> MarketContextDTO:
        """Fetch the market context, falling back after the last failed attempt"""
        self._logger.info(f"Fetching market context ({self._benchmark_symbol}, VIX)...")

        for attempt in range(1, self._max_retries + 1):
            try:
                return self._fetch_once()
            except Exception as e:
                self._logger.warning(
                    f"Market context fetch attempt {attempt}/{self._max_retries} "
                    f"failed: [{type(e).__name__}] {e}"
                )
                if attempt < self._max_retries:
                    self._sleep(self._backoff_seconds * attempt)

        self._logger.warning("Using fallback market context after all retries failed")
        return build_fallback_market_context(self._benchmark_symbol)
