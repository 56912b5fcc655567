"""ETF Holdings Yahoo Finance Adapter

Reads `Ticker.funds_data.top_holdings` (index = holding symbol)
"""

import logging
import time

import yfinance as yf

from libs.ranking.src.ports.etf_holdings_provider_port import EtfHoldingsProviderPort
from libs.shared.src.constants.yfinance_settings import YFINANCE_DELAY_SECONDS


class YahooEtfHoldingsAdapter(EtfHoldingsProviderPort):
    """ETF Holdings Yahoo Finance Adapter"""

    def __init__(self, delay_seconds: float = YFINANCE_DELAY_SECONDS) -> None:
        self._logger = logging.getLogger(self.__class__.__name__)
        self._delay_seconds = delay_seconds

    def get_holdings(self, etfs: list[str]) -> list[str]:
        """Get unique top holdings across ETFs"""
        holdings: dict[str, None] = {}

        for etf in etfs:
            try:
                top = yf.Ticker(etf).funds_data.top_holdings
            except Exception as e:
                self._logger.warning(
                    f"Holdings fetch failed for {etf}: [{type(e).__name__}] {e}"
                )
                continue
            finally:
                time.sleep(self._delay_seconds)

            if top is None or top.empty:
                continue
            for symbol in top.index:
                if isinstance(symbol, str) and symbol:
                    holdings.setdefault(symbol, None)

        self._logger.info(f"Found {len(holdings)} unique holdings in {len(etfs)} ETFs")
        return list(holdings)
