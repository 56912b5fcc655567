"""Get Chart Data Query

Implements GetChartDataPort Driving Port
"""

import logging

from injector import inject

from libs.ranking.src.domain.services.chart_data_builder import build_chart_data
from libs.ranking.src.ports.get_chart_data_port import GetChartDataPort
from libs.ranking.src.ports.quote_history_provider_port import (
    QuoteHistoryProviderPort,
)
from libs.shared.src.constants.yfinance_settings import CHART_HISTORY_YEARS
from libs.shared.src.dtos.ranking.chart_bar_dto import ChartBarDTO
from libs.shared.src.errors.stock_data_unavailable_error import (
    StockDataUnavailableError,
)


class GetChartDataQuery(GetChartDataPort):
    """Indicator chart data for one ticker"""

    @inject
    def __init__(self, quote_provider: QuoteHistoryProviderPort):
        self._logger = logging.getLogger(self.__class__.__name__)
        self._quote_provider = quote_provider

    def execute(self, ticker: str) -> list[ChartBarDTO]:
        symbol = ticker.strip().upper()
        try:
            quotes = self._quote_provider.get_daily_quotes(
                symbol, years=CHART_HISTORY_YEARS
            )
        except StockDataUnavailableError as e:
            self._logger.warning(f"Chart data unavailable: {e.message}")
            return []
        return build_chart_data(quotes)
