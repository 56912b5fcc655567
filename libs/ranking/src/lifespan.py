"""
Ranking Context Lifecycle Management

Provides the dependency injection module composed by apps
Follows P&A architecture: Driving Port → Application Service

Environment:
    RANKING_CONTEXT_TTL_SECONDS: Market context cache lifetime (default 3600)
    RANKING_EVAL_WORKERS: Concurrent ticker evaluations (default 3)
    RANKING_BENCHMARK_SYMBOL: Relative strength benchmark (default SPY)
"""

import os

from injector import Module, provider, singleton

# Driving Ports
from libs.ranking.src.ports.rank_tickers_port import RankTickersPort
from libs.ranking.src.ports.get_chart_data_port import GetChartDataPort

# Application Services
from libs.ranking.src.application.queries.rank_tickers import (
    DEFAULT_EVAL_WORKERS,
    RankTickersQuery,
)
from libs.ranking.src.application.queries.get_chart_data import GetChartDataQuery

# Driven Ports
from libs.ranking.src.ports.quote_history_provider_port import (
    QuoteHistoryProviderPort,
)
from libs.ranking.src.ports.market_context_provider_port import (
    MarketContextProviderPort,
)
from libs.ranking.src.ports.etf_holdings_provider_port import EtfHoldingsProviderPort

from libs.ranking.src.adapters.driven.yahoo.yahoo_quote_history_adapter import (
    YahooQuoteHistoryAdapter,
)
from libs.ranking.src.adapters.driven.yahoo.yahoo_market_context_adapter import (
    YahooMarketContextAdapter,
)
from libs.ranking.src.adapters.driven.yahoo.yahoo_etf_holdings_adapter import (
    YahooEtfHoldingsAdapter,
)
from libs.ranking.src.adapters.driven.cache.cached_market_context_adapter import (
    DEFAULT_TTL_SECONDS,
    CachedMarketContextAdapter,
)
from libs.shared.src.constants.yfinance_settings import DEFAULT_BENCHMARK_SYMBOL


class RankingModule(Module):
    """Ranking dependency injection module"""

    @singleton
    @provider
    def provide_rank_tickers(
        self,
        quote_provider: QuoteHistoryProviderPort,
        context_provider: MarketContextProviderPort,
        holdings_provider: EtfHoldingsProviderPort,
    ) -> RankTickersPort:
        return RankTickersQuery(
            quote_provider=quote_provider,
            context_provider=context_provider,
            holdings_provider=holdings_provider,
            eval_workers=int(
                os.environ.get("RANKING_EVAL_WORKERS", DEFAULT_EVAL_WORKERS)
            ),
        )

    @singleton
    @provider
    def provide_get_chart_data(
        self, quote_provider: QuoteHistoryProviderPort
    ) -> GetChartDataPort:
        return GetChartDataQuery(quote_provider=quote_provider)

    # ============================================
    # Driven Ports → Real Adapters
    # ============================================

    @singleton
    @provider
    def provide_quote_history(self) -> QuoteHistoryProviderPort:
        return YahooQuoteHistoryAdapter()

    @singleton
    @provider
    def provide_market_context(
        self, quote_provider: QuoteHistoryProviderPort
    ) -> MarketContextProviderPort:
        """Provide TTL-cached Yahoo market context"""
        inner = YahooMarketContextAdapter(
            quote_provider=quote_provider,
            benchmark_symbol=os.environ.get(
                "RANKING_BENCHMARK_SYMBOL", DEFAULT_BENCHMARK_SYMBOL
            ),
        )
        return CachedMarketContextAdapter(
            inner=inner,
            ttl_seconds=float(
                os.environ.get("RANKING_CONTEXT_TTL_SECONDS", DEFAULT_TTL_SECONDS)
            ),
        )

    @singleton
    @provider
    def provide_etf_holdings(self) -> EtfHoldingsProviderPort:
        return YahooEtfHoldingsAdapter()


# Alias for libs composition
configure = RankingModule()
