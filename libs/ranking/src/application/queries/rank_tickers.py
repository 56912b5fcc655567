"""Rank Tickers Query

Implements RankTickersPort Driving Port
One market context snapshot per run; tickers are evaluated concurrently
with a bounded task limit and failed tickers are dropped from the result.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable

from aiostream import stream
from injector import inject
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from libs.ranking.src.domain.services.session_clock import (
    calculate_minutes_since_open,
)
from libs.ranking.src.domain.services.ticker_metrics_calculator import (
    calculate_metrics,
)
from libs.ranking.src.ports.etf_holdings_provider_port import EtfHoldingsProviderPort
from libs.ranking.src.ports.market_context_provider_port import (
    MarketContextProviderPort,
)
from libs.ranking.src.ports.quote_history_provider_port import (
    QuoteHistoryProviderPort,
)
from libs.ranking.src.ports.rank_tickers_port import RankTickersPort
from libs.shared.src.constants.etf_universe import (
    DEFAULT_MAX_HOLDINGS,
    HOLDINGS_SOURCE_ETFS,
    SECTOR_ETFS,
)
from libs.shared.src.constants.yfinance_settings import (
    QUOTE_HISTORY_YEARS,
    YFINANCE_DELAY_SECONDS,
)
from libs.shared.src.dtos.market.market_context_dto import MarketContextDTO
from libs.shared.src.dtos.ranking.ranked_result_dto import RankedResultDTO
from libs.shared.src.dtos.ranking.ranking_result_dto import RankingResultDTO

DEFAULT_EVAL_WORKERS = 3

UNIVERSE_ETFS = "etfs"
UNIVERSE_HOLDINGS = "holdings"
UNIVERSE_CUSTOM = "custom"


class RankTickersQuery(RankTickersPort):
    """Rank tickers by quant score"""

    @inject
    def __init__(
        self,
        quote_provider: QuoteHistoryProviderPort,
        context_provider: MarketContextProviderPort,
        holdings_provider: EtfHoldingsProviderPort,
        eval_workers: int = DEFAULT_EVAL_WORKERS,
        delay_seconds: float = YFINANCE_DELAY_SECONDS,
        session_clock: Callable[[], int] = calculate_minutes_since_open,
        show_progress: bool = True,
    ):
        """Initialize Query

        Args:
            quote_provider: Daily quote history provider
            context_provider: Market context provider (usually TTL cached)
            holdings_provider: ETF holdings provider for the holdings universe
            eval_workers: Concurrent ticker evaluations
            delay_seconds: Pause after each ticker download (rate limit)
            session_clock: Returns minutes since the open (390 when closed)
            show_progress: Render a rich progress bar
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._quote_provider = quote_provider
        self._context_provider = context_provider
        self._holdings_provider = holdings_provider
        self._eval_workers = max(1, eval_workers)
        self._delay_seconds = delay_seconds
        self._session_clock = session_clock
        self._show_progress = show_progress

    def _resolve_tickers(
        self, tickers: list[str] | None, universe: str, max_holdings: int
    ) -> tuple[str, list[str]]:
        """Resolve the ticker list and the universe label"""
        if tickers:
            unique = dict.fromkeys(t.strip().upper() for t in tickers if t.strip())
            return UNIVERSE_CUSTOM, list(unique)

        if universe == UNIVERSE_ETFS:
            return UNIVERSE_ETFS, list(SECTOR_ETFS)

        if universe == UNIVERSE_HOLDINGS:
            source_etfs = list(SECTOR_ETFS[:HOLDINGS_SOURCE_ETFS])
            holdings = self._holdings_provider.get_holdings(source_etfs)
            return UNIVERSE_HOLDINGS, holdings[:max_holdings]

        raise ValueError(
            f"Unknown universe: {universe} (expected {UNIVERSE_ETFS} or {UNIVERSE_HOLDINGS})"
        )

    def _evaluate(
        self, ticker: str, context: MarketContextDTO, minutes_since_open: int
    ) -> RankedResultDTO | None:
        """Download and score one ticker (blocking)"""
        quotes = self._quote_provider.get_daily_quotes(ticker, years=QUOTE_HISTORY_YEARS)
        return calculate_metrics(ticker, quotes, context, minutes_since_open)

    async def execute(
        self,
        tickers: list[str] | None = None,
        universe: str = UNIVERSE_ETFS,
        max_holdings: int = DEFAULT_MAX_HOLDINGS,
    ) -> RankingResultDTO:
        loop = asyncio.get_running_loop()

        universe_label, targets = await loop.run_in_executor(
            None, self._resolve_tickers, tickers, universe, max_holdings
        )
        self._logger.info(f"Ranking {len(targets)} tickers ({universe_label})")

        context = await loop.run_in_executor(
            None, self._context_provider.get_market_context
        )
        if context["is_fallback"]:
            self._logger.warning("Ranking with fallback market context")

        minutes_since_open = self._session_clock()
        results: list[RankedResultDTO] = []

        progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TextColumn("•"),
            TimeElapsedColumn(),
            disable=not self._show_progress,
        )
        progress_task = None

        async def evaluate_one(ticker: str) -> RankedResultDTO | None:
            try:
                return await loop.run_in_executor(
                    None, self._evaluate, ticker, context, minutes_since_open
                )
            except Exception as e:
                error_type = type(e).__name__
                self._logger.warning(f"Skip {ticker}: [{error_type}] {e}")
                return None
            finally:
                if progress_task is not None:
                    progress.advance(progress_task, 1)
                await asyncio.sleep(self._delay_seconds)  # Rate limit

        with progress:
            progress_task = progress.add_task("[cyan]Scoring", total=len(targets))

            evaluations = stream.map(
                stream.iterate(targets),
                evaluate_one,
                task_limit=self._eval_workers,
            )
            async with evaluations.stream() as s:
                async for result in s:
                    if result is not None:
                        results.append(result)

        results.sort(key=lambda r: (-r["quant_score"], r["ticker"]))

        self._logger.info(f"Ranked {len(results)}/{len(targets)} tickers")

        return {
            "universe": universe_label,
            "as_of": datetime.now().isoformat(timespec="seconds"),
            "is_fallback_context": context["is_fallback"],
            "requested": len(targets),
            "ranked": len(results),
            "results": results,
        }
