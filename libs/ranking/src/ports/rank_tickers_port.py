"""Rank Tickers Driving Port"""

from typing import Protocol, runtime_checkable

from libs.shared.src.dtos.ranking.ranking_result_dto import RankingResultDTO


@runtime_checkable
class RankTickersPort(Protocol):
    """Rank tickers by quant score

    CLI Entry: ranking etfs / ranking holdings / ranking rank
    """

    async def execute(
        self,
        tickers: list[str] | None = None,
        universe: str = "etfs",
        max_holdings: int = 50,
    ) -> RankingResultDTO:
        """
        Score and rank a ticker universe

        Args:
            tickers: Explicit tickers (overrides universe)
            universe: "etfs" (sector ETF list) or "holdings" (their top holdings)
            max_holdings: Cap on the holdings universe size

        Returns:
            RankingResultDTO: Results sorted by quant_score descending
        """
        ...
