"""Ranking Run Result DTO"""

from typing import TypedDict

from libs.shared.src.dtos.ranking.ranked_result_dto import RankedResultDTO


class RankingResultDTO(TypedDict):
    """Result of one ranking run, sorted by quant_score descending"""

    universe: str
    as_of: str
    is_fallback_context: bool
    requested: int
    ranked: int
    results: list[RankedResultDTO]
