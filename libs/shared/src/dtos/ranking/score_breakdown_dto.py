"""Score Breakdown DTO"""

from typing import TypedDict

from libs.shared.src.dtos.ranking.scoring_weights_dto import ScoringWeightsDTO


class ScoreBreakdownDTO(TypedDict):
    """Composite score with every sub-score and penalty that produced it"""

    score: int
    composite: float
    daily_performance: float
    strength: float
    accumulation: float
    pullback: float
    risk: float
    rs_line_momentum: float
    weights: ScoringWeightsDTO
    adr_penalty: float
    price_penalty: float
    is_bullish_stack: bool
    is_coiled: bool
