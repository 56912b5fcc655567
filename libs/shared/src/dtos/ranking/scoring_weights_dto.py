"""Scoring Weights DTO"""

from typing import TypedDict


class ScoringWeightsDTO(TypedDict):
    """Composite sub-score weights (normalized to sum to 1)"""

    daily_performance: float
    strength: float
    accumulation: float
    pullback: float
    risk: float
    rs_line_momentum: float
