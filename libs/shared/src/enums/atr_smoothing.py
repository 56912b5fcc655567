"""ATR Smoothing Enum"""

from enum import Enum


class AtrSmoothing(Enum):
    """How true range is smoothed into an ATR

    - WILDER: recursive (prev * (n-1) + tr) / n, used by chart indicators
    - ROLLING_MEAN: plain trailing mean of true range, used by the scorer
    """

    WILDER = "wilder"
    ROLLING_MEAN = "rolling_mean"
