"""VIX Regime Enum

Volatility-index level bands used by the intraday predictor
"""

from enum import Enum


class VixRegime(Enum):
    """VIX level regime"""

    LOW_VOL = "low_vol"  # VIX < 15
    NORMAL_VOL = "normal_vol"  # VIX 15-30
    HIGH_VOL = "high_vol"  # VIX > 30
    UNKNOWN = "unknown"  # no VIX reading
