"""Trading Session Phase Enum"""

from enum import Enum


class SessionPhase(Enum):
    """Regular-session progress bucket"""

    EARLY = "early"  # first 30% of the session
    MIDDAY = "midday"  # middle 40%
    LATE = "late"  # final 30%
