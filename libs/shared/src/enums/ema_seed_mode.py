"""EMA Seeding Mode Enum"""

from enum import Enum


class EmaSeedMode(Enum):
    """How an exponential moving average is seeded

    Both conventions are in use and scores are calibrated against each:
    - SMA: chart indicators, seeded by the mean of the first `period` values
    - FIRST_VALUE: scorer, seeded by the first raw value
    """

    SMA = "sma"
    FIRST_VALUE = "first_value"
