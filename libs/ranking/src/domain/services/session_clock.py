"""Session Clock

US regular-session progress (09:30-16:00 America/New_York, weekdays).
"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from libs.shared.src.constants.predictor_params import TOTAL_TRADING_MINUTES

MARKET_TIMEZONE = ZoneInfo("America/New_York")
MARKET_OPEN_MINUTES = 9 * 60 + 30
MARKET_CLOSE_MINUTES = 16 * 60


def calculate_minutes_since_open(now: Optional[datetime] = None) -> int:
    """Minutes since the 09:30 ET open

    Args:
        now: Timezone-aware moment (naive values are taken as UTC); defaults
            to the current time

    Returns:
        int: Minutes since the open while the session is running, else 390
        (a closed session counts as a full day)
    """
    if now is None:
        now = datetime.now(MARKET_TIMEZONE)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=ZoneInfo("UTC"))

    et = now.astimezone(MARKET_TIMEZONE)
    minutes_of_day = et.hour * 60 + et.minute

    is_weekday = et.weekday() < 5
    if is_weekday and MARKET_OPEN_MINUTES <= minutes_of_day < MARKET_CLOSE_MINUTES:
        return minutes_of_day - MARKET_OPEN_MINUTES
    return TOTAL_TRADING_MINUTES
