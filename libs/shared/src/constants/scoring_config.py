"""Composite Scoring Configuration"""

# Input bounds applied during sanitization
MIN_PRICE = 5.0
MIN_PERCENT_CHANGE = -20.0
MAX_PERCENT_CHANGE = 20.0
MAX_UD_RATIO = 5.0
MIN_EMA_DISTANCE = -10.0
MAX_EMA_DISTANCE = 10.0
MIN_ATR = 0.0001

# Pullback window: distance (%) above each EMA still counted as a pullback
UNDERCUT_TOLERANCE = -0.5
PULLBACK_IDEAL_MAX = {"ema10": 1.5, "ema20": 2.0, "ema50": 4.0}
PULLBACK_BLEND = {"ema10": 0.4, "ema20": 0.4, "ema50": 0.2}
COILED_BONUS = 0.25
COILED_MAX_SEPARATION_ATR = 0.5

# Weights before volatility-regime adjustment (sum to 1.0)
BASE_WEIGHTS = {
    "daily_performance": 0.05,
    "strength": 0.10,
    "accumulation": 0.10,
    "pullback": 0.40,
    "risk": 0.10,
    "rs_line_momentum": 0.25,
}

# Penalties
ADR_HIGH_THRESHOLD = 20.0
ADR_HIGH_PENALTY = 0.85
ADR_LOW_THRESHOLD = 1.5
ADR_LOW_PENALTY = 0.90
PENNY_PRICE = 1.0
PENNY_PENALTY = 0.6
LOW_PRICE_PENALTY_FLOOR = 0.7
