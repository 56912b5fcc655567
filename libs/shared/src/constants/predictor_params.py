"""Intraday EOD Predictor Parameters"""

TOTAL_TRADING_MINUTES = 390

INTRADAY_TANH_SCALE = 3.0
VM_FLOOR = 0.5
VM_CEIL = 10.0
TIME_DECAY_ALPHA = 0.5
HOLD_THRESHOLD = 0.01
HOLD_FACTOR_DECAY = 0.8
HOLD_FACTOR_FLOOR = 0.2
MAX_VOLUME_BOOST = 0.3
ADR_CAP_MULTIPLE = 3.0
ATR_ZSCORE_CAP = 3.0
ATR_WEIGHT = 0.7
EXTREME_VOLATILITY_THRESHOLD = 1.5
MOMENTUM_STRONG_ROC = 0.2
LATE_DAY_FRACTION = 0.15
FAILED_GAP_MINUTES = 60
PERF_BIAS_WEAK = 0.35
PERF_BIAS_STRONG = 0.25

# Gap / volume classification
SIGNIFICANT_GAP_PCT = 2.0
HOLD_CHECK_GAP_PCT = 1.0
HIGH_RELATIVE_VOLUME = 2.0
VOLUME_BOOST_RELATIVE_VOLUME = 3.0

# Sanitization bounds
RELATIVE_VOLUME_BOUNDS = (0.1, 20.0)
ROC_BOUNDS = (-5.0, 5.0)
GAP_PERCENT_BOUNDS = (-50.0, 50.0)
VIX_PCT_CHANGE_BOUNDS = (-50.0, 50.0)

# Confidence
BASE_CONFIDENCE = 0.8
CONFIDENCE_BOUNDS = (0.5, 0.9)
