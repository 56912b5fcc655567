"""VIX Thresholds

Level bands for the intraday predictor and stress triggers for scoring weights
"""

# Predictor level bands
VIX_LOW_VOL_MAX = 15  # below: low-volatility regime
VIX_HIGH_VOL_MIN = 30  # above: high-volatility regime (also a confidence penalty)
VIX_CALM_CONFIDENCE_MAX = 18  # clean-trend confidence bonus only below this

# Scoring weight shift triggers
VIX_STRESS_RATIO = 1.0  # VIX / VIX3M above this = backwardation stress
VIX_COMPLACENT_RATIO = 0.85  # VIX / VIX3M below this = complacency
VIX_SPIKE_DAY_CHANGE = 0.10  # one-day VIX change above this = spike
MAX_VIX_SPIKE = 0.50  # one-day change is capped here

# Fallback snapshot when the volatility index cannot be fetched
FALLBACK_VIX_LEVEL = 18.5
