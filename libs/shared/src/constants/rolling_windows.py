"""Rolling Window Parameters"""

# Relative strength horizons (trading days) and their IBD-style weights
RS_HORIZONS = (63, 126, 189, 252)  # 3M / 6M / 9M / 12M
RS_HORIZON_WEIGHTS = (0.4, 0.2, 0.2, 0.2)  # 3M counts double
RS_LINE_SLOPE_LOOKBACK = 21  # RS-line slope compares against 21 points back

# Indicator windows
EMA_PERIODS = (10, 20, 50, 200)
EMA_SLOPE_LOOKBACK = 5  # EMA trend compares against 5 bars back
ATR_PERIOD = 14
ADR_WINDOW = 20
UD_VOLUME_WINDOW = 20
AVG_VOLUME_WINDOW = 20
SQUEEZE_LENGTH = 20

# Minimum history for a ticker to be scored at all
MIN_QUOTES_FOR_METRICS = 50
