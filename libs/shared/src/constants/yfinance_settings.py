"""yfinance API Settings

All places calling yfinance must use these constants to avoid Rate Limit (429).
"""

# Delay seconds between each yfinance API request
YFINANCE_DELAY_SECONDS: float = 0.5

# Years of daily history requested per ticker (covers EMA200 + 12M RS)
QUOTE_HISTORY_YEARS: int = 2

# Years of daily history shown on the indicator chart
CHART_HISTORY_YEARS: int = 1

# Days of volatility-index history requested for the context snapshot
VIX_HISTORY_DAYS: int = 7

# Retry policy for market context downloads (linear backoff: 1s x attempt)
CONTEXT_MAX_RETRIES: int = 3
CONTEXT_RETRY_BACKOFF_SECONDS: float = 1.0

VIX_SYMBOL = "^VIX"
VIX3M_SYMBOL = "^VIX3M"
DEFAULT_BENCHMARK_SYMBOL = "SPY"
