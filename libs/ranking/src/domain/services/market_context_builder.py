"""Market Context Builder

Turns benchmark and volatility-index histories into the immutable snapshot
shared by every ticker of a ranking run.
"""

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Optional, Sequence

from libs.ranking.src.domain.services.relative_strength_calculator import (
    calculate_horizon_performance,
)
from libs.shared.src.constants.vix_thresholds import FALLBACK_VIX_LEVEL
from libs.shared.src.constants.yfinance_settings import DEFAULT_BENCHMARK_SYMBOL
from libs.shared.src.dtos.market.market_context_dto import MarketContextDTO
from libs.shared.src.dtos.market.ohlcv_dto import DailyOhlcvDTO
from libs.shared.src.errors.market_context_unavailable_error import (
    MarketContextUnavailableError,
)

# Plausible neutral benchmark performance (percent) used when nothing can be fetched
FALLBACK_BENCHMARK_PERFORMANCE = {
    "performance_3m": 5.0,
    "performance_6m": 10.0,
    "performance_9m": 12.0,
    "performance_12m": 15.0,
}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_market_context(
    benchmark_quotes: Sequence[DailyOhlcvDTO],
    volatility_quotes: Sequence[DailyOhlcvDTO],
    reference_price: Optional[float] = None,
    benchmark_symbol: str = DEFAULT_BENCHMARK_SYMBOL,
) -> MarketContextDTO:
    """Build a market context snapshot

    Args:
        benchmark_quotes: Benchmark daily quotes, oldest first
        volatility_quotes: Recent VIX daily quotes, oldest first
        reference_price: VIX3M level; the current VIX is used when absent
        benchmark_symbol: Benchmark ticker

    Returns:
        MarketContextDTO: Read-only snapshot

    Raises:
        MarketContextUnavailableError: When either history is empty
    """
    if not benchmark_quotes:
        raise MarketContextUnavailableError(f"no {benchmark_symbol} history")
    if not volatility_quotes:
        raise MarketContextUnavailableError("no volatility index history")

    quotes = tuple(benchmark_quotes)
    closes = [q["close"] for q in quotes]

    current_vix = volatility_quotes[-1]["close"]
    previous_vix = (
        volatility_quotes[-2]["close"] if len(volatility_quotes) >= 2 else current_vix
    )

    return {
        "benchmark_symbol": benchmark_symbol,
        "benchmark_quotes": quotes,
        "benchmark_close_by_date": MappingProxyType(
            {q["date"]: q["close"] for q in quotes}
        ),
        "benchmark_performance": calculate_horizon_performance(closes),
        "volatility_context": {
            "price": current_vix,
            "previous_close": previous_vix,
            "reference_price": reference_price or current_vix,
        },
        "is_fallback": False,
        "as_of": _now_iso(),
    }


def build_fallback_market_context(
    benchmark_symbol: str = DEFAULT_BENCHMARK_SYMBOL,
) -> MarketContextDTO:
    """Neutral context used when market data cannot be fetched"""
    return {
        "benchmark_symbol": benchmark_symbol,
        "benchmark_quotes": (),
        "benchmark_close_by_date": MappingProxyType({}),
        "benchmark_performance": dict(FALLBACK_BENCHMARK_PERFORMANCE),  # type: ignore[typeddict-item]
        "volatility_context": {
            "price": FALLBACK_VIX_LEVEL,
            "previous_close": FALLBACK_VIX_LEVEL,
            "reference_price": FALLBACK_VIX_LEVEL,
        },
        "is_fallback": True,
        "as_of": _now_iso(),
    }
