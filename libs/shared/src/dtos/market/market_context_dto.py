"""Market Context Snapshot"""

from collections.abc import Mapping
from typing import TypedDict

from libs.shared.src.dtos.market.ohlcv_dto import DailyOhlcvDTO


class VolatilityContextDTO(TypedDict):
    """Volatility index snapshot (VIX)"""

    price: float
    previous_close: float
    reference_price: float  # term-structure reference (VIX3M), VIX itself when absent


class BenchmarkPerformanceDTO(TypedDict):
    """Benchmark performance over the RS horizons, in percent"""

    performance_3m: float
    performance_6m: float
    performance_9m: float
    performance_12m: float


class MarketContextDTO(TypedDict):
    """Immutable market snapshot shared by every ticker in one ranking run"""

    benchmark_symbol: str
    benchmark_quotes: tuple[DailyOhlcvDTO, ...]
    benchmark_close_by_date: Mapping[str, float]  # read-only MappingProxyType
    benchmark_performance: BenchmarkPerformanceDTO
    volatility_context: VolatilityContextDTO
    is_fallback: bool
    as_of: str  # ISO 8601 timestamp of the snapshot
