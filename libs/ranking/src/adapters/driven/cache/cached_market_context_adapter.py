"""Cached Market Context Adapter

Wrapper pattern: wraps the real MarketContextProviderPort
Time-based invalidation: the snapshot is reused for `ttl_seconds`
Fallback contexts are not cached so the next run retries the download
"""

import logging
import threading
import time
from typing import Callable

from libs.ranking.src.ports.market_context_provider_port import (
    MarketContextProviderPort,
)
from libs.shared.src.dtos.market.market_context_dto import MarketContextDTO

DEFAULT_TTL_SECONDS = 3600


class CachedMarketContextAdapter(MarketContextProviderPort):
    """Market context provider with an in-memory TTL cache"""

    def __init__(
        self,
        inner: MarketContextProviderPort,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._logger = logging.getLogger(self.__class__.__name__)
        self._inner = inner
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._cached: MarketContextDTO | None = None
        self._fetched_at = 0.0

    def _is_fresh(self) -> bool:
        return (
            self._cached is not None
            and self._clock() - self._fetched_at < self._ttl_seconds
        )

    def get_market_context(self) -> MarketContextDTO:
        """Get the market context (cached)"""
        with self._lock:
            if self._is_fresh():
                self._logger.debug("Market context cache hit")
                return self._cached  # type: ignore[return-value]

            context = self._inner.get_market_context()
            if context["is_fallback"]:
                self._cached = None
            else:
                self._cached = context
                self._fetched_at = self._clock()
            return context

    def invalidate(self) -> None:
        """Drop the cached snapshot"""
        with self._lock:
            self._cached = None
