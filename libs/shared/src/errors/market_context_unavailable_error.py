"""Market Context Unavailable Error"""

from libs.shared.src.errors.domain_error import DomainError


class MarketContextUnavailableError(DomainError):
    """Benchmark or volatility-index data is missing

    Raised while building a market context snapshot. The Yahoo context
    adapter retries on it and finally degrades to the fallback context.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Market context unavailable: {reason}", code="MARKET_CONTEXT_UNAVAILABLE"
        )
        self.reason = reason
