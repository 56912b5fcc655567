"""Market Context Fake Adapter

Implements MarketContextProviderPort for tests
"""

from libs.ranking.src.domain.services.market_context_builder import (
    build_fallback_market_context,
)
from libs.ranking.src.ports.market_context_provider_port import (
    MarketContextProviderPort,
)
from libs.shared.src.dtos.market.market_context_dto import MarketContextDTO


class MarketContextFakeAdapter(MarketContextProviderPort):
    """Market Context Fake Adapter (for tests)

    Returns the fallback context until one is set
    """

    def __init__(self) -> None:
        self._context: MarketContextDTO = build_fallback_market_context()
        self.call_count = 0

    def set_context(self, context: MarketContextDTO) -> None:
        """Set the context to return (test helper)"""
        self._context = context

    def get_market_context(self) -> MarketContextDTO:
        """Get the stored context"""
        self.call_count += 1
        return self._context
