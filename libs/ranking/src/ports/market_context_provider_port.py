"""Market Context Provider Port"""

from typing import Protocol, runtime_checkable

from libs.shared.src.dtos.market.market_context_dto import MarketContextDTO


@runtime_checkable
class MarketContextProviderPort(Protocol):
    """Market context (benchmark + VIX) provider"""

    def get_market_context(self) -> MarketContextDTO:
        """Get the market context snapshot for a ranking run

        Never raises: providers degrade to the fallback context
        (is_fallback=True) when market data cannot be fetched.

        Returns:
            MarketContextDTO: Immutable snapshot
        """
        ...
