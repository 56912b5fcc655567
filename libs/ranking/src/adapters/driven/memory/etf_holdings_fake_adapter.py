"""ETF Holdings Fake Adapter

Implements EtfHoldingsProviderPort for tests
"""

from libs.ranking.src.ports.etf_holdings_provider_port import EtfHoldingsProviderPort


class EtfHoldingsFakeAdapter(EtfHoldingsProviderPort):
    """ETF Holdings Fake Adapter (for tests)"""

    def __init__(self) -> None:
        self._holdings: dict[str, list[str]] = {}

    def set_holdings(self, etf: str, holdings: list[str]) -> None:
        """Set holdings for an ETF (test helper)"""
        self._holdings[etf] = holdings

    def get_holdings(self, etfs: list[str]) -> list[str]:
        """Get unique holdings in first-seen order"""
        unique: dict[str, None] = {}
        for etf in etfs:
            for symbol in self._holdings.get(etf, []):
                unique.setdefault(symbol, None)
        return list(unique)
