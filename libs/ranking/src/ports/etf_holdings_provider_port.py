"""ETF Holdings Provider Port"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EtfHoldingsProviderPort(Protocol):
    """ETF top-holdings provider"""

    def get_holdings(self, etfs: list[str]) -> list[str]:
        """Get the unique top holdings of the given ETFs

        ETFs whose holdings cannot be fetched are skipped.

        Args:
            etfs: ETF symbols

        Returns:
            list[str]: Holding symbols in first-seen order, without duplicates
        """
        ...
