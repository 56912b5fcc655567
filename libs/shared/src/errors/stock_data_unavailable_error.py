"""Stock Data Unavailable Error"""

from libs.shared.src.errors.domain_error import DomainError


class StockDataUnavailableError(DomainError):
    """Quote history for a ticker could not be retrieved

    Raised by quote providers for delisted symbols, empty downloads or
    histories without a usable close. A ranking run drops the ticker.
    """

    def __init__(self, symbol: str, reason: str | None = None) -> None:
        message = f"Unable to retrieve quote history for {symbol}"
        if reason:
            message += f": {reason}"
        super().__init__(message, code="STOCK_DATA_UNAVAILABLE")
        self.symbol = symbol
        self.reason = reason
