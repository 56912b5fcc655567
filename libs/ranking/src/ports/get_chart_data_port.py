"""Get Chart Data Driving Port"""

from typing import Protocol, runtime_checkable

from libs.shared.src.dtos.ranking.chart_bar_dto import ChartBarDTO


@runtime_checkable
class GetChartDataPort(Protocol):
    """Indicator chart data for one ticker

    CLI Entry: ranking chart
    """

    def execute(self, ticker: str) -> list[ChartBarDTO]:
        """
        Get one year of daily bars with EMA overlays and squeeze flags

        Args:
            ticker: Ticker symbol

        Returns:
            list[ChartBarDTO]: Bars oldest first, empty when no data
        """
        ...
