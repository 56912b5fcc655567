"""Ranking CLI Controller

Driving Adapter: CLI commands to use case calls
"""

from injector import Injector
from rich.console import Console
from rich.table import Table

from libs.ranking.src.ports.get_chart_data_port import GetChartDataPort
from libs.ranking.src.ports.rank_tickers_port import RankTickersPort
from libs.shared.src.constants.etf_universe import DEFAULT_MAX_HOLDINGS
from libs.shared.src.dtos.ranking.ranking_result_dto import RankingResultDTO


def _signed(value: float) -> str:
    color = "green" if value > 0 else ("red" if value < 0 else "white")
    return f"[{color}]{value:+.2f}[/{color}]"


class RankingController:
    """Ranking CLI controller"""

    def __init__(self, injector: Injector) -> None:
        self._injector = injector
        self._console = Console()

    def _render(self, result: RankingResultDTO, top_n: int) -> None:
        rows = result["results"][:top_n] if top_n > 0 else result["results"]

        table = Table(
            title=(
                f"Quant Ranking: {result['universe']} "
                f"({result['ranked']}/{result['requested']} ranked, {result['as_of']})"
            )
        )
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Score", style="magenta", justify="right")
        table.add_column("Ticker", style="bold")
        table.add_column("Price", justify="right")
        table.add_column("%Chg", justify="right")
        table.add_column("RVol", justify="right")
        table.add_column("%Pred", justify="right")
        table.add_column("Band", justify="right")
        table.add_column("Regime", style="blue")
        table.add_column("RS", justify="right")
        table.add_column("RS Δ", justify="right")
        table.add_column("U/D", justify="right")
        table.add_column("Squeeze", style="yellow")
        table.add_column("ATR", justify="right")
        table.add_column("%ADR", justify="right")
        table.add_column("10EMA", justify="right")
        table.add_column("20EMA", justify="right")
        table.add_column("50EMA", justify="right")

        for i, r in enumerate(rows, 1):
            table.add_row(
                str(i),
                str(r["quant_score"]),
                r["ticker"],
                f"{r['price']:.2f}",
                _signed(r["percent_change"]),
                f"{r['relative_volume']:.2f}",
                _signed(r["predicted_change_pct"]),
                f"{r['predicted_lower_pct']:+.2f} / {r['predicted_upper_pct']:+.2f}",
                r["prediction_regime"],
                f"{r['rs_rating']:.3f}",
                _signed(r["rs_one_day_change_pct"]),
                f"{r['ud_ratio']:.2f}",
                r["squeeze_status"],
                f"{r['atr']:.2f}",
                f"{r['percent_adr']:.2f}",
                f"{r['ema10_distance_atr']:.2f}",
                f"{r['ema20_distance_atr']:.2f}",
                f"{r['ema50_distance_atr']:.2f}",
            )

        self._console.print(table)
        if result["is_fallback_context"]:
            self._console.print(
                "[yellow]⚠ Market data unavailable, scored against the fallback context[/yellow]"
            )

    async def etfs(self, top_n: int = 0) -> None:
        """Rank the sector / thematic ETF universe

        Args:
            top_n: Rows to show (0 = all)
        """
        use_case = self._injector.get(RankTickersPort)
        result = await use_case.execute(universe="etfs")
        self._render(result, top_n)

    async def holdings(
        self, max_holdings: int = DEFAULT_MAX_HOLDINGS, top_n: int = 0
    ) -> None:
        """Rank the top holdings of the leading sector ETFs

        Args:
            max_holdings: Cap on the number of holdings scored
            top_n: Rows to show (0 = all)
        """
        use_case = self._injector.get(RankTickersPort)
        result = await use_case.execute(
            universe="holdings", max_holdings=int(max_holdings)
        )
        self._render(result, top_n)

    async def rank(self, *tickers: str) -> None:
        """Rank an explicit ticker list

        Args:
            tickers: Ticker symbols, e.g. `rank NVDA AAPL MSFT`
        """
        # fire parses numeric-looking symbols as numbers
        symbols = [str(t) for t in tickers]
        if not symbols:
            self._console.print("[red]No tickers given[/red]")
            return

        use_case = self._injector.get(RankTickersPort)
        result = await use_case.execute(tickers=symbols)
        self._render(result, 0)

    def chart(self, ticker: str, last: int = 20) -> None:
        """Show indicator chart data (EMA overlays + squeeze)

        Args:
            ticker: Ticker symbol
            last: Most recent bars to show
        """
        use_case = self._injector.get(GetChartDataPort)
        bars = use_case.execute(str(ticker))
        if not bars:
            self._console.print(f"[red]No chart data for {ticker}[/red]")
            return

        def fmt(value: float | None) -> str:
            return "-" if value is None else f"{value:.2f}"

        table = Table(title=f"{str(ticker).upper()} daily indicators")
        table.add_column("Date", style="cyan")
        table.add_column("Close", justify="right")
        table.add_column("Volume", justify="right")
        table.add_column("EMA10", justify="right")
        table.add_column("EMA20", justify="right")
        table.add_column("EMA50", justify="right")
        table.add_column("EMA200", justify="right")
        table.add_column("Squeeze", style="yellow")

        for bar in bars[-last:]:
            table.add_row(
                bar["date"],
                f"{bar['close']:.2f}",
                f"{bar['volume']:,}",
                fmt(bar["ema10"]),
                fmt(bar["ema20"]),
                fmt(bar["ema50"]),
                fmt(bar["ema200"]),
                bar["squeeze"],
            )
        self._console.print(table)
