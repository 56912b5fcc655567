"""Ranking unit test fixtures (synthetic quote histories)"""

from datetime import date, timedelta

import pytest

from libs.ranking.src.domain.services.market_context_builder import (
    build_market_context,
)


def _build_quotes(closes, volume=1_000_000, spread=0.01, start=date(2023, 1, 2)):
    quotes = []
    for i, close in enumerate(closes):
        quotes.append(
            {
                "date": (start + timedelta(days=i)).strftime("%Y-%m-%d"),
                "open": close,
                "high": close * (1 + spread),
                "low": close * (1 - spread),
                "close": close,
                "volume": volume,
            }
        )
    return quotes


@pytest.fixture
def make_quotes():
    """Factory: closes -> DailyOhlcvDTO list on consecutive dates"""
    return _build_quotes


@pytest.fixture
def uptrend_quotes():
    """300-bar linear uptrend (100 -> 249.5), 1% high/low spread"""
    return _build_quotes([100 + 0.5 * i for i in range(300)])


@pytest.fixture
def downtrend_quotes():
    """300-bar linear downtrend (250 -> 100.5)"""
    return _build_quotes([250 - 0.5 * i for i in range(300)])


@pytest.fixture
def flat_context():
    """Flat benchmark at 400 on the same dates, VIX flat at 15"""
    benchmark = _build_quotes([400.0] * 300, spread=0.0)
    vix = _build_quotes([15.0] * 5, spread=0.0)
    return build_market_context(benchmark, vix, reference_price=15.0)
