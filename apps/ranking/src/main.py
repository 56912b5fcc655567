"""Ranking CLI entry point

Follows P&A architecture: CLI → Driving Adapter → Application Service

Usage:
    python -m apps.ranking.src.main etfs
    python -m apps.ranking.src.main holdings --max_holdings=30
    python -m apps.ranking.src.main rank NVDA AAPL MSFT
    python -m apps.ranking.src.main chart NVDA
"""

import asyncio
import inspect

import fire

from apps.ranking.src.lifespan import get_injector, shutdown, startup
from apps.ranking.src.adapters.driving.cli.ranking_controller import (
    RankingController,
)


def main() -> None:
    """Sync entry point with async command support"""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    try:
        startup()
        controller = RankingController(get_injector())
        result = fire.Fire(controller)

        if inspect.iscoroutine(result):
            loop.run_until_complete(result)
    finally:
        shutdown()
        loop.close()


if __name__ == "__main__":
    main()
