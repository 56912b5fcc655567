"""Ranking App Lifecycle Management

Apps-layer DI configuration, composing the libs' capabilities
"""

import logging

from injector import Injector

from libs.ranking.src.lifespan import configure as configure_ranking


_injector: Injector | None = None


def startup() -> Injector:
    """Start the DI container"""
    global _injector

    # Suppress noisy third-party loggers (must run before basicConfig)
    logging.getLogger("yfinance").setLevel(logging.CRITICAL)
    logging.getLogger("asyncio").setLevel(logging.CRITICAL)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    _injector = Injector([configure_ranking])
    return _injector


def shutdown() -> None:
    """Release the DI container"""
    global _injector
    _injector = None


def get_injector() -> Injector:
    """Get the DI container, starting it on first use"""
    global _injector
    if _injector is None:
        startup()
    return _injector
