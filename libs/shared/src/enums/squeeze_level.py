"""Squeeze Level Enum

Bollinger-inside-Keltner compression, ordered from loosest to tightest
"""

from enum import Enum


class SqueezeLevel(Enum):
    """Volatility compression level"""

    NO = "No"  # Bollinger outside the 2.0x Keltner channel
    LOW = "Low"  # inside 2.0x only
    MEDIUM = "Medium"  # inside 1.5x
    HIGH = "High"  # inside 1.0x (tightest nesting)
