"""Squeeze Classifier

Bollinger-vs-Keltner volatility compression. Tight Bollinger-inside-Keltner
nesting precedes breakouts.

Two variants are in use:
- Ranking table: SMA20 basis for both bands, three Keltner channels
  (1.0x / 1.5x / 2.0x) giving a 4-level label
- Indicator panel: EMA20 Keltner basis, a single 1.5x channel, High / No
"""

from typing import Sequence

import numpy as np

from libs.ranking.src.domain.services.series_statistics import (
    rolling_std,
    simple_moving_average,
    true_range,
)
from libs.shared.src.constants.rolling_windows import SQUEEZE_LENGTH
from libs.shared.src.enums.squeeze_level import SqueezeLevel

KELTNER_MULTIPLIERS = (1.0, 1.5, 2.0)
BOLLINGER_MULTIPLIER = 2.0


def classify_squeeze(
    bb_upper: float,
    bb_lower: float,
    kc_uppers: Sequence[float],
    kc_lowers: Sequence[float],
) -> SqueezeLevel:
    """Classify compression from Bollinger and nested Keltner bands

    Args:
        bb_upper: Bollinger upper band
        bb_lower: Bollinger lower band
        kc_uppers: Keltner upper bands, narrowest (1.0x) to widest (2.0x)
        kc_lowers: Keltner lower bands, same order

    Returns:
        SqueezeLevel: NO outside the widest channel, HIGH inside the
        narrowest, MEDIUM inside the middle one, LOW otherwise
    """
    if bb_upper > kc_uppers[2] or bb_lower < kc_lowers[2]:
        return SqueezeLevel.NO
    if bb_upper <= kc_uppers[0] and bb_lower >= kc_lowers[0]:
        return SqueezeLevel.HIGH
    if bb_upper <= kc_uppers[1] and bb_lower >= kc_lowers[1]:
        return SqueezeLevel.MEDIUM
    return SqueezeLevel.LOW


def calculate_squeeze_status(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    length: int = SQUEEZE_LENGTH,
    bb_mult: float = BOLLINGER_MULTIPLIER,
    kc_mults: Sequence[float] = KELTNER_MULTIPLIERS,
) -> SqueezeLevel:
    """Ranking-table squeeze label at the latest bar

    Keltner deviation is the SMA of true range over `length` bars, and both
    bands are centred on SMA(`length`) of the closes.
    """
    if len(closes) < length:
        return SqueezeLevel.NO

    basis = simple_moving_average(closes, length)
    stdev = rolling_std(closes, length, basis)
    dev_kc = simple_moving_average(true_range(highs, lows, closes), length)

    bb_basis, sd, dev = basis[-1], stdev[-1], dev_kc[-1]
    if np.isnan(bb_basis) or np.isnan(sd) or np.isnan(dev):
        return SqueezeLevel.NO

    kc_uppers = [bb_basis + dev * m for m in kc_mults]
    kc_lowers = [bb_basis - dev * m for m in kc_mults]
    return classify_squeeze(
        bb_basis + bb_mult * sd, bb_basis - bb_mult * sd, kc_uppers, kc_lowers
    )


def calculate_indicator_squeeze(
    sma: np.ndarray,
    stdev: np.ndarray,
    ema: np.ndarray,
    atr: np.ndarray,
    kc_mult: float = 1.5,
    bb_mult: float = BOLLINGER_MULTIPLIER,
) -> list[SqueezeLevel]:
    """Indicator-panel squeeze per bar (binary High / No)

    Bollinger = SMA +/- 2 stddev, Keltner = EMA +/- 1.5 ATR. Bars where any
    input is undefined are NO.
    """
    labels = []
    for basis, sd, kc_basis, dev in zip(sma, stdev, ema, atr):
        if np.isnan(basis) or np.isnan(sd) or np.isnan(kc_basis) or np.isnan(dev):
            labels.append(SqueezeLevel.NO)
            continue
        inside = (
            basis + bb_mult * sd <= kc_basis + kc_mult * dev
            and basis - bb_mult * sd >= kc_basis - kc_mult * dev
        )
        labels.append(SqueezeLevel.HIGH if inside else SqueezeLevel.NO)
    return labels
