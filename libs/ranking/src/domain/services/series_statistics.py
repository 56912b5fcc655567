"""Series Statistics

Moving averages, rolling deviation and true-range helpers over price series.
Every series function returns an array of the input's length; entries that
have no value yet are NaN.
"""

from typing import Sequence

import numpy as np

from libs.shared.src.enums.atr_smoothing import AtrSmoothing
from libs.shared.src.enums.ema_seed_mode import EmaSeedMode


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence"""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))


def std(values: Sequence[float]) -> float:
    """Population standard deviation, 0.0 for fewer than two values"""
    if len(values) < 2:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float)))


def simple_moving_average(values: Sequence[float], period: int) -> np.ndarray:
    """Trailing simple moving average

    Args:
        values: Input series
        period: Window length

    Returns:
        np.ndarray: SMA aligned to each index, NaN before index period-1
    """
    arr = np.asarray(values, dtype=float)
    n = len(arr)
    out = np.full(n, np.nan)
    if period <= 0 or n < period:
        return out
    cumsum = np.cumsum(arr)
    out[period - 1 :] = (
        cumsum[period - 1 :] - np.concatenate(([0.0], cumsum[:-period]))
    ) / period
    return out


def exponential_moving_average(
    values: Sequence[float],
    period: int,
    seed_mode: EmaSeedMode = EmaSeedMode.SMA,
) -> np.ndarray:
    """Exponential moving average, k = 2 / (period + 1)

    ema[i] = value[i] * k + ema[i-1] * (1 - k)

    Args:
        values: Input series
        period: EMA span
        seed_mode: SMA seeds at index period-1 with the mean of the first
            `period` values (NaN before it); FIRST_VALUE seeds at index 0
            with the first value (defined everywhere)

    Returns:
        np.ndarray: EMA series
    """
    arr = np.asarray(values, dtype=float)
    n = len(arr)
    out = np.full(n, np.nan)
    if n == 0 or period <= 0:
        return out

    k = 2.0 / (period + 1)

    if seed_mode is EmaSeedMode.FIRST_VALUE:
        start = 0
        out[0] = arr[0]
    else:
        if n < period:
            return out
        start = period - 1
        out[start] = float(np.mean(arr[:period]))

    for i in range(start + 1, n):
        out[i] = arr[i] * k + out[i - 1] * (1 - k)
    return out


def rolling_std(
    values: Sequence[float],
    period: int,
    sma: np.ndarray | None = None,
) -> np.ndarray:
    """Population standard deviation of the trailing window

    Deviations are measured from the SMA at the same index (divide by
    `period`, not `period - 1`), so Bollinger bands built from `sma` and this
    series share one centre.
    """
    arr = np.asarray(values, dtype=float)
    n = len(arr)
    out = np.full(n, np.nan)
    if period <= 0 or n < period:
        return out
    if sma is None:
        sma = simple_moving_average(arr, period)

    for i in range(period - 1, n):
        centre = sma[i]
        if np.isnan(centre):
            continue
        window = arr[i - period + 1 : i + 1]
        out[i] = float(np.sqrt(np.sum((window - centre) ** 2) / period))
    return out


def true_range(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
) -> np.ndarray:
    """True range

    TR[0] = high - low
    TR[i] = max(high - low, |high - prev_close|, |low - prev_close|)
    """
    h = np.asarray(highs, dtype=float)
    lo = np.asarray(lows, dtype=float)
    c = np.asarray(closes, dtype=float)
    n = len(c)
    if n == 0:
        return np.array([], dtype=float)

    tr = h - lo
    if n > 1:
        prev_close = c[:-1]
        tr[1:] = np.maximum(
            h[1:] - lo[1:],
            np.maximum(np.abs(h[1:] - prev_close), np.abs(lo[1:] - prev_close)),
        )
    return tr


def average_true_range(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
    smoothing: AtrSmoothing = AtrSmoothing.WILDER,
) -> np.ndarray:
    """Average True Range

    Args:
        highs: High price series
        lows: Low price series
        closes: Close price series
        period: ATR window (default 14)
        smoothing: WILDER seeds at period-1 with the mean of the first
            `period` true ranges then recurses; ROLLING_MEAN is the plain
            trailing mean of true range

    Returns:
        np.ndarray: ATR series, NaN before index period-1
    """
    tr = true_range(highs, lows, closes)
    n = len(tr)

    if smoothing is AtrSmoothing.ROLLING_MEAN:
        return simple_moving_average(tr, period)

    out = np.full(n, np.nan)
    if period <= 0 or n < period:
        return out
    out[period - 1] = float(np.mean(tr[:period]))
    for i in range(period, n):
        out[i] = (out[i - 1] * (period - 1) + tr[i]) / period
    return out


def percent_adr(
    highs: Sequence[float],
    lows: Sequence[float],
    window: int = 20,
) -> float:
    """Average daily range as a percent of price

    %ADR = (mean(high / low) over the last `window` bars - 1) * 100
    A zero low is treated as 1 to keep the ratio finite.
    """
    h = np.asarray(highs, dtype=float)[-window:]
    lo = np.asarray(lows, dtype=float)[-window:]
    if len(h) == 0:
        return 0.0
    safe_lows = np.where(lo == 0, 1.0, lo)
    return (mean(h / safe_lows) - 1) * 100


def up_down_volume_ratio(
    closes: Sequence[float],
    volumes: Sequence[float],
    window: int = 20,
) -> float:
    """Up-day volume divided by down-day volume over the last `window` bars

    Returns 5.0 when there is no down-day volume.
    """
    c = np.asarray(closes, dtype=float)
    v = np.asarray(volumes, dtype=float)
    n = len(c)

    up_volume = 0.0
    down_volume = 0.0
    for i in range(max(1, n - window), n):
        if c[i] > c[i - 1]:
            up_volume += v[i]
        elif c[i] < c[i - 1]:
            down_volume += v[i]

    return up_volume / down_volume if down_volume > 0 else 5.0


def last_defined(series: np.ndarray, default: float = 0.0) -> float:
    """Last entry of a series, or `default` when it is NaN or missing"""
    if len(series) == 0 or np.isnan(series[-1]):
        return default
    return float(series[-1])
