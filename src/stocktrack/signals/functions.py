"""Stateless signal functions.

Every function returns ``None`` when the series is empty so callers can tell
"no data" apart from a legitimate zero-valued result.
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd


def min_price(series: Sequence[float]) -> float | None:
    """Smallest value in the series.

    NaN is not skipped; providers drop missing closes before this point.
    """
    if not series:
        return None
    return min(series)


def max_price(series: Sequence[float]) -> float | None:
    """Largest value in the series. NaN is not skipped."""
    if not series:
        return None
    return max(series)


def price_diff(series: Sequence[float]) -> tuple[float, float] | None:
    """Absolute and relative change from the first to the last value.

    The relative change is measured against the first value. When the first
    value is zero the absolute change is returned in its place.
    """
    if not series:
        return None
    first = float(series[0])
    last = float(series[-1])
    abs_diff = last - first
    if first == 0.0:
        return abs_diff, abs_diff
    return abs_diff, abs_diff / first


def windowed_sma(series: Sequence[float], window_size: int) -> list[float] | None:
    """Simple moving average for every full window, oldest window first.

    Returns an empty list when no full window fits or ``window_size <= 1``.
    """
    if not series:
        return None
    if window_size <= 1 or window_size > len(series):
        return []
    close = pd.Series(list(series), dtype=float)
    return close.rolling(window=window_size).mean().dropna().tolist()
