"""Per-symbol statistics assembly."""

from __future__ import annotations

from collections.abc import Sequence

from stocktrack.domain.models import StockStats
from stocktrack.signals import max_price, min_price, price_diff, windowed_sma

THIRTY_DAY_WINDOW = 30


def build_stock_stats(symbol: str, closes: Sequence[float]) -> StockStats:
    """Summarize one symbol's closes.

    Degenerate series produce ``0.0`` fields instead of errors.
    """
    last_price = float(closes[-1]) if closes else 0.0
    diff = price_diff(closes)
    pct_change = diff[1] if diff is not None else 0.0
    period_min = min_price(closes)
    period_max = max_price(closes)
    sma = windowed_sma(closes, THIRTY_DAY_WINDOW) or []
    return StockStats(
        symbol=symbol,
        last_price=last_price,
        pct_change=pct_change,
        period_min=period_min if period_min is not None else 0.0,
        period_max=period_max if period_max is not None else 0.0,
        thirty_day_avg=sma[-1] if sma else 0.0,
    )
