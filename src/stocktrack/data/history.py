"""Per-symbol history fetch."""

from __future__ import annotations

from datetime import datetime

from stocktrack.data.base import PriceHistoryProvider
from stocktrack.domain.models import StockHistory
from stocktrack.errors import DataUnavailableError


def fetch_closing_data(
    provider: PriceHistoryProvider,
    symbol: str,
    start: datetime,
    end: datetime,
) -> StockHistory:
    """Fetch the closing prices of one symbol over ``[start, end]``.

    Any provider failure is reported as ``DataUnavailableError``; the cause is
    kept on ``__cause__`` but callers are not expected to distinguish it.
    """
    try:
        closes = provider.get_closes(symbol, start, end)
    except DataUnavailableError:
        raise
    except Exception as exc:
        raise DataUnavailableError(f"price history unavailable for {symbol}: {exc}") from exc
    return StockHistory(symbol=symbol, closes=tuple(float(value) for value in closes))
