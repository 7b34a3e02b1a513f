"""Uniform calling interface over the signal functions."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import StrEnum
from typing import Any

from .functions import max_price, min_price, price_diff, windowed_sma


class StockSignal(StrEnum):
    """Signals that can be computed over a closing-price series."""

    MIN_PRICE = "min_price"
    MAX_PRICE = "max_price"
    PRICE_DIFF = "price_diff"
    WINDOWED_SMA = "windowed_sma"

    def calculate(self, series: Sequence[float], **params: Any) -> Any | None:
        """Run this signal over ``series``; ``None`` means no result."""
        return _SIGNAL_FUNCTIONS[self](series, **params)


_SIGNAL_FUNCTIONS: dict[StockSignal, Callable[..., Any]] = {
    StockSignal.MIN_PRICE: min_price,
    StockSignal.MAX_PRICE: max_price,
    StockSignal.PRICE_DIFF: price_diff,
    StockSignal.WINDOWED_SMA: windowed_sma,
}
