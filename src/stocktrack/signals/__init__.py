"""Numeric signals computed over a closing-price series."""

from .functions import max_price, min_price, price_diff, windowed_sma
from .registry import StockSignal

__all__ = [
    "StockSignal",
    "max_price",
    "min_price",
    "price_diff",
    "windowed_sma",
]
