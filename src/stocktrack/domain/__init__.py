"""Domain records."""

from .models import StockHistory, StockStats

__all__ = ["StockHistory", "StockStats"]
