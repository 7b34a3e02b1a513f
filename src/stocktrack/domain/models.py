"""Per-symbol price history and summary records."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StockHistory:
    """Adjusted closing prices for one symbol, oldest first."""

    symbol: str
    closes: tuple[float, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.closes


@dataclass(frozen=True)
class StockStats:
    """Summary of one symbol's price history."""

    symbol: str
    last_price: float
    pct_change: float
    period_min: float
    period_max: float
    thirty_day_avg: float
