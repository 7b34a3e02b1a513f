"""Price history provider contract."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class PriceHistoryProvider(Protocol):
    """Interface for daily closing-price retrieval."""

    def get_closes(self, symbol: str, start: datetime, end: datetime) -> list[float]:
        """Return adjusted closes between ``start`` and ``end``, oldest first.

        An empty list is a valid answer. Failures raise ``DataUnavailableError``.
        """
