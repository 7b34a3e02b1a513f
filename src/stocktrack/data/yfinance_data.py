"""Yahoo Finance price history provider."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

import pandas as pd

from stocktrack.errors import DataUnavailableError


class YFinanceDataProvider:
    """Fetch daily adjusted closes from Yahoo Finance via yfinance."""

    interval = "1d"

    def get_closes(self, symbol: str, start: datetime, end: datetime) -> list[float]:
        import yfinance as yf

        try:
            # One Ticker per call; instances are not shared between worker threads.
            history = yf.Ticker(symbol).history(
                start=start,
                end=end,
                interval=self.interval,
                auto_adjust=False,
                actions=False,
            )
        except Exception as exc:
            raise DataUnavailableError(f"yfinance request failed for {symbol}: {exc}") from exc

        return self._normalize_history(history, symbol)

    @staticmethod
    def _normalize_history(history: Any, symbol: str) -> list[float]:
        if history is None:
            raise DataUnavailableError(f"yfinance returned no payload for {symbol}")
        frame = pd.DataFrame(history)
        if frame.empty:
            return []

        close_column = YFinanceDataProvider._pick_column(frame, "adj_close")
        if close_column is None:
            close_column = YFinanceDataProvider._pick_column(frame, "close")
        if close_column is None:
            raise DataUnavailableError(f"yfinance payload missing close column for {symbol}")

        try:
            index = pd.to_datetime(frame.index, utc=True)
        except (TypeError, ValueError) as exc:
            raise DataUnavailableError(f"yfinance payload has bad timestamps for {symbol}") from exc
        closes = pd.Series(
            pd.to_numeric(frame[close_column], errors="coerce").to_numpy(),
            index=index,
        )
        closes = closes.sort_index(kind="stable").dropna()
        return [float(value) for value in closes]

    @staticmethod
    def _pick_column(frame: pd.DataFrame, field: str) -> Any | None:
        for column in frame.columns:
            key = YFinanceDataProvider._column_key(column)
            if key == field or key.startswith(f"{field}_"):
                return column
        return None

    @staticmethod
    def _column_key(value: Any) -> str:
        if isinstance(value, tuple):
            text = "_".join(str(part) for part in value if part is not None)
        else:
            text = str(value)
        normalized = re.sub(r"[^a-zA-Z0-9]+", "_", text).strip("_").lower()
        return normalized
