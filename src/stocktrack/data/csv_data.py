"""CSV-backed price history provider."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pandas as pd

from stocktrack.errors import DataUnavailableError


class CsvDataProvider:
    """Load daily adjusted closes from local ``<SYMBOL>.csv`` files."""

    date_column_candidates = ("date", "datetime", "timestamp")
    close_column_candidates = ("adj close", "adj_close", "adjclose", "close")

    def __init__(self, data_dir: str) -> None:
        self.data_dir = Path(data_dir)

    def get_closes(self, symbol: str, start: datetime, end: datetime) -> list[float]:
        path = self._resolve_path(symbol)
        if path is None:
            raise DataUnavailableError(f"No CSV found for {symbol} under {self.data_dir}")
        try:
            frame = pd.read_csv(path)
        except (OSError, ValueError) as exc:
            raise DataUnavailableError(f"{symbol}: unreadable CSV {path}: {exc}") from exc

        lower_to_original = {str(column).strip().lower(): column for column in frame.columns}
        date_column = self._pick(lower_to_original, self.date_column_candidates, symbol)
        close_column = self._pick(lower_to_original, self.close_column_candidates, symbol)

        try:
            index = pd.to_datetime(frame[date_column], utc=True)
        except (TypeError, ValueError) as exc:
            raise DataUnavailableError(f"{symbol}: CSV has unparsable dates") from exc
        closes = pd.Series(
            pd.to_numeric(frame[close_column], errors="coerce").to_numpy(),
            index=pd.DatetimeIndex(index),
        )
        closes = closes.sort_index(kind="stable").dropna()
        window = closes[(closes.index >= pd.Timestamp(start)) & (closes.index <= pd.Timestamp(end))]
        return [float(value) for value in window]

    def _resolve_path(self, symbol: str) -> Path | None:
        for candidate in (
            self.data_dir / f"{symbol.upper()}.csv",
            self.data_dir / f"{symbol.lower()}.csv",
            self.data_dir / f"{symbol}.csv",
        ):
            if candidate.exists():
                return candidate
        return None

    @staticmethod
    def _pick(
        lower_to_original: dict[str, str],
        candidates: tuple[str, ...],
        symbol: str,
    ) -> str:
        for candidate in candidates:
            if candidate in lower_to_original:
                return lower_to_original[candidate]
        expected = ", ".join(candidates)
        raise DataUnavailableError(f"{symbol}: CSV missing column. Expected one of: {expected}")
