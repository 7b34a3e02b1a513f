"""Price history provider implementations."""

from .base import PriceHistoryProvider
from .csv_data import CsvDataProvider
from .history import fetch_closing_data
from .yfinance_data import YFinanceDataProvider

__all__ = [
    "PriceHistoryProvider",
    "CsvDataProvider",
    "YFinanceDataProvider",
    "fetch_closing_data",
]
