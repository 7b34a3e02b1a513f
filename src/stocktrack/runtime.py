"""Runtime wiring: concurrent fetch, statistics and report rendering."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Sequence
from datetime import datetime
from typing import TextIO

from stocktrack.config import Settings
from stocktrack.data.base import PriceHistoryProvider
from stocktrack.data.csv_data import CsvDataProvider
from stocktrack.data.history import fetch_closing_data
from stocktrack.data.yfinance_data import YFinanceDataProvider
from stocktrack.domain.models import StockHistory, StockStats
from stocktrack.errors import DataUnavailableError
from stocktrack.logging.logger import HumanLogger
from stocktrack.stats import build_stock_stats
from stocktrack.utils.time import format_rfc3339

REPORT_HEADER = "period start,symbol,price,change %,min,max,30d avg"


def split_symbols(value: str) -> list[str]:
    """Split a comma-separated symbol list. Entries are not trimmed."""
    return value.split(",")


def build_data_provider(settings: Settings) -> PriceHistoryProvider:
    if settings.data_source == "csv":
        return CsvDataProvider(data_dir=settings.historical_data_dir)
    return YFinanceDataProvider()


async def fetch_histories(
    provider: PriceHistoryProvider,
    symbols: Sequence[str],
    start: datetime,
    end: datetime,
    logger: HumanLogger | None = None,
) -> list[StockHistory]:
    """Fetch every symbol concurrently and keep the non-empty successes."""
    tasks = [
        asyncio.to_thread(fetch_closing_data, provider, symbol, start, end) for symbol in symbols
    ]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    histories: list[StockHistory] = []
    for symbol, result in zip(symbols, results, strict=True):
        if isinstance(result, DataUnavailableError):
            if logger is not None:
                logger.symbol_dropped(symbol, str(result))
            continue
        if isinstance(result, BaseException):
            if logger is not None:
                logger.error(f"fetch aborted for {symbol}: {result!r}")
            raise result
        if result.is_empty:
            if logger is not None:
                logger.symbol_dropped(symbol, "no quotes in range")
            continue
        histories.append(result)
    return histories


async def compute_stats(histories: Sequence[StockHistory]) -> list[StockStats]:
    """Build statistics for every history concurrently."""
    tasks = [
        asyncio.to_thread(build_stock_stats, history.symbol, history.closes)
        for history in histories
    ]
    return list(await asyncio.gather(*tasks))


async def collect_stats(
    provider: PriceHistoryProvider,
    symbols: Sequence[str],
    start: datetime,
    end: datetime,
    logger: HumanLogger | None = None,
) -> list[StockStats]:
    """Run the fetch stage, then the statistics stage."""
    histories = await fetch_histories(provider, symbols, start, end, logger=logger)
    return await compute_stats(histories)


def format_stats_row(start: datetime, stats: StockStats) -> str:
    return (
        f"{format_rfc3339(start)},{stats.symbol},${stats.last_price:.2f},"
        f"{stats.pct_change:.2f}%,${stats.period_min:.2f},${stats.period_max:.2f},"
        f"${stats.thirty_day_avg:.2f}"
    )


def render_report(start: datetime, stats: Sequence[StockStats]) -> list[str]:
    """Header line plus one CSV-style row per symbol."""
    return [REPORT_HEADER, *(format_stats_row(start, item) for item in stats)]


def run(
    settings: Settings,
    start: datetime,
    end: datetime,
    provider: PriceHistoryProvider | None = None,
    stream: TextIO | None = None,
) -> int:
    """Fetch, summarize and print the report. Dropped symbols do not fail the run."""
    output = stream if stream is not None else sys.stdout
    data_provider = provider if provider is not None else build_data_provider(settings)
    human_logger = HumanLogger(level=settings.log_level)
    symbols = split_symbols(settings.symbols)

    human_logger.run_started(symbols, format_rfc3339(start), format_rfc3339(end))
    stats = asyncio.run(collect_stats(data_provider, symbols, start, end, logger=human_logger))
    for line in render_report(start, stats):
        output.write(f"{line}\n")
    output.flush()
    human_logger.run_finished(len(symbols), len(stats))
    return 0
