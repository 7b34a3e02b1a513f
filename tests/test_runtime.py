from __future__ import annotations

import asyncio
import io
import logging
from datetime import UTC, datetime

import pytest

from stocktrack.config import Settings
from stocktrack.data.csv_data import CsvDataProvider
from stocktrack.data.yfinance_data import YFinanceDataProvider
from stocktrack.domain.models import StockHistory, StockStats
from stocktrack.errors import DataUnavailableError
from stocktrack.runtime import (
    REPORT_HEADER,
    build_data_provider,
    collect_stats,
    compute_stats,
    fetch_histories,
    render_report,
    run,
    split_symbols,
)

START = datetime(2024, 1, 1, tzinfo=UTC)
END = datetime(2024, 3, 1, tzinfo=UTC)
THIRTY_ONE_POINTS = [float(value) for value in range(1, 32)]


class FakeProvider:
    def __init__(self, closes_by_symbol: dict[str, list[float] | Exception]) -> None:
        self.closes_by_symbol = closes_by_symbol
        self.calls: list[tuple[str, datetime, datetime]] = []

    def get_closes(self, symbol: str, start: datetime, end: datetime) -> list[float]:
        self.calls.append((symbol, start, end))
        result = self.closes_by_symbol[symbol]
        if isinstance(result, Exception):
            raise result
        return result


def test_split_symbols_does_not_trim() -> None:
    assert split_symbols("AAPL,MSFT") == ["AAPL", "MSFT"]
    assert split_symbols("AAPL, MSFT") == ["AAPL", " MSFT"]
    assert split_symbols("AAPL") == ["AAPL"]


def test_build_data_provider_follows_settings() -> None:
    assert isinstance(build_data_provider(Settings()), YFinanceDataProvider)
    csv_settings = Settings(data_source="csv", historical_data_dir="data")
    provider = build_data_provider(csv_settings)
    assert isinstance(provider, CsvDataProvider)
    assert str(provider.data_dir) == "data"


def test_fetch_histories_drops_failures_and_empty_series() -> None:
    provider = FakeProvider(
        {
            "AAPL": [1.0, 2.0],
            "MSFT": DataUnavailableError("not found"),
            "UBER": [],
            "GOOG": RuntimeError("malformed payload"),
            "TSLA": [3.0],
        }
    )

    histories = asyncio.run(
        fetch_histories(provider, ["AAPL", "MSFT", "UBER", "GOOG", "TSLA"], START, END)
    )

    assert histories == [
        StockHistory(symbol="AAPL", closes=(1.0, 2.0)),
        StockHistory(symbol="TSLA", closes=(3.0,)),
    ]
    assert sorted(call[0] for call in provider.calls) == ["AAPL", "GOOG", "MSFT", "TSLA", "UBER"]
    assert {(call[1], call[2]) for call in provider.calls} == {(START, END)}


def test_compute_stats_builds_one_record_per_history() -> None:
    histories = [
        StockHistory(symbol="AAPL", closes=tuple(THIRTY_ONE_POINTS)),
        StockHistory(symbol="MSFT", closes=(4.0, 2.0)),
    ]

    stats = asyncio.run(compute_stats(histories))

    assert [item.symbol for item in stats] == ["AAPL", "MSFT"]
    assert stats[0].thirty_day_avg == pytest.approx(16.5)
    assert stats[1].pct_change == -0.5


def test_collect_stats_runs_both_stages() -> None:
    provider = FakeProvider({"AAPL": [2.0, 4.0], "MSFT": DataUnavailableError("down")})

    stats = asyncio.run(collect_stats(provider, ["AAPL", "MSFT"], START, END))

    assert stats == [
        StockStats(
            symbol="AAPL",
            last_price=4.0,
            pct_change=1.0,
            period_min=2.0,
            period_max=4.0,
            thirty_day_avg=0.0,
        )
    ]


def test_render_report_formats_rows() -> None:
    stats = StockStats(
        symbol="AAPL",
        last_price=189.844,
        pct_change=0.0312,
        period_min=164.0862,
        period_max=198.11,
        thirty_day_avg=0.0,
    )

    lines = render_report(START, [stats])

    assert lines == [
        "period start,symbol,price,change %,min,max,30d avg",
        "2024-01-01T00:00:00+00:00,AAPL,$189.84,0.03%,$164.09,$198.11,$0.00",
    ]


def test_render_report_without_rows_is_header_only() -> None:
    assert render_report(START, []) == [REPORT_HEADER]


def test_run_reports_successful_symbol_and_skips_failed_one() -> None:
    provider = FakeProvider(
        {"AAPL": THIRTY_ONE_POINTS, "MSFT": DataUnavailableError("not found")}
    )
    stream = io.StringIO()

    exit_code = run(Settings(symbols="AAPL,MSFT"), START, END, provider=provider, stream=stream)

    assert exit_code == 0
    assert stream.getvalue().splitlines() == [
        REPORT_HEADER,
        "2024-01-01T00:00:00+00:00,AAPL,$31.00,30.00%,$1.00,$31.00,$16.50",
    ]


def test_run_prints_zero_average_for_short_series() -> None:
    provider = FakeProvider({"UBER": [10.0, 11.0, 12.0]})
    stream = io.StringIO()

    exit_code = run(Settings(symbols="UBER"), START, END, provider=provider, stream=stream)

    assert exit_code == 0
    rows = stream.getvalue().splitlines()
    assert len(rows) == 2
    assert rows[1].endswith(",$0.00")
    assert rows[1] == "2024-01-01T00:00:00+00:00,UBER,$12.00,0.20%,$10.00,$12.00,$0.00"


def test_run_with_info_logging_keeps_report_on_stream() -> None:
    provider = FakeProvider({"AAPL": [1.0], "MSFT": DataUnavailableError("not found")})
    stream = io.StringIO()
    settings = Settings(symbols="AAPL,MSFT", log_level="INFO")

    exit_code = run(settings, START, END, provider=provider, stream=stream)

    assert exit_code == 0
    assert stream.getvalue().splitlines()[0] == REPORT_HEADER
    assert "MSFT" not in stream.getvalue()


class RecordingLogger:
    def __init__(self) -> None:
        self.dropped: list[tuple[str, str]] = []
        self.errors: list[str] = []

    def symbol_dropped(self, symbol: str, reason: str) -> None:
        self.dropped.append((symbol, reason))

    def error(self, message: str) -> None:
        self.errors.append(message)


class FetchAborted(BaseException):
    pass


def test_fetch_histories_logs_and_reraises_aborted_fetch(monkeypatch: pytest.MonkeyPatch) -> None:
    def aborting_fetch(*_args: object) -> StockHistory:
        raise FetchAborted("stop")

    monkeypatch.setattr("stocktrack.runtime.fetch_closing_data", aborting_fetch)
    logger = RecordingLogger()

    with pytest.raises(FetchAborted):
        asyncio.run(fetch_histories(FakeProvider({}), ["AAPL"], START, END, logger=logger))

    assert logger.dropped == []
    assert len(logger.errors) == 1
    assert logger.errors[0].startswith("fetch aborted for AAPL")


def test_fetch_histories_reports_each_dropped_symbol() -> None:
    provider = FakeProvider(
        {"AAPL": [1.0], "MSFT": DataUnavailableError("not found"), "UBER": []}
    )
    logger = RecordingLogger()

    asyncio.run(fetch_histories(provider, ["AAPL", "MSFT", "UBER"], START, END, logger=logger))

    assert logger.dropped == [("MSFT", "not found"), ("UBER", "no quotes in range")]
    assert logger.errors == []


def _capture_stocktrack_log(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(logging.getLogger("stocktrack"), "handlers", [caplog.handler])


def test_run_logs_dropped_symbols_at_info(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    _capture_stocktrack_log(monkeypatch, caplog)
    provider = FakeProvider({"AAPL": [1.0], "MSFT": DataUnavailableError("not found")})
    settings = Settings(symbols="AAPL,MSFT", log_level="INFO")

    run(settings, START, END, provider=provider, stream=io.StringIO())

    messages = [record.getMessage() for record in caplog.records]
    assert "dropped | MSFT | not found" in messages
    assert "done | requested 2 | reported 1" in messages


def test_run_drops_symbols_silently_by_default(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    _capture_stocktrack_log(monkeypatch, caplog)
    provider = FakeProvider({"AAPL": [1.0], "MSFT": DataUnavailableError("not found")})

    settings = Settings(symbols="AAPL,MSFT")

    exit_code = run(settings, START, END, provider=provider, stream=io.StringIO())

    assert exit_code == 0
    assert caplog.records == []


def test_render_report_keeps_millisecond_start() -> None:
    start = datetime(2024, 1, 1, 0, 0, 0, 500000, tzinfo=UTC)
    stats = StockStats("AAPL", 1.0, 0.0, 1.0, 1.0, 0.0)

    lines = render_report(start, [stats])

    assert lines[1].startswith("2024-01-01T00:00:00.500+00:00,AAPL,")
