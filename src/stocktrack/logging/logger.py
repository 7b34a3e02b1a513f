"""Concise human-readable run logger."""

from __future__ import annotations

import logging
import sys


class HumanLogger:
    """Stderr logger with fixed line types.

    The report owns stdout, so nothing here ever writes there.
    """

    def __init__(self, level: str = "WARNING") -> None:
        self._logger = logging.getLogger("stocktrack")
        self._logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
        self._logger.propagate = False
        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("%(asctime)s | %(message)s", "%Y-%m-%d %H:%M:%S")
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

    def run_started(self, symbols: list[str], start: str, end: str) -> None:
        self._logger.info("run | symbols %s | from %s | to %s", ",".join(symbols), start, end)

    def symbol_dropped(self, symbol: str, reason: str) -> None:
        self._logger.info("dropped | %s | %s", symbol, reason)

    def run_finished(self, requested: int, reported: int) -> None:
        self._logger.info("done | requested %d | reported %d", requested, reported)

    def error(self, message: str) -> None:
        self._logger.error("error | %s", message)
