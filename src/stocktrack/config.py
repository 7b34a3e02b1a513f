"""Environment and CLI runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from stocktrack.errors import ConfigError

DEFAULT_SYMBOLS = "AAPL,MSFT,UBER,GOOG"
DATA_SOURCES = {"yfinance", "csv"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings."""

    symbols: str = DEFAULT_SYMBOLS
    data_source: str = "yfinance"
    historical_data_dir: str = "historical_data"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables."""
        load_dotenv()
        raw = cls(
            symbols=os.getenv("SYMBOLS") or DEFAULT_SYMBOLS,
            data_source=str(os.getenv("DATA_SOURCE", "yfinance")).strip().lower(),
            historical_data_dir=str(os.getenv("HISTORICAL_DATA_DIR", "historical_data")).strip(),
            log_level=str(os.getenv("LOG_LEVEL", "WARNING")).strip().upper(),
        )
        return raw.validate()

    def with_overrides(self, **kwargs: object) -> Self:
        """Return a new settings object with updated values."""
        updated = replace(self, **kwargs)
        return updated.validate()

    def validate(self) -> Self:
        """Validate settings fields."""
        if not self.symbols:
            raise ConfigError("symbols must not be empty")
        if self.data_source not in DATA_SOURCES:
            raise ConfigError("data_source must be one of csv, yfinance")
        if self.log_level not in LOG_LEVELS:
            supported = ", ".join(sorted(LOG_LEVELS))
            raise ConfigError(f"log_level must be one of {supported}")
        return self
