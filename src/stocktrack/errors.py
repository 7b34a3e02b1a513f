"""Custom exceptions for clearer error handling across the app."""


class StockTrackError(Exception):
    """Base exception for all app-specific errors."""


class ConfigError(StockTrackError, ValueError):
    """Raised when CLI or environment configuration is invalid."""


class DataUnavailableError(StockTrackError):
    """Raised when price history for a symbol cannot be retrieved."""
