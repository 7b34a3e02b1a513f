"""Daily closing-price summaries for a list of ticker symbols."""

__version__ = "0.1.0"
