"""Output formatting module."""

from .formatters import OutputFormatter, JSONFormatter, CSVFormatter

__all__ = ["OutputFormatter", "JSONFormatter", "CSVFormatter"]
