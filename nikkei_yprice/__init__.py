"""Nikkei yearly closing price scraper."""

__version__ = "0.1.0"
