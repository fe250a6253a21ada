"""Data fetching and parsing."""

from .fred_fetcher import FredFetcher
from .parser import parse_fred_csv

__all__ = ["FredFetcher", "parse_fred_csv"]
