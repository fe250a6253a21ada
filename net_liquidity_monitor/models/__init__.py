"""Data models."""

from .market_data import (
    AlignedRow,
    HistoryPoint,
    LiquiditySnapshot,
    ObservationPoint,
    RefreshState,
    SeriesData,
    SeriesError,
    SeriesResult,
    YtdDelta,
)

__all__ = [
    "AlignedRow",
    "HistoryPoint",
    "LiquiditySnapshot",
    "ObservationPoint",
    "RefreshState",
    "SeriesData",
    "SeriesError",
    "SeriesResult",
    "YtdDelta",
]
