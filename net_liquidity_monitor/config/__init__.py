"""Settings and series definitions."""

from .settings import (
    DEFAULT_START,
    FALLBACK_AGENCY_DEBT,
    FALLBACK_GDP,
    GDP_HOLD_DAYS,
    HISTORY_SERIES,
    MILLIONS_PER_BILLION,
    MIN_HISTORY_POINTS,
    PCT_GDP_BOUNDS,
    RRP_TO_MILLIONS,
    SNAPSHOT_SERIES,
    Settings,
)

__all__ = [
    "DEFAULT_START",
    "FALLBACK_AGENCY_DEBT",
    "FALLBACK_GDP",
    "GDP_HOLD_DAYS",
    "HISTORY_SERIES",
    "MILLIONS_PER_BILLION",
    "MIN_HISTORY_POINTS",
    "PCT_GDP_BOUNDS",
    "RRP_TO_MILLIONS",
    "SNAPSHOT_SERIES",
    "Settings",
]
